"""
Capa de aplicación: puertos, DTOs y casos de uso.

Los casos de uso devuelven `Result` (`Ok` / `Err`) en lugar de propagar
errores de dominio.
"""
