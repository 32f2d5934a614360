"""
Integration tests package.

Tests de integración que verifican:
- Repositorios SQL y casos de uso contra SQLite en memoria (aiosqlite)
- Opciones del engine por backend (READ COMMITTED en MySQL)
- Reintento de transacciones ante deadlock / lock wait timeout
- Health checks (/health, /health/live, /health/db, /health/ready)

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
