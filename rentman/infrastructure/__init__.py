"""
Capa de Infraestructura - Rentman.

Implementaciones concretas de los puertos de la capa de aplicación.

Estructura:
- db/: tablas, engine, repositorios SQL y transaction manager con reintento
- in_memory/: store y repositorios en memoria (desarrollo y testing)
- demo_data.py: usuarios y vehículos de demostración (seed SQL e in-memory)
"""
