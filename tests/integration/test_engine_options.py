"""
Opciones del engine por backend.

En MySQL las transacciones corren en READ COMMITTED: después de esperar el
FOR UPDATE del vehículo, el conteo de traslapes tiene que ver lo que otra
transacción acaba de confirmar, no el snapshot de la primera lectura.
"""

from sqlalchemy.pool import StaticPool

from rentman.infrastructure.db.engine import (
    IN_MEMORY_SQLITE_URL,
    MYSQL_ISOLATION_LEVEL,
    engine_options,
)


class TestEngineOptions:
    def test_mysql_uses_read_committed(self):
        options = engine_options("mysql+asyncmy://rentman:secret@db:3306/rentman")

        assert options["isolation_level"] == "READ COMMITTED"
        assert MYSQL_ISOLATION_LEVEL == "READ COMMITTED"
        assert options["pool_pre_ping"] is True

    def test_in_memory_sqlite_shares_one_connection(self):
        options = engine_options(IN_MEMORY_SQLITE_URL)

        assert options["poolclass"] is StaticPool
        assert "isolation_level" not in options

    def test_file_sqlite_keeps_driver_defaults(self):
        assert engine_options("sqlite+aiosqlite:///./rentman.db", echo=True) == {"echo": True}
