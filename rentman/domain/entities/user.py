"""Entidad User - vista del colaborador de usuarios (solo rol)."""

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    CUSTOMER = "CUSTOMER"
    EMPLOYEE = "EMPLOYEE"
    ADMIN = "ADMIN"


@dataclass
class User:
    id: int | None = None
    role: UserRole = UserRole.CUSTOMER
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    company_id: int | None = None

    @property
    def is_customer(self) -> bool:
        return self.role == UserRole.CUSTOMER

    @property
    def is_staff(self) -> bool:
        """Empleados y administradores pueden atender reservaciones."""
        return self.role in (UserRole.EMPLOYEE, UserRole.ADMIN)
