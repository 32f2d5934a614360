"""Value Object ReservationNumber - número público de reservación."""

import re
import secrets
import string
from dataclasses import dataclass


@dataclass(frozen=True)
class ReservationNumber:
    """
    Número visible de una reservación: RES- seguido de 8 caracteres
    alfanuméricos en mayúsculas (ej: RES-A1B2C3D4).
    """

    value: str

    PREFIX = "RES-"
    CODE_LENGTH = 8
    ALLOWED_CHARS = string.ascii_uppercase + string.digits

    def __post_init__(self) -> None:
        if not re.fullmatch(rf"{self.PREFIX}[A-Z0-9]{{{self.CODE_LENGTH}}}", self.value):
            raise ValueError(f"reservation_number con formato inválido: {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> "ReservationNumber":
        code = "".join(secrets.choice(cls.ALLOWED_CHARS) for _ in range(cls.CODE_LENGTH))
        return cls(value=f"{cls.PREFIX}{code}")
