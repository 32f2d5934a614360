"""Interface ReservationNumberGenerator - Puerto para generar números de reservación."""

from abc import ABC, abstractmethod

from rentman.domain.value_objects.reservation_number import ReservationNumber


class ReservationNumberGenerator(ABC):
    """
    Puerto para generación de números de reservación.

    Permite inyectar implementaciones fake para testing determinista.
    """

    @abstractmethod
    def generate(self) -> str:
        """
        Genera un número de reservación único.

        Returns:
            String con formato RES-XXXXXXXX.
        """
        raise NotImplementedError


class RandomReservationNumberGenerator(ReservationNumberGenerator):
    """Implementación real con 8 caracteres aleatorios criptográficamente seguros."""

    def generate(self) -> str:
        return ReservationNumber.generate().value


class FakeReservationNumberGenerator(ReservationNumberGenerator):
    """
    Implementación fake para testing.

    Genera valores predecibles: RES-TEST0001, RES-TEST0002, ...
    """

    def __init__(self, prefix: str = "TEST"):
        self._prefix = prefix
        self._counter = 0
        self._next_number: str | None = None

    def generate(self) -> str:
        if self._next_number:
            number, self._next_number = self._next_number, None
            return number
        self._counter += 1
        return f"{ReservationNumber.PREFIX}{self._prefix}{self._counter:04d}".upper()

    def set_next_number(self, number: str) -> None:
        """Configura el próximo número a retornar (útil para probar colisiones)."""
        self._next_number = number

    def reset(self) -> None:
        self._counter = 0
        self._next_number = None
