"""
Resultado explícito de un caso de uso.

Los casos de uso no propagan excepciones de dominio: devuelven `Ok(valor)` o
`Err(error)` y el llamador decide qué hacer con cada tipo de error
(`Err.kind`).
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from rentman.domain.errors import DomainError, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: DomainError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return self.error.message


Result = Union[Ok[T], Err]
