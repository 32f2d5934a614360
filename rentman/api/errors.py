from typing import TypeVar

from fastapi import HTTPException, status

from rentman.application.result import Err, Result
from rentman.domain.errors import ErrorKind

T = TypeVar("T")

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_STATE: status.HTTP_400_BAD_REQUEST,
}


def raise_for_error(err: Err) -> None:
    raise HTTPException(
        status_code=STATUS_BY_KIND.get(err.kind, status.HTTP_400_BAD_REQUEST),
        detail={"code": err.code, "message": err.message, "kind": err.kind.value},
    )


def unwrap(result: Result[T]) -> T:
    """Valor de un Ok; un Err se convierte en HTTPException."""
    if not result.is_ok:
        raise_for_error(result)
    return result.value
