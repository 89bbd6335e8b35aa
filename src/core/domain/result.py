"""Resultado tipado en la frontera de la capa de servicios.

Por qué un resultado en vez de excepciones:
- El orquestador distingue un fallo clasificado (`Err`) de una excepción
  inesperada sin inspeccionar tipos de excepción genéricos.
- Los servicios solo transforman el valor (`map`); nunca capturan errores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, NoReturn, TypeVar, Union

from core.domain.errors import ApiError, ApiRequestError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value))

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: ApiError

    @property
    def is_ok(self) -> bool:
        return False

    def map(self, fn: Callable[[object], object]) -> "Err":
        return self

    def unwrap(self) -> NoReturn:
        raise ApiRequestError(self.error)


ApiResult = Union[Ok[T], Err]
