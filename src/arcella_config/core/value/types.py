# src/arcella_config/core/value/types.py
"""
Variantes fechadas de valor do Arcella Config.

Um valor de configuração é exatamente uma das variantes abaixo:

    - Array(items)                 → sequência de valores
    - String(value)
    - Integer(value)               → inteiro com sinal de 64 bits
    - Float(value)                 → float 64 bits com ordem total
    - Boolean(value)
    - Map(entries)                 → chave → valor, sem ordem semântica
    - Null()
    - TypedError(message, error_type)

Decisões arquiteturais:
    - Cada variante é um dataclass imutável; `Value` é a união delas
    - `Float` usa uma chave de ordem total: todos os NaN são iguais entre si
      e ordenam após +inf; `-0.0` e `0.0` são iguais
    - Inteiros fora de 64 bits viram `TypedError` em vez de abortar o documento
    - Qualquer outro tipo nativo (datetime, date, time, ...) é erro fatal

Invariantes:
    - Todas as variantes são hasheáveis e comparáveis por igualdade
    - `to_native(from_native(x)) == x` para qualquer x representável

Limites explícitos:
    - Não faz parsing de TOML
    - Não conhece prefixos, includes ou proveniência
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Any, Dict, Tuple, Union

from arcella_config.core.errors import UnsupportedValueTypeError


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


@dataclass(frozen=True)
class Array:
    items: Tuple["Value", ...] = ()


@dataclass(frozen=True)
class String:
    value: str


@dataclass(frozen=True)
class Integer:
    value: int


@total_ordering
@dataclass(frozen=True, eq=False)
class Float:
    value: float

    def _order_key(self) -> Tuple[int, float]:
        if math.isnan(self.value):
            return (1, 0.0)
        # normaliza -0.0 para 0.0
        return (0, self.value + 0.0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self._order_key() == other._order_key()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Float):
            return NotImplemented
        return self._order_key() < other._order_key()

    def __hash__(self) -> int:
        return hash(self._order_key())


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Map:
    entries: Dict[str, "Value"] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(frozenset(self.entries.items()))


@dataclass(frozen=True)
class Null:
    pass


@dataclass(frozen=True)
class TypedError:
    message: str
    error_type: str


Value = Union[Array, String, Integer, Float, Boolean, Map, Null, TypedError]

VALUE_TYPES = (Array, String, Integer, Float, Boolean, Map, Null, TypedError)


def from_native(obj: Any, *, key: str = "") -> Value:
    """
    Converte um objeto Python nativo (saída de parser TOML) em `Value`.

    Tabelas (`dict`) viram `Map` aninhado, sem achatamento; o achatamento
    em chaves pontuadas é responsabilidade de `flatten.parse_and_collect`.

    Raises:
        UnsupportedValueTypeError: Para qualquer tipo sem variante.
    """
    if isinstance(obj, VALUE_TYPES):
        return obj
    if obj is None:
        return Null()
    # bool precisa vir antes de int
    if isinstance(obj, bool):
        return Boolean(obj)
    if isinstance(obj, int):
        if obj < INT64_MIN or obj > INT64_MAX:
            return TypedError(
                message=f"Integer {obj} does not fit in 64 bits",
                error_type="integer_out_of_range",
            )
        return Integer(obj)
    if isinstance(obj, float):
        return Float(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, (list, tuple)):
        return Array(
            tuple(from_native(item, key=f"{key}[{i}]") for i, item in enumerate(obj))
        )
    if isinstance(obj, dict):
        return Map(
            {str(k): from_native(v, key=f"{key}.{k}" if key else str(k)) for k, v in obj.items()}
        )
    raise UnsupportedValueTypeError(key, type(obj).__name__)


def to_native(value: Value) -> Any:
    """Converte um `Value` de volta em objetos Python simples."""
    if isinstance(value, Array):
        return [to_native(item) for item in value.items]
    if isinstance(value, Map):
        return {k: to_native(v) for k, v in value.entries.items()}
    if isinstance(value, Null):
        return None
    if isinstance(value, TypedError):
        return {"error": value.message, "error_type": value.error_type}
    if isinstance(value, (String, Integer, Float, Boolean)):
        return value.value
    raise TypeError(f"Objeto não é um Value: {type(value).__name__}")


def kind_of(value: Value) -> str:
    """Nome da variante (ex.: 'String'), usado em mensagens de diagnóstico."""
    return type(value).__name__
