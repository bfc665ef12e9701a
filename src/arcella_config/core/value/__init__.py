# src/arcella_config/core/value/__init__.py
"""
Modelo de valores do Arcella Config.

Reúne as variantes fechadas de valor (`types`) e o algoritmo que achata
um documento TOML em chaves pontuadas com proveniência (`flatten`).
"""

from .types import (
    Array,
    Boolean,
    Float,
    Integer,
    Map,
    Null,
    String,
    TypedError,
    Value,
    from_native,
    to_native,
)
from .flatten import (
    INCLUDES_KEY,
    MAX_TOML_DEPTH,
    ParsedFile,
    TraversalResult,
    parse_and_collect,
)

__all__ = [
    "Array",
    "Boolean",
    "Float",
    "Integer",
    "Map",
    "Null",
    "String",
    "TypedError",
    "Value",
    "from_native",
    "to_native",
    "INCLUDES_KEY",
    "MAX_TOML_DEPTH",
    "ParsedFile",
    "TraversalResult",
    "parse_and_collect",
]
