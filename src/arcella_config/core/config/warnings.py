# src/arcella_config/core/config/warnings.py
"""
Arcella Config — Warnings canônicos de resolução (v1)

Warnings representam problemas **não fatais**: são acumulados no estado de
carga, nunca lançados, e nunca interrompem a resolução. Devem ser:
- explícitos
- serializáveis
- recuperáveis depois da carga (o logger do processo pode ainda não existir)

Cada variante é um dataclass imutável com um código `kind` estável.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional, Union


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de warning (v1)
# ---------------------------------------------------------------------------

INTERNAL = "INTERNAL"
NULL_VALUE_DETECTED = "NULL_VALUE_DETECTED"
VALUE_ERROR = "VALUE_ERROR"
DUPLICATE_INCLUDE = "DUPLICATE_INCLUDE"
SKIPPED_INVALID_FILE = "SKIPPED_INVALID_FILE"
MAX_DEPTH_REACHED = "MAX_DEPTH_REACHED"
PRUNED = "PRUNED"


class _WarningBase:
    kind: ClassVar[str]

    def to_dict(self) -> Dict[str, Any]:
        """
        Retorna representação serializável do warning.

        O texto renderizado fica em `text`; os campos da variante
        (inclusive `message` de `Internal`) mantêm seus próprios nomes.
        """
        data: Dict[str, Any] = {"kind": self.kind, "text": str(self)}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            data[f.name] = str(value) if isinstance(value, Path) else value
        return data


@dataclass(frozen=True)
class Internal(_WarningBase):
    kind: ClassVar[str] = INTERNAL
    message: str

    def __str__(self) -> str:
        return f"Internal warning: {self.message}"


@dataclass(frozen=True)
class NullValueDetected(_WarningBase):
    kind: ClassVar[str] = NULL_VALUE_DETECTED
    key: str
    file: Path

    def __str__(self) -> str:
        return f"Null value found for key '{self.key}' in file {self.file}"


@dataclass(frozen=True)
class ValueErrorWarning(_WarningBase):
    """Valor rejeitado ou deslocado durante carga ou merge."""

    kind: ClassVar[str] = VALUE_ERROR
    key: str
    error: str
    file: Path

    def __str__(self) -> str:
        return f"Error processing value for key '{self.key}' in file {self.file}: {self.error}"


@dataclass(frozen=True)
class DuplicateInclude(_WarningBase):
    kind: ClassVar[str] = DUPLICATE_INCLUDE
    path: Path
    included_from: Path

    def __str__(self) -> str:
        return (
            f"Duplicate include path '{self.path}' found, "
            f"already included from {self.included_from}"
        )


@dataclass(frozen=True)
class SkippedInvalidFile(_WarningBase):
    kind: ClassVar[str] = SKIPPED_INVALID_FILE
    path: Path

    def __str__(self) -> str:
        return f"Skipped invalid file in includes: {self.path}"


@dataclass(frozen=True)
class MaxDepthReached(_WarningBase):
    kind: ClassVar[str] = MAX_DEPTH_REACHED
    path: Path

    def __str__(self) -> str:
        return f"Maximum include depth reached for file {self.path}"


@dataclass(frozen=True)
class Pruned(_WarningBase):
    kind: ClassVar[str] = PRUNED
    path: Path

    def __str__(self) -> str:
        return f"Pruned file {self.path}"


ConfigWarning = Union[
    Internal,
    NullValueDetected,
    ValueErrorWarning,
    DuplicateInclude,
    SkippedInvalidFile,
    MaxDepthReached,
    Pruned,
]


def warning_key(warning: ConfigWarning) -> Optional[str]:
    """Chave de configuração associada ao warning, quando houver."""
    return getattr(warning, "key", None)
