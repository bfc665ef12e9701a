# src/arcella_config/core/config/integrity.py
"""Verificação de integridade dos arquivos que compuseram uma resolução."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable

from arcella_config.core.errors import ConfigIntegrityError

from .resolved import ResolvedConfig
from .state import normalize_path


@dataclass
class IntegrityChecker:
    """
    Registra o mtime de cada arquivo carregado e detecta alterações posteriores.

    Não recarrega nada: apenas informa que a configuração em memória deixou
    de corresponder ao disco.
    """

    mtimes: Dict[Path, int] = field(default_factory=dict)

    @classmethod
    def from_files(cls, paths: Iterable[Path]) -> "IntegrityChecker":
        mtimes: Dict[Path, int] = {}
        for path in paths:
            path = normalize_path(path)
            try:
                mtimes[path] = path.stat().st_mtime_ns
            except OSError as e:
                raise ConfigIntegrityError(path, f"stat falhou: {e}") from e
        return cls(mtimes=mtimes)

    @classmethod
    def from_resolved(cls, resolved: ResolvedConfig) -> "IntegrityChecker":
        return cls.from_files(resolved.files.values())

    def is_known(self, path: Path) -> bool:
        return normalize_path(path) in self.mtimes

    def check_file(self, path: Path) -> None:
        path = normalize_path(path)
        if path not in self.mtimes:
            raise ConfigIntegrityError(path, "arquivo fora da lista inicial")

        try:
            current = path.stat().st_mtime_ns
        except FileNotFoundError as e:
            raise ConfigIntegrityError(path, "arquivo removido") from e
        except OSError as e:
            raise ConfigIntegrityError(path, f"stat falhou: {e}") from e

        if current != self.mtimes[path]:
            raise ConfigIntegrityError(path, "arquivo modificado")

    def check(self) -> None:
        """Levanta `ConfigIntegrityError` no primeiro arquivo alterado ou removido."""
        for path in self.mtimes:
            self.check_file(path)
