# src/arcella_config/core/config/runtime.py
"""
Leitura das chaves bem conhecidas consumidas pelo bootstrap do runtime.

O bootstrap precisa de diretórios e do caminho do socket de gerenciamento.
Cada chave deve existir e ser `String`; caso contrário o processo não deve
iniciar. Esta validação pertence ao consumidor, não ao motor de resolução.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from arcella_config.core.errors import InvalidConfigValueError, MissingConfigKeyError
from arcella_config.core.value.types import String, kind_of

from .resolved import ResolvedConfig


LOG_DIR_KEY = "arcella.log.dir"
MODULES_DIR_KEY = "arcella.modules.dir"
CACHE_DIR_KEY = "arcella.cache.dir"
SOCKET_PATH_KEY = "arcella.alme.socket.path"


def require_string(config: ResolvedConfig, key: str) -> str:
    value = config.get(key)
    if value is None:
        raise MissingConfigKeyError(key)
    if not isinstance(value, String):
        raise InvalidConfigValueError(key, "String", kind_of(value))
    return value.value


@dataclass(frozen=True)
class RuntimePaths:
    log_dir: Path
    modules_dir: Path
    cache_dir: Path
    socket_path: Path

    @classmethod
    def from_config(
        cls,
        config: ResolvedConfig,
        *,
        base_dir: Optional[Path] = None,
    ) -> "RuntimePaths":
        """
        Extrai os caminhos do runtime.

        Caminhos relativos são resolvidos contra `base_dir` quando informado;
        sem `base_dir`, são devolvidos como estão.

        Raises:
            MissingConfigKeyError: Se alguma chave estiver ausente.
            InvalidConfigValueError: Se alguma chave não for `String`.
        """

        def _path(key: str) -> Path:
            path = Path(require_string(config, key))
            if base_dir is not None and not path.is_absolute():
                return Path(base_dir) / path
            return path

        return cls(
            log_dir=_path(LOG_DIR_KEY),
            modules_dir=_path(MODULES_DIR_KEY),
            cache_dir=_path(CACHE_DIR_KEY),
            socket_path=_path(SOCKET_PATH_KEY),
        )
