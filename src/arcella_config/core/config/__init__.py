# src/arcella_config/core/config/__init__.py

"""
Camada de resolução de configuração do Arcella Config.

Este pacote contém as estruturas e utilitários responsáveis por carregar,
expandir includes, mesclar em camadas e diagnosticar a configuração do
runtime Arcella.

A configuração no Arcella Config é:
    - declarativa
    - determinística
    - rastreável (cada valor aponta para o arquivo que o definiu)
    - tolerante: problemas não fatais viram warnings

Responsabilidades do pacote:
    - Resolução de `includes` (arquivos, diretórios, caminhos relativos/absolutos)
    - Carga recursiva com guardas de ciclo e profundidade
    - Merge em duas passadas com permissões `#redef` e gating por namespace
    - Hash canônico, snapshot de diagnóstico e verificação de integridade

Invariantes:
    - Cada arquivo é parseado no máximo uma vez por resolução
    - Toda chave do schema padrão está presente no resultado
    - Falhas fatais são exceções tipadas (`ConfigError`); o resto é warning

Limites explícitos:
    - Não recarrega configuração em tempo de execução
    - Não cria diretórios, templates ou sockets
"""

from arcella_config.core.errors import (
    ConfigError,
    ConfigFileReadError,
    ConfigIntegrityError,
    ConfigParseError,
    InternalError,
    InvalidConfigValueError,
    MissingConfigKeyError,
    UnsupportedSnapshotFormatError,
    UnsupportedValueTypeError,
)

from .defaults import DEFAULT_CONFIG_TOML, DEFAULT_KEY_PREFIX, MAIN_CONFIG_FILENAME
from .hashing import compute_config_hash
from .includes import collect_toml_includes, is_valid_toml_file_path
from .integrity import IntegrityChecker
from .loader import MAX_CONFIG_DEPTH, load_config, load_config_dir, load_config_recursive
from .merge import merge_config
from .resolved import ResolvedConfig
from .runtime import RuntimePaths
from .snapshot import read_snapshot, write_snapshot
from .state import LoadParams, LoadState
from .warnings import (
    ConfigWarning,
    DuplicateInclude,
    Internal,
    MaxDepthReached,
    NullValueDetected,
    Pruned,
    SkippedInvalidFile,
    ValueErrorWarning,
)

__all__ = [
    "ConfigError",
    "ConfigFileReadError",
    "ConfigIntegrityError",
    "ConfigParseError",
    "InternalError",
    "InvalidConfigValueError",
    "MissingConfigKeyError",
    "UnsupportedSnapshotFormatError",
    "UnsupportedValueTypeError",
    "DEFAULT_CONFIG_TOML",
    "DEFAULT_KEY_PREFIX",
    "MAIN_CONFIG_FILENAME",
    "compute_config_hash",
    "collect_toml_includes",
    "is_valid_toml_file_path",
    "IntegrityChecker",
    "MAX_CONFIG_DEPTH",
    "load_config",
    "load_config_dir",
    "load_config_recursive",
    "merge_config",
    "ResolvedConfig",
    "RuntimePaths",
    "read_snapshot",
    "write_snapshot",
    "LoadParams",
    "LoadState",
    "ConfigWarning",
    "DuplicateInclude",
    "Internal",
    "MaxDepthReached",
    "NullValueDetected",
    "Pruned",
    "SkippedInvalidFile",
    "ValueErrorWarning",
]
