# src/arcella_config/core/config/defaults.py
"""
Schema padrão embutido do Arcella Config.

O schema padrão é a base de toda resolução: ocupa o índice 0, nunca é lido
do disco e define quais chaves existem. Chaves fora dele só são aceitas nos
namespaces `custom.` e `modules.` (ver `merge`).
"""

from __future__ import annotations

from typing import Sequence

from arcella_config.core.value.flatten import ParsedFile, TraversalResult, parse_and_collect

from .state import DEFAULT_SCHEMA_INDEX, LoadState
from .warnings import Internal


DEFAULT_KEY_PREFIX = ("arcella",)
MAIN_CONFIG_FILENAME = "arcella.toml"

DEFAULT_CONFIG_TOML = """\
[log]
level = "info"
dir = "log"
console = true
max_files = 7

[modules]
dir = "modules"
autoload = true

[cache]
dir = "cache"
max_size_mb = 512

[alme.socket]
path = "alme.sock"
permissions = 432

[runtime]
max_instances = 16
startup_timeout_secs = 30.0
"""


def parse_default_schema(
    content: str,
    key_prefix: Sequence[str],
    state: LoadState,
) -> ParsedFile:
    """
    Faz o parse do schema padrão no índice 0.

    Includes declarados no schema são ignorados com um warning `Internal`;
    o mesmo vale para truncamento por profundidade.
    """
    parsed, result = parse_and_collect(content, key_prefix, DEFAULT_SCHEMA_INDEX)

    if parsed.includes:
        state.add_warning(
            Internal(message=f"includes in default config ignored: {parsed.includes}")
        )
        parsed.includes = []
    if result is TraversalResult.PRUNED:
        state.add_warning(Internal(message="default config was pruned"))

    return parsed
