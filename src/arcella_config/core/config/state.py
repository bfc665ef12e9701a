# src/arcella_config/core/config/state.py
"""
Estado e parâmetros de uma execução de resolução.

`LoadParams` é imutável e descreve *como* resolver (prefixo de chaves,
diretório base). `LoadState` é mutável, criado uma vez por chamada de
resolução, e carrega:
    - known_files: path → índice estável (0 reservado ao schema padrão)
    - in_progress: arquivos cuja subárvore de includes ainda está em carga
    - warnings: warnings acumulados, em ordem
    - events: log estruturado de eventos (timestamp UTC)

Decisões arquiteturais:
    - Nenhum estado global: cada resolução cria o seu `LoadState`
    - O índice só é atribuído após leitura bem-sucedida do arquivo
    - Todo warning registrado também gera um evento de nível `warning`

Limites explícitos:
    - Não é seguro para mutação concorrente sem sincronização externa
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

from .warnings import ConfigWarning


DEFAULT_SCHEMA_INDEX = 0
DEFAULT_SCHEMA_LABEL = "<default>"


def normalize_path(path: Path) -> Path:
    """Caminho absoluto e lexicamente normalizado, sem resolver symlinks."""
    return Path(os.path.normpath(os.path.abspath(path)))


@dataclass(frozen=True)
class LoadParams:
    key_prefix: Tuple[str, ...]
    base_dir: Path

    @property
    def prefix_str(self) -> str:
        return ".".join(self.key_prefix)


@dataclass
class LoadState:
    known_files: Dict[Path, int] = field(default_factory=dict)
    in_progress: Set[Path] = field(default_factory=set)
    warnings: List[ConfigWarning] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)

    # -----------------------------
    # Known files
    # -----------------------------
    def register_file(self, path: Path) -> int:
        """
        Atribui o próximo índice a `path` (ou retorna o já atribuído).

        Índices começam em 1: o 0 pertence ao schema padrão, que nunca
        vem do disco.
        """
        path = normalize_path(path)
        if path not in self.known_files:
            self.known_files[path] = len(self.known_files) + 1
        return self.known_files[path]

    def is_known(self, path: Path) -> bool:
        return normalize_path(path) in self.known_files

    def index_of(self, path: Path) -> Optional[int]:
        return self.known_files.get(normalize_path(path))

    def path_of(self, index: int) -> Optional[Path]:
        for path, known_index in self.known_files.items():
            if known_index == index:
                return path
        return None

    def file_label(self, index: int) -> Path:
        """Caminho do arquivo de índice `index`, ou um rótulo para o schema padrão."""
        if index == DEFAULT_SCHEMA_INDEX:
            return Path(DEFAULT_SCHEMA_LABEL)
        path = self.path_of(index)
        if path is None:
            return Path(f"<file #{index}>")
        return path

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, level: str, message: str, **extra: Any) -> None:
        event = {
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        self.events.append(event)

    def add_warning(self, warning: ConfigWarning) -> None:
        self.warnings.append(warning)
        self.log(level="warning", message=str(warning), kind=warning.kind)
