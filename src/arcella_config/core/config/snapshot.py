# src/arcella_config/core/config/snapshot.py
"""
Snapshot de diagnóstico da configuração resolvida.

Grava o mapa final com proveniência e todos os warnings em YAML ou JSON,
para inspeção humana ("por que meu override não foi aplicado?") ou
comparação entre máquinas.

Formatos suportados (v1):
    - YAML (.yaml, .yml)
    - JSON (.json)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml  # PyYAML

from arcella_config.core.errors import UnsupportedSnapshotFormatError
from arcella_config.core.value.types import to_native

from .resolved import ResolvedConfig


YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


def _format_of(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        return "yaml"
    if suffix in JSON_SUFFIXES:
        return "json"
    raise UnsupportedSnapshotFormatError(f"Formato não suportado: {path.suffix}")


def build_snapshot(resolved: ResolvedConfig) -> Dict[str, Any]:
    return {
        "config_hash": resolved.config_hash,
        "files": [
            {"index": index, "path": str(path)}
            for index, path in sorted(resolved.files.items())
        ],
        "values": {
            key: {"value": to_native(value), "source": index}
            for key, (value, index) in resolved.values.items()
        },
        "warnings": [w.to_dict() for w in resolved.warnings],
    }


def write_snapshot(resolved: ResolvedConfig, path: str) -> Path:
    """
    Grava o snapshot em `path`; o formato é inferido pela extensão.

    Raises:
        UnsupportedSnapshotFormatError: Para extensões fora de YAML/JSON.
    """
    target = Path(path)
    fmt = _format_of(target)
    data = build_snapshot(resolved)

    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as f:
        if fmt == "yaml":
            yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
        else:
            json.dump(data, f, indent=2, ensure_ascii=False)

    return target


def read_snapshot(path: str) -> Dict[str, Any]:
    source = Path(path)
    fmt = _format_of(source)

    with source.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) if fmt == "yaml" else json.load(f)

    return data or {}
