# src/arcella_config/core/config/resolved.py
"""
Configuração resolvida: o artefato entregue aos consumidores.

`ResolvedConfig` reúne o mapa final ordenado `chave → (Value, índice)`,
a tabela de arquivos carregados, todos os warnings e o log de eventos da
resolução. Consumidores usam:
    - `get(key)` para consulta pontual
    - `warnings` / `warnings_for(key)` para diagnóstico posterior
      ("por que meu override não foi aplicado?")
    - seções (`section_keys`, `subsection_names`, `section_data`) para
      navegar o espaço de chaves como uma árvore

Seções:
    Uma chave `a.b.c` pertence à seção `a.b` com nome de valor `c`;
    `a` lista `b` como subseção e a seção raiz `""` lista `a`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from arcella_config.core.value.types import Value, to_native

from .hashing import compute_config_hash
from .warnings import ConfigWarning, warning_key


ROOT_SECTION = ""


@dataclass
class _Section:
    subsections: List[str] = field(default_factory=list)
    keys: List[str] = field(default_factory=list)


def _split_key(key: str) -> Tuple[str, str]:
    section, _, name = key.rpartition(".")
    return section, name


def build_sections(keys: List[str]) -> Dict[str, _Section]:
    sections: Dict[str, _Section] = {ROOT_SECTION: _Section()}

    for key in sorted(keys):
        section, name = _split_key(key)
        sections.setdefault(section, _Section()).keys.append(name)

        # registra a cadeia de subseções até a raiz
        child = section
        while child:
            parent, child_name = _split_key(child)
            parent_section = sections.setdefault(parent, _Section())
            if child_name in parent_section.subsections:
                break
            parent_section.subsections.append(child_name)
            child = parent

    return sections


@dataclass(frozen=True)
class ResolvedConfig:
    values: Dict[str, Tuple[Value, int]]
    files: Dict[int, Path] = field(default_factory=dict)
    warnings: List[ConfigWarning] = field(default_factory=list)
    events: List[Dict[str, Any]] = field(default_factory=list)
    _sections: Dict[str, _Section] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_sections", build_sections(list(self.values)))

    # -----------------------------
    # Lookup
    # -----------------------------
    def get(self, key: str) -> Optional[Value]:
        entry = self.values.get(key)
        return entry[0] if entry is not None else None

    def get_native(self, key: str, default: Any = None) -> Any:
        value = self.get(key)
        return to_native(value) if value is not None else default

    def source_index(self, key: str) -> Optional[int]:
        entry = self.values.get(key)
        return entry[1] if entry is not None else None

    def source_file(self, key: str) -> Optional[Path]:
        """Arquivo que definiu o valor; None para o schema padrão ou chave ausente."""
        index = self.source_index(key)
        if index is None:
            return None
        return self.files.get(index)

    def keys(self) -> List[str]:
        return list(self.values)

    def __contains__(self, key: object) -> bool:
        return key in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def as_native(self) -> Dict[str, Any]:
        return {key: to_native(value) for key, (value, _) in self.values.items()}

    @property
    def config_hash(self) -> str:
        return compute_config_hash({key: value for key, (value, _) in self.values.items()})

    # -----------------------------
    # Diagnóstico
    # -----------------------------
    def warnings_for(self, key: str) -> List[ConfigWarning]:
        return [w for w in self.warnings if warning_key(w) == key]

    # -----------------------------
    # Seções
    # -----------------------------
    def section_keys(self, section: str) -> List[str]:
        entry = self._sections.get(section)
        return list(entry.keys) if entry is not None else []

    def subsection_names(self, section: str) -> List[str]:
        entry = self._sections.get(section)
        return list(entry.subsections) if entry is not None else []

    def section_data(self, section: str) -> Dict[str, Value]:
        prefix = f"{section}." if section else ""
        return {name: self.values[prefix + name][0] for name in self.section_keys(section)}
