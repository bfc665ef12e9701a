# src/arcella_config/core/config/includes.py
"""
Resolução de diretivas `includes` em caminhos concretos.

Dado um conjunto de padrões de include e o diretório base, este módulo
produz a lista de arquivos a carregar em seguida: deduplicada, ordenada
sem diferenciar maiúsculas/minúsculas e reprodutível entre execuções e
plataformas.

Política de resolução (v1):
    - Padrão relativo → resolvido contra o diretório base (não contra o
      diretório do arquivo que declarou o include)
    - Padrão absoluto → usado como está
    - Diretório → entradas diretas (não recursivo) com extensão `.toml`
      que não terminam em `.template.toml` (ambas as checagens ignoram caixa)
    - Arquivo → precisa passar pelo mesmo predicado
    - Qualquer outra coisa (inexistente, especial, extensão inválida) →
      warning `SkippedInvalidFile`, nunca erro

Decisões arquiteturais:
    - A classificação por metadados roda em paralelo (thread pool)
    - A ordem de retorno é a ordenação final, nunca a ordem de conclusão
    - Falha ao listar um diretório existente é fatal (`ConfigFileReadError`)
    - Falha de metadados (ex.: permissão negada no diretório pai) também é fatal

Invariantes:
    - Nenhum caminho aparece duas vezes no resultado
    - Arquivos `.template.toml` nunca são retornados

Limites explícitos:
    - Não lê conteúdo de arquivos
    - Não expande curingas (`*`, `?`)
    - Não desce em subdiretórios
"""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from arcella_config.core.errors import ConfigFileReadError

from .state import LoadState, normalize_path
from .warnings import SkippedInvalidFile


TOML_SUFFIX = ".toml"
TEMPLATE_SUFFIX = ".template.toml"
MAX_SCAN_WORKERS = 8


@dataclass
class _Classified:
    path: Path
    files: List[Path] = field(default_factory=list)
    skipped: bool = False


def is_valid_toml_file_path(path: Path) -> bool:
    """`.toml` (qualquer caixa) e não `.template.toml`."""
    name = path.name.lower()
    return path.suffix.lower() == TOML_SUFFIX and not name.endswith(TEMPLATE_SUFFIX)


def path_sort_key(path: Path) -> Tuple[str, str]:
    # desempate pela forma original mantém a ordem total
    return (str(path).lower(), str(path))


def resolve_include_path(pattern: str, base_dir: Path) -> Path:
    candidate = Path(pattern)
    if not candidate.is_absolute():
        candidate = Path(base_dir) / candidate
    return normalize_path(candidate)


def find_toml_files_in_dir(directory: Path) -> List[Path]:
    """Arquivos `.toml` válidos diretamente em `directory`, ordenados."""
    try:
        with os.scandir(directory) as entries:
            found = [
                normalize_path(Path(entry.path))
                for entry in entries
                if entry.is_file() and is_valid_toml_file_path(Path(entry.name))
            ]
    except OSError as e:
        raise ConfigFileReadError(directory, str(e)) from e

    return sorted(found, key=path_sort_key)


def _classify(path: Path) -> _Classified:
    try:
        is_dir = path.is_dir()
        is_file = not is_dir and path.is_file()
    except OSError as e:
        # ausente não levanta; permissão negada sim
        raise ConfigFileReadError(path, str(e)) from e

    if is_dir:
        return _Classified(path=path, files=find_toml_files_in_dir(path))
    if is_file and is_valid_toml_file_path(path):
        return _Classified(path=path, files=[path])
    return _Classified(path=path, skipped=True)


def _unique(paths: Iterable[Path]) -> List[Path]:
    seen: Dict[Path, None] = {}
    for path in paths:
        seen.setdefault(path, None)
    return list(seen)


def collect_toml_includes(
    includes: Iterable[str],
    base_dir: Path,
    state: LoadState,
) -> List[Path]:
    """
    Expande padrões de include em arquivos concretos.

    Args:
        includes: padrões declarados (na ordem de declaração).
        base_dir: diretório base da configuração.
        state: estado de carga que recebe warnings e eventos.

    Returns:
        List[Path]: caminhos normalizados, únicos, ordenados sem caixa.

    Raises:
        ConfigFileReadError: Se um diretório existente não puder ser listado
            ou se os metadados de um alvo não puderem ser consultados.
    """
    resolved = _unique(resolve_include_path(p, base_dir) for p in includes)
    if not resolved:
        return []

    workers = min(MAX_SCAN_WORKERS, len(resolved))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(_classify, resolved))

    for outcome in outcomes:
        if outcome.skipped:
            state.add_warning(SkippedInvalidFile(path=outcome.path))

    files = sorted(
        _unique(f for outcome in outcomes for f in outcome.files),
        key=path_sort_key,
    )

    state.log(
        level="debug",
        message="includes resolvidos",
        patterns=[str(p) for p in resolved],
        files=[str(f) for f in files],
    )
    return files
