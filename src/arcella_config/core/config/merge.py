# src/arcella_config/core/config/merge.py
"""
Merge em camadas com permissões de redefinição (`#redef`).

Este módulo implementa a política oficial de merge utilizada pelo Arcella
Config para reconciliar o schema padrão, o arquivo principal e a árvore de
arquivos incluídos em um único mapa `chave → (Value, índice de origem)`.

Política de merge (v1), em duas passadas:

    1. Reconciliação: arquivos carregados do último para o primeiro
       (include mais profundo primeiro, arquivo principal por último),
       sobre um mapa de trabalho indexado pela chave sem o sufixo `#redef`:
        - chave inédita        → registra valor e arquivo definidor
        - chave vista, sem #redef → sobrescreve valor e arquivo definidor
          e registra um warning consultivo ("no #redef flag")
        - chave vista, com #redef → mantém o valor; registra este arquivo
          como concedente da redefinição

    2. Aplicação condicionada ao schema: o mapa final nasce do schema
       padrão (índice 0); para cada chave reconciliada:
        - chave do schema → aplicada apenas se definida pelo arquivo
          principal ou se o principal concedeu `#redef`; caso contrário
          o padrão é mantido e um warning é registrado
        - chave nova → aplicada apenas sob `<prefixo>.custom.` ou
          `<prefixo>.modules.`; caso contrário é descartada com warning

Princípios fundamentais:
    - Nada neste módulo é fatal: toda rejeição vira `ValueErrorWarning`
    - O resultado é sempre completo (o padrão prevalece quando o override
      não é permitido)
    - O mapa final é ordenado por chave

Invariantes:
    - Toda chave do schema padrão está presente no resultado
    - Nenhuma chave do resultado termina em `#redef`
    - O índice associado a cada valor identifica o arquivo que o definiu

Limites explícitos:
    - Não lê arquivos nem resolve includes
    - Não valida tipos de valores contra o schema
    - Não transforma o warning de sobrescrita em rejeição: a sobrescrita
      entre includes sempre acontece
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from arcella_config.core.errors import InternalError
from arcella_config.core.value.flatten import ParsedFile
from arcella_config.core.value.types import Value

from .state import LoadParams, LoadState
from .warnings import ValueErrorWarning


REDEF_SUFFIX = "#redef"
NEWABLE_NAMESPACES = ("custom", "modules")


@dataclass
class ReconciledEntry:
    value: Value
    defining_file_index: int
    redef_grantor: Optional[int] = None


def split_redef(key: str) -> Tuple[str, bool]:
    """Remove o sufixo literal `#redef` → (chave real, é_redef)."""
    if key.endswith(REDEF_SUFFIX):
        return key[: -len(REDEF_SUFFIX)], True
    return key, False


def is_newable(key: str, prefix: str) -> bool:
    """Chaves novas só são aceitas em `<prefixo>.custom.` e `<prefixo>.modules.`."""
    base = f"{prefix}." if prefix else ""
    return any(key.startswith(f"{base}{namespace}.") for namespace in NEWABLE_NAMESPACES)


def reconcile_layers(
    loaded: Sequence[ParsedFile],
    state: LoadState,
) -> Dict[str, ReconciledEntry]:
    """
    Primeira passada: reconcilia os arquivos carregados do último ao primeiro.

    Args:
        loaded: arquivos na ordem pré-ordem do loader (índice 0 = principal).
        state: estado de carga (recebe warnings de sobrescrita).

    Returns:
        Dict[str, ReconciledEntry]: chave sem `#redef` → entrada reconciliada,
        em ordem de primeira aparição.
    """
    working: Dict[str, ReconciledEntry] = {}

    for parsed in reversed(loaded):
        for raw_key, value, file_index in parsed.iter_values():
            key, is_redef = split_redef(raw_key)
            entry = working.get(key)

            if entry is None:
                working[key] = ReconciledEntry(value=value, defining_file_index=file_index)
                continue

            if is_redef:
                # concessão de permissão, o valor não muda
                entry.redef_grantor = file_index
                continue

            previous = entry.defining_file_index
            entry.value = value
            entry.defining_file_index = file_index
            state.add_warning(
                ValueErrorWarning(
                    key=key,
                    error=(
                        f"Value from file #{previous} ignored due to no #redef flag "
                        f"in file #{file_index}"
                    ),
                    file=state.file_label(file_index),
                )
            )

    return working


def merge_config(
    default: ParsedFile,
    loaded: Sequence[ParsedFile],
    *,
    params: LoadParams,
    state: LoadState,
    primary_path: Path,
) -> Dict[str, Tuple[Value, int]]:
    """
    Produz o mapa final de configuração a partir do schema padrão e dos
    arquivos carregados.

    Política de resolução:
        - Primeira passada: `reconcile_layers`
        - Segunda passada: aplicação condicionada ao schema padrão

    Decisões arquiteturais:
        - O arquivo principal é identificado pelo seu índice em `known_files`
        - Rejeições nunca lançam exceção; viram `ValueErrorWarning`
        - O resultado é um novo dicionário ordenado por chave

    Invariantes:
        - Toda chave do schema padrão aparece no resultado
        - A mesma entrada sempre produz o mesmo resultado e os mesmos warnings

    Args:
        default: schema padrão já achatado (índice 0).
        loaded: saída do loader recursivo.
        params: parâmetros da resolução (prefixo de chaves).
        state: estado de carga (known_files e warnings).
        primary_path: caminho do arquivo principal.

    Returns:
        Dict[str, Tuple[Value, int]]: chave → (valor, índice de origem).

    Raises:
        InternalError: Se o arquivo principal não tiver índice atribuído.
    """
    primary_index = state.index_of(primary_path)
    if primary_index is None:
        raise InternalError(f"Arquivo principal sem índice: {primary_path}")

    reconciled = reconcile_layers(loaded, state)

    final: Dict[str, Tuple[Value, int]] = {
        key: (value, file_index) for key, value, file_index in default.iter_values()
    }
    applied = 0
    rejected = 0

    for key, entry in reconciled.items():
        source = entry.defining_file_index

        if key in default.values:
            if source == primary_index or entry.redef_grantor == primary_index:
                final[key] = (entry.value, source)
                applied += 1
                continue
            error = f"Value from file #{source} ignored due to #redef missing in main file"
        elif is_newable(key, params.prefix_str):
            final[key] = (entry.value, source)
            applied += 1
            continue
        else:
            error = f"Value from file #{source} ignored due to missing in default config"

        rejected += 1
        state.add_warning(
            ValueErrorWarning(key=key, error=error, file=state.file_label(source))
        )

    state.log(
        level="info",
        message="merge concluído",
        primary_index=primary_index,
        applied=applied,
        rejected=rejected,
    )
    return dict(sorted(final.items()))
