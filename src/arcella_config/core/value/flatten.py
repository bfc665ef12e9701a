# src/arcella_config/core/value/flatten.py
"""
Achatamento de documentos TOML em chaves pontuadas.

Este módulo transforma a raiz de um documento TOML já parseado em um
`ParsedFile`: uma lista ordenada de includes declarados e um mapa ordenado
`chave pontuada → (Value, file_index)`.

Regras de travessia:
    - Entradas de tabela viram chaves pontuadas (`prefixo.chave.subchave`)
    - A profundidade de tabelas é limitada a `MAX_TOML_DEPTH`; uma subárvore
      além do limite não é coletada e o resultado passa a ser `PRUNED`,
      propagado até a raiz do arquivo
    - Uma chave chamada literalmente `includes`, em qualquer nível, é desviada
      para `ParsedFile.includes` (string ou strings de um array) e nunca é
      armazenada como valor
    - Tabelas inline e tabelas comuns chegam aqui como `dict` e têm
      tratamento idêntico
    - Arrays (incluindo array-of-tables) são armazenados como um único
      `Array`; tabelas dentro dos elementos viram `Map` com chaves
      **relativas ao elemento**, recursivamente
    - Tipos sem variante (datetime, date, time) abortam o parse inteiro

Decisões arquiteturais:
    - O parser TOML é a biblioteca padrão (`tomllib`), tratado como caixa-preta
    - A ordem de inserção de `values` reflete a ordem de travessia
    - O índice de arquivo é recebido do chamador e nunca inventado aqui

Invariantes:
    - Nenhuma chave armazenada termina em `.includes`
    - Nenhuma chave armazenada contém índices de array (ex.: `servers.0.name`)
    - `PRUNED` em qualquer nível implica `PRUNED` no resultado do arquivo

Limites explícitos:
    - Não resolve includes nem lê arquivos
    - Não interpreta o sufixo `#redef` (isso é papel do merge)
    - Não emite warnings; apenas sinaliza `PRUNED`
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from arcella_config.core.errors import ConfigParseError
from arcella_config.core.value.types import Array, Map, Value, from_native


MAX_TOML_DEPTH = 10
INCLUDES_KEY = "includes"


class TraversalResult(str, Enum):
    FULL = "full"
    PRUNED = "pruned"


@dataclass
class ParsedFile:
    """
    Resultado do achatamento de um documento.

    Campos:
        includes: padrões de include na ordem em que foram declarados
        values: chave pontuada → (valor, índice do arquivo de origem)
    """

    includes: List[str] = field(default_factory=list)
    values: Dict[str, Tuple[Value, int]] = field(default_factory=dict)

    def iter_values(self) -> Iterator[Tuple[str, Value, int]]:
        for key, (value, file_index) in self.values.items():
            yield key, value, file_index


def parse_and_collect(
    content: str,
    key_prefix: Sequence[str],
    file_index: int,
    *,
    source: Optional[Path] = None,
) -> Tuple[ParsedFile, TraversalResult]:
    """
    Faz o parse de conteúdo TOML e o achata em um `ParsedFile`.

    Args:
        content: texto TOML.
        key_prefix: segmentos prefixados a toda chave armazenada.
        file_index: índice de proveniência aplicado a todos os valores.
        source: caminho de origem, usado apenas em mensagens de erro.

    Returns:
        (ParsedFile, TraversalResult)

    Raises:
        ConfigParseError: Se o TOML for sintaticamente inválido.
        UnsupportedValueTypeError: Se houver valor sem variante (ex.: datetime).
    """
    try:
        document = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(source, str(e)) from e

    return collect_document(document, key_prefix, file_index)


def collect_document(
    document: Mapping[str, Any],
    key_prefix: Sequence[str],
    file_index: int,
) -> Tuple[ParsedFile, TraversalResult]:
    """Achata uma raiz de documento já parseada (profundidade 0)."""
    parsed = ParsedFile()
    result = _collect_table(
        document,
        list(key_prefix),
        parsed.includes,
        parsed.values,
        file_index,
        depth=0,
    )
    return parsed, result


def _collect_table(
    table: Mapping[str, Any],
    path: List[str],
    includes: List[str],
    sink: Dict[str, Tuple[Value, int]],
    file_index: int,
    depth: int,
) -> TraversalResult:
    if depth > MAX_TOML_DEPTH:
        return TraversalResult.PRUNED

    result = TraversalResult.FULL

    for key, item in table.items():
        if key == INCLUDES_KEY:
            _divert_includes(item, includes)
            continue

        key_path = path + [key]

        if isinstance(item, dict):
            sub = _collect_table(item, key_path, includes, sink, file_index, depth + 1)
        elif isinstance(item, list):
            value, sub = _collect_array(item, ".".join(key_path), includes, depth + 1)
            sink[".".join(key_path)] = (value, file_index)
        else:
            sink[".".join(key_path)] = (from_native(item, key=".".join(key_path)), file_index)
            sub = TraversalResult.FULL

        if sub is TraversalResult.PRUNED:
            result = TraversalResult.PRUNED

    return result


def _collect_array(
    items: List[Any],
    label: str,
    includes: List[str],
    depth: int,
) -> Tuple[Array, TraversalResult]:
    """
    Converte um array em `Array`; tabelas nos elementos viram `Map`
    com chaves relativas ao próprio elemento.
    """
    result = TraversalResult.FULL
    converted: List[Value] = []
    for i, item in enumerate(items):
        if isinstance(item, dict):
            element: Dict[str, Tuple[Value, int]] = {}
            # o índice de arquivo não tem uso dentro do Map
            sub = _collect_table(item, [], includes, element, 0, depth)
            converted.append(Map({k: v for k, (v, _) in element.items()}))
        elif isinstance(item, list):
            nested, sub = _collect_array(item, f"{label}[{i}]", includes, depth + 1)
            converted.append(nested)
        else:
            converted.append(from_native(item, key=f"{label}[{i}]"))
            sub = TraversalResult.FULL

        if sub is TraversalResult.PRUNED:
            result = TraversalResult.PRUNED

    return Array(tuple(converted)), result


def _divert_includes(item: Any, includes: List[str]) -> None:
    if isinstance(item, str):
        includes.append(item)
    elif isinstance(item, list):
        includes.extend(entry for entry in item if isinstance(entry, str))
