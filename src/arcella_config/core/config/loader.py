# src/arcella_config/core/config/loader.py
"""
Loader canônico de configuração do Arcella Config.

Este módulo é responsável por carregar recursivamente a árvore de arquivos
TOML a partir do arquivo principal e por resolver a configuração efetiva.

Máquina de estados de uma recursão (`current_depth` começa em 0):
    1. Profundidade: se `current_depth > MAX_CONFIG_DEPTH`, o arquivo não é
       lido; registra `MaxDepthReached` e retorna vazio
    2. Duplicidade/ciclo: se o path já está em `known_files`, registra
       `DuplicateInclude` e retorna vazio (isso também quebra ciclos)
    3. Leitura: falha de I/O aborta a resolução inteira
    4. Só após a leitura bem-sucedida o path recebe seu índice
    5. Parse com o índice atribuído; `Pruned` se a travessia foi truncada;
       `NullValueDetected` para cada valor nulo
    6. Includes resolvidos em ordem determinística e carregados em
       `current_depth + 1`

O retorno é uma sequência plana em pré-ordem: o próprio arquivo primeiro,
depois a subárvore completa de cada include, da esquerda para a direita.

Princípios fundamentais:
    - Cada path é parseado no máximo uma vez por resolução
    - Erro transitório de leitura nunca contamina o estado de deduplicação
    - Warnings são acumulados, nunca lançados

Invariantes:
    - Root é profundidade 0: no máximo `MAX_CONFIG_DEPTH + 1` arquivos encadeados
    - O primeiro elemento do retorno de nível 0 é sempre o arquivo principal

Limites explícitos:
    - Não faz merge (ver `merge`)
    - Não cria arquivos ou diretórios ausentes
    - Não recarrega configuração em tempo de execução
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from arcella_config.core.errors import ConfigFileReadError, ConfigParseError
from arcella_config.core.value.flatten import ParsedFile, TraversalResult, parse_and_collect
from arcella_config.core.value.types import Array, Map, Null, TypedError, Value

from .defaults import (
    DEFAULT_CONFIG_TOML,
    DEFAULT_KEY_PREFIX,
    MAIN_CONFIG_FILENAME,
    parse_default_schema,
)
from .includes import collect_toml_includes
from .merge import merge_config
from .resolved import ResolvedConfig
from .state import LoadParams, LoadState, normalize_path
from .warnings import (
    DuplicateInclude,
    MaxDepthReached,
    NullValueDetected,
    Pruned,
    ValueErrorWarning,
)


MAX_CONFIG_DEPTH = 5


def read_config_file(path: Path) -> str:
    """
    Lê o conteúdo de um arquivo de configuração como UTF-8.

    Raises:
        ConfigFileReadError: Se o arquivo não puder ser lido.
        ConfigParseError: Se o conteúdo não for UTF-8 válido.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigFileReadError(path, e.strerror or str(e)) from e

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ConfigParseError(path, f"conteúdo não é UTF-8: {e}") from e


def _find_typed_error(value: Value) -> Optional[TypedError]:
    if isinstance(value, TypedError):
        return value
    if isinstance(value, Array):
        children = value.items
    elif isinstance(value, Map):
        children = tuple(value.entries.values())
    else:
        return None
    for child in children:
        found = _find_typed_error(child)
        if found is not None:
            return found
    return None


def report_value_warnings(parsed: ParsedFile, path: Path, state: LoadState) -> None:
    """Registra `NullValueDetected` para valores nulos e `ValueErrorWarning` para `TypedError`."""
    for key, value, _ in parsed.iter_values():
        if isinstance(value, Null):
            state.add_warning(NullValueDetected(key=key, file=path))
            continue
        typed_error = _find_typed_error(value)
        if typed_error is not None:
            state.add_warning(
                ValueErrorWarning(key=key, error=typed_error.message, file=path)
            )


def load_config_recursive(
    params: LoadParams,
    state: LoadState,
    path: Path,
    *,
    included_from: Optional[Path] = None,
    current_depth: int = 0,
) -> List[ParsedFile]:
    """
    Carrega `path` e, recursivamente, todos os seus includes.

    Args:
        params: prefixo de chaves e diretório base.
        state: estado mutável da resolução.
        path: arquivo a carregar.
        included_from: arquivo que declarou o include (None para o principal).
        current_depth: profundidade de include (0 no arquivo principal).

    Returns:
        List[ParsedFile]: este arquivo seguido das subárvores de seus includes.

    Raises:
        ConfigFileReadError: Se um arquivo resolvido não puder ser lido.
        ConfigParseError: Se um arquivo contiver TOML inválido.
        UnsupportedValueTypeError: Se um arquivo contiver valor sem variante.
    """
    path = normalize_path(path)

    if current_depth > MAX_CONFIG_DEPTH:
        state.add_warning(MaxDepthReached(path=path))
        return []

    if state.is_known(path):
        if path in state.in_progress:
            state.log(level="debug", message="ciclo de include detectado", path=str(path))
        state.add_warning(
            DuplicateInclude(path=path, included_from=included_from or path)
        )
        return []

    content = read_config_file(path)
    file_index = state.register_file(path)
    state.log(
        level="info",
        message="arquivo de configuração carregado",
        path=str(path),
        file_index=file_index,
        depth=current_depth,
    )

    parsed, traversal = parse_and_collect(
        content, params.key_prefix, file_index, source=path
    )
    if traversal is TraversalResult.PRUNED:
        state.add_warning(Pruned(path=path))
    report_value_warnings(parsed, path, state)

    result = [parsed]
    state.in_progress.add(path)
    try:
        for include in collect_toml_includes(parsed.includes, params.base_dir, state):
            result.extend(
                load_config_recursive(
                    params,
                    state,
                    include,
                    included_from=path,
                    current_depth=current_depth + 1,
                )
            )
    finally:
        state.in_progress.discard(path)

    return result


def load_config(
    *,
    main_path: str,
    base_dir: Optional[str] = None,
    key_prefix: Sequence[str] = DEFAULT_KEY_PREFIX,
    default_content: str = DEFAULT_CONFIG_TOML,
) -> ResolvedConfig:
    """
    Carrega e resolve a configuração efetiva.

    Política de resolução:
        - O schema padrão embutido ocupa o índice 0
        - O arquivo principal é obrigatório; includes ausentes viram warning
        - Includes relativos são resolvidos contra `base_dir`
          (padrão: diretório do arquivo principal)
        - O merge aplica as permissões `#redef` e o gating por namespace

    Decisões arquiteturais:
        - Um `LoadState` novo por chamada; nada é compartilhado entre chamadas
        - Warnings e eventos são devolvidos no resultado, não emitidos em log

    Args:
        main_path (str): Caminho do arquivo principal (ex.: `arcella.toml`).
        base_dir (Optional[str]): Diretório base para includes relativos.
        key_prefix (Sequence[str]): Prefixo aplicado a toda chave.
        default_content (str): TOML do schema padrão.

    Returns:
        ResolvedConfig: mapa final, arquivos, warnings e eventos.

    Raises:
        ConfigFileReadError: Se o principal ou um include resolvido não puder ser lido.
        ConfigParseError: Se algum TOML for inválido.
        UnsupportedValueTypeError: Se houver valor sem variante.
    """
    main_file = normalize_path(Path(main_path))
    base = normalize_path(Path(base_dir)) if base_dir is not None else main_file.parent

    params = LoadParams(key_prefix=tuple(key_prefix), base_dir=base)
    state = LoadState()

    default = parse_default_schema(default_content, params.key_prefix, state)
    loaded = load_config_recursive(params, state, main_file)
    values = merge_config(
        default,
        loaded,
        params=params,
        state=state,
        primary_path=main_file,
    )

    files = {index: path for path, index in state.known_files.items()}

    return ResolvedConfig(
        values=values,
        files=files,
        warnings=list(state.warnings),
        events=list(state.events),
    )


def load_config_dir(config_dir: str) -> ResolvedConfig:
    """Resolve `<config_dir>/arcella.toml` usando `config_dir` como diretório base."""
    base = Path(config_dir)
    return load_config(main_path=str(base / MAIN_CONFIG_FILENAME), base_dir=str(base))
