# tests/core/config/test_state.py
"""
Testes do estado de carga (core.config.state).

Os testes asseguram que:
- índices de arquivo começam em 1 (o 0 pertence ao schema padrão)
- o mesmo caminho, em qualquer grafia, recebe sempre o mesmo índice
- warnings também são registrados no log estruturado de eventos
"""

from pathlib import Path

import pytest

try:
    from arcella_config.core.config.state import (
        DEFAULT_SCHEMA_INDEX,
        LoadParams,
        LoadState,
    )
    from arcella_config.core.config.warnings import Pruned
except Exception as e:  # noqa: BLE001
    LoadState = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing state module. Implement:\n"
            "- src/arcella_config/core/config/state.py (LoadParams, LoadState)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_indices_are_stable_and_start_after_default(tmp_path: Path):
    _require_imports()

    state = LoadState()

    first = state.register_file(tmp_path / "main.toml")
    second = state.register_file(tmp_path / "conf.d" / "a.toml")
    again = state.register_file(tmp_path / "conf.d" / ".." / "main.toml")

    assert DEFAULT_SCHEMA_INDEX == 0
    assert (first, second, again) == (1, 2, 1)
    assert state.path_of(2) == tmp_path / "conf.d" / "a.toml"
    assert state.file_label(0) == Path("<default>")
    assert state.file_label(99) == Path("<file #99>")


def test_add_warning_is_logged_as_event(tmp_path: Path):
    _require_imports()

    state = LoadState()
    state.add_warning(Pruned(path=tmp_path / "deep.toml"))

    (event,) = state.events
    assert event["level"] == "warning"
    assert event["kind"] == "PRUNED"
    assert event["message"] == f"Pruned file {tmp_path / 'deep.toml'}"
    assert event["timestamp"].endswith("+00:00")


def test_params_prefix_str(tmp_path: Path):
    _require_imports()

    assert LoadParams(key_prefix=("arcella", "node"), base_dir=tmp_path).prefix_str == "arcella.node"
    assert LoadParams(key_prefix=(), base_dir=tmp_path).prefix_str == ""
