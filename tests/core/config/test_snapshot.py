# tests/core/config/test_snapshot.py
"""
Testes do snapshot de diagnóstico (core.config.snapshot).

Os testes asseguram que:
- YAML e JSON são gravados de acordo com a extensão
- o snapshot contém hash, arquivos, valores com proveniência e warnings
- extensões desconhecidas são rejeitadas
"""

import json
from pathlib import Path

import pytest
import yaml

try:
    from arcella_config.core.config.loader import load_config
    from arcella_config.core.config.snapshot import read_snapshot, write_snapshot
    from arcella_config.core.errors import UnsupportedSnapshotFormatError
except Exception as e:  # noqa: BLE001
    write_snapshot = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing snapshot module. Implement:\n"
            "- src/arcella_config/core/config/snapshot.py (write_snapshot, read_snapshot)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.fixture
def resolved(tmp_path: Path, write_toml, default_schema_toml):
    if load_config is None:
        return None
    main = write_toml("conf/main.toml", 'includes = "local.toml"\nlevel = "warn"\n')
    return load_config(main_path=str(main), default_content=default_schema_toml)


def test_yaml_snapshot_contains_provenance_and_warnings(tmp_path: Path, resolved):
    """
    Verifica o conteúdo do snapshot YAML.

    Invariantes:
        - `config_hash` é o hash da configuração resolvida
        - `values` registra valor e índice de origem
        - O include ausente aparece como SKIPPED_INVALID_FILE
    """
    _require_imports()

    target = write_snapshot(resolved, str(tmp_path / "out" / "snapshot.yaml"))
    data = yaml.safe_load(target.read_text(encoding="utf-8"))

    assert data["config_hash"] == resolved.config_hash
    assert data["files"] == [{"index": 1, "path": str(tmp_path / "conf" / "main.toml")}]
    assert data["values"]["arcella.level"] == {"value": "warn", "source": 1}
    assert data["values"]["arcella.server.port"] == {"value": 8080, "source": 0}
    assert [w["kind"] for w in data["warnings"]] == ["SKIPPED_INVALID_FILE"]
    assert read_snapshot(str(target)) == data


def test_json_snapshot(tmp_path: Path, resolved):
    _require_imports()

    target = write_snapshot(resolved, str(tmp_path / "snapshot.json"))
    data = json.loads(target.read_text(encoding="utf-8"))

    assert data["values"]["arcella.level"]["value"] == "warn"
    assert read_snapshot(str(target)) == data


def test_unsupported_extension_is_rejected(tmp_path: Path, resolved):
    _require_imports()

    with pytest.raises(UnsupportedSnapshotFormatError):
        write_snapshot(resolved, str(tmp_path / "snapshot.toml"))

    assert not (tmp_path / "snapshot.toml").exists()
