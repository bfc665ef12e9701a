# tests/core/config/test_runtime.py
"""
Testes da leitura de chaves bem conhecidas (core.config.runtime).

Os testes asseguram que:
- o schema padrão embutido fornece todos os caminhos do runtime
- chave ausente ou com variante errada impede a extração
"""

from pathlib import Path

import pytest

try:
    from arcella_config.core.config.loader import load_config
    from arcella_config.core.config.runtime import RuntimePaths
    from arcella_config.core.errors import InvalidConfigValueError, MissingConfigKeyError
except Exception as e:  # noqa: BLE001
    RuntimePaths = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing runtime module. Implement:\n"
            "- src/arcella_config/core/config/runtime.py (RuntimePaths)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_builtin_defaults_provide_runtime_paths(tmp_path: Path, write_toml):
    _require_imports()

    main = write_toml("arcella.toml", '[cache]\ndir = "/var/cache/arcella"\n')
    resolved = load_config(main_path=str(main))

    paths = RuntimePaths.from_config(resolved, base_dir=tmp_path)

    assert paths.log_dir == tmp_path / "log"
    assert paths.modules_dir == tmp_path / "modules"
    assert paths.cache_dir == Path("/var/cache/arcella")
    assert paths.socket_path == tmp_path / "alme.sock"


def test_paths_are_returned_as_is_without_base_dir(tmp_path: Path, write_toml):
    _require_imports()

    resolved = load_config(main_path=str(write_toml("arcella.toml", "")))

    assert RuntimePaths.from_config(resolved).log_dir == Path("log")


def test_wrong_variant_is_rejected(tmp_path: Path, write_toml):
    _require_imports()

    main = write_toml("arcella.toml", "[log]\ndir = 5\n")
    resolved = load_config(main_path=str(main))

    with pytest.raises(InvalidConfigValueError) as exc:
        RuntimePaths.from_config(resolved)

    assert exc.value.key == "arcella.log.dir"
    assert exc.value.actual == "Integer"


def test_missing_key_is_rejected(tmp_path: Path, write_toml):
    _require_imports()

    main = write_toml("arcella.toml", "")
    resolved = load_config(
        main_path=str(main),
        default_content='[log]\ndir = "log"\n[modules]\ndir = "modules"\n',
    )

    with pytest.raises(MissingConfigKeyError) as exc:
        RuntimePaths.from_config(resolved)

    assert exc.value.key == "arcella.cache.dir"
