# tests/core/config/test_hashing.py
"""
Testes do hashing de configuração.

Os testes asseguram que:
- configurações equivalentes produzem o mesmo hash
- o hash é independente da ordem das chaves
- o algoritmo corresponde ao SHA-256 do JSON canônico
- o hash da configuração resolvida muda quando um valor muda
- o hash segue a igualdade das variantes de valor (Float ±0 e NaN,
  TypedError distinto de Map)

Invariantes:
    - O hash retornado possui 64 caracteres
    - O cálculo não depende de estado externo
"""

import hashlib
import json
from pathlib import Path

import pytest

try:
    from arcella_config.core.config.hashing import compute_config_hash
    from arcella_config.core.config.loader import load_config
    from arcella_config.core.config.resolved import ResolvedConfig
    from arcella_config.core.value.types import Float, Map, String, TypedError
except Exception as e:  # noqa: BLE001
    compute_config_hash = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _canonical_json_bytes(obj: dict) -> bytes:
    """Referência explícita de "JSON canônico" usada apenas nos testes."""
    s = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing hashing module. Implement:\n"
            "- src/arcella_config/core/config/hashing.py (compute_config_hash)\n"
            "Policy expected: SHA-256 of canonical JSON serialization.\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_hash_is_deterministic():
    _require_imports()

    h1 = compute_config_hash({"arcella.b": 2, "arcella.a": 1})
    h2 = compute_config_hash({"arcella.a": 1, "arcella.b": 2})

    assert h1 == h2
    assert isinstance(h1, str)
    assert len(h1) == 64


def test_hash_matches_sha256_of_canonical_json():
    _require_imports()

    cfg = {"arcella.log.level": "info", "arcella.custom.nome": "configuração", "arcella.ports": [1, 2]}
    expected = hashlib.sha256(_canonical_json_bytes(cfg)).hexdigest()

    assert compute_config_hash(cfg) == expected


def test_hash_rejects_non_mapping():
    _require_imports()

    with pytest.raises(TypeError):
        compute_config_hash(["arcella.level", "info"])


def test_resolved_config_hash_tracks_values(tmp_path: Path, write_toml, default_schema_toml):
    """
    Verifica que o hash da configuração resolvida depende só dos valores.

    Invariantes:
        - Duas resoluções da mesma árvore produzem o mesmo hash
        - Alterar um valor aplicado altera o hash
    """
    _require_imports()

    main = write_toml("main.toml", 'level = "warn"\n')
    first = load_config(main_path=str(main), default_content=default_schema_toml)
    again = load_config(main_path=str(main), default_content=default_schema_toml)

    write_toml("main.toml", 'level = "debug"\n')
    changed = load_config(main_path=str(main), default_content=default_schema_toml)

    assert first.config_hash == again.config_hash
    assert first.config_hash != changed.config_hash
    assert first.config_hash == compute_config_hash(
        {key: first.get(key) for key in first.keys()}
    )


def _resolved_with(value):
    return ResolvedConfig(values={"arcella.x": (value, 1)})


def test_equal_floats_hash_equally():
    """
    Verifica que o hash respeita a igualdade de `Float`.

    Invariantes:
        - `Float(-0.0) == Float(0.0)` implica hashes iguais
        - NaNs distintos em bits continuam iguais, inclusive no hash
    """
    _require_imports()

    positive = _resolved_with(Float(0.0))
    negative = _resolved_with(Float(-0.0))

    assert positive.values == negative.values
    assert positive.config_hash == negative.config_hash
    assert _resolved_with(Float(float("nan"))).config_hash == _resolved_with(
        Float(-float("nan"))
    ).config_hash
    assert _resolved_with(Float(float("inf"))).config_hash != _resolved_with(
        Float(float("-inf"))
    ).config_hash


def test_distinct_variants_never_collide():
    """
    Verifica que variantes diferentes com o mesmo conteúdo nativo têm hashes
    diferentes.
    """
    _require_imports()

    typed_error = _resolved_with(TypedError("boom", "integer_out_of_range"))
    lookalike = _resolved_with(
        Map({"error": String("boom"), "error_type": String("integer_out_of_range")})
    )

    assert typed_error.values != lookalike.values
    assert typed_error.config_hash != lookalike.config_hash
