# src/arcella_config/core/config/hashing.py
"""
Hashing canônico da configuração resolvida.

O hash representa a **identidade estrutural** do mapa final de
configuração e serve para:
    - comparar resoluções entre execuções e máquinas
    - identificar snapshots de diagnóstico

Política de hashing (v1):
    - Cada `Value` vira uma forma canônica marcada pela variante
      (`{"string": ...}`, `{"map": {...}}`, ...), de modo que variantes
      distintas nunca colidem (ex.: `TypedError` vs `Map` equivalente)
    - `Float` é normalizado pela mesma ordem total de `Float.__eq__`:
      todo NaN vira "NaN", `-0.0` vira `0.0`, infinitos viram texto
    - Serialização JSON canônica (chaves ordenadas, separadores compactos)
    - `ensure_ascii=False`, codificação UTF-8
    - SHA-256, saída hexadecimal de 64 caracteres

Invariantes:
    - Mapas com valores iguais (segundo a igualdade de `Value`) produzem
      o mesmo hash; valores diferentes produzem hashes diferentes

Limites explícitos:
    - Proveniência (índices de arquivo) e warnings não participam do hash
    - Não carrega nem resolve configuração
"""

from __future__ import annotations

import hashlib
import json
import math
from typing import Any, Mapping

from arcella_config.core.value.types import (
    Array,
    Boolean,
    Float,
    Integer,
    Map,
    Null,
    String,
    TypedError,
)


def _canonical_float(value: float) -> Any:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    # -0.0 + 0.0 == 0.0
    return value + 0.0


def canonical_value(value: Any) -> Any:
    """
    Forma canônica, serializável em JSON, de um `Value`.

    Objetos que não são `Value` passam inalterados, o que permite hashear
    também mapas de objetos nativos.
    """
    if isinstance(value, Array):
        return {"array": [canonical_value(item) for item in value.items]}
    if isinstance(value, Map):
        return {"map": {k: canonical_value(v) for k, v in value.entries.items()}}
    if isinstance(value, String):
        return {"string": value.value}
    if isinstance(value, Integer):
        return {"integer": value.value}
    if isinstance(value, Float):
        return {"float": _canonical_float(value.value)}
    if isinstance(value, Boolean):
        return {"boolean": value.value}
    if isinstance(value, Null):
        return {"null": None}
    if isinstance(value, TypedError):
        return {"typed_error": {"message": value.message, "error_type": value.error_type}}
    return value


def compute_config_hash(config: Mapping[str, Any]) -> str:
    """
    Gera um hash determinístico de um mapa de configuração.

    Os valores podem ser variantes de `Value` (forma canônica marcada) ou
    objetos nativos serializáveis em JSON.

    Raises:
        TypeError: Se o objeto fornecido não for um mapeamento.
    """
    if not isinstance(config, Mapping):
        raise TypeError(
            f"Config para hashing deve ser um mapeamento, recebido: {type(config).__name__}"
        )

    canonical_json = json.dumps(
        {key: canonical_value(value) for key, value in config.items()},
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )

    return hashlib.sha256(canonical_json.encode("utf-8")).hexdigest()
