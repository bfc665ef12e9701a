# tests/conftest.py
"""
Fixtures compartilhados para testes do Arcella Config.

Este módulo define fixtures reutilizáveis que fornecem:
- um schema padrão mínimo e determinístico (TOML em string)
- uma fábrica de arquivos TOML sob `tmp_path`

Decisões arquiteturais:
    - Conteúdo TOML é fornecido como string; a escrita em disco fica
      explícita em cada teste via `write_toml`
    - O schema padrão de teste é pequeno para que cada chave tenha
      um propósito claro nos cenários de merge

Invariantes:
    - Nenhuma fixture depende de arquivos fora de `tmp_path`
    - Nenhuma fixture contém lógica de resolução

Limites explícitos:
    - Não substituir testes de integração com o schema padrão real
"""

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture
def default_schema_toml() -> str:
    """
    Schema padrão reduzido usado nos cenários de merge.

    Sob o prefixo `arcella` ele define:
        - arcella.level = "info"
        - arcella.server.host / arcella.server.port
        - arcella.log.dir, arcella.modules.dir, arcella.cache.dir,
          arcella.alme.socket.path (chaves lidas pelo bootstrap)
    """
    return (
        'level = "info"\n'
        "\n"
        "[server]\n"
        'host = "127.0.0.1"\n'
        "port = 8080\n"
        "\n"
        "[log]\n"
        'dir = "log"\n'
        "\n"
        "[modules]\n"
        'dir = "modules"\n'
        "\n"
        "[cache]\n"
        'dir = "cache"\n'
        "\n"
        "[alme.socket]\n"
        'path = "alme.sock"\n'
    )


@pytest.fixture
def write_toml(tmp_path: Path) -> Callable[[str, str], Path]:
    """
    Fábrica que grava `content` em `tmp_path / relpath` e devolve o caminho.

    Diretórios intermediários são criados quando necessário.
    """

    def _write(relpath: str, content: str) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
