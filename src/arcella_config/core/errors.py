# src/arcella_config/core/errors.py
"""
Exceções canônicas do Arcella Config.

Este módulo define a hierarquia oficial de exceções **fatais** da resolução
de configuração. Tudo o que não está aqui é não fatal e é reportado como
warning (ver `core.config.warnings`).

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Cada exceção carrega o contexto mínimo para diagnóstico (path, chave)
    - Nenhuma exceção é usada para rejeições de merge

Invariantes:
    - Todas as exceções herdam de `ConfigError`
    - Falhas fatais interrompem a carga inteira; nenhum resultado parcial é retornado

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não registra eventos
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ConfigError(Exception):
    """
    Exceção base para erros fatais de configuração.

    Esta hierarquia permite:
        - captura genérica de falhas de resolução
        - distinção clara entre falhas fatais e warnings acumulados
    """


class InternalError(ConfigError):
    """Invariante interna violada (ex.: arquivo principal sem índice)."""


class ConfigFileReadError(ConfigError):
    """
    Um arquivo nomeado e esperado existe na lista resolvida mas não pôde ser lido.

    Decisões arquiteturais:
        - Falha de leitura é fatal (permissão, I/O, listagem de diretório)
        - Alvos de include *ausentes* não passam por aqui; viram warning

    Atributos:
        path: caminho que falhou.
    """

    def __init__(self, path: Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"Falha ao ler arquivo de configuração: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ConfigParseError(ConfigError):
    """
    Conteúdo TOML malformado ou não decodificável como UTF-8.

    Atributos:
        path: arquivo de origem (None para conteúdo embutido).
    """

    def __init__(self, path: Optional[Path], reason: str) -> None:
        self.path = Path(path) if path is not None else None
        self.reason = reason
        origin = str(self.path) if self.path is not None else "<embedded>"
        super().__init__(f"TOML inválido em {origin}: {reason}")


class UnsupportedValueTypeError(ConfigError):
    """
    Valor escalar sem variante correspondente no modelo (ex.: datetime).

    Decisões arquiteturais:
        - Tipos não representáveis nunca são coagidos silenciosamente
        - A carga do documento inteiro é abortada

    Atributos:
        key: chave pontuada onde o valor foi encontrado.
        type_name: nome do tipo Python rejeitado.
    """

    def __init__(self, key: str, type_name: str) -> None:
        self.key = key
        self.type_name = type_name
        super().__init__(f"Tipo de valor não suportado em '{key}': {type_name}")


class MissingConfigKeyError(ConfigError):
    """Chave bem conhecida ausente da configuração final."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Chave obrigatória ausente na configuração: '{key}'")


class InvalidConfigValueError(ConfigError):
    """Chave bem conhecida presente, mas com variante de valor inesperada."""

    def __init__(self, key: str, expected: str, actual: str) -> None:
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Valor inválido para '{key}': esperado {expected}, recebido {actual}"
        )


class ConfigIntegrityError(ConfigError):
    """Um arquivo carregado foi alterado ou removido após a resolução."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Integridade violada para {self.path}: {reason}")


class UnsupportedSnapshotFormatError(ConfigError):
    """Extensão de snapshot não suportada (v1: YAML/JSON)."""
