# src/arcella_config/__init__.py
"""
Arcella Config — motor de resolução de configuração em camadas.

Este pacote raiz define o namespace público do Arcella Config, responsável
por transformar uma árvore de documentos TOML em disco em um único espaço
de chaves plano, validado e com proveniência rastreável.

Princípios centrais:
    - A resolução é determinística e reprodutível
    - Problemas não fatais viram warnings acumulados, nunca exceções
    - Overrides de valores padrão exigem permissão explícita (`#redef`)
    - Cada valor final carrega o índice do arquivo que o definiu

Arquitetura em alto nível:
    - core.value  → modelo de valores e achatamento de tabelas TOML
    - core.config → includes, loader recursivo, merge, diagnóstico

Limites explícitos:
    - Não implementa parser TOML próprio
    - Não recarrega configuração em tempo de execução
    - Não cria diretórios nem templates de configuração
"""

from .core.config import (
    ConfigError,
    ResolvedConfig,
    RuntimePaths,
    load_config,
)

__all__ = ["ConfigError", "ResolvedConfig", "RuntimePaths", "load_config"]
