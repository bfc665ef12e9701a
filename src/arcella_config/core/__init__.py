# src/arcella_config/core/__init__.py
"""
Core do Arcella Config.

Componentes principais:
    - value  → variantes de valor e achatamento de documentos em chaves pontuadas
    - config → resolução de includes, loader recursivo, merge em camadas,
               hashing, snapshot de diagnóstico e verificação de integridade

Princípios fundamentais:
    - Nenhuma decisão silenciosa: toda rejeição gera um warning explícito
    - Estado de carga é explícito e isolado por execução
    - Ordenação sempre determinística, independente do filesystem

Este pacote existe como a fonte de verdade da resolução de configuração.
"""
