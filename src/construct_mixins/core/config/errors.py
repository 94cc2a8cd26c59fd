# src/construct_mixins/core/config/errors.py
"""
Exceções da camada de configuração do construct-mixins.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Erros estruturais de configuração são fatais (sem fallback)

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção aqui representa falha de aplicação de mixin
"""


class ConfigError(Exception):
    """Base para erros de carregamento, validação e merge de configuração."""


class ConfigFileNotFoundError(ConfigError):
    """
    Arquivo de configuração informado explicitamente não existe.

    Decisões arquiteturais:
        - Um caminho de defaults informado é obrigatório
        - Um caminho local ausente é ignorado (override opcional)
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Extensão de arquivo não suportada.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """O conteúdo raiz do arquivo não é um mapa chave-valor."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"provenance": {"allowed_prefixes": [...]}}
        - override: {"provenance": "off"}
    """


class InvalidConfigValueError(ConfigError):
    """Valor com tipo inválido para uma chave conhecida (ex.: prefixos não-string)."""
