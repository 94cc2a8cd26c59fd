# src/construct_mixins/core/config/__init__.py

"""
Camada de configuração do construct-mixins.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (YAML/JSON)
    - Resolução da configuração final via deep-merge determinístico
    - Validação da seção `provenance` (só `allowed_prefixes`)
    - Hash canônico da configuração para rastreabilidade

Invariantes:
    - A configuração final é um dicionário puro (dict)
    - Conflitos estruturais são tratados como erro
"""

from .errors import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigTypeConflictError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .hashing import canonical_config, compute_config_hash
from .loader import DEFAULT_CONFIG, load_config, validate_config
from .merge import deep_merge, merge_layers

__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigTypeConflictError",
    "DEFAULT_CONFIG",
    "InvalidConfigRootTypeError",
    "InvalidConfigValueError",
    "UnsupportedConfigFormatError",
    "canonical_config",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "merge_layers",
    "validate_config",
]
