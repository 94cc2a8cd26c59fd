# src/construct_mixins/core/config/hashing.py
"""
Impressão digital da configuração efetiva.

Relatórios de proveniência carregam este hash em `inputs.config_hash`,
o que permite saber se dois relatórios foram coletados sob a mesma
allow-list.

Política (v1):
    - forma canônica: JSON com chaves ordenadas, sem espaços, UTF-8 literal
    - digest: SHA-256 em hexadecimal (64 caracteres)
"""

import hashlib
import json
from typing import Any, Dict


def canonical_config(config: Dict[str, Any]) -> str:
    """Forma textual canônica usada no hash; a ordem das chaves não importa."""
    if not isinstance(config, dict):
        raise TypeError(
            f"Config para hashing deve ser dict, recebido: {type(config).__name__}"
        )
    return json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    SHA-256 da forma canônica de `config`.

    Raises:
        TypeError: Se `config` não for um dicionário.
    """
    digest = hashlib.sha256()
    digest.update(canonical_config(config).encode("utf-8"))
    return digest.hexdigest()
