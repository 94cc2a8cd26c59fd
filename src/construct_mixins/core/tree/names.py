# src/construct_mixins/core/tree/names.py
"""
Nomes determinísticos derivados do path de um construct.

Política de nomes (v1):
    - `unique_id`: parte humana alfanumérica + sufixo hash MD5 (8 chars, maiúsculo)
    - `unique_resource_name`: minúsculo, segmentos unidos por separador,
      limitado a `max_length` e terminado pelo hash do path
    - Componentes `Default` não participam do nome nem do hash
    - Componentes `Resource` são omitidos apenas da parte humana

Invariantes:
    - O mesmo path sempre produz o mesmo nome
    - Paths diferentes produzem hashes diferentes (salvo colisão MD5)
"""

from __future__ import annotations

import hashlib
import re
from typing import TYPE_CHECKING, List

from construct_mixins.core.exceptions import ConstructTreeError

if TYPE_CHECKING:
    from .construct import Construct


HIDDEN_ID = "Default"
HIDDEN_FROM_HUMAN_ID = "Resource"
HASH_LEN = 8
MAX_HUMAN_LEN = 240

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def _components(construct: "Construct") -> List[str]:
    components = [c for c in construct.node.path.split("/") if c]
    if not components:
        raise ConstructTreeError(
            "Unable to compute a unique name for the root construct",
            details={"path": construct.node.path},
        )
    return [c for c in components if c != HIDDEN_ID]


def _path_hash(components: List[str]) -> str:
    digest = hashlib.md5("/".join(components).encode("utf-8")).hexdigest()
    return digest[:HASH_LEN].upper()


def unique_id(construct: "Construct") -> str:
    """
    Identificador alfanumérico único derivado do path.

    Um construct de primeiro nível (path com um único componente) usa o
    próprio id sanitizado, sem hash.
    """
    components = _components(construct)
    if len(components) == 1:
        candidate = _NON_ALNUM.sub("", components[0])
        if candidate and len(candidate) <= MAX_HUMAN_LEN:
            return candidate

    human = "".join(
        _NON_ALNUM.sub("", c) for c in components if c != HIDDEN_FROM_HUMAN_ID
    )
    return human[:MAX_HUMAN_LEN] + _path_hash(components)


def unique_resource_name(construct: "Construct", *, max_length: int = 256, separator: str = "-") -> str:
    """
    Nome físico de recurso, minúsculo e limitado em tamanho.

    Args:
        construct: construct cujo path origina o nome.
        max_length: tamanho máximo do nome resultante.
        separator: separador entre segmentos do path.

    Raises:
        ValueError: Se `max_length` não comportar ao menos um caractere
            humano, o separador e o hash.
    """
    budget = max_length - HASH_LEN - len(separator)
    if budget < 1:
        raise ValueError(f"max_length too small for a unique resource name: {max_length}")

    components = _components(construct)
    human_parts = [
        _NON_ALNUM.sub("", c).lower() for c in components if c != HIDDEN_FROM_HUMAN_ID
    ]
    human = separator.join(p for p in human_parts if p)[:budget].rstrip(separator)
    suffix = _path_hash(components).lower()
    if not human:
        return suffix
    return f"{human}{separator}{suffix}"
