# src/construct_mixins/core/tree/__init__.py
"""
Árvore de constructs.

Este pacote define a abstração de nó consumida pelo motor de mixins:
    - construct → IConstruct, Construct, Node, CfnResource, MetadataEntry
    - names     → nomes determinísticos derivados do path (unique_id, unique_resource_name)

Limites explícitos:
    - Não conhece mixins nem seletores
    - Não sintetiza templates
"""

from .construct import (
    CfnResource,
    Construct,
    IConstruct,
    MetadataEntry,
    Node,
)
from .names import unique_id, unique_resource_name

__all__ = [
    "CfnResource",
    "Construct",
    "IConstruct",
    "MetadataEntry",
    "Node",
    "unique_id",
    "unique_resource_name",
]
