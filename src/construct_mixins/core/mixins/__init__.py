# src/construct_mixins/core/mixins/__init__.py
"""
# Mixins Core

Este pacote define o contrato de mixin, os seletores de nós e o
aplicador que os combina.

## Componentes

- **mixin**
  - `IMixin` (Protocol): `supports(node)` + `apply_to(node)`
  - `Mixin`: base abstrata com marcador oculto e `supports` default
  - `is_mixin`: verificação por marcador, sem depender de herança

- **selectors**
  - `ConstructSelector`: fábrica de seletores (all, resources_of_type,
    by_id, by_path, cfn_resource, only_itself, custom)

- **applicator**
  - `Mixins.of(scope, selector)` → `MixinApplicator`
  - `MixinApplicator.apply(...)` / `must_apply(...)`

## Invariantes

- O seletor é avaliado uma vez por chamada `apply`
- Mixins rodam na ordem do chamador; nós na ordem do seletor
- Cada aplicação bem-sucedida grava exatamente um registro de proveniência
"""

from .applicator import MixinApplicator, Mixins
from .mixin import IMixin, Mixin, is_mixin
from .selectors import ConstructSelector, FilterSelector, IConstructSelector

__all__ = [
    "ConstructSelector",
    "FilterSelector",
    "IConstructSelector",
    "IMixin",
    "Mixin",
    "MixinApplicator",
    "Mixins",
    "is_mixin",
]
