# src/construct_mixins/core/mixins/mixin.py
"""
Contrato canônico de Mixin.

Este módulo define o protocolo formal que qualquer mixin deve satisfazer
para ser aplicado pelo `MixinApplicator`, e a classe base abstrata que
oferece os defaults do contrato.

Um mixin é uma unidade reutilizável de configuração transversal: ele
decide *se* suporta um nó (`supports`) e *como* modificá-lo (`apply_to`).
O motor decide apenas *quais* nós visitar e *em que ordem*.

Responsabilidades de um mixin:
    - responder `supports(node)` de forma pura e idempotente
    - mutar o nó em `apply_to(node)` (propriedades, filhos, dependências)

Princípios fundamentais:
    - Mixins não conhecem o Applicator nem os seletores
    - Mixins não gravam metadados de proveniência (o motor grava)
    - Conformidade é garantida por duck typing (@runtime_checkable)
    - Identidade "é um Mixin" é verificada por marcador, não por herança

Invariantes:
    - `apply_to` só é chamado em nós para os quais `supports` retornou True
    - Um mesmo mixin pode ser reaplicado em várias árvores e várias chamadas

Limites explícitos:
    - Não garante idempotência de `apply_to` (responsabilidade do autor)
    - Não define retry ou rollback
"""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from typing import Any, Protocol, runtime_checkable

from construct_mixins.core.tree.construct import IConstruct


# Instâncias marcadas na construção. O marcador fica fora do `__dict__` da
# instância, então não aparece em `vars()` nem em serializações.
_MARKED: "weakref.WeakSet[Any]" = weakref.WeakSet()


def _mark(x: Any) -> None:
    _MARKED.add(x)


@runtime_checkable
class IMixin(Protocol):
    """
    Contrato canônico de um mixin.

    Qualquer objeto com `supports` e `apply_to` é aceito pelo Applicator;
    não há exigência de herdar de `Mixin`.

    Decisões arquiteturais:
        - O protocolo não impõe herança, apenas conformidade estrutural
        - `supports` pode sondar capacidades (ex.: "o nó expõe X?") em vez
          de comparar tipos exatos

    Limites explícitos:
        - Não registra metadados
        - Não controla a ordem de aplicação
    """

    def supports(self, construct: IConstruct) -> bool:
        """Predicado puro: este mixin se aplica ao nó?"""
        ...

    def apply_to(self, construct: IConstruct) -> None:
        """Aplica a mutação a um nó previamente aceito por `supports`."""
        ...


class Mixin(ABC):
    """
    Classe base abstrata para mixins com implementações default.

    Subclasses devem chamar `super().__init__()` para receber o marcador
    que `Mixin.is_mixin` reconhece. `supports` aceita qualquer nó por
    padrão.

    Um mixin pode declarar sua origem via atributo de classe `FQN`; na
    ausência dele, a origem é `modulo.NomeQualificado` da classe.
    """

    FQN: Any = None

    def __init__(self) -> None:
        _mark(self)

    @staticmethod
    def is_mixin(x: Any) -> bool:
        """True se `x` foi construído por uma classe que inicializou `Mixin`."""
        return is_mixin(x)

    def supports(self, construct: IConstruct) -> bool:
        return True

    @abstractmethod
    def apply_to(self, construct: IConstruct) -> None:
        ...


def is_mixin(x: Any) -> bool:
    """Verifica o marcador oculto; classes (não instâncias) nunca são mixins."""
    if x is None or isinstance(x, type):
        return False
    try:
        return x in _MARKED
    except TypeError:
        # instâncias sem hash ou sem suporte a weakref nunca são marcadas
        return False


def is_mixin_like(x: Any) -> bool:
    """Conformidade estrutural com `IMixin` (métodos chamáveis)."""
    return (
        not isinstance(x, type)
        and callable(getattr(x, "supports", None))
        and callable(getattr(x, "apply_to", None))
    )
