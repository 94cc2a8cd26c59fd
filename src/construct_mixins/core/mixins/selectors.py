# src/construct_mixins/core/mixins/selectors.py
"""
Seletores de constructs.

Um seletor é uma função pura `select(scope) -> List[construct]`: não tem
efeitos colaterais, não é dono dos nós e pode ser reavaliado quantas
vezes for necessário. A composição é feita envolvendo seletores em
`FilterSelector` (filtro sobre outro seletor) ou `CustomSelector`.

Seletores disponíveis (via `ConstructSelector`):
    - all()                 → pré-ordem completa, incluindo o escopo
    - resources_of_type(t)  → CfnResources cujo tipo wire ou alias casa com `t`
    - by_id(glob)           → id local casa com o glob (`*` apenas)
    - by_path(glob)         → path completo casa com o glob (`*` e `**`)
    - cfn_resource()        → o próprio nó, ou seu default child, se for CfnResource
    - only_itself()         → apenas o nó informado
    - custom(fn)            → qualquer função `scope -> iterable`

Sintaxe de glob:
    - `*`  casa qualquer sequência (possivelmente vazia) dentro de um segmento
    - `**` casa qualquer sequência atravessando segmentos (somente by_path)
    - nenhum outro caractere é especial

Invariantes:
    - Padrões malformados falham na construção do seletor (SelectorError)
    - Glob sem correspondência produz lista vazia, nunca erro
    - A ordem do resultado é a ordem da travessia em pré-ordem
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Pattern, Protocol, Union, runtime_checkable

from construct_mixins.core.exceptions import SelectorError
from construct_mixins.core.tree.construct import CfnResource, PATH_SEP


@runtime_checkable
class IConstructSelector(Protocol):
    """Contrato estrutural de um seletor."""

    def select(self, scope: Any) -> List[Any]:
        ...


# ---------------------------------------------------------------------------
# Glob
# ---------------------------------------------------------------------------

_STAR_RUN = re.compile(r"(\*+)")


def _require_pattern(pattern: Any) -> str:
    if not isinstance(pattern, str) or not pattern:
        raise SelectorError(
            "Glob pattern must be a non-empty string",
            details={"pattern": repr(pattern)},
        )
    return pattern


def compile_id_glob(pattern: str) -> Pattern[str]:
    """
    Compila um glob de id local.

    Raises:
        SelectorError: padrão vazio, com `**` ou com separador de path.
    """
    pattern = _require_pattern(pattern)
    if "**" in pattern:
        raise SelectorError(
            f"'**' is only valid in path patterns: {pattern}",
            details={"pattern": pattern},
            hint="Use by_path() para casar através de segmentos",
        )
    if PATH_SEP in pattern:
        raise SelectorError(
            f"Id patterns cannot contain '{PATH_SEP}': {pattern}",
            details={"pattern": pattern},
            hint="Use by_path() para padrões com segmentos",
        )
    body = "".join(
        "[^/]*" if token == "*" else re.escape(token)
        for token in _STAR_RUN.split(pattern)
        if token
    )
    return re.compile(f"^{body}$")


def compile_path_glob(pattern: str) -> Pattern[str]:
    """
    Compila um glob de path completo.

    Raises:
        SelectorError: padrão vazio, com três ou mais `*` seguidos, com
            segmentos vazios ou com `/` no início ou no fim.
    """
    pattern = _require_pattern(pattern)
    if pattern.startswith(PATH_SEP) or pattern.endswith(PATH_SEP) or PATH_SEP * 2 in pattern:
        raise SelectorError(
            f"Path pattern has an empty segment: {pattern}",
            details={"pattern": pattern},
        )

    parts: List[str] = []
    for token in _STAR_RUN.split(pattern):
        if not token:
            continue
        if token == "*":
            parts.append("[^/]*")
        elif token == "**":
            parts.append(".*")
        elif token.startswith("*"):
            raise SelectorError(
                f"Invalid wildcard run '{token}' in path pattern: {pattern}",
                details={"pattern": pattern, "token": token},
            )
        else:
            parts.append(re.escape(token))
    return re.compile("^" + "".join(parts) + "$")


# ---------------------------------------------------------------------------
# Seletores concretos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AllSelector:
    """Todos os nós alcançáveis a partir do escopo, em pré-ordem."""

    def select(self, scope: Any) -> List[Any]:
        return scope.node.find_all()


@dataclass(frozen=True)
class FilterSelector:
    """Filtra o resultado de outro seletor (por padrão, `AllSelector`)."""

    predicate: Callable[[Any], bool]
    base: Optional[IConstructSelector] = None

    def select(self, scope: Any) -> List[Any]:
        source = self.base if self.base is not None else AllSelector()
        return [c for c in source.select(scope) if self.predicate(c)]


@dataclass(frozen=True)
class CfnResourceSelector:
    """O próprio nó se for CfnResource; senão seu default child, se for."""

    def select(self, scope: Any) -> List[Any]:
        if CfnResource.is_cfn_resource(scope):
            return [scope]
        child = scope.node.default_child
        if child is not None and CfnResource.is_cfn_resource(child):
            return [child]
        return []


@dataclass(frozen=True)
class OnlyItselfSelector:
    def select(self, scope: Any) -> List[Any]:
        return [scope]


@dataclass(frozen=True)
class CustomSelector:
    fn: Callable[[Any], Iterable[Any]]

    def select(self, scope: Any) -> List[Any]:
        return list(self.fn(scope))


def _matches_resource_type(type_name: str) -> Callable[[Any], bool]:
    def predicate(construct: Any) -> bool:
        if not CfnResource.is_cfn_resource(construct):
            return False
        return type_name in (
            getattr(construct, "cfn_resource_type", None),
            getattr(construct, "resource_type_alias", None),
        )

    return predicate


class ConstructSelector:
    """Fábrica dos seletores canônicos."""

    @staticmethod
    def all() -> IConstructSelector:
        return AllSelector()

    @staticmethod
    def resources_of_type(type_name: Union[str, type]) -> IConstructSelector:
        """
        Seleciona CfnResources de um tipo.

        Aceita o tipo wire (`AWS::S3::Bucket`), o alias curto (nome de uma
        classe que declara `CFN_RESOURCE_TYPE_NAME`, ex.: `CfnBucket`) ou a
        própria classe.
        """
        if isinstance(type_name, type):
            cls = type_name
            return FilterSelector(lambda c: CfnResource.is_cfn_resource(c) and isinstance(c, cls))
        if not isinstance(type_name, str) or not type_name:
            raise SelectorError(
                "Resource type must be a non-empty string or a class",
                details={"type_name": repr(type_name)},
            )
        return FilterSelector(_matches_resource_type(type_name))

    @staticmethod
    def by_id(pattern: str) -> IConstructSelector:
        regex = compile_id_glob(pattern)
        return FilterSelector(lambda c: regex.match(c.node.id) is not None)

    @staticmethod
    def by_path(pattern: str) -> IConstructSelector:
        regex = compile_path_glob(pattern)
        return FilterSelector(lambda c: regex.match(c.node.path) is not None)

    @staticmethod
    def cfn_resource() -> IConstructSelector:
        return CfnResourceSelector()

    @staticmethod
    def only_itself() -> IConstructSelector:
        return OnlyItselfSelector()

    @staticmethod
    def custom(fn: Callable[[Any], Iterable[Any]]) -> IConstructSelector:
        return CustomSelector(fn)
