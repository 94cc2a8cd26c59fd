# src/construct_mixins/core/tree/construct.py
"""
Abstração de nó da árvore de constructs.

Este módulo define o contrato mínimo que um nó da árvore precisa
satisfazer para ser percorrido por seletores e receber mixins:
identidade, vínculo com o pai, filhos ordenados e um log de metadados
append-only.

Componentes principais:
    - IConstruct  → protocolo estrutural (duck typing) de um nó
    - Construct   → implementação canônica de nó com namespace `node`
    - Node        → identidade, hierarquia, metadados e dependências
    - CfnResource → nó de recurso de baixo nível (tipo wire-format)

Princípios fundamentais:
    - A identidade (`id`, `path`) é estável durante toda a vida do nó
    - O `path` é a concatenação das identidades dos ancestrais
    - A ordem de inserção dos filhos é significativa
    - Metadados são append-only: nunca são removidos nem reordenados

Invariantes:
    - Ids de irmãos são únicos dentro de um mesmo escopo
    - O `path` é único dentro da árvore
    - A raiz pode ter id vazio; nesse caso ela não aparece no `path`

Limites explícitos:
    - Não decide quais mixins aplicar
    - Não sintetiza templates
    - Não remove nós individualmente (a árvore inteira é descartada)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from construct_mixins.core.exceptions import ConstructTreeError

from .names import unique_id


PATH_SEP = "/"

# Marcador de capacidade "é recurso de baixo nível".
CFN_RESOURCE_MARKER = "__construct_mixins_cfn_resource__"

# Ids reservados para o filho padrão, em ordem de precedência.
DEFAULT_CHILD_IDS = ("Resource", "Default")


@runtime_checkable
class IConstruct(Protocol):
    """
    Contrato estrutural de um nó da árvore.

    Qualquer objeto que exponha um atributo `node` compatível com `Node`
    pode ser percorrido pelos seletores. A conformidade é verificada por
    duck typing (`@runtime_checkable`), sem herança obrigatória.
    """

    node: "Node"


@dataclass(frozen=True)
class MetadataEntry:
    """Entrada imutável do log de metadados de um nó."""

    type: str
    data: Any


class Node:
    """
    Identidade, hierarquia e metadados de um construct.

    Decisões arquiteturais:
        - O registro no pai ocorre na construção (o nó nasce já ligado)
        - Filhos são mantidos em um dict ordenado por inserção
        - Metadados são indexados por posição (log) e não por chave

    Invariantes:
        - `path` nunca muda depois da construção
        - `metadata` só cresce
        - `dependencies` preserva ordem e não contém duplicatas
    """

    def __init__(self, host: "Construct", scope: Optional["Construct"], id: str):
        if not isinstance(id, str):
            raise ConstructTreeError(
                f"construct id must be a string, got: {type(id).__name__}",
                details={"id": repr(id)},
            )
        if scope is not None and not id:
            raise ConstructTreeError(
                "Somente a raiz pode ter id vazio",
                details={"scope": scope.node.path},
            )
        if PATH_SEP in id:
            raise ConstructTreeError(
                f"Id não pode conter '{PATH_SEP}': {id}",
                details={"id": id},
                hint="Use escopos aninhados em vez de separadores no id",
            )

        self.host = host
        self.id = id
        self.scope = scope
        self._children: Dict[str, "Construct"] = {}
        self._metadata: List[MetadataEntry] = []
        self._dependencies: List["Construct"] = []
        self._default_child: Optional["Construct"] = None

        if scope is not None:
            scope.node._add_child(host, id)
            self.path = PATH_SEP.join(p for p in (scope.node.path, id) if p)
        else:
            self.path = id

    def __repr__(self) -> str:
        return f"Node(path={self.path!r})"

    # -----------------------------
    # Hierarquia
    # -----------------------------
    def _add_child(self, child: "Construct", child_id: str) -> None:
        if child_id in self._children:
            raise ConstructTreeError(
                f"There is already a construct with id '{child_id}' in {self.path or '<root>'}",
                details={"scope": self.path, "id": child_id},
            )
        self._children[child_id] = child

    @property
    def children(self) -> List["Construct"]:
        return list(self._children.values())

    @property
    def scopes(self) -> List["Construct"]:
        """Cadeia de escopos da raiz até este nó (inclusive)."""
        chain: List["Construct"] = []
        current: Optional["Construct"] = self.host
        while current is not None:
            chain.append(current)
            current = current.node.scope
        chain.reverse()
        return chain

    @property
    def root(self) -> "Construct":
        return self.scopes[0]

    def try_find_child(self, child_id: str) -> Optional["Construct"]:
        return self._children.get(child_id)

    def find_child(self, child_id: str) -> "Construct":
        child = self.try_find_child(child_id)
        if child is None:
            raise ConstructTreeError(
                f"No child with id '{child_id}' in {self.path or '<root>'}",
                details={"scope": self.path, "id": child_id},
            )
        return child

    def find_all(self) -> List["Construct"]:
        """
        Percorre a subárvore em pré-ordem (profundidade primeiro).

        O próprio nó é sempre o primeiro elemento. A travessia é
        iterativa para não depender do limite de recursão em árvores
        profundas.
        """
        out: List["Construct"] = []
        stack: List["Construct"] = [self.host]
        while stack:
            current = stack.pop()
            out.append(current)
            stack.extend(reversed(current.node.children))
        return out

    # -----------------------------
    # Default child
    # -----------------------------
    @property
    def default_child(self) -> Optional["Construct"]:
        """
        Filho padrão do nó.

        Um valor definido explicitamente tem precedência; caso contrário
        procura-se um filho com id `Resource` ou `Default`. Ter ambos é
        ambíguo e tratado como erro estrutural.
        """
        if self._default_child is not None:
            return self._default_child

        found = [self._children[cid] for cid in DEFAULT_CHILD_IDS if cid in self._children]
        if len(found) > 1:
            raise ConstructTreeError(
                f"Cannot determine default child for {self.path}: both 'Resource' and 'Default' exist",
                details={"scope": self.path},
                hint="Defina node.default_child explicitamente",
            )
        return found[0] if found else None

    @default_child.setter
    def default_child(self, value: Optional["Construct"]) -> None:
        self._default_child = value

    # -----------------------------
    # Metadados (append-only)
    # -----------------------------
    def add_metadata(self, type: str, data: Any) -> None:
        if not type:
            raise ConstructTreeError("metadata type must be a non-empty string", details={"path": self.path})
        self._metadata.append(MetadataEntry(type=type, data=data))

    @property
    def metadata(self) -> List[MetadataEntry]:
        return list(self._metadata)

    def metadata_for(self, type: str) -> List[Any]:
        return [m.data for m in self._metadata if m.type == type]

    # -----------------------------
    # Dependências explícitas
    # -----------------------------
    def add_dependency(self, *constructs: "Construct") -> None:
        for c in constructs:
            if c is self.host:
                raise ConstructTreeError("A construct cannot depend on itself", details={"path": self.path})
            if not any(d is c for d in self._dependencies):
                self._dependencies.append(c)

    @property
    def dependencies(self) -> List["Construct"]:
        return list(self._dependencies)


class Construct:
    """
    Nó canônico da árvore de constructs.

    Toda a API estrutural vive no namespace `node`, deixando o espaço de
    atributos da classe livre para propriedades de domínio.
    """

    def __init__(self, scope: Optional["Construct"], id: str):
        self.node = Node(self, scope, id)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.node.path or '<root>'!r})"

    def with_mixins(self, *mixins: Any) -> "Construct":
        """Aplica mixins a este construct e a todos os descendentes."""
        # import tardio: mixins dependem da árvore, não o contrário
        from construct_mixins.core.mixins.applicator import Mixins

        return Mixins.of(self).apply(*mixins)


class CfnResource(Construct):
    """
    Recurso de baixo nível (L1) com tipo no formato wire (`AWS::S3::Bucket`).

    Subclasses geradas costumam declarar `CFN_RESOURCE_TYPE_NAME`; nelas o
    nome da classe funciona como alias curto do tipo para seletores. Um
    `CfnResource(type=...)` genérico não tem alias.

    Atributos:
        - cfn_resource_type: tipo completo no formato wire
        - properties: propriedades de domínio (mutáveis por mixins)
    """

    CFN_RESOURCE_TYPE_NAME: Optional[str] = None

    def __init__(
        self,
        scope: Optional[Construct],
        id: str,
        *,
        type: Optional[str] = None,
        properties: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(scope, id)
        resource_type = type or self.CFN_RESOURCE_TYPE_NAME
        if not resource_type:
            raise ConstructTreeError(
                "CfnResource requires a resource type",
                details={"path": self.node.path},
            )
        self.cfn_resource_type: str = resource_type
        self.properties: Dict[str, Any] = dict(properties or {})
        setattr(self, CFN_RESOURCE_MARKER, True)

    @staticmethod
    def is_cfn_resource(x: Any) -> bool:
        """Capacidade "é recurso de baixo nível", verificada por marcador."""
        return getattr(x, CFN_RESOURCE_MARKER, False) is True

    @property
    def resource_type_alias(self) -> Optional[str]:
        """Nome da classe, só para subclasses que declaram `CFN_RESOURCE_TYPE_NAME`."""
        cls = type(self)
        if cls is CfnResource or not cls.CFN_RESOURCE_TYPE_NAME:
            return None
        return cls.__name__

    @property
    def logical_id(self) -> str:
        return unique_id(self)

    @property
    def attr_arn(self) -> str:
        return "${" + self.logical_id + ".Arn}"

