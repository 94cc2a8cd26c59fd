# src/construct_mixins/__init__.py
"""
construct-mixins — aplicação de configuração transversal em árvores de constructs.

Um mixin é uma unidade reutilizável de configuração aplicada a todos os
nós que a suportam. O pacote seleciona os nós alvo via seletores
componíveis, aplica os mixins na ordem do chamador e grava metadados de
proveniência para cada aplicação.

Arquitetura em alto nível:
    - core.tree         → nós, paths, metadados e nomes únicos
    - core.mixins       → contrato de mixin, seletores e applicator
    - core.traceability → proveniência por nó e relatório consolidado
    - core.config       → configuração (YAML/JSON, merge, hash)
    - services.logs     → mixins de entrega de logs vendidos

Exemplo:
    Mixins.of(stack, ConstructSelector.resources_of_type("AWS::S3::Bucket")).apply(mixin)

Limites explícitos:
    - Não é um framework de injeção de dependências
    - Não persiste a árvore
    - Não decide o que um mixin faz com o nó
"""

from construct_mixins.core.exceptions import (
    ApplyFailure,
    ConstructMixinError,
    ConstructTreeError,
    MixinNotAppliedError,
    SelectorError,
    SupportCheckFailure,
    UnresolvableSource,
)
from construct_mixins.core.mixins import (
    ConstructSelector,
    IConstructSelector,
    IMixin,
    Mixin,
    MixinApplicator,
    Mixins,
    is_mixin,
)
from construct_mixins.core.traceability import ProvenanceRecorder, collect_provenance
from construct_mixins.core.tree import CfnResource, Construct, IConstruct

__version__ = "0.1.0"

__all__ = [
    "ApplyFailure",
    "CfnResource",
    "Construct",
    "ConstructMixinError",
    "ConstructSelector",
    "ConstructTreeError",
    "IConstruct",
    "IConstructSelector",
    "IMixin",
    "Mixin",
    "MixinApplicator",
    "MixinNotAppliedError",
    "Mixins",
    "ProvenanceRecorder",
    "SelectorError",
    "SupportCheckFailure",
    "UnresolvableSource",
    "__version__",
    "collect_provenance",
    "is_mixin",
]
