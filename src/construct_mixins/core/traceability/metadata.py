# src/construct_mixins/core/traceability/metadata.py
"""
Registro de proveniência de mixins.

Cada aplicação bem-sucedida de um mixin grava exatamente um registro de
metadados no nó alvo, identificando *qual* mixin o tocou. A identidade
só é registrada literalmente quando a origem declarada do mixin começa
com um prefixo de namespace confiável; caso contrário grava-se o
sentinela de redação `"*"`.

Decisões arquiteturais:
    - A allow-list é uma tupla imutável injetada na construção
    - A chave de metadados é fixa (`MIXIN_METADATA_KEY`)
    - Configuração externa só estreita a allow-list embutida
    - A verificação é um match de prefixo puro (sem I/O, sem exceções)
    - A proveniência serve a análises agregadas, não à identificação de
      código de terceiros: origens desconhecidas nunca vazam literalmente

Invariantes:
    - Um registro por chamada a `record`
    - O valor gravado é sempre `{"mixin": <fqn confiável | "*">}`

Limites explícitos:
    - Não aplica mixins
    - Não persiste nada (ver `report` para exportação)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple


logger = logging.getLogger(__name__)

MIXIN_METADATA_KEY = "aws:cdk:analytics:mixin"
REDACTED = "*"

DEFAULT_ALLOWED_FQN_PREFIXES: Tuple[str, ...] = (
    # pacotes deste projeto
    "construct_mixins.",
    # bibliotecas de constructs conhecidas
    "aws_cdk.",
    "aws_cdk_lib.",
    "cdklabs.",
    "cdk8s.",
    "aws_rfdk.",
    "aws_solutions_constructs.",
    "aws_solutions_konstruk.",
    "aws_cdk_containers.",
    "amzn.",
)


@dataclass(frozen=True)
class MetadataRecord:
    """Registro de proveniência: qual mixin (ou `*`) tocou qual path."""

    mixin: str
    path: str

    def to_dict(self) -> Dict[str, str]:
        return {"mixin": self.mixin, "path": self.path}


def declared_origin(mixin: Any) -> Optional[str]:
    """
    Origem declarada de um mixin.

    Usa o atributo de classe `FQN` quando definido; senão
    `modulo.NomeQualificado` da classe do mixin.
    """
    cls = type(mixin)
    fqn = getattr(cls, "FQN", None)
    if isinstance(fqn, str) and fqn:
        return fqn
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", None)
    if not module or not qualname:
        return None
    return f"{module}.{qualname}"


def narrow_allowed_prefixes(
    configured: Iterable[str],
    trusted: Iterable[str] = DEFAULT_ALLOWED_FQN_PREFIXES,
) -> Tuple[str, ...]:
    """
    Restringe uma allow-list vinda de configuração aos namespaces confiáveis.

    Um prefixo configurado só é mantido quando está contido em algum prefixo
    embutido (ex.: `construct_mixins.services.` dentro de `construct_mixins.`).
    A configuração pode apenas estreitar a allow-list, nunca ampliá-la.

    Example:
        >>> narrow_allowed_prefixes(["aws_cdk.aws_s3.", "thirdparty."])
        ('aws_cdk.aws_s3.',)
    """
    trusted = tuple(trusted)
    kept = []
    for prefix in configured:
        if any(prefix.startswith(t) for t in trusted):
            if prefix not in kept:
                kept.append(prefix)
        else:
            logger.warning("Ignoring provenance prefix outside trusted namespaces: %s", prefix)
    return tuple(kept)


class ProvenanceRecorder:
    """Grava metadados de proveniência em nós que receberam mixins."""

    def __init__(self, allowed_prefixes: Iterable[str] = DEFAULT_ALLOWED_FQN_PREFIXES) -> None:
        self._allowed_prefixes: Tuple[str, ...] = tuple(allowed_prefixes)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "ProvenanceRecorder":
        """
        Constrói o recorder a partir da seção `provenance` da configuração resolvida.

        `provenance.allowed_prefixes` passa por `narrow_allowed_prefixes`:
        prefixos fora dos namespaces embutidos são descartados.
        """
        section = (config or {}).get("provenance", {}) or {}
        configured = section.get("allowed_prefixes", DEFAULT_ALLOWED_FQN_PREFIXES)
        return cls(narrow_allowed_prefixes(configured))

    @property
    def allowed_prefixes(self) -> Tuple[str, ...]:
        return self._allowed_prefixes

    def resolve_identity(self, mixin: Any) -> str:
        fqn = declared_origin(mixin)
        if fqn and any(fqn.startswith(prefix) for prefix in self._allowed_prefixes):
            return fqn
        return REDACTED

    def record(self, construct: Any, mixin: Any) -> MetadataRecord:
        identity = self.resolve_identity(mixin)
        construct.node.add_metadata(MIXIN_METADATA_KEY, {"mixin": identity})
        return MetadataRecord(mixin=identity, path=construct.node.path)
