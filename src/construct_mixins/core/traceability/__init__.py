# src/construct_mixins/core/traceability/__init__.py
"""
Pacote de rastreabilidade (proveniência) do construct-mixins.

API pública exposta:
    - ProvenanceRecorder  → grava `{"mixin": fqn | "*"}` no nó alvo
    - MetadataRecord      → registro (mixin, path)
    - collect_provenance  → consolida os registros de uma árvore
    - ProvenanceReport    → relatório serializável
    - save_report / load_report → persistência JSON determinística

Decisões arquiteturais:
    - Nenhum registro é emitido implicitamente fora do Applicator
    - Origens fora da allow-list são gravadas como `*`
"""

from .metadata import (
    DEFAULT_ALLOWED_FQN_PREFIXES,
    MIXIN_METADATA_KEY,
    REDACTED,
    MetadataRecord,
    ProvenanceRecorder,
    declared_origin,
    narrow_allowed_prefixes,
)
from .report import ProvenanceReport, collect_provenance, load_report, save_report

__all__ = [
    "DEFAULT_ALLOWED_FQN_PREFIXES",
    "MIXIN_METADATA_KEY",
    "REDACTED",
    "MetadataRecord",
    "ProvenanceRecorder",
    "ProvenanceReport",
    "collect_provenance",
    "declared_origin",
    "load_report",
    "narrow_allowed_prefixes",
    "save_report",
]
