# src/construct_mixins/core/traceability/report.py
"""
Relatório de proveniência — consolidação dos metadados de mixins de uma árvore.

Este módulo percorre uma árvore já processada e reúne, de forma
determinística e auditável, todos os registros de proveniência gravados
pelo `ProvenanceRecorder`.

O relatório consolida:
    - metadados da coleta (raiz, timestamp, versão do pacote)
    - hash da configuração usada (allow-list efetiva)
    - registros na ordem da travessia (pré-ordem) e, dentro de um nó,
      na ordem de gravação
    - contagem de aplicações por identidade de mixin

Princípios fundamentais:
    - A coleta não muta a árvore
    - O formato de persistência é JSON determinístico
    - O relatório é reconstruível (round-trip via `to_dict`/`from_dict`)

Limites explícitos:
    - Não aplica mixins
    - Não sintetiza templates nem envia telemetria
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from construct_mixins.core.config.hashing import compute_config_hash

from .metadata import MIXIN_METADATA_KEY, MetadataRecord


REPORT_VERSION = "1"


def _iso(dt: datetime) -> str:
    """Normaliza para UTC (timestamps naive são assumidos UTC) e formata em ISO 8601."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat()


@dataclass
class ProvenanceReport:
    """
    Registro consolidado de proveniência de uma árvore.

    Campos principais:
        - run: metadados da coleta (root, collected_at, report_version)
        - inputs: hash da configuração e chave de metadados usada
        - records: lista ordenada de `{"mixin", "path"}`
        - summary: aplicações por identidade de mixin

    Invariantes:
        - `records` preserva a ordem da travessia
        - `summary` é sempre derivável de `records`
    """

    run: Dict[str, Any]
    inputs: Dict[str, Any]
    records: List[Dict[str, str]] = field(default_factory=list)
    summary: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "run": dict(self.run),
            "inputs": dict(self.inputs),
            "records": [dict(r) for r in self.records],
            "summary": dict(self.summary),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProvenanceReport":
        return cls(
            run=dict(data.get("run", {})),
            inputs=dict(data.get("inputs", {})),
            records=[dict(r) for r in (data.get("records", []) or [])],
            summary={k: int(v) for k, v in (data.get("summary", {}) or {}).items()},
        )

    def records_for(self, path: str) -> List[MetadataRecord]:
        return [MetadataRecord(**r) for r in self.records if r.get("path") == path]


def collect_provenance(
    root: Any,
    *,
    config: Optional[Dict[str, Any]] = None,
    collected_at: Optional[datetime] = None,
) -> ProvenanceReport:
    """
    Percorre a árvore a partir de `root` e consolida a proveniência.

    Args:
        root: escopo a partir do qual a coleta começa (incluído).
        config: configuração resolvida; participa apenas do hash em
            `inputs.config_hash`.
        collected_at: timestamp da coleta (default: agora, UTC).

    Returns:
        ProvenanceReport: relatório com registros e resumo.
    """
    config = dict(config or {})
    ts = collected_at or datetime.now(timezone.utc)

    records: List[Dict[str, str]] = []
    for construct in root.node.find_all():
        for value in construct.node.metadata_for(MIXIN_METADATA_KEY):
            mixin = value.get("mixin", "*") if isinstance(value, dict) else "*"
            records.append(MetadataRecord(mixin=mixin, path=construct.node.path).to_dict())

    counts = Counter(r["mixin"] for r in records)

    return ProvenanceReport(
        run={
            "root": root.node.path,
            "collected_at": _iso(ts),
            "report_version": REPORT_VERSION,
        },
        inputs={
            "config_hash": compute_config_hash(config),
            "metadata_key": MIXIN_METADATA_KEY,
        },
        records=records,
        summary={k: counts[k] for k in sorted(counts)},
    )


def save_report(report: Union[ProvenanceReport, Dict[str, Any]], path: Union[str, Path]) -> Path:
    """Persiste o relatório em JSON determinístico (chaves ordenadas, UTF-8)."""
    data = report.to_dict() if isinstance(report, ProvenanceReport) else dict(report)
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")
    return p


def load_report(path: Union[str, Path]) -> ProvenanceReport:
    p = Path(path)
    return ProvenanceReport.from_dict(json.loads(p.read_text(encoding="utf-8")))
