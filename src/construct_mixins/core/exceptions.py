"""
construct-mixins — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do motor de mixins.

Objetivo:
- Permitir que seletores, aplicador e mixins de domínio levantem exceções
  semânticas tipadas
- Carregar contexto estruturado (mixin, path do nó) para diagnóstico
- Evitar ValueError/RuntimeError genéricos nos guardrails do motor

Regras:
- Nenhuma exceção é tratada localmente pelo motor: toda falha sobe ao chamador
- Não existe retry: todas as operações são determinísticas e em memória
- `details` carrega apenas dados serializáveis
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class ConstructMixinError(Exception):
    """Base class para exceções do motor de mixins.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - A exceção original (quando houver) fica encadeada em `__cause__`
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro (com o tipo estável)."""
        data = asdict(self)
        data["type"] = self.__class__.__name__
        return data


# ---------------------------------------------------------------------------
# Árvore
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class ConstructTreeError(ConstructMixinError):
    """Violação estrutural da árvore (id duplicado, default child ambíguo)."""


# ---------------------------------------------------------------------------
# Seletores
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class SelectorError(ConstructMixinError):
    """Padrão glob malformado, detectado na construção do seletor."""


# ---------------------------------------------------------------------------
# Aplicação
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class SupportCheckFailure(ConstructMixinError):
    """`supports` de um mixin lançou exceção; aborta a chamada `apply` inteira."""


@dataclass(eq=False)
class ApplyFailure(ConstructMixinError):
    """`apply_to` de um mixin lançou exceção; nada é revertido."""


@dataclass(eq=False)
class MixinNotAppliedError(ConstructMixinError):
    """`must_apply` terminou com mixins que não encontraram nenhum nó suportado."""


# ---------------------------------------------------------------------------
# Domínio (logs delivery)
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class UnresolvableSource(ConstructMixinError):
    """Nenhuma delivery source encontrada nem criável para a origem informada."""
