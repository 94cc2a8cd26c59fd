# src/construct_mixins/core/mixins/applicator.py
"""
Aplicador de mixins.

Este módulo orquestra seleção, filtragem e aplicação ordenada de um ou
mais mixins sobre uma árvore de constructs, gravando proveniência para
cada aplicação bem-sucedida.

Algoritmo de `apply(*mixins)`:
    1. avaliar o seletor vinculado sobre o escopo vinculado **uma vez** e
       materializar o resultado em uma tupla (snapshot)
    2. para cada mixin (na ordem do chamador), para cada nó do snapshot
       (na ordem do seletor): se `supports(nó)`, chamar `apply_to(nó)` e
       gravar metadados
    3. sem backtracking: uma vez executado, `apply_to` não é repetido nem
       revertido

Concorrência e mutação:
    - Nós criados por um mixin durante a chamada não entram no snapshot
    - Mutações feitas por um mixin são visíveis aos mixins seguintes
      (`supports` é avaliado imediatamente antes de cada `apply_to`)
    - Não há lock: disciplina de escritor único é do chamador

Falhas (fail-fast):
    - exceção em `supports` → SupportCheckFailure (original em `__cause__`)
    - exceção em `apply_to` → ApplyFailure (original em `__cause__`)
    - nenhum rollback: mutações anteriores permanecem visíveis
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from construct_mixins.core.exceptions import (
    ApplyFailure,
    MixinNotAppliedError,
    SupportCheckFailure,
)
from construct_mixins.core.traceability.metadata import ProvenanceRecorder, declared_origin

from .mixin import is_mixin_like
from .selectors import ConstructSelector, IConstructSelector


logger = logging.getLogger(__name__)


def _describe(mixin: Any) -> str:
    return declared_origin(mixin) or type(mixin).__name__


def _flatten(mixins: Sequence[Any]) -> List[Any]:
    """Aceita `apply(a, b)` e `apply([a, b])`."""
    out: List[Any] = []
    for m in mixins:
        if isinstance(m, (list, tuple)):
            out.extend(m)
        else:
            out.append(m)
    for m in out:
        if not is_mixin_like(m):
            raise TypeError(
                f"Expected a mixin with supports() and apply_to(), got: {type(m).__name__}"
            )
    return out


class MixinApplicator:
    """Aplica mixins aos nós selecionados a partir de um escopo."""

    def __init__(
        self,
        scope: Any,
        selector: Optional[IConstructSelector] = None,
        *,
        recorder: Optional[ProvenanceRecorder] = None,
    ):
        self.scope = scope
        self.selector: IConstructSelector = selector if selector is not None else ConstructSelector.all()
        self.recorder: ProvenanceRecorder = recorder if recorder is not None else ProvenanceRecorder()

    def _candidates(self) -> Tuple[Any, ...]:
        return tuple(self.selector.select(self.scope))

    def _apply_one(self, mixin: Any, candidates: Tuple[Any, ...]) -> int:
        applied = 0
        for construct in candidates:
            path = construct.node.path
            try:
                supported = bool(mixin.supports(construct))
            except Exception as exc:
                raise SupportCheckFailure(
                    f"supports() failed for {_describe(mixin)} on '{path}': {exc}",
                    details={"mixin": _describe(mixin), "path": path, "exception_class": type(exc).__name__},
                ) from exc

            if not supported:
                logger.debug("mixin %s skipped %s (not supported)", _describe(mixin), path)
                continue

            try:
                mixin.apply_to(construct)
            except Exception as exc:
                raise ApplyFailure(
                    f"apply_to() failed for {_describe(mixin)} on '{path}': {exc}",
                    details={"mixin": _describe(mixin), "path": path, "exception_class": type(exc).__name__},
                    hint="Mutações já aplicadas nesta chamada não são revertidas",
                ) from exc

            self.recorder.record(construct, mixin)
            applied += 1
            logger.debug("mixin %s applied to %s", _describe(mixin), path)
        return applied

    def _run(self, mixins: Sequence[Any]) -> List[Tuple[Any, int]]:
        flat = _flatten(mixins)
        candidates = self._candidates()
        counts: List[Tuple[Any, int]] = []
        for mixin in flat:
            counts.append((mixin, self._apply_one(mixin, candidates)))
        logger.info(
            "applied %d mixin(s) over %d candidate node(s) from '%s'",
            len(flat),
            len(candidates),
            self.scope.node.path or "<root>",
        )
        return counts

    def apply(self, *mixins: Any) -> Any:
        """Aplica os mixins e retorna o escopo (para encadeamento)."""
        self._run(mixins)
        return self.scope

    def must_apply(self, *mixins: Any) -> Any:
        """
        Como `apply`, mas exige que cada mixin tenha sido aplicado a ao menos um nó.

        A verificação ocorre depois de todos os mixins rodarem; aplicações
        já feitas não são revertidas.

        Raises:
            MixinNotAppliedError: lista os mixins sem nenhum nó suportado.
        """
        counts = self._run(mixins)
        missing = [_describe(m) for m, n in counts if n == 0]
        if missing:
            raise MixinNotAppliedError(
                f"No construct in '{self.scope.node.path or '<root>'}' supports: {', '.join(missing)}",
                details={"scope": self.scope.node.path, "mixins": missing},
                hint="Revise o seletor ou o escopo informado",
            )
        return self.scope


class Mixins:
    """Ponto de entrada público."""

    @staticmethod
    def of(
        scope: Any,
        selector: Optional[IConstructSelector] = None,
        *,
        recorder: Optional[ProvenanceRecorder] = None,
    ) -> MixinApplicator:
        return MixinApplicator(scope, selector, recorder=recorder)
