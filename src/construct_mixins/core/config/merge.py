# src/construct_mixins/core/config/merge.py
"""
Sobreposição de camadas de configuração.

Cada camada (embutida, defaults do projeto, overrides locais) é um mapa
parcial; `merge_layers` as sobrepõe da menor para a maior precedência.

Política de merge (v1):
    - mapa sobre mapa → sobreposição recursiva por chave
    - lista sobre lista → a lista da camada superior vence inteira
      (uma allow-list local nunca é concatenada à anterior)
    - valor ausente ou `None` na camada inferior → aceita qualquer tipo
    - tipos diferentes entre camadas → `ConfigTypeConflictError`

Invariantes:
    - Nenhuma camada é mutada
    - A mesma sequência de camadas sempre produz a mesma saída
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


_ABSENT = object()


def _overlay(key: str, lower: Any, upper: Any) -> Any:
    if lower is _ABSENT or lower is None:
        return deepcopy(upper)
    if isinstance(lower, dict) and isinstance(upper, dict):
        return deep_merge(lower, upper)
    if type(lower) is not type(upper):
        raise ConfigTypeConflictError(
            f"Conflito de tipo na chave '{key}': "
            f"{type(lower).__name__} vs {type(upper).__name__}"
        )
    return deepcopy(upper)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sobrepõe `override` a `base` e devolve um novo mapa.

    Raises:
        ConfigTypeConflictError: Se alguma das camadas não for dict, ou se
            uma chave tiver tipos incompatíveis entre elas.
    """
    for layer in (base, override):
        if not isinstance(layer, dict):
            raise ConfigTypeConflictError(
                f"Camada de configuração deve ser dict, recebido: {type(layer).__name__}"
            )

    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, value in override.items():
        merged[key] = _overlay(key, merged.get(key, _ABSENT), value)
    return merged


def merge_layers(*layers: Dict[str, Any]) -> Dict[str, Any]:
    """Sobrepõe as camadas em ordem (a última tem a maior precedência)."""
    effective: Dict[str, Any] = {}
    for layer in layers:
        effective = deep_merge(effective, layer)
    return effective
