# src/construct_mixins/core/config/loader.py
"""
Loader canônico de configuração do construct-mixins.

A configuração efetiva é resolvida, em ordem de precedência crescente, a
partir de:
    - `DEFAULT_CONFIG` (embutido no pacote)
    - um arquivo de defaults (opcional; obrigatório existir se informado)
    - um arquivo local de overrides (opcional; ignorado se ausente)

Chaves conhecidas (v1):
    provenance.allowed_prefixes → list[str], namespaces confiáveis; só
                                  estreita a allow-list embutida (ver
                                  `ProvenanceRecorder.from_config`)

A gravação de proveniência não pode ser desligada e a chave de metadados
é fixa; qualquer outra chave em `provenance` é rejeitada.

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Erros estruturais são tratados como falhas fatais
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não aplica mixins
    - Não persiste configuração
"""

from pathlib import Path
from typing import Any, Dict, Optional
import json

import yaml  # PyYAML

from construct_mixins.core.traceability.metadata import DEFAULT_ALLOWED_FQN_PREFIXES

from .errors import (
    ConfigFileNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigValueError,
    UnsupportedConfigFormatError,
)
from .merge import merge_layers


DEFAULT_CONFIG: Dict[str, Any] = {
    "provenance": {
        "allowed_prefixes": list(DEFAULT_ALLOWED_FQN_PREFIXES),
    },
}

PROVENANCE_KEYS = frozenset({"allowed_prefixes"})


def _load_file(path: Path) -> Dict[str, Any]:
    """
    Carrega um arquivo YAML/JSON e valida que a raiz é um dicionário.

    Arquivos vazios são interpretados como dicionários vazios.

    Raises:
        ConfigFileNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se a extensão não for suportada.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
    """
    if not path.exists():
        raise ConfigFileNotFoundError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        parse = yaml.safe_load
    elif suffix == ".json":
        parse = json.load
    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {path.suffix}")

    with path.open("r", encoding="utf-8") as f:
        data = parse(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )
    return data


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Valida a seção `provenance`; seções desconhecidas passam intactas.

    Raises:
        InvalidConfigValueError: Se `provenance` tiver chave não suportada
            ou valor com tipo inválido.
    """
    section = config.get("provenance", {})
    if not isinstance(section, dict):
        raise InvalidConfigValueError("provenance deve ser um mapa")

    unsupported = sorted(set(section) - PROVENANCE_KEYS)
    if unsupported:
        raise InvalidConfigValueError(
            f"Chaves de provenance não suportadas: {', '.join(unsupported)}"
        )

    prefixes = section.get("allowed_prefixes", [])
    if not isinstance(prefixes, list) or not all(isinstance(p, str) and p for p in prefixes):
        raise InvalidConfigValueError("provenance.allowed_prefixes deve ser lista de strings não vazias")

    return config


def load_config(
    *,
    defaults_path: Optional[str] = None,
    local_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Carrega e resolve a configuração efetiva.

    Política de resolução:
        - `DEFAULT_CONFIG` é sempre a base
        - `defaults_path`, quando informado, precisa existir
        - `local_path`, quando informado e existente, tem a maior precedência

    Args:
        defaults_path (Optional[str]): Arquivo de defaults do projeto.
        local_path (Optional[str]): Overrides locais.

    Returns:
        Dict[str, Any]: Configuração final resolvida e validada.

    Raises:
        ConfigFileNotFoundError: Se `defaults_path` não existir.
        UnsupportedConfigFormatError: Se o formato não for suportado.
        InvalidConfigRootTypeError: Se a raiz não for um dicionário.
        ConfigTypeConflictError: Se ocorrer conflito estrutural no merge.
        InvalidConfigValueError: Se `provenance` tiver chave ou valor inválido.
    """
    layers = [DEFAULT_CONFIG]

    if defaults_path is not None:
        layers.append(_load_file(Path(defaults_path)))

    if local_path is not None:
        local_file = Path(local_path)
        if local_file.exists():
            layers.append(_load_file(local_file))

    return validate_config(merge_layers(*layers))
