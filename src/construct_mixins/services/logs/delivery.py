# src/construct_mixins/services/logs/delivery.py
"""
Ligação de entrega de logs (source → destination → delivery).

Cada `bind(scope, log_type, source_resource_arn)` executa uma única
passagem, sem retentativas:

    1. Localiza ou cria a delivery source para (log_type, scope, arn)
    2. Cria um destino novo (o tipo define os campos exigidos)
    3. Calcula os record fields (opcionais do chamador + obrigatórios)
    4. Cria a delivery com dependência explícita de source e destino

Princípios fundamentais:
    - Uma origem lógica gera no máximo uma delivery source por escopo
    - Campos obrigatórios sempre presentes e nunca duplicados
    - Todos os nós criados pertencem à árvore; o chamador recebe a tripla

Limites explícitos:
    - Não cria políticas de bucket, roles ou grants de KMS
    - Não valida se o log type é suportado pelo recurso de origem
"""

from __future__ import annotations

import hashlib
import logging
from typing import Any, List, NamedTuple, Optional, Protocol, Sequence, runtime_checkable

from construct_mixins.core.exceptions import UnresolvableSource
from construct_mixins.core.tree.construct import Construct
from construct_mixins.core.tree.names import HASH_LEN, unique_id, unique_resource_name

from .destinations import (
    CloudwatchDeliveryDestination,
    FirehoseDeliveryDestination,
    S3DeliveryDestination,
    S3LogsDeliveryPermissionsVersion,
    XRayDeliveryDestination,
    require_arn,
)
from .resources import CfnDelivery, CfnDeliverySource


logger = logging.getLogger(__name__)

SOURCE_NAME_MAX_LENGTH = 60


class LogsDeliveryConfig(NamedTuple):
    """Tripla resultante de um `bind`."""

    delivery_source: CfnDeliverySource
    delivery_destination: Any  # CfnDeliveryDestination ou referência com `attr_arn`
    delivery: CfnDelivery


@runtime_checkable
class ILogsDelivery(Protocol):
    def bind(self, scope: Construct, log_type: str, source_resource_arn: str) -> LogsDeliveryConfig:
        ...


# -----------------------------
# Funções puras
# -----------------------------
def compute_record_fields(
    provided: Optional[Sequence[str]],
    mandatory: Optional[Sequence[str]] = None,
) -> Optional[List[str]]:
    """
    Combina os campos opcionais do chamador com os obrigatórios.

    Remove de `provided` tudo que já é obrigatório (preservando a ordem
    relativa) e acrescenta os obrigatórios ao final. `provided=None`
    significa "usar o default do destino" e resulta em `None`.

    Example:
        >>> compute_record_fields(["x", "y", "z"], ["y"])
        ['x', 'z', 'y']
    """
    if provided is None:
        return None
    required = list(mandatory or [])
    return [f for f in provided if f not in required] + required


def _camel_log_type(log_type: str) -> str:
    return "".join(word.capitalize() for word in log_type.lower().split("_"))


def delivery_id(destination_type: str, log_type: str, *constructs: Construct) -> str:
    """Id do container de uma delivery: `Cdk<Dest><LogType>Delivery<uniqueIds>`."""
    suffix = "".join(unique_id(c) for c in constructs)
    return f"Cdk{destination_type}{_camel_log_type(log_type)}Delivery{suffix}"


def make_dest_id(log_type: str) -> str:
    return "Dest" + "-".join(word.lower() for word in log_type.split("_"))


def _source_id(log_type: str, scope: Construct, source_arn: str) -> str:
    arn_digest = hashlib.md5(source_arn.encode("utf-8")).hexdigest()[:HASH_LEN].upper()
    return f"CDKSource{log_type}{unique_id(scope)}{arn_digest}"


def _source_name_prefix(log_type: str) -> str:
    return "cdk-" + "".join(word.lower() for word in log_type.split("_")) + "-source-"


def _ref_unique_id(ref: Any) -> str:
    """`unique_id` para constructs; hash do ARN para referências fora da árvore."""
    if hasattr(ref, "node"):
        return unique_id(ref)
    return hashlib.md5(require_arn(ref, "ref").encode("utf-8")).hexdigest()[:HASH_LEN].upper()


# -----------------------------
# Delivery source (lookup-or-create)
# -----------------------------
def find_delivery_source(scope: Construct, log_type: str, source_arn: str) -> Optional[CfnDeliverySource]:
    """Procura entre os filhos de `scope` uma source já ligada à mesma origem."""
    for child in scope.node.children:
        if (
            isinstance(child, CfnDeliverySource)
            and child.log_type == log_type
            and child.resource_arn == source_arn
        ):
            return child
    return None


def get_or_create_delivery_source(scope: Construct, log_type: str, source_arn: str) -> CfnDeliverySource:
    """
    Reutiliza ou cria a delivery source de (log_type, scope, source_arn).

    O nome criado é `cdk-<logtype>-source-<nome único>`, minúsculo,
    separado por hífens e com no máximo 60 caracteres.

    Raises:
        UnresolvableSource: log type ou ARN vazios, ou prefixo sem espaço
            para um nome único.
    """
    if not isinstance(log_type, str) or not log_type:
        raise UnresolvableSource(
            "log_type must be a non-empty string",
            details={"scope": scope.node.path, "log_type": repr(log_type)},
        )
    if not isinstance(source_arn, str) or not source_arn:
        raise UnresolvableSource(
            "source resource ARN must be a non-empty string",
            details={"scope": scope.node.path, "log_type": log_type},
            hint="Resolva o ARN do recurso de origem antes de chamar bind()",
        )

    existing = find_delivery_source(scope, log_type, source_arn)
    if existing is not None:
        logger.debug("Reusing delivery source %s for log type %s", existing.node.path, log_type)
        return existing

    prefix = _source_name_prefix(log_type)
    budget = SOURCE_NAME_MAX_LENGTH - len(prefix)
    if budget < HASH_LEN + 2:
        raise UnresolvableSource(
            f"log type too long to derive a delivery source name: {log_type}",
            details={"scope": scope.node.path, "log_type": log_type, "prefix": prefix},
        )

    source = CfnDeliverySource(
        scope,
        _source_id(log_type, scope, source_arn),
        log_type=log_type,
        resource_arn=source_arn,
    )
    source.name = prefix + unique_resource_name(source, max_length=budget)
    logger.debug("Created delivery source %s (%s)", source.node.path, source.name)
    return source


# -----------------------------
# Implementações de ILogsDelivery
# -----------------------------
class _LogsDeliveryBase:
    """Passos 3 e 4 compartilhados por todos os tipos de destino."""

    def __init__(self, *, record_fields: Optional[Sequence[str]] = None, mandatory_fields: Optional[Sequence[str]] = None):
        self.record_fields = list(record_fields) if record_fields is not None else None
        self.mandatory_fields = list(mandatory_fields or [])

    def _wire(
        self,
        container: Construct,
        source: CfnDeliverySource,
        destination: Any,
    ) -> LogsDeliveryConfig:
        delivery = CfnDelivery(
            container,
            "Delivery",
            delivery_source_name=source.name,
            delivery_destination_arn=destination.attr_arn,
            record_fields=compute_record_fields(self.record_fields, self.mandatory_fields),
        )
        delivery.node.add_dependency(source)
        if hasattr(destination, "node"):
            delivery.node.add_dependency(destination)
        return LogsDeliveryConfig(source, destination, delivery)


class S3LogsDelivery(_LogsDeliveryBase):
    """Entrega para um bucket S3."""

    def __init__(
        self,
        bucket: Any,
        *,
        permissions_version: S3LogsDeliveryPermissionsVersion = S3LogsDeliveryPermissionsVersion.V2,
        encryption_key: Any = None,
        output_format: Optional[str] = None,
        record_fields: Optional[Sequence[str]] = None,
        mandatory_fields: Optional[Sequence[str]] = None,
    ):
        require_arn(bucket, "bucket")
        if encryption_key is not None:
            require_arn(encryption_key, "encryption_key")
        super().__init__(record_fields=record_fields, mandatory_fields=mandatory_fields)
        self.bucket = bucket
        self.permissions_version = permissions_version
        self.encryption_key = encryption_key
        self.output_format = output_format

    def bind(self, scope: Construct, log_type: str, source_resource_arn: str) -> LogsDeliveryConfig:
        source = get_or_create_delivery_source(scope, log_type, source_resource_arn)
        container = Construct(scope, delivery_id("S3", log_type, scope, self.bucket))
        destination = S3DeliveryDestination(
            container,
            make_dest_id(log_type),
            bucket=self.bucket,
            permissions_version=self.permissions_version,
            encryption_key=self.encryption_key,
            output_format=self.output_format,
        )
        return self._wire(container, source, destination)


class FirehoseLogsDelivery(_LogsDeliveryBase):
    """Entrega para um delivery stream do Firehose."""

    def __init__(
        self,
        delivery_stream: Any,
        *,
        output_format: Optional[str] = None,
        record_fields: Optional[Sequence[str]] = None,
        mandatory_fields: Optional[Sequence[str]] = None,
    ):
        require_arn(delivery_stream, "delivery_stream")
        super().__init__(record_fields=record_fields, mandatory_fields=mandatory_fields)
        self.delivery_stream = delivery_stream
        self.output_format = output_format

    def bind(self, scope: Construct, log_type: str, source_resource_arn: str) -> LogsDeliveryConfig:
        source = get_or_create_delivery_source(scope, log_type, source_resource_arn)
        container = Construct(scope, delivery_id("Firehose", log_type, scope, self.delivery_stream))
        destination = FirehoseDeliveryDestination(
            container,
            make_dest_id(log_type),
            delivery_stream=self.delivery_stream,
            output_format=self.output_format,
        )
        return self._wire(container, source, destination)


class LogGroupLogsDelivery(_LogsDeliveryBase):
    """Entrega para um log group do CloudWatch Logs."""

    def __init__(
        self,
        log_group: Any,
        *,
        output_format: Optional[str] = None,
        record_fields: Optional[Sequence[str]] = None,
        mandatory_fields: Optional[Sequence[str]] = None,
    ):
        require_arn(log_group, "log_group")
        super().__init__(record_fields=record_fields, mandatory_fields=mandatory_fields)
        self.log_group = log_group
        self.output_format = output_format

    def bind(self, scope: Construct, log_type: str, source_resource_arn: str) -> LogsDeliveryConfig:
        source = get_or_create_delivery_source(scope, log_type, source_resource_arn)
        container = Construct(scope, delivery_id("LogGroup", log_type, scope, self.log_group))
        destination = CloudwatchDeliveryDestination(
            container,
            make_dest_id(log_type),
            log_group=self.log_group,
            output_format=self.output_format,
        )
        return self._wire(container, source, destination)


class XRayLogsDelivery(_LogsDeliveryBase):
    """Entrega de traces para o X-Ray (o destino não tem recurso próprio)."""

    def bind(self, scope: Construct, log_type: str, source_resource_arn: str) -> LogsDeliveryConfig:
        source = get_or_create_delivery_source(scope, log_type, source_resource_arn)
        container = Construct(scope, delivery_id("XRay", log_type, scope, source))
        destination = XRayDeliveryDestination(
            container,
            make_dest_id(log_type),
            source_resource=source_resource_arn,
        )
        return self._wire(container, source, destination)


class DestinationLogsDelivery(_LogsDeliveryBase):
    """
    Entrega para um destino já existente, fornecido pelo chamador.

    O destino pode ser um `CfnDeliveryDestination` da árvore ou qualquer
    referência que exponha `attr_arn` (ex.: destino em outra conta). Nenhum
    destino é criado; a delivery só depende do destino quando ele pertence
    à árvore.
    """

    def __init__(
        self,
        destination: Any,
        *,
        record_fields: Optional[Sequence[str]] = None,
        mandatory_fields: Optional[Sequence[str]] = None,
    ):
        require_arn(destination, "destination")
        super().__init__(record_fields=record_fields, mandatory_fields=mandatory_fields)
        self.destination = destination

    def bind(self, scope: Construct, log_type: str, source_resource_arn: str) -> LogsDeliveryConfig:
        source = get_or_create_delivery_source(scope, log_type, source_resource_arn)
        unique_name = "Dest" + _ref_unique_id(self.destination)
        container = Construct(scope, delivery_id(unique_name, log_type, scope, source))
        return self._wire(container, source, self.destination)
