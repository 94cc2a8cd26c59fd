# src/construct_mixins/services/logs/destinations.py
"""
Destinos de entrega de logs por tipo.

Cada tipo de destino exige um conjunto próprio de campos:
    - S3        → bucket (ARN), versão de permissões, chave KMS opcional
    - Firehose  → delivery stream (ARN)
    - LogGroup  → log group (ARN)
    - X-Ray     → recurso de origem (o destino não tem ARN de recurso)

O nome físico do destino é derivado do path (minúsculo, até 60 chars).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from construct_mixins.core.tree.construct import Construct
from construct_mixins.core.tree.names import unique_resource_name

from .resources import CfnDeliveryDestination


DESTINATION_NAME_MAX_LENGTH = 60


class DeliveryDestinationType(str, Enum):
    S3 = "S3"
    FIREHOSE = "FH"
    LOG_GROUP = "CWL"
    XRAY = "XRAY"


class S3LogsDeliveryPermissionsVersion(str, Enum):
    """Versão de permissões exigida pela origem dos logs ao gravar no bucket."""

    V1 = "V1"
    V2 = "V2"


def require_arn(ref: Any, field_name: str) -> str:
    arn = getattr(ref, "attr_arn", None)
    if not isinstance(arn, str) or not arn:
        raise ValueError(f"{field_name} must expose a non-empty attr_arn")
    return arn


class _NamedDeliveryDestination(CfnDeliveryDestination):
    def __init__(self, scope: Construct, id: str, **kwargs: Any):
        super().__init__(scope, id, **kwargs)
        self.properties["Name"] = unique_resource_name(self, max_length=DESTINATION_NAME_MAX_LENGTH)


class S3DeliveryDestination(_NamedDeliveryDestination):
    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        bucket: Any,
        permissions_version: S3LogsDeliveryPermissionsVersion = S3LogsDeliveryPermissionsVersion.V2,
        encryption_key: Any = None,
        output_format: Optional[str] = None,
    ):
        super().__init__(
            scope,
            id,
            destination_resource_arn=require_arn(bucket, "bucket"),
            delivery_destination_type=DeliveryDestinationType.S3.value,
            output_format=output_format,
        )
        self.bucket = bucket
        self.permissions_version = S3LogsDeliveryPermissionsVersion(permissions_version)
        self.encryption_key_arn: Optional[str] = (
            require_arn(encryption_key, "encryption_key") if encryption_key is not None else None
        )


class FirehoseDeliveryDestination(_NamedDeliveryDestination):
    def __init__(self, scope: Construct, id: str, *, delivery_stream: Any, output_format: Optional[str] = None):
        super().__init__(
            scope,
            id,
            destination_resource_arn=require_arn(delivery_stream, "delivery_stream"),
            delivery_destination_type=DeliveryDestinationType.FIREHOSE.value,
            output_format=output_format,
        )
        self.delivery_stream = delivery_stream


class CloudwatchDeliveryDestination(_NamedDeliveryDestination):
    def __init__(self, scope: Construct, id: str, *, log_group: Any, output_format: Optional[str] = None):
        super().__init__(
            scope,
            id,
            destination_resource_arn=require_arn(log_group, "log_group"),
            delivery_destination_type=DeliveryDestinationType.LOG_GROUP.value,
            output_format=output_format,
        )
        self.log_group = log_group


class XRayDeliveryDestination(_NamedDeliveryDestination):
    def __init__(self, scope: Construct, id: str, *, source_resource: str):
        if not isinstance(source_resource, str) or not source_resource:
            raise ValueError("source_resource must be a non-empty ARN string")
        super().__init__(
            scope,
            id,
            delivery_destination_type=DeliveryDestinationType.XRAY.value,
        )
        self.source_resource = source_resource
