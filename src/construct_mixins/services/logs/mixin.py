# src/construct_mixins/services/logs/mixin.py
"""
Mixins de entrega de logs vendidos.

`LogsDeliveryMixin` liga um recurso de baixo nível de um tipo específico
a um destino de logs. `VendedLogs` é o builder escrito à mão que produz
esses mixins por tipo de destino, no mesmo formato que um gerador de
código produziria.

Exemplo:
    logs = VendedLogs("AWS::CloudFront::Distribution", "ACCESS_LOGS")
    Mixins.of(stack).apply(logs.to_s3(bucket))
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from construct_mixins.core.mixins.mixin import Mixin
from construct_mixins.core.tree.construct import CfnResource

from .delivery import (
    DestinationLogsDelivery,
    FirehoseLogsDelivery,
    ILogsDelivery,
    LogGroupLogsDelivery,
    LogsDeliveryConfig,
    S3LogsDelivery,
    XRayLogsDelivery,
)
from .destinations import S3LogsDeliveryPermissionsVersion


class LogsDeliveryMixin(Mixin):
    """
    Configura a entrega de `log_type` para recursos `resource_type`.

    `supports` aceita apenas recursos de baixo nível cujo tipo wire é
    exatamente `resource_type`. Cada `apply_to` executa um `bind` e guarda
    a tripla resultante em `bindings`, na ordem de aplicação.
    """

    FQN = "construct_mixins.services.logs.LogsDeliveryMixin"

    def __init__(self, resource_type: str, log_type: str, log_delivery: ILogsDelivery):
        super().__init__()
        if not resource_type:
            raise ValueError("resource_type must be a non-empty string")
        self.resource_type = resource_type
        self.log_type = log_type
        self.log_delivery = log_delivery
        self.bindings: List[LogsDeliveryConfig] = []

    def supports(self, construct: Any) -> bool:
        return (
            CfnResource.is_cfn_resource(construct)
            and getattr(construct, "cfn_resource_type", None) == self.resource_type
        )

    def apply_to(self, construct: Any) -> None:
        self.bindings.append(self.log_delivery.bind(construct, self.log_type, construct.attr_arn))


class VendedLogs:
    """Builder de `LogsDeliveryMixin` para um par (tipo de recurso, log type)."""

    def __init__(self, resource_type: str, log_type: str, *, mandatory_fields: Optional[Sequence[str]] = None):
        self.resource_type = resource_type
        self.log_type = log_type
        self.mandatory_fields = list(mandatory_fields or [])

    def _mixin(self, delivery: ILogsDelivery) -> LogsDeliveryMixin:
        return LogsDeliveryMixin(self.resource_type, self.log_type, delivery)

    def to_s3(
        self,
        bucket: Any,
        *,
        permissions_version: S3LogsDeliveryPermissionsVersion = S3LogsDeliveryPermissionsVersion.V2,
        encryption_key: Any = None,
        output_format: Optional[str] = None,
        record_fields: Optional[Sequence[str]] = None,
    ) -> LogsDeliveryMixin:
        return self._mixin(
            S3LogsDelivery(
                bucket,
                permissions_version=permissions_version,
                encryption_key=encryption_key,
                output_format=output_format,
                record_fields=record_fields,
                mandatory_fields=self.mandatory_fields,
            )
        )

    def to_firehose(
        self,
        delivery_stream: Any,
        *,
        output_format: Optional[str] = None,
        record_fields: Optional[Sequence[str]] = None,
    ) -> LogsDeliveryMixin:
        return self._mixin(
            FirehoseLogsDelivery(
                delivery_stream,
                output_format=output_format,
                record_fields=record_fields,
                mandatory_fields=self.mandatory_fields,
            )
        )

    def to_log_group(
        self,
        log_group: Any,
        *,
        output_format: Optional[str] = None,
        record_fields: Optional[Sequence[str]] = None,
    ) -> LogsDeliveryMixin:
        return self._mixin(
            LogGroupLogsDelivery(
                log_group,
                output_format=output_format,
                record_fields=record_fields,
                mandatory_fields=self.mandatory_fields,
            )
        )

    def to_xray(self, *, record_fields: Optional[Sequence[str]] = None) -> LogsDeliveryMixin:
        return self._mixin(
            XRayLogsDelivery(record_fields=record_fields, mandatory_fields=self.mandatory_fields)
        )

    def to_destination(
        self,
        destination: Any,
        *,
        record_fields: Optional[Sequence[str]] = None,
    ) -> LogsDeliveryMixin:
        return self._mixin(
            DestinationLogsDelivery(
                destination,
                record_fields=record_fields,
                mandatory_fields=self.mandatory_fields,
            )
        )
