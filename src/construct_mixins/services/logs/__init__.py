# src/construct_mixins/services/logs/__init__.py
"""
Entrega de logs vendidos (AWS::Logs::DeliverySource / Destination / Delivery).

API pública exposta:
    - VendedLogs, LogsDeliveryMixin       → mixins por tipo de destino
    - S3LogsDelivery, FirehoseLogsDelivery, LogGroupLogsDelivery,
      XRayLogsDelivery, DestinationLogsDelivery → implementações de bind
    - compute_record_fields, get_or_create_delivery_source
"""

from .delivery import (
    DestinationLogsDelivery,
    FirehoseLogsDelivery,
    ILogsDelivery,
    LogGroupLogsDelivery,
    LogsDeliveryConfig,
    S3LogsDelivery,
    XRayLogsDelivery,
    compute_record_fields,
    delivery_id,
    find_delivery_source,
    get_or_create_delivery_source,
    make_dest_id,
)
from .destinations import (
    CloudwatchDeliveryDestination,
    DeliveryDestinationType,
    FirehoseDeliveryDestination,
    S3DeliveryDestination,
    S3LogsDeliveryPermissionsVersion,
    XRayDeliveryDestination,
)
from .mixin import LogsDeliveryMixin, VendedLogs
from .resources import CfnDelivery, CfnDeliveryDestination, CfnDeliverySource

__all__ = [
    "CfnDelivery",
    "CfnDeliveryDestination",
    "CfnDeliverySource",
    "CloudwatchDeliveryDestination",
    "DeliveryDestinationType",
    "DestinationLogsDelivery",
    "FirehoseDeliveryDestination",
    "FirehoseLogsDelivery",
    "ILogsDelivery",
    "LogGroupLogsDelivery",
    "LogsDeliveryConfig",
    "LogsDeliveryMixin",
    "S3DeliveryDestination",
    "S3LogsDelivery",
    "S3LogsDeliveryPermissionsVersion",
    "VendedLogs",
    "XRayDeliveryDestination",
    "XRayLogsDelivery",
    "compute_record_fields",
    "delivery_id",
    "find_delivery_source",
    "get_or_create_delivery_source",
    "make_dest_id",
]
