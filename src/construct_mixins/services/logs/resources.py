# src/construct_mixins/services/logs/resources.py
"""
Recursos de baixo nível de entrega de logs (`AWS::Logs::*`).

Cada classe é um `CfnResource` cujas propriedades de domínio ficam em
`properties` com os nomes do formato wire. Os atributos Python são
apenas atalhos de leitura/escrita sobre esse dicionário.
"""

from __future__ import annotations

from typing import Any, List, Optional

from construct_mixins.core.tree.construct import CfnResource, Construct


class CfnDeliverySource(CfnResource):
    """Origem de logs vendidos por um recurso (`AWS::Logs::DeliverySource`)."""

    CFN_RESOURCE_TYPE_NAME = "AWS::Logs::DeliverySource"

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        log_type: str,
        resource_arn: str,
        name: Optional[str] = None,
    ):
        super().__init__(
            scope,
            id,
            properties={"Name": name, "LogType": log_type, "ResourceArn": resource_arn},
        )

    @property
    def name(self) -> Optional[str]:
        return self.properties.get("Name")

    @name.setter
    def name(self, value: str) -> None:
        self.properties["Name"] = value

    @property
    def log_type(self) -> str:
        return self.properties["LogType"]

    @property
    def resource_arn(self) -> str:
        return self.properties["ResourceArn"]


class CfnDeliveryDestination(CfnResource):
    """Destino de entrega de logs (`AWS::Logs::DeliveryDestination`)."""

    CFN_RESOURCE_TYPE_NAME = "AWS::Logs::DeliveryDestination"

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        name: Optional[str] = None,
        destination_resource_arn: Optional[str] = None,
        delivery_destination_type: Optional[str] = None,
        output_format: Optional[str] = None,
    ):
        super().__init__(
            scope,
            id,
            properties={
                "Name": name,
                "DestinationResourceArn": destination_resource_arn,
                "DeliveryDestinationType": delivery_destination_type,
                "OutputFormat": output_format,
            },
        )

    @property
    def name(self) -> Optional[str]:
        return self.properties.get("Name")

    @property
    def destination_resource_arn(self) -> Optional[str]:
        return self.properties.get("DestinationResourceArn")

    @property
    def delivery_destination_type(self) -> Optional[str]:
        return self.properties.get("DeliveryDestinationType")

    @property
    def output_format(self) -> Optional[str]:
        return self.properties.get("OutputFormat")


class CfnDelivery(CfnResource):
    """Ligação entre uma delivery source e um delivery destination (`AWS::Logs::Delivery`)."""

    CFN_RESOURCE_TYPE_NAME = "AWS::Logs::Delivery"

    def __init__(
        self,
        scope: Construct,
        id: str,
        *,
        delivery_source_name: Any,
        delivery_destination_arn: str,
        record_fields: Optional[List[str]] = None,
    ):
        properties = {
            "DeliverySourceName": delivery_source_name,
            "DeliveryDestinationArn": delivery_destination_arn,
        }
        # ausente = usar o default do destino
        if record_fields is not None:
            properties["RecordFields"] = list(record_fields)
        super().__init__(scope, id, properties=properties)

    @property
    def delivery_source_name(self) -> Any:
        return self.properties["DeliverySourceName"]

    @property
    def delivery_destination_arn(self) -> str:
        return self.properties["DeliveryDestinationArn"]

    @property
    def record_fields(self) -> Optional[List[str]]:
        return self.properties.get("RecordFields")
