# tests/services/logs/test_delivery.py
"""
Testes da ligação de entrega de logs (source → destination → delivery).

Este módulo valida as implementações de `ILogsDelivery.bind`.

Os testes asseguram que:
- a delivery source é reutilizada para (log_type, scope, arn) idênticos
- variar qualquer um dos três produz sources distintas
- o nome da source é minúsculo, hifenizado e tem no máximo 60 caracteres
- cada bind cria um destino novo com os campos exigidos pelo tipo
- a delivery depende explicitamente de source e destino
- origens não resolvíveis falham na construção (UnresolvableSource)
- destinos do chamador podem ser referências externas com `attr_arn`

Decisões arquiteturais:
    - Buckets, streams e log groups são CfnResources simples (só o ARN importa)
    - Cada teste monta sua própria stack

Limites explícitos:
    - Não valida políticas de bucket nem grants de KMS
"""

import logging
import re

import pytest

try:
    from construct_mixins.core.exceptions import UnresolvableSource
    from construct_mixins.core.tree.construct import CfnResource, Construct
    from construct_mixins.core.tree.names import unique_id
    from construct_mixins.services.logs.delivery import (
        DestinationLogsDelivery,
        FirehoseLogsDelivery,
        ILogsDelivery,
        LogGroupLogsDelivery,
        LogsDeliveryConfig,
        S3LogsDelivery,
        XRayLogsDelivery,
        delivery_id,
        get_or_create_delivery_source,
        make_dest_id,
    )
    from construct_mixins.services.logs.destinations import S3LogsDeliveryPermissionsVersion
    from construct_mixins.services.logs.resources import (
        CfnDelivery,
        CfnDeliveryDestination,
        CfnDeliverySource,
    )
except Exception as e:  # noqa: BLE001
    UnresolvableSource = None
    CfnResource = None
    Construct = None
    unique_id = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o pacote de entrega de logs esteja disponível para os testes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing logs delivery modules. Implement:\n"
            "- src/construct_mixins/services/logs/delivery.py\n"
            "- src/construct_mixins/services/logs/destinations.py\n"
            "- src/construct_mixins/services/logs/resources.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.fixture
def logs_stack():
    """
    Stack com uma distribuição (origem de logs) e alvos de entrega.

    Estrutura:
        Stack
        ├── Dist       (AWS::CloudFront::Distribution)
        ├── Dist2      (AWS::CloudFront::Distribution)
        ├── LogBucket  (AWS::S3::Bucket)
        ├── OtherBucket(AWS::S3::Bucket)
        ├── Stream     (AWS::KinesisFirehose::DeliveryStream)
        ├── Group      (AWS::Logs::LogGroup)
        └── Key        (AWS::KMS::Key)
    """
    _require_imports()
    root = Construct(None, "Stack")
    return {
        "root": root,
        "dist": CfnResource(root, "Dist", type="AWS::CloudFront::Distribution"),
        "dist2": CfnResource(root, "Dist2", type="AWS::CloudFront::Distribution"),
        "bucket": CfnResource(root, "LogBucket", type="AWS::S3::Bucket"),
        "other_bucket": CfnResource(root, "OtherBucket", type="AWS::S3::Bucket"),
        "stream": CfnResource(root, "Stream", type="AWS::KinesisFirehose::DeliveryStream"),
        "group": CfnResource(root, "Group", type="AWS::Logs::LogGroup"),
        "key": CfnResource(root, "Key", type="AWS::KMS::Key"),
    }


def _sources(scope):
    return [c for c in scope.node.children if isinstance(c, CfnDeliverySource)]


# =====================================================
# Helpers de nomes
# =====================================================

def test_make_dest_id():
    _require_imports()
    assert make_dest_id("ACCESS_LOGS") == "Destaccess-logs"
    assert make_dest_id("TRACES") == "Desttraces"


def test_delivery_id_shape(logs_stack):
    _require_imports()
    out = delivery_id("S3", "ACCESS_LOGS", logs_stack["dist"], logs_stack["bucket"])
    assert out.startswith("CdkS3AccessLogsDelivery")
    assert "/" not in out


# =====================================================
# Delivery source
# =====================================================

def test_source_name_is_bounded_lowercase_hyphenated(logs_stack):
    """
    Verifica o nome `cdk-<logtype>-source-<nome único>` com até 60 caracteres.
    """
    _require_imports()
    dist = logs_stack["dist"]
    source = get_or_create_delivery_source(dist, "ACCESS_LOGS", dist.attr_arn)

    assert source.node.scope is dist
    assert source.name.startswith("cdk-accesslogs-source-")
    assert len(source.name) <= 60
    assert re.fullmatch(r"[a-z0-9-]+", source.name)
    assert source.log_type == "ACCESS_LOGS"
    assert source.resource_arn == dist.attr_arn
    assert source.cfn_resource_type == "AWS::Logs::DeliverySource"


def test_source_dedup_same_identity(logs_stack, caplog):
    """
    Dois binds com (log_type, scope, arn) idênticos compartilham a mesma source.
    """
    _require_imports()
    dist = logs_stack["dist"]
    with caplog.at_level(logging.DEBUG, logger="construct_mixins.services.logs.delivery"):
        first = S3LogsDelivery(logs_stack["bucket"]).bind(dist, "ACCESS_LOGS", dist.attr_arn)
        second = S3LogsDelivery(logs_stack["other_bucket"]).bind(dist, "ACCESS_LOGS", dist.attr_arn)

    assert first.delivery_source is second.delivery_source
    assert first.delivery_destination is not second.delivery_destination
    assert len(_sources(dist)) == 1
    assert any("Reusing delivery source" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("vary", ["log_type", "scope", "arn"])
def test_source_dedup_differs_on_any_component(logs_stack, vary):
    """
    Variar qualquer componente da identidade produz duas sources distintas.
    """
    _require_imports()
    dist = logs_stack["dist"]
    a = get_or_create_delivery_source(dist, "ACCESS_LOGS", dist.attr_arn)

    if vary == "log_type":
        b = get_or_create_delivery_source(dist, "CONNECTION_LOGS", dist.attr_arn)
    elif vary == "scope":
        b = get_or_create_delivery_source(logs_stack["dist2"], "ACCESS_LOGS", dist.attr_arn)
    else:
        b = get_or_create_delivery_source(dist, "ACCESS_LOGS", "arn:aws:cloudfront::123:distribution/OTHER")

    assert a is not b
    assert a.name != b.name


@pytest.mark.parametrize("log_type,arn", [("", "arn:x"), ("ACCESS_LOGS", ""), (None, "arn:x")])
def test_unresolvable_source(logs_stack, log_type, arn):
    _require_imports()
    dist = logs_stack["dist"]
    with pytest.raises(UnresolvableSource):
        S3LogsDelivery(logs_stack["bucket"]).bind(dist, log_type, arn)
    assert dist.node.children == []


def test_log_type_too_long_for_name(logs_stack):
    _require_imports()
    dist = logs_stack["dist"]
    with pytest.raises(UnresolvableSource) as exc:
        get_or_create_delivery_source(dist, "X" * 45, dist.attr_arn)
    assert exc.value.details["log_type"] == "X" * 45


# =====================================================
# Destinos e delivery
# =====================================================

def test_s3_bind_returns_wired_triple(logs_stack):
    """
    Verifica a tripla completa para S3 e as dependências explícitas.
    """
    _require_imports()
    dist, bucket, key = logs_stack["dist"], logs_stack["bucket"], logs_stack["key"]
    delivery = S3LogsDelivery(
        bucket,
        encryption_key=key,
        output_format="parquet",
        record_fields=["date", "time"],
        mandatory_fields=["time"],
    )
    assert isinstance(delivery, ILogsDelivery)

    out = delivery.bind(dist, "ACCESS_LOGS", dist.attr_arn)

    assert isinstance(out, LogsDeliveryConfig)
    source, destination, cfn_delivery = out
    assert isinstance(destination, CfnDeliveryDestination)
    assert isinstance(cfn_delivery, CfnDelivery)

    assert destination.delivery_destination_type == "S3"
    assert destination.destination_resource_arn == bucket.attr_arn
    assert destination.output_format == "parquet"
    assert destination.permissions_version == S3LogsDeliveryPermissionsVersion.V2
    assert destination.encryption_key_arn == key.attr_arn
    assert destination.node.id == "Destaccess-logs"
    assert len(destination.name) <= 60 and destination.name == destination.name.lower()

    assert cfn_delivery.delivery_source_name == source.name
    assert cfn_delivery.delivery_destination_arn == destination.attr_arn
    assert cfn_delivery.record_fields == ["date", "time"]
    assert cfn_delivery.node.dependencies == [source, destination]


def test_s3_permissions_v1(logs_stack):
    _require_imports()
    dist = logs_stack["dist"]
    out = S3LogsDelivery(
        logs_stack["bucket"], permissions_version=S3LogsDeliveryPermissionsVersion.V1
    ).bind(dist, "ACCESS_LOGS", dist.attr_arn)
    assert out.delivery_destination.permissions_version == S3LogsDeliveryPermissionsVersion.V1


def test_record_fields_absent_by_default(logs_stack):
    _require_imports()
    dist = logs_stack["dist"]
    out = S3LogsDelivery(logs_stack["bucket"], mandatory_fields=["time"]).bind(
        dist, "ACCESS_LOGS", dist.attr_arn
    )
    assert out.delivery.record_fields is None
    assert "RecordFields" not in out.delivery.properties


def test_firehose_and_log_group_destinations(logs_stack):
    _require_imports()
    dist = logs_stack["dist"]
    fh = FirehoseLogsDelivery(logs_stack["stream"]).bind(dist, "ACCESS_LOGS", dist.attr_arn)
    cwl = LogGroupLogsDelivery(logs_stack["group"]).bind(dist, "ACCESS_LOGS", dist.attr_arn)

    assert fh.delivery_destination.delivery_destination_type == "FH"
    assert fh.delivery_destination.destination_resource_arn == logs_stack["stream"].attr_arn
    assert cwl.delivery_destination.delivery_destination_type == "CWL"
    assert cwl.delivery_destination.destination_resource_arn == logs_stack["group"].attr_arn
    assert fh.delivery_source is cwl.delivery_source


def test_xray_destination_has_no_resource_arn(logs_stack):
    _require_imports()
    dist = logs_stack["dist"]
    out = XRayLogsDelivery().bind(dist, "TRACES", dist.attr_arn)

    assert out.delivery_destination.delivery_destination_type == "XRAY"
    assert out.delivery_destination.destination_resource_arn is None
    assert out.delivery_destination.source_resource == dist.attr_arn


def test_caller_supplied_destination(logs_stack):
    """
    Verifica que um destino existente é reutilizado, não recriado.
    """
    _require_imports()
    dist = logs_stack["dist"]
    shared = CfnDeliveryDestination(
        logs_stack["root"],
        "SharedDest",
        name="shared",
        destination_resource_arn="arn:aws:logs:us-east-1:123:destination:shared",
    )
    out = DestinationLogsDelivery(shared).bind(dist, "ACCESS_LOGS", dist.attr_arn)

    assert out.delivery_destination is shared
    assert out.delivery.delivery_destination_arn == shared.attr_arn
    assert out.delivery.node.dependencies == [out.delivery_source, shared]

    container = out.delivery.node.scope
    assert container.node.scope is dist
    assert container.node.id == delivery_id(
        "Dest" + unique_id(shared), "ACCESS_LOGS", dist, out.delivery_source
    )
    assert container.node.id.startswith("CdkDestStackSharedDest")


def test_destination_reference_outside_tree(logs_stack):
    """
    Verifica um destino externo (ex.: outra conta) conhecido apenas pelo ARN.
    """
    _require_imports()

    class _DestinationRef:
        attr_arn = "arn:aws:logs:us-east-1:999:delivery-destination:central"

    dist, dist2 = logs_stack["dist"], logs_stack["dist2"]
    ref = _DestinationRef()
    delivery = DestinationLogsDelivery(ref, record_fields=["a"], mandatory_fields=["b"])

    out = delivery.bind(dist, "ACCESS_LOGS", dist.attr_arn)
    other = delivery.bind(dist2, "ACCESS_LOGS", dist2.attr_arn)

    assert out.delivery_destination is ref
    assert out.delivery.delivery_destination_arn == ref.attr_arn
    assert out.delivery.record_fields == ["a", "b"]
    assert out.delivery.node.dependencies == [out.delivery_source]
    assert out.delivery.node.scope.node.id.startswith("CdkDest")
    assert other.delivery.node.scope.node.scope is dist2


def test_caller_supplied_destination_requires_arn():
    _require_imports()
    with pytest.raises(ValueError):
        DestinationLogsDelivery(object())


def test_destination_requires_target_arn(logs_stack):
    """
    Verifica que o alvo sem ARN é rejeitado antes de qualquer nó ser criado.
    """
    _require_imports()
    with pytest.raises(ValueError):
        FirehoseLogsDelivery(object())
    with pytest.raises(ValueError):
        S3LogsDelivery(logs_stack["bucket"], encryption_key=object())
    assert logs_stack["dist"].node.children == []
