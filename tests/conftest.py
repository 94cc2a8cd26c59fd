# tests/conftest.py
"""
Fixtures compartilhados para testes do construct-mixins.

Este módulo define fixtures reutilizáveis que fornecem:
- árvores de constructs pequenas e determinísticas
- mixins dummy (duck typing) que registram cada chamada
- configuração YAML de exemplo para o loader

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Árvores são montadas em memória (sem I/O)
    - Mixins dummy utilizam duck typing em vez de herança
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Cada teste recebe uma árvore nova (sem estado compartilhado)
    - Nenhuma fixture aplica mixins por conta própria

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica de domínio
"""

import pytest


# =====================================================
# Árvores
# =====================================================

@pytest.fixture
def small_tree():
    """
    Árvore R → (A → C, B), com raiz de id vazio.

    Paths resultantes: "" (raiz), "A", "A/C", "B".

    Returns:
        dict: nós indexados por nome ("R", "A", "B", "C").
    """
    from construct_mixins.core.tree.construct import Construct

    root = Construct(None, "")
    a = Construct(root, "A")
    c = Construct(a, "C")
    b = Construct(root, "B")
    return {"R": root, "A": a, "B": b, "C": c}


@pytest.fixture
def named_root_tree():
    """
    Árvore R → (A → C, B) em que a raiz tem id "R".

    Paths resultantes: "R", "R/A", "R/A/C", "R/B".
    """
    from construct_mixins.core.tree.construct import Construct

    root = Construct(None, "R")
    a = Construct(root, "A")
    c = Construct(a, "C")
    b = Construct(root, "B")
    return {"R": root, "A": a, "B": b, "C": c}


@pytest.fixture
def stack():
    """
    Stack com recursos de baixo nível de tipos variados.

    Estrutura:
        Stack
        ├── Bucket (L2) → Resource (AWS::S3::Bucket)
        ├── ProdQueue   (AWS::SQS::Queue)
        ├── DevQueue    (AWS::SQS::Queue)
        └── Dist        (AWS::CloudFront::Distribution)
    """
    from construct_mixins.core.tree.construct import CfnResource, Construct

    class CfnBucket(CfnResource):
        CFN_RESOURCE_TYPE_NAME = "AWS::S3::Bucket"

    class CfnQueue(CfnResource):
        CFN_RESOURCE_TYPE_NAME = "AWS::SQS::Queue"

    root = Construct(None, "Stack")
    bucket = Construct(root, "Bucket")
    bucket_resource = CfnBucket(bucket, "Resource")
    prod = CfnQueue(root, "ProdQueue")
    dev = CfnQueue(root, "DevQueue")
    dist = CfnResource(root, "Dist", type="AWS::CloudFront::Distribution")
    return {
        "root": root,
        "bucket": bucket,
        "bucket_resource": bucket_resource,
        "prod": prod,
        "dev": dev,
        "dist": dist,
        "CfnBucket": CfnBucket,
        "CfnQueue": CfnQueue,
    }


# =====================================================
# Mixins dummy
# =====================================================

@pytest.fixture
def RecordingMixin():
    """
    Fixture factory que fornece uma classe de mixin duck-typed.

    O mixin retornado registra cada chamada de `supports` e `apply_to`
    (paths, na ordem) e grava `touched_by` no nó aplicado. O predicado de
    suporte é injetável.

    Returns:
        type: Classe _RecordingMixin que pode ser instanciada pelos testes.
    """

    class _RecordingMixin:
        FQN = "construct_mixins.tests.RecordingMixin"

        def __init__(self, name="m", predicate=None, log=None):
            self.name = name
            self.predicate = predicate or (lambda c: True)
            self.supports_calls = []
            self.apply_calls = []
            self.log = log if log is not None else []

        def supports(self, construct):
            self.supports_calls.append(construct.node.path)
            return self.predicate(construct)

        def apply_to(self, construct):
            self.apply_calls.append(construct.node.path)
            self.log.append((self.name, construct.node.path))
            touched = getattr(construct, "touched_by", [])
            construct.touched_by = touched + [self.name]

    return _RecordingMixin


# =====================================================
# Config
# =====================================================

@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de override local: estreita a allow-list a dois namespaces embutidos."""
    return """\
provenance:
  allowed_prefixes:
    - construct_mixins.
    - aws_cdk.
"""
