# tests/core/tree/test_names.py
"""
Testes dos nomes determinísticos derivados do path.

Os testes asseguram que:
- o mesmo path produz sempre o mesmo nome
- paths diferentes produzem nomes diferentes
- `unique_resource_name` respeita tamanho máximo e minúsculas
- componentes `Default` são ignorados e `Resource` não aparece na parte humana
"""

import re

import pytest

try:
    from construct_mixins.core.exceptions import ConstructTreeError
    from construct_mixins.core.tree.construct import Construct
    from construct_mixins.core.tree.names import unique_id, unique_resource_name
except Exception as e:  # noqa: BLE001
    ConstructTreeError = None
    Construct = None
    unique_id = None
    unique_resource_name = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing names module. Implement:\n"
            "- src/construct_mixins/core/tree/names.py (unique_id, unique_resource_name)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def test_top_level_unique_id_is_sanitized_id():
    _require_imports()
    root = Construct(None, "")
    stack = Construct(root, "My-Stack")
    assert unique_id(stack) == "MyStack"


def test_nested_unique_id_has_hash_suffix():
    """
    Verifica a forma `<parte humana><HASH8>` e o determinismo do hash.
    """
    _require_imports()
    root = Construct(None, "")
    stack = Construct(root, "Stack")
    bucket = Construct(stack, "Bucket")
    resource = Construct(bucket, "Resource")

    uid = unique_id(resource)
    assert re.fullmatch(r"StackBucket[0-9A-F]{8}", uid)

    other_root = Construct(None, "")
    other = Construct(Construct(Construct(other_root, "Stack"), "Bucket"), "Resource")
    assert unique_id(other) == uid


def test_default_component_is_ignored():
    _require_imports()
    root = Construct(None, "")
    a = Construct(Construct(root, "Stack"), "Thing")
    hidden = Construct(a, "Default")
    assert unique_id(hidden) == unique_id(a)


def test_different_paths_different_ids():
    _require_imports()
    root = Construct(None, "")
    stack = Construct(root, "Stack")
    a = Construct(stack, "A")
    b = Construct(stack, "B")
    assert unique_id(a) != unique_id(b)


def test_root_has_no_unique_id():
    _require_imports()
    with pytest.raises(ConstructTreeError):
        unique_id(Construct(None, ""))


def test_unique_resource_name_is_lowercase_and_bounded():
    """
    Verifica que o nome físico é minúsculo, separado por hífens e truncado.
    """
    _require_imports()
    root = Construct(None, "")
    deep = root
    for i in range(10):
        deep = Construct(deep, f"VeryLongSegmentName{i}")

    name = unique_resource_name(deep, max_length=40)
    assert len(name) <= 40
    assert name == name.lower()
    assert re.fullmatch(r"[a-z0-9-]+-[0-9a-f]{8}", name)


def test_unique_resource_name_rejects_tiny_budget():
    _require_imports()
    root = Construct(None, "")
    a = Construct(Construct(root, "Stack"), "A")
    with pytest.raises(ValueError):
        unique_resource_name(a, max_length=9)
