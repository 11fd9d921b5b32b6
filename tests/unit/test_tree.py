from __future__ import annotations

import pytest

from schemadesigner.exceptions import FieldTreeError
from schemadesigner.tree import (
    append_child,
    collect_field_names,
    find_path,
    get_field,
    iter_fields,
    remove_field,
    replace_field,
)
from schemadesigner.typing.models import SchemaField


def _tree() -> SchemaField:
    return SchemaField(
        name="root",
        type="object",
        children=[
            SchemaField(name="name", type="string"),
            SchemaField(
                name="address",
                type="object",
                children=[SchemaField(name="city", type="string"), SchemaField(name="zip", type="string")],
            ),
        ],
    )


def test_get_field_follows_child_indices() -> None:
    root = _tree()

    assert get_field(root, ()) is root
    assert get_field(root, (1, 0)).name == "city"


def test_get_field_raises_on_missing_path() -> None:
    with pytest.raises(FieldTreeError, match=r"path: 1\.5"):
        get_field(_tree(), (1, 5))


def test_replace_field_keeps_previous_snapshot() -> None:
    root = _tree()

    updated = replace_field(root, (1, 0), SchemaField(name="town", type="string"))

    assert collect_field_names(updated) == ["root", "name", "address", "town", "zip"]
    assert collect_field_names(root) == ["root", "name", "address", "city", "zip"]
    assert updated.children[0] is root.children[0]
    assert updated.children[1].children[1] is root.children[1].children[1]


def test_replace_field_at_root_returns_replacement() -> None:
    replacement = SchemaField(name="other", type="string")

    assert replace_field(_tree(), (), replacement) is replacement


def test_remove_field_drops_subtree() -> None:
    root = _tree()

    updated = remove_field(root, (1,))

    assert collect_field_names(updated) == ["root", "name"]
    assert len(root.children) == 2


def test_remove_root_is_ignored() -> None:
    root = _tree()

    assert remove_field(root, ()) is root


def test_remove_field_raises_on_missing_path() -> None:
    with pytest.raises(FieldTreeError):
        remove_field(_tree(), (4,))


def test_append_child_adds_last_child() -> None:
    root = _tree()

    updated = append_child(root, (1,), SchemaField(name="country", type="string"))

    assert [child.name for child in updated.children[1].children] == ["city", "zip", "country"]
    assert [child.name for child in root.children[1].children] == ["city", "zip"]


def test_iter_fields_walks_parents_first() -> None:
    paths = [path for path, _node in iter_fields(_tree())]

    assert paths == [(), (0,), (1,), (1, 0), (1, 1)]


def test_find_path_uses_identity() -> None:
    root = _tree()
    city = root.children[1].children[0]

    assert find_path(root, city) == (1, 0)
    assert find_path(root, SchemaField(name="city", type="string")) is None
