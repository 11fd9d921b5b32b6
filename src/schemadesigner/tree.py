"""Persistent edits and walks over field trees.

Fields are immutable: every edit rebuilds the path from the root to the edited
node and shares untouched subtrees, so earlier roots stay valid snapshots.
Nodes are addressed by paths of child indices, `()` being the root.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from schemadesigner.exceptions import FieldTreeError
from schemadesigner.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from schemadesigner.typing.models import SchemaField

logger = get_logger(__name__)

FieldPath = tuple[int, ...]


def get_field(root: SchemaField, path: FieldPath) -> SchemaField:
    """Return the node at `path`.

    Args:
        root (SchemaField): Tree root.
        path (FieldPath): Child indices from the root.

    Raises:
        FieldTreeError: If the path does not exist.

    Returns:
        SchemaField: Addressed node.
    """
    node = root
    for depth, index in enumerate(path):
        if not 0 <= index < len(node.children):
            raise FieldTreeError(message="No field at path", path=path[: depth + 1])
        node = node.children[index]
    return node


def _rebuild(
    node: SchemaField,
    path: FieldPath,
    edit: Callable[[SchemaField], SchemaField | None],
    full_path: FieldPath,
) -> SchemaField | None:
    if not path:
        return edit(node)
    index, rest = path[0], path[1:]
    if not 0 <= index < len(node.children):
        raise FieldTreeError(message="No field at path", path=full_path[: len(full_path) - len(rest)])
    replacement = _rebuild(node.children[index], rest, edit, full_path)
    children = list(node.children)
    if replacement is None:
        del children[index]
    else:
        children[index] = replacement
    return node.model_copy(update={"children": tuple(children)})


def replace_field(root: SchemaField, path: FieldPath, replacement: SchemaField) -> SchemaField:
    """Return a new root where the node at `path` is `replacement`.

    Args:
        root (SchemaField): Tree root.
        path (FieldPath): Node to replace.
        replacement (SchemaField): New subtree.

    Returns:
        SchemaField: New root.
    """
    return cast("SchemaField", _rebuild(root, path, lambda _node: replacement, path))


def remove_field(root: SchemaField, path: FieldPath) -> SchemaField:
    """Return a new root without the subtree at `path`.

    The root cannot be removed: removing `()` returns `root` unchanged.

    Args:
        root (SchemaField): Tree root.
        path (FieldPath): Node to remove.

    Returns:
        SchemaField: New root.
    """
    if not path:
        logger.info("Ignoring removal of the root field", extra={"field_name": root.name})
        return root
    return cast("SchemaField", _rebuild(root, path, lambda _node: None, path))


def append_child(root: SchemaField, path: FieldPath, child: SchemaField) -> SchemaField:
    """Return a new root where `child` is appended to the node at `path`.

    Args:
        root (SchemaField): Tree root.
        path (FieldPath): Parent node.
        child (SchemaField): Appended subtree.

    Returns:
        SchemaField: New root.
    """
    return replace_field(root, path, _with_child(get_field(root, path), child))


def _with_child(parent: SchemaField, child: SchemaField) -> SchemaField:
    return parent.model_copy(update={"children": (*parent.children, child)})


def iter_fields(root: SchemaField, path: FieldPath = ()) -> Iterator[tuple[FieldPath, SchemaField]]:
    """Walk the tree depth-first, parents before children.

    Args:
        root (SchemaField): Subtree root.
        path (FieldPath): Path of `root` in the enclosing tree.

    Yields:
        tuple[FieldPath, SchemaField]: Path and node.
    """
    yield path, root
    for index, child in enumerate(root.children):
        yield from iter_fields(child, (*path, index))


def collect_field_names(root: SchemaField) -> list[str]:
    """Return every field name in walk order, root included.

    Args:
        root (SchemaField): Tree root.

    Returns:
        list[str]: Names, duplicates kept.
    """
    return [node.name for _path, node in iter_fields(root)]


def find_path(root: SchemaField, target: SchemaField) -> FieldPath | None:
    """Locate a node by identity.

    Args:
        root (SchemaField): Tree root.
        target (SchemaField): Node object to find.

    Returns:
        FieldPath | None: Path of the node, None when it is not part of the tree.
    """
    for path, node in iter_fields(root):
        if node is target:
            return path
    return None
