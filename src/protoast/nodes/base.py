"""Base classes shared by every AST node.

The tree is built once and is read-only afterwards. Children keep a weak back-reference to their parent; the parent's
child lists own the nodes, so the caller must keep the tree root alive while querying it. No locking is done: the
tree is safe for concurrent reads only once construction has finished.
"""

# ruff: noqa: D105,D107

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Any, ClassVar

from protoast.errors import NodeAttachedError, UnattachedNodeError
from protoast.extension import decode_extension
from protoast.names import Name

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence

    from google.protobuf.descriptor import FieldDescriptor
    from google.protobuf.message import Message

    from protoast.nodes.file import File, Syntax
    from protoast.nodes.package import Package
    from protoast.source import SourceCodeInfo
    from protoast.walk import Visitor


class Node:
    """Base class for all AST nodes.

    A node wraps one descriptor record (``None`` for packages) and knows its name, its fully-qualified name, how to
    accept a visitor, and how to resolve source-location paths beneath itself.
    """

    __slots__ = ("__weakref__", "_desc", "_fqn", "_name", "_parent_ref", "_source")

    # Descriptor field number -> attribute holding the matching child list, for child_at_path.
    _CHILD_PATHS: ClassVar[Mapping[int, str]] = {}

    def __init__(
        self,
        descriptor: Message | None = None,
        *,
        name: str | None = None,
        fully_qualified_name: str = "",
    ) -> None:
        self._desc = descriptor
        if name is None:
            name = getattr(descriptor, "name", "") if descriptor is not None else ""
        self._name = Name(name)
        self._fqn = fully_qualified_name
        self._parent_ref: weakref.ref[Node] | None = None
        self._source: SourceCodeInfo | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._fqn or self._name!r})"

    @property
    def name(self) -> Name:
        """The declared identifier."""
        return self._name

    @property
    def fully_qualified_name(self) -> str:
        """Absolute dotted path, e.g. ``.pkg.Outer.Inner``.

        Assigned once, at construction or on attachment, and never recomputed.
        """
        return self._fqn

    @property
    def descriptor(self) -> Message | None:
        """The wrapped descriptor record."""
        return self._desc

    @property
    def source_code_info(self) -> SourceCodeInfo | None:
        """Comments and span attributed to this node, or ``None`` when the compiler recorded none."""
        return self._source

    def extension(self, extension: FieldDescriptor | None, destination: Message | None = None) -> Any:
        """Decode a custom option *extension* from this node's descriptor options.

        Returns ``None`` when the descriptor is missing, has no options, or does not carry the extension. Decoder
        errors propagate unchanged. See :func:`protoast.extension.decode_extension`.
        """
        return decode_extension(self._desc, extension, destination)

    def accept(self, visitor: Visitor | None) -> None:
        """Dispatch *visitor* to this node, then to its children if the visit asks to descend.

        A ``None`` visitor visits nothing but still recurses into every child. Exceptions raised by a visit method
        abort the walk and propagate unchanged.
        """
        if visitor is not None and not self._dispatch(visitor):
            return
        for child in self._children():
            child.accept(visitor)

    def child_at_path(self, path: Sequence[int] | None) -> Node | None:
        """Resolve a source-location path of ``(field_number, index)`` pairs to a node beneath this one.

        An empty path resolves to this node. A path that this node kind does not understand, or whose index is out of
        range, resolves to ``None``.
        """
        if not path:
            return self
        if len(path) % 2:
            return None
        attr = self._CHILD_PATHS.get(path[0])
        if attr is None:
            return None
        children: list[Node] = getattr(self, attr)
        index = path[1]
        if not 0 <= index < len(children):
            return None
        return children[index].child_at_path(path[2:])

    def _dispatch(self, visitor: Visitor) -> bool:
        raise NotImplementedError

    def _children(self) -> Iterator[Node]:
        return iter(())

    def _attach(self, parent: Node) -> None:
        if self._parent_ref is not None:
            raise NodeAttachedError(self)
        self._parent_ref = weakref.ref(parent)
        if not self._fqn:
            self._fqn = self._qualify(parent)

    def _qualify(self, parent: Node) -> str:
        return f"{parent.fully_qualified_name}.{self._name}"

    def _parent(self) -> Any:
        parent = self._parent_ref() if self._parent_ref is not None else None
        if parent is None:
            raise UnattachedNodeError(self)
        return parent

    def _set_source_code_info(self, info: SourceCodeInfo) -> None:
        if self._source is None:
            self._source = info


class Entity(Node):
    """A node declared inside a file.

    Syntax, package, file and build-target state are never stored on the entity; each accessor asks the parent at
    query time, so a build-target flag set on the file after construction is seen by every descendant.
    """

    __slots__ = ()

    @property
    def syntax(self) -> Syntax:
        return self._parent().syntax

    @property
    def package(self) -> Package:
        return self._parent().package

    @property
    def file(self) -> File:
        return self._parent().file

    @property
    def build_target(self) -> bool:
        return self._parent().build_target

    def imports(self) -> list[File]:
        """Files, other than this entity's own, that declare types this entity depends on."""
        return []


def merge_imports(groups: Iterable[list[File]], exclude: File | None = None) -> list[File]:
    """Union several import lists, keeping first-seen order and de-duplicating by file identity."""
    seen: dict[int, File] = {}
    for group in groups:
        for imported in group:
            if imported is not exclude and id(imported) not in seen:
                seen[id(imported)] = imported
    return list(seen.values())
