"""Error handling for protoast.

Every exception raised by the library derives from :class:`ProtoAstError`. Lookup misses (e.g.
:meth:`~protoast.nodes.Node.child_at_path` on an unknown path) are not errors and return ``None`` instead.
Exceptions raised by visitors or by a custom extension decoder are never wrapped; they reach the caller unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from google.protobuf.message import Message

    from protoast.nodes.base import Node


class ProtoAstError(Exception):
    """Base class for all protoast errors."""


class UnattachedNodeError(ProtoAstError):
    """Raised when a node's context is queried before the node was attached to a parent.

    Context accessors such as ``syntax``, ``package``, ``file`` and ``build_target`` delegate to the parent node.
    Querying them on a node that has not been attached (or whose owning tree has already been released) is a
    construction-order defect in the caller, not a data condition.

    Attributes:
        node: The node that was queried.
    """

    def __init__(self, node: Node) -> None:
        """Create an UnattachedNodeError.

        Args:
            node: The node that was queried.
        """
        super().__init__(f"{type(node).__name__} {node.name!r} is not attached to a parent")
        self.node = node


class NodeAttachedError(ProtoAstError):
    """Raised when a node is attached to a second parent.

    Attributes:
        node: The node that was already attached.
    """

    def __init__(self, node: Node) -> None:
        """Create a NodeAttachedError.

        Args:
            node: The node that was already attached.
        """
        super().__init__(f"{type(node).__name__} {node.name!r} is already attached")
        self.node = node


class ResolutionError(ProtoAstError):
    """Raised by the builder when a reference cannot be resolved.

    References are type names on fields, extendees, method input/output types, and file dependencies. Type names are
    only looked up in the referencing file, its direct dependencies, and files those dependencies import
    publicly.

    Attributes:
        file: Path of the file holding the reference.
        reference: The unresolved type name or dependency path.
    """

    def __init__(self, file: str, reference: str, detail: str = "cannot resolve reference") -> None:
        """Create a ResolutionError.

        Args:
            file: Path of the file holding the reference.
            reference: The unresolved type name or dependency path.
            detail: Short description of what failed.
        """
        super().__init__(f"{file}: {detail} {reference!r}")
        self.file = file
        self.reference = reference


class ExtensionError(ProtoAstError):
    """Raised by the default extension decoder when an extension cannot be read from an options message.

    Attributes:
        extension: The extension field descriptor that was requested, or ``None``.
        options: The options message that was inspected.
    """

    def __init__(self, message: str, *, extension: Any = None, options: Message | None = None) -> None:
        """Create an ExtensionError.

        Args:
            message: Human-readable error description.
            extension: The requested extension field descriptor.
            options: The options message that was inspected.
        """
        super().__init__(message)
        self.message = message
        self.extension = extension
        self.options = options
