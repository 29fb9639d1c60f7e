"""OneOf node."""

# ruff: noqa: D105,D107

from __future__ import annotations

from typing import TYPE_CHECKING

from protoast.nodes.base import Entity, merge_imports

if TYPE_CHECKING:
    from google.protobuf.descriptor_pb2 import OneofDescriptorProto

    from protoast.nodes.field import Field
    from protoast.nodes.file import File
    from protoast.nodes.message import Message
    from protoast.walk import Visitor


class OneOf(Entity):
    """A ``oneof`` declared in a message.

    The oneof does not own its fields: they belong to the message and appear in :attr:`Message.fields` too. Syntax,
    package, file and build-target state come from the owning message.

    A oneof has no children of its own for path lookup, so :meth:`child_at_path` resolves any non-empty path to
    ``None``.
    """

    __slots__ = ("_fields",)

    def __init__(self, descriptor: OneofDescriptorProto | None = None, *, fully_qualified_name: str = "") -> None:
        super().__init__(descriptor, fully_qualified_name=fully_qualified_name)
        self._fields: list[Field] = []

    @property
    def descriptor(self) -> OneofDescriptorProto | None:
        return self._desc  # type: ignore[return-value]

    @property
    def message(self) -> Message:
        """The message declaring this oneof.

        Raises:
            UnattachedNodeError: If the oneof was never added to a message.
        """
        return self._parent()

    @property
    def fields(self) -> list[Field]:
        """Member fields in declaration order."""
        return list(self._fields)

    def imports(self) -> list[File]:
        """Files required by the member fields, each listed once regardless of how many fields use it."""
        return merge_imports(f.imports() for f in self._fields)

    def is_synthetic(self) -> bool:
        """True when the compiler introduced this oneof to carry a proto3 ``optional`` field.

        Synthetic oneofs never appear in the source. A oneof without fields is not synthetic.
        """
        return any(f.is_synthetic_optional for f in self._fields)

    def _add_field(self, field: Field) -> None:
        self._fields.append(field)
        field._set_oneof(self)  # pyright: ignore[reportPrivateUsage]

    def _set_message(self, message: Message) -> None:
        self._attach(message)

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_oneof(self)
