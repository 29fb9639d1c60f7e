"""Field and extension nodes, and the resolved type of a field."""

# ruff: noqa: D105,D107

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING

from google.protobuf.descriptor_pb2 import FieldDescriptorProto

from protoast.nodes.base import Entity, merge_imports
from protoast.nodes.file import Syntax
from protoast.nodes.message import Message

if TYPE_CHECKING:
    from protoast.nodes.enum import Enum
    from protoast.nodes.file import File
    from protoast.nodes.oneof import OneOf
    from protoast.walk import Visitor


class FieldType:
    """The type of a field, with message and enum references resolved by the builder.

    Scalar fields have neither :attr:`embed` nor :attr:`enum`. A map field is a repeated field whose embedded message
    is a map entry; its :attr:`key` and :attr:`value` are the types of the entry's two fields.
    """

    __slots__ = ("_embed", "_enum", "_field_ref")

    def __init__(self, field: Field) -> None:
        self._field_ref = weakref.ref(field)
        self._embed: Message | None = None
        self._enum: Enum | None = None

    def __repr__(self) -> str:
        return f"FieldType({self.type_name or self.proto_type!r})"

    @property
    def field(self) -> Field:
        field = self._field_ref()
        assert field is not None
        return field

    @property
    def proto_type(self) -> int:
        """The ``FieldDescriptorProto.Type`` value, or 0 when the field has no descriptor."""
        desc = self.field.descriptor
        return desc.type if desc is not None else 0

    @property
    def type_name(self) -> str:
        """The referenced type as written by the compiler, e.g. ``.pkg.Msg``; empty for scalars."""
        desc = self.field.descriptor
        return desc.type_name if desc is not None else ""

    @property
    def embed(self) -> Message | None:
        return self._embed

    @property
    def enum(self) -> Enum | None:
        return self._enum

    @property
    def is_map(self) -> bool:
        return self._is_repeated_label() and self._embed is not None and self._embed.is_map_entry

    @property
    def is_repeated(self) -> bool:
        """True for repeated fields that are not maps."""
        return self._is_repeated_label() and not self.is_map

    @property
    def is_embed(self) -> bool:
        """True when the field (or each element of a repeated field) is a message, maps excluded."""
        return self._embed is not None and not self.is_map

    @property
    def is_enum(self) -> bool:
        return self._enum is not None

    @property
    def key(self) -> FieldType | None:
        if not self.is_map:
            return None
        return self._embed.fields[0].type  # type: ignore[union-attr]

    @property
    def value(self) -> FieldType | None:
        if not self.is_map:
            return None
        return self._embed.fields[1].type  # type: ignore[union-attr]

    def imports(self) -> list[File]:
        """Files declaring the referenced message or enum types, other than the field's own file."""
        if self.is_map:
            referenced = [t._embed or t._enum for t in (self.key, self.value) if t is not None]
        else:
            referenced = [self._embed or self._enum]
        referenced = [t for t in referenced if t is not None]
        if not referenced:
            return []
        own = self.field.file
        out: list[File] = []
        for target in referenced:
            declared_in = target.file
            if declared_in is not own and declared_in not in out:
                out.append(declared_in)
        return out

    def _is_repeated_label(self) -> bool:
        desc = self.field.descriptor
        return desc is not None and desc.label == FieldDescriptorProto.LABEL_REPEATED

    def _resolve(self, target: Message | Enum) -> None:
        if isinstance(target, Message):
            self._embed = target
        else:
            self._enum = target


class Field(Entity):
    """A field declared in a message."""

    __slots__ = ("_oneof_ref", "_type")

    def __init__(self, descriptor: FieldDescriptorProto | None = None, *, fully_qualified_name: str = "") -> None:
        super().__init__(descriptor, fully_qualified_name=fully_qualified_name)
        self._oneof_ref: weakref.ref[OneOf] | None = None
        self._type = FieldType(self)

    @property
    def descriptor(self) -> FieldDescriptorProto | None:
        return self._desc  # type: ignore[return-value]

    @property
    def message(self) -> Message:
        """The message declaring this field."""
        return self._parent()

    @property
    def number(self) -> int:
        desc = self.descriptor
        return desc.number if desc is not None else 0

    @property
    def type(self) -> FieldType:
        return self._type

    @property
    def oneof(self) -> OneOf | None:
        """The oneof this field belongs to, synthetic oneofs included."""
        return self._oneof_ref() if self._oneof_ref is not None else None

    @property
    def in_oneof(self) -> bool:
        return self.oneof is not None

    @property
    def in_real_oneof(self) -> bool:
        """True when the field belongs to a oneof written in the source."""
        oneof = self.oneof
        return oneof is not None and not oneof.is_synthetic()

    @property
    def is_synthetic_optional(self) -> bool:
        """True for a proto3 ``optional`` field, which the compiler wraps in a synthetic oneof."""
        desc = self.descriptor
        return desc is not None and desc.proto3_optional

    @property
    def has_optional_keyword(self) -> bool:
        """True when the field was declared with the ``optional`` label in the source."""
        desc = self.descriptor
        if desc is None:
            return False
        if self.syntax is Syntax.PROTO3:
            return desc.proto3_optional
        return desc.label == FieldDescriptorProto.LABEL_OPTIONAL

    def imports(self) -> list[File]:
        return self._type.imports()

    def _set_oneof(self, oneof: OneOf) -> None:
        self._oneof_ref = weakref.ref(oneof)

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_field(self)


class Extension(Field):
    """A field that extends another message, declared at file scope or inside a message."""

    __slots__ = ("_extendee",)

    def __init__(self, descriptor: FieldDescriptorProto | None = None, *, fully_qualified_name: str = "") -> None:
        super().__init__(descriptor, fully_qualified_name=fully_qualified_name)
        self._extendee: Message | None = None

    @property
    def defined_in(self) -> File | Message:
        """The file or message in whose scope the extension is declared."""
        return self._parent()

    @property
    def message(self) -> Message | None:  # type: ignore[override]
        """The extended message, or ``None`` when it was not resolved; same as :attr:`extendee`."""
        return self._extendee

    @property
    def extendee(self) -> Message | None:
        """The extended message, or ``None`` when it was not resolved."""
        return self._extendee

    def imports(self) -> list[File]:
        own = self._type.imports()
        if self._extendee is None:
            return own
        return merge_imports([own, [self._extendee.file]], exclude=self.file)

    def _set_extendee(self, extendee: Message) -> None:
        self._extendee = extendee

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_extension(self)
