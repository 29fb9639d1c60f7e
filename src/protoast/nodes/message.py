"""Message node."""

# ruff: noqa: D105,D107

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from protoast.nodes.base import Entity, merge_imports

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from google.protobuf.descriptor_pb2 import DescriptorProto

    from protoast.nodes.base import Node
    from protoast.nodes.enum import Enum
    from protoast.nodes.field import Extension, Field
    from protoast.nodes.file import File
    from protoast.nodes.oneof import OneOf
    from protoast.walk import Visitor


class Message(Entity):
    """A message declaration, at file scope or nested in another message.

    :attr:`fields` lists every field in declaration order, including those that belong to a oneof. The oneof-aware
    views (:attr:`non_oneof_fields`, :attr:`oneof_fields`, :attr:`synthetic_oneof_fields`) split that list.
    """

    __slots__ = ("_enums", "_extensions", "_fields", "_messages", "_oneofs")

    _CHILD_PATHS: ClassVar[Mapping[int, str]] = {
        2: "fields",
        3: "messages",
        4: "enums",
        6: "extensions",
        8: "oneofs",
    }

    def __init__(self, descriptor: DescriptorProto | None = None, *, fully_qualified_name: str = "") -> None:
        super().__init__(descriptor, fully_qualified_name=fully_qualified_name)
        self._fields: list[Field] = []
        self._oneofs: list[OneOf] = []
        self._messages: list[Message] = []
        self._enums: list[Enum] = []
        self._extensions: list[Extension] = []

    @property
    def descriptor(self) -> DescriptorProto | None:
        return self._desc  # type: ignore[return-value]

    @property
    def parent(self) -> File | Message:
        """The file or message this message is declared in."""
        return self._parent()

    @property
    def is_map_entry(self) -> bool:
        """True for the compiler-generated entry type backing a ``map<K, V>`` field."""
        desc = self.descriptor
        return desc is not None and desc.options.map_entry

    @property
    def fields(self) -> list[Field]:
        return list(self._fields)

    @property
    def non_oneof_fields(self) -> list[Field]:
        """Fields outside any oneof, synthetic oneofs excepted: proto3 ``optional`` fields are listed here."""
        return [f for f in self._fields if not f.in_real_oneof]

    @property
    def oneof_fields(self) -> list[Field]:
        """Fields declared inside a oneof block in the source."""
        return [f for f in self._fields if f.in_real_oneof]

    @property
    def synthetic_oneof_fields(self) -> list[Field]:
        """Proto3 ``optional`` fields, wrapped by the compiler in a synthetic oneof."""
        return [f for f in self._fields if f.in_oneof and not f.in_real_oneof]

    @property
    def oneofs(self) -> list[OneOf]:
        """All oneofs, synthetic ones included, in declaration order."""
        return list(self._oneofs)

    @property
    def real_oneofs(self) -> list[OneOf]:
        """Oneofs written in the source."""
        return [o for o in self._oneofs if not o.is_synthetic()]

    @property
    def messages(self) -> list[Message]:
        """Directly nested messages, map entries included."""
        return list(self._messages)

    @property
    def enums(self) -> list[Enum]:
        return list(self._enums)

    @property
    def extensions(self) -> list[Extension]:
        """Extensions declared inside this message's scope."""
        return list(self._extensions)

    def all_messages(self) -> list[Message]:
        """Every nested message, recursively, in depth-first declaration order."""
        out: list[Message] = []
        for msg in self._messages:
            out.append(msg)
            out.extend(msg.all_messages())
        return out

    def imports(self) -> list[File]:
        groups = [f.imports() for f in self._fields]
        groups.extend(e.imports() for e in self._extensions)
        groups.extend(m.imports() for m in self._messages)
        return merge_imports(groups, exclude=self.file)

    def _add_field(self, field: Field) -> None:
        field._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._fields.append(field)

    def _add_oneof(self, oneof: OneOf) -> None:
        oneof._set_message(self)  # pyright: ignore[reportPrivateUsage]
        self._oneofs.append(oneof)

    def _add_message(self, message: Message) -> None:
        message._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._messages.append(message)

    def _add_enum(self, enum_: Enum) -> None:
        enum_._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._enums.append(enum_)

    def _add_extension(self, extension: Extension) -> None:
        extension._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._extensions.append(extension)

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_message(self)

    def _children(self) -> Iterator[Node]:
        yield from self._enums
        yield from self._messages
        yield from self._fields
        yield from self._oneofs
        yield from self._extensions
