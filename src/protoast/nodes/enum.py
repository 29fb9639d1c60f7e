"""Enum and enum value nodes."""

# ruff: noqa: D105,D107

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from protoast.nodes.base import Entity

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from google.protobuf.descriptor_pb2 import EnumDescriptorProto, EnumValueDescriptorProto

    from protoast.nodes.base import Node
    from protoast.nodes.file import File
    from protoast.nodes.message import Message
    from protoast.walk import Visitor


class Enum(Entity):
    """An enum declaration, at file scope or nested in a message."""

    __slots__ = ("_values",)

    _CHILD_PATHS: ClassVar[Mapping[int, str]] = {2: "values"}

    def __init__(self, descriptor: EnumDescriptorProto | None = None, *, fully_qualified_name: str = "") -> None:
        super().__init__(descriptor, fully_qualified_name=fully_qualified_name)
        self._values: list[EnumValue] = []

    @property
    def descriptor(self) -> EnumDescriptorProto | None:
        return self._desc  # type: ignore[return-value]

    @property
    def parent(self) -> File | Message:
        return self._parent()

    @property
    def values(self) -> list[EnumValue]:
        return list(self._values)

    def _add_value(self, value: EnumValue) -> None:
        value._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._values.append(value)

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_enum(self)

    def _children(self) -> Iterator[Node]:
        yield from self._values


class EnumValue(Entity):
    """A value of an enum.

    Following protobuf scoping rules, enum values are siblings of their enum: the fully-qualified name of ``RED`` in
    ``.pkg.Color`` is ``.pkg.RED``.
    """

    __slots__ = ()

    @property
    def descriptor(self) -> EnumValueDescriptorProto | None:
        return self._desc  # type: ignore[return-value]

    @property
    def enum(self) -> Enum:
        return self._parent()

    @property
    def number(self) -> int:
        desc = self.descriptor
        return desc.number if desc is not None else 0

    def _qualify(self, parent: Node) -> str:
        scope = parent.fully_qualified_name.rpartition(".")[0]
        return f"{scope}.{self._name}"

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_enum_value(self)
