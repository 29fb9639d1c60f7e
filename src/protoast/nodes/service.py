"""Service and method nodes."""

# ruff: noqa: D105,D107

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from protoast.nodes.base import Entity, merge_imports

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from google.protobuf.descriptor_pb2 import MethodDescriptorProto, ServiceDescriptorProto

    from protoast.nodes.base import Node
    from protoast.nodes.file import File
    from protoast.nodes.message import Message
    from protoast.walk import Visitor


class Service(Entity):
    """A service declaration."""

    __slots__ = ("_methods",)

    _CHILD_PATHS: ClassVar[Mapping[int, str]] = {2: "methods"}

    def __init__(self, descriptor: ServiceDescriptorProto | None = None, *, fully_qualified_name: str = "") -> None:
        super().__init__(descriptor, fully_qualified_name=fully_qualified_name)
        self._methods: list[Method] = []

    @property
    def descriptor(self) -> ServiceDescriptorProto | None:
        return self._desc  # type: ignore[return-value]

    @property
    def methods(self) -> list[Method]:
        return list(self._methods)

    def imports(self) -> list[File]:
        return merge_imports((m.imports() for m in self._methods), exclude=self.file)

    def _add_method(self, method: Method) -> None:
        method._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._methods.append(method)

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_service(self)

    def _children(self) -> Iterator[Node]:
        yield from self._methods


class Method(Entity):
    """An RPC method of a service. Input and output messages are resolved by the builder."""

    __slots__ = ("_input", "_output")

    def __init__(self, descriptor: MethodDescriptorProto | None = None, *, fully_qualified_name: str = "") -> None:
        super().__init__(descriptor, fully_qualified_name=fully_qualified_name)
        self._input: Message | None = None
        self._output: Message | None = None

    @property
    def descriptor(self) -> MethodDescriptorProto | None:
        return self._desc  # type: ignore[return-value]

    @property
    def service(self) -> Service:
        return self._parent()

    @property
    def input(self) -> Message | None:
        return self._input

    @property
    def output(self) -> Message | None:
        return self._output

    @property
    def client_streaming(self) -> bool:
        desc = self.descriptor
        return desc is not None and desc.client_streaming

    @property
    def server_streaming(self) -> bool:
        desc = self.descriptor
        return desc is not None and desc.server_streaming

    def imports(self) -> list[File]:
        own = self.file
        return merge_imports([[m.file for m in (self._input, self._output) if m is not None]], exclude=own)

    def _set_types(self, input_: Message | None, output: Message | None) -> None:
        self._input = input_
        self._output = output

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_method(self)
