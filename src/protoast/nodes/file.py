"""File node: the root of one compiled ``.proto`` unit."""

# ruff: noqa: D105,D107

from __future__ import annotations

import enum
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, ClassVar

from protoast.nodes.base import Entity, merge_imports

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from google.protobuf.descriptor_pb2 import FileDescriptorProto

    from protoast.nodes.base import Node
    from protoast.nodes.enum import Enum
    from protoast.nodes.field import Extension
    from protoast.nodes.message import Message
    from protoast.nodes.package import Package
    from protoast.nodes.service import Service
    from protoast.walk import Visitor


class Syntax(enum.Enum):
    """Schema syntax declared by a file."""

    PROTO2 = "proto2"
    PROTO3 = "proto3"
    EDITIONS = "editions"

    @classmethod
    def from_descriptor(cls, value: str) -> Syntax:
        """Map ``FileDescriptorProto.syntax`` to a Syntax; an empty value means proto2."""
        return cls(value) if value else cls.PROTO2


class File(Entity):
    """A compiled ``.proto`` file.

    ``build_target`` is the only mutable state in the tree. The builder sets it once, after construction and before
    any query; descendants read it live through their parents.
    """

    __slots__ = ("_build_target", "_dependencies", "_enums", "_extensions", "_messages", "_services")

    _CHILD_PATHS: ClassVar[Mapping[int, str]] = {
        4: "messages",
        5: "enums",
        6: "services",
        7: "extensions",
    }

    def __init__(self, descriptor: FileDescriptorProto, *, build_target: bool = False) -> None:
        package = descriptor.package
        super().__init__(descriptor, fully_qualified_name=f".{package}" if package else "")
        self._build_target = build_target
        self._dependencies: list[File] = []
        self._messages: list[Message] = []
        self._enums: list[Enum] = []
        self._services: list[Service] = []
        self._extensions: list[Extension] = []

    def __repr__(self) -> str:
        return f"File({self.path!r})"

    @property
    def path(self) -> str:
        """The file name as given to the compiler, e.g. ``shop/order.proto``."""
        return self._name

    @property
    def input_path(self) -> PurePosixPath:
        return PurePosixPath(self._name)

    @property
    def descriptor(self) -> FileDescriptorProto:
        return self._desc  # type: ignore[return-value]

    @property
    def syntax(self) -> Syntax:
        return Syntax.from_descriptor(self.descriptor.syntax)

    @property
    def package(self) -> Package:
        return self._parent()

    @property
    def file(self) -> File:
        return self

    @property
    def build_target(self) -> bool:
        """True when this file is a direct input of the current generation run."""
        return self._build_target

    @build_target.setter
    def build_target(self, value: bool) -> None:
        self._build_target = value

    @property
    def dependencies(self) -> list[File]:
        """Directly declared imports, in declaration order."""
        return list(self._dependencies)

    @property
    def public_dependencies(self) -> list[File]:
        """Dependencies imported with ``import public``, whose types are re-exported to importers of this file."""
        return [self._dependencies[i] for i in self.descriptor.public_dependency]

    @property
    def messages(self) -> list[Message]:
        """Top-level messages."""
        return list(self._messages)

    @property
    def enums(self) -> list[Enum]:
        """Top-level enums."""
        return list(self._enums)

    @property
    def services(self) -> list[Service]:
        return list(self._services)

    @property
    def extensions(self) -> list[Extension]:
        """Extensions declared at file scope."""
        return list(self._extensions)

    def all_messages(self) -> list[Message]:
        """Every message in the file, nested ones included, in depth-first declaration order."""
        out: list[Message] = []
        for msg in self._messages:
            out.append(msg)
            out.extend(msg.all_messages())
        return out

    def all_enums(self) -> list[Enum]:
        """Every enum in the file, including those nested in messages."""
        out = list(self._enums)
        for msg in self.all_messages():
            out.extend(msg.enums)
        return out

    def imports(self) -> list[File]:
        """Files actually required by the declarations of this file.

        Unlike :attr:`dependencies`, which lists what the file declares, this aggregates what its messages, extensions
        and services use, so unused declared imports are left out.
        """
        groups = [m.imports() for m in self._messages]
        groups.extend(e.imports() for e in self._extensions)
        groups.extend(s.imports() for s in self._services)
        return merge_imports(groups, exclude=self)

    def _add_dependency(self, dependency: File) -> None:
        self._dependencies.append(dependency)

    def _add_message(self, message: Message) -> None:
        message._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._messages.append(message)

    def _add_enum(self, enum_: Enum) -> None:
        enum_._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._enums.append(enum_)

    def _add_service(self, service: Service) -> None:
        service._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._services.append(service)

    def _add_extension(self, extension: Extension) -> None:
        extension._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._extensions.append(extension)

    def _qualify(self, parent: Node) -> str:
        return parent.fully_qualified_name

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_file(self)

    def _children(self) -> Iterator[Node]:
        yield from self._enums
        yield from self._messages
        yield from self._extensions
        yield from self._services
