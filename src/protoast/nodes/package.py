"""Package node: groups the files that share a ``package`` declaration."""

# ruff: noqa: D105,D107

from __future__ import annotations

from typing import TYPE_CHECKING

from protoast.nodes.base import Node

if TYPE_CHECKING:
    from collections.abc import Iterator

    from protoast.nodes.file import File
    from protoast.walk import Visitor


class Package(Node):
    """A protobuf package.

    Files without a ``package`` statement belong to the package with an empty name and an empty fully-qualified name.
    """

    __slots__ = ("_files",)

    def __init__(self, name: str) -> None:
        super().__init__(None, name=name, fully_qualified_name=f".{name}" if name else "")
        self._files: list[File] = []

    @property
    def files(self) -> list[File]:
        """Files declaring this package, in build order."""
        return list(self._files)

    @property
    def package(self) -> Package:
        return self

    @property
    def build_target(self) -> bool:
        """Whether any file of this package is a build target."""
        return any(f.build_target for f in self._files)

    def _add_file(self, file: File) -> None:
        file._attach(self)  # pyright: ignore[reportPrivateUsage]
        self._files.append(file)

    def _dispatch(self, visitor: Visitor) -> bool:
        return visitor.visit_package(self)

    def _children(self) -> Iterator[Node]:
        yield from self._files
