"""Source location and comment attribution for AST nodes."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from google.protobuf.descriptor_pb2 import SourceCodeInfo as SourceCodeInfoProto


class SourceCodeInfo(NamedTuple):
    """Comments and span recorded by the compiler for one declaration.

    Attributes:
        path: The source-location path identifying the declaration within its file descriptor.
        span: ``(start_line, start_column, end_line, end_column)``, all 0-based. The end line is repeated from the
            start line when the compiler emitted a three-element span.
        leading_comments: Comment attached directly above the declaration, or an empty string.
        trailing_comments: Comment attached directly after the declaration, or an empty string.
        leading_detached_comments: Comment blocks above the declaration separated from it by a blank line.
    """

    path: tuple[int, ...]
    span: tuple[int, int, int, int]
    leading_comments: str
    trailing_comments: str
    leading_detached_comments: tuple[str, ...]

    @classmethod
    def from_location(cls, location: SourceCodeInfoProto.Location) -> SourceCodeInfo:
        """Build a SourceCodeInfo from a ``SourceCodeInfo.Location`` record."""
        span = list(location.span)
        if len(span) == 3:
            span.insert(2, span[0])
        span.extend([0] * (4 - len(span)))
        return cls(
            path=tuple(location.path),
            span=(span[0], span[1], span[2], span[3]),
            leading_comments=location.leading_comments,
            trailing_comments=location.trailing_comments,
            leading_detached_comments=tuple(location.leading_detached_comments),
        )
