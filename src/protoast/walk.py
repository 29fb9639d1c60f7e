"""Tree walking and visitor pattern for descriptor ASTs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

    from protoast.nodes import Enum, EnumValue, Extension, Field, File, Message, Method, OneOf, Package, Service
    from protoast.nodes.base import Node


class Visitor:
    """Base class for AST visitors.

    There is one ``visit_<kind>`` method per node kind. Each returns whether the walk should descend into the node's
    children. The defaults do nothing and descend, so a subclass only overrides the kinds it acts on::

        class MessageCollector(Visitor):
            def __init__(self):
                self.names = []

            def visit_message(self, node):
                self.names.append(node.fully_qualified_name)
                return True


        collector = MessageCollector()
        walk(collector, ast)

    Return ``False`` to skip a node's children. Raise to abort the whole walk: the exception reaches the caller of
    :func:`walk` (or ``accept``) unchanged.
    """

    def visit_package(self, node: Package) -> bool:
        return True

    def visit_file(self, node: File) -> bool:
        return True

    def visit_message(self, node: Message) -> bool:
        return True

    def visit_enum(self, node: Enum) -> bool:
        return True

    def visit_enum_value(self, node: EnumValue) -> bool:
        return True

    def visit_field(self, node: Field) -> bool:
        return True

    def visit_extension(self, node: Extension) -> bool:
        return True

    def visit_oneof(self, node: OneOf) -> bool:
        return True

    def visit_service(self, node: Service) -> bool:
        return True

    def visit_method(self, node: Method) -> bool:
        return True


class NilVisitor(Visitor):
    """Visitor whose defaults do nothing and never descend.

    Useful when only a few container kinds should be entered: override those to return ``True``.
    """

    def visit_package(self, node: Package) -> bool:
        return False

    def visit_file(self, node: File) -> bool:
        return False

    def visit_message(self, node: Message) -> bool:
        return False

    def visit_enum(self, node: Enum) -> bool:
        return False

    def visit_enum_value(self, node: EnumValue) -> bool:
        return False

    def visit_field(self, node: Field) -> bool:
        return False

    def visit_extension(self, node: Extension) -> bool:
        return False

    def visit_oneof(self, node: OneOf) -> bool:
        return False

    def visit_service(self, node: Service) -> bool:
        return False

    def visit_method(self, node: Method) -> bool:
        return False


class PassThroughVisitor(Visitor):
    """Decorator that forwards every visit to *inner* and always descends.

    Lets a visitor written to stop early (e.g. a :class:`NilVisitor` subclass) see the whole tree.
    """

    def __init__(self, inner: Visitor) -> None:
        self.inner = inner

    def visit_package(self, node: Package) -> bool:
        self.inner.visit_package(node)
        return True

    def visit_file(self, node: File) -> bool:
        self.inner.visit_file(node)
        return True

    def visit_message(self, node: Message) -> bool:
        self.inner.visit_message(node)
        return True

    def visit_enum(self, node: Enum) -> bool:
        self.inner.visit_enum(node)
        return True

    def visit_enum_value(self, node: EnumValue) -> bool:
        self.inner.visit_enum_value(node)
        return True

    def visit_field(self, node: Field) -> bool:
        self.inner.visit_field(node)
        return True

    def visit_extension(self, node: Extension) -> bool:
        self.inner.visit_extension(node)
        return True

    def visit_oneof(self, node: OneOf) -> bool:
        self.inner.visit_oneof(node)
        return True

    def visit_service(self, node: Service) -> bool:
        self.inner.visit_service(node)
        return True

    def visit_method(self, node: Method) -> bool:
        self.inner.visit_method(node)
        return True


def walk(visitor: Visitor | None, node: Node) -> None:
    """Walk the tree rooted at *node* with *visitor*, depth-first and pre-order.

    Equivalent to ``node.accept(visitor)``. Children are visited in declaration order: for a file, its enums, then
    messages, extensions and services; for a message, its enums, nested messages, fields, oneofs and extensions.

    Args:
        visitor: The visitor to dispatch to. ``None`` visits nothing but still walks every node.
        node: Any AST node, or an :class:`~protoast.build.AST`.
    """
    node.accept(visitor)


def walk_nodes(node: Node) -> Generator[Node, None, None]:
    """Yield *node* and every node beneath it in depth-first pre-order.

    Follows the same child order as :func:`walk`, without dispatching to a visitor.

    Example:
        >>> from protoast.nodes import Message
        >>> names = [n.name for n in walk_nodes(file) if isinstance(n, Message)]  # doctest: +SKIP
    """
    yield node
    stack: list[Node] = list(reversed(list(node._children())))  # pyright: ignore[reportPrivateUsage]
    while stack:
        child = stack.pop()
        yield child
        stack.extend(reversed(list(child._children())))  # pyright: ignore[reportPrivateUsage]
