"""Build a linked descriptor AST from compiled file descriptors.

The builder runs in four passes over the input files:

1. construct every node and attach it to its parent;
2. resolve type references (field types, extendees, method input/output) against the referencing file, its direct
   dependencies, and the files those dependencies re-export with ``import public``;
3. mark build targets;
4. attribute ``SourceCodeInfo`` locations to nodes through :meth:`~protoast.nodes.File.child_at_path`.

Build targets are marked only after construction so that no node reads the flag before it is final. The resulting
tree is read-only and may be shared between threads once :func:`build` returns.
"""

# pyright: reportPrivateUsage=false

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from protoast.errors import ResolutionError
from protoast.nodes import Enum, EnumValue, Extension, Field, File, Message, Method, OneOf, Package, Service
from protoast.source import SourceCodeInfo

if TYPE_CHECKING:
    from collections.abc import Iterable

    from google.protobuf.compiler.plugin_pb2 import CodeGeneratorRequest
    from google.protobuf.descriptor_pb2 import (
        DescriptorProto,
        EnumDescriptorProto,
        FileDescriptorProto,
        ServiceDescriptorProto,
    )

    from protoast.nodes.base import Entity
    from protoast.walk import Visitor

logger = logging.getLogger(__name__)


class AST:
    """The linked tree for one descriptor set.

    Keep the ``AST`` alive while using its nodes: nodes only hold weak references to their parents.
    """

    def __init__(self) -> None:
        self._packages: dict[str, Package] = {}
        self._files: dict[str, File] = {}
        self._symbols: dict[str, Entity] = {}

    def __repr__(self) -> str:
        return f"AST(files={list(self._files)!r})"

    @property
    def packages(self) -> dict[str, Package]:
        """Packages keyed by name; files without a package statement are under ``""``."""
        return dict(self._packages)

    @property
    def files(self) -> dict[str, File]:
        """Every file keyed by path, in build order."""
        return dict(self._files)

    @property
    def targets(self) -> dict[str, File]:
        """Build-target files keyed by path."""
        return {path: f for path, f in self._files.items() if f.build_target}

    def lookup(self, fully_qualified_name: str) -> Entity | None:
        """Return the entity declared as *fully_qualified_name* (e.g. ``.shop.Order.id``), or ``None``."""
        return self._symbols.get(fully_qualified_name)

    def accept(self, visitor: Visitor | None) -> None:
        """Walk every package with *visitor*, in build order."""
        for package in self._packages.values():
            package.accept(visitor)


def build(files: Iterable[FileDescriptorProto], targets: Iterable[str] | None = None, *, strict: bool = True) -> AST:
    """Build an AST from file descriptors.

    Args:
        files: File descriptors in dependency order, dependencies first (the order ``protoc`` uses in
            ``CodeGeneratorRequest.proto_file``).
        targets: Paths of the files to mark as build targets. All files are targets when ``None``.
        strict: Raise on unresolved type references. When ``False`` they are logged and left unresolved.

    Returns:
        The linked AST.

    Raises:
        ResolutionError: If a dependency or build target is not among *files*, a file appears twice, or (when
            *strict*) a type reference cannot be resolved.

    Example:
        >>> from google.protobuf import descriptor_pb2
        >>> proto = descriptor_pb2.FileDescriptorProto(name="a.proto", package="a", syntax="proto3")
        >>> _ = proto.message_type.add(name="Thing")
        >>> ast = build([proto])
        >>> ast.lookup(".a.Thing")
        Message('.a.Thing')
    """
    return _Builder(strict=strict).build(list(files), targets)


def build_request(request: CodeGeneratorRequest, *, strict: bool = True) -> AST:
    """Build an AST from a ``protoc`` plugin request, marking ``file_to_generate`` as build targets."""
    return build(request.proto_file, list(request.file_to_generate), strict=strict)


class _Builder:
    def __init__(self, *, strict: bool) -> None:
        self._strict = strict
        self._ast = AST()
        # Per-file index of the message and enum types it declares, used as resolution scopes.
        self._types: dict[File, dict[str, Message | Enum]] = {}

    def build(self, protos: list[FileDescriptorProto], targets: Iterable[str] | None) -> AST:
        logger.debug("building AST from %d file(s)", len(protos))
        built = [self._build_file(proto) for proto in protos]
        for file in built:
            self._resolve_file(file)
        self._mark_targets(built, targets)
        for file in built:
            self._attribute_locations(file)
        return self._ast

    # -- construction -----------------------------------------------------------

    def _build_file(self, proto: FileDescriptorProto) -> File:
        ast = self._ast
        if proto.name in ast._files:
            raise ResolutionError(proto.name, proto.name, "duplicate file")

        file = File(proto)
        package = ast._packages.get(proto.package)
        if package is None:
            package = ast._packages[proto.package] = Package(proto.package)
        package._add_file(file)
        ast._files[proto.name] = file
        self._types[file] = {}

        for dep in proto.dependency:
            dependency = ast._files.get(dep)
            if dependency is None:
                raise ResolutionError(proto.name, dep, "unknown dependency")
            file._add_dependency(dependency)

        for enum_proto in proto.enum_type:
            self._build_enum(enum_proto, file, file)
        for message_proto in proto.message_type:
            self._build_message(message_proto, file, file)
        for extension_proto in proto.extension:
            extension = Extension(extension_proto)
            file._add_extension(extension)
            self._register(extension)
        for service_proto in proto.service:
            self._build_service(service_proto, file)

        logger.debug("built %s (%d message(s))", proto.name, len(file.all_messages()))
        return file

    def _build_message(self, proto: DescriptorProto, parent: File | Message, file: File) -> None:
        message = Message(proto)
        parent._add_message(message)
        self._register(message, file)

        for enum_proto in proto.enum_type:
            self._build_enum(enum_proto, message, file)
        for nested_proto in proto.nested_type:
            self._build_message(nested_proto, message, file)

        oneofs: list[OneOf] = []
        for oneof_proto in proto.oneof_decl:
            oneof = OneOf(oneof_proto)
            message._add_oneof(oneof)
            self._register(oneof)
            oneofs.append(oneof)

        for field_proto in proto.field:
            field = Field(field_proto)
            message._add_field(field)
            self._register(field)
            if field_proto.HasField("oneof_index"):
                oneofs[field_proto.oneof_index]._add_field(field)

        for extension_proto in proto.extension:
            extension = Extension(extension_proto)
            message._add_extension(extension)
            self._register(extension)

    def _build_enum(self, proto: EnumDescriptorProto, parent: File | Message, file: File) -> None:
        enum_ = Enum(proto)
        parent._add_enum(enum_)
        self._register(enum_, file)
        for value_proto in proto.value:
            value = EnumValue(value_proto)
            enum_._add_value(value)
            self._register(value)

    def _build_service(self, proto: ServiceDescriptorProto, file: File) -> None:
        service = Service(proto)
        file._add_service(service)
        self._register(service)
        for method_proto in proto.method:
            method = Method(method_proto)
            service._add_method(method)
            self._register(method)

    def _register(self, entity: Entity, file: File | None = None) -> None:
        self._ast._symbols[entity.fully_qualified_name] = entity
        if file is not None and isinstance(entity, (Message, Enum)):
            self._types[file][entity.fully_qualified_name] = entity

    # -- resolution -------------------------------------------------------------

    def _resolve_file(self, file: File) -> None:
        scope: dict[str, Message | Enum] = {}
        for dependency in file.dependencies:
            for visible in _public_closure(dependency):
                scope.update(self._types[visible])
        scope.update(self._types[file])

        extensions = file.extensions
        for message in file.all_messages():
            for field in message.fields:
                self._resolve_field(file, scope, field)
            extensions.extend(message.extensions)
        for extension in extensions:
            self._resolve_field(file, scope, extension)
            extendee = self._lookup(file, scope, extension.descriptor.extendee)  # type: ignore[union-attr]
            if isinstance(extendee, Message):
                extension._set_extendee(extendee)
        for service in file.services:
            for method in service.methods:
                desc = method.descriptor
                assert desc is not None
                input_ = self._lookup(file, scope, desc.input_type)
                output = self._lookup(file, scope, desc.output_type)
                method._set_types(
                    input_ if isinstance(input_, Message) else None,
                    output if isinstance(output, Message) else None,
                )

    def _resolve_field(self, file: File, scope: dict[str, Message | Enum], field: Field) -> None:
        type_name = field.type.type_name
        if not type_name:
            return
        target = self._lookup(file, scope, type_name)
        if target is not None:
            field.type._resolve(target)

    def _lookup(self, file: File, scope: dict[str, Message | Enum], type_name: str) -> Message | Enum | None:
        target = scope.get(type_name)
        if target is None:
            if self._strict:
                raise ResolutionError(file.path, type_name)
            logger.warning("%s: unresolved reference %r", file.path, type_name)
        return target

    # -- targets and locations --------------------------------------------------

    def _mark_targets(self, built: list[File], targets: Iterable[str] | None) -> None:
        if targets is None:
            marked = built
        else:
            marked = []
            for path in targets:
                file = self._ast._files.get(path)
                if file is None:
                    raise ResolutionError(path, path, "unknown build target")
                marked.append(file)
        for file in marked:
            file.build_target = True
        logger.debug("marked %d build target(s)", len(marked))

    def _attribute_locations(self, file: File) -> None:
        attributed = 0
        for location in file.descriptor.source_code_info.location:
            node = file.child_at_path(location.path)
            if node is not None:
                node._set_source_code_info(SourceCodeInfo.from_location(location))
                attributed += 1
        if attributed:
            logger.debug("%s: attributed %d source location(s)", file.path, attributed)


def _public_closure(file: File) -> list[File]:
    """*file* followed by every file it re-exports through chains of ``import public``."""
    out = [file]
    seen = {id(file)}
    stack = list(reversed(file.public_dependencies))
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        out.append(current)
        stack.extend(reversed(current.public_dependencies))
    return out
