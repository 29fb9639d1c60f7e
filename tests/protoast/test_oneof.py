from __future__ import annotations

import pytest
from google.protobuf import descriptor_pb2

from protoast import Field, File, OneOf, Syntax, UnattachedNodeError, Visitor

from .conftest import make_field, make_oneof, make_tree


class _ImportingField(Field):
    """Field reporting a fixed import list instead of resolving its type."""

    __slots__ = ("_fixed",)

    def __init__(self, imports: list[File], name: str = "fld") -> None:
        super().__init__(descriptor_pb2.FieldDescriptorProto(name=name))
        self._fixed = imports

    def imports(self) -> list[File]:  # pyright: ignore[reportImplicitOverride]
        return list(self._fixed)


class _CountingVisitor(Visitor):
    def __init__(self, err: Exception | None = None) -> None:
        self.err = err
        self.oneofs = 0

    def visit_oneof(self, node: OneOf) -> bool:  # pyright: ignore[reportImplicitOverride]
        self.oneofs += 1
        if self.err is not None:
            raise self.err
        return True


def _file(path: str) -> File:
    return File(descriptor_pb2.FileDescriptorProto(name=path))


class TestIdentity:
    def test_name(self):
        o = make_oneof("foo")
        assert o.name == "foo"

    def test_fully_qualified_name_as_assigned(self):
        o = OneOf(fully_qualified_name="one_of")
        assert o.fully_qualified_name == "one_of"

    def test_assigned_name_survives_attachment(self, tree):
        o = OneOf(descriptor_pb2.OneofDescriptorProto(name="choice"), fully_qualified_name=".custom.path")
        tree.message._add_oneof(o)  # pyright: ignore[reportPrivateUsage]
        assert o.fully_qualified_name == ".custom.path"

    def test_fully_qualified_name_from_message(self, tree):
        o = make_oneof("choice")
        tree.message._add_oneof(o)  # pyright: ignore[reportPrivateUsage]
        assert o.fully_qualified_name == ".pkg.Msg.choice"
        assert o.fully_qualified_name == f"{o.message.fully_qualified_name}.{o.name}"

    def test_descriptor(self):
        desc = descriptor_pb2.OneofDescriptorProto()
        assert OneOf(desc).descriptor is desc


class TestContext:
    def test_syntax(self, tree):
        o = make_oneof()
        tree.message._add_oneof(o)  # pyright: ignore[reportPrivateUsage]
        assert o.syntax is tree.message.syntax
        assert o.syntax is Syntax.PROTO3

    def test_package(self, tree):
        o = make_oneof()
        tree.message._add_oneof(o)  # pyright: ignore[reportPrivateUsage]
        assert o.package is not None
        assert o.package is tree.message.package

    def test_file(self, tree):
        o = make_oneof()
        tree.message._add_oneof(o)  # pyright: ignore[reportPrivateUsage]
        assert o.file is not None
        assert o.file is tree.message.file

    def test_build_target_is_read_live(self, tree):
        o = make_oneof()
        tree.message._add_oneof(o)  # pyright: ignore[reportPrivateUsage]
        assert o.build_target is False
        tree.file.build_target = True
        assert o.build_target is True

    def test_message(self, tree):
        o = make_oneof()
        tree.message._add_oneof(o)  # pyright: ignore[reportPrivateUsage]
        assert o.message is tree.message

    @pytest.mark.parametrize("attr", ["message", "syntax", "package", "file", "build_target"])
    def test_unattached_raises(self, attr):
        o = make_oneof()
        with pytest.raises(UnattachedNodeError) as exc_info:
            getattr(o, attr)
        assert exc_info.value.node is o


class TestFields:
    def test_empty(self):
        o = make_oneof()
        assert o.fields == []

    def test_add_field(self):
        o = make_oneof()
        f = make_field()
        o._add_field(f)  # pyright: ignore[reportPrivateUsage]
        assert o.fields == [f]
        assert f.oneof is o

    def test_declaration_order(self):
        o = make_oneof()
        a, b = make_field("a"), make_field("b")
        o._add_field(a)  # pyright: ignore[reportPrivateUsage]
        o._add_field(b)  # pyright: ignore[reportPrivateUsage]
        assert [f.name for f in o.fields] == ["a", "b"]

    def test_fields_is_a_copy(self):
        o = make_oneof()
        o.fields.append(make_field())
        assert o.fields == []


class TestImports:
    def test_empty(self):
        assert make_oneof().imports() == []

    def test_same_file_counted_once(self):
        a = _file("a.proto")
        o = make_oneof()
        o._add_field(_ImportingField([a, a]))  # pyright: ignore[reportPrivateUsage]
        assert o.imports() == [a]

        o._add_field(_ImportingField([a]))  # pyright: ignore[reportPrivateUsage]
        assert o.imports() == [a]

    def test_distinct_files(self):
        a, b = _file("a.proto"), _file("b.proto")
        o = make_oneof()
        o._add_field(_ImportingField([a]))  # pyright: ignore[reportPrivateUsage]
        assert len(o.imports()) == 1

        o._add_field(_ImportingField([b]))  # pyright: ignore[reportPrivateUsage]
        assert o.imports() == [a, b]

    def test_identity_not_name(self):
        first, second = _file("same.proto"), _file("same.proto")
        o = make_oneof()
        o._add_field(_ImportingField([first, second]))  # pyright: ignore[reportPrivateUsage]
        assert len(o.imports()) == 2

    def test_scalar_fields_without_message(self):
        o = make_oneof()
        o._add_field(make_field("a"))  # pyright: ignore[reportPrivateUsage]
        o._add_field(make_field("b"))  # pyright: ignore[reportPrivateUsage]
        assert o.imports() == []

    def test_unresolved_message_field_without_message(self):
        o = make_oneof()
        desc = descriptor_pb2.FieldDescriptorProto(
            name="ref",
            number=1,
            type=descriptor_pb2.FieldDescriptorProto.TYPE_MESSAGE,
            type_name=".pkg.Gone",
        )
        o._add_field(Field(desc))  # pyright: ignore[reportPrivateUsage]
        assert o.imports() == []


class TestIsSynthetic:
    def test_no_fields(self):
        assert make_oneof().is_synthetic() is False

    def test_genuine_field(self):
        o = make_oneof()
        o._add_field(make_field())  # pyright: ignore[reportPrivateUsage]
        assert o.is_synthetic() is False

    def test_synthetic_optional_field(self):
        o = make_oneof("_fld")
        o._add_field(make_field(synthetic=True))  # pyright: ignore[reportPrivateUsage]
        assert o.is_synthetic() is True

    def test_field_without_descriptor(self):
        o = make_oneof()
        o._add_field(Field())  # pyright: ignore[reportPrivateUsage]
        assert o.is_synthetic() is False


class TestExtension:
    def test_no_descriptor(self):
        o = OneOf()
        assert o.extension(None) is None
        assert o.extension(None, descriptor_pb2.OneofOptions()) is None

    def test_descriptor_without_options(self):
        o = make_oneof()
        assert o.extension(None, None) is None


class TestAccept:
    def test_nil_visitor(self):
        assert make_oneof().accept(None) is None

    def test_visit_called_once(self):
        v = _CountingVisitor()
        make_oneof().accept(v)
        assert v.oneofs == 1

    def test_error_propagates_unchanged(self):
        err = ValueError("stop")
        v = _CountingVisitor(err)
        with pytest.raises(ValueError) as exc_info:
            make_oneof().accept(v)
        assert exc_info.value is err
        assert v.oneofs == 1


class TestChildAtPath:
    def test_empty_path_is_self(self):
        o = make_oneof()
        assert o.child_at_path(None) is o
        assert o.child_at_path([]) is o

    @pytest.mark.parametrize("path", [[1], [2, 0], [8, 0, 2, 0]])
    def test_non_empty_path_is_absent(self, path):
        assert make_oneof().child_at_path(path) is None


class TestEndToEnd:
    def test_message_with_declared_oneof(self):
        t = make_tree()
        f1, f2 = _file("f1.proto"), _file("f2.proto")
        o = make_oneof("o")
        t.message._add_oneof(o)  # pyright: ignore[reportPrivateUsage]
        for fld in (_ImportingField([f1], "x"), _ImportingField([f1, f2], "y")):
            t.message._add_field(fld)  # pyright: ignore[reportPrivateUsage]
            o._add_field(fld)  # pyright: ignore[reportPrivateUsage]

        assert o.imports() == [f1, f2]
        assert o.is_synthetic() is False
        assert len(o.fields) == 2
        assert o.message is t.message
        assert t.message.oneofs == [o]
        assert t.message.real_oneofs == [o]
        assert [f.name for f in t.message.oneof_fields] == ["x", "y"]
