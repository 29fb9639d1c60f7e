from __future__ import annotations

from dataclasses import dataclass

import pytest
from google.protobuf import descriptor_pb2

from protoast import AST, Field, File, Message, OneOf, Package, build

FieldProto = descriptor_pb2.FieldDescriptorProto

# -- Descriptor fixtures -------------------------------------------------------
#
# common/money.proto   package common   Money, Currency
# common/time.proto    package common   Timestamp
# shop/order.proto     package shop     Order { Card, PricesEntry, Status }, service Orders
# shop/ext.proto       package shop.ext Base, Holder, extensions of Base and Order


def money_proto() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(name="common/money.proto", package="common", syntax="proto3")
    money = proto.message_type.add(name="Money")
    money.field.add(name="units", number=1, type=FieldProto.TYPE_INT64, label=FieldProto.LABEL_OPTIONAL)
    currency = proto.enum_type.add(name="Currency")
    currency.value.add(name="CURRENCY_UNSPECIFIED", number=0)
    currency.value.add(name="USD", number=1)
    return proto


def time_proto() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(name="common/time.proto", package="common", syntax="proto3")
    ts = proto.message_type.add(name="Timestamp")
    ts.field.add(name="seconds", number=1, type=FieldProto.TYPE_INT64, label=FieldProto.LABEL_OPTIONAL)
    return proto


def order_proto() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="shop/order.proto",
        package="shop",
        syntax="proto3",
        dependency=["common/money.proto", "common/time.proto"],
    )
    order = proto.message_type.add(name="Order")

    def add_field(name: str, number: int, type_: int, type_name: str = "", **kwargs: object) -> None:
        kwargs.setdefault("label", FieldProto.LABEL_OPTIONAL)
        order.field.add(name=name, number=number, type=type_, type_name=type_name, **kwargs)

    add_field("id", 1, FieldProto.TYPE_STRING)
    add_field("total", 2, FieldProto.TYPE_MESSAGE, ".common.Money")
    add_field("created", 3, FieldProto.TYPE_MESSAGE, ".common.Timestamp")
    add_field("card", 4, FieldProto.TYPE_MESSAGE, ".shop.Order.Card", oneof_index=0)
    add_field("voucher", 5, FieldProto.TYPE_STRING, oneof_index=0)
    add_field("note", 6, FieldProto.TYPE_STRING, oneof_index=1, proto3_optional=True)
    add_field("prices", 7, FieldProto.TYPE_MESSAGE, ".shop.Order.PricesEntry", label=FieldProto.LABEL_REPEATED)
    add_field("currency", 8, FieldProto.TYPE_ENUM, ".common.Currency")
    add_field("tags", 9, FieldProto.TYPE_STRING, label=FieldProto.LABEL_REPEATED)

    card = order.nested_type.add(name="Card")
    card.field.add(name="number", number=1, type=FieldProto.TYPE_STRING, label=FieldProto.LABEL_OPTIONAL)

    entry = order.nested_type.add(name="PricesEntry")
    entry.options.map_entry = True
    entry.field.add(name="key", number=1, type=FieldProto.TYPE_STRING, label=FieldProto.LABEL_OPTIONAL)
    entry.field.add(
        name="value",
        number=2,
        type=FieldProto.TYPE_MESSAGE,
        type_name=".common.Money",
        label=FieldProto.LABEL_OPTIONAL,
    )

    status = order.enum_type.add(name="Status")
    status.value.add(name="STATUS_UNSPECIFIED", number=0)
    status.value.add(name="STATUS_PAID", number=1)

    order.oneof_decl.add(name="payment")
    order.oneof_decl.add(name="_note")

    service = proto.service.add(name="Orders")
    service.method.add(name="Place", input_type=".shop.Order", output_type=".shop.Order", server_streaming=True)

    info = proto.source_code_info
    info.location.add(path=[4, 0], span=[3, 0, 20, 1], leading_comments=" An order.\n")
    info.location.add(path=[4, 0, 1], span=[3, 8, 13])
    info.location.add(path=[4, 0, 2, 0], span=[4, 2, 16], trailing_comments=" Unique id.\n")
    info.location.add(path=[4, 0, 8, 0], span=[10, 2, 13, 3], leading_comments=" How it was paid.\n")
    info.location.add(path=[6, 0, 2, 0], span=[22, 2, 40], leading_detached_comments=[" Detached.\n"])
    info.location.add(path=[4, 7], span=[0, 0, 1])
    return proto


def ext_proto() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name="shop/ext.proto",
        package="shop.ext",
        syntax="proto2",
        dependency=["common/money.proto", "shop/order.proto"],
    )
    proto.message_type.add(name="Base")
    holder = proto.message_type.add(name="Holder")
    holder.extension.add(
        name="priority",
        number=100,
        type=FieldProto.TYPE_INT32,
        label=FieldProto.LABEL_OPTIONAL,
        extendee=".shop.Order",
    )
    proto.extension.add(
        name="price",
        number=100,
        type=FieldProto.TYPE_MESSAGE,
        type_name=".common.Money",
        label=FieldProto.LABEL_OPTIONAL,
        extendee=".shop.ext.Base",
    )
    return proto


def shop_protos() -> list[descriptor_pb2.FileDescriptorProto]:
    return [money_proto(), time_proto(), order_proto(), ext_proto()]


@pytest.fixture
def shop_ast() -> AST:
    return build(shop_protos(), targets=["shop/order.proto", "shop/ext.proto"])


@pytest.fixture
def order_file(shop_ast: AST) -> File:
    return shop_ast.files["shop/order.proto"]


@pytest.fixture
def order(shop_ast: AST) -> Message:
    node = shop_ast.lookup(".shop.Order")
    assert isinstance(node, Message)
    return node


# -- Hand-built trees ----------------------------------------------------------


@dataclass
class Tree:
    """A package/file/message chain built without the builder; holding it keeps every node alive."""

    package: Package
    file: File
    message: Message


def make_tree(*, syntax: str = "proto3", package: str = "pkg", build_target: bool = False) -> Tree:
    pkg = Package(package)
    file = File(
        descriptor_pb2.FileDescriptorProto(name="pkg/file.proto", package=package, syntax=syntax),
        build_target=build_target,
    )
    pkg._add_file(file)  # pyright: ignore[reportPrivateUsage]
    msg = Message(descriptor_pb2.DescriptorProto(name="Msg"))
    file._add_message(msg)  # pyright: ignore[reportPrivateUsage]
    return Tree(pkg, file, msg)


@pytest.fixture
def tree() -> Tree:
    return make_tree()


def make_field(name: str = "fld", *, synthetic: bool = False) -> Field:
    desc = FieldProto(name=name, number=1, type=FieldProto.TYPE_STRING, label=FieldProto.LABEL_OPTIONAL)
    if synthetic:
        desc.proto3_optional = True
    return Field(desc)


def make_oneof(name: str = "oneof") -> OneOf:
    return OneOf(descriptor_pb2.OneofDescriptorProto(name=name))
