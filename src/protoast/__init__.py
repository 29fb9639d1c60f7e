"""Linked, traversable object model for compiled protobuf schemas."""

from protoast.build import AST, build, build_request
from protoast.errors import ExtensionError, NodeAttachedError, ProtoAstError, ResolutionError, UnattachedNodeError
from protoast.extension import (
    ExtensionDecoder,
    ProtobufExtensionDecoder,
    decode_extension,
    get_extension_decoder,
    set_extension_decoder,
)
from protoast.names import Name
from protoast.nodes import (
    Entity,
    Enum,
    EnumValue,
    Extension,
    Field,
    FieldType,
    File,
    Message,
    Method,
    Node,
    OneOf,
    Package,
    Service,
    Syntax,
)
from protoast.source import SourceCodeInfo
from protoast.walk import NilVisitor, PassThroughVisitor, Visitor, walk, walk_nodes

__all__ = [
    "AST",
    "build",
    "build_request",
    "decode_extension",
    "Entity",
    "Enum",
    "EnumValue",
    "Extension",
    "ExtensionDecoder",
    "ExtensionError",
    "Field",
    "FieldType",
    "File",
    "get_extension_decoder",
    "Message",
    "Method",
    "Name",
    "NilVisitor",
    "Node",
    "NodeAttachedError",
    "OneOf",
    "Package",
    "PassThroughVisitor",
    "ProtoAstError",
    "ProtobufExtensionDecoder",
    "ResolutionError",
    "Service",
    "set_extension_decoder",
    "SourceCodeInfo",
    "Syntax",
    "UnattachedNodeError",
    "Visitor",
    "walk",
    "walk_nodes",
]
