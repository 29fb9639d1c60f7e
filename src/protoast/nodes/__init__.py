"""AST node types for compiled protobuf schemas."""

from protoast.nodes.base import Entity, Node
from protoast.nodes.enum import Enum, EnumValue
from protoast.nodes.field import Extension, Field, FieldType
from protoast.nodes.file import File, Syntax
from protoast.nodes.message import Message
from protoast.nodes.oneof import OneOf
from protoast.nodes.package import Package
from protoast.nodes.service import Method, Service

__all__ = [
    "Entity",
    "Enum",
    "EnumValue",
    "Extension",
    "Field",
    "FieldType",
    "File",
    "Message",
    "Method",
    "Node",
    "OneOf",
    "Package",
    "Service",
    "Syntax",
]
