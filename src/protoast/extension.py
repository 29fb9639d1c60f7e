"""Custom option extension decoding.

Nodes expose :meth:`~protoast.nodes.Node.extension` to read a custom option (an extension of ``FileOptions``,
``MessageOptions``, ``OneofOptions``, ...) from their descriptor. The actual decoding is delegated to a pluggable
decoder, :class:`ProtobufExtensionDecoder` by default, which can be swapped with :func:`set_extension_decoder`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from google.protobuf.message import Message

from protoast.errors import ExtensionError

if TYPE_CHECKING:
    from google.protobuf.descriptor import FieldDescriptor


class ExtensionDecoder(Protocol):
    """Decodes one extension from an options message."""

    def decode(self, options: Message, extension: FieldDescriptor | None) -> Any:
        """Return the extension value, or ``None`` when the options message does not carry it."""
        ...


class ProtobufExtensionDecoder:
    """Decoder backed by the protobuf runtime's ``Extensions`` map.

    A singular extension is present when ``HasExtension`` reports it. A repeated extension is present when it holds at
    least one element; its value is returned as a list.
    """

    def decode(self, options: Message, extension: FieldDescriptor | None) -> Any:
        if extension is None:
            raise ExtensionError("no extension given", options=options)
        try:
            if extension.is_repeated:
                values = list(options.Extensions[extension])
                return values or None
            if not options.HasExtension(extension):
                return None
            return options.Extensions[extension]
        except KeyError as exc:
            msg = f"{extension.full_name} cannot be read from {type(options).DESCRIPTOR.full_name}"
            raise ExtensionError(msg, extension=extension, options=options) from exc


_decoder: ExtensionDecoder = ProtobufExtensionDecoder()


def get_extension_decoder() -> ExtensionDecoder:
    """Return the active extension decoder."""
    return _decoder


def set_extension_decoder(decoder: ExtensionDecoder) -> ExtensionDecoder:
    """Install *decoder* as the active extension decoder.

    The decoder is process-wide. Install it before traversal starts; nodes do not synchronize access to it.

    Args:
        decoder: Any object with a ``decode(options, extension)`` method.

    Returns:
        The previously active decoder, so callers can restore it.
    """
    global _decoder  # noqa: PLW0603
    previous = _decoder
    _decoder = decoder
    return previous


def decode_extension(
    descriptor: Message | None,
    extension: FieldDescriptor | None,
    destination: Message | None = None,
) -> Any:
    """Decode *extension* from the options of *descriptor*.

    A ``None`` descriptor, or one without options set, never carries an extension: the call returns ``None`` without
    consulting the decoder, whatever *extension* and *destination* are. Errors raised by the decoder propagate
    unchanged.

    Args:
        descriptor: A ``descriptor_pb2`` record (``OneofDescriptorProto``, ``DescriptorProto``, ...) or ``None``.
        extension: The extension field descriptor to read.
        destination: Optional message the decoded value is copied into when the value is itself a message.

    Returns:
        The decoded value, or ``None`` when the extension is not present.
    """
    if descriptor is None or not descriptor.HasField("options"):
        return None
    value = _decoder.decode(descriptor.options, extension)
    if value is None:
        return None
    if destination is not None and isinstance(value, Message):
        destination.CopyFrom(value)
    return value
