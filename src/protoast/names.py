"""Identifier type with casing conversions for schema names."""

from __future__ import annotations

import re

# Acronym runs ("HTTP" in "HTTPServer"), capitalized or lowercase words with trailing digits, or bare digit runs.
_WORD_RE = re.compile(r"[A-Z]+[0-9]*(?![a-z])|[A-Z]?[a-z]+[0-9]*|[0-9]+")
_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")


class Name(str):
    """A declared schema identifier.

    ``Name`` is a ``str`` subclass, so it compares and hashes like the raw identifier. The casing helpers split the
    identifier into words on ``_``, ``.``, ``-`` and lower-to-upper case transitions, then rejoin them. A run of
    capitals is read as one acronym, so adjacent one-letter words merge (``a_a`` becomes ``AA``, which splits back
    as ``aa``):

        >>> Name("order_id").upper_camel_case()
        'OrderId'
        >>> Name("HTTPServer").lower_snake_case()
        'http_server'
    """

    __slots__ = ()

    def split_words(self) -> list[str]:
        """Return the words making up this name, preserving their original casing."""
        words: list[str] = []
        for part in _SEPARATOR_RE.split(self):
            words.extend(_WORD_RE.findall(part))
        return words

    def upper_camel_case(self) -> Name:
        return Name("".join(w[:1].upper() + w[1:] for w in self.split_words()))

    def lower_camel_case(self) -> Name:
        words = self.split_words()
        if not words:
            return Name("")
        head = words[0].lower()
        return Name(head + "".join(w[:1].upper() + w[1:] for w in words[1:]))

    def lower_snake_case(self) -> Name:
        return Name("_".join(w.lower() for w in self.split_words()))

    def upper_snake_case(self) -> Name:
        return Name("_".join(w[:1].upper() + w[1:].lower() for w in self.split_words()))

    def screaming_snake_case(self) -> Name:
        return Name("_".join(w.upper() for w in self.split_words()))

    def lower_dot_notation(self) -> Name:
        return Name(".".join(w.lower() for w in self.split_words()))
