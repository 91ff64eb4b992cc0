"""Decoder for JVM field/method descriptors and internal class names.

The grammar is read left to right with one character of lookahead and no
backtracking. Every successful decode re-encodes to exactly its input.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from domain.names import (
    PRIMITIVES_BY_CODE,
    ArrayDescriptor,
    ClassName,
    Descriptor,
    DescriptorType,
    PackageName,
)

logger = logging.getLogger(__name__)

_ILLEGAL_NAME_CHARS = frozenset(".;[")

# JVMS 4.3.2: an array type may have at most 255 dimensions.
MAX_ARRAY_DIMENSIONS = 255


class MalformedDescriptor(ValueError):
    """Raised when a string violates the descriptor grammar."""

    kind = "descriptor"

    def __init__(self, text: str, position: int, reason: str) -> None:
        self.text = text
        self.position = position
        self.reason = reason
        super().__init__(
            f"Malformed {self.kind} {text!r} at position {position}: {reason}"
        )


@lru_cache(maxsize=4096)
def package_name(path: tuple[str, ...]) -> PackageName:
    """Interned package name for decoded class names."""
    return PackageName(path)


@lru_cache(maxsize=8192)
def _class_name(internal: str) -> ClassName:
    *package, simple = internal.split("/")
    return ClassName(package_name(tuple(package)), simple)


def internal_name_problem(internal: str) -> str | None:
    """Return why ``internal`` is not a valid internal class name, or None."""
    if not internal:
        return "empty class name"
    if any(not segment for segment in internal.split("/")):
        return "empty name segment"
    illegal = _ILLEGAL_NAME_CHARS.intersection(internal)
    if illegal:
        return f"illegal character {min(illegal)!r} in class name"
    return None


class Cursor:
    """Character cursor shared by the descriptor and signature readers."""

    error: type[MalformedDescriptor] = MalformedDescriptor

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        if self.at_end():
            return ""
        return self.text[self.pos]

    def read(self) -> str:
        if self.at_end():
            raise self.fail("unexpected end of input")
        ch = self.text[self.pos]
        self.pos += 1
        return ch

    def expect(self, expected: str) -> None:
        if self.at_end():
            raise self.fail(f"expected {expected!r}, got end of input")
        ch = self.read()
        if ch != expected:
            raise self.fail(f"expected {expected!r}, got {ch!r}", self.pos - 1)

    def finish(self) -> None:
        if not self.at_end():
            raise self.fail(f"trailing characters {self.text[self.pos:]!r}")

    def fail(self, reason: str, position: int | None = None) -> MalformedDescriptor:
        return self.error(self.text, self.pos if position is None else position, reason)

    def array_dimensions(self) -> int:
        """Consume a run of ``[`` and return its length."""
        start = self.pos
        while self.peek() == "[":
            self.pos += 1
        dimensions = self.pos - start
        if dimensions > MAX_ARRAY_DIMENSIONS:
            raise self.fail(
                f"{dimensions} array dimensions exceed {MAX_ARRAY_DIMENSIONS}", start
            )
        return dimensions

    def class_name(self, internal: str, start: int) -> ClassName:
        problem = internal_name_problem(internal)
        if problem is not None:
            raise self.fail(problem, start)
        return _class_name(internal)


class DescriptorReader(Cursor):
    def read_type(self) -> DescriptorType:
        dimensions = self.array_dimensions()
        result = self._read_element()
        for _ in range(dimensions):
            result = ArrayDescriptor(result)
        return result

    def _read_element(self) -> DescriptorType:
        start = self.pos
        tag = self.read()
        primitive = PRIMITIVES_BY_CODE.get(tag)
        if primitive is not None:
            return primitive
        if tag == "L":
            return self._read_reference(start)
        raise self.fail(f"unrecognised type tag {tag!r}", start)

    def _read_reference(self, start: int) -> ClassName:
        end = self.text.find(";", self.pos)
        if end < 0:
            raise self.fail("unterminated class type", start)
        internal = self.text[self.pos : end]
        class_name = self.class_name(internal, start + 1)
        if class_name.is_primitive:
            # L<primitive>; would re-encode as a single letter.
            raise self.fail(f"primitive {internal!r} in class type form", start)
        self.pos = end + 1
        return class_name

    def read_method(self) -> Descriptor:
        self.expect("(")
        params: list[DescriptorType] = []
        while self.peek() != ")":
            if self.at_end():
                raise self.fail("missing ')'")
            params.append(self.read_type())
        self.read()
        if self.at_end():
            raise self.fail("missing return type")
        return Descriptor(tuple(params), self.read_type())


def parse_type(desc: str) -> DescriptorType:
    """Decode a single field type descriptor such as ``[Ljava/lang/String;``."""
    reader = DescriptorReader(desc)
    try:
        if reader.at_end():
            raise reader.fail("empty descriptor")
        result = reader.read_type()
        reader.finish()
    except MalformedDescriptor as exc:
        logger.debug("Rejected type descriptor: %s", exc)
        raise
    return result


def parse_method(desc: str) -> Descriptor:
    """Decode a method descriptor such as ``(ILjava/lang/String;)V``."""
    reader = DescriptorReader(desc)
    try:
        result = reader.read_method()
        reader.finish()
    except MalformedDescriptor as exc:
        logger.debug("Rejected method descriptor: %s", exc)
        raise
    return result


def parse_internal_name(name: str) -> ClassName:
    """Decode a slash-separated internal name such as ``java/util/Map$Entry``."""
    problem = internal_name_problem(name)
    if problem is not None:
        logger.debug("Rejected internal name %r: %s", name, problem)
        raise MalformedDescriptor(name, 0, problem)
    return _class_name(name)


__all__ = [
    "Cursor",
    "DescriptorReader",
    "MAX_ARRAY_DIMENSIONS",
    "MalformedDescriptor",
    "internal_name_problem",
    "package_name",
    "parse_internal_name",
    "parse_method",
    "parse_type",
]
