"""Decoder for the class-file ``Signature`` attribute.

Implements the class, method and field signature grammars of JVMS 4.7.9.1.
Each decoded value re-encodes to its input through ``signature_string``.
"""

from __future__ import annotations

import logging
from typing import cast

from domain.names import PRIMITIVE_VOID, PRIMITIVES_BY_CODE
from domain.signatures import (
    WILDCARD,
    BoundType,
    GenericArg,
    GenericArray,
    GenericClass,
    GenericClassName,
    GenericMethod,
    GenericParam,
    GenericSignature,
    GenericVar,
    InnerClassName,
)
from parse.descriptors import Cursor, MalformedDescriptor

logger = logging.getLogger(__name__)

# Bounds recursion through nested type arguments such as List<List<...>>.
MAX_TYPE_ARGUMENT_DEPTH = 64

# Terminates identifiers in every signature production.
_IDENTIFIER_STOP = frozenset("/;.<>:")
_BASE_TYPES = frozenset("BCDFIJSZ")
_REFERENCE_TAGS = frozenset("LT[")


class MalformedSignature(MalformedDescriptor):
    """Raised when a string violates the generic signature grammar."""

    kind = "signature"


class SignatureReader(Cursor):
    error = MalformedSignature

    def __init__(self, text: str) -> None:
        super().__init__(text)
        self.depth = 0

    def identifier(self) -> str:
        start = self.pos
        while not self.at_end() and self.text[self.pos] not in _IDENTIFIER_STOP:
            self.pos += 1
        if self.pos == start:
            raise self.fail("expected identifier")
        return self.text[start : self.pos]

    # -- top-level productions -------------------------------------------

    def class_signature(self) -> GenericClass:
        params = self.type_parameters()
        if self.at_end():
            raise self.fail("missing superclass signature")
        supers = [self.class_type()]
        while not self.at_end():
            supers.append(self.class_type())
        return GenericClass(params, tuple(supers))

    def method_signature(self) -> GenericMethod:
        type_params = self.type_parameters()
        self.expect("(")
        params: list[GenericSignature] = []
        while self.peek() != ")":
            if self.at_end():
                raise self.fail("missing ')'")
            params.append(self.java_type())
        self.read()
        if self.peek() == "V":
            self.read()
            return_type: GenericSignature = GenericClassName(PRIMITIVE_VOID)
        else:
            return_type = self.java_type()
        throws: list[GenericSignature] = []
        while self.peek() == "^":
            self.read()
            if self.peek() == "T":
                throws.append(self.type_variable())
            else:
                throws.append(self.class_type())
        return GenericMethod(type_params, tuple(params), return_type, tuple(throws))

    # -- type parameters -------------------------------------------------

    def type_parameters(self) -> tuple[GenericParam, ...]:
        if self.peek() != "<":
            return ()
        self.read()
        params = [self.type_parameter()]
        while self.peek() != ">":
            if self.at_end():
                raise self.fail("unterminated type parameters")
            params.append(self.type_parameter())
        self.read()
        return tuple(params)

    def type_parameter(self) -> GenericParam:
        name = self.identifier()
        self.expect(":")
        class_bound = None
        if self.peek() in _REFERENCE_TAGS:
            class_bound = self.reference_type()
        interface_bounds: list[GenericSignature] = []
        while self.peek() == ":":
            self.read()
            interface_bounds.append(self.reference_type())
        return GenericParam(name, class_bound, tuple(interface_bounds))

    # -- types -----------------------------------------------------------

    def java_type(self) -> GenericSignature:
        if self.peek() in _BASE_TYPES:
            return GenericClassName(PRIMITIVES_BY_CODE[self.read()])
        return self.reference_type()

    def reference_type(self) -> GenericSignature:
        tag = self.peek()
        if tag == "L":
            return self.class_type()
        if tag == "T":
            return self.type_variable()
        if tag == "[":
            dimensions = self.array_dimensions()
            result = self.java_type()
            for _ in range(dimensions):
                result = GenericArray(result)
            return result
        if not tag:
            raise self.fail("unexpected end of input")
        raise self.fail(f"unrecognised type tag {tag!r}")

    def type_variable(self) -> GenericVar:
        self.expect("T")
        name = self.identifier()
        self.expect(";")
        return GenericVar(name)

    def class_type(self) -> GenericClassName:
        start = self.pos
        self.expect("L")
        segments = [self.identifier()]
        while self.peek() == "/":
            self.read()
            segments.append(self.identifier())
        class_name = self.class_name("/".join(segments), start + 1)
        if class_name.is_primitive:
            raise self.fail(f"primitive {class_name.name!r} in class type form", start)
        args = self.type_arguments()
        inner: list[InnerClassName] = []
        while self.peek() == ".":
            self.read()
            inner_name = self.identifier()
            inner.append(InnerClassName(inner_name, self.type_arguments()))
        self.expect(";")
        return GenericClassName(class_name, args, tuple(inner))

    def type_arguments(self) -> tuple[GenericArg, ...]:
        if self.peek() != "<":
            return ()
        if self.depth >= MAX_TYPE_ARGUMENT_DEPTH:
            raise self.fail(
                f"type arguments nested deeper than {MAX_TYPE_ARGUMENT_DEPTH}"
            )
        self.depth += 1
        self.read()
        args = [self.type_argument()]
        while self.peek() != ">":
            if self.at_end():
                raise self.fail("unterminated type arguments")
            args.append(self.type_argument())
        self.read()
        self.depth -= 1
        return tuple(args)

    def type_argument(self) -> GenericArg:
        indicator = self.peek()
        if indicator == "*":
            self.read()
            return WILDCARD
        if indicator == "+":
            self.read()
            return GenericArg(BoundType.UPPER, self.reference_type())
        if indicator == "-":
            self.read()
            return GenericArg(BoundType.LOWER, self.reference_type())
        return GenericArg(None, self.reference_type())


def _parse(signature: str, production: str) -> object:
    reader = SignatureReader(signature)
    try:
        if reader.at_end():
            raise reader.fail("empty signature")
        result = getattr(reader, production)()
        reader.finish()
    except MalformedSignature as exc:
        logger.debug("Rejected %s: %s", production.replace("_", " "), exc)
        raise
    return result


def parse_class_signature(signature: str) -> GenericClass:
    """Decode a class signature, e.g. ``<T:Ljava/lang/Object;>Ljava/lang/Object;``."""
    return cast("GenericClass", _parse(signature, "class_signature"))


def parse_method_signature(signature: str) -> GenericMethod:
    return cast("GenericMethod", _parse(signature, "method_signature"))


def parse_field_signature(signature: str) -> GenericSignature:
    """Decode a field signature (a reference type signature)."""
    return cast("GenericSignature", _parse(signature, "reference_type"))


__all__ = [
    "MAX_TYPE_ARGUMENT_DEPTH",
    "MalformedSignature",
    "SignatureReader",
    "parse_class_signature",
    "parse_field_signature",
    "parse_method_signature",
]
