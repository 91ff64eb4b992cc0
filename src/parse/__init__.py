"""Decoders for descriptors, internal names and generic signatures."""

from parse.descriptors import (
    MalformedDescriptor,
    parse_internal_name,
    parse_method,
    parse_type,
)
from parse.signatures import (
    MalformedSignature,
    parse_class_signature,
    parse_field_signature,
    parse_method_signature,
)

__all__ = [
    "MalformedDescriptor",
    "MalformedSignature",
    "parse_class_signature",
    "parse_field_signature",
    "parse_internal_name",
    "parse_method",
    "parse_method_signature",
    "parse_type",
]
