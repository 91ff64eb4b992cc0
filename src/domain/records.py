"""Raw symbol records produced by a class-file scan.

Records are created once per scanned class-file member and handed to the
indexer for persistence. They carry no behaviour beyond ``fqn``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from domain.access import Access
from domain.names import (
    ClassName,
    DescriptorType,
    FieldName,
    FullyQualifiedName,
    MethodName,
)
from domain.signatures import GenericClass


@dataclass(frozen=True)
class RawSource:
    filename: str | None = None
    line: int | None = None


@dataclass(frozen=True)
class RawField:
    name: FieldName
    clazz: DescriptorType
    generics: str | None
    access: Access
    internal_refs: frozenset[FullyQualifiedName] = frozenset()

    @property
    def fqn(self) -> str:
        return self.name.fqn_string


@dataclass(frozen=True)
class RawMethod:
    name: MethodName
    access: Access
    generics: str | None = None
    line: int | None = None
    internal_refs: frozenset[FullyQualifiedName] = frozenset()

    @property
    def fqn(self) -> str:
        return self.name.fqn_string


@dataclass(frozen=True)
class RawClassfile:
    """A scanned class with its members and outgoing references."""

    name: ClassName
    generics: GenericClass | None
    inner_classes: frozenset[ClassName]
    super_class: ClassName | None
    interfaces: tuple[ClassName, ...]
    access: Access
    deprecated: bool
    fields: tuple[RawField, ...]
    methods: tuple[RawMethod, ...]
    source: RawSource
    is_scala: bool = False
    internal_refs: frozenset[FullyQualifiedName] = frozenset()

    @property
    def fqn(self) -> str:
        return self.name.fqn_string


# ---------------------------------------------------------------------------
# Scala-side records. Names and type signatures come from an external
# decoder and are kept as opaque strings.
# ---------------------------------------------------------------------------


class DeclaredAs(str, Enum):
    METHOD = "method"
    TRAIT = "trait"
    INTERFACE = "interface"
    OBJECT = "object"
    CLASS = "class"
    FIELD = "field"
    NIL = "nil"


@dataclass(frozen=True)
class RawScalapField:
    java_name: FieldName
    scala_name: str
    type_signature: str
    access: Access

    @property
    def declared_as(self) -> DeclaredAs:
        return DeclaredAs.FIELD


@dataclass(frozen=True)
class RawScalapMethod:
    # simple_name groups overloads (``foo``); scala_name is the full name
    # (``org.example.Foo#foo``).
    simple_name: str
    scala_name: str
    type_signature: str
    access: Access

    @property
    def declared_as(self) -> DeclaredAs:
        return DeclaredAs.METHOD


@dataclass(frozen=True)
class RawType:
    """A Scala type alias declared inside ``owner``."""

    owner: ClassName
    java_name: ClassName
    scala_name: str
    access: Access
    type_signature: str

    @property
    def declared_as(self) -> DeclaredAs:
        return DeclaredAs.FIELD


@dataclass(frozen=True)
class RawScalapClass:
    java_name: ClassName
    scala_name: str
    type_signature: str
    access: Access
    declared_as: DeclaredAs
    fields: dict[str, RawScalapField] = field(default_factory=dict, hash=False)
    methods: dict[str, tuple[RawScalapMethod, ...]] = field(
        default_factory=dict, hash=False
    )
    type_aliases: dict[str, RawType] = field(default_factory=dict, hash=False)


__all__ = [
    "DeclaredAs",
    "RawClassfile",
    "RawField",
    "RawMethod",
    "RawScalapClass",
    "RawScalapField",
    "RawScalapMethod",
    "RawSource",
    "RawType",
]
