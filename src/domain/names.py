"""Fully qualified names and descriptor types for JVM symbols.

Packages, classes, fields and methods are immutable value objects with
structural equality. ``ClassName`` doubles as a descriptor type, so the
descriptor grammar (primitives, references, arrays, method descriptors) lives
alongside the name hierarchy.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from functools import cached_property
from typing import Any, cast


class FullyQualifiedName(ABC):
    """Globally unique structural identity of a package, class or member."""

    @property
    @abstractmethod
    def fqn_string(self) -> str: ...

    def contains(self, other: FullyQualifiedName) -> bool:
        """Return True when ``other`` is this name or is enclosed by it."""
        rule = _CONTAINS_RULES.get((type(self), type(other)))
        if rule is None:
            return False
        return rule(self, other)


class DescriptorType(ABC):
    """A single type in the JVM descriptor grammar."""

    @property
    @abstractmethod
    def internal_string(self) -> str: ...


@dataclass(frozen=True)
class PackageName(FullyQualifiedName):
    path: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.path, tuple):
            object.__setattr__(self, "path", tuple(self.path))

    @property
    def fqn_string(self) -> str:
        return ".".join(self.path)

    @property
    def is_root(self) -> bool:
        return not self.path

    @property
    def parent(self) -> PackageName:
        if not self.path:
            return self
        return PackageName(self.path[:-1])


ROOT_PACKAGE = PackageName()

_PRIMITIVE_CODES: dict[str, str] = {
    "boolean": "Z",
    "byte": "B",
    "char": "C",
    "short": "S",
    "int": "I",
    "long": "J",
    "float": "F",
    "double": "D",
    "void": "V",
}

PRIMITIVE_NAMES = frozenset(_PRIMITIVE_CODES)


@dataclass(frozen=True)
class ClassName(FullyQualifiedName, DescriptorType):
    package: PackageName
    name: str

    @property
    def fqn_string(self) -> str:
        if self.package.is_root:
            return self.name
        return f"{self.package.fqn_string}.{self.name}"

    @property
    def is_primitive(self) -> bool:
        return self.package.is_root and self.name in PRIMITIVE_NAMES

    @cached_property
    def internal_string(self) -> str:
        if self.is_primitive:
            return _PRIMITIVE_CODES[self.name]
        return f"L{self.internal_name};"

    @property
    def internal_name(self) -> str:
        """Slash-separated class-file form, e.g. ``java/lang/String``."""
        return "/".join((*self.package.path, self.name))

    @classmethod
    def from_descriptor(cls, desc: str) -> ClassName:
        """Decode a single type descriptor, collapsing arrays to their element.

        Method descriptors are not accepted and raise ``MalformedDescriptor``.
        """
        from parse.descriptors import parse_type

        decoded = parse_type(desc)
        if isinstance(decoded, ArrayDescriptor):
            return decoded.reifier
        return cast("ClassName", decoded)

    @classmethod
    def from_internal(cls, internal: str) -> ClassName:
        return cls.from_fqn(internal, splitter="/")

    @classmethod
    def from_fqn(cls, name: str, splitter: str = ".") -> ClassName:
        """Split ``name`` into package path and simple name.

        Examples:
            >>> ClassName.from_fqn("java.lang.String").package.path
            ('java', 'lang')
            >>> ClassName.from_fqn("int").is_primitive
            True
        """
        *before, simple = name.split(splitter)
        if not simple:
            msg = f"Class name {name!r} has an empty simple name"
            raise ValueError(msg)
        return cls(PackageName(tuple(before)), simple)


def _primitive(name: str) -> ClassName:
    return ClassName(ROOT_PACKAGE, name)


PRIMITIVE_BOOLEAN = _primitive("boolean")
PRIMITIVE_BYTE = _primitive("byte")
PRIMITIVE_CHAR = _primitive("char")
PRIMITIVE_SHORT = _primitive("short")
PRIMITIVE_INT = _primitive("int")
PRIMITIVE_LONG = _primitive("long")
PRIMITIVE_FLOAT = _primitive("float")
PRIMITIVE_DOUBLE = _primitive("double")
PRIMITIVE_VOID = _primitive("void")

# Descriptor code -> interned primitive.
PRIMITIVES_BY_CODE: dict[str, ClassName] = {
    p.internal_string: p
    for p in (
        PRIMITIVE_BOOLEAN,
        PRIMITIVE_BYTE,
        PRIMITIVE_CHAR,
        PRIMITIVE_SHORT,
        PRIMITIVE_INT,
        PRIMITIVE_LONG,
        PRIMITIVE_FLOAT,
        PRIMITIVE_DOUBLE,
        PRIMITIVE_VOID,
    )
}


@dataclass(frozen=True)
class ArrayDescriptor(DescriptorType):
    element: DescriptorType

    @cached_property
    def internal_string(self) -> str:
        return "[" * self.dimensions + self.reifier.internal_string

    @property
    def dimensions(self) -> int:
        count = 1
        element = self.element
        while isinstance(element, ArrayDescriptor):
            count += 1
            element = element.element
        return count

    @property
    def reifier(self) -> ClassName:
        """Innermost element class, primitive or not."""
        element = self.element
        while isinstance(element, ArrayDescriptor):
            element = element.element
        return cast("ClassName", element)


@dataclass(frozen=True)
class Descriptor:
    """Method descriptor: ordered parameter types plus a return type."""

    params: tuple[DescriptorType, ...]
    return_type: DescriptorType

    def __post_init__(self) -> None:
        if not isinstance(self.params, tuple):
            object.__setattr__(self, "params", tuple(self.params))

    @cached_property
    def descriptor_string(self) -> str:
        params = "".join(p.internal_string for p in self.params)
        return f"({params}){self.return_type.internal_string}"


@dataclass(frozen=True)
class FieldName(FullyQualifiedName):
    owner: ClassName
    name: str

    @property
    def fqn_string(self) -> str:
        return f"{self.owner.fqn_string}.{self.name}"


# Methods are overloaded by signature, so the descriptor is part of the
# identity and of the fqn string.
@dataclass(frozen=True)
class MethodName(FullyQualifiedName):
    owner: ClassName
    name: str
    descriptor: Descriptor

    @property
    def fqn_string(self) -> str:
        return f"{self.owner.fqn_string}.{self.name}{self.descriptor.descriptor_string}"


# ---------------------------------------------------------------------------
# Containment rules, keyed by (container type, contained type)
# ---------------------------------------------------------------------------


def _package_contains_package(outer: PackageName, inner: PackageName) -> bool:
    return inner.path[: len(outer.path)] == outer.path


def _package_contains_class(outer: PackageName, inner: ClassName) -> bool:
    return _package_contains_package(outer, inner.package)


def _package_contains_member(
    outer: PackageName, inner: FieldName | MethodName
) -> bool:
    return _package_contains_class(outer, inner.owner)


def _class_contains_class(outer: ClassName, inner: ClassName) -> bool:
    if outer.package != inner.package:
        return False
    return inner.name == outer.name or inner.name.startswith(outer.name + "$")


def _class_contains_member(outer: ClassName, inner: FieldName | MethodName) -> bool:
    return _class_contains_class(outer, inner.owner)


def _identity(outer: FullyQualifiedName, inner: FullyQualifiedName) -> bool:
    return outer == inner


_CONTAINS_RULES: dict[
    tuple[type[FullyQualifiedName], type[FullyQualifiedName]],
    Callable[[Any, Any], bool],
] = {
    (PackageName, PackageName): _package_contains_package,
    (PackageName, ClassName): _package_contains_class,
    (PackageName, FieldName): _package_contains_member,
    (PackageName, MethodName): _package_contains_member,
    (ClassName, ClassName): _class_contains_class,
    (ClassName, FieldName): _class_contains_member,
    (ClassName, MethodName): _class_contains_member,
    (FieldName, FieldName): _identity,
    (MethodName, MethodName): _identity,
}


__all__ = [
    "ArrayDescriptor",
    "ClassName",
    "Descriptor",
    "DescriptorType",
    "FieldName",
    "FullyQualifiedName",
    "MethodName",
    "PRIMITIVES_BY_CODE",
    "PRIMITIVE_BOOLEAN",
    "PRIMITIVE_BYTE",
    "PRIMITIVE_CHAR",
    "PRIMITIVE_DOUBLE",
    "PRIMITIVE_FLOAT",
    "PRIMITIVE_INT",
    "PRIMITIVE_LONG",
    "PRIMITIVE_NAMES",
    "PRIMITIVE_SHORT",
    "PRIMITIVE_VOID",
    "PackageName",
    "ROOT_PACKAGE",
]
