"""Generic signature model.

Mirrors the class-file ``Signature`` attribute grammar: class signatures,
method signatures and field type signatures. Inner classes nest through
``InnerClassName`` segments and every type argument carries its own bound,
so ``Outer<? extends T>.Inner<U>`` survives a decode/encode round trip.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from domain.names import PRIMITIVE_VOID, ClassName


class BoundType(str, Enum):
    UPPER = "+"
    LOWER = "-"


class GenericSignature(ABC):
    """A type in a generic signature (class, array or type variable)."""

    @property
    @abstractmethod
    def signature_string(self) -> str: ...


def _args_string(args: tuple[GenericArg, ...]) -> str:
    if not args:
        return ""
    return "<" + "".join(a.signature_string for a in args) + ">"


@dataclass(frozen=True)
class GenericArg:
    """A type argument; ``signature`` is None for the unbounded wildcard ``*``."""

    bound_type: BoundType | None
    signature: GenericSignature | None

    def __post_init__(self) -> None:
        if self.signature is None and self.bound_type is not None:
            msg = f"Bound {self.bound_type.value!r} requires a signature"
            raise ValueError(msg)

    @property
    def is_wildcard(self) -> bool:
        return self.signature is None

    @property
    def signature_string(self) -> str:
        if self.signature is None:
            return "*"
        prefix = self.bound_type.value if self.bound_type is not None else ""
        return prefix + self.signature.signature_string


WILDCARD = GenericArg(None, None)


@dataclass(frozen=True)
class InnerClassName:
    name: str
    generic_args: tuple[GenericArg, ...] = ()

    @property
    def signature_string(self) -> str:
        return "." + self.name + _args_string(self.generic_args)


@dataclass(frozen=True)
class GenericClassName(GenericSignature):
    class_name: ClassName
    generic_args: tuple[GenericArg, ...] = ()
    inner_classes: tuple[InnerClassName, ...] = ()

    @property
    def signature_string(self) -> str:
        if self.class_name.is_primitive:
            return self.class_name.internal_string
        inner = "".join(i.signature_string for i in self.inner_classes)
        return (
            f"L{self.class_name.internal_name}"
            f"{_args_string(self.generic_args)}{inner};"
        )


@dataclass(frozen=True)
class GenericArray(GenericSignature):
    element: GenericSignature

    @property
    def dimensions(self) -> int:
        return _unwrap_array(self)[0]

    @property
    def signature_string(self) -> str:
        dimensions, element = _unwrap_array(self)
        return "[" * dimensions + element.signature_string


def _unwrap_array(signature: GenericSignature) -> tuple[int, GenericSignature]:
    dimensions = 0
    while isinstance(signature, GenericArray):
        dimensions += 1
        signature = signature.element
    return dimensions, signature


@dataclass(frozen=True)
class GenericVar(GenericSignature):
    name: str

    @property
    def signature_string(self) -> str:
        return f"T{self.name};"


@dataclass(frozen=True)
class GenericParam:
    """A declared type parameter, e.g. ``T extends Number & Comparable<T>``.

    ``class_bound`` is None when the parameter only has interface bounds
    (encoded as ``T::...``).
    """

    name: str
    class_bound: GenericSignature | None = None
    interface_bounds: tuple[GenericSignature, ...] = ()

    @property
    def bounds(self) -> tuple[GenericSignature, ...]:
        if self.class_bound is None:
            return self.interface_bounds
        return (self.class_bound, *self.interface_bounds)

    @property
    def signature_string(self) -> str:
        class_bound = "" if self.class_bound is None else self.class_bound.signature_string
        interfaces = "".join(":" + b.signature_string for b in self.interface_bounds)
        return f"{self.name}:{class_bound}{interfaces}"


def _params_string(params: tuple[GenericParam, ...]) -> str:
    if not params:
        return ""
    return "<" + "".join(p.signature_string for p in params) + ">"


@dataclass(frozen=True)
class GenericClass:
    """Signature of a declared class: type parameters and supertypes.

    ``super_classes`` holds the superclass first, then the interfaces.
    """

    generic_params: tuple[GenericParam, ...] = ()
    super_classes: tuple[GenericClassName, ...] = ()

    @property
    def signature_string(self) -> str:
        supers = "".join(s.signature_string for s in self.super_classes)
        return _params_string(self.generic_params) + supers


@dataclass(frozen=True)
class GenericMethod:
    generic_params: tuple[GenericParam, ...] = ()
    params: tuple[GenericSignature, ...] = ()
    return_type: GenericSignature = field(
        default_factory=lambda: GenericClassName(PRIMITIVE_VOID)
    )
    throws: tuple[GenericSignature, ...] = ()

    @property
    def signature_string(self) -> str:
        params = "".join(p.signature_string for p in self.params)
        throws = "".join("^" + t.signature_string for t in self.throws)
        return (
            f"{_params_string(self.generic_params)}({params})"
            f"{self.return_type.signature_string}{throws}"
        )

    def erased_descriptor(self, class_params: tuple[GenericParam, ...] = ()) -> str:
        """Method descriptor javac emits for this signature.

        ``class_params`` are the enclosing class's type parameters; the
        method's own parameters shadow them.
        """
        scope = (*self.generic_params, *class_params)
        params = "".join(erase(p, scope) for p in self.params)
        return f"({params}){erase(self.return_type, scope)}"


_OBJECT_DESCRIPTOR = "Ljava/lang/Object;"


def erase(
    signature: GenericSignature, scope: tuple[GenericParam, ...] = ()
) -> str:
    """Erase a generic signature to the plain descriptor of its raw type.

    A type variable erases to the erasure of its leftmost bound, looked up by
    name in ``scope`` (first match wins, so pass method parameters before
    class parameters). Variables missing from ``scope`` or without bounds
    erase to ``java.lang.Object``. Inner classes use the ``$`` binary name.

    Examples:
        >>> number = GenericClassName(ClassName.from_fqn("java.lang.Number"))
        >>> erase(GenericArray(GenericVar("T")), (GenericParam("T", number),))
        '[Ljava/lang/Number;'
    """
    return _erase(signature, scope, frozenset())


def _erase(
    signature: GenericSignature,
    scope: tuple[GenericParam, ...],
    seen: frozenset[str],
) -> str:
    dimensions, signature = _unwrap_array(signature)
    return "[" * dimensions + _erase_element(signature, scope, seen)


def _erase_element(
    signature: GenericSignature,
    scope: tuple[GenericParam, ...],
    seen: frozenset[str],
) -> str:
    if isinstance(signature, GenericVar):
        # Cyclic bounds (<T:TU;U:TT;>) stop at Object.
        if signature.name in seen:
            return _OBJECT_DESCRIPTOR
        param = next((p for p in scope if p.name == signature.name), None)
        if param is None or not param.bounds:
            return _OBJECT_DESCRIPTOR
        return _erase(param.bounds[0], scope, seen | {signature.name})
    if isinstance(signature, GenericClassName):
        if signature.class_name.is_primitive:
            return signature.class_name.internal_string
        binary = "$".join(
            [signature.class_name.internal_name, *(i.name for i in signature.inner_classes)]
        )
        return f"L{binary};"
    msg = f"Unknown signature type: {type(signature)}"
    raise TypeError(msg)


__all__ = [
    "BoundType",
    "GenericArg",
    "GenericArray",
    "GenericClass",
    "GenericClassName",
    "GenericMethod",
    "GenericParam",
    "GenericSignature",
    "GenericVar",
    "InnerClassName",
    "WILDCARD",
    "erase",
]
