"""Identity and type model for JVM symbols."""

from domain.access import Access, is_deprecated
from domain.names import (
    PRIMITIVE_BOOLEAN,
    PRIMITIVE_BYTE,
    PRIMITIVE_CHAR,
    PRIMITIVE_DOUBLE,
    PRIMITIVE_FLOAT,
    PRIMITIVE_INT,
    PRIMITIVE_LONG,
    PRIMITIVE_SHORT,
    PRIMITIVE_VOID,
    ROOT_PACKAGE,
    ArrayDescriptor,
    ClassName,
    Descriptor,
    DescriptorType,
    FieldName,
    FullyQualifiedName,
    MethodName,
    PackageName,
)
from domain.records import (
    DeclaredAs,
    RawClassfile,
    RawField,
    RawMethod,
    RawScalapClass,
    RawScalapField,
    RawScalapMethod,
    RawSource,
    RawType,
)
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

__all__ = [
    "Access",
    "ArrayDescriptor",
    "BoundType",
    "ClassName",
    "DeclaredAs",
    "Descriptor",
    "DescriptorType",
    "FieldName",
    "FullyQualifiedName",
    "GenericArg",
    "GenericArray",
    "GenericClass",
    "GenericClassName",
    "GenericMethod",
    "GenericParam",
    "GenericSignature",
    "GenericVar",
    "InnerClassName",
    "MethodName",
    "PRIMITIVE_BOOLEAN",
    "PRIMITIVE_BYTE",
    "PRIMITIVE_CHAR",
    "PRIMITIVE_DOUBLE",
    "PRIMITIVE_FLOAT",
    "PRIMITIVE_INT",
    "PRIMITIVE_LONG",
    "PRIMITIVE_SHORT",
    "PRIMITIVE_VOID",
    "PackageName",
    "ROOT_PACKAGE",
    "RawClassfile",
    "RawField",
    "RawMethod",
    "RawScalapClass",
    "RawScalapField",
    "RawScalapMethod",
    "RawSource",
    "RawType",
    "WILDCARD",
    "is_deprecated",
]
