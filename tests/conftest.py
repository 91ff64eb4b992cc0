"""Shared pytest fixtures that build raw class-file records."""

from __future__ import annotations

import pytest

from domain.access import Access
from domain.names import (
    PRIMITIVE_VOID,
    ClassName,
    Descriptor,
    FieldName,
    MethodName,
)
from domain.records import RawClassfile, RawField, RawMethod, RawSource
from parse.signatures import parse_class_signature


@pytest.fixture()
def box_classfile() -> RawClassfile:
    """Return a generic ``com.example.Box<T>`` with one field and one method."""
    owner = ClassName.from_internal("com/example/Box")
    list_class = ClassName.from_internal("java/util/List")
    object_class = ClassName.from_internal("java/lang/Object")

    items = RawField(
        name=FieldName(owner, "items"),
        clazz=list_class,
        generics="Ljava/util/List<TT;>;",
        access=Access.PRIVATE,
        internal_refs=frozenset({list_class}),
    )
    put = RawMethod(
        name=MethodName(owner, "put", Descriptor((object_class,), PRIMITIVE_VOID)),
        access=Access.PUBLIC,
        generics="(TT;)V",
        line=12,
        internal_refs=frozenset({items.name, list_class}),
    )
    return RawClassfile(
        name=owner,
        generics=parse_class_signature("<T:Ljava/lang/Object;>Ljava/lang/Object;"),
        inner_classes=frozenset({ClassName.from_internal("com/example/Box$Entry")}),
        super_class=object_class,
        interfaces=(ClassName.from_internal("java/io/Serializable"),),
        access=Access.PUBLIC,
        deprecated=False,
        fields=(items,),
        methods=(put,),
        source=RawSource("Box.java", 3),
        internal_refs=frozenset({ClassName.from_internal("java/lang/String")}),
    )
