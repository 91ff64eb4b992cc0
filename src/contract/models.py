"""Schemas for exported symbol records."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from contract.artifacts import RECORD_SCHEMA_VERSION
from domain.access import Access


class ClassRecord(BaseModel):
    """A scanned class, keyed by its dotted fqn."""

    schema_version: int = Field(default=RECORD_SCHEMA_VERSION)
    kind: Literal["class"] = "class"
    fqn: str
    internal_name: str
    access: Access
    deprecated: bool = False
    super_class: str | None = Field(
        default=None, description="Internal name of the superclass"
    )
    interfaces: list[str] = Field(default_factory=list)
    inner_classes: list[str] = Field(default_factory=list)
    generics: str | None = Field(
        default=None, description="Class signature attribute, if present"
    )
    source_file: str | None = None
    line: int | None = None
    is_scala: bool = False
    internal_refs: list[str] = Field(default_factory=list)


class FieldRecord(BaseModel):
    schema_version: int = Field(default=RECORD_SCHEMA_VERSION)
    kind: Literal["field"] = "field"
    fqn: str
    owner: str = Field(description="Internal name of the declaring class")
    name: str
    descriptor: str
    generics: str | None = None
    access: Access
    internal_refs: list[str] = Field(default_factory=list)


class MethodRecord(BaseModel):
    schema_version: int = Field(default=RECORD_SCHEMA_VERSION)
    kind: Literal["method"] = "method"
    fqn: str
    owner: str = Field(description="Internal name of the declaring class")
    name: str
    descriptor: str
    generics: str | None = None
    access: Access
    line: int | None = None
    internal_refs: list[str] = Field(default_factory=list)


__all__ = ["ClassRecord", "FieldRecord", "MethodRecord"]
