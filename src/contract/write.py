"""Flatten raw class-file records and write them as deterministic JSONL."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import orjson

from contract.artifacts import CLASSES_JSONL, FIELDS_JSONL, METHODS_JSONL
from contract.models import ClassRecord, FieldRecord, MethodRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from domain.names import FullyQualifiedName
    from domain.records import RawClassfile, RawField, RawMethod
    from pydantic import BaseModel

logger = logging.getLogger(__name__)


def _refs(internal_refs: Iterable[FullyQualifiedName]) -> list[str]:
    return sorted({ref.fqn_string for ref in internal_refs})


def field_record(raw: RawField) -> FieldRecord:
    return FieldRecord(
        fqn=raw.fqn,
        owner=raw.name.owner.internal_name,
        name=raw.name.name,
        descriptor=raw.clazz.internal_string,
        generics=raw.generics,
        access=raw.access,
        internal_refs=_refs(raw.internal_refs),
    )


def method_record(raw: RawMethod) -> MethodRecord:
    return MethodRecord(
        fqn=raw.fqn,
        owner=raw.name.owner.internal_name,
        name=raw.name.name,
        descriptor=raw.name.descriptor.descriptor_string,
        generics=raw.generics,
        access=raw.access,
        line=raw.line,
        internal_refs=_refs(raw.internal_refs),
    )


def class_record(raw: RawClassfile) -> ClassRecord:
    return ClassRecord(
        fqn=raw.fqn,
        internal_name=raw.name.internal_name,
        access=raw.access,
        deprecated=raw.deprecated,
        super_class=raw.super_class.internal_name if raw.super_class else None,
        interfaces=[i.internal_name for i in raw.interfaces],
        inner_classes=sorted(c.internal_name for c in raw.inner_classes),
        generics=raw.generics.signature_string if raw.generics else None,
        source_file=raw.source.filename,
        line=raw.source.line,
        is_scala=raw.is_scala,
        internal_refs=_refs(raw.internal_refs),
    )


def records_for_classfile(
    raw: RawClassfile,
) -> tuple[ClassRecord, list[FieldRecord], list[MethodRecord]]:
    """Flatten one scanned class into its class, field and method records."""
    return (
        class_record(raw),
        [field_record(f) for f in raw.fields],
        [method_record(m) for m in raw.methods],
    )


def _write_jsonl(path: Path, records: Sequence[BaseModel]) -> None:
    with path.open("wb") as f:
        for rec in records:
            payload = rec.model_dump(mode="json")
            f.write(orjson.dumps(payload, option=orjson.OPT_SORT_KEYS))
            f.write(b"\n")


def write_records(
    *,
    out_dir: Path,
    classfiles: Iterable[RawClassfile],
) -> dict[str, object]:
    """Write class, field and method record files into ``out_dir``.

    Records are ordered by fqn so repeated exports are byte-identical.

    Returns:
        Dictionary with record counts and the list of written paths.
    """
    classes: list[ClassRecord] = []
    fields: list[FieldRecord] = []
    methods: list[MethodRecord] = []
    for raw in classfiles:
        class_rec, field_recs, method_recs = records_for_classfile(raw)
        classes.append(class_rec)
        fields.extend(field_recs)
        methods.extend(method_recs)

    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for filename, records in (
        (CLASSES_JSONL, classes),
        (FIELDS_JSONL, fields),
        (METHODS_JSONL, methods),
    ):
        path = out_dir / filename
        _write_jsonl(path, sorted(records, key=lambda r: r.fqn))
        written.append(str(path))

    logger.info(
        "Wrote %d classes, %d fields, %d methods to %s",
        len(classes),
        len(fields),
        len(methods),
        out_dir,
    )
    return {
        "classes": len(classes),
        "fields": len(fields),
        "methods": len(methods),
        "artifacts": written,
    }


__all__ = [
    "class_record",
    "field_record",
    "method_record",
    "records_for_classfile",
    "write_records",
]
