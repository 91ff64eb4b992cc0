"""Validation helpers for exported symbol record files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

import orjson
from pydantic import ValidationError

from contract.artifacts import RECORD_ARTIFACT_SPECS, RECORD_SCHEMA_VERSION
from contract.models import ClassRecord, FieldRecord, MethodRecord
from domain.names import ClassName
from parse.descriptors import (
    MalformedDescriptor,
    parse_internal_name,
    parse_method,
    parse_type,
)
from parse.signatures import (
    parse_class_signature,
    parse_field_signature,
    parse_method_signature,
)

if TYPE_CHECKING:
    from pathlib import Path

    from settings.config import MalformedPolicy


class _SchemaModel(Protocol):
    schema_version: int

    @classmethod
    def model_validate(cls, obj: Any) -> _SchemaModel: ...


@dataclass(frozen=True)
class ValidationMessage:
    artifact: str
    path: Path
    message: str
    line: int | None = None

    def location(self) -> str:
        if self.line is None:
            return str(self.path)
        return f"{self.path}:{self.line}"

    def to_dict(self) -> dict[str, object]:
        return {
            "artifact": self.artifact,
            "path": str(self.path),
            "line": self.line,
            "message": self.message,
        }


@dataclass
class ValidationResult:
    errors: list[ValidationMessage] = field(default_factory=list)
    warnings: list[ValidationMessage] = field(default_factory=list)
    records: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


def validate_records(
    artifacts_dir: Path,
    *,
    on_malformed: MalformedPolicy = "abort",
    strict_schema_version: bool = False,
) -> ValidationResult:
    """Validate every record file in ``artifacts_dir``.

    Each line is checked against its pydantic schema, then its descriptor,
    internal names and generic signature are decoded again. Malformed
    encodings are errors under ``abort`` and warnings under ``skip``.
    """
    result = ValidationResult()

    if not artifacts_dir.exists():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts directory does not exist.",
            )
        )
        return result

    if not artifacts_dir.is_dir():
        result.errors.append(
            ValidationMessage(
                artifact="artifacts_dir",
                path=artifacts_dir,
                message="Artifacts path is not a directory.",
            )
        )
        return result

    for artifact_name, spec in RECORD_ARTIFACT_SPECS.items():
        path = artifacts_dir / spec.filename
        if not path.exists():
            result.errors.append(
                ValidationMessage(
                    artifact=artifact_name,
                    path=path,
                    message="Required artifact file is missing.",
                )
            )
            continue

        _validate_jsonl(
            artifact_name,
            path,
            _model_for_artifact(artifact_name),
            result,
            on_malformed=on_malformed,
            strict_schema_version=strict_schema_version,
        )

    return result


def _model_for_artifact(artifact_name: str) -> type[_SchemaModel]:
    if artifact_name == "classes":
        return ClassRecord
    if artifact_name == "fields":
        return FieldRecord
    if artifact_name == "methods":
        return MethodRecord
    msg = f"Unknown record artifact: {artifact_name}"
    raise ValueError(msg)


def _validate_jsonl(
    artifact_name: str,
    path: Path,
    model: type[_SchemaModel],
    result: ValidationResult,
    *,
    on_malformed: MalformedPolicy,
    strict_schema_version: bool,
) -> None:
    try:
        handle = path.open("rb")
    except OSError as exc:
        result.errors.append(
            ValidationMessage(
                artifact=artifact_name,
                path=path,
                message=f"Failed to read file: {exc}.",
            )
        )
        return

    missing_schema_emitted = False
    with handle:
        for line_number, raw_line in enumerate(handle, 1):
            line = raw_line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Invalid JSON: {exc}.",
                    )
                )
                continue

            schema_present = isinstance(data, dict) and "schema_version" in data
            try:
                record = model.model_validate(data)
            except ValidationError as exc:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=f"Schema validation failed: {exc}.",
                    )
                )
                continue

            result.records += 1
            if not schema_present and not missing_schema_emitted:
                _report(
                    result,
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=(
                            "Missing schema_version; defaulted to "
                            f"{RECORD_SCHEMA_VERSION}."
                        ),
                    ),
                    as_error=strict_schema_version,
                )
                missing_schema_emitted = True
            elif schema_present and record.schema_version != RECORD_SCHEMA_VERSION:
                result.errors.append(
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=(
                            "Schema version mismatch: "
                            f"expected {RECORD_SCHEMA_VERSION}, "
                            f"got {record.schema_version}."
                        ),
                    )
                )
                continue

            problem = _check_encodings(record)
            if problem is not None:
                _report(
                    result,
                    ValidationMessage(
                        artifact=artifact_name,
                        path=path,
                        line=line_number,
                        message=problem,
                    ),
                    as_error=on_malformed == "abort",
                )


def _report(
    result: ValidationResult, message: ValidationMessage, *, as_error: bool
) -> None:
    if as_error:
        result.errors.append(message)
    else:
        result.warnings.append(message)


def _check_encodings(record: object) -> str | None:
    """Decode the encoded strings of a record; return a problem or None."""
    try:
        if isinstance(record, ClassRecord):
            return _check_class(record)
        if isinstance(record, FieldRecord):
            return _check_field(record)
        if isinstance(record, MethodRecord):
            return _check_method(record)
    except MalformedDescriptor as exc:
        return f"{exc}."
    return None


def _check_class(record: ClassRecord) -> str | None:
    name = parse_internal_name(record.internal_name)
    for internal in (record.super_class, *record.interfaces, *record.inner_classes):
        if internal is not None:
            parse_internal_name(internal)
    if record.generics is not None:
        parse_class_signature(record.generics)
    if name.fqn_string != record.fqn:
        return f"fqn {record.fqn!r} does not match internal name {record.internal_name!r}."
    return None


def _owner(record: FieldRecord | MethodRecord) -> ClassName:
    return parse_internal_name(record.owner)


def _check_field(record: FieldRecord) -> str | None:
    parse_type(record.descriptor)
    if record.generics is not None:
        parse_field_signature(record.generics)
    expected = f"{_owner(record).fqn_string}.{record.name}"
    if record.fqn != expected:
        return f"fqn {record.fqn!r} does not match {expected!r}."
    return None


def _check_method(record: MethodRecord) -> str | None:
    descriptor = parse_method(record.descriptor)
    if record.generics is not None:
        parse_method_signature(record.generics)
    expected = (
        f"{_owner(record).fqn_string}.{record.name}{descriptor.descriptor_string}"
    )
    if record.fqn != expected:
        return f"fqn {record.fqn!r} does not match {expected!r}."
    return None


__all__ = [
    "ValidationMessage",
    "ValidationResult",
    "validate_records",
]
