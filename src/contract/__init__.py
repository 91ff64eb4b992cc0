"""Symbol record contract handed to the external indexer.

Treat these exports as the authoritative boundary: file names, record
schemas, export and validation.
"""

from contract.artifacts import (
    CLASSES_JSONL,
    FIELDS_JSONL,
    METHODS_JSONL,
    RECORD_ARTIFACT_SPECS,
    RECORD_SCHEMA_VERSION,
    RecordArtifactSpec,
)


def __getattr__(name: str) -> object:
    if name in {"ClassRecord", "FieldRecord", "MethodRecord"}:
        from contract.models import ClassRecord, FieldRecord, MethodRecord

        return {
            "ClassRecord": ClassRecord,
            "FieldRecord": FieldRecord,
            "MethodRecord": MethodRecord,
        }[name]

    if name in {"records_for_classfile", "write_records"}:
        from contract.write import records_for_classfile, write_records

        return {
            "records_for_classfile": records_for_classfile,
            "write_records": write_records,
        }[name]

    if name in {"ValidationMessage", "ValidationResult", "validate_records"}:
        from contract.validation import (
            ValidationMessage,
            ValidationResult,
            validate_records,
        )

        return {
            "ValidationMessage": ValidationMessage,
            "ValidationResult": ValidationResult,
            "validate_records": validate_records,
        }[name]

    msg = f"module 'contract' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "CLASSES_JSONL",
    "ClassRecord",
    "FIELDS_JSONL",
    "FieldRecord",
    "METHODS_JSONL",
    "MethodRecord",
    "RECORD_ARTIFACT_SPECS",
    "RECORD_SCHEMA_VERSION",
    "RecordArtifactSpec",
    "ValidationMessage",
    "ValidationResult",
    "records_for_classfile",
    "validate_records",
    "write_records",
]
