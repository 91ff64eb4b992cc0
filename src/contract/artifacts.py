"""Symbol record file contract.

Filenames and formats of the JSONL files handed to the external indexer.
"""

from __future__ import annotations

from dataclasses import dataclass

# Schema version for exported symbol records.
RECORD_SCHEMA_VERSION = 1

CLASSES_JSONL = "classes.jsonl"
FIELDS_JSONL = "fields.jsonl"
METHODS_JSONL = "methods.jsonl"


@dataclass(frozen=True)
class RecordArtifactSpec:
    """Filename and format of one exported record file."""

    filename: str
    format: str
    required_fields_note: str


RECORD_ARTIFACT_SPECS: dict[str, RecordArtifactSpec] = {
    "classes": RecordArtifactSpec(
        filename=CLASSES_JSONL,
        format="jsonl",
        required_fields_note="ClassRecord fields required by contract.",
    ),
    "fields": RecordArtifactSpec(
        filename=FIELDS_JSONL,
        format="jsonl",
        required_fields_note="FieldRecord fields required by contract.",
    ),
    "methods": RecordArtifactSpec(
        filename=METHODS_JSONL,
        format="jsonl",
        required_fields_note="MethodRecord fields required by contract.",
    ),
}
