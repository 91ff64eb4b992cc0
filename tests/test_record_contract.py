from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from contract.artifacts import (
    CLASSES_JSONL,
    FIELDS_JSONL,
    METHODS_JSONL,
    RECORD_ARTIFACT_SPECS,
    RECORD_SCHEMA_VERSION,
)
from contract.models import MethodRecord
from contract.validation import ValidationMessage, validate_records
from contract.write import records_for_classfile, write_records

if TYPE_CHECKING:
    from domain.records import RawClassfile


def _write_lines(d: Path, filename: str, records: list[dict[str, Any]]) -> None:
    d.mkdir(parents=True, exist_ok=True)
    body = "".join(json.dumps(r) + "\n" for r in records)
    (d / filename).write_text(body, encoding="utf-8")


def _method_record(**overrides: Any) -> dict[str, Any]:
    record: dict[str, Any] = {
        "schema_version": RECORD_SCHEMA_VERSION,
        "kind": "method",
        "fqn": "com.example.Box.size()I",
        "owner": "com/example/Box",
        "name": "size",
        "descriptor": "()I",
        "access": "public",
    }
    record.update(overrides)
    return record


def _write_method_only(d: Path, record: dict[str, Any]) -> None:
    _write_lines(d, CLASSES_JSONL, [])
    _write_lines(d, FIELDS_JSONL, [])
    _write_lines(d, METHODS_JSONL, [record])


def _messages_contain(messages: list[ValidationMessage], needle: str) -> bool:
    """Return True when any validation message contains the given substring."""
    return any(needle in message.message for message in messages)


# Group 1: flattening


def test_records_for_classfile_flattens_members(box_classfile: RawClassfile) -> None:
    class_rec, field_recs, method_recs = records_for_classfile(box_classfile)

    assert class_rec.fqn == "com.example.Box"
    assert class_rec.internal_name == "com/example/Box"
    assert class_rec.super_class == "java/lang/Object"
    assert class_rec.interfaces == ["java/io/Serializable"]
    assert class_rec.inner_classes == ["com/example/Box$Entry"]
    assert class_rec.generics == "<T:Ljava/lang/Object;>Ljava/lang/Object;"
    assert class_rec.source_file == "Box.java"
    assert class_rec.internal_refs == ["java.lang.String"]

    assert [f.descriptor for f in field_recs] == ["Ljava/util/List;"]
    assert field_recs[0].owner == "com/example/Box"

    method = method_recs[0]
    assert method.fqn == "com.example.Box.put(Ljava/lang/Object;)V"
    assert method.descriptor == "(Ljava/lang/Object;)V"
    assert method.line == 12
    assert method.internal_refs == ["com.example.Box.items", "java.util.List"]


def test_access_serializes_as_lowercase_string(box_classfile: RawClassfile) -> None:
    _, field_recs, _ = records_for_classfile(box_classfile)

    assert field_recs[0].model_dump(mode="json")["access"] == "private"


# Group 2: writing


def test_write_records_produces_every_contract_file(
    tmp_path: Path, box_classfile: RawClassfile
) -> None:
    summary = write_records(out_dir=tmp_path / "out", classfiles=[box_classfile])

    assert summary["classes"] == 1
    assert summary["fields"] == 1
    assert summary["methods"] == 1
    for spec in RECORD_ARTIFACT_SPECS.values():
        assert (tmp_path / "out" / spec.filename).is_file()


def test_write_records_is_deterministic(
    tmp_path: Path, box_classfile: RawClassfile
) -> None:
    write_records(out_dir=tmp_path / "a", classfiles=[box_classfile])
    write_records(out_dir=tmp_path / "b", classfiles=[box_classfile])

    for spec in RECORD_ARTIFACT_SPECS.values():
        first = (tmp_path / "a" / spec.filename).read_bytes()
        second = (tmp_path / "b" / spec.filename).read_bytes()
        assert first == second


def test_written_lines_have_sorted_keys(
    tmp_path: Path, box_classfile: RawClassfile
) -> None:
    write_records(out_dir=tmp_path, classfiles=[box_classfile])

    line = (tmp_path / METHODS_JSONL).read_text(encoding="utf-8").splitlines()[0]
    keys = list(json.loads(line))
    assert keys == sorted(keys)
    assert MethodRecord.model_validate_json(line).name == "put"


# Group 3: validation


def test_written_records_validate(tmp_path: Path, box_classfile: RawClassfile) -> None:
    write_records(out_dir=tmp_path, classfiles=[box_classfile])

    result = validate_records(tmp_path)

    assert result.ok
    assert result.warnings == []
    assert result.records == 3


def test_missing_artifacts_dir(tmp_path: Path) -> None:
    result = validate_records(tmp_path / "missing")

    assert not result.ok
    assert _messages_contain(result.errors, "does not exist")


def test_missing_record_file(tmp_path: Path) -> None:
    _write_lines(tmp_path, CLASSES_JSONL, [])
    _write_lines(tmp_path, FIELDS_JSONL, [])

    result = validate_records(tmp_path)

    assert [e.artifact for e in result.errors] == ["methods"]
    assert _messages_contain(result.errors, "missing")


def test_invalid_json_line(tmp_path: Path) -> None:
    _write_method_only(tmp_path, _method_record())
    with (tmp_path / METHODS_JSONL).open("a", encoding="utf-8") as f:
        f.write("{not json\n")

    result = validate_records(tmp_path)

    assert len(result.errors) == 1
    assert result.errors[0].line == 2
    assert _messages_contain(result.errors, "Invalid JSON")


def test_schema_validation_failure(tmp_path: Path) -> None:
    _write_method_only(tmp_path, _method_record(access="friendly"))

    result = validate_records(tmp_path)

    assert _messages_contain(result.errors, "Schema validation failed")


def test_malformed_descriptor_is_error_under_abort(tmp_path: Path) -> None:
    _write_method_only(tmp_path, _method_record(descriptor="(I"))

    result = validate_records(tmp_path, on_malformed="abort")

    assert not result.ok
    assert _messages_contain(result.errors, "Malformed descriptor")


def test_malformed_descriptor_is_warning_under_skip(tmp_path: Path) -> None:
    _write_method_only(tmp_path, _method_record(descriptor="(I"))

    result = validate_records(tmp_path, on_malformed="skip")

    assert result.ok
    assert _messages_contain(result.warnings, "Malformed descriptor")


def test_malformed_generic_signature(tmp_path: Path) -> None:
    _write_method_only(tmp_path, _method_record(generics="(I"))

    result = validate_records(tmp_path)

    assert _messages_contain(result.errors, "Malformed signature")


def test_method_fqn_must_embed_descriptor(tmp_path: Path) -> None:
    _write_method_only(tmp_path, _method_record(fqn="com.example.Box.size"))

    result = validate_records(tmp_path)

    assert _messages_contain(result.errors, "com.example.Box.size()I")


def test_schema_version_mismatch(tmp_path: Path) -> None:
    _write_method_only(tmp_path, _method_record(schema_version=99))

    result = validate_records(tmp_path)

    assert _messages_contain(result.errors, "Schema version mismatch")


def test_missing_schema_version_warns_unless_strict(tmp_path: Path) -> None:
    record = _method_record()
    del record["schema_version"]
    _write_method_only(tmp_path, record)

    lenient = validate_records(tmp_path)
    strict = validate_records(tmp_path, strict_schema_version=True)

    assert lenient.ok
    assert _messages_contain(lenient.warnings, "Missing schema_version")
    assert not strict.ok
    assert _messages_contain(strict.errors, "Missing schema_version")


def test_validation_message_location() -> None:
    msg = ValidationMessage("methods", Path("m.jsonl"), "bad", line=7)
    assert msg.location() == "m.jsonl:7"
    assert msg.to_dict()["line"] == 7


def test_deeply_nested_field_is_reported_not_raised(tmp_path: Path) -> None:
    nested = "Ljava/util/List<" * 300 + "TT;" + ">;" * 300
    record = {
        "schema_version": RECORD_SCHEMA_VERSION,
        "kind": "field",
        "fqn": "com.example.Box.grid",
        "owner": "com/example/Box",
        "name": "grid",
        "descriptor": "[" * 1500 + "I",
        "generics": nested,
        "access": "private",
    }
    _write_lines(tmp_path, CLASSES_JSONL, [])
    _write_lines(tmp_path, FIELDS_JSONL, [record])
    _write_lines(tmp_path, METHODS_JSONL, [])

    result = validate_records(tmp_path, on_malformed="skip")

    assert result.ok
    assert result.records == 1
    assert _messages_contain(result.warnings, "array dimensions exceed")
