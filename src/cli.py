"""Command-line interface for jvmsym."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import cast

import orjson
from rich.console import Console
from rich.logging import RichHandler

from contract.validation import validate_records
from domain.names import ArrayDescriptor, ClassName, DescriptorType
from domain.signatures import GenericClass, GenericMethod, GenericSignature, erase
from parse.descriptors import MalformedDescriptor, parse_method, parse_type
from parse.signatures import (
    parse_class_signature,
    parse_field_signature,
    parse_method_signature,
)
from settings.config import ConfigError, JvmSymConfig, load_config, resolve_output_dir

logger = logging.getLogger("jvmsym")


def _add_root(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--root",
        default=".",
        help="Directory holding jvmsym.toml (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jvmsym")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override the configured log level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    decode_parser = subparsers.add_parser(
        "decode", help="Decode a field type descriptor"
    )
    decode_parser.add_argument("descriptor")
    _add_root(decode_parser)

    method_parser = subparsers.add_parser("method", help="Decode a method descriptor")
    method_parser.add_argument("descriptor")
    _add_root(method_parser)

    signature_parser = subparsers.add_parser(
        "signature", help="Decode a generic signature attribute"
    )
    signature_parser.add_argument("signature")
    signature_parser.add_argument(
        "--kind",
        choices=("class", "method", "field"),
        default="field",
        help="Signature grammar to use (default: field)",
    )
    _add_root(signature_parser)

    validate_parser = subparsers.add_parser(
        "validate", help="Validate exported symbol records"
    )
    validate_parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Directory holding jvmsym.toml (default: .)",
    )
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Record directory (default: config output dir)",
    )
    validate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the validation report as JSON on stdout",
    )

    return parser


def _configure_logging(level: str) -> None:
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=False,
        rich_tracebacks=True,
    )
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))


def _emit(payload: object) -> None:
    sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
    sys.stdout.write("\n")


def describe_type(value: DescriptorType) -> dict[str, object]:
    if isinstance(value, ArrayDescriptor):
        return {
            "kind": "array",
            "internal": value.internal_string,
            "dimensions": value.dimensions,
            "element": value.reifier.fqn_string,
        }
    class_name = cast("ClassName", value)
    return {
        "kind": "primitive" if class_name.is_primitive else "class",
        "internal": class_name.internal_string,
        "fqn": class_name.fqn_string,
    }


def describe_signature(
    value: GenericClass | GenericMethod | GenericSignature,
) -> dict[str, object]:
    payload: dict[str, object] = {"signature": value.signature_string}
    if isinstance(value, GenericClass):
        payload["type_params"] = [p.name for p in value.generic_params]
        payload["supertypes"] = [
            erase(s, value.generic_params) for s in value.super_classes
        ]
    elif isinstance(value, GenericMethod):
        payload["type_params"] = [p.name for p in value.generic_params]
        payload["erased"] = value.erased_descriptor()
    else:
        payload["erased"] = erase(value)
    return payload


def _handle_decode(descriptor: str) -> int:
    _emit(describe_type(parse_type(descriptor)))
    return 0


def _handle_method(descriptor: str) -> int:
    decoded = parse_method(descriptor)
    _emit(
        {
            "descriptor": decoded.descriptor_string,
            "params": [describe_type(p) for p in decoded.params],
            "return": describe_type(decoded.return_type),
        }
    )
    return 0


def _handle_signature(signature: str, kind: str) -> int:
    parsers = {
        "class": parse_class_signature,
        "method": parse_method_signature,
        "field": parse_field_signature,
    }
    _emit(describe_signature(parsers[kind](signature)))
    return 0


def _resolve_artifacts_dir(
    root: Path, config: JvmSymConfig, artifacts_dir: str | None
) -> Path:
    if artifacts_dir is None:
        return resolve_output_dir(root, config.output_dir)
    return Path(artifacts_dir).expanduser().resolve()


def _handle_validate(
    root: Path, config: JvmSymConfig, artifacts_dir: str | None, *, as_json: bool
) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, config, artifacts_dir)
    result = validate_records(
        resolved_artifacts_dir,
        on_malformed=config.on_malformed,
        strict_schema_version=config.strict_schema_version,
    )
    if as_json:
        _emit(
            {
                "ok": result.ok,
                "records": result.records,
                "errors": [e.to_dict() for e in result.errors],
                "warnings": [w.to_dict() for w in result.warnings],
            }
        )
        return 0 if result.ok else 1
    for warning in result.warnings:
        logger.warning("%s: %s", warning.location(), warning.message)
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    logger.info("%d records valid in %s", result.records, resolved_artifacts_dir)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    root = Path(args.root).expanduser().resolve()
    try:
        config = load_config(root)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    _configure_logging(args.log_level or config.log_level)

    try:
        if args.command == "decode":
            return _handle_decode(args.descriptor)

        if args.command == "method":
            return _handle_method(args.descriptor)

        if args.command == "signature":
            return _handle_signature(args.signature, args.kind)

        if args.command == "validate":
            return _handle_validate(
                root, config, args.artifacts_dir, as_json=args.json
            )
    except MalformedDescriptor as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
