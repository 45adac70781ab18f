"""
pmcontract Schema Validator

A small interpreter for the JSON Schema subset used by pmcontract.schemas.

Supported keywords: type (scalar or list, incl. "null"), required,
properties, additionalProperties (strict mode only), minLength, maxLength,
pattern, minimum, maximum, enum, const, items, minItems, maxItems,
uniqueItems. Anything else (format, $ref, anyOf, ...) is ignored; hand the
schema to jsonschema when full compliance is needed.

Errors are plain strings qualified by field path, collected depth-first in
a deterministic order:
    Missing required field: id
    title: Maximum length is 200
    acceptanceCriteria[0]: Minimum length is 1
    metadata.version: Does not match pattern ...
"""
from __future__ import annotations

import json
import re
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Optional

from pydantic import BaseModel, Field

from .config import strict_mode_enabled


class ValidationResult(BaseModel):
    """Outcome of validating one value"""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    data: Any = None


def json_type_name(value: Any) -> str:
    """Name a Python value by its JSON type"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def _matches_type(value: Any, expected: str) -> bool:
    actual = json_type_name(value)
    if expected == "integer":
        if actual != "number":
            return False
        return isinstance(value, int) or value.is_integer()
    return actual == expected


def _canonical(value: Any) -> Any:
    """Hashable form of a JSON value; equal forms mean structurally equal values"""
    kind = json_type_name(value)
    if kind == "object":
        return (kind, frozenset((key, _canonical(item)) for key, item in value.items()))
    if kind == "array":
        return (kind, tuple(_canonical(item) for item in value))
    if kind in ("null", "boolean", "number", "string"):
        return (kind, value)
    # Not a JSON value: only equal to itself
    return (kind, id(value))


def json_equal(left: Any, right: Any) -> bool:
    return _canonical(left) == _canonical(right)


def _display(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


@lru_cache(maxsize=None)
def _compile_pattern(pattern: str) -> re.Pattern[str]:
    """
    Compile a JSON Schema (ECMA 262) pattern.

    An unescaped `$` outside a character class is rewritten to `\\Z`: in
    Python `$` also matches before a trailing newline, in ECMA 262 it does not.
    """
    out = []
    escaped = in_class = False
    for char in pattern:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif in_class:
            in_class = char != "]"
        elif char == "[":
            in_class = True
        elif char == "$":
            out.append(r"\Z")
            continue
        out.append(char)
    return re.compile("".join(out))


def _expected_type(schema: Mapping[str, Any]) -> Optional[str]:
    declared = schema.get("type")
    if isinstance(declared, (list, tuple)):
        return next((t for t in declared if t != "null"), None)
    return declared


def _accepts_null(schema: Mapping[str, Any]) -> bool:
    declared = schema.get("type")
    if isinstance(declared, (list, tuple)):
        return "null" in declared
    return declared == "null"


class SchemaValidator:
    """
    Walks a schema/data pair and collects field-qualified errors.

    With ``strict=True`` undeclared fields of an object schema that sets
    ``additionalProperties: false`` are reported; by default they are
    ignored, as they always have been.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def validate(self, data: Any, schema: Mapping[str, Any]) -> ValidationResult:
        if schema.get("type") != "object":
            errors = self._validate_field(data, schema, "value")
        else:
            errors = self._validate_object(data, schema)
        return ValidationResult(valid=not errors, errors=errors)

    def _validate_object(self, data: Any, schema: Mapping[str, Any]) -> list[str]:
        errors: list[str] = []

        if not isinstance(data, Mapping):
            declared = schema.get("type")
            if declared is not None and not _matches_type(data, declared):
                errors.append(f"Expected type {declared}, got {json_type_name(data)}")
            return errors

        for name in schema.get("required", ()):
            if name not in data:
                errors.append(f"Missing required field: {name}")

        properties = schema.get("properties") or {}
        forbid_extra = self.strict and schema.get("additionalProperties") is False
        for key, value in data.items():
            field_schema = properties.get(key)
            if field_schema is not None:
                errors.extend(self._validate_field(value, field_schema, key))
            elif forbid_extra:
                errors.append(f"Unexpected field: {key}")

        return errors

    def _validate_field(self, value: Any, schema: Mapping[str, Any], field: str) -> list[str]:
        if value is None and _accepts_null(schema):
            return []

        expected = _expected_type(schema)
        if expected is not None and not _matches_type(value, expected):
            return [f"{field}: Expected {expected}, got {json_type_name(value)}"]

        errors: list[str] = []

        if expected == "string":
            errors.extend(self._check_string(value, schema, field))
        elif expected in ("number", "integer"):
            errors.extend(self._check_number(value, schema, field))

        if "enum" in schema and not any(json_equal(value, option) for option in schema["enum"]):
            allowed = ", ".join(_display(option) for option in schema["enum"])
            errors.append(f"{field}: Must be one of {allowed}")

        if "const" in schema and not json_equal(value, schema["const"]):
            errors.append(f"{field}: Must be {_display(schema['const'])}")

        if expected == "array":
            errors.extend(self._check_array(value, schema, field))
        elif expected == "object":
            errors.extend(f"{field}.{error}" for error in self._validate_object(value, schema))

        return errors

    def _check_string(self, value: str, schema: Mapping[str, Any], field: str) -> list[str]:
        errors = []
        min_length = schema.get("minLength")
        max_length = schema.get("maxLength")
        pattern = schema.get("pattern")
        if min_length is not None and len(value) < min_length:
            errors.append(f"{field}: Minimum length is {min_length}")
        if max_length is not None and len(value) > max_length:
            errors.append(f"{field}: Maximum length is {max_length}")
        if pattern is not None and not _compile_pattern(pattern).search(value):
            errors.append(f"{field}: Does not match pattern {pattern}")
        return errors

    def _check_number(self, value: float, schema: Mapping[str, Any], field: str) -> list[str]:
        errors = []
        minimum = schema.get("minimum")
        maximum = schema.get("maximum")
        if minimum is not None and value < minimum:
            errors.append(f"{field}: Minimum value is {minimum}")
        if maximum is not None and value > maximum:
            errors.append(f"{field}: Maximum value is {maximum}")
        return errors

    def _check_array(self, value: Any, schema: Mapping[str, Any], field: str) -> list[str]:
        errors = []
        min_items = schema.get("minItems")
        max_items = schema.get("maxItems")
        if min_items is not None and len(value) < min_items:
            errors.append(f"{field}: Minimum items is {min_items}")
        if max_items is not None and len(value) > max_items:
            errors.append(f"{field}: Maximum items is {max_items}")
        if schema.get("uniqueItems") is True:
            if len({_canonical(item) for item in value}) != len(value):
                errors.append(f"{field}: Items must be unique")

        items = schema.get("items")
        if isinstance(items, Mapping):
            for index, item in enumerate(value):
                errors.extend(self._validate_field(item, items, f"{field}[{index}]"))
        return errors


def validate(data: Any, schema: Mapping[str, Any], *, strict: Optional[bool] = None) -> ValidationResult:
    """
    Validate ``data`` against ``schema``.

    ``strict`` defaults to the PMCONTRACT_STRICT environment setting.
    """
    if strict is None:
        strict = strict_mode_enabled()
    return SchemaValidator(strict=strict).validate(data, schema)
