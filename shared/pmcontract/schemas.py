"""
pmcontract Schema Definitions

Declarative JSON Schema (draft 7) trees for the entity contract.
Schemas are plain dicts so they can be handed to any compliant validator
as well as to the built-in SchemaValidator.

Builders always return new dicts; composing an entity schema never
mutates the base it extends.
"""
import copy
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence

from .models import (
    BUG_STATUSES,
    FEATURE_STATUSES,
    ID_PATTERN,
    PRIORITIES,
    SEVERITIES,
    TASK_STATUSES,
    VERSION_PATTERN,
)

Schema = dict[str, Any]


def string_schema(
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Optional[str] = None,
    format: Optional[str] = None,
) -> Schema:
    schema: Schema = {"type": "string"}
    if min_length is not None:
        schema["minLength"] = min_length
    if max_length is not None:
        schema["maxLength"] = max_length
    if pattern is not None:
        schema["pattern"] = pattern
    if format is not None:
        schema["format"] = format
    return schema


def enum_schema(values: Iterable[str]) -> Schema:
    return {"type": "string", "enum": list(values)}


def number_schema(
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    integer: bool = False,
) -> Schema:
    schema: Schema = {"type": "integer" if integer else "number"}
    if minimum is not None:
        schema["minimum"] = minimum
    if maximum is not None:
        schema["maximum"] = maximum
    return schema


def array_schema(
    items: Schema,
    min_items: Optional[int] = None,
    max_items: Optional[int] = None,
    unique_items: bool = False,
) -> Schema:
    schema: Schema = {"type": "array", "items": copy.deepcopy(items)}
    if min_items is not None:
        schema["minItems"] = min_items
    if max_items is not None:
        schema["maxItems"] = max_items
    if unique_items:
        schema["uniqueItems"] = True
    return schema


def const_schema(value: Any) -> Schema:
    return {"const": value}


def nullable(schema: Schema) -> Schema:
    """Allow null in addition to the schema's declared type"""
    result = copy.deepcopy(schema)
    declared = result.get("type")
    if declared is None:
        return result
    types = list(declared) if isinstance(declared, (list, tuple)) else [declared]
    if "null" not in types:
        types.append("null")
    result["type"] = types
    return result


def object_schema(
    properties: Mapping[str, Schema],
    required: Sequence[str] = (),
    additional_properties: bool = True,
) -> Schema:
    schema: Schema = {"type": "object"}
    if required:
        schema["required"] = list(required)
    schema["properties"] = copy.deepcopy(dict(properties))
    if not additional_properties:
        schema["additionalProperties"] = False
    return schema


def extend_schema(
    base: Schema,
    required: Sequence[str] = (),
    properties: Optional[Mapping[str, Schema]] = None,
) -> Schema:
    """
    Derive an object schema from ``base``.

    required = base required + ``required`` (in that order)
    properties = base properties, overridden/extended by ``properties``
    """
    result = copy.deepcopy(base)
    result["required"] = list(base.get("required", ())) + [
        name for name in required if name not in base.get("required", ())
    ]
    merged = copy.deepcopy(dict(base.get("properties", {})))
    merged.update(copy.deepcopy(dict(properties or {})))
    result["properties"] = merged
    return result


# ---------------------------------------------------------------------------
# Entity schemas
# ---------------------------------------------------------------------------

BASE_ITEM_SCHEMA: Schema = object_schema(
    required=[
        "id",
        "title",
        "description",
        "status",
        "priority",
        "createdAt",
        "updatedAt",
    ],
    properties={
        "id": string_schema(min_length=1, pattern=ID_PATTERN),
        "title": string_schema(min_length=1, max_length=200),
        "description": string_schema(max_length=2000),
        "priority": enum_schema(PRIORITIES),
        "assignee": nullable(string_schema()),
        "tags": array_schema(string_schema()),
        "createdAt": string_schema(format="date-time"),
        "updatedAt": string_schema(format="date-time"),
    },
    additional_properties=False,
)

FEATURE_SCHEMA: Schema = extend_schema(
    BASE_ITEM_SCHEMA,
    required=["type", "acceptanceCriteria"],
    properties={
        "type": const_schema("feature"),
        "status": enum_schema(FEATURE_STATUSES),
        "epic": nullable(string_schema(min_length=1)),
        "storyPoints": number_schema(minimum=1, maximum=21, integer=True),
        "acceptanceCriteria": array_schema(string_schema(min_length=1), min_items=1),
    },
)

BUG_SCHEMA: Schema = extend_schema(
    BASE_ITEM_SCHEMA,
    required=["type", "severity", "reproducible", "stepsToReproduce", "environment"],
    properties={
        "type": const_schema("bug"),
        "status": enum_schema(BUG_STATUSES),
        "severity": enum_schema(SEVERITIES),
        "reproducible": {"type": "boolean"},
        "stepsToReproduce": array_schema(string_schema(min_length=1), min_items=1),
        "environment": string_schema(min_length=1),
        "resolution": nullable(string_schema(min_length=1)),
    },
)

TASK_SCHEMA: Schema = extend_schema(
    BASE_ITEM_SCHEMA,
    required=["type", "subtasks"],
    properties={
        "type": const_schema("task"),
        "status": enum_schema(TASK_STATUSES),
        "dueDate": nullable(string_schema(format="date-time")),
        "estimatedHours": number_schema(minimum=0),
        "actualHours": number_schema(minimum=0),
        "subtasks": array_schema(string_schema(pattern=ID_PATTERN), unique_items=True),
    },
)

PROJECT_METADATA_SCHEMA: Schema = object_schema(
    required=["projectName", "version", "lastUpdated"],
    properties={
        "projectName": string_schema(min_length=1, max_length=100),
        "version": string_schema(pattern=VERSION_PATTERN),
        "lastUpdated": string_schema(format="date-time"),
    },
    additional_properties=False,
)

PROJECT_DATA_SCHEMA: Schema = object_schema(
    required=["features", "bugs", "tasks", "metadata"],
    properties={
        "features": array_schema(FEATURE_SCHEMA),
        "bugs": array_schema(BUG_SCHEMA),
        "tasks": array_schema(TASK_SCHEMA),
        "metadata": PROJECT_METADATA_SCHEMA,
    },
    additional_properties=False,
)

# Validators read private copies; edits to the public constants or to SCHEMAS
# entries do not reach them.
_REGISTRY: dict[str, Schema] = copy.deepcopy({
    "baseItem": BASE_ITEM_SCHEMA,
    "feature": FEATURE_SCHEMA,
    "bug": BUG_SCHEMA,
    "task": TASK_SCHEMA,
    "projectData": PROJECT_DATA_SCHEMA,
})

SCHEMAS: Mapping[str, Schema] = MappingProxyType(copy.deepcopy(_REGISTRY))

SCHEMA_NAMES = tuple(_REGISTRY)


def registered_schema(name: str) -> Schema:
    """Return the schema the validators use; callers must not modify it"""
    try:
        return _REGISTRY[name]
    except KeyError:
        raise KeyError(f"Unknown schema '{name}'. Known schemas: {', '.join(SCHEMA_NAMES)}") from None


def get_schema(name: str) -> Schema:
    """Return a deep copy of a registered schema"""
    return copy.deepcopy(registered_schema(name))
