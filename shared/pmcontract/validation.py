"""
pmcontract Validation

Typed validators over the built-in SchemaValidator, plus a jsonschema
cross-check for callers that want full draft 7 semantics.
"""
import logging
from collections.abc import Mapping
from typing import Any, Callable, Union

from jsonschema import Draft7Validator
from pydantic import ValidationError as PydanticValidationError

from .models import PROJECT_ITEM_ADAPTER, Bug, Feature, ItemType, ProjectData, Task
from .schema_validator import ValidationResult, validate
from .schemas import get_schema, registered_schema

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Validation failure carrying every field-qualified violation"""

    def __init__(self, message: str, errors: list[str]):
        self.message = message
        self.errors = list(errors)
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": list(self.errors),
        }


def _check(data: Any, schema_name: str, message: str) -> bool:
    result = validate(data, registered_schema(schema_name))
    if not result.valid:
        logger.debug(f"{message} with {len(result.errors)} error(s)")
        raise ValidationError(message, result.errors)
    return True


def validate_feature(data: Any) -> bool:
    """Return True if ``data`` is a valid feature; raise ValidationError otherwise"""
    return _check(data, "feature", "Feature validation failed")


def validate_bug(data: Any) -> bool:
    """Return True if ``data`` is a valid bug; raise ValidationError otherwise"""
    return _check(data, "bug", "Bug validation failed")


def validate_task(data: Any) -> bool:
    """Return True if ``data`` is a valid task; raise ValidationError otherwise"""
    return _check(data, "task", "Task validation failed")


def validate_project_data(data: Any) -> bool:
    """Return True if ``data`` is a valid project document; raise ValidationError otherwise"""
    return _check(data, "projectData", "Project data validation failed")


_ITEM_VALIDATORS: dict[str, Callable[[Any], bool]] = {
    ItemType.FEATURE.value: validate_feature,
    ItemType.BUG.value: validate_bug,
    ItemType.TASK.value: validate_task,
}


def validate_project_item(data: Any) -> bool:
    """
    Validate any project item, dispatching on its ``type`` tag.

    Raises ValidationError for non-mappings and for absent or unknown tags.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Invalid project item", ["Expected object"])

    item_type = data.get("type")
    validator = _ITEM_VALIDATORS.get(item_type) if isinstance(item_type, str) else None
    if validator is None:
        raise ValidationError(
            "Invalid project item type",
            [f"Expected 'feature', 'bug', or 'task', got '{item_type}'"],
        )
    return validator(data)


def _try(validator: Callable[[Any], bool], data: Any) -> ValidationResult:
    try:
        validator(data)
    except ValidationError as e:
        return ValidationResult(valid=False, errors=e.errors)
    except Exception as e:
        logger.warning(f"Unexpected error during {validator.__name__}: {e}")
        return ValidationResult(valid=False, errors=[str(e) or type(e).__name__])
    return ValidationResult(valid=True, errors=[], data=data)


def try_validate_feature(data: Any) -> ValidationResult:
    return _try(validate_feature, data)


def try_validate_bug(data: Any) -> ValidationResult:
    return _try(validate_bug, data)


def try_validate_task(data: Any) -> ValidationResult:
    return _try(validate_task, data)


def try_validate_project_item(data: Any) -> ValidationResult:
    return _try(validate_project_item, data)


def try_validate_project_data(data: Any) -> ValidationResult:
    return _try(validate_project_data, data)


def parse_project_item(data: Any) -> Union[Feature, Bug, Task]:
    """
    Validate a raw item and build its model.

    Contract violations raise ValidationError. Values the schema cannot
    express (story points, hours, timestamps) are checked by the model and
    are reported through the same error type.
    """
    validate_project_item(data)
    try:
        return PROJECT_ITEM_ADAPTER.validate_python(data)
    except PydanticValidationError as e:
        raise ValidationError("Project item model validation failed", _pydantic_errors(e)) from e


def parse_project_data(data: Any) -> ProjectData:
    """Validate a raw project document and build its model"""
    validate_project_data(data)
    try:
        return ProjectData.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError("Project data model validation failed", _pydantic_errors(e)) from e


def _pydantic_errors(exc: PydanticValidationError) -> list[str]:
    errors = []
    for err in exc.errors():
        path = ".".join(str(p) for p in err["loc"]) or "value"
        errors.append(f"{path}: {err['msg']}")
    return errors


def validate_with_jsonschema(data: Any, schema_name: str) -> list[str]:
    """
    Validate against a registered schema with jsonschema's draft 7 validator.

    Unlike the built-in engine this enforces additionalProperties and
    ``format`` (where jsonschema has a checker installed).
    Returns a list of "path: message" strings (empty if valid).
    """
    schema = get_schema(schema_name)
    validator = Draft7Validator(schema, format_checker=Draft7Validator.FORMAT_CHECKER)
    errors = []
    for err in sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path]):
        path = ".".join(str(p) for p in err.absolute_path) or "<root>"
        errors.append(f"{path}: {err.message}")
    return errors
