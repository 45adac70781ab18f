# pmcontract Shared Library
# Project-management data contract: models, schemas, validators, transitions
__version__ = "1.0.0"

PACKAGE_INFO = {
    "name": "pmcontract",
    "version": __version__,
    "description": "Shared data contract for features, bugs and tasks",
}

from .models import (
    Priority,
    FeatureStatus,
    BugStatus,
    TaskStatus,
    Severity,
    ItemType,
    PRIORITIES,
    FEATURE_STATUSES,
    BUG_STATUSES,
    TASK_STATUSES,
    SEVERITIES,
    BaseItem,
    Feature,
    Bug,
    Task,
    ProjectItem,
    ProjectMetadata,
    ProjectData,
    StoryPoints,
    Hours,
    create_story_points,
    create_hours,
    is_feature,
    is_bug,
    is_task,
    dump_item,
)
from .schemas import SCHEMAS, get_schema, registered_schema
from .schema_validator import SchemaValidator, ValidationResult
from .transitions import (
    FEATURE_STATUS_TRANSITIONS,
    BUG_STATUS_TRANSITIONS,
    TASK_STATUS_TRANSITIONS,
    TransitionNotAllowedError,
    can_transition_feature_status,
    can_transition_bug_status,
    can_transition_task_status,
    can_transition_status,
    get_valid_transitions,
)
from .validation import (
    ValidationError,
    validate_feature,
    validate_bug,
    validate_task,
    validate_project_data,
    validate_project_item,
    try_validate_feature,
    try_validate_bug,
    try_validate_task,
    try_validate_project_item,
    try_validate_project_data,
    parse_project_item,
    parse_project_data,
    validate_with_jsonschema,
)
from .items import create_item, update_item, generate_item_id

__all__ = [
    "PACKAGE_INFO",
    "Priority",
    "FeatureStatus",
    "BugStatus",
    "TaskStatus",
    "Severity",
    "ItemType",
    "PRIORITIES",
    "FEATURE_STATUSES",
    "BUG_STATUSES",
    "TASK_STATUSES",
    "SEVERITIES",
    "BaseItem",
    "Feature",
    "Bug",
    "Task",
    "ProjectItem",
    "ProjectMetadata",
    "ProjectData",
    "StoryPoints",
    "Hours",
    "create_story_points",
    "create_hours",
    "is_feature",
    "is_bug",
    "is_task",
    "dump_item",
    "SCHEMAS",
    "registered_schema",
    "get_schema",
    "SchemaValidator",
    "ValidationResult",
    "FEATURE_STATUS_TRANSITIONS",
    "BUG_STATUS_TRANSITIONS",
    "TASK_STATUS_TRANSITIONS",
    "TransitionNotAllowedError",
    "can_transition_feature_status",
    "can_transition_bug_status",
    "can_transition_task_status",
    "can_transition_status",
    "get_valid_transitions",
    "ValidationError",
    "validate_feature",
    "validate_bug",
    "validate_task",
    "validate_project_data",
    "validate_project_item",
    "try_validate_feature",
    "try_validate_bug",
    "try_validate_task",
    "try_validate_project_item",
    "try_validate_project_data",
    "parse_project_item",
    "parse_project_data",
    "validate_with_jsonschema",
    "create_item",
    "update_item",
    "generate_item_id",
]
