"""
pmcontract Entity Models

Pydantic models for the project-management data contract.
Features, bugs and tasks share the BaseItem fields and are told apart
by their ``type`` tag.
"""
from collections.abc import Mapping
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, NewType, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

ID_PATTERN = r"^[a-zA-Z0-9_-]+$"
VERSION_PATTERN = r"^\d+\.\d+\.\d+(-[a-zA-Z0-9]+)?$"


class Priority(str, Enum):
    """Item priority"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class FeatureStatus(str, Enum):
    """Feature workflow states"""
    BACKLOG = "backlog"
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    TESTING = "testing"
    COMPLETED = "completed"


class BugStatus(str, Enum):
    """Bug workflow states"""
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"
    WONT_FIX = "wont-fix"


class TaskStatus(str, Enum):
    """Task workflow states"""
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    BLOCKED = "blocked"
    COMPLETED = "completed"


class Severity(str, Enum):
    """Bug severity"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ItemType(str, Enum):
    """Discriminator values for project items"""
    FEATURE = "feature"
    BUG = "bug"
    TASK = "task"


PRIORITIES = tuple(p.value for p in Priority)
FEATURE_STATUSES = tuple(s.value for s in FeatureStatus)
BUG_STATUSES = tuple(s.value for s in BugStatus)
TASK_STATUSES = tuple(s.value for s in TaskStatus)
SEVERITIES = tuple(s.value for s in Severity)
ITEM_TYPES = tuple(t.value for t in ItemType)


# Branded numbers: plain int/float at runtime, only produced by the factories below.
StoryPoints = NewType("StoryPoints", int)
Hours = NewType("Hours", float)


def create_story_points(value: int) -> StoryPoints:
    """Validate a story point estimate (1-21)"""
    if value < 1 or value > 21:
        raise ValueError("Story points must be between 1 and 21")
    return StoryPoints(value)


def create_hours(value: float) -> Hours:
    """Validate an hour count (non-negative)"""
    if value < 0:
        raise ValueError("Hours must be non-negative")
    return Hours(value)


class BaseItem(BaseModel):
    """
    Fields shared by every project item.

    Items are immutable value records; ``id`` never changes after creation.
    Attribute names are snake_case, wire names are camelCase aliases.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        use_enum_values=True,
        extra="forbid",
    )

    id: str = Field(..., min_length=1, pattern=ID_PATTERN, description="Stable item identifier")
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., max_length=2000)
    status: str = Field(..., description="Kind-specific workflow state")
    priority: Priority
    assignee: Optional[str] = None
    tags: tuple[str, ...] = Field(default_factory=tuple)
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")


class Feature(BaseItem):
    """A unit of user-facing functionality"""

    type: Literal["feature"] = "feature"
    status: FeatureStatus
    epic: Optional[str] = Field(default=None, min_length=1)
    story_points: Optional[int] = Field(default=None, alias="storyPoints")
    acceptance_criteria: tuple[Annotated[str, Field(min_length=1)], ...] = Field(
        ..., alias="acceptanceCriteria", min_length=1
    )

    @field_validator("story_points")
    @classmethod
    def _check_story_points(cls, value: Optional[int]) -> Optional[int]:
        if value is None:
            return None
        return create_story_points(value)


class Bug(BaseItem):
    """A defect report"""

    type: Literal["bug"] = "bug"
    status: BugStatus
    severity: Severity
    reproducible: bool
    steps_to_reproduce: tuple[Annotated[str, Field(min_length=1)], ...] = Field(
        ..., alias="stepsToReproduce", min_length=1
    )
    environment: str = Field(..., min_length=1)
    resolution: Optional[str] = Field(default=None, min_length=1)


class Task(BaseItem):
    """A unit of work, optionally split into subtasks"""

    type: Literal["task"] = "task"
    status: TaskStatus
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")
    estimated_hours: Optional[float] = Field(default=None, alias="estimatedHours")
    actual_hours: Optional[float] = Field(default=None, alias="actualHours")
    subtasks: tuple[Annotated[str, Field(pattern=ID_PATTERN)], ...]

    @field_validator("estimated_hours", "actual_hours")
    @classmethod
    def _check_hours(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return None
        return create_hours(value)

    @field_validator("subtasks")
    @classmethod
    def _check_unique_subtasks(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if len(set(value)) != len(value):
            raise ValueError("subtasks must be unique")
        return value


ProjectItem = Annotated[Union[Feature, Bug, Task], Field(discriminator="type")]
PROJECT_ITEM_ADAPTER: TypeAdapter[Union[Feature, Bug, Task]] = TypeAdapter(ProjectItem)

ITEM_MODELS: dict[str, type[BaseItem]] = {
    ItemType.FEATURE.value: Feature,
    ItemType.BUG.value: Bug,
    ItemType.TASK.value: Task,
}


class ProjectMetadata(BaseModel):
    """Project-level metadata"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    project_name: str = Field(..., alias="projectName", min_length=1, max_length=100)
    version: str = Field(..., pattern=VERSION_PATTERN, description="Semantic version")
    last_updated: datetime = Field(..., alias="lastUpdated")


class ProjectData(BaseModel):
    """Aggregate of all items in a project"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    features: tuple[Feature, ...]
    bugs: tuple[Bug, ...]
    tasks: tuple[Task, ...]
    metadata: ProjectMetadata


def item_type_of(item: Any) -> Optional[str]:
    """Return the ``type`` tag of a model or raw mapping, or None"""
    if isinstance(item, Mapping):
        tag = item.get("type")
    else:
        tag = getattr(item, "type", None)
    if isinstance(tag, ItemType):
        return tag.value
    return tag if isinstance(tag, str) else None


def is_feature(item: Any) -> bool:
    return item_type_of(item) == ItemType.FEATURE.value


def is_bug(item: Any) -> bool:
    return item_type_of(item) == ItemType.BUG.value


def is_task(item: Any) -> bool:
    return item_type_of(item) == ItemType.TASK.value


def dump_item(item: BaseModel) -> dict[str, Any]:
    """Serialize a model to its camelCase wire form, dropping unset optionals"""
    return item.model_dump(mode="json", by_alias=True, exclude_none=True)
