"""
Tests for pmcontract Entity Models

Tests enumerations, branded number factories, type predicates and the
pydantic models.
"""
import pytest
from pydantic import ValidationError as PydanticValidationError

from pmcontract.models import (
    BUG_STATUSES,
    FEATURE_STATUSES,
    PRIORITIES,
    SEVERITIES,
    TASK_STATUSES,
    PROJECT_ITEM_ADAPTER,
    Bug,
    Feature,
    FeatureStatus,
    ProjectData,
    Task,
    create_hours,
    create_story_points,
    dump_item,
    is_bug,
    is_feature,
    is_task,
)


class TestConstants:
    """Test enumerated value lists"""

    def test_priorities(self):
        assert PRIORITIES == ("low", "medium", "high", "critical")

    def test_feature_statuses(self):
        assert FEATURE_STATUSES == ("backlog", "planning", "in-progress", "testing", "completed")

    def test_bug_statuses(self):
        assert BUG_STATUSES == ("open", "in-progress", "resolved", "closed", "wont-fix")

    def test_task_statuses(self):
        assert TASK_STATUSES == ("todo", "in-progress", "blocked", "completed")

    def test_severities(self):
        assert SEVERITIES == ("low", "medium", "high", "critical")


class TestStoryPoints:
    """Test the story point factory"""

    @pytest.mark.parametrize("value", [1, 5, 13, 21])
    def test_valid_values_returned_unchanged(self, value):
        assert create_story_points(value) == value

    @pytest.mark.parametrize("value", [0, -1, 22, 100])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValueError, match="Story points must be between 1 and 21"):
            create_story_points(value)


class TestHours:
    """Test the hours factory"""

    @pytest.mark.parametrize("value", [0, 0.5, 8, 1000])
    def test_non_negative_accepted(self, value):
        assert create_hours(value) == value

    @pytest.mark.parametrize("value", [-0.1, -1, -40])
    def test_negative_rejected(self, value):
        with pytest.raises(ValueError, match="Hours must be non-negative"):
            create_hours(value)


class TestTypePredicates:
    """Test is_feature / is_bug / is_task"""

    def test_raw_mappings(self, valid_feature, valid_bug, valid_task):
        assert is_feature(valid_feature) and not is_feature(valid_bug)
        assert is_bug(valid_bug) and not is_bug(valid_task)
        assert is_task(valid_task) and not is_task(valid_feature)

    def test_models(self, valid_feature, valid_task):
        feature = Feature.model_validate(valid_feature)
        task = Task.model_validate(valid_task)
        assert is_feature(feature)
        assert is_task(task)
        assert not is_bug(feature)

    def test_untagged_values(self):
        assert not is_feature({})
        assert not is_bug("bug")
        assert not is_task(None)


class TestFeatureModel:
    """Test Feature pydantic model"""

    def test_parse_wire_format(self, valid_feature):
        feature = Feature.model_validate(valid_feature)
        assert feature.status == FeatureStatus.BACKLOG.value
        assert feature.acceptance_criteria == ("Must work",)
        assert feature.story_points is None

    def test_story_points_go_through_factory(self, valid_feature):
        valid_feature["storyPoints"] = 22
        with pytest.raises(PydanticValidationError, match="Story points must be between 1 and 21"):
            Feature.model_validate(valid_feature)

    def test_empty_acceptance_criteria_rejected(self, valid_feature):
        valid_feature["acceptanceCriteria"] = []
        with pytest.raises(PydanticValidationError):
            Feature.model_validate(valid_feature)

    def test_id_is_immutable(self, valid_feature):
        feature = Feature.model_validate(valid_feature)
        with pytest.raises(PydanticValidationError):
            feature.id = "other"

    def test_unknown_field_rejected(self, valid_feature):
        valid_feature["color"] = "blue"
        with pytest.raises(PydanticValidationError):
            Feature.model_validate(valid_feature)


class TestBugAndTaskModels:
    """Test Bug and Task pydantic models"""

    def test_bug_parse(self, valid_bug):
        bug = Bug.model_validate(valid_bug)
        assert bug.severity == "critical"
        assert bug.steps_to_reproduce == ("Step 1",)

    def test_task_negative_hours_rejected(self, valid_task):
        valid_task["estimatedHours"] = -2
        with pytest.raises(PydanticValidationError, match="Hours must be non-negative"):
            Task.model_validate(valid_task)

    def test_task_duplicate_subtasks_rejected(self, valid_task):
        valid_task["subtasks"] = ["a", "a"]
        with pytest.raises(PydanticValidationError, match="subtasks must be unique"):
            Task.model_validate(valid_task)


class TestDiscriminatedUnion:
    """Test ProjectItem type discrimination"""

    def test_dispatch_on_type(self, valid_feature, valid_bug, valid_task):
        assert isinstance(PROJECT_ITEM_ADAPTER.validate_python(valid_feature), Feature)
        assert isinstance(PROJECT_ITEM_ADAPTER.validate_python(valid_bug), Bug)
        assert isinstance(PROJECT_ITEM_ADAPTER.validate_python(valid_task), Task)

    def test_unknown_type_rejected(self, valid_feature):
        valid_feature["type"] = "epic"
        with pytest.raises(PydanticValidationError):
            PROJECT_ITEM_ADAPTER.validate_python(valid_feature)

    def test_project_data(self, valid_project_data):
        project = ProjectData.model_validate(valid_project_data)
        assert project.metadata.project_name == "Test Project"
        assert len(project.features) == 1


class TestDumpItem:
    """Test wire serialization"""

    def test_camel_case_keys_and_no_nulls(self, valid_feature):
        dumped = dump_item(Feature.model_validate(valid_feature))
        assert dumped["acceptanceCriteria"] == ["Must work"]
        assert dumped["type"] == "feature"
        assert "createdAt" in dumped
        assert "storyPoints" not in dumped
        assert "epic" not in dumped
