"""
Pytest Configuration and Shared Fixtures for pmcontract Tests

Provides raw (wire-format) sample items and project documents.
Every fixture returns a fresh dict so tests may modify it freely.
"""
import pytest


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest.fixture
def valid_feature():
    """Minimal valid feature"""
    return {
        "id": "f1",
        "title": "Test Feature",
        "description": "Test description",
        "type": "feature",
        "status": "backlog",
        "priority": "medium",
        "tags": [],
        "createdAt": "2023-01-01T00:00:00Z",
        "updatedAt": "2023-01-01T00:00:00Z",
        "acceptanceCriteria": ["Must work"],
    }


@pytest.fixture
def valid_bug():
    """Minimal valid bug"""
    return {
        "id": "b1",
        "title": "Test Bug",
        "description": "Test description",
        "type": "bug",
        "status": "open",
        "priority": "high",
        "severity": "critical",
        "reproducible": True,
        "stepsToReproduce": ["Step 1"],
        "environment": "Production",
        "tags": [],
        "createdAt": "2023-01-01T00:00:00Z",
        "updatedAt": "2023-01-01T00:00:00Z",
    }


@pytest.fixture
def valid_task():
    """Minimal valid task"""
    return {
        "id": "t1",
        "title": "Test Task",
        "description": "Test description",
        "type": "task",
        "status": "todo",
        "priority": "low",
        "subtasks": [],
        "tags": [],
        "createdAt": "2023-01-01T00:00:00Z",
        "updatedAt": "2023-01-01T00:00:00Z",
    }


@pytest.fixture
def valid_project_data(valid_feature, valid_bug, valid_task):
    """Project document holding one item of each kind"""
    return {
        "features": [valid_feature],
        "bugs": [valid_bug],
        "tasks": [valid_task],
        "metadata": {
            "projectName": "Test Project",
            "version": "1.0.0",
            "lastUpdated": "2023-01-01T00:00:00Z",
        },
    }


@pytest.fixture
def strict_env(monkeypatch):
    """Enable strict additional-property checking for the test"""
    monkeypatch.setenv("PMCONTRACT_STRICT", "true")


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers",
        "unit: Unit tests (no external services)"
    )
