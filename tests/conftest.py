"""
Shared pytest fixtures for the Task Store test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by resetting the in-memory task mapping for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories
- Shared state reset between tests
- Test client creation
"""

import os
import pytest
from typing import Any
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from task_store import create_app, store
from task_store.models import SEED_TASKS, Task


# Initialize Faker for generating test data
fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The 'session' scope means the same app instance is reused
    for all tests; the task mapping is reset per test instead.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def task_store(app):
    """
    Provide the process-wide task store, seeded and isolated per test.

    The store is reset to the seed tasks before the test runs and
    again afterwards, so no test sees another test's writes.

    Yields:
        The TaskStore bound to the application.
    """
    store.reset(SEED_TASKS)
    yield store
    store.reset(SEED_TASKS)


@pytest.fixture(scope="function")
def client(app, task_store):
    """
    Create a test client for making HTTP requests.

    The test client allows you to make requests to the app
    without running a real server.

    Args:
        app: Flask application fixture.
        task_store: Ensures the mapping is freshly seeded.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def task_factory(task_store):
    """
    Factory fixture for creating Task instances in the store.

    Example:
        def test_something(task_factory):
            task = task_factory(description="My Task")
            assert task.id in task_store
    """
    created_ids = []

    def _create_task(
        task_id: str | None = None,
        description: str | None = None,
        note: str | None = None,
        applications: list[str] | None = None
    ) -> Task:
        """
        Create a task with the given or random values and store it.

        Args:
            task_id: Task id (defaults to a random UUID).
            description: Description (defaults to random sentence).
            note: Note (defaults to random paragraph).
            applications: Applications (defaults to random words).

        Returns:
            Stored Task instance.
        """
        task = Task(
            id=task_id or fake.uuid4(),
            description=description if description is not None else fake.sentence(nb_words=5),
            note=note if note is not None else fake.paragraph(),
            applications=applications if applications is not None else fake.words(nb=3),
        )
        task_store.put(task)
        created_ids.append(task.id)
        return task

    yield _create_task

    for task_id in created_ids:
        task_store.delete(task_id)


@pytest.fixture
def sample_task(task_factory) -> Task:
    """Create a single sample task for tests that need one task."""
    return task_factory(
        task_id="sample",
        description="Sample Task",
        note="This is a sample task for testing",
        applications=["VS Code", "git"]
    )


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data() -> dict[str, Any]:
    """
    Provide a complete task payload for POST requests.

    Returns:
        Dictionary with every task field set.
    """
    return {
        "id": "3",
        "description": "d",
        "note": "n",
        "applications": ["a"],
    }


@pytest.fixture
def random_task_data() -> dict[str, Any]:
    """Provide a task payload filled with random values."""
    return {
        "id": fake.uuid4(),
        "description": fake.sentence(nb_words=6),
        "note": fake.paragraph(),
        "applications": fake.words(nb=4) + ["git", "git"],
    }


@pytest.fixture
def api_headers() -> dict[str, str]:
    """
    Provide common headers for API requests.

    Returns:
        Dictionary of HTTP headers.
    """
    return {
        "Content-Type": "application/json",
        "Accept": "application/json"
    }
