"""
REST API endpoints for the Task Store.

This module translates HTTP verbs into operations on the in-memory
task mapping. Successful responses are JSON; every error response is
plain text, matching the behaviour existing clients rely on.

Endpoints:
    GET    /health         - Health check
    GET    /tasks          - Map of every task, keyed by id
    GET    /tasks/<id>     - Get a single task by ID
    POST   /tasks          - Create or replace a task (id taken from body)
    DELETE /tasks/<id>     - Delete a task
"""

import logging
import os
from typing import Any

from flask import Blueprint, Response, current_app, jsonify, request
from werkzeug.exceptions import ClientDisconnected, MethodNotAllowed

from task_store import store
from task_store.models import Task

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

TASK_NOT_FOUND = "Task with given ID was not found"
DELETE_NOT_FOUND = "Task was not found."


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def plain_error(message: str, status: int) -> Response:
    """
    Build a plain-text error response.

    Args:
        message: Response body.
        status: HTTP status code.

    Returns:
        Response with a ``text/plain`` body.
    """
    response = Response(message, status=status, mimetype="text/plain")
    response.headers["X-Content-Type-Options"] = "nosniff"
    return response


def json_body(payload: Any, status: int) -> Response:
    """
    Serialize a payload with the app's JSON provider.

    Raises:
        TypeError, ValueError: If the payload is not JSON serializable.
    """
    body = current_app.json.dumps(payload)
    return Response(body, status=status, mimetype="application/json")


def empty_json(status: int) -> Response:
    """Build a JSON-typed response with no body."""
    return Response(status=status, mimetype="application/json")


def _reject_constant(name: str) -> float:
    """Refuse the non-standard NaN and Infinity literals."""
    raise ValueError(f"invalid JSON literal: {name}")


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/health", methods=["GET"], provide_automatic_options=False)
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({
        "status": "healthy",
        "environment": os.getenv("ENVIRONMENT", "unknown"),
        "version": os.getenv("APP_VERSION", "unknown"),
        "tasks": len(store),
    }), 200


@api_bp.route("/tasks", methods=["GET"], provide_automatic_options=False)
def get_tasks() -> Response:
    """
    List every stored task.

    Returns:
        JSON object mapping each id to its task with 200 status code,
        or the serialization error as plain text with 500.
    """
    logger.info("GET /tasks - Fetching all tasks")

    tasks = store.all()
    try:
        response = json_body(
            {task_id: task.to_dict() for task_id, task in tasks.items()}, 200
        )
    except (TypeError, ValueError) as exc:
        logger.error("Failed to encode task list: %s", exc)
        return plain_error(str(exc), 500)

    logger.info("Found %d tasks", len(tasks))
    return response


@api_bp.route("/tasks/<task_id>", methods=["GET"], provide_automatic_options=False)
def get_task(task_id: str) -> Response:
    """
    Get a single task by ID.

    Args:
        task_id: The identifier of the task.

    Returns:
        JSON response with task data and 200 status code,
        or a plain-text message and 400 if not found or not encodable.
    """
    logger.info("GET /tasks/%s - Fetching task", task_id)

    task = store.get(task_id)
    if task is None:
        logger.warning("Task %s not found", task_id)
        return plain_error(TASK_NOT_FOUND, 400)

    try:
        return json_body(task.to_dict(), 200)
    except (TypeError, ValueError) as exc:
        logger.error("Failed to encode task %s: %s", task_id, exc)
        return plain_error(str(exc), 400)


@api_bp.route("/tasks", methods=["POST"], provide_automatic_options=False)
def create_task() -> Response:
    """
    Create a task, or replace the task that has the same id.

    The id is read from the body, not the URL. The body is parsed as
    JSON whatever its content type.

    Request Body (JSON):
        id: Task identifier (optional, default: "")
        description: Task description (optional, default: "")
        note: Task note (optional, default: "")
        applications: List of application names (optional, default: [])

    Returns:
        Empty JSON response with 201 status code,
        or the underlying error as plain text and 400.
    """
    logger.info("POST /tasks - Creating task")

    try:
        raw = request.get_data(cache=False)
    except ClientDisconnected as exc:
        logger.warning("Failed to read request body: %s", exc.description)
        return plain_error(exc.description, 400)

    # Invalid UTF-8 sequences become U+FFFD instead of failing the request
    text = raw.decode("utf-8", "replace")
    try:
        task = Task.from_dict(
            current_app.json.loads(text, parse_constant=_reject_constant)
        )
    except (ValueError, RecursionError) as exc:
        logger.warning("Failed to decode task: %s", exc)
        return plain_error(str(exc), 400)

    replaced = task.id in store
    store.put(task)

    logger.info("%s task with ID: %r", "Replaced" if replaced else "Created", task.id)
    return empty_json(201)


@api_bp.route("/tasks/<task_id>", methods=["DELETE"], provide_automatic_options=False)
def delete_task(task_id: str) -> Response:
    """
    Delete a task.

    Args:
        task_id: The identifier of the task.

    Returns:
        Empty JSON response with 200 status code,
        or a plain-text message and 400 if not found.
    """
    logger.info("DELETE /tasks/%s - Deleting task", task_id)

    if not store.delete(task_id):
        logger.warning("Task %s not found", task_id)
        return plain_error(DELETE_NOT_FOUND, 400)

    logger.info("Deleted task %s", task_id)
    return empty_json(200)


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.app_errorhandler(404)
def not_found(error: Exception) -> Response:
    """Handle 404 Not Found errors."""
    return plain_error("404 page not found", 404)


@api_bp.app_errorhandler(405)
def method_not_allowed(error: MethodNotAllowed) -> Response:
    """Handle 405 Method Not Allowed errors with an empty body."""
    response = Response(status=405)
    if error.valid_methods:
        response.headers["Allow"] = ", ".join(error.valid_methods)
    return response


@api_bp.app_errorhandler(500)
def internal_error(error: Exception) -> Response:
    """Handle 500 Internal Server errors."""
    logger.error(f"Internal server error: {error}")
    return plain_error("Internal Server Error", 500)
