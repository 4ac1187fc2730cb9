"""
Test suite for the exception hierarchy.

System role: Verification of error context carried to the API layer
"""

from cigno.core.exceptions import (
    AgentConfigurationError,
    AgentError,
    AgentRequestError,
    CignoException,
    NotFoundError,
    ValidationError,
)


def test_str_should_include_details() -> None:
    error = CignoException("Broken", {"key": "value"})

    assert str(error) == "Broken | Details: {'key': 'value'}"


def test_validation_error_should_record_field() -> None:
    error = ValidationError("Title is required", "title")

    assert error.field == "title"
    assert error.details == {"field": "title"}


def test_not_found_should_carry_resource_and_id() -> None:
    error = NotFoundError("Deliverable", "65f1c2a4b9e77a0012345678")

    assert error.message == "Deliverable not found"
    assert error.resource_id == "65f1c2a4b9e77a0012345678"


def test_agent_request_error_should_keep_remote_status_and_body() -> None:
    error = AgentRequestError(500, "upstream exploded", "agent-1")

    assert isinstance(error, AgentError)
    assert error.status_code == 500
    assert error.body == "upstream exploded"
    assert error.message == "Custom agent failed (500): upstream exploded"


def test_agent_configuration_error_is_an_agent_error() -> None:
    assert issubclass(AgentConfigurationError, AgentError)
