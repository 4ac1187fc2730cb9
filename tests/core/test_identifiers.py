"""
Test suite for object identifier helpers.

System role: Verification of the identifier guard used before persistence
"""

import pytest

from cigno.core.exceptions import InvalidIdentifierError, ValidationError
from cigno.core.identifiers import (
    ensure_object_id,
    ensure_optional_object_id,
    generate_object_id,
    is_valid_object_id,
)

VALID_ID = "65f1c2a4b9e77a0012345678"


class TestGenerateObjectId:
    def test_should_produce_24_hex_characters(self) -> None:
        value = generate_object_id()

        assert len(value) == 24
        assert is_valid_object_id(value)

    def test_should_be_unique(self) -> None:
        assert len({generate_object_id() for _ in range(500)}) == 500


class TestEnsureObjectId:
    def test_should_accept_and_lowercase_valid_id(self) -> None:
        assert ensure_object_id(VALID_ID.upper()) == VALID_ID

    @pytest.mark.parametrize("value", [True, False, 0, 12345, None, {"id": VALID_ID}, [VALID_ID], 1.5])
    def test_should_reject_non_strings(self, value) -> None:
        with pytest.raises(InvalidIdentifierError) as exc_info:
            ensure_object_id(value, "id")

        assert exc_info.value.details["received_type"] == type(value).__name__

    @pytest.mark.parametrize("value", ["", "true", "65f1c2a4", "65f1c2a4b9e77a001234567z", VALID_ID + "0"])
    def test_should_reject_malformed_strings(self, value: str) -> None:
        with pytest.raises(InvalidIdentifierError):
            ensure_object_id(value)

    def test_error_should_name_the_field_and_be_a_validation_error(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            ensure_object_id(True, "project_id")

        assert exc_info.value.field == "project_id"
        assert "project_id" in exc_info.value.message


class TestEnsureOptionalObjectId:
    @pytest.mark.parametrize("value", [None, ""])
    def test_should_pass_missing_values_through(self, value) -> None:
        assert ensure_optional_object_id(value, "client_id") is None

    def test_should_still_reject_booleans(self) -> None:
        with pytest.raises(InvalidIdentifierError):
            ensure_optional_object_id(False, "client_id")
