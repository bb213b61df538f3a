"""Tests for the event access policy."""

import pytest

from college_events.exceptions import ForbiddenError, ValidationError
from college_events.models import Event
from college_events.policy import authorize, validate_required


class TestAuthorize:
    """Test cases for authorize."""

    def test_creator_is_allowed(self):
        """Test the creator passes the ownership check."""
        authorize(Event(created_by="user-a"), "user-a")

    def test_other_user_is_forbidden(self):
        """Test anyone else is rejected."""
        with pytest.raises(ForbiddenError):
            authorize(Event(created_by="user-a"), "user-b")


class TestValidateRequired:
    """Test cases for validate_required."""

    def test_all_present(self, event_data):
        """Test complete input passes."""
        validate_required(event_data)

    def test_reports_every_missing_field(self, event_data):
        """Test missing and blank fields are all listed."""
        data = {**event_data, "location": "   "}
        del data["type"]

        with pytest.raises(ValidationError) as exc_info:
            validate_required(data)

        assert exc_info.value.missing == ["location", "type"]
        assert "location" in exc_info.value.message
