"""
Unit tests for custom exceptions.

Tests exception hierarchy and error messages.
"""

from mdb_data_api.exceptions import (ConfigurationError, DataAPIError,
                                     DataAPIRequestError, InvalidParamsError)


class TestExceptionHierarchy:
    """Test exception inheritance hierarchy."""

    def test_data_api_error_is_runtime_error(self):
        """Test that DataAPIError is a RuntimeError."""
        error = DataAPIError("test error")
        assert isinstance(error, RuntimeError)

    def test_subclasses(self):
        """Test that every client error derives from DataAPIError."""
        for error in (
            ConfigurationError("bad config"),
            InvalidParamsError("bad params"),
            DataAPIRequestError("failed", error={}),
        ):
            assert isinstance(error, DataAPIError)
            assert isinstance(error, RuntimeError)


class TestExceptionMessages:
    """Test exception message formatting."""

    def test_data_api_error_message(self):
        """Test DataAPIError message without context."""
        error = DataAPIError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.context == {}

    def test_data_api_error_with_context(self):
        """Test DataAPIError message with context."""
        error = DataAPIError("Something went wrong", context={"action": "find"})
        assert "context:" in str(error)
        assert "action=find" in str(error)

    def test_configuration_error_with_key(self):
        """Test ConfigurationError with config key."""
        error = ConfigurationError("Invalid API key!", config_key="api_key")
        assert error.config_key == "api_key"
        assert error.context["config_key"] == "api_key"

    def test_invalid_params_error(self):
        """Test InvalidParamsError attributes."""
        error = InvalidParamsError(
            "Invalid params: dataSource, database, collection",
            action="find",
            missing=["database"],
        )
        assert error.action == "find"
        assert error.missing == ["database"]
        assert "missing=['database']" in str(error)

    def test_invalid_params_error_defaults(self):
        """Test InvalidParamsError without details."""
        error = InvalidParamsError("Invalid params")
        assert error.missing == []
        assert str(error) == "Invalid params"

    def test_request_error(self):
        """Test DataAPIRequestError attributes and payload."""
        payload = {"message": "boom", "config": {"headers": {"api-key": "*****"}}}
        error = DataAPIRequestError("Action failed", error=payload, action="find", status_code=500)
        assert error.to_dict() is payload
        assert error.status_code == 500
        assert error.context == {"action": "find", "status_code": 500}

    def test_request_error_without_status(self):
        """Test that a None status is left out of the context."""
        error = DataAPIRequestError("Action failed", error={}, action="find")
        assert "status_code" not in error.context
