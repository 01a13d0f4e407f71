"""
Unit tests for DataAPIConfig and client construction.

Tests the API key requirement, the mutually exclusive endpoint shapes and
environment loading.
"""

import pytest
from pydantic import ValidationError

from mdb_data_api import (ConfigurationError, DataAPIConfig, MongoDBDataAPI,
                          Region)


class TestDataAPIConfig:
    """Test configuration validation."""

    def test_url_endpoint_shape(self):
        """Test direct endpoint configuration."""
        config = DataAPIConfig(api_key="key", url_endpoint="https://example.com/data")
        assert config.url_endpoint == "https://example.com/data"
        assert config.app_id is None

    def test_app_id_shape_with_region_string(self):
        """Test that a region code string is coerced to Region."""
        config = DataAPIConfig(api_key="key", app_id="data-abc", region="us-west-2")
        assert config.region is Region.OREGON

    def test_empty_api_key_rejected(self):
        """Test that an empty API key fails validation."""
        with pytest.raises(ValidationError):
            DataAPIConfig(api_key="", app_id="data-abc")

    def test_both_shapes_rejected(self):
        """Test that url_endpoint and app_id cannot be combined."""
        with pytest.raises(ValidationError):
            DataAPIConfig(api_key="key", app_id="data-abc", url_endpoint="https://x")

    def test_neither_shape_rejected(self):
        """Test that one endpoint shape is required."""
        with pytest.raises(ValidationError):
            DataAPIConfig(api_key="key")

    def test_region_requires_app_id(self):
        """Test that region is only valid with app_id."""
        with pytest.raises(ValidationError):
            DataAPIConfig(api_key="key", url_endpoint="https://x", region=Region.OREGON)

    def test_frozen(self):
        """Test that configuration cannot be mutated."""
        config = DataAPIConfig(api_key="key", app_id="data-abc")
        with pytest.raises(ValidationError):
            config.api_key = "other"

    def test_create_wraps_validation_error(self):
        """Test that create() raises ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            DataAPIConfig.create(api_key="", app_id="data-abc")

        assert exc_info.value.config_key == "api_key"
        assert "Invalid API key!" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_create_unknown_region(self):
        """Test that an unsupported region is a configuration error."""
        with pytest.raises(ConfigurationError):
            DataAPIConfig.create(api_key="key", app_id="data-abc", region="mars-north-1")

    def test_repr_masks_api_key(self):
        """Test that the API key never appears in repr()."""
        config = DataAPIConfig(api_key="super-secret", app_id="data-abc")
        assert "super-secret" not in repr(config)
        assert "super-secret" not in str(config)


class TestFromEnv:
    """Test environment-based configuration."""

    def test_app_id_from_env(self):
        """Test loading the app-ID shape."""
        config = DataAPIConfig.from_env(
            {
                "MDB_DATA_API_KEY": "key",
                "MDB_DATA_API_APP_ID": "data-abc",
                "MDB_DATA_API_REGION": "eu-west-1",
            }
        )
        assert config.app_id == "data-abc"
        assert config.region is Region.IRELAND

    def test_url_endpoint_from_env(self):
        """Test loading the direct-endpoint shape."""
        config = DataAPIConfig.from_env(
            {"MDB_DATA_API_KEY": "key", "MDB_DATA_API_URL": "https://example.com/data"}
        )
        assert config.url_endpoint == "https://example.com/data"

    def test_missing_key_in_env(self):
        """Test that a missing key raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            DataAPIConfig.from_env({"MDB_DATA_API_APP_ID": "data-abc"})

    def test_reads_os_environ(self, monkeypatch):
        """Test that os.environ is used by default."""
        monkeypatch.setenv("MDB_DATA_API_KEY", "env-key")
        monkeypatch.setenv("MDB_DATA_API_APP_ID", "data-env")
        monkeypatch.delenv("MDB_DATA_API_URL", raising=False)
        monkeypatch.delenv("MDB_DATA_API_REGION", raising=False)

        config = DataAPIConfig.from_env()
        assert config.api_key == "env-key"
        assert config.app_id == "data-env"


class TestClientConstruction:
    """Test that the client fails fast on invalid configuration."""

    def test_empty_api_key(self):
        """Test that an empty API key raises before any client exists."""
        with pytest.raises(ConfigurationError):
            MongoDBDataAPI(api_key="", url_endpoint="https://example.com/data")

    def test_missing_api_key(self):
        """Test that a missing API key raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            MongoDBDataAPI(app_id="data-abc")

    def test_missing_api_key_in_mapping(self):
        """Test that a mapping configuration is validated too."""
        with pytest.raises(ConfigurationError):
            MongoDBDataAPI({"app_id": "data-abc"})

    def test_bypassed_validation_still_checked(self):
        """Test that a config built without validation is still rejected."""
        config = DataAPIConfig.model_construct(api_key="", app_id="data-abc")
        with pytest.raises(ConfigurationError):
            MongoDBDataAPI(config)

    def test_config_instance_and_values_conflict(self):
        """Test that a config object cannot be combined with keywords."""
        config = DataAPIConfig(api_key="key", app_id="data-abc")
        with pytest.raises(ConfigurationError):
            MongoDBDataAPI(config, api_key="other")

    def test_accepts_config_instance(self):
        """Test construction from a DataAPIConfig."""
        config = DataAPIConfig(api_key="key", app_id="data-abc")
        api = MongoDBDataAPI(config)
        assert api.config is config
        assert api.params == {}
