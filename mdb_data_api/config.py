"""
Configuration management for MDB_DATA_API.

A client is configured with an API key and exactly one of:

- a direct endpoint URL (`url_endpoint`), or
- a Data App ID (`app_id`) with an optional `region`.

`DataAPIConfig` is a frozen Pydantic model, so scoped clients can share one
instance without copying it.
"""

import os
from typing import Any, Dict, Optional

from pydantic import (BaseModel, ConfigDict, ValidationError, field_validator,
                      model_validator)

from .constants import ENV_API_KEY, ENV_APP_ID, ENV_REGION, ENV_URL_ENDPOINT
from .endpoint import Region, resolve_base_url
from .exceptions import ConfigurationError


class DataAPIConfig(BaseModel):
    """
    Data API client configuration.

    Example:
        # Direct endpoint
        config = DataAPIConfig(
            api_key="...",
            url_endpoint="https://data.mongodb-api.com/app/data-abc/endpoint/data/beta",
        )

        # Data App ID, optionally regional
        config = DataAPIConfig(api_key="...", app_id="data-abc", region=Region.OREGON)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str
    url_endpoint: Optional[str] = None
    app_id: Optional[str] = None
    region: Optional[Region] = None

    @field_validator("api_key")
    @classmethod
    def _check_api_key(cls, value: str) -> str:
        if not value:
            raise ValueError("Invalid API key!")
        return value

    @model_validator(mode="after")
    def _check_endpoint_shape(self) -> "DataAPIConfig":
        if self.url_endpoint and self.app_id:
            raise ValueError("url_endpoint and app_id are mutually exclusive")
        if not self.url_endpoint and not self.app_id:
            raise ValueError("Either url_endpoint or app_id is required")
        if self.region and not self.app_id:
            raise ValueError("region can only be set together with app_id")
        return self

    @classmethod
    def create(cls, **values: Any) -> "DataAPIConfig":
        """
        Build a configuration, raising ConfigurationError instead of
        Pydantic's ValidationError.

        Raises:
            ConfigurationError: If the values do not form a valid configuration
        """
        try:
            return cls(**values)
        except ValidationError as e:
            first = e.errors()[0]
            config_key = ".".join(str(loc) for loc in first.get("loc", ())) or None
            message = first.get("msg", str(e))
            if message.startswith("Value error, "):
                message = message[len("Value error, ") :]
            raise ConfigurationError(message, config_key=config_key) from e

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "DataAPIConfig":
        """
        Build a configuration from environment variables.

        Reads MDB_DATA_API_KEY plus either MDB_DATA_API_URL or
        MDB_DATA_API_APP_ID (with optional MDB_DATA_API_REGION).

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: If the variables do not form a valid configuration
        """
        env = os.environ if environ is None else environ
        return cls.create(
            api_key=env.get(ENV_API_KEY, ""),
            url_endpoint=env.get(ENV_URL_ENDPOINT) or None,
            app_id=env.get(ENV_APP_ID) or None,
            region=env.get(ENV_REGION) or None,
        )

    @property
    def base_url(self) -> str:
        """Base endpoint that action names are appended to."""
        return resolve_base_url(self)

    def __repr__(self) -> str:
        endpoint = f"url_endpoint={self.url_endpoint!r}"
        if self.app_id:
            endpoint = f"app_id={self.app_id!r}, region={self.region!r}"
        return f"DataAPIConfig(api_key='*****', {endpoint})"

    __str__ = __repr__
