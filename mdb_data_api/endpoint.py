"""
Endpoint resolution for the Atlas Data API.

Computes the base URL of a Data App and the full URL of a named action.
Resolution is plain string templating: app IDs and endpoint URLs are passed
through as given.

This module is part of MDB_DATA_API.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from .constants import (ACTION_URL_TEMPLATE, MANAGED_ENDPOINT_TEMPLATE,
                         REGION_PREFIX_TEMPLATE)

if TYPE_CHECKING:
    from .config import DataAPIConfig


class Region(str, Enum):
    """
    Region of a regional Data API deployment.

    See https://docs.atlas.mongodb.com/api/data-api-resources/#regional-requests
    """

    VIRGINIA = "us-east-1"
    OREGON = "us-west-2"
    IRELAND = "eu-west-1"
    SYDNEY = "ap-southeast-2"


def get_url_endpoint(app_id: str, region: Optional[Union[Region, str]] = None) -> str:
    """
    Build the base URL of a Data App.

    Args:
        app_id: Data App ID
        region: Optional deployment region; the global host is used when omitted

    Returns:
        Base endpoint URL, without a trailing slash
    """
    region_prefix = ""
    if region:
        region_prefix = REGION_PREFIX_TEMPLATE.format(region=Region(region).value)
    return MANAGED_ENDPOINT_TEMPLATE.format(region_prefix=region_prefix, app_id=app_id)


def get_action_url(endpoint: str, action: str) -> str:
    """Append `/action/{action}` to a base endpoint."""
    return ACTION_URL_TEMPLATE.format(endpoint=endpoint, action=action)


def resolve_base_url(config: "DataAPIConfig") -> str:
    """Return the direct endpoint if configured, else the managed one."""
    if config.url_endpoint:
        return config.url_endpoint
    return get_url_endpoint(config.app_id, config.region)


def resolve_action_url(config: "DataAPIConfig", action: str) -> str:
    """Return the full URL for `action` under the configured endpoint."""
    return get_action_url(resolve_base_url(config), action)
