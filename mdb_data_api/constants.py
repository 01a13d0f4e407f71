"""
Constants for MDB_DATA_API.

This module contains the shared constants used across the client: endpoint
templates, header names and the fixed set of server action names.
"""

from typing import Final

# ============================================================================
# ENDPOINT CONSTANTS
# ============================================================================

DATA_API_HOST: Final[str] = "data.mongodb-api.com"
"""Global host of the Atlas Data API."""

DATA_API_VERSION: Final[str] = "beta"
"""Data API version segment used in managed endpoint URLs."""

MANAGED_ENDPOINT_TEMPLATE: Final[str] = (
    "https://{region_prefix}" + DATA_API_HOST + "/app/{app_id}/endpoint/data/" + DATA_API_VERSION
)
"""Base URL template for app-ID configurations."""

REGION_PREFIX_TEMPLATE: Final[str] = "{region}.aws."
"""Host prefix prepended when a region is configured."""

ACTION_URL_TEMPLATE: Final[str] = "{endpoint}/action/{action}"
"""Full URL of a named action below a base endpoint."""

# ============================================================================
# REQUEST CONSTANTS
# ============================================================================

API_KEY_HEADER: Final[str] = "api-key"
"""Header carrying the Data API key."""

API_KEY_MASK: Final[str] = "*****"
"""Placeholder written over the API key in error payloads."""

DEFAULT_HEADERS: Final[dict] = {
    "Content-Type": "application/json",
    "Access-Control-Request-Headers": "*",
}
"""Headers sent with every action request (before the API key)."""

REQUIRED_SCOPE_PARAMS: Final[tuple[str, ...]] = ("dataSource", "database", "collection")
"""Parameters that must be set, by scope or per call, before an action is sent."""

INVALID_PARAMS_MESSAGE: Final[str] = "Invalid params: dataSource, database, collection"
"""Message of the error raised when a required scope parameter is missing."""

# ============================================================================
# SERVER ACTIONS
# ============================================================================

ACTION_FIND_ONE: Final[str] = "findOne"
ACTION_FIND: Final[str] = "find"
ACTION_INSERT_ONE: Final[str] = "insertOne"
ACTION_INSERT_MANY: Final[str] = "insertMany"
ACTION_UPDATE_ONE: Final[str] = "updateOne"
ACTION_UPDATE_MANY: Final[str] = "updateMany"
ACTION_REPLACE_ONE: Final[str] = "replaceOne"
ACTION_DELETE_ONE: Final[str] = "deleteOne"
ACTION_DELETE_MANY: Final[str] = "deleteMany"
ACTION_AGGREGATE: Final[str] = "pipeline"

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_API_KEY: Final[str] = "MDB_DATA_API_KEY"
ENV_URL_ENDPOINT: Final[str] = "MDB_DATA_API_URL"
ENV_APP_ID: Final[str] = "MDB_DATA_API_APP_ID"
ENV_REGION: Final[str] = "MDB_DATA_API_REGION"

# ============================================================================
# METRICS CONSTANTS
# ============================================================================

METRICS_PREFIX: Final[str] = "data_api"
"""Prefix of operation names recorded in the metrics collector."""

MAX_METRICS: Final[int] = 10000
"""Maximum number of metric keys kept before LRU eviction."""
