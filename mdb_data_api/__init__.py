"""
MDB_DATA_API - MongoDB Atlas Data API client

Async client for the Atlas Data API with fluent cluster/database/collection
scoping and typed document actions.
"""

# Configuration
from .config import DataAPIConfig
# Core client
from .core import (ClusterScopedDataAPI, CollectionScopedDataAPI,
                   DatabaseScopedDataAPI, MongoDBDataAPI)
# Endpoints
from .endpoint import Region, get_action_url, get_url_endpoint
# Errors
from .exceptions import (ConfigurationError, DataAPIError,
                         DataAPIRequestError, InvalidParamsError)
# Logging
from .observability import (clear_correlation_id, get_correlation_id,
                            set_correlation_id)

__version__ = "0.1.0"

__all__ = [
    # Core
    "MongoDBDataAPI",
    "ClusterScopedDataAPI",
    "DatabaseScopedDataAPI",
    "CollectionScopedDataAPI",
    # Configuration
    "DataAPIConfig",
    "Region",
    "get_url_endpoint",
    "get_action_url",
    # Errors
    "DataAPIError",
    "ConfigurationError",
    "InvalidParamsError",
    "DataAPIRequestError",
    # Logging
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
]
