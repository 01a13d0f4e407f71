"""
Core Data API client.

Provides the scoped client classes and the request/result type definitions.
"""

from .client import (ClusterScopedDataAPI, CollectionScopedDataAPI,
                     DatabaseScopedDataAPI, MongoDBDataAPI)
from .types import (AggregateResult, DeleteResult, FindOneResult, FindResult,
                    InsertManyResult, InsertOneResult, UpdateResult)

__all__ = [
    # Clients
    "MongoDBDataAPI",
    "ClusterScopedDataAPI",
    "DatabaseScopedDataAPI",
    "CollectionScopedDataAPI",
    # Results
    "FindOneResult",
    "FindResult",
    "InsertOneResult",
    "InsertManyResult",
    "UpdateResult",
    "DeleteResult",
    "AggregateResult",
]
