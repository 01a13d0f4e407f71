"""
Type definitions for MDB_DATA_API request and response structures.

The result types describe what the Data API returns for each action. They
are caller-facing contracts only: the client returns the parsed response
body as-is and does not check it against these shapes.

This module is part of MDB_DATA_API.
"""

from typing import Any, Dict, List, Mapping, Sequence, TypeVar, TypedDict, Union

# ============================================================================
# Request Types
# ============================================================================

Document = Dict[str, Any]
Filter = Mapping[str, Any]
Projection = Mapping[str, Union[int, bool]]
Sort = Mapping[str, int]
Update = Mapping[str, Any]
Pipeline = Sequence[Mapping[str, Any]]

DocT = TypeVar("DocT")
"""Document type bound by `collection()`; `Document` when unspecified."""


# ============================================================================
# Result Types
# ============================================================================


class FindOneResult(TypedDict):
    """Result of `findOne`: the matched document or None."""

    document: Any


class FindResult(TypedDict):
    """Result of `find`."""

    documents: List[Any]


class InsertOneResult(TypedDict):
    """Result of `insertOne`."""

    insertedId: str


class InsertManyResult(TypedDict):
    """Result of `insertMany`."""

    insertedIds: List[str]


class _UpdateCounts(TypedDict):
    matchedCount: int
    modifiedCount: int


class UpdateResult(_UpdateCounts, total=False):
    """Result of `updateOne`, `updateMany` and `replaceOne`."""

    upsertedId: str


class DeleteResult(TypedDict):
    """Result of `deleteOne` and `deleteMany`."""

    deletedCount: int


class AggregateResult(TypedDict):
    """Result of `pipeline`: the documents produced by the last stage."""

    documents: List[Any]
