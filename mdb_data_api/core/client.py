"""
Asynchronous MongoDB Atlas Data API client.

Every remote operation is one HTTP POST to `{endpoint}/action/{name}`,
signed with the `api-key` header. The client carries a set of default
request parameters (`dataSource`, `database`, `collection` and any extra
keys) that are merged into each action's body.

Scoping never mutates a client. Each call returns a new client that shares
the configuration and the HTTP transport and holds its own copy of the
parameters. The returned class narrows which scoping calls remain available:

- `MongoDBDataAPI`: `cluster()`, `database()`, `collection()`
- `ClusterScopedDataAPI`: `database()`
- `DatabaseScopedDataAPI`: `collection()`
- `CollectionScopedDataAPI`: no further scoping

All of them expose `action()` and the named document actions.

This module is part of MDB_DATA_API.
"""

import logging
import time
from typing import (Any, Dict, Generic, Mapping, Optional, Sequence, Type,
                    TypeVar, Union)

import httpx

from ..config import DataAPIConfig
from ..constants import (ACTION_AGGREGATE, ACTION_DELETE_MANY,
                         ACTION_DELETE_ONE, ACTION_FIND, ACTION_FIND_ONE,
                         ACTION_INSERT_MANY, ACTION_INSERT_ONE,
                         ACTION_REPLACE_ONE, ACTION_UPDATE_MANY,
                         ACTION_UPDATE_ONE, API_KEY_HEADER, DEFAULT_HEADERS,
                         INVALID_PARAMS_MESSAGE, METRICS_PREFIX,
                         REQUIRED_SCOPE_PARAMS)
from ..endpoint import resolve_action_url
from ..exceptions import (ConfigurationError, DataAPIRequestError,
                          InvalidParamsError)
from ..observability import get_logger, log_operation, record_operation
from ..utils import encode_payload, serialize_http_error
from .types import (AggregateResult, DeleteResult, DocT, Document, Filter,
                    FindOneResult, FindResult, InsertManyResult,
                    InsertOneResult, Pipeline, Projection, Sort, Update,
                    UpdateResult)

logger = get_logger(__name__)

_D = TypeVar("_D")
_ApiT = TypeVar("_ApiT", bound="_DataAPIBase")

# Request options consumed by AsyncClient.send() rather than build_request().
_SEND_OPTIONS = ("auth", "follow_redirects")


def _action_params(extra: Mapping[str, Any], **fields: Any) -> Dict[str, Any]:
    """Layer the non-None typed fields over the caller's extra parameters."""
    params = dict(extra)
    params.update({key: value for key, value in fields.items() if value is not None})
    return params


class _DataAPIBase(Generic[DocT]):
    """
    State and actions shared by every scoping stage.

    Not instantiated directly; use `MongoDBDataAPI`.
    """

    __slots__ = ("_config", "_base_params", "_http", "_owns_http")

    def __init__(
        self,
        config: Optional[Union[DataAPIConfig, Mapping[str, Any]]] = None,
        base_params: Optional[Mapping[str, Any]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        **config_values: Any,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: A DataAPIConfig, or a mapping of its fields
            base_params: Default request parameters (dataSource, database,
                         collection and any extra keys)
            http_client: Shared transport; a private AsyncClient is created
                         (and closed by `aclose()`) when omitted
            **config_values: Configuration fields (api_key, url_endpoint,
                             app_id, region) when `config` is not given

        Raises:
            ConfigurationError: If the API key is missing or empty, or the
                                endpoint configuration is invalid
        """
        if isinstance(config, DataAPIConfig):
            if config_values:
                raise ConfigurationError(
                    "Pass either a DataAPIConfig or configuration values, not both",
                    context={"fields": sorted(config_values)},
                )
        else:
            config = DataAPIConfig.create(**{**dict(config or {}), **config_values})

        if not config.api_key:
            raise ConfigurationError("Invalid API key!", config_key="api_key")

        self._config = config
        self._base_params: Dict[str, Any] = dict(base_params or {})
        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> DataAPIConfig:
        """The (frozen) configuration shared by this client and its scopes."""
        return self._config

    @property
    def params(self) -> Dict[str, Any]:
        """A copy of the default request parameters."""
        return dict(self._base_params)

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self._config.base_url!r}, params={self._base_params!r})"

    # ------------------------------------------------------------------
    # Scoping
    # ------------------------------------------------------------------

    def _derive(self, api_cls: Type[_ApiT], **params: Any) -> _ApiT:
        return api_cls(self._config, {**self._base_params, **params}, self._http)

    def with_params(self: _ApiT, **params: Any) -> _ApiT:
        """
        Return a client of the same stage with extra default parameters.

        Later values override earlier ones for the same key.
        """
        return self._derive(type(self), **params)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the HTTP transport if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self: _ApiT) -> _ApiT:
        return self

    async def __aexit__(self, exc_type, exc_value, traceback) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Action executor
    # ------------------------------------------------------------------

    async def action(
        self,
        name: str,
        params: Optional[Mapping[str, Any]] = None,
        request_options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Execute a Data API action.

        See https://docs.atlas.mongodb.com/api/data-api-resources/

        Args:
            name: Server action name (e.g. "find", "insertOne")
            params: Action parameters, layered over the scope parameters
            request_options: httpx request arguments layered over the defaults.
                             `headers` are merged into the default headers;
                             any other key (method, content, timeout, ...)
                             replaces the default argument.

        Returns:
            The parsed JSON response body, unchanged

        Raises:
            InvalidParamsError: If dataSource, database or collection is
                                missing after the merge (no request is sent)
            DataAPIRequestError: If the request fails or the server answers
                                 with a non-2xx status; the payload has the
                                 API key masked
        """
        merged = {**self._base_params, **(params or {})}

        missing = [key for key in REQUIRED_SCOPE_PARAMS if not merged.get(key)]
        if missing:
            raise InvalidParamsError(INVALID_PARAMS_MESSAGE, action=name, missing=missing)

        headers = {**DEFAULT_HEADERS, API_KEY_HEADER: self._config.api_key}
        request_kwargs: Dict[str, Any] = {
            "method": "POST",
            "url": resolve_action_url(self._config, name),
            "content": encode_payload(merged),
        }
        if request_options:
            overrides = dict(request_options)
            headers.update(overrides.pop("headers", None) or {})
            request_kwargs.update(overrides)
        request_kwargs["headers"] = headers
        send_kwargs = {
            key: request_kwargs.pop(key) for key in _SEND_OPTIONS if key in request_kwargs
        }

        scope = {"database": merged["database"], "collection": merged["collection"]}
        logger.debug(
            f"Sending Data API action '{name}' to "
            f"{merged['dataSource']}/{merged['database']}/{merged['collection']}",
            extra={"action": name, **scope},
        )

        start_time = time.time()
        request: Union[httpx.Request, Mapping[str, Any]] = request_kwargs
        response: Optional[httpx.Response] = None
        failure: Optional[DataAPIRequestError] = None
        try:
            request = self._http.build_request(**request_kwargs)
            response = await self._http.send(request, **send_kwargs)
            response.raise_for_status()
            result = response.json() if response.content else None
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            duration_ms = (time.time() - start_time) * 1000
            record_operation(f"{METRICS_PREFIX}.{name}", duration_ms, False, **scope)
            error = serialize_http_error(e, request, self._config.api_key, response=response)
            log_operation(
                logger,
                f"{METRICS_PREFIX}.{name}",
                level=logging.WARNING,
                success=False,
                duration_ms=duration_ms,
                action=name,
                status_code=error["status"],
                error_name=error["name"],
                **scope,
            )
            # Raised outside the except block: the httpx exception holds the
            # unmasked request headers and must not travel as __context__.
            failure = DataAPIRequestError(
                f"Data API action '{name}' failed: {error['message']}",
                error=error,
                action=name,
                status_code=error["status"],
            )

        if failure is not None:
            raise failure

        duration_ms = (time.time() - start_time) * 1000
        record_operation(f"{METRICS_PREFIX}.{name}", duration_ms, True, **scope)
        log_operation(
            logger,
            f"{METRICS_PREFIX}.{name}",
            level=logging.DEBUG,
            duration_ms=duration_ms,
            action=name,
            status_code=response.status_code,
            **scope,
        )
        return result

    # ------------------------------------------------------------------
    # Document actions
    # ------------------------------------------------------------------

    async def find_one(
        self,
        filter: Optional[Filter] = None,
        projection: Optional[Projection] = None,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> FindOneResult:
        """
        Find a single document.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#find-a-single-document
        """
        return await self.action(
            ACTION_FIND_ONE,
            _action_params(params, filter=filter, projection=projection),
            request_options,
        )

    async def find(
        self,
        filter: Optional[Filter] = None,
        projection: Optional[Projection] = None,
        sort: Optional[Sort] = None,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> FindResult:
        """
        Find multiple documents.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#find-multiple-documents
        """
        return await self.action(
            ACTION_FIND,
            _action_params(
                params, filter=filter, projection=projection, sort=sort, limit=limit, skip=skip
            ),
            request_options,
        )

    async def insert_one(
        self,
        document: Union[DocT, Document],
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> InsertOneResult:
        """
        Insert a single document.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#insert-a-single-document
        """
        return await self.action(
            ACTION_INSERT_ONE, _action_params(params, document=document), request_options
        )

    async def insert_many(
        self,
        documents: Sequence[Union[DocT, Document]],
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> InsertManyResult:
        """
        Insert multiple documents.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#insert-multiple-documents
        """
        return await self.action(
            ACTION_INSERT_MANY, _action_params(params, documents=list(documents)), request_options
        )

    async def update_one(
        self,
        filter: Filter,
        update: Update,
        upsert: Optional[bool] = None,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> UpdateResult:
        """
        Update a single document.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#update-a-single-document
        """
        return await self.action(
            ACTION_UPDATE_ONE,
            _action_params(params, filter=filter, update=update, upsert=upsert),
            request_options,
        )

    async def update_many(
        self,
        filter: Filter,
        update: Update,
        upsert: Optional[bool] = None,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> UpdateResult:
        """
        Update multiple documents.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#update-multiple-documents
        """
        return await self.action(
            ACTION_UPDATE_MANY,
            _action_params(params, filter=filter, update=update, upsert=upsert),
            request_options,
        )

    async def replace_one(
        self,
        filter: Filter,
        replacement: Union[DocT, Document],
        upsert: Optional[bool] = None,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> UpdateResult:
        """
        Replace a single document.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#replace-a-single-document
        """
        return await self.action(
            ACTION_REPLACE_ONE,
            _action_params(params, filter=filter, replacement=replacement, upsert=upsert),
            request_options,
        )

    async def delete_one(
        self,
        filter: Filter,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> DeleteResult:
        """
        Delete a single document.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#delete-a-single-document
        """
        return await self.action(
            ACTION_DELETE_ONE, _action_params(params, filter=filter), request_options
        )

    async def delete_many(
        self,
        filter: Filter,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> DeleteResult:
        """
        Delete multiple documents.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#delete-multiple-documents
        """
        return await self.action(
            ACTION_DELETE_MANY, _action_params(params, filter=filter), request_options
        )

    async def aggregate(
        self,
        pipeline: Pipeline,
        *,
        request_options: Optional[Mapping[str, Any]] = None,
        **params: Any,
    ) -> AggregateResult:
        """
        Run an aggregation pipeline.

        See https://docs.atlas.mongodb.com/api/data-api-resources/#run-an-aggregation-pipeline
        """
        return await self.action(
            ACTION_AGGREGATE, _action_params(params, pipeline=list(pipeline)), request_options
        )


# ##########################################################################
# SCOPING STAGES
# ##########################################################################


class _SelectsCluster(_DataAPIBase[DocT]):
    __slots__ = ()

    def cluster(self, name: str) -> "ClusterScopedDataAPI[DocT]":
        """Select a cluster (the `dataSource` parameter)."""
        return self._derive(ClusterScopedDataAPI, dataSource=name)


class _SelectsDatabase(_DataAPIBase[DocT]):
    __slots__ = ()

    def database(self, name: str) -> "DatabaseScopedDataAPI[DocT]":
        """Select a database."""
        return self._derive(DatabaseScopedDataAPI, database=name)


class _SelectsCollection(_DataAPIBase[DocT]):
    __slots__ = ()

    def collection(
        self, name: str, document_type: Optional[Type[_D]] = None
    ) -> "CollectionScopedDataAPI[_D]":
        """
        Select a collection.

        Args:
            name: Collection name
            document_type: Optional class of the stored documents, used only
                           to type the returned client
        """
        return self._derive(CollectionScopedDataAPI, collection=name)


class MongoDBDataAPI(_SelectsCluster[DocT], _SelectsDatabase[DocT], _SelectsCollection[DocT]):
    """
    Root Data API client.

    Usage:
        async with MongoDBDataAPI(api_key="...", app_id="data-abc") as api:
            users = api.cluster("Cluster0").database("app").collection("users")
            result = await users.find_one({"email": "ada@example.com"})
            print(result["document"])
    """

    __slots__ = ()


class ClusterScopedDataAPI(_SelectsDatabase[DocT]):
    """Client with a cluster selected; a database can be selected next."""

    __slots__ = ()


class DatabaseScopedDataAPI(_SelectsCollection[DocT]):
    """Client with a database selected; a collection can be selected next."""

    __slots__ = ()


class CollectionScopedDataAPI(_DataAPIBase[DocT]):
    """Client bound to a collection; no further scoping is offered."""

    __slots__ = ()
