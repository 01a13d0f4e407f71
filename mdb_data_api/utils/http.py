"""
HTTP error helpers for MDB Data API.

Turns failed requests into plain, JSON-serializable dictionaries and masks
the API key inside them before they leave the client.
"""

from typing import Any, Dict, Mapping, Optional, Union

import httpx

from ..constants import API_KEY_HEADER, API_KEY_MASK


def redact_headers(headers: Mapping[str, str], api_key: Optional[str] = None) -> Dict[str, str]:
    """
    Return a copy of `headers` with the API key masked.

    The `api-key` header is matched case-insensitively. When `api_key` is
    given, any other header carrying the same value is masked as well.
    """
    redacted: Dict[str, str] = {}
    for name, value in headers.items():
        if name.lower() == API_KEY_HEADER or (api_key and value == api_key):
            redacted[name] = API_KEY_MASK
        else:
            redacted[name] = value
    return redacted


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _request_config(
    request: Union[httpx.Request, Mapping[str, Any]], api_key: Optional[str]
) -> Dict[str, Any]:
    if isinstance(request, httpx.Request):
        try:
            data: Any = request.content.decode("utf-8")
        except (httpx.RequestNotRead, UnicodeDecodeError):
            data = None
        return {
            "method": request.method,
            "url": str(request.url),
            "headers": redact_headers(request.headers, api_key),
            "data": data,
        }

    # Request arguments that never became an httpx.Request (e.g. invalid URL)
    content = request.get("content")
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    return {
        "method": str(request.get("method", "")).upper(),
        "url": str(request.get("url", "")),
        "headers": redact_headers(request.get("headers") or {}, api_key),
        "data": content if isinstance(content, str) else None,
    }


def serialize_http_error(
    error: Exception,
    request: Union[httpx.Request, Mapping[str, Any]],
    api_key: Optional[str] = None,
    response: Optional[httpx.Response] = None,
) -> Dict[str, Any]:
    """
    Build a JSON-serializable description of a failed request.

    The request is passed explicitly because some transport errors are
    raised before a request is attached to them. When building the request
    itself failed, the raw request arguments are described instead. The
    returned dictionary never contains the API key.

    Args:
        error: The exception raised while sending or decoding
        request: The request that was sent, or its arguments
        api_key: Key to scrub from header values and the message
        response: Response received, if any (taken from the error for
                  httpx.HTTPStatusError)

    Returns:
        Dictionary with `message`, `name`, `code`, `status`, `config`
        and, when the server answered, `response`
    """
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response

    payload: Dict[str, Any] = {
        "message": str(error),
        "name": type(error).__name__,
        "code": None,
        "status": None,
        "config": _request_config(request, api_key),
    }

    if response is not None:
        payload["status"] = response.status_code
        payload["code"] = response.reason_phrase or None
        payload["response"] = {
            "status": response.status_code,
            "headers": redact_headers(response.headers, api_key),
            "data": _response_body(response),
        }
    elif isinstance(error, httpx.TimeoutException):
        payload["code"] = "ETIMEDOUT"
    elif isinstance(error, httpx.RequestError):
        payload["code"] = "ERR_NETWORK"
    elif isinstance(error, httpx.InvalidURL):
        payload["code"] = "ERR_INVALID_URL"

    if api_key and api_key in payload["message"]:
        payload["message"] = payload["message"].replace(api_key, API_KEY_MASK)

    return payload
