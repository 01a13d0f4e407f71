"""
MongoDB utility functions for MDB Data API.

This module provides JSON serialization helpers for request payloads.
"""

from typing import Any, Mapping

from bson import json_util
from bson.json_util import JSONOptions, JSONMode

# Relaxed Extended JSON keeps plain JSON types unchanged and encodes
# ObjectId, datetime, Decimal128, etc. in a form the Data API accepts.
RELAXED_JSON_OPTIONS = JSONOptions(json_mode=JSONMode.RELAXED, tz_aware=True)


def encode_payload(params: Mapping[str, Any]) -> str:
    """
    Encode request parameters as a JSON body.

    BSON-specific values anywhere in the mapping are written as relaxed
    Extended JSON:
    - ObjectId -> {"$oid": "..."}
    - datetime -> {"$date": "2024-01-01T12:00:00Z"}
    - plain str / int / float / bool / None / dict / list are unchanged

    Args:
        params: Merged action parameters

    Returns:
        JSON string

    Example:
        ```python
        from bson import ObjectId
        from mdb_data_api.utils import encode_payload

        encode_payload({"filter": {"_id": ObjectId("507f1f77bcf86cd799439011")}})
        # '{"filter": {"_id": {"$oid": "507f1f77bcf86cd799439011"}}}'
        ```
    """
    return json_util.dumps(dict(params), json_options=RELAXED_JSON_OPTIONS)

