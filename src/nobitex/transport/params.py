"""
Request body encoding — query strings for GET, JSON bodies for everything else.

Output order follows model field declaration order (or mapping insertion
order), so the same input always encodes to the same bytes.
"""

import enum
import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel


def to_mapping(body: Any) -> dict[str, Any]:
    """Flatten a params model or mapping, dropping absent (None) values."""
    if body is None:
        return {}
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(body, Mapping):
        return {str(k): v for k, v in body.items() if v is not None}
    raise TypeError(f"unsupported request body type: {type(body).__name__}")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return _query_value(value.value)
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(v) for v in value)
    if isinstance(value, (dict, set)):
        raise TypeError(f"cannot encode {type(value).__name__} as a query parameter")
    return str(value)


def encode_query(body: Any) -> str:
    """`{"srcCurrency": "btc", "dstCurrency": "usdt"}` -> `srcCurrency=btc&dstCurrency=usdt`"""
    return urlencode([(k, _query_value(v)) for k, v in to_mapping(body).items()])


def encode_body(body: Any) -> bytes:
    if body is None:
        return b""
    return json.dumps(to_mapping(body), separators=(",", ":"), ensure_ascii=False).encode()
