"""Opaque cursor encoding for keyset pagination."""

import base64
import binascii
import hashlib
import json
from datetime import datetime
from typing import Optional, Dict, Any, Mapping
from urllib.parse import urlencode
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors.problem_details import InvalidCursorError


class CursorData(BaseModel):
    """Position of the last item of a page within one listing."""

    sort_key: datetime = Field(alias="k", description="Order key value of the last item")
    id: UUID = Field(alias="i", description="Tie-break id of the last item")
    scope: str = Field(alias="s", description="Fingerprint of the listing and filter")

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)


def filter_scope(listing: str, filters: Mapping[str, Any]) -> str:
    """Fingerprint a listing name plus its filter values.

    Two requests share a scope only if they name the same listing with the
    same filter values, so a cursor can be checked against the request that
    presents it.
    """
    canonical = json.dumps(
        {"listing": listing, "filters": dict(filters)},
        sort_keys=True,
        separators=(",", ":"),
        default=str
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def encode_cursor(sort_key: datetime, item_id: UUID, scope: str) -> str:
    """Encode pagination cursor.

    The result is URL-safe base64 without padding, so it can be passed back
    in a query string verbatim.

    Args:
        sort_key: Order key value of the last item returned
        item_id: Id of the last item returned
        scope: Fingerprint from :func:`filter_scope`

    Returns:
        Opaque cursor string
    """
    cursor_data = CursorData(sort_key=sort_key, id=item_id, scope=scope)
    cursor_json = cursor_data.model_dump_json(by_alias=True)
    encoded = base64.urlsafe_b64encode(cursor_json.encode("utf-8")).decode("ascii")
    return encoded.rstrip("=")


def decode_cursor(cursor: str) -> CursorData:
    """Decode pagination cursor.

    Args:
        cursor: Cursor string produced by :func:`encode_cursor`

    Returns:
        Decoded cursor data

    Raises:
        InvalidCursorError: If cursor is empty or malformed
    """
    if not cursor:
        raise InvalidCursorError("Empty cursor provided")

    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        cursor_bytes = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
        cursor_dict = json.loads(cursor_bytes.decode("utf-8"))
        return CursorData.model_validate(cursor_dict)
    except (ValueError, TypeError, binascii.Error, ValidationError):
        raise InvalidCursorError("Invalid cursor format")


def create_link_header(
    base_url: str,
    params: Dict[str, Any],
    next_cursor: Optional[str] = None
) -> Optional[str]:
    """Create Link header for pagination as per RFC 8288.

    Args:
        base_url: Base URL for the resource
        params: Current query parameters, ``None`` values are dropped
        next_cursor: Cursor for next page

    Returns:
        Link header value or None if there is no next page
    """
    if not next_cursor:
        return None

    next_params = {k: v for k, v in params.items() if v is not None}
    next_params["cursor"] = next_cursor
    return f'<{base_url}?{urlencode(next_params)}>; rel="next"'
