"""
Canonical wire format for DAG objects.

Objects are stored as canonical JSON (sorted keys, no whitespace, ASCII only)
with bytes fields base64-encoded:

    {"Data":"<b64>","Links":[{"Hash":"<b64>","Name":"a.txt","Size":2}]}

Identical logical objects always serialize to identical bytes, which is what
makes the digest of the encoding usable as the store key.
"""
from __future__ import annotations

import base64
import binascii
import json
from typing import Any, Dict, List

from pydantic import ValidationError

from .errors import SerializationError
from .models import TAG_WIDTH, DagObject, Link, LinkTag

__all__ = ["encode_object", "decode_object", "object_tags"]


def encode_object(obj: DagObject) -> bytes:
    """
    Produce the canonical serialized form of an object.

    Args:
        obj: Object to encode

    Returns:
        Canonical JSON bytes

    Raises:
        SerializationError: If the object holds values the format cannot represent
    """
    try:
        payload = {
            "Data": _b64encode(obj.data),
            "Links": [_encode_link(link) for link in obj.links],
        }
        canonical = json.dumps(
            payload,
            sort_keys=True,
            separators=(',', ':'),
            ensure_ascii=True,
            allow_nan=False,
        )
    except SerializationError:
        raise
    except (TypeError, ValueError, AttributeError) as e:
        raise SerializationError(f"Failed to encode object: {e}") from e
    return canonical.encode('ascii')


def decode_object(raw: bytes) -> DagObject:
    """
    Parse stored bytes back into a DagObject.

    Raises:
        SerializationError: If raw is not a valid encoded object
    """
    try:
        payload = json.loads(raw)
        if not isinstance(payload, dict) or set(payload) != {"Data", "Links"}:
            raise ValueError("expected an object with exactly 'Data' and 'Links'")
        links = [
            Link(
                name=entry["Name"],
                hash=_b64decode(entry["Hash"]),
                size=entry["Size"],
            )
            for entry in payload["Links"]
        ]
        return DagObject(links=links, data=_b64decode(payload["Data"]))
    except (ValueError, KeyError, TypeError, binascii.Error, ValidationError) as e:
        raise SerializationError(f"Failed to decode object: {e}") from e


def object_tags(obj: DagObject) -> List[LinkTag]:
    """
    Split a composite object's data into its per-link type tags.

    Blobs have no tags. Raises SerializationError if the data does not hold
    exactly one known tag per link.
    """
    if obj.is_blob:
        return []
    if len(obj.data) != TAG_WIDTH * len(obj.links):
        raise SerializationError(
            f"Composite object has {len(obj.data)} tag bytes for {len(obj.links)} links"
        )
    tags = []
    for offset in range(0, len(obj.data), TAG_WIDTH):
        raw_tag = obj.data[offset:offset + TAG_WIDTH]
        try:
            tags.append(LinkTag(raw_tag))
        except ValueError as e:
            raise SerializationError(f"Unknown link tag {raw_tag!r}") from e
    return tags


def _encode_link(link: Link) -> Dict[str, Any]:
    if not isinstance(link.name, str):
        raise SerializationError(f"Link name must be str, got {type(link.name).__name__}")
    if isinstance(link.size, bool) or not isinstance(link.size, int) or link.size < 0:
        raise SerializationError(f"Link size must be a non-negative int, got {link.size!r}")
    return {
        "Hash": _b64encode(link.hash),
        "Name": link.name,
        "Size": link.size,
    }


def _b64encode(value: bytes) -> str:
    if not isinstance(value, (bytes, bytearray)):
        raise SerializationError(f"Expected bytes, got {type(value).__name__}")
    return base64.b64encode(value).decode('ascii')


def _b64decode(value: str) -> bytes:
    if not isinstance(value, str):
        raise TypeError(f"expected base64 string, got {type(value).__name__}")
    return base64.b64decode(value, validate=True)
