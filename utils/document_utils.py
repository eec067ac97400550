"""
utils/document_utils.py

Purpose: MongoDB document helpers

- ObjectId parsing that tolerates bad input
- JSON-safe serialization of stored documents
"""

from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId

from utils.time_utils import to_iso

# Fields never sent to clients
PRIVATE_FIELDS = ("password",)


def to_object_id(value: Any) -> Optional[ObjectId]:
    """
    Converts a string id to ObjectId.

    Returns:
        ObjectId, or None if the value is not a valid id
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def _to_json_value(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, dict):
        return {k: _to_json_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_json_value(v) for v in value]
    return value


def serialize_document(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Makes a stored document safe for a JSON response.
    ObjectIds become strings, datetimes ISO strings, private fields are dropped.
    """
    if document is None:
        return None
    return {
        key: _to_json_value(value)
        for key, value in document.items()
        if key not in PRIVATE_FIELDS
    }
