"""
serializer.py
Provides utility functions for serializing and deserializing game events to/from JSON.
Used by recorder.py to save event streams for analysis or replay.
"""

import dataclasses
import json
from enum import Enum
from typing import Any, Dict


def _default(o: Any):
    if isinstance(o, Enum):
        return o.name
    if dataclasses.is_dataclass(o):
        return {f.name: getattr(o, f.name) for f in dataclasses.fields(o)}
    return getattr(o, '__dict__', str(o))


def event_to_dict(event) -> Dict[str, Any]:
    """
    Flatten an event into a dict tagged with its type name.
    Args:
        event (GameEvent): Event to convert.
    Returns:
        dict: {'type': <class name>, **fields}
    """
    data = {"type": type(event).__name__}
    data.update({f.name: getattr(event, f.name) for f in dataclasses.fields(event)})
    return data


def dumps(obj: Any) -> str:
    """
    Serialize a Python object (including dataclasses and enums) to a JSON string.
    Args:
        obj: Object to serialize.
    Returns:
        str: JSON string.
    """
    return json.dumps(obj, default=_default)


def loads(s: str):
    """
    Deserialize a JSON string to a Python object (dict/list).
    Args:
        s (str): JSON string.
    Returns:
        object: Deserialized Python object.
    """
    return json.loads(s)
