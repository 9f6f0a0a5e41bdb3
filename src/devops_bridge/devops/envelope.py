"""Normalization of DevOps Center response envelopes.

DevOps Center Connect endpoints answer either with the payload wrapped in a
``root`` object or with the payload at the top level. Both shapes go through
``unwrap`` before any field is read.
"""

from typing import Any


def unwrap(body: Any) -> Any:
    """Return the ``root`` payload if present, else the body as-is."""
    if isinstance(body, dict) and body.get("root") is not None:
        return body["root"]
    return body


def extract_tasks(payload: Any) -> Any:
    """Return the task list from an unwrapped getFromJIRA payload.

    The list is either under ``tasks`` or is the payload itself.
    """
    if isinstance(payload, dict) and payload.get("tasks") is not None:
        return payload["tasks"]
    return payload
