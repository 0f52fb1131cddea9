"""
Request body parsing helpers.
"""

import json
from typing import Any

from writeassist.core.exceptions import MalformedRequestError


def parse_json_body(body: bytes | str | dict[str, Any] | None) -> dict[str, Any]:
    """
    Decode a JSON request body into a dict.

    Accepts the raw bytes of a request, a JSON-encoded string, or an object
    that was already parsed upstream. A body that decodes to a string is
    decoded once more, so double-encoded payloads are accepted too.

    Raises:
        MalformedRequestError: "Missing JSON body" when there is nothing to
            parse, "Invalid JSON body" when it cannot be parsed into an object
    """
    if body is None:
        raise MalformedRequestError("Missing JSON body")

    if isinstance(body, dict):
        return body

    if isinstance(body, bytes):
        if not body.strip():
            raise MalformedRequestError("Missing JSON body")
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedRequestError("Invalid JSON body") from e

    if not isinstance(body, str):
        raise MalformedRequestError("Invalid JSON body")
    if not body.strip():
        raise MalformedRequestError("Missing JSON body")

    try:
        parsed = json.loads(body)
        if isinstance(parsed, str):
            parsed = json.loads(parsed)
    except json.JSONDecodeError as e:
        raise MalformedRequestError("Invalid JSON body", details={"error": str(e)}) from e

    if not isinstance(parsed, dict):
        raise MalformedRequestError("Invalid JSON body")
    return parsed
