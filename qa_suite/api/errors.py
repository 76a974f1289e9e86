"""
Error-message extraction for ServeRest responses.

ServeRest reports validation problems in several places: a top-level key per
field, a nested ``item`` object, or array-path keys such as
``produtos[0].quantidade``. Lookups walk those places in a fixed order.
"""

import json
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple, Union


class FieldSource(str, Enum):
    """Where a field value was found, in lookup precedence order."""

    DIRECT = "DIRECT"
    ITEM = "ITEM"
    ALTERNATE = "ALTERNATE"


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def _alternate_keys(body: dict, field: str) -> Iterable[str]:
    suffix = f".{field}"
    return (key for key in body if key.endswith(suffix))


def lookup_field(body: Any, field: str) -> Optional[Tuple[FieldSource, Any]]:
    """
    Find ``field`` in a response body.

    Order: direct key, then ``item.<field>``, then the first array-path key
    ending in ``.<field>``. Empty values are skipped.

    Returns:
        (source, value) or None when the field is not present anywhere
    """
    if not isinstance(body, dict):
        return None

    direct = body.get(field)
    if direct:
        return FieldSource.DIRECT, direct

    item = body.get("item")
    if isinstance(item, dict) and item.get(field):
        return FieldSource.ITEM, item[field]

    for key in _alternate_keys(body, field):
        if body[key]:
            return FieldSource.ALTERNATE, body[key]

    return None


def extract_error_message(body: Any, field: Optional[str] = None) -> str:
    """
    Extract an error message from a response body.

    Args:
        body: Decoded JSON body (or raw text)
        field: Optional field whose message is wanted

    Returns:
        The field message when found, else ``message`` (or ``error`` when no
        field was asked for), else the JSON dump of the body
    """
    if isinstance(body, str):
        return body

    data = body if isinstance(body, dict) else {}

    if not field:
        if data.get("message") is not None:
            return _stringify(data["message"])
        if data.get("error") is not None:
            return _stringify(data["error"])
        return _stringify(body)

    found = lookup_field(body, field)
    if found is not None:
        return _stringify(found[1])

    if data.get("message") is not None:
        return _stringify(data["message"])
    return _stringify(body)


def expect_error_contains(
    body: Any,
    keywords: Union[str, List[str]],
    field: Optional[str] = None,
) -> None:
    """
    Assert the error message contains at least one keyword (case-insensitive).

    Raises:
        AssertionError: If none of the keywords appear
    """
    message = extract_error_message(body, field)
    keyword_list = [keywords] if isinstance(keywords, str) else list(keywords)

    lower_message = message.lower()
    if not any(keyword.lower() in lower_message for keyword in keyword_list):
        raise AssertionError(
            f'Error message "{message}" does not contain any of: {", ".join(keyword_list)}'
        )


def expect_has_property(body: Any, prop: str) -> None:
    """
    Assert the body has ``prop`` directly or inside ``item``.

    Raises:
        AssertionError: If the body is empty or lacks the property
    """
    if body is None:
        raise AssertionError("Body is null or undefined")

    if isinstance(body, dict):
        if prop in body:
            return
        item = body.get("item")
        if isinstance(item, dict) and prop in item:
            return

    raise AssertionError(f"Body does not have property: {prop}")
