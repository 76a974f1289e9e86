"""
Custom assertions for API contract tests.

Provides reusable assertion functions for common validation patterns.
"""

from typing import Any, Dict, Iterable, Optional, Union

import httpx

from qa_suite.api.client import ServeRestClient
from qa_suite.api.errors import expect_error_contains


def assert_success_response(
    response: httpx.Response,
    expected_status: int = 200,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Assert that a response is successful.

    Args:
        response: HTTP response
        expected_status: Expected status code (default 200)
        message: Optional custom error message

    Returns:
        Response JSON data

    Raises:
        AssertionError: If response is not successful
    """
    error_msg = message or f"Expected {expected_status}, got {response.status_code}"
    assert response.status_code == expected_status, f"{error_msg}: {response.text}"
    return response.json()


def assert_error_response(
    response: httpx.Response,
    expected_status: Union[int, Iterable[int]],
    expected_error: Optional[Union[str, list]] = None,
    field: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Assert that a response is an error with expected status.

    Args:
        response: HTTP response
        expected_status: Expected error status code, or the accepted codes
        expected_error: Optional keyword(s) the error message must contain
        field: Optional field to read the error message from

    Returns:
        Response JSON data (empty dict if not JSON)

    Raises:
        AssertionError: If response status or message doesn't match
    """
    accepted = (expected_status,) if isinstance(expected_status, int) else tuple(expected_status)
    assert response.status_code in accepted, (
        f"Expected {' or '.join(map(str, accepted))}, "
        f"got {response.status_code}: {response.text}"
    )

    body = ServeRestClient.get_response_body(response)
    if expected_error:
        expect_error_contains(body, expected_error, field)
    return body


def assert_field_error(
    response: httpx.Response,
    field: str,
    expected_message: str,
) -> Dict[str, Any]:
    """
    Assert a 400 validation error with an exact message for ``field``.

    Raises:
        AssertionError: If status, field or message doesn't match
    """
    body = assert_error_response(response, 400)
    assert field in body, f"Response missing '{field}' field: {body}"
    assert body[field] == expected_message, (
        f"{field} message mismatch: expected '{expected_message}', got '{body[field]}'"
    )
    return body


def assert_message(
    body: Dict[str, Any],
    expected_message: Optional[str] = None,
) -> str:
    """
    Assert that body carries a string ``message`` (optionally an exact one).

    Returns:
        The message
    """
    assert "message" in body, f"Response missing 'message' field: {body}"
    assert isinstance(body["message"], str), "message must be a string"
    if expected_message is not None:
        assert body["message"] == expected_message, (
            f"Message mismatch: expected '{expected_message}', got '{body['message']}'"
        )
    return body["message"]


def assert_token_valid(data: Dict[str, Any]) -> str:
    """
    Assert that login data contains a usable token.

    Returns:
        The authorization token

    Raises:
        AssertionError: If the token is missing or empty
    """
    assert "authorization" in data, "Response missing authorization"
    token = data["authorization"]
    assert isinstance(token, str), "authorization must be a string"
    assert len(token) > 0, "authorization is empty"
    return token


def assert_unauthorized(response: httpx.Response) -> Dict[str, Any]:
    """
    Assert that a response is 401 Unauthorized with a message.

    Raises:
        AssertionError: If response is not 401
    """
    assert response.status_code == 401, (
        f"Expected 401 Unauthorized, got {response.status_code}: {response.text}"
    )
    body = ServeRestClient.get_response_body(response)
    assert_message(body)
    return body
