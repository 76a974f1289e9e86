"""
ServeRest API test helpers.

Client, response models, error lookups, data generators and assertions for
the API contract suite.
"""

from qa_suite.api.client import Endpoints, ServeRestClient, ServiceUnavailableError
from qa_suite.api.errors import (
    extract_error_message,
    expect_error_contains,
    expect_has_property,
    lookup_field,
)
from qa_suite.api.models import parse_body

__all__ = [
    "Endpoints",
    "ServeRestClient",
    "ServiceUnavailableError",
    "extract_error_message",
    "expect_error_contains",
    "expect_has_property",
    "lookup_field",
    "parse_body",
]
