"""
Fixtures for the ServeRest contract tests.

This module provides:
- A reachability check that skips the suite when ServeRest is down or failing
- The API client
- Generated users and their tokens
- Factories for users and products, with cleanup
"""

import logging
from dataclasses import dataclass
from typing import Any, AsyncGenerator, Awaitable, Callable, List, Optional

import httpx
import pytest

from qa_suite.api.client import Endpoints, ServeRestClient, ServiceUnavailableError
from qa_suite.api.data import (
    ProductData,
    UserData,
    generate_admin_user,
    generate_valid_product,
    generate_valid_user,
)
from qa_suite.core.config import SuiteConfig


logger = logging.getLogger(__name__)


@dataclass
class Created:
    """Result of a factory call: raw response, decoded body and the payload sent."""

    response: httpx.Response
    body: Any
    data: Any


# ============================================================================
# Service Fixtures
# ============================================================================

@pytest.fixture(scope="session", autouse=True)
def serverest_available(suite_config: SuiteConfig) -> None:
    """Skip the API suite when ServeRest is down or failing."""
    try:
        ServeRestClient.check_available(suite_config.api)
    except ServiceUnavailableError as e:
        pytest.skip(str(e))


@pytest.fixture
async def api_client(suite_config: SuiteConfig) -> AsyncGenerator[ServeRestClient, None]:
    """Create ServeRest client."""
    async with ServeRestClient.create_http_client(suite_config.api) as client:
        yield ServeRestClient(client, suite_config.api)


# ============================================================================
# User Fixtures
# ============================================================================

@pytest.fixture
def admin_user() -> UserData:
    return generate_admin_user()


@pytest.fixture
def test_user() -> UserData:
    return generate_valid_user()


async def _register_and_login(api_client: ServeRestClient, user: UserData) -> str:
    """
    Create the user (an existing one is fine) and log in.

    Returns:
        The authorization token
    """
    create_response = await api_client.post(Endpoints.USUARIOS, user.payload)
    if create_response.status_code not in (201, 400):
        raise AssertionError(
            f"Failed to create user: {create_response.status_code} - {create_response.text}"
        )

    login_response = await api_client.post(Endpoints.LOGIN, user.login_data)
    if login_response.status_code != 200:
        raise AssertionError(
            f"Failed to login: {login_response.status_code} - {login_response.text}"
        )

    token = ServeRestClient.get_response_body(login_response).get("authorization")
    if not token:
        raise AssertionError(f"Token missing from login response: {login_response.text}")

    return token


@pytest.fixture
async def admin_token(api_client: ServeRestClient, admin_user: UserData) -> str:
    token = await _register_and_login(api_client, admin_user)
    logger.info("Admin token generated")
    return token


@pytest.fixture
async def test_user_token(api_client: ServeRestClient, test_user: UserData) -> str:
    token = await _register_and_login(api_client, test_user)
    logger.info("Test user token generated")
    return token


# ============================================================================
# Factories
# ============================================================================

@pytest.fixture
async def create_user(
    api_client: ServeRestClient, suite_config: SuiteConfig
) -> AsyncGenerator[Callable[..., Awaitable[Created]], None]:
    """
    Factory creating users; created users are deleted after the test.
    """
    created_ids: List[str] = []

    async def _create(user: Optional[UserData] = None) -> Created:
        user = user or generate_valid_user()
        response = await api_client.post(Endpoints.USUARIOS, user.payload)
        body = ServeRestClient.get_response_body(response)
        if response.status_code == 201:
            created_ids.append(body["_id"])
        return Created(response=response, body=body, data=user)

    yield _create

    if not (suite_config.api.cleanup_enabled and suite_config.api.delete_users):
        return

    for user_id in created_ids:
        try:
            await api_client.delete(f"{Endpoints.USUARIOS}/{user_id}")
        except httpx.HTTPError as e:
            logger.warning(f"Failed to cleanup user {user_id}: {e}")


@pytest.fixture
async def create_product(
    api_client: ServeRestClient, suite_config: SuiteConfig
) -> AsyncGenerator[Callable[..., Awaitable[Created]], None]:
    """
    Factory creating products with the given token.

    Products still referenced by a cart cannot be deleted; those are left
    for ServeRest's own reset.
    """
    created: List[tuple] = []

    async def _create(token: str, product: Optional[ProductData] = None) -> Created:
        product = product or generate_valid_product()
        response = await api_client.post(Endpoints.PRODUTOS, product.payload, token=token)
        body = ServeRestClient.get_response_body(response)
        if response.status_code == 201:
            created.append((body["_id"], token))
        return Created(response=response, body=body, data=product)

    yield _create

    if not (suite_config.api.cleanup_enabled and suite_config.api.delete_products):
        return

    for product_id, token in created:
        try:
            await api_client.delete(f"{Endpoints.PRODUTOS}/{product_id}", token=token)
        except httpx.HTTPError as e:
            logger.warning(f"Failed to cleanup product {product_id}: {e}")
