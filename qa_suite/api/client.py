"""
ServeRest API client for contract tests.

Wraps an httpx.AsyncClient with the ServeRest endpoints and its
authorization convention.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from qa_suite.core.config import ApiConfig, get_config


logger = logging.getLogger(__name__)


class Endpoints:
    """ServeRest resource paths."""

    USUARIOS = "/usuarios"
    LOGIN = "/login"
    PRODUTOS = "/produtos"
    CARRINHOS = "/carrinhos"
    CARRINHOS_CANCELAR_COMPRA = "/carrinhos/cancelar-compra"
    CARRINHOS_CONCLUIR_COMPRA = "/carrinhos/concluir-compra"


class ServiceUnavailableError(Exception):
    """ServeRest did not answer, or answered with a server error."""


class ServeRestClient:
    """Thin request layer over httpx for the ServeRest API."""

    def __init__(self, client: httpx.AsyncClient, config: Optional[ApiConfig] = None):
        """Initialize with HTTP client."""
        self.client = client
        self.config = config or get_config().api

    @classmethod
    def create_http_client(
        cls,
        config: Optional[ApiConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> httpx.AsyncClient:
        """Build the httpx client used by the fixtures."""
        config = config or get_config().api
        return httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.default_timeout / 1000),
            transport=transport,
        )

    @staticmethod
    def check_available(
        config: Optional[ApiConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout_s: float = 5.0,
    ) -> None:
        """
        Make sure ServeRest answers before the suite starts.

        Raises:
            ServiceUnavailableError: On connection errors or a 5xx status
        """
        config = config or get_config().api
        try:
            with httpx.Client(timeout=timeout_s, transport=transport) as client:
                response = client.get(f"{config.base_url}{Endpoints.USUARIOS}")
        except httpx.HTTPError as e:
            raise ServiceUnavailableError(
                f"ServeRest not reachable at {config.base_url}: {e}"
            ) from e

        if response.status_code >= 500:
            raise ServiceUnavailableError(
                f"ServeRest at {config.base_url} returned {response.status_code}"
            )
        logger.info(f"ServeRest reachable at {config.base_url}")

    def _get_headers(
        self,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Dict[str, str]:
        """Get request headers; ServeRest takes the raw token, no Bearer prefix."""
        merged = {"Content-Type": "application/json", **(headers or {})}
        if token:
            merged["Authorization"] = token
        return merged

    async def request(
        self,
        method: str,
        endpoint: str,
        json: Any = None,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        response = await self.client.request(
            method,
            endpoint,
            json=json,
            headers=self._get_headers(token, headers),
            timeout=self.config.request_timeout / 1000,
        )
        logger.debug(f"{method} {endpoint} -> {response.status_code}")
        return response

    async def get(
        self,
        endpoint: str,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self.request("GET", endpoint, token=token, headers=headers)

    async def post(
        self,
        endpoint: str,
        json: Any = None,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self.request("POST", endpoint, json=json, token=token, headers=headers)

    async def put(
        self,
        endpoint: str,
        json: Any = None,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self.request("PUT", endpoint, json=json, token=token, headers=headers)

    async def delete(
        self,
        endpoint: str,
        token: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        return await self.request("DELETE", endpoint, token=token, headers=headers)

    @staticmethod
    def get_response_body(response: httpx.Response) -> Any:
        """Decode the JSON body, or an empty dict when it is not JSON."""
        try:
            return response.json()
        except ValueError:
            return {}

    @staticmethod
    def validate_status_code(response: httpx.Response, expected_status: int) -> None:
        """
        Assert the response status.

        Raises:
            AssertionError: With expected/actual status and the pretty-printed body
        """
        if response.status_code != expected_status:
            body = ServeRestClient.get_response_body(response)
            raise AssertionError(
                f"Invalid status. Expected: {expected_status}, got: {response.status_code}\n"
                f"Body: {json.dumps(body, indent=2, ensure_ascii=False)}"
            )
