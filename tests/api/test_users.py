"""
Contract tests for /usuarios.

Test Cases Covered:
- 1.1: Create user
- 1.2: Created body carries an id
- 1.3: Stored user matches the payload
- 1.4: Invalid email rejected
- 1.5: Invalid administrador flag rejected
- 1.6: Missing nome rejected
- 1.7: Duplicate email rejected
- 1.8: List users
- 1.9: Delete user
- 1.10: Delete unknown user
"""

import pytest

from qa_suite.api.assertions import assert_field_error, assert_message, assert_success_response
from qa_suite.api.client import Endpoints, ServeRestClient
from qa_suite.api.data import (
    generate_unique_email,
    generate_user_with_invalid_admin,
    generate_user_with_invalid_email,
)
from qa_suite.api.errors import expect_error_contains, expect_has_property
from qa_suite.api.models import EntityBody, ListBody, parse_body


@pytest.mark.api
@pytest.mark.priority_p0
class TestCreateUser:
    """POST /usuarios"""

    @pytest.mark.asyncio
    async def test_create_user(self, api_client: ServeRestClient, test_user):
        """
        Test 1.1: Create user.

        Flow:
        1. POST a generated user
        2. Verify 201 and the success message
        """
        response = await api_client.post(Endpoints.USUARIOS, test_user.payload)

        body = assert_success_response(response, 201)
        assert_message(body, "Cadastro realizado com sucesso")

        # Cleanup
        await api_client.delete(f"{Endpoints.USUARIOS}/{body['_id']}")

    @pytest.mark.asyncio
    async def test_created_body_has_id(self, create_user):
        """Test 1.2: Created body carries an id."""
        created = await create_user()

        assert created.response.status_code == 201
        expect_has_property(created.body, "_id")
        assert created.body["_id"]

    @pytest.mark.asyncio
    async def test_stored_user_matches_payload(self, api_client: ServeRestClient, create_user):
        """
        Test 1.3: Stored user matches the payload.

        Flow:
        1. Create a user
        2. GET /usuarios/{id}
        3. Verify nome and email match what was sent
        """
        created = await create_user()
        assert created.response.status_code == 201

        response = await api_client.get(f"{Endpoints.USUARIOS}/{created.body['_id']}")
        ServeRestClient.validate_status_code(response, 200)

        stored = parse_body(response.json())
        assert isinstance(stored, EntityBody)
        assert stored.data["nome"] == created.data.nome
        assert stored.data["email"] == created.data.email

    @pytest.mark.asyncio
    async def test_invalid_email_rejected(self, api_client: ServeRestClient):
        """Test 1.4: Invalid email rejected."""
        user = generate_user_with_invalid_email()

        response = await api_client.post(Endpoints.USUARIOS, user.payload)

        assert_field_error(response, "email", "email deve ser um email válido")

    @pytest.mark.asyncio
    async def test_invalid_admin_flag_rejected(self, api_client: ServeRestClient):
        """Test 1.5: Invalid administrador flag rejected."""
        user = generate_user_with_invalid_admin()

        response = await api_client.post(Endpoints.USUARIOS, user.payload)

        assert_field_error(response, "administrador", "administrador deve ser 'true' ou 'false'")

    @pytest.mark.asyncio
    async def test_missing_nome_rejected(self, api_client: ServeRestClient):
        """Test 1.6: Missing nome rejected."""
        payload = {
            "email": generate_unique_email(),
            "password": "senha123",
            "administrador": "false",
        }

        response = await api_client.post(Endpoints.USUARIOS, payload)

        assert_field_error(response, "nome", "nome é obrigatório")

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, create_user):
        """
        Test 1.7: Duplicate email rejected.

        Flow:
        1. Create a user
        2. Create it again with the same payload
        3. Verify 400 and a message mentioning the email
        """
        first = await create_user()
        assert first.response.status_code == 201

        second = await create_user(first.data)

        assert second.response.status_code == 400
        expect_has_property(second.body, "message")
        expect_error_contains(second.body, "email")


@pytest.mark.api
@pytest.mark.priority_p1
class TestListAndDeleteUsers:
    """GET and DELETE /usuarios"""

    @pytest.mark.asyncio
    async def test_list_users(self, api_client: ServeRestClient, test_user_token: str):
        """Test 1.8: List users."""
        response = await api_client.get(Endpoints.USUARIOS, token=test_user_token)

        body = parse_body(assert_success_response(response))
        assert isinstance(body, ListBody)
        assert body.key == "usuarios"
        assert body.quantidade == len(body.users)

    @pytest.mark.asyncio
    async def test_delete_user(self, api_client: ServeRestClient, create_user):
        """Test 1.9: Delete user."""
        created = await create_user()

        response = await api_client.delete(f"{Endpoints.USUARIOS}/{created.body['_id']}")

        assert_message(assert_success_response(response), "Registro excluído com sucesso")

    @pytest.mark.asyncio
    async def test_delete_unknown_user(self, api_client: ServeRestClient):
        """
        Test 1.10: Delete unknown user.

        ServeRest answers 200 with "Nenhum registro excluído" rather than 404.
        """
        response = await api_client.delete(f"{Endpoints.USUARIOS}/64b64c7f8f1b2c0012345678")

        assert_message(assert_success_response(response), "Nenhum registro excluído")
