"""
Integration tests for the POST /graphql endpoint
"""

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from conftest import TEST_JWT_SECRET, employee_input, make_employee
from staffdir.api.app import create_app
from staffdir.auth.adapters.jwt import JWTAuthAdapter
from staffdir.config import settings
from staffdir.database.connection import get_async_session
from staffdir.database.seed_data import ensure_user_role

GET_EMPLOYEE = "query GetEmployee($id: String!) { employee }"
GET_EMPLOYEES = "query GetEmployees($class: String) { employees }"
GET_PAGINATED = "query GetEmployeesPaginated($page: Int, $limit: Int) { employees pagination }"
GET_STATS = "query GetEmployeeStats { stats }"
CREATE_EMPLOYEE = "mutation CreateEmployee($input: EmployeeInput!) { employee }"
UPDATE_EMPLOYEE = "mutation UpdateEmployee($id: String!, $input: EmployeeInput!) { employee }"
DELETE_EMPLOYEE = "mutation DeleteEmployee($id: String!) { success }"
TOGGLE_FLAG = "mutation ToggleFlagEmployee($id: String!) { employee }"


@pytest.fixture
def auth_adapter():
    return JWTAuthAdapter(secret_key=TEST_JWT_SECRET)


@pytest_asyncio.fixture
async def client(test_database, auth_adapter):
    _ = test_database
    app = create_app(auth_adapter=auth_adapter)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def admin_headers(test_database, auth_adapter):
    _ = test_database
    async with get_async_session() as session:
        await ensure_user_role(session, "admin-user", "admin")
    return {"Authorization": f"Bearer {auth_adapter.issue_token('admin-user')}"}


@pytest.fixture
def employee_headers(auth_adapter):
    # No role row: callers default to employee
    return {"Authorization": f"Bearer {auth_adapter.issue_token('plain-user')}"}


@pytest_asyncio.fixture
async def employee_id(test_database):
    _ = test_database
    async with get_async_session() as session:
        employee = make_employee(name="Existing Person", flagged=False)
        session.add(employee)
        await session.flush()
        return str(employee.id)


async def graphql(client, headers, query, variables=None):
    body = {"query": query}
    if variables is not None:
        body["variables"] = variables
    return await client.post("/graphql", json=body, headers=headers)


def error_of(response):
    (error,) = response.json()["errors"]
    return error


@pytest.mark.integration
class TestAuthentication:
    @pytest.mark.asyncio
    async def test_missing_token(self, client):
        response = await graphql(client, {}, GET_EMPLOYEES)

        assert response.status_code == 401
        assert error_of(response) == {
            "message": "Authorization header required",
            "extensions": {"code": "UNAUTHENTICATED"},
        }

    @pytest.mark.asyncio
    async def test_rejected_token(self, client):
        response = await graphql(client, {"Authorization": "Bearer forged"}, GET_EMPLOYEES)

        assert response.status_code == 401
        assert error_of(response) == {
            "message": "Unauthorized",
            "extensions": {"code": "UNAUTHORIZED"},
        }

    @pytest.mark.asyncio
    async def test_auth_checked_before_body(self, client):
        response = await client.post("/graphql", content=b"not json")

        assert response.status_code == 401


@pytest.mark.integration
class TestQueries:
    @pytest.mark.asyncio
    async def test_employee_can_read(self, client, employee_headers, employee_id):
        response = await graphql(client, employee_headers, GET_EMPLOYEE, {"id": employee_id})

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"data"}
        assert body["data"]["employee"]["id"] == employee_id
        assert body["data"]["employee"]["name"] == "Existing Person"

    @pytest.mark.asyncio
    async def test_get_employees_with_blank_filter(self, client, employee_headers, employee_id):
        response = await graphql(client, employee_headers, GET_EMPLOYEES, {"class": ""})

        assert response.status_code == 200
        ids = [e["id"] for e in response.json()["data"]["employees"]]
        assert ids == [employee_id]

    @pytest.mark.asyncio
    async def test_paginated(self, client, employee_headers, employee_id):
        _ = employee_id
        response = await graphql(client, employee_headers, GET_PAGINATED, {"page": 1, "limit": 5})

        assert response.status_code == 200
        assert response.json()["data"]["pagination"] == {
            "total": 1,
            "page": 1,
            "limit": 5,
            "totalPages": 1,
        }

    @pytest.mark.asyncio
    async def test_stats(self, client, employee_headers, employee_id):
        _ = employee_id
        response = await graphql(client, employee_headers, GET_STATS)

        assert response.status_code == 200
        assert response.json()["data"]["stats"] == {
            "total": 1,
            "active": 1,
            "flagged": 0,
            "avgAttendance": 90,
        }

    @pytest.mark.asyncio
    async def test_not_found(self, client, employee_headers):
        response = await graphql(client, employee_headers, GET_EMPLOYEE, {"id": str(uuid4())})

        assert response.status_code == 404
        assert error_of(response) == {
            "message": "Employee not found",
            "extensions": {"code": "NOT_FOUND"},
        }

    @pytest.mark.asyncio
    async def test_unknown_query(self, client, employee_headers):
        response = await graphql(client, employee_headers, "query GetPayroll { payroll }")

        assert response.status_code == 400
        assert error_of(response)["message"] == "Unknown query: GetPayroll"
        assert error_of(response)["extensions"]["code"] == "UNKNOWN_OPERATION"

    @pytest.mark.asyncio
    async def test_invalid_document(self, client, employee_headers):
        response = await graphql(client, employee_headers, "{ employees }")

        assert response.status_code == 400
        assert error_of(response)["message"] == "Invalid GraphQL query"

    @pytest.mark.asyncio
    async def test_selection_set_is_not_parsed(self, client, employee_headers, employee_id):
        response = await graphql(client, employee_headers, "query GetEmployees { employees {")

        assert response.status_code == 200
        assert [e["id"] for e in response.json()["data"]["employees"]] == [employee_id]

    @pytest.mark.asyncio
    async def test_oversized_page_is_invalid_variables(self, client, employee_headers):
        response = await graphql(
            client, employee_headers, GET_PAGINATED, {"page": 10**20, "limit": 10}
        )

        assert response.status_code == 400
        assert error_of(response)["extensions"]["code"] == "INVALID_VARIABLES"

    @pytest.mark.asyncio
    async def test_lowercase_bearer_scheme(self, client, auth_adapter, employee_id):
        headers = {"Authorization": f"bearer {auth_adapter.issue_token('plain-user')}"}

        response = await graphql(client, headers, GET_EMPLOYEE, {"id": employee_id})

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, client, employee_headers):
        response = await client.post("/graphql", content=b"{oops", headers=employee_headers)

        assert response.status_code == 400
        assert error_of(response)["extensions"]["code"] == "INVALID_DOCUMENT"

    @pytest.mark.asyncio
    async def test_invalid_variables(self, client, employee_headers):
        response = await graphql(client, employee_headers, GET_EMPLOYEE, {"id": "nope"})

        assert response.status_code == 400
        assert error_of(response)["extensions"]["code"] == "INVALID_VARIABLES"


@pytest.mark.integration
class TestMutations:
    @pytest.mark.asyncio
    async def test_admin_lifecycle(self, client, admin_headers):
        created = await graphql(
            client, admin_headers, CREATE_EMPLOYEE, {"input": employee_input()}
        )
        assert created.status_code == 200
        employee = created.json()["data"]["employee"]

        updated = await graphql(
            client,
            admin_headers,
            UPDATE_EMPLOYEE,
            {"id": employee["id"], "input": {"position": "Controller"}},
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["employee"]["position"] == "Controller"
        assert updated.json()["data"]["employee"]["name"] == employee["name"]

        toggled = await graphql(client, admin_headers, TOGGLE_FLAG, {"id": employee["id"]})
        assert toggled.json()["data"]["employee"]["flagged"] is True

        deleted = await graphql(client, admin_headers, DELETE_EMPLOYEE, {"id": employee["id"]})
        assert deleted.json() == {"data": {"success": True}}

        gone = await graphql(client, admin_headers, GET_EMPLOYEE, {"id": employee["id"]})
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_non_admin_mutation_forbidden(self, client, employee_headers, employee_id):
        response = await graphql(client, employee_headers, TOGGLE_FLAG, {"id": employee_id})

        assert response.status_code == 403
        assert error_of(response) == {
            "message": "Unauthorized: Admin access required",
            "extensions": {"code": "FORBIDDEN"},
        }

        after = await graphql(client, employee_headers, GET_EMPLOYEE, {"id": employee_id})
        assert after.json()["data"]["employee"]["flagged"] is False

    @pytest.mark.asyncio
    async def test_non_admin_unknown_mutation_forbidden(self, client, employee_headers):
        response = await graphql(client, employee_headers, "mutation Nuke { success }")

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_unknown_mutation(self, client, admin_headers):
        response = await graphql(client, admin_headers, "mutation Nuke { success }")

        assert response.status_code == 400
        assert error_of(response)["message"] == "Unknown mutation: Nuke"

    @pytest.mark.asyncio
    async def test_failed_create_leaves_no_row(self, client, admin_headers, employee_headers):
        response = await graphql(
            client, admin_headers, CREATE_EMPLOYEE, {"input": employee_input(age=-3)}
        )
        assert response.status_code == 400

        listing = await graphql(client, employee_headers, GET_EMPLOYEES)
        assert listing.json()["data"]["employees"] == []


@pytest.mark.integration
class TestTransport:
    @pytest.mark.asyncio
    async def test_preflight(self, client):
        response = await client.options("/graphql")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "Authorization" in response.headers["access-control-allow-headers"]
        assert "POST" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_cors_headers_on_errors(self, client):
        response = await graphql(client, {}, GET_EMPLOYEES)

        assert response.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_configured_origins(self, test_database, auth_adapter, monkeypatch):
        _ = test_database
        monkeypatch.setattr(settings, "cors_origins", ["https://app.example"])
        app = create_app(auth_adapter=auth_adapter)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            allowed = await client.options("/graphql", headers={"Origin": "https://app.example"})
            denied = await client.options("/graphql", headers={"Origin": "https://evil.example"})
            rejected = await graphql(client, {"Origin": "https://evil.example"}, GET_EMPLOYEES)

        assert allowed.status_code == 200
        assert allowed.headers["access-control-allow-origin"] == "https://app.example"
        assert denied.status_code == 200
        assert "access-control-allow-origin" not in denied.headers
        assert rejected.status_code == 401
        assert "access-control-allow-origin" not in rejected.headers

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["x-request-id"] == "req-123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, client):
        response = await client.get("/health")

        assert response.headers["x-request-id"]

    @pytest.mark.asyncio
    async def test_coarse_status_mode(self, client, employee_headers, monkeypatch):
        monkeypatch.setattr(settings, "coarse_error_status", True)

        forbidden = await graphql(client, employee_headers, "mutation Nuke { success }")
        missing = await graphql(client, employee_headers, GET_EMPLOYEE, {"id": str(uuid4())})
        unauthenticated = await graphql(client, {}, GET_EMPLOYEES)

        assert forbidden.status_code == 500
        assert missing.status_code == 500
        assert unauthenticated.status_code == 401
        assert error_of(forbidden)["extensions"]["code"] == "FORBIDDEN"
