"""Pytest configuration and fixtures for authflow.

Keycloak is replaced by an in-memory fake served through httpx.MockTransport,
so repository, manager and API tests exercise the real REST client and wire
encoding without a server.
"""

import json
import os
import uuid
from typing import Any
from urllib.parse import unquote

# Settings are validated on first get_settings(); give tests a complete set.
os.environ.setdefault("KEYCLOAK_URL", "http://keycloak.test")
os.environ.setdefault("KEYCLOAK_CLIENT_ID", "authflow-tests")
os.environ.setdefault("KEYCLOAK_CLIENT_SECRET", "test-secret")

import httpx  # noqa: E402
import pytest  # noqa: E402

from authflow.application.services.subflow_manager import SubFlowManager  # noqa: E402
from authflow.infrastructure.keycloak._rest_client import KeycloakRESTClient  # noqa: E402
from authflow.infrastructure.keycloak.repositories import (  # noqa: E402
    KeycloakExecutionRepository,
    KeycloakFlowRepository,
)

KEYCLOAK_ROOT = "http://keycloak.test"
TEST_REALM = "test"
PARENT_ALIAS = "browser copy"
_TOKEN = "test-access-token"


def _json(status: int, body: Any = None, headers: dict[str, str] | None = None) -> httpx.Response:
    if body is None:
        return httpx.Response(status, headers=headers)
    return httpx.Response(status, json=body, headers=headers)


class FakeKeycloak:
    """In-memory stand-in for the Keycloak authentication-management admin API.

    Deleting an execution that points at a flow removes that flow too.
    Raise/lower swap priorities with the adjacent sibling.
    """

    def __init__(self) -> None:
        self.flows: dict[str, dict[str, Any]] = {}
        self.executions: dict[str, dict[str, Any]] = {}
        self.requests: list[tuple[str, str]] = []
        self.unavailable = False
        self._failures: list[dict[str, Any]] = []

    # ---- seeding / inspection ----

    def add_flow(self, realm: str, alias: str, provider_id: str = "basic-flow", top_level: bool = True) -> str:
        flow_id = str(uuid.uuid4())
        self.flows[flow_id] = {
            "id": flow_id,
            "alias": alias,
            "providerId": provider_id,
            "topLevel": top_level,
            "builtIn": False,
            "description": "",
            "_realm": realm,
        }
        return flow_id

    def add_execution(
        self,
        parent_flow_id: str,
        authenticator: str = "",
        requirement: str = "DISABLED",
        flow_id: str | None = None,
        execution_id: str | None = None,
    ) -> str:
        execution_id = execution_id or str(uuid.uuid4())
        siblings = self._children(parent_flow_id)
        priority = (max(e["priority"] for e in siblings) + 10) if siblings else 10
        self.executions[execution_id] = {
            "id": execution_id,
            "parentFlow": parent_flow_id,
            "authenticator": authenticator,
            "requirement": requirement,
            "priority": priority,
            "flowId": flow_id,
        }
        return execution_id

    def fail(self, method: str, path_suffix: str, status: int = 500, message: str = "boom", times: int = 1) -> None:
        """Make the next `times` requests matching method and path suffix return status."""
        self._failures.append(
            {"method": method, "suffix": path_suffix, "status": status, "message": message, "times": times}
        )

    def order(self, parent_flow_id: str) -> list[str]:
        """Execution ids of a parent in list order."""
        return [e["id"] for e in self._children(parent_flow_id)]

    def flow_by_alias(self, realm: str, alias: str) -> dict[str, Any] | None:
        for flow in self.flows.values():
            if flow["_realm"] == realm and flow["alias"] == alias:
                return flow
        return None

    # ---- transport ----

    def _children(self, parent_flow_id: str) -> list[dict[str, Any]]:
        children = [e for e in self.executions.values() if e["parentFlow"] == parent_flow_id]
        return sorted(children, key=lambda e: e["priority"])

    def _injected_failure(self, method: str, path: str) -> httpx.Response | None:
        for failure in self._failures:
            if failure["times"] > 0 and failure["method"] == method and path.endswith(failure["suffix"]):
                failure["times"] -= 1
                return _json(failure["status"], {"errorMessage": failure["message"]})
        return None

    def handler(self, request: httpx.Request) -> httpx.Response:
        if self.unavailable:
            raise httpx.ConnectError("connection refused", request=request)
        raw = request.url.raw_path.decode().split("?", 1)[0]
        method = request.method
        self.requests.append((method, unquote(raw)))

        if raw.endswith("/protocol/openid-connect/token"):
            return _json(200, {"access_token": _TOKEN, "expires_in": 300, "token_type": "Bearer"})
        if request.headers.get("Authorization") != f"Bearer {_TOKEN}":
            return _json(401, {"error": "HTTP 401 Unauthorized"})

        injected = self._injected_failure(method, unquote(raw))
        if injected is not None:
            return injected

        parts = [unquote(p) for p in raw.split("/") if p]
        # admin / realms / {realm} / authentication / ...
        if parts[:2] != ["admin", "realms"] or len(parts) < 5 or parts[3] != "authentication":
            return _json(404, {"error": "Not found"})
        realm, rest = parts[2], parts[4:]
        body = json.loads(request.content) if request.content else None

        if rest[0] == "flows":
            return self._flows(method, realm, rest[1:], body)
        if rest[0] == "executions":
            return self._executions(method, realm, rest[1:])
        return _json(404, {"error": "Not found"})

    def _flows(self, method: str, realm: str, rest: list[str], body: Any) -> httpx.Response:
        if len(rest) == 1:
            flow = self.flows.get(rest[0])
            if flow is None or flow["_realm"] != realm:
                return _json(404, {"error": "Could not find flow by id"})
            if method == "GET":
                return _json(200, {k: v for k, v in flow.items() if not k.startswith("_")})
            if method == "PUT":
                for key in ("alias", "providerId", "topLevel", "builtIn", "description"):
                    if key in body:
                        flow[key] = body[key]
                return _json(204)
            return _json(405)

        parent = self.flow_by_alias(realm, rest[0])
        if parent is None:
            return _json(404, {"error": "Parent flow doesn't exist"})

        if rest[1:] == ["executions", "flow"] and method == "POST":
            if self.flow_by_alias(realm, body["alias"]) is not None:
                return _json(409, {"errorMessage": "New flow alias name already exists"})
            flow_id = self.add_flow(realm, body["alias"], body.get("type") or "basic-flow", top_level=False)
            self.flows[flow_id]["description"] = body.get("description") or ""
            self.add_execution(parent["id"], authenticator=body.get("provider") or "", flow_id=flow_id)
            location = f"{KEYCLOAK_ROOT}/admin/realms/{realm}/authentication/flows/{flow_id}"
            return _json(201, headers={"Location": location})

        if rest[1:] == ["executions"]:
            if method == "GET":
                listing = []
                for index, e in enumerate(self._children(parent["id"])):
                    entry = {
                        "id": e["id"],
                        "requirement": e["requirement"],
                        "priority": e["priority"],
                        "level": 0,
                        "index": index,
                        "authenticationFlow": e["flowId"] is not None,
                    }
                    if e["flowId"]:
                        entry["flowId"] = e["flowId"]
                        entry["displayName"] = self.flows[e["flowId"]]["alias"]
                    else:
                        entry["providerId"] = e["authenticator"]
                    listing.append(entry)
                return _json(200, listing)
            if method == "PUT":
                execution = self.executions.get(body.get("id"))
                if execution is None or execution["parentFlow"] != parent["id"]:
                    return _json(404, {"error": "Illegal execution"})
                execution["requirement"] = body["requirement"]
                if "priority" in body:
                    execution["priority"] = body["priority"]
                return _json(202)
        return _json(404, {"error": "Not found"})

    def _executions(self, method: str, realm: str, rest: list[str]) -> httpx.Response:
        execution = self.executions.get(rest[0]) if rest else None
        if execution is None or self.flows[execution["parentFlow"]]["_realm"] != realm:
            return _json(404, {"error": "Illegal execution"})
        if len(rest) == 1 and method == "GET":
            return _json(200, {k: v for k, v in execution.items() if v is not None})
        if len(rest) == 1 and method == "DELETE":
            del self.executions[execution["id"]]
            if execution["flowId"]:
                self._delete_flow(execution["flowId"])
            return _json(204)
        if len(rest) == 2 and method == "POST" and rest[1] in ("raise-priority", "lower-priority"):
            siblings = self._children(execution["parentFlow"])
            pos = [e["id"] for e in siblings].index(execution["id"])
            other = pos - 1 if rest[1] == "raise-priority" else pos + 1
            if 0 <= other < len(siblings):
                neighbour = siblings[other]
                execution["priority"], neighbour["priority"] = neighbour["priority"], execution["priority"]
            return _json(204)
        return _json(405)

    def _delete_flow(self, flow_id: str) -> None:
        self.flows.pop(flow_id, None)
        for child in [e for e in self.executions.values() if e["parentFlow"] == flow_id]:
            del self.executions[child["id"]]
            if child["flowId"]:
                self._delete_flow(child["flowId"])


@pytest.fixture
def fake_keycloak() -> FakeKeycloak:
    """Fake Keycloak with realm 'test', parent flow 'browser copy' and two authenticator executions."""
    fake = FakeKeycloak()
    parent_id = fake.add_flow(TEST_REALM, PARENT_ALIAS)
    fake.add_execution(parent_id, authenticator="auth-cookie", requirement="ALTERNATIVE")
    fake.add_execution(parent_id, authenticator="identity-provider-redirector", requirement="ALTERNATIVE")
    fake.parent_id = parent_id
    return fake


@pytest.fixture
async def keycloak_client(fake_keycloak: FakeKeycloak) -> KeycloakRESTClient:
    """KeycloakRESTClient whose HTTP traffic goes to fake_keycloak."""
    http = httpx.AsyncClient(transport=httpx.MockTransport(fake_keycloak.handler))
    client = KeycloakRESTClient(
        KEYCLOAK_ROOT,
        client_id="authflow-tests",
        client_secret="test-secret",
        http_client=http,
    )
    yield client
    await http.aclose()


@pytest.fixture
def manager(keycloak_client: KeycloakRESTClient) -> SubFlowManager:
    """SubFlowManager over the Keycloak repositories and the fake server."""
    return SubFlowManager(
        flow_repo=KeycloakFlowRepository(keycloak_client),
        execution_repo=KeycloakExecutionRepository(keycloak_client),
    )


@pytest.fixture
async def client(keycloak_client: KeycloakRESTClient) -> httpx.AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), wired to fake_keycloak."""
    from authflow.api.v1.dependencies import get_keycloak_rest_client
    from authflow.main import create_app

    app = create_app()
    app.dependency_overrides[get_keycloak_rest_client] = lambda: keycloak_client
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
