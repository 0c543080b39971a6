"""Thin Keycloak admin REST API client.

Uses an OAuth2 token from the configured realm's token endpoint and the
admin REST API under {root}/admin. All HTTP calls use httpx.AsyncClient so
they do not block the event loop. No retries: transport failures surface as
RemoteUnavailableException, HTTP errors as NotFoundException / RemoteError.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, urlparse

import httpx

from authflow.domain.exceptions import (
    NotFoundException,
    RemoteError,
    RemoteUnavailableException,
)
from authflow.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# Refresh this many seconds before the server-side expiry.
_TOKEN_EXPIRY_MARGIN = 10.0


def path_segment(value: str) -> str:
    """Quote one path segment (realm, alias or id); aliases may contain spaces and '/'."""
    return quote(value, safe="")


def id_from_location(location: str) -> str:
    """Return the last path segment of a Location header (the created resource id)."""
    path = urlparse(location).path.rstrip("/")
    return path.rsplit("/", 1)[-1]


def _json_body(resp: httpx.Response, path: str) -> Any:
    """Decoded JSON body, or None when empty; a non-JSON body is a RemoteError."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as e:
        raise RemoteError(resp.status_code, "invalid JSON response", path) from e


def _error_message(resp: httpx.Response) -> str:
    """Best-effort error text from a Keycloak error body."""
    try:
        body = resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        for key in ("errorMessage", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return resp.text or resp.reason_phrase


@dataclass
class _AccessToken:
    value: str
    expires_at: float

    @property
    def valid(self) -> bool:
        return time.monotonic() < self.expires_at - _TOKEN_EXPIRY_MARGIN


class KeycloakRESTClient:
    """Lightweight Keycloak admin client (REST, bearer token)."""

    def __init__(
        self,
        root_url: str,
        *,
        auth_realm: str = "master",
        client_id: str = "admin-cli",
        client_secret: str | None = None,
        username: str | None = None,
        password: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
        verify: bool = True,
    ) -> None:
        self._root = root_url.rstrip("/")
        self._admin_base = f"{self._root}/admin"
        self._token_url = (
            f"{self._root}/realms/{path_segment(auth_realm)}/protocol/openid-connect/token"
        )
        self._client_id = client_id
        self._client_secret = client_secret
        self._username = username
        self._password = password
        self._token: _AccessToken | None = None
        self._http = (
            http_client
            if http_client is not None
            else httpx.AsyncClient(timeout=timeout, verify=verify)
        )
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    def _token_form(self) -> dict[str, str]:
        form = {"client_id": self._client_id}
        if self._client_secret:
            form["client_secret"] = self._client_secret
        if self._username:
            form["grant_type"] = "password"
            form["username"] = self._username
            form["password"] = self._password or ""
        else:
            form["grant_type"] = "client_credentials"
        return form

    async def get_token(self) -> str:
        """Return a valid access token, fetching a new one when missing or near expiry."""
        if self._token is not None and self._token.valid:
            return self._token.value
        try:
            resp = await self._http.post(self._token_url, data=self._token_form())
        except httpx.TransportError as e:
            raise RemoteUnavailableException(str(e) or type(e).__name__, self._token_url) from e
        if resp.status_code != 200:
            raise RemoteError(resp.status_code, _error_message(resp), self._token_url)
        body = _json_body(resp, self._token_url)
        try:
            self._token = _AccessToken(
                value=body["access_token"],
                expires_at=time.monotonic() + float(body.get("expires_in", 60)),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise RemoteError(
                resp.status_code, "token response without access_token", self._token_url
            ) from e
        logger.debug("Obtained Keycloak access token (expires in %ss)", body.get("expires_in"))
        return self._token.value

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        resource_type: str = "resource",
    ) -> httpx.Response:
        """Perform one admin API request; map failures to domain exceptions."""
        url = f"{self._admin_base}{path}"
        headers = {
            "Authorization": f"Bearer {await self.get_token()}",
            "Accept": "application/json",
        }
        logger.debug("%s %s", method, path)
        try:
            resp = await self._http.request(method, url, headers=headers, json=body)
        except httpx.TransportError as e:
            raise RemoteUnavailableException(str(e) or type(e).__name__, path) from e
        if resp.status_code == 404:
            raise NotFoundException(resource_type, path)
        if resp.status_code == 401:
            # token revoked or realm session reset; next call fetches a new one
            self._token = None
        if not resp.is_success:
            raise RemoteError(resp.status_code, _error_message(resp), path)
        return resp

    async def get(self, path: str, resource_type: str = "resource") -> Any:
        """GET path and return the decoded JSON body."""
        resp = await self._request("GET", path, resource_type=resource_type)
        return _json_body(resp, path)

    async def post(
        self, path: str, body: dict[str, Any] | None = None, resource_type: str = "resource"
    ) -> tuple[Any, str | None]:
        """POST body; return (decoded JSON body or None, Location header or None)."""
        resp = await self._request("POST", path, body, resource_type)
        data = _json_body(resp, path)
        return data, resp.headers.get("Location")

    async def put(
        self, path: str, body: dict[str, Any], resource_type: str = "resource"
    ) -> None:
        """PUT body (full replace)."""
        await self._request("PUT", path, body, resource_type)

    async def delete(self, path: str, resource_type: str = "resource") -> None:
        """DELETE path."""
        await self._request("DELETE", path, resource_type=resource_type)
