"""
CredHub API client.

Turns built requests into HTTP calls and responses into typed details.
Nothing here retries: a failed call raises and the caller decides.

Usage:
    from credhub.client import CredHubClient
    from credhub.models import CredentialType, ValueCredential
    from credhub.request import CredentialRequest

    with CredHubClient() as credhub:
        request = CredentialRequest.builder().name("/app/db").value(ValueCredential("s3cret")).build()
        credhub.write(request)
        details = credhub.get_by_name("/app/db", CredentialType.VALUE)
"""

from __future__ import annotations

import logging
from typing import Any

from credhub.config import Config
from credhub.details import (
    CredentialDetails,
    CredentialDetailsData,
    CredentialPermissions,
    CredentialSummary,
)
from credhub.errors import InvalidArgumentError, InvalidResponseError
from credhub.models import Actor, CredentialType, Permission
from credhub.name import CredentialName, normalize
from credhub.request import CredentialRequest, ParametersRequest
from credhub.serialization import (
    details_data_from_wire,
    from_wire,
    permissions_from_wire,
    permissions_to_wire,
    summaries_from_wire,
    to_wire,
)
from credhub.transport import CredHubTransport

logger = logging.getLogger(__name__)

DATA_PATH = "/data"
REGENERATE_PATH = "/regenerate"
PERMISSIONS_PATH = "/permissions"
INTERPOLATE_PATH = "/interpolate"


class CredHubClient:
    """Synchronous client for the CredHub ``/api/v1`` endpoints."""

    def __init__(
        self,
        transport: CredHubTransport | None = None,
        config: Config | None = None,
    ) -> None:
        self._transport = transport or CredHubTransport(config)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> CredHubClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ─── Credentials ─────────────────────────────────────────────────────

    def write(self, request: CredentialRequest) -> CredentialDetails:
        """PUT /data — store a value, returning the new version."""
        logger.debug("Writing %s credential %s", request.credential_type, request.name)
        _, body = self._transport.send("PUT", DATA_PATH, to_wire(request))
        return from_wire(body, request.credential_type)

    def generate(self, request: ParametersRequest) -> CredentialDetails:
        """POST /data — have the service generate a value from parameters."""
        logger.debug("Generating %s credential %s", request.credential_type, request.name)
        _, body = self._transport.send("POST", DATA_PATH, to_wire(request))
        return from_wire(body, request.credential_type)

    def regenerate(
        self,
        name: str | CredentialName,
        expected_type: CredentialType | None = None,
    ) -> CredentialDetails:
        """POST /regenerate — new value, same generation parameters."""
        _, body = self._transport.send("POST", REGENERATE_PATH, {"name": str(normalize(name))})
        return from_wire(body, expected_type)

    def get_by_id(
        self,
        credential_id: str,
        expected_type: CredentialType | None = None,
    ) -> CredentialDetails:
        if not credential_id:
            raise InvalidArgumentError("credential id must not be empty")
        _, body = self._transport.send("GET", f"{DATA_PATH}/{credential_id}")
        return from_wire(body, expected_type)

    def get_by_name(
        self,
        name: str | CredentialName,
        expected_type: CredentialType | None = None,
    ) -> CredentialDetails:
        """Current version of a credential."""
        params = {"name": str(normalize(name)), "current": "true"}
        _, body = self._transport.send("GET", DATA_PATH, params=params)
        current = details_data_from_wire(body, expected_type).current()
        if current is None:
            raise InvalidResponseError(f"no versions returned for {normalize(name)}")
        return current

    def get_by_name_with_history(
        self,
        name: str | CredentialName,
        versions: int,
        expected_type: CredentialType | None = None,
    ) -> CredentialDetailsData:
        """The ``versions`` most recent versions, newest first."""
        if versions < 1:
            raise InvalidArgumentError(f"versions must be at least 1, got {versions}")
        params = {"name": str(normalize(name)), "versions": versions}
        _, body = self._transport.send("GET", DATA_PATH, params=params)
        return details_data_from_wire(body, expected_type)

    def find_by_name(self, name_like: str) -> list[CredentialSummary]:
        """Credentials whose name contains ``name_like``."""
        if not name_like:
            raise InvalidArgumentError("name_like must not be empty")
        _, body = self._transport.send("GET", DATA_PATH, params={"name-like": name_like})
        return summaries_from_wire(body)

    def find_by_path(self, path: str) -> list[CredentialSummary]:
        """Credentials stored under ``path``."""
        if not path:
            raise InvalidArgumentError("path must not be empty")
        _, body = self._transport.send("GET", DATA_PATH, params={"path": path})
        return summaries_from_wire(body)

    def delete_by_name(self, name: str | CredentialName) -> None:
        """DELETE /data — removes every version of the credential."""
        credential_name = normalize(name)
        logger.debug("Deleting credential %s", credential_name)
        self._transport.send("DELETE", DATA_PATH, params={"name": str(credential_name)})

    # ─── Permissions ─────────────────────────────────────────────────────

    def get_permissions(self, name: str | CredentialName) -> CredentialPermissions:
        params = {"credential_name": str(normalize(name))}
        _, body = self._transport.send("GET", PERMISSIONS_PATH, params=params)
        return permissions_from_wire(body)

    def add_permissions(self, name: str | CredentialName, *permissions: Permission) -> None:
        if not permissions:
            raise InvalidArgumentError("at least one permission is required")
        for permission in permissions:
            permission.validate()
        self._transport.send("POST", PERMISSIONS_PATH, permissions_to_wire(name, permissions))

    def delete_permission(self, name: str | CredentialName, actor: Actor) -> None:
        params = {"credential_name": str(normalize(name)), "actor": str(actor)}
        self._transport.send("DELETE", PERMISSIONS_PATH, params=params)

    # ─── Interpolation ───────────────────────────────────────────────────

    def interpolate_service_data(self, service_data: dict[str, Any]) -> dict[str, Any]:
        """POST /interpolate — replace credhub-ref entries in VCAP_SERVICES-style data."""
        _, body = self._transport.send("POST", INTERPOLATE_PATH, service_data)
        if not isinstance(body, dict):
            raise InvalidResponseError("interpolate response must be an object")
        return body
