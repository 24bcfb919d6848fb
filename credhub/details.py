"""Read models for service responses (metadata plus typed value, never validated)."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, SkipValidation

from credhub.models import CredentialType, CredentialValue, Permission
from credhub.name import CredentialName


class _ResponseModel(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class CredentialDetails(_ResponseModel):
    """One stored version of a credential as returned by the service."""

    id: str | None = None
    name: SkipValidation[CredentialName]
    credential_type: CredentialType
    value: SkipValidation[CredentialValue]
    version_created_at: datetime | None = None


class CredentialDetailsData(_ResponseModel):
    """The ``{"data": [...]}`` wrapper used by name lookups and history."""

    data: list[CredentialDetails] = []

    def current(self) -> CredentialDetails | None:
        """The newest version, or None if nothing was returned."""
        return self.data[0] if self.data else None


class CredentialSummary(_ResponseModel):
    """A name match from find-by-name or find-by-path."""

    name: SkipValidation[CredentialName]
    version_created_at: datetime | None = None


class CredentialPermissions(_ResponseModel):
    credential_name: SkipValidation[CredentialName]
    permissions: SkipValidation[tuple[Permission, ...]] = ()
