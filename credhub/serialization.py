"""
Wire format for CredHub requests and responses.

Every credential type has one entry in ``_CODECS`` holding the functions that
turn its value into the JSON ``value`` field and back. The ``type`` tag picks
the entry in both directions, so there is no type inspection on decode.

Unset fields are skipped key by key: a field that is None never shows up in
the output, not even as ``null``. The service treats a missing key and an
empty one differently.

Usage:
    from credhub.serialization import to_json, from_wire

    body = to_json(request)
    details = from_wire(response_json, CredentialType.SSH)
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from credhub.details import (
    CredentialDetails,
    CredentialDetailsData,
    CredentialPermissions,
    CredentialSummary,
)
from credhub.errors import InvalidArgumentError, InvalidResponseError, UnknownCredentialTypeError
from credhub.models import (
    Actor,
    CertificateCredential,
    CredentialType,
    CredentialValue,
    JsonCredential,
    Operation,
    PasswordCredential,
    Permission,
    RsaCredential,
    SshCredential,
    UserCredential,
    ValueCredential,
)
from credhub.name import CredentialName, normalize
from credhub.parameters import CredentialParameters
from credhub.request import CredentialRequest, ParametersRequest


def _put(out: dict[str, Any], key: str, value: Any) -> None:
    """Set ``out[key]`` unless the value is unset."""
    if value is None:
        return
    out[key] = value


def _object(raw: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise InvalidResponseError(f"{what} must be an object, got {type(raw).__name__}")
    return raw


def _string(raw: Any, credential_type: CredentialType, key: str) -> str:
    # The service sends value and password credentials as bare strings; accept
    # the single-key object form as well.
    if isinstance(raw, Mapping):
        raw = raw.get(key)
    if not isinstance(raw, str):
        raise InvalidResponseError(f"{credential_type} value must be a string")
    return raw


# ─── Per-type codecs ─────────────────────────────────────────────────────


def _encode_value(value: ValueCredential) -> Any:
    return value.value


def _decode_value(raw: Any) -> ValueCredential:
    return ValueCredential(_string(raw, CredentialType.VALUE, "value"))


def _encode_password(value: PasswordCredential) -> Any:
    return value.password


def _decode_password(raw: Any) -> PasswordCredential:
    return PasswordCredential(_string(raw, CredentialType.PASSWORD, "password"))


def _encode_json(value: JsonCredential) -> Any:
    return dict(value.value or {})


def _decode_json(raw: Any) -> JsonCredential:
    return JsonCredential(dict(_object(raw, CredentialType.JSON)))


def _encode_user(value: UserCredential) -> Any:
    out: dict[str, Any] = {}
    _put(out, "username", value.username)
    _put(out, "password", value.password)
    _put(out, "password_hash", value.password_hash)
    return out


def _decode_user(raw: Any) -> UserCredential:
    obj = _object(raw, CredentialType.USER)
    return UserCredential(
        username=obj.get("username"),
        password=obj.get("password"),
        password_hash=obj.get("password_hash"),
    )


def _encode_ssh(value: SshCredential) -> Any:
    out: dict[str, Any] = {}
    _put(out, "public_key", value.public_key)
    _put(out, "private_key", value.private_key)
    _put(out, "public_key_fingerprint", value.public_key_fingerprint)
    return out


def _decode_ssh(raw: Any) -> SshCredential:
    obj = _object(raw, CredentialType.SSH)
    return SshCredential(
        public_key=obj.get("public_key"),
        private_key=obj.get("private_key"),
        public_key_fingerprint=obj.get("public_key_fingerprint"),
    )


def _encode_rsa(value: RsaCredential) -> Any:
    out: dict[str, Any] = {}
    _put(out, "public_key", value.public_key)
    _put(out, "private_key", value.private_key)
    return out


def _decode_rsa(raw: Any) -> RsaCredential:
    obj = _object(raw, CredentialType.RSA)
    return RsaCredential(public_key=obj.get("public_key"), private_key=obj.get("private_key"))


def _encode_certificate(value: CertificateCredential) -> Any:
    out: dict[str, Any] = {}
    _put(out, "certificate", value.certificate)
    _put(out, "certificate_authority", value.certificate_authority)
    _put(out, "private_key", value.private_key)
    _put(out, "certificate_authority_name", value.certificate_authority_name)
    _put(out, "self_signed", value.self_signed)
    _put(out, "generated", value.generated)
    _put(out, "transitional", value.transitional)
    if value.expiry_date is not None:
        expiry = value.expiry_date
        out["expiry_date"] = expiry.isoformat() if isinstance(expiry, datetime) else str(expiry)
    return out


def _decode_certificate(raw: Any) -> CertificateCredential:
    obj = _object(raw, CredentialType.CERTIFICATE)
    expiry = obj.get("expiry_date")
    if isinstance(expiry, str):
        try:
            expiry = datetime.fromisoformat(expiry)
        except ValueError:
            raise InvalidResponseError(f"bad certificate expiry_date {expiry!r}") from None
    # "ca" and "ca_name" are the service's short forms.
    return CertificateCredential(
        certificate=obj.get("certificate"),
        certificate_authority=obj.get("certificate_authority", obj.get("ca")),
        private_key=obj.get("private_key"),
        certificate_authority_name=obj.get("certificate_authority_name", obj.get("ca_name")),
        self_signed=obj.get("self_signed"),
        generated=obj.get("generated"),
        transitional=obj.get("transitional"),
        expiry_date=expiry,
    )


@dataclass(frozen=True)
class _Codec:
    value_class: type
    encode: Callable[[Any], Any]
    decode: Callable[[Any], CredentialValue]


_CODECS: dict[CredentialType, _Codec] = {
    CredentialType.VALUE: _Codec(ValueCredential, _encode_value, _decode_value),
    CredentialType.JSON: _Codec(JsonCredential, _encode_json, _decode_json),
    CredentialType.PASSWORD: _Codec(PasswordCredential, _encode_password, _decode_password),
    CredentialType.USER: _Codec(UserCredential, _encode_user, _decode_user),
    CredentialType.SSH: _Codec(SshCredential, _encode_ssh, _decode_ssh),
    CredentialType.RSA: _Codec(RsaCredential, _encode_rsa, _decode_rsa),
    CredentialType.CERTIFICATE: _Codec(
        CertificateCredential, _encode_certificate, _decode_certificate
    ),
}

# Parameter fields whose wire key differs from the attribute name.
_PARAMETER_KEYS = {"certificate_authority": "ca"}


def parse_type(tag: Any) -> CredentialType:
    """Map a wire ``type`` tag to a CredentialType."""
    try:
        return CredentialType(tag)
    except ValueError:
        raise UnknownCredentialTypeError(tag) from None


# ─── Encoding ────────────────────────────────────────────────────────────


def encode_value(value: CredentialValue) -> Any:
    """Encode a credential value into its wire ``value`` field."""
    codec = _CODECS[value.credential_type]
    if not isinstance(value, codec.value_class):
        raise InvalidArgumentError(
            f"{type(value).__name__} cannot be sent as {value.credential_type}"
        )
    return codec.encode(value)


def encode_parameters(parameters: CredentialParameters) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(parameters):
        raw = getattr(parameters, f.name)
        if isinstance(raw, tuple):
            if not raw:
                continue
            raw = list(raw)
        _put(out, _PARAMETER_KEYS.get(f.name, f.name), raw)
    return out


def encode_permission(permission: Permission) -> dict[str, Any]:
    return {
        "actor": str(permission.actor),
        "operations": [str(op) for op in permission.operations],
    }


def _envelope(
    name: CredentialName,
    overwrite: bool,
    credential_type: CredentialType,
) -> dict[str, Any]:
    return {"name": str(name), "overwrite": overwrite, "type": str(credential_type)}


def _add_permissions(out: dict[str, Any], permissions: tuple[Permission, ...]) -> None:
    if permissions:
        out["additional_permissions"] = [encode_permission(p) for p in permissions]


def to_wire(request: CredentialRequest | ParametersRequest) -> dict[str, Any]:
    """Render a built request as the JSON object the service expects."""
    if isinstance(request, ParametersRequest):
        out = _envelope(request.name, request.overwrite, request.credential_type)
        out["parameters"] = encode_parameters(request.parameters)
        if request.username is not None:
            out["value"] = {"username": request.username}
    else:
        out = _envelope(request.name, request.overwrite, request.credential_type)
        out["value"] = encode_value(request.value)
    _add_permissions(out, request.additional_permissions)
    return out


def to_json(request: CredentialRequest | ParametersRequest) -> str:
    return json.dumps(to_wire(request), separators=(",", ":"))


def permissions_to_wire(
    name: str | CredentialName, permissions: tuple[Permission, ...]
) -> dict[str, Any]:
    return {
        "credential_name": str(normalize(name)),
        "permissions": [encode_permission(p) for p in permissions],
    }


# ─── Decoding ────────────────────────────────────────────────────────────


def _require(obj: Mapping[str, Any], key: str) -> Any:
    if key not in obj or obj[key] is None:
        raise InvalidResponseError(f"response is missing {key!r}")
    return obj[key]


def _name(raw: Any) -> CredentialName:
    if not isinstance(raw, str):
        raise InvalidResponseError(f"credential name must be a string, got {raw!r}")
    try:
        return normalize(raw)
    except InvalidArgumentError as e:
        raise InvalidResponseError(str(e)) from e


def from_wire(obj: Any, expected_type: CredentialType | str | None = None) -> CredentialDetails:
    """Parse one credential from a response body.

    Raises UnknownCredentialTypeError for an unknown ``type`` tag and
    InvalidResponseError for anything else that does not fit, including a
    tag other than ``expected_type``.
    """
    obj = _object(obj, "credential")
    credential_type = parse_type(_require(obj, "type"))
    if expected_type is not None and credential_type != CredentialType(expected_type):
        raise InvalidResponseError(
            f"expected a {CredentialType(expected_type)} credential, got {credential_type}"
        )

    value = _CODECS[credential_type].decode(_require(obj, "value"))
    try:
        return CredentialDetails(
            id=obj.get("id"),
            name=_name(_require(obj, "name")),
            credential_type=credential_type,
            value=value,
            version_created_at=obj.get("version_created_at"),
        )
    except ValidationError as e:
        raise InvalidResponseError(f"malformed credential response: {e}") from e


def details_data_from_wire(
    obj: Any, expected_type: CredentialType | str | None = None
) -> CredentialDetailsData:
    """Parse a ``{"data": [...]}`` list response."""
    items = _require(_object(obj, "data"), "data")
    if not isinstance(items, list):
        raise InvalidResponseError("response 'data' must be a list")
    return CredentialDetailsData(data=[from_wire(item, expected_type) for item in items])


def summaries_from_wire(obj: Any) -> list[CredentialSummary]:
    """Parse a ``{"credentials": [...]}`` find response."""
    items = _require(_object(obj, "credentials"), "credentials")
    try:
        return [
            CredentialSummary(
                name=_name(_require(item, "name")),
                version_created_at=item.get("version_created_at"),
            )
            for item in items
        ]
    except (ValidationError, AttributeError, TypeError) as e:
        raise InvalidResponseError(f"malformed find response: {e}") from e


def permission_from_wire(obj: Any) -> Permission:
    obj = _object(obj, "permission")
    try:
        actor = Actor.parse(_require(obj, "actor"))
        operations = tuple(Operation(op) for op in _require(obj, "operations"))
    except (InvalidArgumentError, ValueError, TypeError) as e:
        raise InvalidResponseError(f"malformed permission: {e}") from e
    return Permission(actor, operations)


def permissions_from_wire(obj: Any) -> CredentialPermissions:
    """Parse a ``{"credential_name": ..., "permissions": [...]}`` response."""
    obj = _object(obj, "permissions")
    items = obj.get("permissions") or []
    return CredentialPermissions(
        credential_name=_name(_require(obj, "credential_name")),
        permissions=tuple(permission_from_wire(item) for item in items),
    )


def details_to_wire(details: CredentialDetails) -> dict[str, Any]:
    """Render parsed details back into the service's response shape."""
    out: dict[str, Any] = {}
    _put(out, "id", details.id)
    out["name"] = str(details.name)
    out["type"] = str(details.credential_type)
    out["value"] = encode_value(details.value)
    if details.version_created_at is not None:
        out["version_created_at"] = details.version_created_at.isoformat()
    return out
