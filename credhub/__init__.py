"""CredHub client — typed credential requests and responses for the CredHub API."""

from credhub.client import CredHubClient
from credhub.details import (
    CredentialDetails,
    CredentialDetailsData,
    CredentialPermissions,
    CredentialSummary,
)
from credhub.errors import (
    CredHubError,
    CredHubHTTPError,
    InvalidArgumentError,
    InvalidResponseError,
    TransportError,
    UnknownCredentialTypeError,
)
from credhub.models import (
    Actor,
    CertificateCredential,
    CredentialType,
    JsonCredential,
    Operation,
    PasswordCredential,
    Permission,
    RsaCredential,
    SshCredential,
    UserCredential,
    ValueCredential,
)
from credhub.name import (
    CredentialName,
    ServiceInstanceCredentialName,
    SimpleCredentialName,
    normalize,
)
from credhub.request import CredentialRequest, ParametersRequest

__version__ = "0.1.0"

__all__ = [
    "Actor",
    "CertificateCredential",
    "CredHubClient",
    "CredHubError",
    "CredHubHTTPError",
    "CredentialDetails",
    "CredentialDetailsData",
    "CredentialName",
    "CredentialPermissions",
    "CredentialRequest",
    "CredentialSummary",
    "CredentialType",
    "InvalidArgumentError",
    "InvalidResponseError",
    "JsonCredential",
    "Operation",
    "ParametersRequest",
    "PasswordCredential",
    "Permission",
    "RsaCredential",
    "ServiceInstanceCredentialName",
    "SimpleCredentialName",
    "SshCredential",
    "TransportError",
    "UnknownCredentialTypeError",
    "UserCredential",
    "ValueCredential",
    "normalize",
]
