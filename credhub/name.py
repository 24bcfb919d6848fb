"""
Credential names.

CredHub identifies every credential by an absolute, slash-separated path.
Names are normalized once, on construction, to start with exactly one "/";
the rest of the path is kept as given.

Usage:
    from credhub.name import normalize, SimpleCredentialName

    normalize("example/credential")                  # /example/credential
    SimpleCredentialName("example", "credential")    # /c/example/credential
"""

from __future__ import annotations

from credhub.errors import InvalidArgumentError

SEPARATOR = "/"


class CredentialName:
    """An immutable, normalized credential path."""

    __slots__ = ("_name",)

    def __init__(self, raw: str) -> None:
        if not raw:
            raise InvalidArgumentError("credential name must not be empty")
        path = raw.lstrip(SEPARATOR)
        if not path:
            raise InvalidArgumentError(f"credential name {raw!r} has no path segments")
        object.__setattr__(self, "_name", SEPARATOR + path)

    def __setattr__(self, key: str, value: object) -> None:
        raise AttributeError("CredentialName is immutable")

    @property
    def name(self) -> str:
        return self._name

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CredentialName):
            return self._name == other._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._name)


def normalize(raw: str | CredentialName) -> CredentialName:
    """Return ``raw`` as a CredentialName. Existing names pass through."""
    if isinstance(raw, CredentialName):
        return raw
    if raw is None:
        raise InvalidArgumentError("credential name must not be None")
    return CredentialName(raw)


class SimpleCredentialName(CredentialName):
    """A name built from path segments under the /c/ namespace: ("a", "b") -> /c/a/b."""

    __slots__ = ()

    def __init__(self, *segments: str) -> None:
        if not segments or not all(segments):
            raise InvalidArgumentError("credential name segments must not be empty")
        super().__init__(SEPARATOR.join(["c", *segments]))


class ServiceInstanceCredentialName(CredentialName):
    """Name of a credential owned by a service broker binding.

    Laid out as /c/<broker>/<offering>/<binding>/<credential>.
    """

    __slots__ = ()

    def __init__(
        self,
        service_broker_name: str,
        service_offering_name: str,
        service_binding_id: str,
        credential_name: str,
    ) -> None:
        parts = [service_broker_name, service_offering_name, service_binding_id, credential_name]
        if not all(parts):
            raise InvalidArgumentError("service instance credential name parts must not be empty")
        super().__init__(SEPARATOR.join(["c", *parts]))
