"""Tests for credhub.models — value validation, actors and permissions."""

import pytest

from credhub.errors import InvalidArgumentError
from credhub.models import (
    Actor,
    ActorType,
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


class TestKeyPairValidation:
    @pytest.mark.parametrize("cls", [SshCredential, RsaCredential])
    def test_both_keys_missing_fails(self, cls):
        with pytest.raises(InvalidArgumentError, match="public_key/private_key"):
            cls(None, None).validate()

    @pytest.mark.parametrize("cls", [SshCredential, RsaCredential])
    def test_both_keys_empty_fails(self, cls):
        with pytest.raises(InvalidArgumentError):
            cls("", "").validate()

    @pytest.mark.parametrize("cls", [SshCredential, RsaCredential])
    def test_one_key_is_enough(self, cls):
        cls("public-key", None).validate()
        cls(None, "private-key").validate()

    def test_constructor_does_not_validate(self):
        value = SshCredential(None, None)
        assert value.public_key is None

    def test_types(self):
        assert SshCredential.credential_type == CredentialType.SSH
        assert RsaCredential.credential_type == CredentialType.RSA

    def test_ssh_and_rsa_values_differ(self):
        assert SshCredential("a", "b") != RsaCredential("a", "b")


class TestSingleFieldValidation:
    @pytest.mark.parametrize(
        "value",
        [
            ValueCredential(None),
            ValueCredential(""),
            PasswordCredential(None),
            PasswordCredential(""),
            JsonCredential(None),
            JsonCredential({}),
        ],
    )
    def test_missing_or_empty_fails(self, value):
        with pytest.raises(InvalidArgumentError):
            value.validate()

    def test_present_passes(self):
        ValueCredential("secret").validate()
        PasswordCredential("p4ss").validate()
        JsonCredential({"key": "value"}).validate()


class TestUnvalidatedTypes:
    def test_user_accepts_nothing_set(self):
        UserCredential().validate()

    def test_certificate_accepts_nothing_set(self):
        CertificateCredential().validate()

    def test_certificate_flags_default_to_none(self):
        cert = CertificateCredential("cert")
        assert cert.self_signed is None
        assert cert.generated is None
        assert cert.transitional is None


class TestActor:
    def test_factories(self):
        assert str(Actor.app("guid")) == "mtls-app:guid"
        assert str(Actor.user("uid")) == "uaa-user:uid"
        assert str(Actor.client("cid")) == "uaa-client:cid"

    def test_parse(self):
        actor = Actor.parse("uaa-client:credhub_client")
        assert actor.actor_type == ActorType.OAUTH_CLIENT
        assert actor.identity == "credhub_client"

    def test_parse_keeps_colons_in_identity(self):
        assert Actor.parse("uaa-user:zone:uid").identity == "zone:uid"

    @pytest.mark.parametrize("raw", ["no-separator", "mtls-app:", "bogus:id"])
    def test_parse_rejects_bad_actor(self, raw):
        with pytest.raises(InvalidArgumentError):
            Actor.parse(raw)


class TestPermission:
    def test_of_converts_operation_names(self):
        perm = Permission.of(Actor.app("guid"), "read", Operation.WRITE)
        assert perm.operations == (Operation.READ, Operation.WRITE)

    def test_no_operations_fails_validation(self):
        with pytest.raises(InvalidArgumentError):
            Permission(Actor.app("guid")).validate()

    def test_of_rejects_unknown_operation(self):
        with pytest.raises(InvalidArgumentError, match="launch"):
            Permission.of(Actor.app("guid"), "read", "launch")


class TestJsonCredential:
    def test_keeps_its_own_copy(self):
        doc = {"k": "v", "nested": {"a": [1, 2]}}
        value = JsonCredential(doc)
        doc.clear()
        assert value.value == {"k": "v", "nested": {"a": [1, 2]}}

    def test_nested_structures_are_copied(self):
        nested = {"a": [1, 2]}
        value = JsonCredential({"nested": nested})
        nested["a"].append(3)
        assert value.value == {"nested": {"a": [1, 2]}}
