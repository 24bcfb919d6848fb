"""Tests for credhub.config — environment loading and defaults."""

import os
from pathlib import Path

import pytest

from credhub.config import ClientOptions, Config, get_config, reset_config
from credhub.errors import InvalidArgumentError


class TestDefaults:
    def test_default_config(self):
        cfg = get_config()
        assert cfg.url == "https://localhost:9000"
        assert cfg.options.connection_timeout is None
        assert cfg.options.read_timeout is None
        assert cfg.options.ca_cert_files is None
        assert cfg.options.token == ""

    def test_api_url(self):
        assert Config(url="https://credhub:8844/").api_url == "https://credhub:8844/api/v1"

    def test_singleton(self):
        assert get_config() is get_config()

    def test_frozen(self):
        with pytest.raises(AttributeError):
            ClientOptions().token = "x"

    def test_using_custom_certs(self):
        assert not ClientOptions().using_custom_certs
        assert ClientOptions(ca_cert_files=(Path("/ca.pem"),)).using_custom_certs


class TestFromEnv:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CREDHUB_URL", "https://credhub.example:8844")
        monkeypatch.setenv("CREDHUB_CONNECT_TIMEOUT", "2.5")
        monkeypatch.setenv("CREDHUB_READ_TIMEOUT", "10")
        monkeypatch.setenv("CREDHUB_CA_CERT_FILES", os.pathsep.join(["/a.pem", "/b.pem"]))
        monkeypatch.setenv("CREDHUB_CLIENT_CERT", "/client.pem")
        monkeypatch.setenv("CREDHUB_CLIENT_KEY", "/client.key")
        monkeypatch.setenv("CREDHUB_TOKEN", "tok")
        reset_config()

        cfg = get_config()
        assert cfg.url == "https://credhub.example:8844"
        assert cfg.options.connection_timeout == 2.5
        assert cfg.options.read_timeout == 10.0
        assert cfg.options.ca_cert_files == (Path("/a.pem"), Path("/b.pem"))
        assert cfg.options.client_cert == Path("/client.pem")
        assert cfg.options.client_key == Path("/client.key")
        assert cfg.options.token == "tok"

    def test_empty_ca_list_means_system_trust(self, monkeypatch):
        monkeypatch.setenv("CREDHUB_CA_CERT_FILES", "")
        reset_config()
        assert get_config().options.ca_cert_files is None

    def test_reset(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("CREDHUB_URL", "https://other")
        reset_config()
        assert get_config() is not first
        assert get_config().url == "https://other"

    @pytest.mark.parametrize("key", ["CREDHUB_CONNECT_TIMEOUT", "CREDHUB_READ_TIMEOUT"])
    def test_bad_timeout_names_the_variable(self, monkeypatch, key):
        monkeypatch.setenv(key, "abc")
        reset_config()
        with pytest.raises(InvalidArgumentError, match=key):
            get_config()
