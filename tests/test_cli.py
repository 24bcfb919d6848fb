"""Tests for credhub.cli — command line interface."""

import json

import pytest

from credhub.cli import main


@pytest.fixture
def cli_server(monkeypatch, credhub, server):
    """Route CLI commands to the recording server."""
    monkeypatch.setattr("credhub.cli._client", lambda: credhub)
    return server


class TestCli:
    def test_version(self, capsys):
        rc = main(["version"])
        assert rc == 0
        out = capsys.readouterr().out
        assert "credhub" in out
        assert "0.1.0" in out

    def test_version_flag(self, capsys):
        assert main(["--version"]) == 0
        assert "credhub" in capsys.readouterr().out

    def test_no_args(self, capsys):
        assert main([]) == 0

    def test_get(self, cli_server, capsys):
        cli_server.reply(200, {"data": [{"id": "1", "name": "/a", "type": "value", "value": "v"}]})
        assert main(["get", "-n", "/a"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out == {"id": "1", "name": "/a", "type": "value", "value": "v"}

    def test_get_by_id(self, cli_server, capsys):
        cli_server.reply(200, {"id": "42", "name": "/a", "type": "value", "value": "v"})
        assert main(["get", "--id", "42"]) == 0
        assert cli_server.last.url.path == "/api/v1/data/42"

    def test_get_history(self, cli_server, capsys):
        cli_server.reply(200, {"data": []})
        assert main(["get", "-n", "/a", "--versions", "3"]) == 0
        assert json.loads(capsys.readouterr().out) == {"data": []}

    def test_set_ssh(self, cli_server, capsys):
        cli_server.reply(
            200, {"name": "/k", "type": "ssh", "value": {"public_key": "pub"}}
        )
        assert main(["set", "-n", "k", "-t", "ssh", "--public-key", "pub"]) == 0
        assert cli_server.last_json() == {
            "name": "/k",
            "overwrite": True,
            "type": "ssh",
            "value": {"public_key": "pub"},
        }

    def test_set_json(self, cli_server):
        cli_server.reply(200, {"name": "/j", "type": "json", "value": {"a": 1}})
        assert main(["set", "-n", "/j", "-t", "json", "-v", '{"a": 1}', "--no-overwrite"]) == 0
        body = cli_server.last_json()
        assert body["value"] == {"a": 1}
        assert body["overwrite"] is False

    def test_set_invalid_json(self, cli_server, capsys):
        assert main(["set", "-n", "/j", "-t", "json", "-v", "{nope"]) == 1
        assert "not valid JSON" in capsys.readouterr().err
        assert cli_server.requests == []

    def test_set_ssh_without_keys_fails_before_sending(self, cli_server, capsys):
        assert main(["set", "-n", "/k", "-t", "ssh"]) == 1
        assert "public_key/private_key" in capsys.readouterr().err
        assert cli_server.requests == []

    def test_generate_user(self, cli_server):
        cli_server.reply(
            200,
            {"name": "/u", "type": "user", "value": {"username": "admin", "password": "pw"}},
        )
        assert main(["generate", "-n", "/u", "-t", "user", "--username", "admin"]) == 0
        body = cli_server.last_json()
        assert body["type"] == "user"
        assert body["value"] == {"username": "admin"}

    def test_generate_certificate(self, cli_server):
        cli_server.reply(
            200, {"name": "/cert", "type": "certificate", "value": {"certificate": "c"}}
        )
        argv = [
            "generate", "-n", "/cert", "-t", "certificate",
            "--common-name", "example.com", "--self-sign",
        ]
        assert main(argv) == 0
        assert cli_server.last_json()["parameters"] == {
            "common_name": "example.com",
            "self_sign": True,
        }

    def test_find(self, cli_server, capsys):
        cli_server.reply(200, {"credentials": [{"name": "/app/db"}]})
        assert main(["find", "--path", "/app"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out == {"credentials": [{"name": "/app/db", "version_created_at": None}]}

    def test_delete(self, cli_server, capsys):
        cli_server.reply(204)
        assert main(["delete", "-n", "/a"]) == 0
        assert cli_server.last.method == "DELETE"
        assert "Deleted /a" in capsys.readouterr().out

    def test_http_error_exit_code(self, cli_server, capsys):
        cli_server.reply(404, {"error": "The request could not be completed"})
        assert main(["delete", "-n", "/missing"]) == 1
        assert "HTTP 404" in capsys.readouterr().err

    def test_bad_config_exit_code(self, monkeypatch, capsys):
        monkeypatch.setenv("CREDHUB_READ_TIMEOUT", "soon")
        assert main(["delete", "-n", "/a"]) == 1
        assert "CREDHUB_READ_TIMEOUT" in capsys.readouterr().err
