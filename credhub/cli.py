"""
CredHub CLI — read, write, generate and delete credentials from a shell.

Usage:
    credhub get -n /app/db               # Current version as JSON
    credhub get -n /app/db --versions 3  # Last three versions
    credhub set -n /app/db -t value -v s3cret
    credhub generate -n /app/pw -t password --length 40
    credhub find --path /app
    credhub delete -n /app/db
    credhub version

Connection settings come from CREDHUB_* environment variables (see
credhub.config).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from credhub.errors import CredHubError

SET_TYPES = ["value", "password", "json", "user", "ssh", "rsa", "certificate"]
GENERATE_TYPES = ["password", "user", "ssh", "rsa", "certificate"]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="credhub",
        description="CredHub client — manage credentials in a CredHub server.",
    )
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    parser.add_argument("--verbose", action="store_true", help="Log HTTP requests")

    subparsers = parser.add_subparsers(dest="command")

    # get
    get_parser = subparsers.add_parser("get", help="Get a credential by name or id")
    target = get_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--name", "-n", help="Credential name")
    target.add_argument("--id", help="Credential version id")
    get_parser.add_argument("--versions", type=int, help="Number of versions to return")

    # set
    set_parser = subparsers.add_parser("set", help="Write a credential value")
    set_parser.add_argument("--name", "-n", required=True, help="Credential name")
    set_parser.add_argument("--type", "-t", required=True, choices=SET_TYPES)
    set_parser.add_argument("--value", "-v", help="Value, password, or JSON document")
    set_parser.add_argument("--username", help="Username (user)")
    set_parser.add_argument("--password", help="Password (user)")
    set_parser.add_argument("--public-key", help="Public key (ssh, rsa)")
    set_parser.add_argument("--private-key", help="Private key (ssh, rsa, certificate)")
    set_parser.add_argument("--certificate", help="Certificate (certificate)")
    set_parser.add_argument("--root", help="CA certificate (certificate)")
    set_parser.add_argument("--ca-name", help="Name of the signing CA credential (certificate)")
    set_parser.add_argument("--no-overwrite", action="store_true", help="Keep an existing value")

    # generate
    gen_parser = subparsers.add_parser("generate", help="Generate a credential")
    gen_parser.add_argument("--name", "-n", required=True, help="Credential name")
    gen_parser.add_argument("--type", "-t", required=True, choices=GENERATE_TYPES)
    gen_parser.add_argument("--length", type=int, help="Password length (password, user)")
    gen_parser.add_argument("--username", help="Username (user)")
    gen_parser.add_argument("--key-length", type=int, help="Key length (ssh, rsa, certificate)")
    gen_parser.add_argument("--ssh-comment", help="Comment appended to the public key (ssh)")
    gen_parser.add_argument("--common-name", help="Subject common name (certificate)")
    gen_parser.add_argument("--ca", help="Name of the signing CA (certificate)")
    gen_parser.add_argument("--self-sign", action="store_true", help="Self-sign (certificate)")
    gen_parser.add_argument("--is-ca", action="store_true", help="Generate a CA (certificate)")
    gen_parser.add_argument("--no-overwrite", action="store_true", help="Keep an existing value")

    # find
    find_parser = subparsers.add_parser("find", help="Find credentials by name or path")
    find_target = find_parser.add_mutually_exclusive_group(required=True)
    find_target.add_argument("--name-like", help="Substring of the credential name")
    find_target.add_argument("--path", help="Path prefix")

    # delete
    delete_parser = subparsers.add_parser("delete", help="Delete every version of a credential")
    delete_parser.add_argument("--name", "-n", required=True, help="Credential name")

    # version
    subparsers.add_parser("version", help="Show version")

    args = parser.parse_args(argv)

    if args.version or args.command == "version":
        from credhub import __version__

        print(f"credhub {__version__}")
        return 0

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    commands = {
        "get": _cmd_get,
        "set": _cmd_set,
        "generate": _cmd_generate,
        "find": _cmd_find,
        "delete": _cmd_delete,
    }
    try:
        return commands[args.command](args)
    except CredHubError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _client():
    from credhub.client import CredHubClient

    return CredHubClient()


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


def _cmd_get(args: argparse.Namespace) -> int:
    from credhub.serialization import details_to_wire

    with _client() as credhub:
        if args.id:
            _print_json(details_to_wire(credhub.get_by_id(args.id)))
        elif args.versions:
            history = credhub.get_by_name_with_history(args.name, args.versions)
            _print_json({"data": [details_to_wire(d) for d in history.data]})
        else:
            _print_json(details_to_wire(credhub.get_by_name(args.name)))
    return 0


def _build_value(args: argparse.Namespace):
    from credhub.errors import InvalidArgumentError
    from credhub.models import (
        CertificateCredential,
        JsonCredential,
        PasswordCredential,
        RsaCredential,
        SshCredential,
        UserCredential,
        ValueCredential,
    )

    if args.type == "value":
        return ValueCredential(args.value)
    if args.type == "password":
        return PasswordCredential(args.value)
    if args.type == "json":
        try:
            document = json.loads(args.value or "")
        except json.JSONDecodeError as e:
            raise InvalidArgumentError(f"--value is not valid JSON: {e}") from e
        if not isinstance(document, dict):
            raise InvalidArgumentError("--value must be a JSON object")
        return JsonCredential(document)
    if args.type == "user":
        return UserCredential(username=args.username, password=args.password)
    if args.type == "ssh":
        return SshCredential(public_key=args.public_key, private_key=args.private_key)
    if args.type == "rsa":
        return RsaCredential(public_key=args.public_key, private_key=args.private_key)
    return CertificateCredential(
        certificate=args.certificate,
        certificate_authority=args.root,
        private_key=args.private_key,
        certificate_authority_name=args.ca_name,
    )


def _cmd_set(args: argparse.Namespace) -> int:
    from credhub.request import CredentialRequest
    from credhub.serialization import details_to_wire

    request = (
        CredentialRequest.builder()
        .name(args.name)
        .overwrite(not args.no_overwrite)
        .value(_build_value(args))
        .build()
    )
    with _client() as credhub:
        _print_json(details_to_wire(credhub.write(request)))
    return 0


def _build_parameters(args: argparse.Namespace):
    from credhub.parameters import (
        CertificateParameters,
        PasswordParameters,
        RsaParameters,
        SshParameters,
        UserParameters,
    )

    if args.type == "password":
        return PasswordParameters(length=args.length)
    if args.type == "user":
        return UserParameters(length=args.length)
    if args.type == "ssh":
        return SshParameters(key_length=args.key_length, ssh_comment=args.ssh_comment)
    if args.type == "rsa":
        return RsaParameters(key_length=args.key_length)
    return CertificateParameters(
        key_length=args.key_length,
        common_name=args.common_name,
        certificate_authority=args.ca,
        self_sign=args.self_sign or None,
        is_ca=args.is_ca or None,
    )


def _cmd_generate(args: argparse.Namespace) -> int:
    from credhub.request import ParametersRequest
    from credhub.serialization import details_to_wire

    builder = (
        ParametersRequest.builder()
        .name(args.name)
        .overwrite(not args.no_overwrite)
        .parameters(_build_parameters(args))
    )
    if args.username:
        builder.username(args.username)
    request = builder.build()
    with _client() as credhub:
        _print_json(details_to_wire(credhub.generate(request)))
    return 0


def _cmd_find(args: argparse.Namespace) -> int:
    with _client() as credhub:
        if args.path:
            found = credhub.find_by_path(args.path)
        else:
            found = credhub.find_by_name(args.name_like)
    _print_json(
        {
            "credentials": [
                {
                    "name": str(s.name),
                    "version_created_at": s.version_created_at.isoformat()
                    if s.version_created_at
                    else None,
                }
                for s in found
            ]
        }
    )
    return 0


def _cmd_delete(args: argparse.Namespace) -> int:
    with _client() as credhub:
        credhub.delete_by_name(args.name)
    print(f"Deleted {args.name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
