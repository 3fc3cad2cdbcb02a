"""Command-line access to the did:web codec."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .codec import decode, document_url, encode, validate
from .document import build_document, serialize_document
from .multi_key import MultiKey

LOGGER = logging.getLogger(__name__)


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def _emit(result: Optional[str], message: str) -> int:
    if result is None:
        return _fail(message)
    print(result)
    return 0


def cmd_encode(args) -> int:
    return _emit(encode(args.url), f"Cannot encode URL: {args.url}")


def cmd_decode(args) -> int:
    return _emit(
        decode(args.did, strict=args.strict), f"Invalid did:web identifier: {args.did}"
    )


def cmd_document_url(args) -> int:
    return _emit(
        document_url(args.did, strict=args.strict),
        f"Invalid did:web identifier: {args.did}",
    )


def cmd_validate(args) -> int:
    valid = validate(args.did, strict=args.strict)
    print(json.dumps({"did": args.did, "valid": valid}))
    return 0 if valid else 1


def _load_jwks(path: str) -> list[dict]:
    with open(Path(path)) as inp:
        jwks = json.load(inp)
    if isinstance(jwks, dict):
        jwks = jwks.get("keys")
    if not isinstance(jwks, list):
        raise ValueError(f"Expected a JSON Web Key set in {path}")
    return jwks


def cmd_document(args) -> int:
    multikeys = {}
    for entry in args.multikey or ():
        kid, sep, key = entry.partition("=")
        if not sep or not kid or not key:
            return _fail(f"Expected KID=MULTIKEY, got: {entry}")
        multikeys[kid] = MultiKey(key)
    try:
        jwks = _load_jwks(args.jwks) if args.jwks else None
        doc = build_document(args.did, jwks, multikeys=multikeys)
    except (OSError, json.JSONDecodeError, ValueError) as err:
        return _fail(f"Error building DID document: {err}")
    print(serialize_document(doc, canonical=args.canonical))
    return 0


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="did_web", description="convert between URLs and did:web identifiers"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="the logging level",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    cmd = commands.add_parser("encode", help="generate a did:web identifier from a URL")
    cmd.add_argument("url", help="the URL to encode")
    cmd.set_defaults(func=cmd_encode)

    for name, func, desc in (
        ("decode", cmd_decode, "convert a did:web identifier to an HTTPS URL"),
        ("validate", cmd_validate, "check a did:web identifier"),
        ("document-url", cmd_document_url, "locate the DID document for an identifier"),
    ):
        cmd = commands.add_parser(name, help=desc)
        cmd.add_argument("did", help="the did:web identifier")
        cmd.add_argument(
            "--strict", action="store_true", help="reject empty path segments"
        )
        cmd.set_defaults(func=func)

    cmd = commands.add_parser("document", help="generate a DID document")
    cmd.add_argument("did", help="the did:web identifier of the document")
    cmd.add_argument("--jwks", help="the path to a JSON Web Key set")
    cmd.add_argument(
        "--multikey",
        action="append",
        metavar="KID=MULTIKEY",
        help="add a multibase-encoded public key",
    )
    cmd.add_argument(
        "--canonical", action="store_true", help="output canonical JSON (RFC 8785)"
    )
    cmd.set_defaults(func=cmd_document)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = make_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))
    LOGGER.debug("Running command: %s", args.command)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
