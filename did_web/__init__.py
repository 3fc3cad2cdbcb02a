"""Encoding, decoding and validation of did:web identifiers."""

from .codec import decode, document_url, encode, parse, validate
from .did_url import DIDUrl
from .domain_path import DomainPath

__all__ = [
    "DIDUrl",
    "DomainPath",
    "decode",
    "document_url",
    "encode",
    "parse",
    "validate",
]
