"""Conversion between HTTPS URLs and did:web identifiers.

All functions here are total: malformed input yields ``None`` (or ``False``
for `validate`) and never raises.

See https://w3c-ccg.github.io/did-method-web/
"""

import logging
from typing import Optional

from .const import DID_PREFIX
from .domain_path import DomainPath

LOGGER = logging.getLogger(__name__)


def encode(url: Optional[str]) -> Optional[str]:
    """Generate a did:web identifier from a URL.

    Returns ``None`` for an absent, empty or malformed URL.
    """
    if not url or not isinstance(url, str):
        return None
    try:
        domain_path = DomainPath.parse_url(url)
    except ValueError as err:
        LOGGER.debug("Cannot encode URL %r: %s", url, err)
        return None
    return domain_path.did


def validate(identifier: str, *, strict: bool = False) -> bool:
    """Check whether a string is a did:web identifier.

    Only the first segment of the method-specific identifier must be
    non-empty. Empty interior segments (``did:web:example.com::path``) are
    accepted unless `strict` is set, for compatibility with identifiers
    issued before the check existed.
    """
    if not identifier or not isinstance(identifier, str):
        return False
    if not identifier.startswith(DID_PREFIX):
        return False
    method_id = identifier[len(DID_PREFIX) :]
    if not method_id:
        return False
    parts = method_id.split(":")
    if not parts or not parts[0]:
        return False
    if strict and "" in parts:
        return False
    return True


def parse(identifier: str, *, strict: bool = False) -> Optional[DomainPath]:
    """Parse a did:web identifier into its domain and path, if valid."""
    if not validate(identifier, strict=strict):
        LOGGER.debug("Rejected did:web identifier %r", identifier)
        return None
    return DomainPath.parse_identifier(identifier[len(DID_PREFIX) :])


def decode(identifier: str, *, strict: bool = False) -> Optional[str]:
    """Convert a did:web identifier back to an HTTPS URL.

    The scheme is always ``https``. Returns ``None`` for invalid identifiers.
    """
    domain_path = parse(identifier, strict=strict)
    return domain_path.url if domain_path else None


def document_url(identifier: str, *, strict: bool = False) -> Optional[str]:
    """Determine the location of the DID document for a did:web identifier.

    - did:web:example.com -> https://example.com/.well-known/did.json
    - did:web:example.com:user:alice -> https://example.com/user/alice/did.json
    """
    domain_path = parse(identifier, strict=strict)
    return domain_path.document_url if domain_path else None
