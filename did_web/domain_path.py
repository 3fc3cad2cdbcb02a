"""Domain and path handling for did:web identifiers."""

import re
import urllib.parse
from dataclasses import dataclass, field
from typing import Optional

from .const import (
    DEFAULT_PORTS,
    DID_PREFIX,
    DOCUMENT_FILENAME,
    PORT_ESCAPE,
    URL_SCHEME,
    WELL_KNOWN_PATH,
)

INVALID_HOST_CHARS = re.compile(r"[\s#%/:<>?@\[\\\]^|]")


def quote_segment(segment: str) -> str:
    """Percent-encode a path segment down to the DID idchar set.

    Existing escapes are kept. Colons are escaped so they cannot split the
    segment.
    """
    return urllib.parse.quote(segment, safe="%").replace("~", "%7E")


@dataclass
class DomainPath:
    """Domain and path (and port) compatible with a did:web identifier."""

    domain: str
    port: Optional[str] = None
    path: list[str] = field(default_factory=list)

    @classmethod
    def parse_url(cls, url: str) -> "DomainPath":
        """Parse an absolute URL, keeping only the host, port and path.

        Empty path components are dropped, so repeated, leading and trailing
        slashes all collapse. Segments are percent-encoded with `quote_segment`.
        A port equal to the scheme default is dropped. The host keeps its
        original case.

        Raises:
            ValueError: on invalid inputs

        """
        parts = urllib.parse.urlsplit(url)
        if not parts.scheme or not parts.netloc:
            raise ValueError("Expected an absolute URL")
        host = parts.netloc.rpartition("@")[2]
        if host.startswith("["):
            raise ValueError("IPv6 hosts are not supported")
        host, _, port_str = host.partition(":")
        if port_str:
            if not (port_str.isascii() and port_str.isdigit()):
                raise ValueError("Invalid port specification")
            port_num = int(port_str)
            if port_num > 65535:
                raise ValueError("Port out of range")
            if DEFAULT_PORTS.get(parts.scheme) == port_num:
                port = None
            else:
                port = str(port_num)
        else:
            port = None
        path = [quote_segment(p) for p in parts.path.split("/") if p]
        ret = DomainPath(domain=host, port=port, path=path)
        ret.validate()
        return ret

    @classmethod
    def parse_identifier(cls, method_id: str) -> "DomainPath":
        """Parse a method-specific identifier (domain%3Aport:path:path).

        Only the first port escape is reversed. Path segments are kept as
        given, including empty ones.
        """
        domain, *path = method_id.split(":")
        domain, sep, port = domain.replace(PORT_ESCAPE, ":", 1).partition(":")
        return DomainPath(domain=domain, port=port if sep else None, path=path)

    @property
    def identifier(self) -> str:
        """Convert into identifier format."""
        domain = self.domain
        if self.port is not None:
            domain += f"{PORT_ESCAPE}{self.port}"
        return ":".join((domain, *self.path))

    @property
    def did(self) -> str:
        """Access the full did:web identifier."""
        return DID_PREFIX + self.identifier

    @property
    def domain_port(self) -> str:
        """Access the combined domain name and port in URL format."""
        domain = self.domain
        if self.port is not None:
            domain += f":{self.port}"
        return domain

    @property
    def url(self) -> str:
        """Convert into an HTTPS URL."""
        url = f"{URL_SCHEME}://{self.domain_port}"
        if self.path:
            url += "/" + "/".join(self.path)
        return url

    @property
    def document_url(self) -> str:
        """Access the location of the DID document."""
        if self.path:
            return f"{self.url}/{DOCUMENT_FILENAME}"
        return f"{self.url}/{WELL_KNOWN_PATH}/{DOCUMENT_FILENAME}"

    def __str__(self) -> str:
        """Convert into normalized format."""
        return "/".join((self.domain_port, *self.path))

    def validate(self):
        """Validate the domain name."""
        if not self.domain:
            raise ValueError("Missing domain name")
        if INVALID_HOST_CHARS.search(self.domain):
            raise ValueError("Invalid domain name")
