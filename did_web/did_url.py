"""DID URL format handling."""

import re
from dataclasses import dataclass
from typing import ClassVar, Optional
from urllib.parse import parse_qs

from .const import METHOD_NAME
from .domain_path import DomainPath


@dataclass
class DIDUrl:
    """A DID URL as defined by Decentralized Identifiers 1.0."""

    PATTERN: ClassVar[re.Pattern] = re.compile(
        r"^did:([a-z0-9]+):((?:[a-zA-Z0-9%_\.\-]*:)*[a-zA-Z0-9%_\.\-]+)$"
    )

    method: str
    identifier: str
    path: Optional[str] = None
    query: Optional[str] = None
    fragment: Optional[str] = None

    @property
    def root(self) -> "DIDUrl":
        """Access this DID URL without any path, fragment, or query parameters."""
        return DIDUrl(method=self.method, identifier=self.identifier)

    @classmethod
    def decode(cls, url: str) -> "DIDUrl":
        """Decode a string as a DID URL.

        The query and fragment are stored without their leading delimiter;
        the path keeps its leading slash.

        Raises:
            ValueError: on invalid inputs

        """
        if not isinstance(url, str):
            raise ValueError("Invalid DID URL")
        url, sep, fragment = url.partition("#")
        fragment = fragment if sep else None
        url, sep, query = url.partition("?")
        query = query if sep else None
        path = None
        if (pos := url.find("/")) >= 0:
            path = url[pos:]
            url = url[:pos]
        parts = cls.PATTERN.match(url)
        if not parts:
            raise ValueError("Invalid DID URL")
        return DIDUrl(
            method=parts[1],
            identifier=parts[2],
            path=path,
            query=query,
            fragment=fragment,
        )

    @property
    def did(self) -> str:
        """Access the root DID identifier for this DID URL."""
        return f"did:{self.method}:{self.identifier}"

    @property
    def is_web(self) -> bool:
        """Check whether this DID URL uses the did:web method."""
        return self.method == METHOD_NAME

    @property
    def domain_path(self) -> DomainPath:
        """Access the domain and path of a did:web DID URL.

        Raises:
            ValueError: if the DID method is not did:web

        """
        if not self.is_web:
            raise ValueError(f"Not a did:{METHOD_NAME} DID: {self.did}")
        return DomainPath.parse_identifier(self.identifier)

    @property
    def query_dict(self) -> dict:
        """Extract a parameter dictionary for this DID URL."""
        if self.query:
            return {k: v[-1] for k, v in parse_qs(self.query).items()}
        return {}

    def __str__(self) -> str:
        ret = self.did
        if self.path:
            ret += self.path
        if self.query is not None:
            ret += "?" + self.query
        if self.fragment is not None:
            ret += "#" + self.fragment
        return ret
