"""Constants for did:web identifiers and documents."""

METHOD_NAME = "web"
DID_PREFIX = f"did:{METHOD_NAME}:"

# the colon between host and port collides with the segment separator
PORT_ESCAPE = "%3A"

URL_SCHEME = "https"
DOCUMENT_FILENAME = "did.json"
WELL_KNOWN_PATH = ".well-known"

DID_CONTEXT = "https://www.w3.org/ns/did/v1"
JWS_2020_CONTEXT = "https://w3id.org/security/suites/jws-2020/v1"
MKEY_CONTEXT = "https://w3id.org/security/multikey/v1"

# ports left implicit when they match the scheme default
DEFAULT_PORTS = {"ftp": 21, "http": 80, "ws": 80, "https": 443, "wss": 443}
