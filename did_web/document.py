"""Construction of did:web DID documents and lookup of their verification methods."""

import json
import logging
from typing import Mapping, Optional, Sequence

import jsoncanon

from .codec import validate
from .const import DID_CONTEXT, JWS_2020_CONTEXT, MKEY_CONTEXT, METHOD_NAME
from .did_url import DIDUrl
from .multi_key import MultiKey

LOGGER = logging.getLogger(__name__)


def build_document(
    did: str,
    jwks: Optional[Sequence[dict]] = None,
    *,
    multikeys: Optional[Mapping[str, MultiKey]] = None,
) -> dict:
    """
    Generate a DID document for an issuer from its public keys.

    Each JWK becomes a ``JsonWebKey2020`` verification method identified by
    its ``kid`` (or ``key-<index>`` when absent). Each multikey becomes a
    ``Multikey`` verification method under its mapping key. All methods are
    usable for authentication and assertion.
    """
    if not validate(did):
        raise ValueError(f"Invalid did:{METHOD_NAME} identifier: {did}")
    # method ids must stay resolvable through DIDUrl
    if DIDUrl.decode(did).did != did:
        raise ValueError(f"Invalid DID URL characters in {did}")
    doc = {
        "@context": [DID_CONTEXT],
        "id": did,
        "verificationMethod": [],
        "authentication": [],
        "assertionMethod": [],
    }
    for index, jwk in enumerate(jwks or ()):
        kid = jwk.get("kid") if isinstance(jwk, dict) else None
        add_jwk(doc, kid or f"key-{index}", jwk)
    for kid, key in (multikeys or {}).items():
        add_multikey(doc, kid, key)
    LOGGER.debug(
        "Built DID document for %s with %d verification methods",
        did,
        len(doc["verificationMethod"]),
    )
    return doc


def _add_context(document: dict, context: str):
    ctx = document.setdefault("@context", [DID_CONTEXT])
    if context not in ctx:
        ctx.append(context)


def _method_id(document: dict, kid: str) -> str:
    controller = document["id"]
    if kid.startswith("#"):
        kid = controller + kid
    elif "#" not in kid:
        kid = f"{controller}#{kid}"
    if kid in reference_map(document):
        raise ValueError(f"Duplicate verification method: {kid}")
    return kid


def _add_method(document: dict, method: dict):
    document["verificationMethod"].append(method)
    document["authentication"].append(method["id"])
    document["assertionMethod"].append(method["id"])


def add_jwk(document: dict, kid: str, jwk: dict):
    """Add a JSON Web Key as a verification method."""
    if not isinstance(jwk, dict) or "kty" not in jwk:
        raise ValueError("Invalid JSON Web Key")
    kid = _method_id(document, kid)
    _add_context(document, JWS_2020_CONTEXT)
    _add_method(
        document,
        {
            "id": kid,
            "type": "JsonWebKey2020",
            "controller": document["id"],
            "publicKeyJwk": jwk,
        },
    )


def add_multikey(document: dict, kid: str, key: MultiKey):
    """Add a multibase-encoded public key as a verification method."""
    method = MultiKey(key).verification_method(
        _method_id(document, kid), document["id"]
    )
    _add_context(document, MKEY_CONTEXT)
    _add_method(document, method)


def _add_ref(doc_id: str, node: dict, refmap: dict):
    reft = node.get("id")
    if not isinstance(reft, str):
        return
    if reft.startswith("#"):
        reft = doc_id + reft
    elif "#" not in reft:
        return
    if reft in refmap:
        raise ValueError(f"Duplicate reference: {reft}")
    refmap[reft] = node


def reference_map(document: dict) -> dict[str, dict]:
    """Index the top-level nodes of a document by their absolute fragment id."""
    # indexing top-level collections only
    doc_id = document.get("id")
    if not isinstance(doc_id, str):
        raise ValueError("Missing document id")
    res = {}
    for v in document.values():
        if isinstance(v, dict):
            _add_ref(doc_id, v, res)
        elif isinstance(v, list):
            for vi in v:
                if isinstance(vi, dict):
                    _add_ref(doc_id, vi, res)
    return res


def find_verification_method(document: dict, reference: str) -> Optional[dict]:
    """Look up a verification method by relative (``#kid``) or absolute DID URL.

    Raises:
        ValueError: if the reference points at a different DID

    """
    doc_id = document.get("id")
    if reference.startswith("#"):
        reference = f"{doc_id}{reference}"
    didurl = DIDUrl.decode(reference)
    if didurl.did != doc_id:
        raise ValueError(f"Reference does not belong to {doc_id}: {reference}")
    if not didurl.fragment:
        return None
    node = reference_map(document).get(f"{doc_id}#{didurl.fragment}")
    if node is None or node not in document.get("verificationMethod", []):
        return None
    return node


def serialize_document(document: dict, *, canonical: bool = False) -> str:
    """Serialize a DID document as indented or canonical (RFC 8785) JSON."""
    if canonical:
        return jsoncanon.canonicalize(document).decode("utf-8")
    return json.dumps(document, indent=2)
