"""Multikey public keys for did:web verification methods."""

from typing import ClassVar, Tuple

from multiformats import multibase, multicodec

MULTIKEY_TYPE = "Multikey"


class MultiKey(str):
    """The ``publicKeyMultibase`` value of a ``Multikey`` verification method.

    The raw public key is prefixed with its multicodec (``ed25519-pub``,
    ``p256-pub``, ...) and encoded as base58btc, giving the familiar
    ``z6Mk...`` form for Ed25519 keys.
    """

    BASE: ClassVar[str] = "base58btc"

    @classmethod
    def from_public_key(cls, codec: str, pk: bytes) -> "MultiKey":
        try:
            pk_mc = multicodec.wrap(codec, pk)
        except (KeyError, ValueError) as e:
            raise ValueError(f"Unsupported key codec: {codec}") from e
        return MultiKey(multibase.encode(pk_mc, MultiKey.BASE))

    def decode(self) -> Tuple[str, bytes]:
        """Split the key into its multicodec name and raw bytes.

        Raises:
            ValueError: if the value is not a base58btc multikey

        """
        try:
            base, pk_mc = multibase.decode_raw(self)
            codec, pk_b = multicodec.unwrap(pk_mc)
        except (KeyError, ValueError) as e:
            raise ValueError("Error decoding multikey") from e
        if base.name != MultiKey.BASE:
            raise ValueError("Unexpected multibase encoding for multikey")
        return (codec.name, pk_b)

    @property
    def codec(self) -> str:
        return self.decode()[0]

    def verification_method(self, kid: str, controller: str) -> dict:
        """Render a verification method node for a document controller."""
        self.decode()
        return {
            "id": kid,
            "type": MULTIKEY_TYPE,
            "controller": controller,
            "publicKeyMultibase": str(self),
        }
