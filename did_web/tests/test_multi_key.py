import pytest

from multiformats import multibase, multicodec

from did_web.multi_key import MultiKey


def test_multi_key():
    pk = b"\xaby\xbaw\xfaa\x9f\xf2\xc9r\xfd\x9a\xeb\x830.\xda\x8e$U%_\xfe\x1a\x13\xf0\x9b\x1b+\xdc\x1e_"
    codec = "ed25519-pub"
    multi_key = MultiKey.from_public_key(codec, pk)
    assert isinstance(multi_key, MultiKey)
    assert multi_key.startswith("z6Mk")
    (decoded_codec, decoded_pk_b) = multi_key.decode()
    assert decoded_codec == codec
    assert decoded_pk_b == pk

    # Public key is not bytes
    pk_bad = "\xaby\xbaw\xfaa\x9f\xf2\xc9r\xfd\x9a\xeb\x830.\xda\x8e$U%_\xfe\x1a\x13\xf0\x9b\x1b+\xdc\x1e_"
    with pytest.raises(TypeError):
        MultiKey.from_public_key(codec, pk_bad)

    # Invalid codec
    codec_bad = "edd225"
    with pytest.raises(ValueError):
        MultiKey.from_public_key(codec_bad, pk)


def test_decode_multi_key():
    codec, pk = MultiKey("z6MktKzAfqQr4EurmuyBaB3xq1PJFYe7nrgw6FXWRDkquSAs").decode()
    assert codec == "ed25519-pub"
    assert len(pk) == 32

    # base64url rather than base58btc
    b64_key = multibase.encode(multicodec.wrap("ed25519-pub", pk), "base64url")
    with pytest.raises(ValueError):
        MultiKey(b64_key).decode()

    with pytest.raises(ValueError):
        MultiKey("!invalid").decode()


def test_verification_method():
    key = MultiKey("z6MktKzAfqQr4EurmuyBaB3xq1PJFYe7nrgw6FXWRDkquSAs")
    assert key.codec == "ed25519-pub"
    assert key.verification_method("did:web:example.com#k", "did:web:example.com") == {
        "id": "did:web:example.com#k",
        "type": "Multikey",
        "controller": "did:web:example.com",
        "publicKeyMultibase": str(key),
    }

    with pytest.raises(ValueError):
        MultiKey("!invalid").verification_method("#k", "did:web:example.com")
