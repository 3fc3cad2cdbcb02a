from typing import Optional

from hypothesis import given, strategies as st

from did_web import DIDUrl, decode, encode, validate
from did_web.const import DEFAULT_PORTS

label = st.from_regex(r"[a-zA-Z][a-zA-Z0-9\-]{0,10}", fullmatch=True)
hosts = st.lists(label, min_size=1, max_size=4).map(".".join)
ports = st.one_of(st.none(), st.integers(min_value=1, max_value=65535))
segments = st.lists(
    st.from_regex(r"[A-Za-z0-9_.\-]{1,10}", fullmatch=True), max_size=5
)
slashes = st.integers(min_value=1, max_value=3).map(lambda n: "/" * n)
schemes = st.sampled_from(["https", "http", "wss"])


def _netloc(host: str, port: Optional[int]) -> str:
    return host if port is None else f"{host}:{port}"


@given(
    scheme=schemes,
    host=hosts,
    port=ports,
    path=segments,
    sep=slashes,
    trailing=st.booleans(),
)
def test_round_trip(scheme, host, port, path, sep, trailing):
    url = f"{scheme}://{_netloc(host, port)}"
    if path:
        url += sep + sep.join(path)
    if trailing:
        url += sep
    kept_port = None if DEFAULT_PORTS.get(scheme) == port else port
    expect = f"https://{_netloc(host, kept_port)}"
    if path:
        expect += "/" + "/".join(path)

    did = encode(url)
    assert did is not None
    assert validate(did, strict=True)
    assert decode(did) == expect


@given(host=hosts, port=ports, path=segments)
def test_slash_layouts_agree(host, port, path):
    base = f"https://{_netloc(host, port)}"
    assert encode(base + "/" + "/".join(path)) == encode(
        base + "//" + "//".join(path) + "/"
    )


@given(st.text())
def test_encode_agrees_with_validate(text):
    did = encode(text)
    assert did is None or validate(did)


@given(st.text())
def test_validate_is_total(text):
    result = validate(text)
    assert result is validate(text)
    assert isinstance(result, bool)
    assert (decode(text) is None) is not result


@given(
    host=hosts,
    path=st.lists(
        st.text(alphabet=st.characters(blacklist_categories=("Cs",)), min_size=1),
        max_size=4,
    ),
)
def test_encoded_path_is_did_url(host, path):
    did = encode(f"https://{host}/" + "/".join(path))
    assert did is not None
    assert DIDUrl.decode(did).did == did
