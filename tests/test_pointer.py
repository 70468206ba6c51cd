import pytest

from jsonapi_flask.pointer import PointerPath, escape_token, unescape_token


def test_root_pointer_is_empty_string() -> None:
    assert str(PointerPath()) == ""
    assert PointerPath.parse("") == PointerPath()
    assert len(PointerPath.from_segments([])) == 0


def test_append_returns_new_pointer() -> None:
    base = PointerPath.from_segments(["data"])
    attr = base.append("attributes").append("name")

    assert str(base) == "/data"
    assert str(attr) == "/data/attributes/name"
    assert base / "type" == PointerPath(["data", "type"])


@pytest.mark.parametrize(
    "segments, text",
    [
        (["data", "attributes", "first/name"], "/data/attributes/first~1name"),
        (["data", "attributes", "a~b"], "/data/attributes/a~0b"),
        (["data", "attributes", "~1"], "/data/attributes/~01"),
        (["data", ""], "/data/"),
    ],
)
def test_rfc6901_escaping_round_trips(segments: list, text: str) -> None:
    pointer = PointerPath.from_segments(segments)
    assert pointer.to_string() == text
    assert PointerPath.parse(text) == pointer
    assert PointerPath.parse(text).segments == tuple(segments)


def test_token_escaping_order() -> None:
    assert escape_token("~/") == "~0~1"
    assert unescape_token("~01") == "~1"


def test_integer_segments_compare_structurally() -> None:
    assert PointerPath(["data", 0]) == PointerPath.parse("/data/0")
    assert hash(PointerPath(["data", 0])) == hash(PointerPath.parse("/data/0"))


def test_parse_rejects_relative_pointer() -> None:
    with pytest.raises(ValueError):
        PointerPath.parse("data/type")


def test_pointer_is_immutable() -> None:
    pointer = PointerPath(["data"])
    with pytest.raises(AttributeError):
        pointer._segments = ("other",)


def test_resolve() -> None:
    document = {"data": [{"type": "users", "attributes": {"a/b": 1}}]}

    assert PointerPath.parse("/data/0/attributes/a~1b").resolve(document) == 1
    assert PointerPath().resolve(document) is document
    with pytest.raises(KeyError):
        PointerPath.parse("/data/0/id").resolve(document)
    with pytest.raises(IndexError):
        PointerPath.parse("/data/1").resolve(document)
