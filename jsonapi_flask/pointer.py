"""
    JSON Pointer (RFC 6901) values

    A PointerPath identifies the location in the request document an
    extracted value came from, eg. /data/attributes/name
"""
from typing import Any, Iterable, Tuple, Union

Segment = Union[str, int]


def escape_token(token: Segment) -> str:
    """
    :param token: raw pointer segment
    :return: escaped reference token ("~" => "~0", "/" => "~1")
    """
    # "~" has to be escaped first, otherwise "/" => "~1" => "~01"
    return str(token).replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    """
    :param token: escaped reference token
    :return: raw pointer segment
    """
    return token.replace("~1", "/").replace("~0", "~")


class PointerPath:
    """
    Immutable sequence of path segments, convertible to and from the canonical "/a/b/c" string form.
    The empty path denotes the document root ("")
    """

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[Segment] = ()) -> None:
        object.__setattr__(self, "_segments", tuple(segments))

    @classmethod
    def from_segments(cls, segments: Iterable[Segment]) -> "PointerPath":
        return cls(segments)

    @classmethod
    def parse(cls, text: str) -> "PointerPath":
        """
        :param text: pointer string, eg. "/data/attributes/first~1name"
        :return: PointerPath
        """
        if text == "":
            return cls()
        if not text.startswith("/"):
            raise ValueError(f"JSON Pointer must be empty or start with '/': {text!r}")
        return cls(unescape_token(token) for token in text[1:].split("/"))

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    def append(self, segment: Segment) -> "PointerPath":
        """
        :param segment: segment to add
        :return: a new PointerPath, this one is left untouched
        """
        return PointerPath(self._segments + (segment,))

    def to_string(self) -> str:
        return "".join("/" + escape_token(segment) for segment in self._segments)

    def resolve(self, document: Any) -> Any:
        """
        Look up the value at this location in `document`
        :param document: parsed json tree
        :return: the referenced value
        :raises KeyError: when an object member doesn't exist
        :raises IndexError: when an array index is out of range
        """
        current = document
        for segment in self._segments:
            if isinstance(current, list):
                try:
                    current = current[int(segment)]
                except ValueError:
                    raise KeyError(f"Invalid array index {segment!r} in {self}")
            elif isinstance(current, dict):
                current = current[str(segment)]
            else:
                raise KeyError(f"Can't resolve {segment!r} in {self}")
        return current

    def __truediv__(self, segment: Segment) -> "PointerPath":
        return self.append(segment)

    def __setattr__(self, name, value):
        raise AttributeError("PointerPath is immutable")

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self):
        return iter(self._segments)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PointerPath):
            return tuple(map(str, self._segments)) == tuple(map(str, other._segments))
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(map(str, self._segments)))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PointerPath({self.to_string()!r})"


ROOT = PointerPath()
DATA = ROOT / "data"
