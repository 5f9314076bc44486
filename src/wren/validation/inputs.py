"""Input normalization — flat multi-valued sources to nested structures.

Form submissions and query strings are flat: ``address.city=Paris``,
``items[0].name=Pen``, ``tags=a&tags=b``. ``normalize_input()`` expands
them into the nested shape a schema describes::

    normalize_input(QueryParams(b"items[0].name=Pen&tags=a&tags=b"))
    # {"items": SparseArray({0: {"name": ["Pen"]}}), "tags": ["a", "b"]}

Every key keeps *all* of its values as a list, even a single one, so the
coercion rules can treat scalar and array fields uniformly.
"""

import re
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, overload

from wren._internal.multimap import get_all, is_multi_valued, keys_of

# foo[0] -> foo.0
_INDEX_RE = re.compile(r"\[\s*(\d+)\s*\]")


class SparseArray(Sequence[Any]):
    """A read-only sequence assembled from explicitly indexed keys.

    Length is the highest index plus one; unset positions read as
    ``None``. Memory is proportional to the number of submitted keys,
    not to the largest index, so ``items[999999999]`` costs one entry
    and is rejected by the array limit instead of being materialized.
    """

    __slots__ = ("_items", "_length")

    def __init__(self, items: Mapping[int, Any]) -> None:
        self._items = dict(items)
        self._length = max(self._items, default=-1) + 1

    def __len__(self) -> int:
        return self._length

    @overload
    def __getitem__(self, index: int) -> Any: ...
    @overload
    def __getitem__(self, index: slice) -> list[Any]: ...
    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(self._length))]
        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError("SparseArray index out of range")
        return self._items.get(index)

    def __iter__(self) -> Iterator[Any]:
        for i in range(self._length):
            yield self._items.get(i)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return len(other) == self._length and all(a == b for a, b in zip(self, other, strict=True))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SparseArray({self._items!r})"


class _Indexed(dict[int, Any]):
    """Assembly-time stand-in for an array addressed by numeric segments."""


def normalize_input(source: Any) -> Any:
    """Expand a multi-valued source into a nested structure.

    Anything that is not multi-valued is returned unchanged.
    """
    if not is_multi_valued(source):
        return source

    root: dict[str, Any] = {}
    for key in keys_of(source):
        path = _INDEX_RE.sub(r".\1", key)
        _assign(root, path.split("."), get_all(source, key))
    return _freeze(root)


def _assign(root: dict[str, Any], segments: list[str], value: Any) -> None:
    node: dict[Any, Any] = root
    for segment, following in zip(segments, segments[1:], strict=False):
        slot = _slot(node, segment)
        child = node.get(slot)
        if not isinstance(child, dict):
            child = _Indexed() if _is_index(following) else {}
            node[slot] = child
        node = child
    node[_slot(node, segments[-1])] = value


def _slot(node: dict[Any, Any], segment: str) -> Any:
    if isinstance(node, _Indexed) and _is_index(segment):
        return int(segment)
    return segment


def _freeze(node: Any) -> Any:
    if isinstance(node, _Indexed):
        return SparseArray({i: _freeze(v) for i, v in node.items() if isinstance(i, int)})
    if isinstance(node, dict):
        return {k: _freeze(v) for k, v in node.items()}
    return node


def _is_index(segment: str) -> bool:
    return segment.isascii() and segment.isdigit()
