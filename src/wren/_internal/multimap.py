"""MultiValueMapping protocol — shared interface for QueryParams and FormData.

A structural protocol so the input normalizer can accept any
multi-valued mapping without coupling to the concrete type.
"""

from collections.abc import Iterator
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MultiValueMapping(Protocol):
    """A read-only mapping where keys can have multiple values.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key, in submission order.

    Defined with explicit dunder methods because Protocols cannot
    inherit from non-Protocol ABCs like ``Mapping``.
    """

    def __getitem__(self, key: str) -> Any: ...
    def __contains__(self, key: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def __len__(self) -> int: ...
    def get_list(self, key: str) -> list[Any]: ...


def get_all(source: Any, key: str) -> list[Any]:
    """Return every value for *key* from a multi-valued source.

    Accepts our ``get_list`` spelling and the ``getlist`` spelling used
    by Starlette and Werkzeug multidicts.
    """
    if isinstance(source, MultiValueMapping):
        return list(source.get_list(key))
    return list(source.getlist(key))


def is_multi_valued(source: object) -> bool:
    """True for any source that can return all values for a key."""
    if isinstance(source, MultiValueMapping):
        return True
    return callable(getattr(source, "getlist", None)) and hasattr(source, "keys")


def keys_of(source: Any) -> list[str]:
    """Distinct keys of a multi-valued source, in first-seen order."""
    keys = source if isinstance(source, MultiValueMapping) else source.keys()
    return list(dict.fromkeys(keys))
