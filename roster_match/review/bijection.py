"""One-to-one map kept consistent in both directions."""

from collections.abc import Iterator
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class BijectiveMap(Generic[K, V]):
    """Mapping where every value is held by at most one key.

    Backed by a forward and a reverse dict that are always updated
    together. Assigning a value already held by another key moves it.
    """

    def __init__(self) -> None:
        self._forward: dict[K, V] = {}
        self._reverse: dict[V, K] = {}

    def assign(self, key: K, value: V) -> K | None:
        """Map ``key`` to ``value``, taking the value from any other holder.

        Returns:
            The key that previously held ``value``, or None
        """
        displaced = self._reverse.get(value)
        if displaced is not None and displaced != key:
            del self._forward[displaced]
        else:
            displaced = None

        previous = self._forward.get(key)
        if previous is not None and previous != value:
            del self._reverse[previous]

        self._forward[key] = value
        self._reverse[value] = key
        return displaced

    def unassign(self, key: K) -> V | None:
        """Remove any mapping for ``key``; returns the value it held."""
        value = self._forward.pop(key, None)
        if value is not None:
            del self._reverse[value]
        return value

    def get(self, key: K) -> V | None:
        return self._forward.get(key)

    def key_for(self, value: V) -> K | None:
        return self._reverse.get(value)

    def holds(self, value: V) -> bool:
        return value in self._reverse

    def clear(self) -> None:
        self._forward.clear()
        self._reverse.clear()

    def items(self) -> list[tuple[K, V]]:
        return list(self._forward.items())

    def as_dict(self) -> dict[K, V]:
        return dict(self._forward)

    def __contains__(self, key: object) -> bool:
        return key in self._forward

    def __iter__(self) -> Iterator[K]:
        return iter(self._forward)

    def __len__(self) -> int:
        return len(self._forward)
