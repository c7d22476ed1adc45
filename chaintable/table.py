from collections.abc import Set
from dataclasses import dataclass, field
import logging
import math
from typing import Any, Iterable, Iterator


logger = logging.getLogger(__name__)


@dataclass
class Entry:
    key: Any
    value: Any
    next: "Entry | None" = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class NotFound:
    pass


class EntrySet(Set):
    """Snapshot of (key, value) pairs.

    Membership uses equality only, so values need not be hashable.
    """

    def __init__(self, pairs: Iterable[tuple[Any, Any]] = ()) -> None:
        self.pairs = list(pairs)

    def __contains__(self, item: object) -> bool:
        return any(pair == item for pair in self.pairs)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __repr__(self) -> str:
        return f"EntrySet({self.pairs!r})"


def bucket_index(key: Any, bucket_count: int) -> int:
    # mask keeps the index non-negative for negative hash codes
    return (hash(key) & 0x7FFFFFFF) % bucket_count


class HashTable:
    """Hash table using separate chaining.

    Missing keys are reported with ``NotFound()`` rather than ``None``,
    so ``None`` is a valid stored value.
    """

    INITIAL_NUM_BUCKETS = 10
    DEFAULT_LOAD_FACTOR = 0.7

    def __init__(
        self,
        initial_buckets: int = INITIAL_NUM_BUCKETS,
        load_factor: float = DEFAULT_LOAD_FACTOR,
    ) -> None:
        if initial_buckets < 1:
            raise ValueError(f"initial_buckets must be >= 1, got {initial_buckets}")
        if not (load_factor > 0 and math.isfinite(load_factor)):
            raise ValueError(f"load_factor must be finite and > 0, got {load_factor}")

        self.initial_buckets = initial_buckets
        self.max_load = load_factor
        self.clear()

    def clear(self):
        # capacity goes back to the initial bucket count, not just empty chains
        self.count = 0
        self.buckets: list[Entry | None] = [None] * self.initial_buckets

    @property
    def bucket_count(self) -> int:
        return len(self.buckets)

    def size(self) -> int:
        return self.count

    def is_empty(self) -> bool:
        return self.count == 0

    def load_factor(self) -> float:
        return self.count / len(self.buckets)

    def find_entry(self, key: Any) -> Entry | None:
        entry = self.buckets[bucket_index(key, len(self.buckets))]
        while entry is not None:
            if entry.key == key:
                return entry
            entry = entry.next
        return None

    def put(self, key: Any, value: Any) -> Any | NotFound:
        index = bucket_index(key, len(self.buckets))

        entry = self.buckets[index]
        while entry is not None:
            if entry.key == key:
                old_value = entry.value
                entry.value = value
                return old_value
            entry = entry.next

        self.buckets[index] = Entry(key, value, self.buckets[index])
        self.count += 1

        if self.count / len(self.buckets) > self.max_load:
            self._rehash()

        return NotFound()

    def put_if_absent(self, key: Any, value: Any) -> Any | NotFound:
        entry = self.find_entry(key)
        if entry is not None:
            return entry.value
        return self.put(key, value)

    def _rehash(self):
        old_buckets = self.buckets
        logger.debug(
            "rehash: %d -> %d buckets, size=%d",
            len(old_buckets),
            len(old_buckets) * 2,
            self.count,
        )

        self.count = 0
        self.buckets = [None] * (len(old_buckets) * 2)

        for head in old_buckets:
            while head is not None:
                self.put(head.key, head.value)
                head = head.next

    def get(self, key: Any) -> Any | NotFound:
        entry = self.find_entry(key)
        if entry is None:
            return NotFound()
        return entry.value

    def remove(self, key: Any) -> Any | NotFound:
        """Unlink the entry for ``key`` and return its value.

        The bucket array never shrinks.
        """
        index = bucket_index(key, len(self.buckets))
        prev: Entry | None = None
        entry = self.buckets[index]

        while entry is not None:
            if entry.key == key:
                if prev is None:
                    self.buckets[index] = entry.next
                else:
                    prev.next = entry.next
                entry.next = None
                self.count -= 1
                return entry.value
            prev = entry
            entry = entry.next

        return NotFound()

    def remove_if(self, key: Any, value: Any) -> bool:
        """Remove ``key`` only if it is currently mapped to ``value``."""
        current = self.get(key)
        if isinstance(current, NotFound) or not current == value:
            return False
        self.remove(key)
        return True

    def replace(self, key: Any, value: Any) -> Any | NotFound:
        entry = self.find_entry(key)
        if entry is None:
            return NotFound()
        old_value = entry.value
        entry.value = value
        return old_value

    def replace_if(self, key: Any, old_value: Any, new_value: Any) -> bool:
        entry = self.find_entry(key)
        # value compared only after the key matched
        if entry is None or not entry.value == old_value:
            return False
        entry.value = new_value
        return True

    def contains_key(self, key: Any) -> bool:
        return not isinstance(self.get(key), NotFound)

    def contains_value(self, value: Any) -> bool:
        return any(entry.value == value for entry in self.entries())

    def entries(self) -> Iterator[Entry]:
        for head in self.buckets:
            while head is not None:
                yield head
                head = head.next

    def key_set(self) -> set:
        return {entry.key for entry in self.entries()}

    def entry_set(self) -> "EntrySet":
        return EntrySet((entry.key, entry.value) for entry in self.entries())

    def __len__(self) -> int:
        return self.count

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __getitem__(self, key: Any) -> Any:
        entry = self.find_entry(key)
        if entry is None:
            raise KeyError(key)
        return entry.value

    def __setitem__(self, key: Any, value: Any):
        self.put(key, value)

    def __delitem__(self, key: Any):
        if isinstance(self.remove(key), NotFound):
            raise KeyError(key)

    def __iter__(self) -> Iterator[Any]:
        return (entry.key for entry in self.entries())

    def __repr__(self) -> str:
        pairs = ", ".join(f"{e.key!r}: {e.value!r}" for e in self.entries())
        return f"HashTable({{{pairs}}})"
