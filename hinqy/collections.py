"""hash containers keyed through an equaler instead of the builtin __hash__/__eq__"""
from itertools import count
from .types import *
from .comparison import Equaler, default_equaler


class HashMap(Generic[K, V]):
    """insertion-ordered map whose keys are matched by an equaler"""

    def __init__(self, equaler: Optional[Equaler[K]] = None):
        self._equaler = equaler if equaler is not None else default_equaler
        # hash -> [key, value, serial] entries; the serial orders entries by insertion
        self._buckets: Dict[int, List[List[Any]]] = {}
        self._entries: Dict[int, List[Any]] = {}
        self._serials = count()

    def _find(self, key: K) -> Optional[List[Any]]:
        bucket = self._buckets.get(self._equaler.hash(key))
        if bucket:
            for entry in bucket:
                if self._equaler.equals(entry[0], key):
                    return entry
        return None

    def get(self, key: K, default: Any = None) -> Any:
        entry = self._find(key)
        return entry[1] if entry is not None else default

    def has(self, key: K) -> bool:
        return self._find(key) is not None

    def set(self, key: K, value: V) -> None:
        entry = self._find(key)
        if entry is not None:
            entry[1] = value
            return
        entry = [key, value, next(self._serials)]
        self._buckets.setdefault(self._equaler.hash(key), []).append(entry)
        self._entries[entry[2]] = entry

    def get_or_add(self, key: K, factory: Callable[[], V]) -> V:
        entry = self._find(key)
        if entry is None:
            value = factory()
            self.set(key, value)
            return value
        return entry[1]

    def delete(self, key: K) -> bool:
        """remove a key, answering whether it was present"""
        hash_code = self._equaler.hash(key)
        bucket = self._buckets.get(hash_code)
        if not bucket:
            return False
        for position, entry in enumerate(bucket):
            if self._equaler.equals(entry[0], key):
                del bucket[position]
                if not bucket:
                    del self._buckets[hash_code]
                del self._entries[entry[2]]
                return True
        return False

    def items(self) -> Iterator[Tuple[K, V]]:
        return ((entry[0], entry[1]) for entry in list(self._entries.values()))

    def keys(self) -> Iterator[K]:
        return (entry[0] for entry in list(self._entries.values()))

    def __contains__(self, key: K) -> bool:
        return self.has(key)

    def __len__(self) -> int:
        return len(self._entries)


class HashSet(Generic[T]):
    """insertion-ordered set whose members are matched by an equaler"""

    def __init__(self, items: Optional[Iterable[T]] = None, equaler: Optional[Equaler[T]] = None):
        self._map: HashMap[T, None] = HashMap(equaler)
        if items is not None:
            for item in items:
                self._map.set(item, None)

    def add(self, item: T) -> bool:
        """add an item, answering whether it was new"""
        if self._map.has(item):
            return False
        self._map.set(item, None)
        return True

    def remove(self, item: T) -> bool:
        return self._map.delete(item)

    def __contains__(self, item: T) -> bool:
        return self._map.has(item)

    def __iter__(self) -> Iterator[T]:
        return self._map.keys()

    def __len__(self) -> int:
        return len(self._map)
