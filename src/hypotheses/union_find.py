"""Union-find over sparse voxel indices with per-component sizes."""
from __future__ import annotations

from typing import Iterable, List


class UnionFind:
    """Disjoint-set forest with path compression and union by rank.

    External indices can be any integers (flattened voxel indices in
    practice). They are mapped to dense internal slots so that ``parent``,
    ``rank`` and ``size`` live in plain lists; callers only ever see the
    external indices.

    Parameters
    ----------
    elements:
        Optional iterable of indices registered as singletons up front.
    """

    def __init__(self, elements: Iterable[int] | None = None):
        self._parent: List[int] = []
        self._rank: List[int] = []
        self._size: List[int] = []
        self._id_map: dict[int, int] = {}
        self._reverse_map: List[int] = []
        self._num_components = 0

        if elements is not None:
            for elem in elements:
                self.add(elem)

    def add(self, x: int) -> None:
        """Register ``x`` as a singleton; no-op if already present."""
        x = int(x)
        if x in self._id_map:
            return
        internal_id = len(self._parent)
        self._id_map[x] = internal_id
        self._reverse_map.append(x)
        self._parent.append(internal_id)
        self._rank.append(0)
        self._size.append(1)
        self._num_components += 1

    def contains(self, x: int) -> bool:
        return int(x) in self._id_map

    def __contains__(self, x: int) -> bool:
        return self.contains(x)

    def __len__(self) -> int:
        return self.total_elements

    def find(self, x: int) -> int:
        """Return the representative of ``x``, registering ``x`` if unknown."""
        root = self._find_internal(self._get_or_add_id(x))
        return self._reverse_map[root]

    def unite(self, x: int, y: int) -> bool:
        """Merge the sets of ``x`` and ``y``.

        Returns ``False`` when both already share a root, ``True`` otherwise.
        On equal ranks the root of ``y`` is attached under the root of ``x``.
        """
        root_x = self._find_internal(self._get_or_add_id(x))
        root_y = self._find_internal(self._get_or_add_id(y))

        if root_x == root_y:
            return False

        if self._rank[root_x] < self._rank[root_y]:
            self._parent[root_x] = root_y
            self._size[root_y] += self._size[root_x]
        elif self._rank[root_x] > self._rank[root_y]:
            self._parent[root_y] = root_x
            self._size[root_x] += self._size[root_y]
        else:
            self._parent[root_y] = root_x
            self._size[root_x] += self._size[root_y]
            self._rank[root_x] += 1

        self._num_components -= 1
        return True

    def connected(self, x: int, y: int) -> bool:
        """True if both indices are known and share a root."""
        if not (self.contains(x) and self.contains(y)):
            return False
        return self._find_internal(self._id_map[int(x)]) == self._find_internal(self._id_map[int(y)])

    def size(self, x: int) -> int:
        """Size of the component holding ``x`` (0 for unknown indices)."""
        if not self.contains(x):
            return 0
        return self._size[self._find_internal(self._id_map[int(x)])]

    def check_size(self, x: int, min_size: int, max_size: int) -> bool:
        """Inclusive size check on the component holding ``x``."""
        comp_size = self.size(x)
        return min_size <= comp_size <= max_size

    @property
    def count(self) -> int:
        """Number of disjoint sets."""
        return self._num_components

    @property
    def total_elements(self) -> int:
        return len(self._parent)

    def roots(self) -> List[int]:
        """External indices of every current root, in registration order."""
        return [
            self._reverse_map[i]
            for i in range(len(self._parent))
            if self._parent[i] == i
        ]

    def component_members(self, x: int) -> List[int]:
        """All external indices sharing the root of ``x``.

        The list holds each index once, in registration order.
        Linear in the number of registered elements; only meant for the
        small components that survive size filtering.
        """
        if not self.contains(x):
            return []

        root = self._find_internal(self._id_map[int(x)])
        return [
            self._reverse_map[i]
            for i in range(len(self._parent))
            if self._find_internal(i) == root
        ]

    def clear(self) -> None:
        self._parent.clear()
        self._rank.clear()
        self._size.clear()
        self._id_map.clear()
        self._reverse_map.clear()
        self._num_components = 0

    def _find_internal(self, internal_id: int) -> int:
        parent = self._parent
        root = internal_id
        while parent[root] != root:
            root = parent[root]
        # second pass: point every node on the path straight at the root
        while parent[internal_id] != root:
            next_id = parent[internal_id]
            parent[internal_id] = root
            internal_id = next_id
        return root

    def _get_or_add_id(self, x: int) -> int:
        x = int(x)
        internal_id = self._id_map.get(x)
        if internal_id is None:
            self.add(x)
            internal_id = self._id_map[x]
        return internal_id


__all__ = ["UnionFind"]
