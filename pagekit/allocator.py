"""Best-fit block allocator over a contiguous address range.

Free segments are indexed by length in a red-black tree.  Segments of
equal length share one tree node and are kept in that node's content
list.  Freed ranges are merged with adjacent free segments.
"""

from __future__ import annotations

from .rbt import RBNode, RedBlackTree


class AllocatorError(Exception):
    """Raised when blocks cannot be allocated or released."""


class BlockAllocator:
    """Hands out runs of fixed-size blocks from an address range."""

    def __init__(self, start_address: int, length: int, block_size: int) -> None:
        if block_size <= 0:
            raise AllocatorError("block size must be positive")
        real_start = start_address
        remainder = start_address % block_size
        if remainder:
            length -= remainder
            real_start += block_size - remainder
        length -= length % block_size
        count = length // block_size if length > 0 else 0
        if count < 2:
            raise AllocatorError("the range holds fewer than two blocks")

        self.block_size = block_size
        self.start = real_start
        self._tree = RedBlackTree()
        self._heads: dict[int, int] = {}
        self._tails: dict[int, int] = {}
        self._add_segment(real_start, count)

    @property
    def free_blocks(self) -> int:
        """Total number of free blocks."""
        return sum(self._heads.values())

    def _tail_of(self, head: int, count: int) -> int:
        return head + (count - 1) * self.block_size

    def _add_segment(self, head: int, count: int) -> None:
        self._heads[head] = count
        self._tails[self._tail_of(head, count)] = head
        node = self._tree.find(count, True, True)
        if node is not None:
            node.content.append(head)
        else:
            self._tree.insert(RBNode(count, [head]))

    def _remove_segment(self, head: int) -> int:
        count = self._heads.pop(head)
        del self._tails[self._tail_of(head, count)]
        node = self._tree.find(count, True, True)
        if node is None:
            raise AllocatorError("free segment index is corrupted")
        node.content.remove(head)
        if not node.content:
            self._tree.remove(node)
        return count

    def allocate(self, count: int) -> int:
        """Allocate ``count`` consecutive blocks and return the first address."""
        if count < 1:
            raise AllocatorError("block count must be at least one")
        node = self._tree.find(count, False, True)
        if node is None:
            raise AllocatorError(f"no free run of {count} blocks")
        head = node.content[-1]
        available = self._remove_segment(head)
        if available > count:
            self.deallocate(head + count * self.block_size, available - count)
        return head

    def deallocate(self, start: int, count: int) -> None:
        """Return ``count`` blocks starting at ``start`` to the free pool."""
        if count < 1:
            raise AllocatorError("block count must be at least one")
        if start % self.block_size:
            raise AllocatorError(f"address {start:#x} is not block aligned")
        end = start + count * self.block_size
        for head, length in self._heads.items():
            if head < end and start < head + length * self.block_size:
                raise AllocatorError(f"range at {start:#x} overlaps a free segment")

        before = self._tails.get(start - self.block_size)
        if before is not None:
            count += self._remove_segment(before)
            start = before
        if end in self._heads:
            count += self._remove_segment(end)
        self._add_segment(start, count)

    def free_segments(self) -> list[tuple[int, int]]:
        """Free segments as ``(start, block_count)`` pairs in address order."""
        return sorted(self._heads.items())