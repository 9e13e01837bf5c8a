"""Two-level i386 page directory kept in simulated memory.

Page tables are blocks taken from a :class:`BlockAllocator`; their
contents live in :attr:`PageDirectory.tables`, keyed by block address.
"""

from __future__ import annotations

from enum import IntFlag
from typing import Optional, Sequence

from .allocator import BlockAllocator

ENTRY_COUNT = 0x400
PAGE_SIZE = 0x1000
TABLE_SPAN = 0x400000
ADDRESS_MASK = 0xFFFFF000


class PageDirFlag(IntFlag):
    PRESENT = 0x01
    READ_WRITE = 0x02
    USER = 0x04
    WRITE_THROUGH = 0x08
    CACHE_DISABLED = 0x10
    ACCESSED = 0x20
    PAGE_SIZE = 0x80


class PageTableFlag(IntFlag):
    PRESENT = 0x01
    READ_WRITE = 0x02
    USER = 0x04
    WRITE_THROUGH = 0x08
    CACHE_DISABLED = 0x10
    ACCESSED = 0x20
    DIRTY = 0x40
    GLOBAL = 0x100


class MappingError(Exception):
    """Raised when a virtual range cannot be mapped."""


def entry_indices(address: int) -> tuple[int, int]:
    """Directory index and table index of a virtual address."""
    return (address >> 22) & 0x3FF, (address >> 12) & 0x3FF


def _address(entry: int) -> int:
    return entry & ADDRESS_MASK


class PageDirectory:
    """A page directory with 1024 entries pointing to page tables."""

    def __init__(self) -> None:
        self.entries: list[int] = [0] * ENTRY_COUNT
        self.tables: dict[int, list[int]] = {}

    def _table(self, dir_index: int) -> Optional[list[int]]:
        entry = self.entries[dir_index]
        if not entry & PageDirFlag.PRESENT:
            return None
        return self.tables[_address(entry)]

    def is_segment_unmapped(self, start: int, block_count: int) -> bool:
        """True if no page in the range is present."""
        addr = _address(start)
        end = addr + block_count * PAGE_SIZE
        while addr < end:
            dir_index, table_index = entry_indices(addr)
            table = self._table(dir_index)
            if table is None:
                addr = (addr & 0xFFC00000) + TABLE_SPAN
                continue
            if table[table_index] & PageTableFlag.PRESENT:
                return False
            addr += PAGE_SIZE
        return True

    def map_segment(
        self,
        start: int,
        block_count: int,
        physical_blocks: Sequence[int],
        allocator: BlockAllocator,
        dir_flags: int = 0,
        table_flags: int = 0,
    ) -> None:
        """Map ``block_count`` pages from ``start`` to the given physical blocks."""
        if len(physical_blocks) < block_count:
            raise ValueError("fewer physical blocks than pages to map")
        if not self.is_segment_unmapped(start, block_count):
            raise MappingError(f"range at {start:#x} is already mapped")

        start = _address(start)
        end = start + block_count * PAGE_SIZE
        if block_count <= 0:
            return

        for dir_index in range(start >> 22, ((end - 1) >> 22) + 1):
            if not self.entries[dir_index] & PageDirFlag.PRESENT:
                table_addr = allocator.allocate(1)
                self.tables[table_addr] = [0] * ENTRY_COUNT
                self.entries[dir_index] = _address(table_addr) | PageDirFlag.PRESENT

        for offset, physical in enumerate(physical_blocks[:block_count]):
            dir_index, table_index = entry_indices(start + offset * PAGE_SIZE)
            entry = self.entries[dir_index]
            if not entry & PageDirFlag.PRESENT:
                raise MappingError("page table is missing")
            self.entries[dir_index] = _address(entry) | dir_flags | PageDirFlag.PRESENT
            table = self.tables[_address(entry)]
            if table[table_index] & PageTableFlag.PRESENT:
                raise MappingError("page is already present")
            table[table_index] = _address(physical) | table_flags | PageTableFlag.PRESENT

    def get_map(self, start: int, block_count: int) -> list[Optional[int]]:
        """Physical block of each page in the range, or None where unmapped."""
        result: list[Optional[int]] = []
        addr = _address(start)
        for _ in range(block_count):
            dir_index, table_index = entry_indices(addr)
            table = self._table(dir_index)
            page = table[table_index] if table is not None else 0
            result.append(_address(page) if page & PageTableFlag.PRESENT else None)
            addr += PAGE_SIZE
        return result

    def free(self, allocator: BlockAllocator) -> None:
        """Release every page table back to ``allocator``."""
        for dir_index, entry in enumerate(self.entries):
            if not entry & PageDirFlag.PRESENT:
                continue
            table_addr = _address(entry)
            if table_addr:
                allocator.deallocate(table_addr, 1)
                self.tables.pop(table_addr, None)
                self.entries[dir_index] = 0