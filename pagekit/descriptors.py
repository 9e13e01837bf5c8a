"""Encoding of i386 global and interrupt descriptor table entries."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable

GRANULARITY_FLAG = 0x80
SIZE_FLAG = 0x40
KERNEL_CODE_SELECTOR = 0x08
MAX_GDT_ENTRIES = 0xFFFF


class DescriptorError(Exception):
    """Raised when a descriptor cannot be encoded."""


@dataclass(frozen=True)
class GlobalDescriptor:
    base: int
    limit: int
    type: int

    def encode(self) -> bytes:
        """The 8-byte GDT entry for this descriptor."""
        limit = self.limit
        if limit > 0x10000:
            if limit & 0xFFF != 0xFFF:
                raise DescriptorError(
                    f"limit {limit:#x} needs page granularity but is not page aligned"
                )
            limit >>= 12
            flags = GRANULARITY_FLAG | SIZE_FLAG
        else:
            flags = SIZE_FLAG
        flags |= (limit >> 16) & 0xF
        base = self.base
        return bytes(
            (
                limit & 0xFF,
                (limit >> 8) & 0xFF,
                base & 0xFF,
                (base >> 8) & 0xFF,
                (base >> 16) & 0xFF,
                self.type & 0xFF,
                flags,
                (base >> 24) & 0xFF,
            )
        )


def encode_gdt(descriptors: Iterable[GlobalDescriptor]) -> bytes:
    """Encode a whole descriptor table into consecutive 8-byte entries."""
    items = list(descriptors)
    if len(items) > MAX_GDT_ENTRIES:
        raise DescriptorError("too many descriptors for one table")
    return b"".join(descriptor.encode() for descriptor in items)


@dataclass(frozen=True)
class InterruptDescriptor:
    isr_addr: int
    type: int

    def encode(self) -> bytes:
        """The 8-byte IDT gate for this handler, present and in the kernel segment."""
        return struct.pack(
            "<HHBBH",
            self.isr_addr & 0xFFFF,
            KERNEL_CODE_SELECTOR,
            0,
            (self.type + 0x80) & 0xFF,
            (self.isr_addr >> 16) & 0xFFFF,
        )