"""Simulated x86 I/O port space.

Reads return whatever has been placed in :attr:`PortBus.inputs` for a
port (zero if nothing was), and every write is recorded in
:attr:`PortBus.writes` in the order it happened.
"""

from __future__ import annotations

from dataclasses import dataclass

PORT_MASK = 0xFFFF
BYTE_MASK = 0xFF
WORD_MASK = 0xFFFF
LONG_MASK = 0xFFFFFFFF
WAIT_PORT = 0x80


@dataclass(frozen=True)
class PortWrite:
    port: int
    value: int
    width: int


class PortBus:
    """An I/O port bus with settable inputs and a log of outputs."""

    def __init__(self) -> None:
        self.inputs: dict[int, int] = {}
        self.writes: list[PortWrite] = []

    def _read(self, port: int, mask: int) -> int:
        return self.inputs.get(port & PORT_MASK, 0) & mask

    def _write(self, value: int, port: int, mask: int, width: int) -> None:
        self.writes.append(PortWrite(port & PORT_MASK, value & mask, width))

    def inb(self, port: int) -> int:
        """Read a byte from ``port``."""
        return self._read(port, BYTE_MASK)

    def inw(self, port: int) -> int:
        """Read a 16-bit word from ``port``."""
        return self._read(port, WORD_MASK)

    def inl(self, port: int) -> int:
        """Read a 32-bit value from ``port``."""
        return self._read(port, LONG_MASK)

    def outb(self, value: int, port: int) -> None:
        """Write a byte to ``port``."""
        self._write(value, port, BYTE_MASK, 1)

    def outw(self, value: int, port: int) -> None:
        """Write a 16-bit word to ``port``."""
        self._write(value, port, WORD_MASK, 2)

    def outl(self, value: int, port: int) -> None:
        """Write a 32-bit value to ``port``."""
        self._write(value, port, LONG_MASK, 4)

    inb_p = inb
    inw_p = inw
    inl_p = inl
    outb_p = outb
    outw_p = outw
    outl_p = outl

    def io_wait(self) -> None:
        """Give slow devices time by writing to an unused port."""
        self.outb(0, WAIT_PORT)