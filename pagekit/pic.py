"""Driver for a pair of cascaded 8259 programmable interrupt controllers."""

from __future__ import annotations

from .io import PortBus

PIC1_COMMAND = 0x20
PIC1_DATA = 0x21
PIC2_COMMAND = 0xA0
PIC2_DATA = 0xA1

PIC_EOI = 0x20

ICW1_ICW4 = 0x01
ICW1_SINGLE = 0x02
ICW1_INTERVAL4 = 0x04
ICW1_LEVEL = 0x08
ICW1_INIT = 0x10

ICW4_8086 = 0x01
ICW4_AUTO = 0x02
ICW4_BUF_SLAVE = 0x08
ICW4_BUF_MASTER = 0x0C
ICW4_SFNM = 0x10

PIC_READ_IRR = 0x0A
PIC_READ_ISR = 0x0B


class PIC:
    """Master and slave PICs reached through a port bus."""

    def __init__(self, bus: PortBus) -> None:
        self.bus = bus

    def send_eoi(self, irq: int) -> None:
        """Acknowledge ``irq``; lines 8 and above also need the slave told."""
        if irq >= 8:
            self.bus.outb(PIC_EOI, PIC2_COMMAND)
        self.bus.outb(PIC_EOI, PIC1_COMMAND)

    def remap(self, offset1: int, offset2: int) -> None:
        """Move the master's vectors to ``offset1`` and the slave's to ``offset2``."""
        bus = self.bus
        mask1 = bus.inb(PIC1_DATA)
        mask2 = bus.inb(PIC2_DATA)

        sequence = (
            (ICW1_INIT | ICW1_ICW4, PIC1_COMMAND),
            (ICW1_INIT | ICW1_ICW4, PIC2_COMMAND),
            (offset1, PIC1_DATA),
            (offset2, PIC2_DATA),
            (4, PIC1_DATA),
            (2, PIC2_DATA),
            (ICW4_8086, PIC1_DATA),
            (ICW4_8086, PIC2_DATA),
        )
        for value, port in sequence:
            bus.outb(value, port)
            bus.io_wait()

        bus.outb(mask1, PIC1_DATA)
        bus.outb(mask2, PIC2_DATA)

    @staticmethod
    def _line_port(irq_line: int) -> tuple[int, int]:
        if irq_line < 8:
            return PIC1_DATA, irq_line
        return PIC2_DATA, irq_line - 8

    def set_mask(self, irq_line: int) -> None:
        """Mask (disable) one IRQ line."""
        port, bit = self._line_port(irq_line)
        self.bus.outb(self.bus.inb(port) | (1 << bit), port)

    def clear_mask(self, irq_line: int) -> None:
        """Unmask (enable) one IRQ line."""
        port, bit = self._line_port(irq_line)
        self.bus.outb(self.bus.inb(port) & ~(1 << bit), port)

    def _irq_register(self, ocw3: int) -> int:
        self.bus.outb(ocw3, PIC1_COMMAND)
        self.bus.outb(ocw3, PIC2_COMMAND)
        return (self.bus.inb(PIC2_COMMAND) << 8) | self.bus.inb(PIC1_COMMAND)

    def irr(self) -> int:
        """Combined interrupt request register of both PICs."""
        return self._irq_register(PIC_READ_IRR)

    def isr(self) -> int:
        """Combined in-service register of both PICs."""
        return self._irq_register(PIC_READ_ISR)