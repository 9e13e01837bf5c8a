from pagekit.io import WAIT_PORT, PortBus, PortWrite


def test_unset_port_reads_zero():
    bus = PortBus()
    assert bus.inb(0x60) == 0
    assert bus.inw(0x60) == 0
    assert bus.inl(0x60) == 0


def test_reads_are_truncated_to_width():
    bus = PortBus()
    bus.inputs[0x60] = 0x12345678
    assert bus.inl(0x60) == 0x12345678
    assert bus.inb(0x60) <= 0xFF
    assert bus.inb(0x60) == bus.inw(0x60) & 0xFF
    assert bus.inw(0x60) == bus.inl(0x60) & 0xFFFF


def test_writes_are_recorded_in_order():
    bus = PortBus()
    bus.outb(0x41, 0x3F8)
    bus.outw(0x1234, 0x3F8)
    bus.outl(0xDEADBEEF, 0x3F8)
    assert bus.writes == [
        PortWrite(0x3F8, 0x41, 1),
        PortWrite(0x3F8, 0x1234, 2),
        PortWrite(0x3F8, 0xDEADBEEF, 4),
    ]


def test_byte_write_truncates_value():
    bus = PortBus()
    bus.outb(0x1FF, 0x20)
    assert bus.writes[0].value <= 0xFF
    assert bus.writes[0].width == 1


def test_io_wait_writes_zero_to_wait_port():
    bus = PortBus()
    bus.io_wait()
    assert bus.writes == [PortWrite(WAIT_PORT, 0, 1)]


def test_paused_variants_behave_like_plain_ones():
    bus = PortBus()
    bus.inputs[0x21] = 0xAB
    assert bus.inb_p(0x21) == bus.inb(0x21)
    bus.outb_p(0xAB, 0x21)
    assert bus.writes == [PortWrite(0x21, 0xAB, 1)]