import struct
from contextlib import contextmanager

from pagekit.descriptors import (
    DescriptorError,
    GlobalDescriptor,
    InterruptDescriptor,
    encode_gdt,
)


@contextmanager
def _raises(exc_type):
    try:
        yield
    except exc_type:
        return
    raise AssertionError(f"{exc_type.__name__} not raised")


def decode_gd(raw):
    limit = raw[0] | (raw[1] << 8) | ((raw[6] & 0xF) << 16)
    base = raw[2] | (raw[3] << 8) | (raw[4] << 16) | (raw[7] << 24)
    granular = bool(raw[6] & 0x80)
    return base, limit, raw[5], granular


def test_flat_kernel_code_segment():
    raw = GlobalDescriptor(0, 0xFFFFFFFF, 0x9A).encode()
    assert raw == bytes.fromhex("ffff0000009acf00")


def test_null_descriptor():
    raw = GlobalDescriptor(0, 0, 0).encode()
    assert raw[:6] == bytes(6)
    assert raw[7] == 0


def test_byte_granular_round_trip():
    cases = [
        (0x12345678, 0x1000, 0x89),
        (0, 0x10000, 0x92),
        (0xC0000000, 0xFF, 0xF2),
    ]
    for base, limit, kind in cases:
        raw = GlobalDescriptor(base, limit, kind).encode()
        assert len(raw) == 8
        assert decode_gd(raw) == (base, limit, kind, False)


def test_page_granular_round_trip():
    raw = GlobalDescriptor(0x1000, 0x3FFFFF, 0xFA).encode()
    base, limit, kind, granular = decode_gd(raw)
    assert granular
    assert (base, (limit << 12) | 0xFFF, kind) == (0x1000, 0x3FFFFF, 0xFA)


def test_unencodable_limit_rejected():
    with _raises(DescriptorError):
        GlobalDescriptor(0, 0x20000, 0x92).encode()
    raw = GlobalDescriptor(0, 0x20FFF, 0x92).encode()
    assert decode_gd(raw) == (0, 0x20, 0x92, True)


def test_gdt_is_concatenation():
    gdt = [
        GlobalDescriptor(0, 0, 0),
        GlobalDescriptor(0, 0xFFFFFFFF, 0x9A),
        GlobalDescriptor(0, 0xFFFFFFFF, 0x92),
    ]
    table = encode_gdt(gdt)
    assert len(table) == 24
    assert [table[i:i + 8] for i in range(0, 24, 8)] == [d.encode() for d in gdt]


def test_gdt_failure_propagates():
    good = GlobalDescriptor(0, 0, 0)
    with _raises(DescriptorError):
        encode_gdt([good, GlobalDescriptor(0, 0x20000, 0x92)])
    assert encode_gdt([good]) == good.encode()


def test_interrupt_gate_fields():
    raw = InterruptDescriptor(0xC0105A3C, 0x0E).encode()
    low, selector, zero, attr, high = struct.unpack("<HHBBH", raw)
    assert (high << 16) | low == 0xC0105A3C
    assert selector == 0x08
    assert zero == 0
    assert attr == 0x0E + 0x80


def test_interrupt_gate_is_eight_bytes_and_marked_present():
    raw = InterruptDescriptor(0x1234, 0x0F).encode()
    assert len(raw) == 8
    assert raw[5] & 0x80 == 0x80