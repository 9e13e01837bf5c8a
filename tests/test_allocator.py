from contextlib import contextmanager

from pagekit.allocator import AllocatorError, BlockAllocator

BS = 0x1000


@contextmanager
def _raises(exc_type):
    try:
        yield
    except exc_type:
        return
    raise AssertionError(f"{exc_type.__name__} not raised")


def make(blocks=10, start=0x100000):
    return BlockAllocator(start, blocks * BS, BS)


def test_initial_single_segment():
    alloc = make()
    assert alloc.free_segments() == [(0x100000, 10)]
    assert alloc.free_blocks == 10


def test_unaligned_start_is_rounded_up():
    alloc = BlockAllocator(0x1800, 0x5000, BS)
    assert alloc.free_segments() == [(0x2000, 4)]


def test_too_small_range_rejected():
    with _raises(AllocatorError):
        BlockAllocator(0x100000, BS, BS)
    assert BlockAllocator(0x100000, 2 * BS, BS).free_segments() == [(0x100000, 2)]


def test_sequential_allocation():
    alloc = make()
    a = alloc.allocate(2)
    b = alloc.allocate(3)
    assert a == 0x100000
    assert b == a + 2 * BS
    assert alloc.free_segments() == [(b + 3 * BS, 5)]


def test_exhaustion_raises():
    alloc = make()
    alloc.allocate(10)
    assert alloc.free_segments() == []
    with _raises(AllocatorError):
        alloc.allocate(1)


def test_too_large_request_raises():
    alloc = make()
    with _raises(AllocatorError):
        alloc.allocate(11)
    assert alloc.free_segments() == [(0x100000, 10)]


def test_zero_count_rejected():
    alloc = make()
    with _raises(AllocatorError):
        alloc.allocate(0)
    assert alloc.free_segments() == [(0x100000, 10)]


def test_free_coalesces_back_to_one_segment():
    alloc = make()
    blocks = [alloc.allocate(n) for n in (1, 2, 3, 4)]
    for addr, n in zip([blocks[1], blocks[3], blocks[0], blocks[2]], [2, 4, 1, 3]):
        alloc.deallocate(addr, n)
    assert alloc.free_segments() == [(0x100000, 10)]


def test_best_fit_prefers_smallest_segment():
    alloc = make()
    a = alloc.allocate(3)
    alloc.allocate(1)
    c = alloc.allocate(5)
    alloc.allocate(1)
    alloc.deallocate(a, 3)
    alloc.deallocate(c, 5)
    got = alloc.allocate(2)
    assert got == a
    assert alloc.free_segments() == [(a + 2 * BS, 1), (c, 5)]


def test_equal_length_segments_are_both_usable():
    alloc = make()
    a = alloc.allocate(2)
    alloc.allocate(1)
    c = alloc.allocate(2)
    alloc.allocate(5)
    alloc.deallocate(a, 2)
    alloc.deallocate(c, 2)
    first = alloc.allocate(2)
    second = alloc.allocate(2)
    assert {first, second} == {a, c}
    with _raises(AllocatorError):
        alloc.allocate(1)


def test_double_free_rejected():
    alloc = make()
    a = alloc.allocate(2)
    alloc.deallocate(a, 2)
    with _raises(AllocatorError):
        alloc.deallocate(a, 1)
    assert alloc.free_segments() == [(0x100000, 10)]


def test_unaligned_free_rejected():
    alloc = make()
    a = alloc.allocate(2)
    with _raises(AllocatorError):
        alloc.deallocate(a + 1, 1)
    assert alloc.free_segments() == [(a + 2 * BS, 8)]


def test_free_beyond_range_extends_pool():
    alloc = make()
    alloc.deallocate(0x100000 + 10 * BS, 4)
    assert alloc.free_segments() == [(0x100000, 14)]


def test_allocations_do_not_overlap():
    for sizes in ([1, 2, 4], [4, 2, 1], [3, 3, 3, 1]):
        alloc = make()
        spans = [(a, a + n * BS) for n in sizes for a in [alloc.allocate(n)]]
        spans.sort()
        for (s1, e1), (s2, _) in zip(spans, spans[1:]):
            assert e1 <= s2
        assert alloc.free_blocks == 10 - sum(sizes)