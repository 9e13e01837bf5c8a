# pagekit

Pure-Python models of the data structures and hardware interfaces a small
x86 kernel is built from. Every piece works on plain Python objects, so it
can be used to study, simulate or test kernel logic without real hardware.

## What is inside

- `pagekit.rbt`: a red-black tree (`RedBlackTree`, `RBNode`, `Color`,
  `NodeProperty`, `TreeError`) with unique integer keys. Nodes are created by
  the caller and can carry any `content`. `find(value, exact, upper)` looks up
  a value or its nearest neighbour above (`upper=True`) or below it;
  `remove`, `rotate_left`, `rotate_right`, `swap_nodes`, `uncle` and `sibling`
  work on nodes in place, iterating the tree yields nodes in key order, and
  `format_tree()` renders the tree sideways with ANSI colours.
- `pagekit.allocator`: `BlockAllocator(start_address, length, block_size)`, a
  fixed-size block allocator. Free segments are indexed by length in the
  red-black tree; `allocate(count)` picks the smallest segment that fits and
  returns its first address, `deallocate(start, count)` merges the freed
  range with free neighbours on either side, and `free_segments()` lists the
  free `(start, block_count)` pairs. Failures raise `AllocatorError`; a range
  must hold at least two blocks.
- `pagekit.pagedir`: `PageDirectory`, a model of a two-level i386 page
  directory whose page tables are blocks taken from a `BlockAllocator`. Use
  `map_segment`, `get_map`, `is_segment_unmapped` and `free` on it, with the
  `PageDirFlag` and `PageTableFlag` flags and the `entry_indices` helper.
  Mapping over pages that are already present raises `MappingError`.
- `pagekit.descriptors`: `GlobalDescriptor(base, limit, type)` and
  `InterruptDescriptor(isr_addr, type)` encode their 8-byte entries with
  `encode()`, and `encode_gdt` builds a whole global descriptor table. A limit
  above 64 KiB is encoded with page granularity and must end in `0xFFF`,
  otherwise `DescriptorError` is raised.
- `pagekit.io`: `PortBus`, a simulated I/O port space. `inb`/`inw`/`inl` read
  the values placed in `bus.inputs` (zero by default), `outb`/`outw`/`outl`
  record each write in `bus.writes`, and `io_wait` writes to port `0x80`.
- `pagekit.pic`: `PIC`, the cascaded 8259 interrupt controller pair, driven
  through a `PortBus`: `send_eoi`, `remap`, `set_mask`, `clear_mask`, `irr`
  and `isr`.
- `pagekit.terminal`: `Terminal`, a VGA text buffer (80x25 with a tab stop of
  2 by default) with newline, tab and scrolling, `VgaColor`, `vga_entry_color`
  and `vga_entry` for cell values, and `Stream` for character output.
  `stdout_stream` writes light grey and `stderr_stream` light red text to a
  terminal. `Stream.putc` raises `OSError` if the stream has no output.

## What it does not do

pagekit does not touch real hardware: port I/O, descriptor tables and page
directories exist only as Python objects and byte strings, and nothing is
loaded into a processor. It has no file system, no process or system-call
layer, no program loader and no command to run.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Example

```python
from pagekit.allocator import BlockAllocator
from pagekit.pagedir import PageDirectory, PageDirFlag, PageTableFlag

allocator = BlockAllocator(0x100000, 0x400000, 0x1000)
frames = allocator.allocate(4)

directory = PageDirectory()
directory.map_segment(
    0x40000000,
    4,
    [frames + i * 0x1000 for i in range(4)],
    allocator,
    PageDirFlag.READ_WRITE,
    PageTableFlag.READ_WRITE,
)
print(directory.get_map(0x40000000, 4))
```

```python
from pagekit.terminal import Terminal, stdout_stream

terminal = Terminal(80, 25, 2)
out = stdout_stream(terminal)
for ch in "hello\tworld\n":
    out.putc(ch)
```

```python
from pagekit.io import PortBus
from pagekit.pic import PIC

bus = PortBus()
PIC(bus).remap(0x20, 0x28)
print([(w.port, w.value) for w in bus.writes])
```

## Running the tests

```
pytest
```