"""Models of kernel building blocks: red-black tree, block allocator, paging, descriptors, port I/O, PIC and VGA terminal."""

__version__ = "0.1.0"

__all__ = ["rbt", "allocator", "pagedir", "descriptors", "io", "pic", "terminal"]