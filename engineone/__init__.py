"""Game engine building blocks: vector math, byte strings, a console, a virtual file system and a client pool."""

__version__ = "0.1.0"
__all__ = ["vector", "text", "console", "vfs", "clients"]