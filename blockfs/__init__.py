"""In-memory block filesystem model: inodes, data blocks, binary images and text dumps."""

__version__ = "0.1.0"

__all__ = ["errors", "model", "storage", "display"]