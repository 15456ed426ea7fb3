"""In-memory structures of the block file system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, IntFlag
from typing import Iterator

from blockfs.errors import FsError, RetCode

DATA_BLOCK_SIZE = 64
MAX_FILE_NAME_LEN = 14
INODE_DIRECT_BLOCK_COUNT = 4


class FileType(IntEnum):
    """Kind of object an inode describes."""

    DATA_FILE = 0
    DIRECTORY = 1


class Permission(IntFlag):
    """Access rights of a file."""

    READ = 0x1
    WRITE = 0x2
    EXECUTE = 0x4


@dataclass
class Inode:
    """An inode: file metadata when in use, a free-list link when not."""

    file_type: FileType = FileType.DATA_FILE
    file_perms: Permission = Permission(0)
    file_name: bytes = b""
    file_size: int = 0
    direct_data: list[int] = field(
        default_factory=lambda: [0] * INODE_DIRECT_BLOCK_COUNT
    )
    indirect_dblock: int = 0
    next_free_inode: int = 0

    def __post_init__(self) -> None:
        if len(self.file_name) > MAX_FILE_NAME_LEN:
            raise FsError(RetCode.INVALID_FILENAME)
        if len(self.direct_data) != INODE_DIRECT_BLOCK_COUNT:
            raise FsError(RetCode.INVALID_INPUT)

    def name(self) -> str:
        """The file name up to its first NUL byte."""
        raw = self.file_name.split(b"\0", 1)[0]
        return raw.decode("latin-1")


@dataclass
class Filesystem:
    """Inode table, data-block bitmask and data blocks of one file system."""

    available_inode: int
    inodes: list[Inode]
    dblock_bitmask: bytearray
    dblocks: bytearray

    def __post_init__(self) -> None:
        self.dblock_bitmask = bytearray(self.dblock_bitmask)
        self.dblocks = bytearray(self.dblocks)
        if len(self.dblocks) % DATA_BLOCK_SIZE:
            raise FsError(RetCode.INVALID_INPUT)
        if len(self.dblock_bitmask) < (self.dblock_count + 7) // 8:
            raise FsError(RetCode.INVALID_INPUT)

    @property
    def inode_count(self) -> int:
        return len(self.inodes)

    @property
    def dblock_count(self) -> int:
        return len(self.dblocks) // DATA_BLOCK_SIZE

    def free_inode_indices(self) -> Iterator[int]:
        """Indices on the free-inode list, starting at ``available_inode``."""
        seen: set[int] = set()
        index = self.available_inode
        while index != 0:
            if index in seen or index >= len(self.inodes):
                raise FsError(RetCode.INVALID_BINARY_FORMAT)
            seen.add(index)
            yield index
            index = self.inodes[index].next_free_inode

    def available_inodes(self) -> int:
        """Number of inodes on the free list."""
        return sum(1 for _ in self.free_inode_indices())

    def is_dblock_free(self, index: int) -> bool:
        """Whether the bitmask marks data block ``index`` as available."""
        if not 0 <= index < self.dblock_count:
            raise IndexError(f"data block index {index} out of range")
        return bool(self.dblock_bitmask[index // 8] & (0x80 >> (index % 8)))

    def available_dblocks(self) -> int:
        """Number of data blocks marked available in the bitmask."""
        return sum(self.is_dblock_free(i) for i in range(self.dblock_count))

    def dblock(self, index: int) -> bytes:
        """Contents of data block ``index``."""
        if not 0 <= index < self.dblock_count:
            raise IndexError(f"data block index {index} out of range")
        start = index * DATA_BLOCK_SIZE
        return bytes(self.dblocks[start:start + DATA_BLOCK_SIZE])