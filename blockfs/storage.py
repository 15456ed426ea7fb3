"""Block arithmetic and the binary image format of a file system."""

from __future__ import annotations

import struct
from typing import BinaryIO

from blockfs.errors import FsError, RetCode
from blockfs.model import (
    DATA_BLOCK_SIZE,
    INODE_DIRECT_BLOCK_COUNT,
    FileType,
    Filesystem,
    Inode,
    Permission,
)

DBLOCK_INDEX_SIZE = 4
INDIRECT_DBLOCK_INDEX_COUNT = DATA_BLOCK_SIZE // DBLOCK_INDEX_SIZE - 1
INDIRECT_DBLOCK_MAX_DATA_SIZE = DATA_BLOCK_SIZE * INDIRECT_DBLOCK_INDEX_COUNT
NEXT_INDIRECT_INDEX_OFFSET = DATA_BLOCK_SIZE - DBLOCK_INDEX_SIZE

_DIRECT_CAPACITY = DATA_BLOCK_SIZE * INODE_DIRECT_BLOCK_COUNT

# inode count, next available inode, dblock count
_HEADER = struct.Struct("<QHQ")
# union word (file type / next free inode), permissions, name, size,
# direct blocks, indirect block; padded as the in-memory record is.
_INODE = struct.Struct(f"<II14s2xQ{INODE_DIRECT_BLOCK_COUNT}II4x")
INODE_RECORD_SIZE = _INODE.size


def dblock_mask_size(dblock_count: int) -> int:
    """Number of bitmask bytes needed to track ``dblock_count`` blocks."""
    return (dblock_count + 7) // 8


def calculate_index_dblock_amount(file_size: int) -> int:
    """Number of index data blocks a file of ``file_size`` bytes uses."""
    if file_size < _DIRECT_CAPACITY:
        return 0
    return (
        file_size - _DIRECT_CAPACITY + INDIRECT_DBLOCK_MAX_DATA_SIZE - 1
    ) // INDIRECT_DBLOCK_MAX_DATA_SIZE


def calculate_necessary_dblock_amount(file_size: int) -> int:
    """Data blocks plus index blocks needed for ``file_size`` bytes."""
    data_blocks = (file_size + DATA_BLOCK_SIZE - 1) // DATA_BLOCK_SIZE
    return data_blocks + calculate_index_dblock_amount(file_size)


def pack_inode(inode: Inode) -> bytes:
    """Encode one inode as its fixed-size binary record.

    The file type and the free-list link share the first word; a nonzero
    ``next_free_inode`` takes its place, as in the on-disk union.
    """
    word0 = inode.next_free_inode or int(inode.file_type)
    try:
        return _INODE.pack(
            word0,
            int(inode.file_perms),
            inode.file_name,
            inode.file_size,
            *inode.direct_data,
            inode.indirect_dblock,
        )
    except struct.error as exc:
        raise FsError(RetCode.INVALID_INPUT) from exc


def unpack_inode(data: bytes) -> Inode:
    """Decode one binary inode record."""
    if len(data) != INODE_RECORD_SIZE:
        raise FsError(RetCode.INVALID_BINARY_FORMAT)
    word0, perms, name, size, *rest = _INODE.unpack(data)
    direct = list(rest[:INODE_DIRECT_BLOCK_COUNT])
    indirect = rest[INODE_DIRECT_BLOCK_COUNT]
    try:
        file_type = FileType(word0)
    except ValueError:
        file_type = FileType.DATA_FILE
    return Inode(
        file_type=file_type,
        file_perms=Permission(perms),
        file_name=name.rstrip(b"\0"),
        file_size=size,
        direct_data=direct,
        indirect_dblock=indirect,
        next_free_inode=word0 & 0xFFFF,
    )


def save_filesystem(fs: Filesystem, file: BinaryIO) -> None:
    """Write ``fs`` to the binary stream ``file``."""
    if fs is None or file is None:
        raise FsError(RetCode.INVALID_INPUT)
    try:
        header = _HEADER.pack(fs.inode_count, fs.available_inode, fs.dblock_count)
    except struct.error as exc:
        raise FsError(RetCode.INVALID_INPUT) from exc
    file.write(header)
    file.write(b"".join(pack_inode(inode) for inode in fs.inodes))
    file.write(bytes(fs.dblock_bitmask[:dblock_mask_size(fs.dblock_count)]))
    file.write(bytes(fs.dblocks))


def _read_exact(file: BinaryIO, size: int) -> bytes:
    data = file.read(size)
    if data is None or len(data) != size:
        raise FsError(RetCode.INVALID_BINARY_FORMAT)
    return data


def load_filesystem(file: BinaryIO) -> Filesystem:
    """Read a file system previously written by :func:`save_filesystem`."""
    if file is None:
        raise FsError(RetCode.INVALID_INPUT)
    inode_count, available_inode, dblock_count = _HEADER.unpack(
        _read_exact(file, _HEADER.size)
    )
    raw_inodes = _read_exact(file, inode_count * INODE_RECORD_SIZE)
    inodes = [
        unpack_inode(raw_inodes[start:start + INODE_RECORD_SIZE])
        for start in range(0, len(raw_inodes), INODE_RECORD_SIZE)
    ]
    bitmask = _read_exact(file, dblock_mask_size(dblock_count))
    dblocks = _read_exact(file, dblock_count * DATA_BLOCK_SIZE)
    return Filesystem(
        available_inode=available_inode,
        inodes=inodes,
        dblock_bitmask=bytearray(bitmask),
        dblocks=bytearray(dblocks),
    )