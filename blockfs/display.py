"""Human readable dumps of a file system for debugging."""

from __future__ import annotations

import sys
from enum import IntFlag
from typing import TextIO

from blockfs.model import (
    DATA_BLOCK_SIZE,
    INODE_DIRECT_BLOCK_COUNT,
    FileType,
    Filesystem,
    Inode,
    Permission,
)
from blockfs.storage import DBLOCK_INDEX_SIZE, INDIRECT_DBLOCK_INDEX_COUNT

_DBLOCK_DISPLAY_LEN = 16


class DisplayFlag(IntFlag):
    """Which parts of the file system to display."""

    FS_FORMAT = 0x1
    INODES = 0x2
    DBLOCKS = 0x4
    ALL = 0x7


def _blocks_needed(inode: Inode) -> int:
    return (inode.file_size + DATA_BLOCK_SIZE - 1) // DATA_BLOCK_SIZE


def _read_index(fs: Filesystem, block: int, slot: int) -> int:
    start = block * DATA_BLOCK_SIZE + slot * DBLOCK_INDEX_SIZE
    return int.from_bytes(fs.dblocks[start:start + DBLOCK_INDEX_SIZE], "little")


def direct_dblock_indices(fs: Filesystem, inode: Inode) -> list[int]:
    """Direct data blocks in use by ``inode``."""
    used = min(_blocks_needed(inode), INODE_DIRECT_BLOCK_COUNT)
    return list(inode.direct_data[:used])


def indirect_dblock_indices(fs: Filesystem, inode: Inode) -> list[int]:
    """Data blocks reached through the chain of index blocks."""
    count = _blocks_needed(inode) - INODE_DIRECT_BLOCK_COUNT
    block = inode.indirect_dblock
    result = []
    for i in range(max(count, 0)):
        slot = i % INDIRECT_DBLOCK_INDEX_COUNT
        if i and slot == 0:
            block = _read_index(fs, block, INDIRECT_DBLOCK_INDEX_COUNT)
        result.append(_read_index(fs, block, slot))
    return result


def indirect_index_indices(fs: Filesystem, inode: Inode) -> list[int]:
    """Index blocks in the chain of ``inode``."""
    count = _blocks_needed(inode) - INODE_DIRECT_BLOCK_COUNT
    block = inode.indirect_dblock
    result = []
    for i in range(0, max(count, 0), INDIRECT_DBLOCK_INDEX_COUNT):
        if i:
            block = _read_index(fs, block, INDIRECT_DBLOCK_INDEX_COUNT)
        result.append(block)
    return result


def _join_indices(indices: list[int]) -> str:
    return "".join(f"{index} " for index in indices)


def _format_inode(fs: Filesystem, index: int, inode: Inode) -> list[str]:
    type_name = FileType(inode.file_type).name
    name = inode.name()
    perms = inode.file_perms
    if perms:
        perm_text = (
            ("READ " if perms & Permission.READ else "")
            + ("WRITE " if perms & Permission.WRITE else "")
            + ("EXECUTE " if perms & Permission.EXECUTE else "")
        )
        lines = [
            f'\tinode index {index} [.type = {type_name} .perm = {perm_text} '
            f'.name = "{name}" .size = {inode.file_size}]'
        ]
    else:
        lines = [
            f'\tinode index {index} [.type = {type_name} '
            f'.name = "{name}" .size = {inode.file_size}]'
        ]
    if inode.file_size > 0:
        lines.append(
            "\t\tDirect Data Blocks: "
            + _join_indices(direct_dblock_indices(fs, inode))
        )
        if inode.file_size > DATA_BLOCK_SIZE * INODE_DIRECT_BLOCK_COUNT:
            lines.append(
                "\t\tIndirect Data Blocks: "
                + _join_indices(indirect_dblock_indices(fs, inode))
            )
            lines.append(
                "\t\tIndirect Index Blocks: "
                + _join_indices(indirect_index_indices(fs, inode))
            )
    return lines


def _format_dblock(fs: Filesystem, index: int) -> str:
    parts = [f"\tdblock index {index}"]
    for k, value in enumerate(fs.dblock(index)):
        if k % _DBLOCK_DISPLAY_LEN == 0:
            parts.append("\n\t\t")
        parts.append(f"{value:02x} ")
    return "".join(parts)


def format_filesystem(fs: Filesystem | None, flag: DisplayFlag) -> str:
    """Render the selected parts of ``fs`` as text."""
    if fs is None:
        return "No file system specified.\n"
    lines: list[str] = []
    if flag & DisplayFlag.FS_FORMAT:
        lines.append("File System Structure:")
        lines.append(f"\tavailable inode: {fs.available_inodes()} / {fs.inode_count}")
        lines.append(
            f"\tavailable dblock: {fs.available_dblocks()} / {fs.dblock_count}"
        )
    if flag & DisplayFlag.INODES:
        free = set(fs.free_inode_indices())
        lines.append("I-Node List:")
        for index, inode in enumerate(fs.inodes):
            if index not in free:
                lines.extend(_format_inode(fs, index, inode))
    if flag & DisplayFlag.DBLOCKS:
        lines.append("Data Block List:")
        lines.extend(
            _format_dblock(fs, index)
            for index in range(fs.dblock_count)
            if not fs.is_dblock_free(index)
        )
    return "".join(f"{line}\n" for line in lines)


def display_filesystem(
    fs: Filesystem | None, flag: DisplayFlag, out: TextIO | None = None
) -> None:
    """Write the selected parts of ``fs`` to ``out`` (standard output by default)."""
    stream = sys.stdout if out is None else out
    stream.write(format_filesystem(fs, flag))