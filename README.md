# blockfs

`blockfs` models a small block-based filesystem in memory: a table of
inodes, a pool of fixed-size 64-byte data blocks, and a bitmask that tracks
which blocks are free. A file keeps up to four direct block indices and
spills over into a chain of index blocks. A filesystem can be saved to and
loaded from a compact binary image, and inspected as a plain-text dump.

## Installation

```
pip install .
```

Python 3.10 or later is required; the package has no runtime dependencies.

## Modules

### `blockfs.errors`

- `RetCode`: an `IntEnum` of result codes (`SUCCESS`, `INVALID_INPUT`,
  `INVALID_BINARY_FORMAT`, `DIR_NOT_FOUND`, and so on). `message()` returns
  the human-readable text of a code, e.g. `"Invalid input"`.
- `FsError`: the exception raised on failure. It is built from a `RetCode`
  (or its integer value), keeps it as `code`, uses the code's message as its
  text, and offers `report`, the line `"Error: <message>"`.

### `blockfs.model`

- `FileType` (`DATA_FILE`, `DIRECTORY`) and `Permission`, a flag of `READ`,
  `WRITE` and `EXECUTE`.
- `Inode`: a dataclass with `file_type`, `file_perms`, `file_name` (bytes,
  at most 14), `file_size`, four `direct_data` block indices,
  `indirect_dblock` and `next_free_inode`. `name()` returns the file name up
  to its first NUL byte. An over-long name raises `FsError(INVALID_FILENAME)`;
  a `direct_data` list of the wrong length raises `FsError(INVALID_INPUT)`.
- `Filesystem`: a dataclass of `available_inode`, `inodes`, `dblock_bitmask`
  and `dblocks`, with `inode_count` and `dblock_count` properties. The block
  area must be a whole number of 64-byte blocks and the bitmask long enough
  to cover them, or `FsError(INVALID_INPUT)` is raised. Methods:
  - `free_inode_indices()` yields the free-inode chain starting at
    `available_inode`; a looping or out-of-range chain raises
    `FsError(INVALID_BINARY_FORMAT)`.
  - `available_inodes()` counts that chain.
  - `is_dblock_free(index)` reads the bitmask (most significant bit first;
    a set bit means free), and `available_dblocks()` counts the free blocks.
  - `dblock(index)` returns the 64 bytes of one block.

  Out-of-range block indices raise `IndexError`.

### `blockfs.storage`

- `save_filesystem(fs, file)` writes an image to a binary stream;
  `load_filesystem(file)` reads one back and returns a `Filesystem`, raising
  `FsError(INVALID_BINARY_FORMAT)` when the image is truncated.
- `pack_inode(inode)` / `unpack_inode(data)` convert one fixed-size inode
  record (`INODE_RECORD_SIZE` bytes).
- `dblock_mask_size(dblock_count)`, `calculate_index_dblock_amount(file_size)`
  and `calculate_necessary_dblock_amount(file_size)` give the bitmask size,
  the number of index blocks, and the total blocks (data plus index) a file
  of a given size occupies.

### `blockfs.display`

- `DisplayFlag`: `FS_FORMAT`, `INODES`, `DBLOCKS`, or `ALL`.
- `format_filesystem(fs, flag)` returns the dump as a string: a summary of
  free inodes and blocks, each inode in use with its name, type,
  permissions, size and blocks, and a hex dump of each allocated data block.
  Passing `None` gives `"No file system specified.\n"`.
- `display_filesystem(fs, flag, out=None)` writes the same text to `out`,
  or to standard output.
- `direct_dblock_indices(fs, inode)`, `indirect_dblock_indices(fs, inode)`
  and `indirect_index_indices(fs, inode)` list the blocks an inode uses.

## Example

```python
from blockfs.storage import load_filesystem, save_filesystem
from blockfs.display import DisplayFlag, format_filesystem

with open("disk.bin", "rb") as image:
    fs = load_filesystem(image)

print(fs.available_inodes(), fs.available_dblocks())
print(format_filesystem(fs, DisplayFlag.ALL))

with open("copy.bin", "wb") as image:
    save_filesystem(fs, image)
```

## What it does not do

`blockfs` describes, stores and displays a filesystem; it does not operate
on one. There is no function to format a fresh filesystem, to claim or
release inodes and data blocks, to read, write, seek or shrink file
contents, or to create, remove, list or walk files and directories, and
there is no interactive shell or command-line program.

## Running the tests

```
pip install ".[test]"
pytest
```