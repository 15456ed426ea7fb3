import io

from blockfs.display import (
    DisplayFlag,
    direct_dblock_indices,
    display_filesystem,
    format_filesystem,
    indirect_dblock_indices,
    indirect_index_indices,
)
from blockfs.model import (
    DATA_BLOCK_SIZE,
    INODE_DIRECT_BLOCK_COUNT,
    FileType,
    Filesystem,
    Inode,
    Permission,
)

DIRECT_CAPACITY = DATA_BLOCK_SIZE * INODE_DIRECT_BLOCK_COUNT


def make_fs(inode_count=4, dblock_count=8):
    inodes = [Inode(file_type=FileType.DIRECTORY, file_name=b"root")]
    inodes += [
        Inode(next_free_inode=(i + 1) % inode_count) for i in range(1, inode_count)
    ]
    bitmask = bytearray([0xFF] * ((dblock_count + 7) // 8))
    bitmask[0] &= 0x7F
    return Filesystem(1, inodes, bitmask, bytearray(dblock_count * DATA_BLOCK_SIZE))


def put_index(fs, block, slot, value):
    start = block * DATA_BLOCK_SIZE + slot * 4
    fs.dblocks[start:start + 4] = value.to_bytes(4, "little")


def test_no_filesystem():
    assert format_filesystem(None, DisplayFlag.ALL) == "No file system specified.\n"


def test_format_section():
    fs = make_fs()
    text = format_filesystem(fs, DisplayFlag.FS_FORMAT)
    assert text == (
        "File System Structure:\n"
        f"\tavailable inode: {fs.available_inodes()} / {fs.inode_count}\n"
        f"\tavailable dblock: {fs.available_dblocks()} / {fs.dblock_count}\n"
    )


def test_inode_section_lists_only_used_inodes():
    fs = make_fs()
    text = format_filesystem(fs, DisplayFlag.INODES)
    assert text == (
        "I-Node List:\n"
        '\tinode index 0 [.type = DIRECTORY .name = "root" .size = 0]\n'
    )


def test_inode_with_permissions_and_direct_blocks():
    fs = make_fs()
    fs.inodes[1] = Inode(
        file_type=FileType.DATA_FILE,
        file_perms=Permission.READ | Permission.WRITE,
        file_name=b"a.txt",
        file_size=DATA_BLOCK_SIZE + 1,
        direct_data=[3, 4, 0, 0],
    )
    fs.available_inode = 2
    text = format_filesystem(fs, DisplayFlag.INODES)
    assert (
        '\tinode index 1 [.type = DATA_FILE .perm = READ WRITE  .name = "a.txt" .size = 65]\n'
        in text
    )
    assert "\t\tDirect Data Blocks: 3 4 \n" in text
    assert "Indirect" not in text


def test_direct_indices_capped_at_direct_count():
    fs = make_fs()
    inode = Inode(file_size=DIRECT_CAPACITY * 2, direct_data=[1, 2, 3, 4])
    assert direct_dblock_indices(fs, inode) == [1, 2, 3, 4]
    assert direct_dblock_indices(fs, Inode(file_size=0, direct_data=[1, 2, 3, 4])) == []


def test_indirect_indices_single_index_block():
    fs = make_fs(dblock_count=16)
    put_index(fs, 5, 0, 6)
    put_index(fs, 5, 1, 7)
    inode = Inode(
        file_size=DIRECT_CAPACITY + 2 * DATA_BLOCK_SIZE,
        direct_data=[1, 2, 3, 4],
        indirect_dblock=5,
    )
    assert indirect_dblock_indices(fs, inode) == [6, 7]
    assert indirect_index_indices(fs, inode) == [5]


def test_indirect_indices_follow_chain():
    fs = make_fs(dblock_count=40)
    for slot in range(15):
        put_index(fs, 5, slot, 10 + slot)
    put_index(fs, 5, 15, 8)
    put_index(fs, 8, 0, 30)
    inode = Inode(
        file_size=DIRECT_CAPACITY + 16 * DATA_BLOCK_SIZE,
        direct_data=[1, 2, 3, 4],
        indirect_dblock=5,
    )
    assert indirect_dblock_indices(fs, inode) == list(range(10, 25)) + [30]
    assert indirect_index_indices(fs, inode) == [5, 8]


def test_indirect_indices_empty_for_small_file():
    fs = make_fs()
    inode = Inode(file_size=DIRECT_CAPACITY, direct_data=[1, 2, 3, 4])
    assert indirect_dblock_indices(fs, inode) == []
    assert indirect_index_indices(fs, inode) == []


def test_inode_section_shows_indirect_lines():
    fs = make_fs(dblock_count=16)
    put_index(fs, 5, 0, 6)
    put_index(fs, 5, 1, 7)
    fs.inodes[1] = Inode(
        file_name=b"big",
        file_size=DIRECT_CAPACITY + 2 * DATA_BLOCK_SIZE,
        direct_data=[1, 2, 3, 4],
        indirect_dblock=5,
    )
    fs.available_inode = 2
    text = format_filesystem(fs, DisplayFlag.INODES)
    assert "\t\tDirect Data Blocks: 1 2 3 4 \n" in text
    assert "\t\tIndirect Data Blocks: 6 7 \n" in text
    assert "\t\tIndirect Index Blocks: 5 \n" in text


def test_dblock_section_shows_allocated_blocks():
    fs = make_fs()
    fs.dblocks[0] = 0xAB
    text = format_filesystem(fs, DisplayFlag.DBLOCKS)
    lines = text.split("\n")
    assert lines[0] == "Data Block List:"
    assert lines[1] == "\tdblock index 0"
    assert lines[2] == "\t\tab " + "00 " * 15
    assert lines[3:7] == ["\t\t" + "00 " * 16] * 3 + [""]
    assert "dblock index 1" not in text


def test_all_is_concatenation_of_sections():
    fs = make_fs()
    combined = "".join(
        format_filesystem(fs, flag)
        for flag in (DisplayFlag.FS_FORMAT, DisplayFlag.INODES, DisplayFlag.DBLOCKS)
    )
    assert format_filesystem(fs, DisplayFlag.ALL) == combined


def test_display_writes_to_stream():
    fs = make_fs()
    out = io.StringIO()
    display_filesystem(fs, DisplayFlag.ALL, out)
    assert out.getvalue() == format_filesystem(fs, DisplayFlag.ALL)


def test_display_defaults_to_stdout(capsys):
    display_filesystem(None, DisplayFlag.ALL)
    assert capsys.readouterr().out == "No file system specified.\n"