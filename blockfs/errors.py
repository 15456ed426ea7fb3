"""Result codes and the exception raised for file system failures."""

from __future__ import annotations

from enum import IntEnum


class RetCode(IntEnum):
    """Outcome of a file system operation."""

    SUCCESS = 0
    INVALID_INPUT = 1
    SYSTEM_ERROR = 2
    INODE_UNAVAILABLE = 3
    DBLOCK_UNAVAILABLE = 4
    INSUFFICIENT_DBLOCKS = 5
    INVALID_FILE_TYPE = 6
    INVALID_BINARY_FORMAT = 7
    FILE_NOT_FOUND = 8
    DIR_NOT_FOUND = 9
    NOT_FOUND = 10
    EMPTY_FILENAME = 11
    INVALID_FILENAME = 12
    DIR_NOT_EMPTY = 13
    FILE_EXIST = 14
    DIRECTORY_EXIST = 15
    ATTEMPT_DELETE_CWD = 16
    NOT_IMPLEMENTED = 17

    def message(self) -> str:
        """Human readable description of this code."""
        return _MESSAGES[self]


_MESSAGES = {
    RetCode.SUCCESS: "Success",
    RetCode.INVALID_INPUT: "Invalid input",
    RetCode.SYSTEM_ERROR: "System Error",
    RetCode.INODE_UNAVAILABLE: "No inodes available",
    RetCode.DBLOCK_UNAVAILABLE: "No dblocks available",
    RetCode.INSUFFICIENT_DBLOCKS: "Not enough dblocks for operation",
    RetCode.INVALID_FILE_TYPE: "Invalid file type",
    RetCode.INVALID_BINARY_FORMAT: "Invalid binary format for filesystem",
    RetCode.FILE_NOT_FOUND: "File not found",
    RetCode.DIR_NOT_FOUND: "Directory not found",
    RetCode.NOT_FOUND: "Object not found",
    RetCode.EMPTY_FILENAME: "Empty file name",
    RetCode.INVALID_FILENAME: "Invalid file name",
    RetCode.DIR_NOT_EMPTY: "Directory is not empty",
    RetCode.FILE_EXIST: "File already exists",
    RetCode.DIRECTORY_EXIST: "Directory already exists",
    RetCode.ATTEMPT_DELETE_CWD: "Cannot delete current working directory",
    RetCode.NOT_IMPLEMENTED: "Function not implemented",
}


class FsError(Exception):
    """A file system operation failed with a specific result code."""

    def __init__(self, code: RetCode | int) -> None:
        self.code = RetCode(code)
        super().__init__(self.code.message())

    @property
    def report(self) -> str:
        """The line printed when this error is reported to a user."""
        return f"Error: {self.code.message()}"