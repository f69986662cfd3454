"""Filesystem error taxonomy and its HTTP status mapping."""

import enum
import errno


class FsErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    OTHER = "other"


STATUS_FOR_ERROR = {
    FsErrorKind.NOT_FOUND: 404,
    FsErrorKind.OTHER: 500,
}


def classify_fs_error(exc: BaseException) -> FsErrorKind:
    """Map a failed stat/open to an error kind using the OS error code.

    Only ENOENT counts as not found. Permission, I/O, is-a-directory and
    not-a-directory failures, and non-OS errors such as an embedded NUL byte
    in the path, all fall into OTHER.
    """
    if isinstance(exc, OSError) and exc.errno == errno.ENOENT:
        return FsErrorKind.NOT_FOUND
    return FsErrorKind.OTHER
