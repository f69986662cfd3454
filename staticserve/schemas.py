"""Pydantic models for per-request path resolution and file lookup."""

from typing import Optional
from pydantic import BaseModel

from staticserve.errors import FsErrorKind


class RequestPathResolution(BaseModel):
    pathname: str
    resolved_file_path: str
    escapes_root: bool = False


class FileLookup(BaseModel):
    size: Optional[int] = None
    error: Optional[FsErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None
