"""Static asset responder: maps request paths to files under the root directory."""

import logging
import os
from typing import AsyncIterator, Optional

import anyio
from anyio import AsyncFile
from starlette.requests import Request
from starlette.responses import Response, StreamingResponse
from starlette.types import Receive, Scope, Send

from staticserve.config import Settings
from staticserve.errors import FsErrorKind, STATUS_FOR_ERROR, classify_fs_error
from staticserve.schemas import FileLookup, RequestPathResolution

logger = logging.getLogger(__name__)


class StaticAssetResponder:
    """
    Serves files from a fixed root directory, one streamed file per request.

    The responder holds only read-only configuration, so one instance is
    shared by every concurrent request. Each successful request owns exactly
    one file handle, closed when its body stream ends.
    """

    def __init__(self, settings: Settings):
        self.root = settings.root_path
        # "/" as root would otherwise produce "//file"
        self._prefix = self.root.rstrip(os.sep)
        self.default_document = "/" + settings.DEFAULT_DOCUMENT.lstrip("/")
        self.confine_to_root = settings.CONFINE_TO_ROOT
        self.chunk_size = settings.CHUNK_SIZE

    def resolve(self, pathname: str) -> RequestPathResolution:
        """Apply the default document and join the path onto the root."""
        if pathname == "/":
            pathname = self.default_document
        resolved = self._prefix + pathname
        return RequestPathResolution(
            pathname=pathname,
            resolved_file_path=resolved,
            escapes_root=self._escapes_root(resolved),
        )

    def _escapes_root(self, path: str) -> bool:
        if not self._prefix:
            return False
        normalized = os.path.normpath(path)
        return normalized != self.root and not normalized.startswith(self.root + os.sep)

    async def lookup(self, resolution: RequestPathResolution) -> FileLookup:
        """Stat the candidate file, classifying any failure."""
        try:
            stat = await anyio.Path(resolution.resolved_file_path).stat()
        except (OSError, ValueError) as e:
            return FileLookup(error=self._failed(resolution, e))
        return FileLookup(size=stat.st_size)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        # Mounted as a raw ASGI app so routing applies no method filter.
        response = await self.respond(Request(scope, receive))
        await response(scope, receive, send)

    async def respond(self, request: Request) -> Response:
        pathname = "/" + request.path_params.get("path", "")
        resolution = self.resolve(pathname)

        if self.confine_to_root and resolution.escapes_root:
            logger.info(f"Refusing {pathname!r}: resolves outside {self.root}")
            return self._error_response(FsErrorKind.NOT_FOUND)

        lookup = await self.lookup(resolution)
        if not lookup.ok:
            return self._error_response(lookup.error)

        file = await self._open(resolution)
        if isinstance(file, FsErrorKind):
            return self._error_response(file)

        logger.debug(f"Serving {resolution.resolved_file_path} ({lookup.size} bytes)")
        return StreamingResponse(
            self._stream(file, lookup.size),
            headers={"content-length": str(lookup.size)},
        )

    async def _open(self, resolution: RequestPathResolution):
        try:
            return await anyio.open_file(resolution.resolved_file_path, "rb")
        except (OSError, ValueError) as e:
            return self._failed(resolution, e)

    async def _stream(self, file: AsyncFile, size: int) -> AsyncIterator[bytes]:
        # Never send more than the content-length taken from the stat.
        remaining = size
        try:
            while remaining > 0:
                chunk = await file.read(min(self.chunk_size, remaining))
                if not chunk:
                    break
                remaining -= len(chunk)
                yield chunk
        finally:
            # The handle must be released even when the client disconnects.
            with anyio.CancelScope(shield=True):
                await file.aclose()

    def _failed(self, resolution: RequestPathResolution, exc: BaseException) -> FsErrorKind:
        kind = classify_fs_error(exc)
        if kind is FsErrorKind.NOT_FOUND:
            logger.info(f"Not found: {resolution.pathname}")
        else:
            logger.warning(f"Failed to read {resolution.resolved_file_path}: {exc!r}")
        return kind

    @staticmethod
    def _error_response(kind: Optional[FsErrorKind]) -> Response:
        return Response(status_code=STATUS_FOR_ERROR.get(kind, 500))
