"""File fetcher: serves files below a base directory."""

import asyncio
import os
import stat

from edge_origin.origin.errors import NotFoundError
from edge_origin.origin.fetchers.base_fetcher import UpstreamFetcher
from edge_origin.shared.logging import get_logger
from edge_origin.shared.models import FileResult, RequestDescriptor

logger = get_logger(__name__)


class FileFetcher(UpstreamFetcher):
    """Reads whole files, as UTF-8 text, relative to a base directory."""

    def __init__(self, base_dir: str):
        """
        Initialize file fetcher.

        Args:
            base_dir: Absolute directory the request paths are resolved against
        """
        self._base_dir = os.path.abspath(base_dir)

    async def fetch(self, request: RequestDescriptor) -> FileResult:
        target = self.target_path(request.uri)
        logger.debug(f"Reading file {target} for {request.uri}")

        contents = await asyncio.to_thread(self._read, target)
        return FileResult(contents=contents)

    def target_path(self, raw_uri: str) -> str:
        """
        Map a request uri onto a path below the base directory.

        The query string and fragment are dropped. Paths that normalize to somewhere outside
        the base directory are reported as not found.
        """
        path = raw_uri.split("?", 1)[0].split("#", 1)[0]
        target = os.path.normpath(f"{self._base_dir}/{path}")

        if os.path.commonpath([self._base_dir, target]) != self._base_dir:
            logger.warning(f"Rejected path outside of {self._base_dir}: {raw_uri}")
            raise NotFoundError(f"File {target} does not exist")

        return target

    @staticmethod
    def _read(target: str) -> str:
        if not os.access(target, os.F_OK):
            raise NotFoundError(f"File {target} does not exist")

        # lstat: a symlink is rejected even when it points at a regular file
        if not stat.S_ISREG(os.lstat(target).st_mode):
            raise NotFoundError(f"{target} is not a file.")

        # bytes that are not UTF-8 become U+FFFD instead of failing the read
        with open(target, "r", encoding="utf-8", errors="replace", newline="") as f:
            return f.read()
