# src/cache/archive.py — v1
"""Archive engine: bundle paths into a gzip tarball and unpack it again.

Runs the external ``tar`` tool as an asyncio subprocess. The exit code is the
only success signal. Paths are handed to tar exactly as given; tar's own
conventions decide how absolute paths end up in the archive.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Sequence

from artifactcache.cache.errors import (
    ArchiveCreationError,
    ArchiveError,
    ArchiveExtractionError,
)

logger = logging.getLogger(__name__)


class TarArchiver:
    """gzip-compressed tar archives via the ``tar`` binary."""

    def __init__(self, tar_command: str = "tar") -> None:
        self._tar = tar_command

    async def compress(
        self,
        paths: Sequence[str],
        destination: Path,
        working_directory: Path,
    ) -> None:
        """Create (or overwrite) ``destination`` from ``paths``.

        Args:
            paths: Files or directories, relative to ``working_directory``
                unless absolute.
            destination: Archive file to write.
            working_directory: Directory tar runs in.

        Raises:
            ArchiveCreationError: tar is missing or exited non-zero.
        """
        args = ["-czf", str(destination), *paths]
        await self._run(args, working_directory, ArchiveCreationError, destination)

    async def extract(self, source: Path, working_directory: Path) -> None:
        """Unpack ``source`` into ``working_directory``.

        Raises:
            ArchiveExtractionError: tar is missing or exited non-zero.
        """
        args = ["-xzf", str(source)]
        await self._run(args, working_directory, ArchiveExtractionError, source)

    async def _run(
        self,
        args: list[str],
        cwd: Path,
        error_cls: type[ArchiveError],
        archive_path: Path,
    ) -> None:
        logger.debug("Running %s %s (cwd=%s)", self._tar, " ".join(args), cwd)
        try:
            proc = await asyncio.create_subprocess_exec(
                self._tar,
                *args,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise error_cls(
                f"Cannot run {self._tar!r} in {cwd}: {exc}", path=archive_path
            ) from exc

        _, stderr_bytes = await proc.communicate()
        stderr = stderr_bytes.decode("utf-8", errors="replace").strip()

        if proc.returncode != 0:
            raise error_cls(
                f"{self._tar} failed with exit code {proc.returncode}: {stderr}",
                path=archive_path,
                returncode=proc.returncode,
                stderr=stderr,
            )
        if stderr:
            # e.g. "Removing leading `/' from member names"
            logger.debug("%s: %s", self._tar, stderr)
