"""Artifact storage: lookup, deletion and post-download cleanup."""
import asyncio
import logging
from pathlib import Path
from typing import Set

from shared.errors import NotFoundError

logger = logging.getLogger(__name__)


class ArtifactStorage:
    """Generated documents living in the downloads directory."""

    def __init__(self, directory: Path, cleanup_delay: float = 60.0):
        self.directory = Path(directory)
        self.cleanup_delay = cleanup_delay
        self._pending: Set[asyncio.Task] = set()

    def ensure_directory(self):
        self.directory.mkdir(parents=True, exist_ok=True)

    def resolve(self, filename: str) -> Path:
        """Path of an existing artifact. Raises NotFoundError otherwise."""
        if not filename or Path(filename).name != filename or filename.startswith("."):
            raise NotFoundError(f"File {filename} not found")

        path = self.directory / filename
        if not path.is_file():
            raise NotFoundError(f"File {filename} not found")
        return path

    def delete(self, filename: str) -> bool:
        """Remove an artifact. A file that is already gone is not an error."""
        try:
            path = self.resolve(filename)
            path.unlink()
        except (NotFoundError, FileNotFoundError):
            return False

        logger.info(f"Deleted artifact {filename}")
        return True

    async def schedule_deletion(self, filename: str):
        """Delete the artifact once the cleanup delay has passed."""
        task = asyncio.create_task(self._delete_later(filename))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _delete_later(self, filename: str):
        await asyncio.sleep(self.cleanup_delay)
        try:
            self.delete(filename)
        except OSError as e:
            logger.warning(f"Cleanup of {filename} failed: {e}")

    async def close(self):
        """Cancel cleanups that have not run yet."""
        for task in list(self._pending):
            task.cancel()
        await asyncio.gather(*self._pending, return_exceptions=True)
