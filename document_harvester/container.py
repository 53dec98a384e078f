"""Read text entries out of ZIP-based Office containers."""

import io
import re
import zipfile
import zlib

from document_harvester.exceptions import ExtractionError
from document_harvester.logger import get_logger

logger = get_logger(__name__)

SLIDE_ENTRY = re.compile(r"^ppt/slides/slide[^/]*\.xml$")
NOTES_ENTRY = re.compile(r"^ppt/notesSlides/[^/]+\.xml$")


class ZipContainer:
    """Read-only view over an in-memory ZIP archive.

    Entries are listed in the order the archive's central directory stores
    them; no sorting is applied.

    Raises:
        ExtractionError: If the buffer is not a valid ZIP archive
    """

    def __init__(self, data: bytes, file_name: str = "unknown.zip"):
        self.file_name = file_name
        try:
            self._archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as exc:
            raise ExtractionError(
                f"Failed to open {file_name} as a ZIP container: {exc}"
            ) from exc

    def __enter__(self) -> "ZipContainer":
        return self

    def __exit__(self, *args):
        self.close()

    def close(self) -> None:
        self._archive.close()

    def names(self) -> list[str]:
        return [info.filename for info in self._archive.infolist() if not info.is_dir()]

    def read_text(self, name: str) -> str:
        """Return the entry decoded as UTF-8 (invalid sequences replaced)."""
        return self._archive.read(name).decode("utf-8", errors="replace")

    def slide_entries(self) -> list[str]:
        return [name for name in self.names() if SLIDE_ENTRY.match(name)]

    def notes_entries(self) -> list[str]:
        return [name for name in self.names() if NOTES_ENTRY.match(name)]

    def iter_texts(self, names: list[str]):
        """Yield (name, text) for each readable entry, skipping broken ones."""
        for name in names:
            try:
                text = self.read_text(name)
            except (KeyError, zipfile.BadZipFile, zlib.error, RuntimeError, EOFError, OSError) as exc:
                logger.warning(
                    "Skipping unreadable container entry",
                    extra_data={
                        "file_name": self.file_name,
                        "entry": name,
                        "error_type": type(exc).__name__,
                        "error": str(exc),
                    },
                )
                continue
            yield name, text
