import logging
import os
import tempfile
from pathlib import Path

from club_eligibility.domain.errors import StoreError
from club_eligibility.domain.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class CsvStore:
    """Keeps the most recently uploaded matches export as a single file.

    Each save replaces the previous blob wholesale.
    """

    def __init__(self, path: str | Path, encoding: str = "utf-8") -> None:
        self._path = Path(path).expanduser()
        self._encoding = encoding

    @property
    def source_type(self) -> str:
        return "file"

    @property
    def source_detail(self) -> str:
        return str(self._path)

    def exists(self) -> bool:
        return self._path.is_file()

    def save(self, text: str) -> Result[None, StoreError]:
        """Replace the stored export with ``text``, leaving the old one intact on failure."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".upload-", suffix=".csv")
        except OSError as e:
            return Err(StoreError(message=f"Could not write {self._path}: {e}", path=str(self._path)))
        try:
            with os.fdopen(fd, "w", encoding=self._encoding, newline="") as f:
                f.write(text)
            os.replace(tmp_name, self._path)
        except (OSError, UnicodeEncodeError) as e:
            Path(tmp_name).unlink(missing_ok=True)
            return Err(StoreError(message=f"Could not write {self._path}: {e}", path=str(self._path)))
        logger.info("Saved matches export to %s", self._path)
        return Ok(None)

    def load(self) -> Result[str, StoreError]:
        logger.debug("Reading matches export %s", self._path)
        try:
            text = self._path.read_text(encoding=self._encoding)
        except FileNotFoundError:
            return Err(StoreError(message=f"No matches export stored at {self._path}", path=str(self._path)))
        except (OSError, UnicodeDecodeError) as e:
            return Err(StoreError(message=f"Could not read {self._path}: {e}", path=str(self._path)))
        return Ok(text)
