from __future__ import annotations

import logging
import os
import tempfile
from typing import List, Sequence

from pydantic import ValidationError

from .errors import NoTodoFile, TodoError, UnknownError
from .models import TodoItem
from .schemas import dump_document, load_document

logger = logging.getLogger(__name__)


class JsonTodoStore:
    """
    Stores the whole todo collection as one JSON document on local disk.
    """

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def load(self) -> List[TodoItem]:
        """
        Read the collection from disk.

        Raises:
            NoTodoFile: if the file does not exist yet.
            UnknownError: if the file cannot be read or decoded, or is not a valid document.
        """
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError as e:
            raise NoTodoFile(self._path) from e
        except UnicodeDecodeError as e:
            logger.error("Todo file %s is not valid UTF-8", self._path)
            raise UnknownError(str(e)) from e
        except OSError as e:
            logger.error("Failed to read %s: %s", self._path, e)
            raise UnknownError("Unknown file error") from e

        try:
            return load_document(raw)
        except ValidationError as e:
            logger.error("Malformed todo file %s", self._path)
            raise UnknownError(str(e)) from e

    def save(self, items: Sequence[TodoItem]) -> None:
        """
        Write the full collection to disk, replacing the previous document.

        The document goes to a temporary file next to the target which is then
        renamed over it, so a failed write leaves the previous document intact.

        Raises:
            UnknownError: if the document cannot be produced or written.
        """
        try:
            payload = dump_document(items)
        except (ValueError, TypeError) as e:
            raise UnknownError(f"Failed to make json: {e}") from e

        directory = os.path.dirname(self._path) or "."
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".", suffix=".tmp", dir=directory)
        except OSError as e:
            raise UnknownError(f"Failed to create file: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self._path)
        except OSError as e:
            os.unlink(tmp_path)
            raise UnknownError(f"Failed to write file: {e}") from e

    def load_or_initialize(self) -> List[TodoItem]:
        """
        Load the collection, creating an empty document on first use.
        """
        try:
            return self.load()
        except TodoError as e:
            if not e.is_file_not_found:
                raise
            logger.info("No todo file at %s, creating an empty one", self._path)
            items: List[TodoItem] = []
            self.save(items)
            return items
