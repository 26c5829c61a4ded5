"""
File Service - manages the model file area on disk
"""
import os
import logging
from pathlib import Path
from typing import Optional, Tuple

from werkzeug.datastructures import FileStorage

from utils.errors import PersistenceError
from utils.path_utils import (
    UPLOADS_URL_PREFIX, open_stored_file, resolve_within, stored_name_from_url
)

logger = logging.getLogger(__name__)


class FileService:
    """Service for storing and locating uploaded model files"""

    def __init__(self, upload_folder: str):
        """Initialize file service"""
        self.upload_folder = Path(upload_folder)

    def ensure_folder(self) -> Path:
        self.upload_folder.mkdir(exist_ok=True, parents=True)
        return self.upload_folder

    def folder_exists(self) -> bool:
        return self.upload_folder.is_dir()

    def save_model_file(self, file: FileStorage) -> Tuple[str, int]:
        """
        Save an uploaded model file under a timestamp-prefixed name.

        Args:
            file: Uploaded file from the multipart request

        Returns:
            (stored filename, size in bytes)

        Raises:
            PersistenceError: if the file could not be written
        """
        self.ensure_folder()
        try:
            stored_name, handle = open_stored_file(file.filename, self.upload_folder)
        except OSError as e:
            logger.error(f"Failed to create model file for {file.filename}: {str(e)}")
            raise PersistenceError(f"Failed to store file: {str(e)}", 'FILE_WRITE_ERROR') from e
        filepath = self.upload_folder / stored_name

        try:
            with handle:
                file.save(handle)
        except OSError as e:
            logger.error(f"Failed to write model file {stored_name}: {str(e)}")
            self._remove_quietly(filepath)
            raise PersistenceError(f"Failed to store file: {str(e)}", 'FILE_WRITE_ERROR') from e

        size = filepath.stat().st_size
        logger.info(f"Stored model file {stored_name} ({size} bytes)")
        return stored_name, size

    def delete_file(self, stored_name: str) -> bool:
        """Delete a stored file; returns True if a file was removed"""
        path = self.get_absolute_path(stored_name)
        if path is None or not path.is_file():
            return False
        return self._remove_quietly(path)

    def get_file_url(self, stored_name: str) -> str:
        return f"{UPLOADS_URL_PREFIX}{stored_name}"

    def get_absolute_path(self, stored_name: str) -> Optional[Path]:
        """Absolute path of a stored file, or None if the name escapes the upload folder"""
        return resolve_within(self.upload_folder, stored_name)

    def file_exists(self, stored_name: Optional[str]) -> bool:
        if not stored_name:
            return False
        path = self.get_absolute_path(stored_name)
        return path is not None and path.is_file()

    def url_exists(self, file_path: Optional[str]) -> bool:
        """Check whether the blob referenced by a ``/uploads/<name>`` path is on disk"""
        return self.file_exists(stored_name_from_url(file_path))

    @staticmethod
    def _remove_quietly(path: Path) -> bool:
        try:
            os.remove(path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Failed to remove file {path}: {str(e)}")
            return False
