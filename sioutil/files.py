"""Saving, loading and locating files relative to a project directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _rsplit_once(text: str, separator: str) -> Optional[tuple[str, str]]:
    index = text.rfind(separator)
    if index < 0:
        return None
    return text[:index], text[index + len(separator):]


def split_full_path(full_path: str) -> tuple[str, str]:
    """Split a path at its last separator into (directory, file name).

    Forward slashes are tried first, then a doubled backslash. When neither
    is present both parts are empty.
    """
    for separator in ("/", "\\\\"):
        parts = _rsplit_once(full_path, separator)
        if parts is not None:
            return parts
    return "", ""


def _as_directory(path: PathLike) -> str:
    text = os.fspath(path).replace("\\", "/")
    return text if text.endswith("/") else text + "/"


class FileStore:
    """File helpers rooted at a project directory.

    The contents and saved directories are ``Content/`` and ``Saved/`` under
    the project directory unless given explicitly. The external save
    directory is the saved directory.
    """

    def __init__(
        self,
        project_dir: Optional[PathLike] = None,
        contents_dir: Optional[PathLike] = None,
        saved_dir: Optional[PathLike] = None,
    ) -> None:
        self._project_dir = _as_directory(project_dir if project_dir is not None else os.getcwd())
        self._contents_dir = (
            _as_directory(contents_dir) if contents_dir is not None else self._project_dir + "Content/"
        )
        self._saved_dir = _as_directory(saved_dir) if saved_dir is not None else self._project_dir + "Saved/"

    def project_contents_directory(self) -> str:
        return self._contents_dir

    def project_directory(self) -> str:
        return self._project_dir

    def project_saved_directory(self) -> str:
        return self._saved_dir

    def external_save_directory(self) -> str:
        return self._saved_dir

    def project_relative_path(self, full_path: str) -> str:
        """Return what follows the project directory in ``full_path``.

        The match ignores case; if the project directory does not occur the
        result is empty.
        """
        project = self._project_dir
        index = full_path.lower().find(project.lower())
        if index < 0:
            return ""
        return full_path[index + len(project):]

    def save_bytes_to_file(
        self, data: bytes, directory: str, file_name: str, log_save: bool = False
    ) -> str:
        """Write ``data`` to ``directory``/``file_name``, creating directories.

        Returns the absolute path written. Raises OSError on failure.
        """
        os.makedirs(directory, exist_ok=True)
        joined = directory + file_name if directory.endswith("/") else directory + "/" + file_name
        absolute = os.path.abspath(joined)
        try:
            Path(absolute).write_bytes(bytes(data))
        except OSError:
            if log_save:
                logger.info("Failed to save: %s", absolute)
            raise
        if log_save:
            logger.info("Saved: %s with %d bytes", absolute, len(data))
        return absolute

    def save_bytes_to_path(self, data: bytes, path: str, log_save: bool = False) -> str:
        """Write ``data`` to a full path; see save_bytes_to_file."""
        directory, file_name = split_full_path(path)
        return self.save_bytes_to_file(data, directory, file_name, log_save)

    def read_bytes_from_file(self, directory: str, file_name: str) -> bytes:
        """Read ``directory``/``file_name``. Raises OSError on failure."""
        return self.read_bytes_from_path(directory + "/" + file_name)

    def read_bytes_from_path(self, path: str) -> bytes:
        """Read the file at ``path``. Raises OSError on failure."""
        return Path(path).read_bytes()

    def delete_file_at_path(self, path: str) -> bool:
        """Delete the file at ``path``; return whether a file was deleted."""
        if not path or "\x00" in path or not os.path.isfile(path):
            return False
        os.remove(path)
        return True