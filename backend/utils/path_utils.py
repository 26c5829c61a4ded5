"""
Path utilities for the model file area (extension checks, stored names, traversal guards)
"""
import os
import time
import logging
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Tuple

from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = '/uploads/'


def get_extension(filename: Optional[str]) -> str:
    """
    Return the lower-cased text after the last '.' of a filename.

    A name without a dot has no extension and yields ''.
    """
    if not filename or '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[-1].lower()


def is_allowed_extension(filename: Optional[str], allowed: Iterable[str]) -> bool:
    return get_extension(filename) in {ext.lower().lstrip('.') for ext in allowed}


def open_stored_file(original_name: str, directory: Path,
                     timestamp_ms: Optional[int] = None) -> Tuple[str, BinaryIO]:
    """
    Claim a ``<millisecond timestamp>-<sanitized name>`` file and open it for writing.

    If ``secure_filename`` strips the whole stem (e.g. a non-ASCII name), the
    name falls back to ``model.<ext>``.

    The file is created with exclusive mode, so two uploads racing for the
    same ``<timestamp>-<name>`` cannot both get it: the loser sees
    FileExistsError and moves on to the next millisecond.

    Returns:
        (stored filename, binary file handle owned by the caller)
    """
    safe_name = _safe_stored_name(original_name)
    timestamp = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    while True:
        candidate = f"{timestamp}-{safe_name}"
        try:
            return candidate, open(directory / candidate, 'xb')
        except FileExistsError:
            timestamp += 1


def _safe_stored_name(original_name: Optional[str]) -> str:
    ext = get_extension(original_name)
    safe_name = secure_filename(original_name or '')
    if not safe_name or get_extension(safe_name) != ext:
        safe_name = f"model.{ext}" if ext else "model"
    return safe_name


def stored_name_from_url(file_path: Optional[str]) -> Optional[str]:
    """
    Extract the stored filename from a ``/uploads/<name>`` URL path.

    Returns None for anything that is not a plain file name under /uploads/.
    """
    if not file_path or not file_path.startswith(UPLOADS_URL_PREFIX):
        return None
    name = file_path[len(UPLOADS_URL_PREFIX):]
    if not name or name != os.path.basename(name) or name in ('.', '..'):
        return None
    return name


def resolve_within(root_dir: Path, filename: str) -> Optional[Path]:
    """
    Resolve ``filename`` inside ``root_dir``.

    Returns None if the path would escape the root directory.
    """
    resolved_root = Path(root_dir).resolve()
    try:
        resolved = (resolved_root / filename).resolve()
    except (OSError, RuntimeError) as e:
        logger.warning(f"Failed to resolve path {filename!r}: {str(e)}")
        return None
    if resolved.parent != resolved_root:
        return None
    return resolved
