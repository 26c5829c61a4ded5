"""
Multipart payload building and progress-reporting request bodies
"""
from __future__ import annotations

import io
import mimetypes
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

from urllib3 import encode_multipart_formdata

ProgressCallback = Callable[[int, int], None]


def build_multipart(file_field: str, file_path: Path, fields: Dict[str, str],
                    filename: Optional[str] = None) -> Tuple[bytes, str]:
    """
    Encode one file plus text fields as multipart/form-data.

    Returns:
        (body bytes, Content-Type header value with boundary)
    """
    file_path = Path(file_path)
    name = filename or file_path.name
    content_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
    parts = [(key, value) for key, value in fields.items()]
    parts.append((file_field, (name, file_path.read_bytes(), content_type)))
    return encode_multipart_formdata(parts)


class ProgressReader:
    """
    File-like request body that reports how many bytes have been read.

    ``requests`` takes the Content-Length from ``len()`` and the transport
    pulls the body through ``read()``, so every chunk handed to the socket
    goes through the callback as ``(bytes_sent, total_bytes)``.
    """

    def __init__(self, data: bytes, callback: Optional[ProgressCallback] = None):
        self._buffer = io.BytesIO(data)
        self._callback = callback
        self.total = len(data)
        self.sent = 0

    def __len__(self) -> int:
        return self.total

    def read(self, size: Optional[int] = -1) -> bytes:
        chunk = self._buffer.read(-1 if size is None else size)
        if chunk:
            self.sent += len(chunk)
            if self._callback is not None:
                self._callback(self.sent, self.total)
        return chunk
