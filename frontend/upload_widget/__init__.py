"""Upload widget for the BIM model catalog"""
from .widget import (
    UploadWidget, VALID_EXTENSIONS, DEFAULT_MAX_FILE_SIZE,
    STATE_IDLE, STATE_SELECTED, STATE_UPLOADING, STATE_COMPLETE, STATE_FAILED,
)
from .transport import ProgressReader, build_multipart

__all__ = [
    'UploadWidget', 'VALID_EXTENSIONS', 'DEFAULT_MAX_FILE_SIZE',
    'STATE_IDLE', 'STATE_SELECTED', 'STATE_UPLOADING', 'STATE_COMPLETE', 'STATE_FAILED',
    'ProgressReader', 'build_multipart',
]
