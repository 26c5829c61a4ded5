"""
Upload widget - selects one model file, collects its metadata and submits it
to the catalog service, reporting progress through callbacks.
"""
from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence, Union

import requests

from .transport import ProgressReader, build_multipart

logger = logging.getLogger(__name__)

VALID_EXTENSIONS = ("glb", "obj", "fbx")
DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024
DEFAULT_REDIRECT_DELAY = 1.5
MODEL_FILE_FIELD = "model"
FORM_FIELDS = ("name", "category", "description")

# Lifecycle states
STATE_IDLE = "idle"
STATE_SELECTED = "selected"
STATE_UPLOADING = "uploading"
STATE_COMPLETE = "complete"
STATE_FAILED = "failed"

READY_STATUS = "Ready to upload. Fill in the model information below."

PathLike = Union[str, os.PathLike]
Scheduler = Callable[[float, Callable[[], None]], Any]


def _timer_scheduler(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


def file_extension(filename: str) -> str:
    """Lower-cased text after the last '.', or '' when there is none"""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


class UploadWidget:
    """
    Single-slot upload widget.

    The widget holds at most one selected file. ``select_files`` validates
    the first entry of a file list, ``clear_selection`` resets everything and
    ``submit`` sends the file with the form fields as one multipart POST to
    ``<api_url>/api/upload``.

    Callbacks:
        notify(message): blocking user notification (alert)
        on_progress(fraction): upload progress between 0.0 and 1.0
        on_navigate(view): navigation request, called with "browse" after success
    """

    def __init__(
        self,
        api_url: str,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        notify: Optional[Callable[[str], None]] = None,
        on_progress: Optional[Callable[[float], None]] = None,
        on_navigate: Optional[Callable[[str], None]] = None,
        session: Optional[requests.Session] = None,
        scheduler: Optional[Scheduler] = None,
        redirect_delay: float = DEFAULT_REDIRECT_DELAY,
        timeout: float = 300,
    ):
        self.api_url = api_url.rstrip("/")
        self.max_file_size = max_file_size
        self.redirect_delay = redirect_delay
        self.timeout = timeout
        self._notify = notify or (lambda message: logger.info(message))
        self._on_progress = on_progress
        self._on_navigate = on_navigate
        self._session = session or requests.Session()
        self._schedule = scheduler or _timer_scheduler

        self.selected_file: Optional[Path] = None
        self.form: Dict[str, str] = {field: "" for field in FORM_FIELDS}
        self.state = STATE_IDLE
        self.status_text = ""
        self.progress = 0.0
        self.preview_name = ""
        self.preview_visible = False
        self.form_visible = False
        self.progress_visible = False

    # ------------------------------------------------------------------ #
    # Selection
    # ------------------------------------------------------------------ #

    def select_files(self, files: Sequence[PathLike]) -> bool:
        """
        Take the first file of a picker or drop list.

        Returns:
            True if the file was accepted; on rejection the user is notified
            and the widget state is left untouched.
        """
        if not files:
            return False

        path = Path(files[0])
        if file_extension(path.name) not in VALID_EXTENSIONS:
            self._notify("Invalid file type. Please use GLB, OBJ, or FBX files.")
            return False

        try:
            size = path.stat().st_size
        except OSError as e:
            self._notify(f"Cannot read file: {e}")
            return False

        if size > self.max_file_size:
            self._notify(f"File too large. Maximum size is {self.max_file_size // (1024 * 1024)}MB.")
            return False

        self.selected_file = path
        self.preview_name = path.name
        self.preview_visible = True
        self.progress_visible = True
        self.progress = 0.0
        self.status_text = READY_STATUS
        self.form_visible = True
        self.state = STATE_SELECTED
        logger.debug(f"Selected {path} ({size} bytes)")
        return True

    def clear_selection(self) -> None:
        """Reset to the initial state"""
        self.selected_file = None
        self.preview_name = ""
        self.preview_visible = False
        self.form_visible = False
        self.progress_visible = False
        self.progress = 0.0
        self.status_text = ""
        self.form = {field: "" for field in FORM_FIELDS}
        self.state = STATE_IDLE

    def set_field(self, field: str, value: str) -> None:
        if field not in FORM_FIELDS:
            raise KeyError(f"Unknown form field: {field}")
        self.form[field] = value

    # ------------------------------------------------------------------ #
    # Submission
    # ------------------------------------------------------------------ #

    def build_fields(self) -> Dict[str, str]:
        """
        Text parts sent with the file.

        Materials and specifications are not collected by the form, so they
        are sent empty and the catalog stores empty lists.
        """
        fields = {field: self.form.get(field, "") for field in FORM_FIELDS}
        fields["materials"] = ""
        fields["specifications"] = ""
        return fields

    def submit(self) -> Optional[Dict[str, Any]]:
        """
        Upload the selected file with the form fields.

        Returns:
            The parsed success response, or None when nothing was sent or
            the upload failed (the selection is kept so the user can retry).
        """
        if self.selected_file is None:
            self._notify("Please select a file first.")
            return None

        self.progress_visible = True
        self._set_progress(0.0)
        self.status_text = "Starting upload..."
        self.state = STATE_UPLOADING

        try:
            body, content_type = build_multipart(
                MODEL_FILE_FIELD, self.selected_file, self.build_fields()
            )
        except OSError as e:
            return self._fail("Error.", f"Error uploading file: {e}")

        reader = ProgressReader(body, self._report_progress)
        try:
            response = self._session.post(
                f"{self.api_url}/api/upload",
                data=reader,
                headers={"Content-Type": content_type},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error uploading model: {e}")
            return self._fail("Error uploading.", f"Error uploading file: {e}")

        if not response.ok:
            reason = _error_message(response) or response.reason or ""
            return self._fail(
                "Error uploading.",
                f"Error uploading file: HTTP {response.status_code} {reason}".rstrip(),
            )

        try:
            result = response.json()
        except ValueError:
            return self._fail("Upload failed.", "Upload failed: invalid server response")

        if not isinstance(result, dict) or not result.get("success"):
            message = result.get("error") if isinstance(result, dict) else None
            return self._fail("Upload failed.", f"Upload failed: {message or 'unknown error'}")

        self._set_progress(1.0)
        self._notify("Model uploaded successfully! Your model is now available in the library.")
        # Selection and form are reset; the completion status stays until the next selection
        self.clear_selection()
        self.status_text = "Upload complete!"
        self.state = STATE_COMPLETE
        self._schedule(self.redirect_delay, self._navigate_to_browse)
        return result

    def fetch_models(self) -> list:
        """GET /api/models - catalog entries for the browse view"""
        response = self._session.get(f"{self.api_url}/api/models", timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _report_progress(self, sent: int, total: int) -> None:
        if total <= 0:
            return
        fraction = sent / total
        self._set_progress(fraction)
        self.status_text = f"Uploading... {round(fraction * 100)}%"

    def _set_progress(self, fraction: float) -> None:
        self.progress = fraction
        if self._on_progress is not None:
            self._on_progress(fraction)

    def _fail(self, status: str, message: str) -> None:
        self.status_text = status
        self.state = STATE_FAILED
        self._notify(message)
        return None

    def _navigate_to_browse(self) -> None:
        if self._on_navigate is not None:
            self._on_navigate("browse")


def _error_message(response: requests.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str):
            return error
    return None
