"""
Scoped reads of uploaded files (logo images, video attachments).

Each upload target ("slot") tracks the token of its most recent read. A read
that finishes after a newer one was started for the same slot is stale and
its result must be discarded.
"""
import base64
import mimetypes
from typing import Dict, Optional

from fastapi import UploadFile
from ulid import ULID

from docuflow.utils import get_logger


log = get_logger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(upload: UploadFile) -> str:
    if upload.content_type and upload.content_type != DEFAULT_MIME_TYPE:
        return upload.content_type
    guessed, _ = mimetypes.guess_type(upload.filename or "")
    return guessed or DEFAULT_MIME_TYPE


async def read_data_url(upload: UploadFile) -> str:
    """Read ``upload`` into a ``data:`` URL. The file is closed on success and on error."""
    try:
        payload = await upload.read()
    finally:
        await upload.close()
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{guess_mime_type(upload)};base64,{encoded}"


class UploadSlots:
    def __init__(self):
        self._latest: Dict[str, str] = {}

    def begin(self, slot: str) -> str:
        """Start a read for ``slot``; supersedes any read still in flight."""
        token = str(ULID())
        self._latest[slot] = token
        return token

    def is_current(self, slot: str, token: str) -> bool:
        return self._latest.get(slot) == token

    def finish(self, slot: str, token: str) -> bool:
        """Release the slot. Returns False when the read was superseded."""
        if not self.is_current(slot, token):
            log.warning("Discarding superseded upload for %s", slot)
            return False
        del self._latest[slot]
        return True

    def in_flight(self, slot: str) -> bool:
        return slot in self._latest

    async def read(self, slot: str, upload: UploadFile) -> Optional[str]:
        """
        Read ``upload`` as a data URL for ``slot``.

        Returns None when a newer read replaced this one. The slot is released
        even if the read fails.
        """
        token = self.begin(slot)
        try:
            url = await read_data_url(upload)
        finally:
            current = self.finish(slot, token)
        return url if current else None
