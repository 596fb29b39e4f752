"""File-backed deletion log: one human-readable line per deleted contact.

Appends are serialized with a lock so concurrent deletions never interleave
lines. The file is never rotated or truncated.
"""

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path

from phonebook.application.dto import ContactDto

logger = logging.getLogger(__name__)

DEFAULT_DELETION_LOG_PATH = "logs/deletion_log.txt"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_deletion_entry(contact: ContactDto, deleted_at: datetime) -> str:
    """Build one log line (with trailing newline) for a deleted contact."""
    phones = ", ".join(p.phone_number for p in contact.phones)
    return (
        f"[{deleted_at.strftime(TIMESTAMP_FORMAT)}] Contact deleted: "
        f"ID={contact.id}, Name={contact.name}, Age={contact.age}, "
        f"Phones=[{phones}]\n"
    )


class FileDeletionLog:
    """Appends deletion entries to a single file. One instance per process."""

    def __init__(self, path: str | Path = DEFAULT_DELETION_LOG_PATH) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.exception(
                "Failed to create deletion log directory at %s", self._path
            )
            raise

    @property
    def path(self) -> Path:
        return self._path

    def log_deletion(self, contact: ContactDto) -> None:
        with self._lock:
            try:
                entry = format_deletion_entry(contact, datetime.now(timezone.utc))
                with self._path.open("a", encoding="utf-8") as f:
                    f.write(entry)
                    f.flush()
                logger.info("Logged deletion of contact %s", contact.id)
            except OSError:
                logger.exception("Failed to log deletion for contact %s", contact.id)
                raise
