"""Stock observers: an event log file and an onboarding mail stub."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from .models import Entity

logger = logging.getLogger(__name__)


def _to_json(data: Any) -> str:
    if isinstance(data, Entity):
        data = data.to_dict()
    return json.dumps(data, default=str)


class LogFileObserver:
    """Appends one timestamped line per event to a log file.

    Any existing file at `path` is removed when the observer is created.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.unlink(missing_ok=True)

    def update(self, subject: Any, event: str, data: Any = None) -> None:
        stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        entry = f"{stamp}: '{event}' with data '{_to_json(data)}'\n"
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(entry)
        logger.debug("Wrote %r entry to %s", event, self.path)

    def __repr__(self) -> str:
        return f"LogFileObserver({str(self.path)!r})"


class OnboardingNotification:
    """Tells an administrator that a new user needs onboarding.

    Mail delivery is stubbed: messages are built and kept in `sent`.
    """

    subject_line = "Onboarding required"

    def __init__(self, admin_email: str) -> None:
        self.admin_email = admin_email
        self.sent: list[dict[str, str]] = []

    def update(self, subject: Any, event: str, data: Any = None) -> None:
        message = {
            "to": self.admin_email,
            "subject": self.subject_line,
            "body": f"We have a new user. Here's their info: {_to_json(data)}",
        }
        self.sent.append(message)
        logger.info("Onboarding notification queued for %s", self.admin_email)

    def __repr__(self) -> str:
        return f"OnboardingNotification({self.admin_email!r})"
