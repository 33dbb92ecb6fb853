"""Local session storage for the authenticated Discord user.

The Discord OAuth exchange happens outside this package; its result is
recorded here as a typed UserSession so commands can resolve the
current user.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from tradejournal.config import SESSION_PATH
from tradejournal.models import UserSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Persists the current UserSession as JSON."""

    def __init__(self, session_path: Optional[Path] = None):
        """Initialize the session store.

        Args:
            session_path: Path of the session file. Uses the default
                location if not provided.
        """
        self.session_path = session_path or SESSION_PATH

    def save(self, session: UserSession) -> None:
        """Save the session to file."""
        self.session_path.parent.mkdir(parents=True, exist_ok=True)
        session_data = {
            "user": session.model_dump(),
            "timestamp": datetime.now().isoformat(),
        }
        self.session_path.write_text(json.dumps(session_data))
        logger.debug("Saved session for %s", session.username)

    def load(self) -> Optional[UserSession]:
        """Load the session from file.

        Returns:
            UserSession if a valid session exists, None otherwise.
        """
        if not self.session_path.exists():
            return None

        try:
            session_data = json.loads(self.session_path.read_text())
            return UserSession.model_validate(session_data["user"])
        except (json.JSONDecodeError, KeyError, TypeError, ValidationError) as e:
            logger.warning("Ignoring invalid session file %s: %s", self.session_path, e)
            return None

    def clear(self) -> bool:
        """Remove the stored session.

        Returns:
            True if a session file was removed.
        """
        if self.session_path.exists():
            self.session_path.unlink()
            return True
        return False

    def current_user_id(self) -> Optional[int]:
        """Numeric ID of the logged-in user, or None if unauthenticated."""
        session = self.load()
        if session is None:
            return None
        try:
            return session.user_id
        except ValueError:
            logger.warning("Session has non-numeric Discord ID: %s", session.discord_id)
            return None
