"""
Storage for the Adventure Planner Bot.

Chat sessions are kept in memory and are lost on bot restart, which is
fine for a single-machine bot. Preferences outlive a restart: they are
written to a small JSON key-value file.
"""

import json
import logging
import os
from typing import Optional

from models import UserPreferences, UserSession

logger = logging.getLogger(__name__)


_sessions: dict[int, UserSession] = {}


def get_session(chat_id: int) -> UserSession:
    """
    Get or create a session for the given chat ID.

    Args:
        chat_id: Telegram chat ID

    Returns:
        UserSession for this chat
    """
    if chat_id not in _sessions:
        _sessions[chat_id] = UserSession(chat_id=chat_id)
    return _sessions[chat_id]


def save_session(session: UserSession) -> None:
    """
    Save a session back to storage.

    Args:
        session: UserSession to save
    """
    _sessions[session.chat_id] = session


class MemoryStorage:
    """Key-value storage that lives as long as the process."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """
    Key-value storage backed by a single JSON file.

    Every write rewrites the whole file through a temporary file, so a
    crash mid-write leaves the previous contents intact.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            logger.warning(f"Overwriting unreadable storage file {self.path}")
            data = {}
        data[key] = value

        tmp_path = f"{self.path}.tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp_path, self.path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


class PreferenceStore:
    """
    Remembers each chat's onboarding preferences.

    Storage problems never block the user: a failed read counts as
    "no preferences yet" and a failed write as "not remembered".
    """

    def __init__(self, storage):
        self.storage = storage

    @staticmethod
    def _key(chat_id: int) -> str:
        return f"preferences:{chat_id}"

    def load(self, chat_id: int) -> Optional[UserPreferences]:
        try:
            raw = self.storage.get(self._key(chat_id))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read preferences for {chat_id}: {e}")
            return None

        if raw is None:
            return None

        try:
            return UserPreferences.from_dict(json.loads(raw))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            logger.warning(f"Ignoring stored preferences for {chat_id}: {e}")
            return None

    def save(self, chat_id: int, preferences: UserPreferences) -> bool:
        try:
            self.storage.set(
                self._key(chat_id), json.dumps(preferences.to_dict())
            )
        except OSError as e:
            logger.warning(f"Could not save preferences for {chat_id}: {e}")
            return False

        logger.info(f"Saved preferences for chat {chat_id}")
        return True
