# storefront/session.py
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)

MANAGER = "manager"


class Session:
    """The logged-in user, kept in a small JSON file between runs."""

    def __init__(self, path):
        self.path = Path(path)

    def current_user(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None
        try:
            user = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(user, dict) or "email" not in user:
                raise ValueError("session is not a user record")
            return user
        except (OSError, ValueError) as e:
            logger.error("Discarding unreadable session %s: %s", self.path, e)
            self.logout()
            return None

    def is_manager(self) -> bool:
        user = self.current_user()
        return bool(user) and user.get("role") == MANAGER

    def login(self, user: Dict[str, Any]) -> Dict[str, Any]:
        record = {"email": user["email"], "role": user["role"]}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(record), encoding="utf-8")
        return record

    def logout(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
