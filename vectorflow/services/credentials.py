"""Durable key-value storage for store credentials."""

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

from vectorflow.core.config import settings

logger = logging.getLogger(__name__)

URL_KEY = "sb_url"
API_KEY_KEY = "sb_key"


class CredentialStore:
    """Persists the store endpoint and key in a JSON file under fixed keys."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = Path(path or settings.credentials_path)

    def load(self) -> Tuple[str, str]:
        """
        Read saved credentials.

        Returns:
            Tuple of (url, key); missing values are empty strings.
        """
        if not self.path.exists():
            return "", ""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable credentials file {self.path}: {str(e)}")
            return "", ""
        return data.get(URL_KEY, ""), data.get(API_KEY_KEY, "")

    def save(self, url: str, key: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({URL_KEY: url, API_KEY_KEY: key}), encoding="utf-8")
