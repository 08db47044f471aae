"""Credential providers for the bearer token."""

import logging
from pathlib import Path
from typing import Optional, Union

from ...domain.repositories import CredentialProvider
from ..config import Settings

logger = logging.getLogger(__name__)


class StaticTokenProvider(CredentialProvider):
    """Hands out a token fixed at construction time."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def set_token(self, token: Optional[str]) -> None:
        """Replace the token, e.g. after signing in or out."""
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token or None


class FileTokenProvider(CredentialProvider):
    """Reads the token from a file written by the login flow.

    The file is re-read on every call so a new login is picked up without
    restarting the client.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def get_token(self) -> Optional[str]:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            logger.debug(f"Token file {self.path} does not exist")
            return None
        except OSError as e:
            logger.warning(f"Could not read token file {self.path}: {e}")
            return None
        return token or None


def create_credential_provider(settings: Settings) -> CredentialProvider:
    """Pick a provider from settings, preferring an explicit token."""
    if settings.token:
        return StaticTokenProvider(settings.token)
    if settings.token_file:
        return FileTokenProvider(settings.token_file)
    logger.warning("No VISUAL_MEMORY_TOKEN or VISUAL_MEMORY_TOKEN_FILE configured")
    return StaticTokenProvider(None)
