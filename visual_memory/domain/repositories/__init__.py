"""Domain repository interfaces."""

from .interfaces import (
    CredentialProvider,
    ScreenshotRepository,
    PlaceholderRenderer
)

__all__ = [
    "CredentialProvider",
    "ScreenshotRepository",
    "PlaceholderRenderer"
]
