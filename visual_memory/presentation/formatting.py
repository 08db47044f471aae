"""Display helpers for screenshots and search results."""

from datetime import datetime, timezone
from typing import Optional


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def format_upload_time(upload_time: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Relative age for recent uploads, the date for older ones."""
    if upload_time is None:
        return "Unknown"
    if upload_time.tzinfo is None:
        upload_time = upload_time.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    minutes = int((now - upload_time).total_seconds() // 60)
    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return _plural(minutes, "minute")

    hours = minutes // 60
    if hours < 24:
        return _plural(hours, "hour")

    days = hours // 24
    if days < 7:
        return _plural(days, "day")

    return upload_time.strftime("%Y-%m-%d")


def confidence_level(score: float) -> str:
    if score >= 0.8:
        return "high"
    if score >= 0.6:
        return "medium"
    if score >= 0.4:
        return "low"
    return "weak"


def format_confidence(score: float) -> str:
    return f"{round(score * 100)}% match"


def truncate(text: Optional[str], limit: int) -> str:
    """Cut text at limit characters, marking the cut with an ellipsis."""
    if not text:
        return ""
    if len(text) > limit:
        return f"{text[:limit]}..."
    return text


def format_file_size(size: int) -> str:
    return f"{size / 1024 / 1024:.1f} MB"
