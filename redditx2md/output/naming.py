from __future__ import annotations

from datetime import datetime


def generate_file_name(subreddit: str, now: datetime | None = None) -> str:
    """Build a timestamped report name: ``{subreddit}_YYYY-MM-DD_HHmmss.md``.

    Uses local wall-clock time. Two calls within the same second return the
    same name.
    """
    moment = now or datetime.now()
    return f"{subreddit}_{moment.strftime('%Y-%m-%d_%H%M%S')}.md"
