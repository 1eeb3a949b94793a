"""
Разбор свободного текста интервала отдыха ("1:30", "1m30s", "2 min", "45")
в количество секунд для таймера отдыха.

Шаблоны проверяются строго по порядку, первый совпавший побеждает:
двоеточие -> минуты+секунды -> только минуты -> секунды / голое число.
Голое число всегда означает секунды.
"""

import re
from typing import Optional

_MINUTES = r"(?:minutes|minute|mins|min|m)"
_SECONDS = r"(?:seconds|second|secs|sec|s)"

_COLON_RE = re.compile(r"^(\d+)\s*:\s*(\d{1,2})$")
_COMBINED_RE = re.compile(rf"^(\d+)\s*{_MINUTES}\s*(?:(\d+)\s*{_SECONDS}?)?$")
_MINUTES_RE = re.compile(rf"^(\d+(?:[.,]\d+)?)\s*{_MINUTES}$")
_SECONDS_RE = re.compile(rf"^(\d+)\s*{_SECONDS}?$")


def parse_rest(text: Optional[str]) -> Optional[int]:
    """Вернуть длительность в секундах или None, если формат не распознан."""
    if text is None:
        return None
    value = str(text).strip().lower()
    if not value:
        return None

    match = _COLON_RE.match(value)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))

    match = _COMBINED_RE.match(value)
    if match:
        seconds = int(match.group(2)) if match.group(2) else 0
        return int(match.group(1)) * 60 + seconds

    match = _MINUTES_RE.match(value)
    if match:
        return int(round(float(match.group(1).replace(",", ".")) * 60))

    match = _SECONDS_RE.match(value)
    if match:
        return int(match.group(1))

    return None


def format_seconds(seconds: int) -> str:
    minutes, secs = divmod(max(int(seconds), 0), 60)
    return f"{minutes:02d}:{secs:02d}"
