"""Initial content for a newly created day entry."""

from __future__ import annotations

from datetime import date

from .models import Mood

UNKNOWN_MOOD_INDEX = "?"
NO_MOOD_MARKER = "❔"

# strftime("%A") follows the process locale; entries always use English names
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def render_entry_header(date_string: str, day: date, mood: Mood | str | None = None) -> str:
    """Build the header line of a new entry followed by an empty body.

    Format: ``📅 {date}  🗓️ {weekday}  {mood} {index}`` then a blank line.
    A mood marker outside the scale is kept verbatim with index ``?``;
    without a mood the marker is ``❔ ?``.
    """
    if isinstance(mood, Mood):
        marker, index = mood.value, str(mood.index)
    elif mood:
        marker = mood
        try:
            index = str(Mood(mood).index)
        except ValueError:
            index = UNKNOWN_MOOD_INDEX
    else:
        marker, index = NO_MOOD_MARKER, UNKNOWN_MOOD_INDEX

    return f"📅 {date_string}  🗓️ {_WEEKDAYS[day.weekday()]}  {marker} {index}\n\n"
