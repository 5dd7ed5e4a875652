"""Date parsing for receipt and item dates."""

from datetime import date, datetime, timedelta
from dateutil import parser as date_parser

RELATIVE_DAYS = {
    "today": 0,
    "yesterday": -1,
    "tomorrow": 1,
}


def parse_date(value: str, dayfirst: bool = True) -> date:
    """Parse a receipt date.

    ISO dates ("2024-04-05") are read as year-month-day. Anything else goes
    through dateutil, reading "05/04/2024" as 5 April unless dayfirst is
    False. "today", "yesterday" and "tomorrow" are relative to the current day.

    Raises:
        ValueError: If the value is empty or not a date
    """
    text = (value or "").strip().lower()
    if not text:
        raise ValueError("Empty date string")

    if text in RELATIVE_DAYS:
        return date.today() + timedelta(days=RELATIVE_DAYS[text])

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        parsed: datetime = date_parser.parse(text, dayfirst=dayfirst)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{value.strip()}': {e}") from e
    return parsed.date()
