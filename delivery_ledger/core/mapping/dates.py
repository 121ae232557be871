"""
Date reconciliation for submission timestamps and delivery dates.

Values arrive either as real date/time objects (the host already parsed
the cell) or as free text typed into a form. Both are normalized into
an aware datetime in the ledger's time zone before formatting.
"""

import re
from datetime import date, datetime, time
from typing import Any
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser

from delivery_ledger.observability.logger import get_logger

logger = get_logger(__name__)

YEAR_FIRST = re.compile(r"^\d{4}[/.\-]")
FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def parse_text(text: str) -> datetime | None:
    """
    Parse free text into a datetime.

    ISO-8601 is tried first so "2025-06-09" is never read day-first.
    Text starting with a four-digit year ("2025/06/09") is read
    year-month-day; everything else is parsed day-first, matching the
    ledger's own DD/MM/YYYY output so formatted values read back
    unchanged. Text must name day, month and year: "12", "June" or
    "5 pm" are not dates.

    Returns:
        Parsed datetime, or None when the text is not a full date
    """
    text = text.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass

    year_first = YEAR_FIRST.match(text) is not None
    try:
        candidates = [
            date_parser.parse(text, default=default, dayfirst=not year_first, yearfirst=year_first)
            for default in FILL_DEFAULTS
        ]
    except (ValueError, OverflowError) as e:
        logger.debug(f'Could not parse "{text}" as a date: {e}')
        return None

    # Parts missing from the text come from the default, so differing
    # results mean day, month or year was never given
    if candidates[0] != candidates[1]:
        logger.debug(f'"{text}" does not name a full date')
        return None
    return candidates[0]


def coerce_datetime(value: Any) -> datetime | None:
    """
    Turn a cell value into a datetime if it holds one.

    datetime values pass through, plain dates become midnight, non-empty
    text is parsed. Anything else (None, numbers, blanks) is absent.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        return parse_text(value)
    return None


def to_zone(value: datetime, tz: ZoneInfo) -> datetime:
    """Naive values are wall-clock time in tz; aware values are converted."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def format_timestamp(value: Any, tz: ZoneInfo, fmt: str = "%Y-%m-%d %H:%M:%S") -> str:
    """
    Format a submission timestamp, or "" when it is missing or unparseable.
    """
    parsed = coerce_datetime(value)
    if parsed is None:
        if _is_present(value):
            logger.warning(
                "Timestamp could not be parsed; leaving it blank",
                extra={"field": "timestamp", "value": str(value)},
            )
        return ""
    return to_zone(parsed, tz).strftime(fmt)


def reconcile_delivery_date(raw_date: Any, raw_timestamp: Any, tz: ZoneInfo) -> datetime | None:
    """
    Pick the delivery date for a submission.

    The form's own date wins; when it is empty or unparseable the
    submission timestamp's day is used instead.

    Returns:
        The chosen value in tz, or None if neither field holds a date
    """
    chosen = coerce_datetime(raw_date)
    if chosen is not None:
        logger.debug("Using date from form", extra={"value": str(raw_date)})
        return to_zone(chosen, tz)

    if _is_present(raw_date):
        logger.warning(
            "Form date could not be parsed; falling back to the timestamp",
            extra={"field": "delivery_date", "value": str(raw_date)},
        )

    fallback = coerce_datetime(raw_timestamp)
    if fallback is not None:
        logger.debug("Form date missing/invalid, using timestamp date", extra={"value": str(raw_timestamp)})
        return to_zone(fallback, tz)

    logger.info("No valid date found for the record")
    return None


def format_delivery_date(raw_date: Any, raw_timestamp: Any, tz: ZoneInfo, fmt: str = "%d/%m/%Y") -> str:
    chosen = reconcile_delivery_date(raw_date, raw_timestamp, tz)
    if chosen is None:
        return ""
    return chosen.strftime(fmt)


def calendar_day(value: Any, tz: ZoneInfo) -> date | None:
    """
    Calendar day of a cell value, ignoring time of day.

    Aware datetimes are first converted to tz so that the day is the
    one shown on the sheet.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    parsed = coerce_datetime(value)
    if parsed is None:
        return None
    return to_zone(parsed, tz).date()


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True
