from datetime import date, datetime, time, timedelta


def add_minutes(moment: datetime, minutes: int) -> datetime:
    """Shift a timestamp by a (possibly negative) number of minutes."""
    return moment + timedelta(minutes=minutes)


def naive(moment: datetime) -> datetime:
    """Wall-clock reading of a timestamp with any UTC offset dropped.

    Itineraries are scheduled in naive local time; an offset sent by a client
    is discarded rather than converted.
    """
    return moment.replace(tzinfo=None)


def combine(day: date, at: time) -> datetime:
    """Local datetime for a requested date and time of day."""
    return datetime.combine(day, at)


def minutes_between(start: datetime, end: datetime) -> int:
    return round((end - start).total_seconds() / 60)


def format_duration(minutes: int) -> str:
    """Format minutes as '1h 30m', '2h' or '45m'."""
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def format_time(moment: datetime) -> str:
    """24-hour clock display, e.g. '09:15'."""
    return moment.strftime("%H:%M")
