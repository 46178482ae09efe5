from datetime import datetime, timedelta


def add_seconds_to_date(date: datetime, seconds: float) -> datetime:
    return date + timedelta(seconds=seconds)
