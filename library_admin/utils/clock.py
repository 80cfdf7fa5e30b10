from datetime import date, datetime, timezone


def utcnow() -> datetime:
    # kolonlar timezone'suz; UTC'yi naive olarak sakla
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()
