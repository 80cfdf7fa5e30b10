from datetime import date

from library_admin.errors import ValidationError

# SQL INTEGER (64 bit) sınırı
MAX_DB_INT = 2 ** 63 - 1


def required_str(data: dict, key: str, label: str = None) -> str:
    value = str(data.get(key) or "").strip()
    if not value:
        raise ValidationError(f"{label or key} is required")
    return value


def optional_str(data: dict, key: str):
    value = str(data.get(key) or "").strip()
    return value or None


def parse_int(data: dict, key: str, label: str = None, default=None, min_value=None, max_value=None) -> int:
    raw = data.get(key)
    if raw is None or str(raw).strip() == "":
        if default is None:
            raise ValidationError(f"{label or key} is required")
        raw = default
    try:
        value = int(str(raw).strip())
    except ValueError:
        raise ValidationError(f"{label or key} must be a whole number")

    if abs(value) > MAX_DB_INT:
        raise ValidationError(f"{label or key} is out of range")

    if min_value is not None and value < min_value:
        raise ValidationError(f"{label or key} must be at least {min_value}")
    if max_value is not None and value > max_value:
        raise ValidationError(f"{label or key} must be at most {max_value}")
    return value


def parse_date(data: dict, key: str, label: str = None) -> date:
    raw = data.get(key)
    if isinstance(raw, date):
        return raw
    raw = str(raw or "").strip()
    if not raw:
        raise ValidationError(f"{label or key} is required")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationError(f"{label or key} must be a date (YYYY-MM-DD)")
