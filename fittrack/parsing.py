from __future__ import annotations

import datetime as dt
import re

from fittrack.errors import InvalidInput


FOOD_KEY_ALIASES = {
    "name": "name",
    "serving": "serving_size",
    "size": "serving_size",
    "serving_size": "serving_size",
    "unit": "serving_unit",
    "serving_unit": "serving_unit",
    "kcal": "calories",
    "cal": "calories",
    "calories": "calories",
    "protein": "protein_g",
    "protein_g": "protein_g",
    "carbs": "carbs_g",
    "carbs_g": "carbs_g",
    "fat": "fat_g",
    "fat_g": "fat_g",
    "fiber": "fiber_g",
    "fiber_g": "fiber_g",
    "category": "category",
    "cat": "category",
    "tags": "tags",
}

WORKOUT_KEY_ALIASES = {
    "name": "name",
    "muscle": "muscle_group",
    "muscle_group": "muscle_group",
    "type": "type",
    "sets": "sets",
    "reps": "reps",
    "weight": "weight",
    "duration": "duration",
    "distance": "distance",
}


def command_payload(text: str | None) -> str:
    """Everything after the command word ("/log@mybot lunch 3 150" -> "lunch 3 150"); "" for menu buttons."""
    t = (text or "").strip()
    if not t.startswith("/"):
        return ""
    parts = t.split(maxsplit=1)
    return parts[1].strip() if len(parts) > 1 else ""


def parse_kv(payload: str) -> dict[str, str]:
    """
    "weight=82 goal=cut" or "name=Greek yogurt; kcal=59; tags=dairy, protein".
    With ';' present values may contain spaces and commas.
    """
    s = (payload or "").strip()
    if not s:
        return {}
    parts = s.split(";") if ";" in s else s.split()
    out: dict[str, str] = {}
    for part in parts:
        part = part.strip()
        if not part:
            continue
        if "=" not in part:
            raise InvalidInput(f"expected key=value, got {part!r}")
        k, v = part.split("=", 1)
        k = k.strip().lower()
        if not k:
            raise InvalidInput(f"expected key=value, got {part!r}")
        out[k] = v.strip()
    return out


def map_keys(raw: dict[str, str], aliases: dict[str, str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for k, v in raw.items():
        field = aliases.get(k)
        if field is None:
            raise InvalidInput(f"unknown field {k!r} (known: {', '.join(sorted(set(aliases)))})")
        out[field] = v
    return out


def parse_id(s: str, what: str = "id") -> int:
    t = (s or "").strip().lstrip("#")
    if not re.fullmatch(r"\d+", t):
        raise InvalidInput(f"{what}: expected a number, got {s!r}")
    return int(t)


def parse_date_arg(arg: str, *, current: dt.date, today: dt.date) -> dt.date:
    a = (arg or "").strip().lower()
    if a in ("", "today"):
        return today
    if a in ("next", "+"):
        return current + dt.timedelta(days=1)
    if a in ("prev", "-"):
        return current - dt.timedelta(days=1)
    m = re.fullmatch(r"([+-])(\d{1,3})", a)
    if m:
        days = int(m.group(2))
        return current + dt.timedelta(days=days if m.group(1) == "+" else -days)
    try:
        return dt.date.fromisoformat(a)
    except ValueError:
        raise InvalidInput(f"date: expected YYYY-MM-DD, today, +N or -N, got {arg!r}") from None


def parse_foods_query(payload: str) -> tuple[str, str | None]:
    """ "chicken #meat" -> ("chicken", "meat") """
    words = (payload or "").split()
    category = None
    rest: list[str] = []
    for w in words:
        if w.startswith("#") and len(w) > 1:
            category = w[1:].lower()
        else:
            rest.append(w)
    return " ".join(rest), category
