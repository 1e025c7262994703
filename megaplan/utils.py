"""Stateless helpers: naming conventions, value coercion, IDs, URIs, signing."""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import re
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Any
from urllib.parse import quote, urlencode

from _constants import ID_OFFSET
from megaplan.dicts import URI_SHORTCUTS
from megaplan.errors import UsageError

__all__ = [
    "DATE_FIELDS",
    "convert_keys",
    "convert_keys_to_pascal_case",
    "convert_keys_to_underscore",
    "convert_values_to_natives",
    "encode_form",
    "make_signature",
    "md5",
    "normalize_id",
    "object_filter",
    "subst_uri",
    "to_pascal_case",
    "to_underscore",
]

logger = logging.getLogger("megaplan_mcp.client")

_PASCAL_RE = re.compile(r"_[a-z]", re.IGNORECASE)
_UPPER_RE = re.compile(r"[A-Z]")
_PROJECT_ID_RE = re.compile(r"^p\d+")
# Double-colon shortcuts must be resolved before single-colon ones.
_SHORTCUT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^::[a-z]+"),
    re.compile(r"^:[a-z]+"),
)


# ---------------------------------------------------------------------------
# Case conversion
# ---------------------------------------------------------------------------


def to_pascal_case(s: Any) -> str:
    """Convert ``"abc_def"`` to ``"AbcDef"``."""
    s = str(s)
    return s[:1].upper() + _PASCAL_RE.sub(lambda m: m.group(0)[1].upper(), s[1:])


def to_underscore(s: Any) -> str:
    """Convert ``"AbcDef"`` to ``"abc_def"``."""
    converted = _UPPER_RE.sub(lambda m: "_" + m.group(0).lower(), str(s))
    return converted[1:] if converted.startswith("_") else converted


def convert_keys(value: Any, converter: Callable[[str], str]) -> Any:
    """Rebuild nested mappings with *converter* applied to every key.

    Lists keep their positions; only the mappings inside them are
    re-keyed.  Every other value is returned as is.
    """
    if isinstance(value, Mapping):
        return {converter(key): convert_keys(item, converter) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [convert_keys(item, converter) for item in value]
    return value


def convert_keys_to_pascal_case(value: Any) -> Any:
    return convert_keys(value, to_pascal_case)


def convert_keys_to_underscore(value: Any) -> Any:
    return convert_keys(value, to_underscore)


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------


def _create_date(value: str) -> datetime | str | None:
    if value == "":
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        logger.debug("Unparseable date value %r left as string", value)
        return value


# Snake-case field names whose string values are timestamps.
DATE_FIELDS: Mapping[str, Callable[[str], Any]] = {
    "time_created": _create_date,
    "time_updated": _create_date,
    "fire_day": _create_date,
    "start_time": _create_date,
    "activity": _create_date,
    "appearance_day": _create_date,
    "birthday": _create_date,
}


def convert_values_to_natives(value: Any) -> Any:
    """Parse timestamp fields of an underscore-keyed response into datetimes.

    Must run after :func:`convert_keys_to_underscore`.
    """
    if isinstance(value, Mapping):
        out: dict[str, Any] = {}
        for key, item in value.items():
            if isinstance(item, str):
                conv = DATE_FIELDS.get(key)
                out[key] = conv(item) if conv is not None else item
            else:
                out[key] = convert_values_to_natives(item)
        return out
    if isinstance(value, list):
        return [convert_values_to_natives(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# Mapping helpers
# ---------------------------------------------------------------------------


def object_filter(
    mapping: Mapping[str, Any] | None,
    predicate: Callable[[Any, str], bool] | None = None,
) -> dict[str, Any]:
    """Return a copy of *mapping* without the entries matching *predicate*.

    The default predicate drops ``None`` values.
    """
    if not mapping:
        return {}
    if predicate is None:
        return {key: value for key, value in mapping.items() if value is not None}
    return {key: value for key, value in mapping.items() if not predicate(value, key)}


def normalize_id(value: Any) -> Any:
    """Move an ID into the addressable range (``< 1000000`` gets ``+1000000``).

    A ``p`` prefix marks a project ID and is kept on the result, which is
    then a string; otherwise the result is an int.  ``None`` passes through.
    """
    if value is None:
        return None
    raw = str(value).strip()
    is_project = bool(_PROJECT_ID_RE.match(raw))
    if is_project:
        raw = raw[1:]
    try:
        number = int(raw)
    except ValueError as exc:
        raise UsageError(f"Invalid Megaplan id: {value!r}") from exc
    if number < ID_OFFSET:
        number += ID_OFFSET
    return f"p{number}" if is_project else number


# ---------------------------------------------------------------------------
# URIs and signing
# ---------------------------------------------------------------------------


def subst_uri(uri: str) -> str:
    """Expand ``::name`` and ``:namespace`` shortcuts at the start of *uri*.

    Raises:
        UsageError: If a leading shortcut is not in the table.
    """
    result = str(uri)
    for pattern in _SHORTCUT_PATTERNS:
        match = pattern.match(result)
        if match is None:
            continue
        token = match.group(0)
        expansion = URI_SHORTCUTS.get(token)
        if expansion is None:
            raise UsageError(f"Unknown URI shortcut {token!r} in {uri!r}")
        result = expansion + result[match.end():]
    return result


def make_signature(key: str, text: str) -> str:
    """Base64 of the hex HMAC-SHA1 digest of *text* keyed by *key*."""
    digest = hmac.new(key.encode("utf-8"), text.encode("utf-8"), hashlib.sha1).hexdigest()
    return base64.b64encode(digest.encode("ascii")).decode("ascii")


def md5(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Form encoding
# ---------------------------------------------------------------------------


def _form_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _form_pairs(value: Any, prefix: str) -> list[tuple[str, str]]:
    if isinstance(value, Mapping):
        items: Any = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    else:
        return [(prefix, _form_scalar(value))]
    pairs: list[tuple[str, str]] = []
    for key, item in items:
        pairs.extend(_form_pairs(item, f"{prefix}[{key}]" if prefix else str(key)))
    return pairs


def encode_form(data: Mapping[str, Any] | None) -> str:
    """Encode *data* as ``application/x-www-form-urlencoded``.

    Nested mappings and lists use bracket notation, e.g.
    ``Model[Name]=x&Auditors[0]=1000001``.
    """
    if not data:
        return ""
    return urlencode(_form_pairs(data, ""), quote_via=quote)
