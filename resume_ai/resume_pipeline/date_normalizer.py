"""Normalize experience dates to YYYY-MM or "present" (English and Russian)."""

import re
from typing import Literal, NamedTuple, Optional

from resume_ai.locales.registry import combined_month_table, combined_present_literals

NormalizationStatus = Literal["canonical", "present", "normalized", "unchanged"]

CANONICAL_DATE_RE = re.compile(r"^\d{4}-\d{2}$")
PRESENT = "present"

# "March 2022", "мар. 2022", "March, 2022"
_MONTH_YEAR_RE = re.compile(r"^([^\W\d_]+)\.?,?\s+(\d{4})$")
# "2022 March", "2020 март"
_YEAR_MONTH_RE = re.compile(r"^(\d{4}),?\s+([^\W\d_]+)\.?$")


class DateNormalization(NamedTuple):
    """Normalized value plus how it was obtained; ``unchanged`` means no rule applied."""

    value: str
    status: NormalizationStatus

    @property
    def changed(self) -> bool:
        return self.status in ("present", "normalized")


def _month_number(token: str) -> Optional[int]:
    return combined_month_table().get(token.lower())


def normalize_date_tagged(raw: str) -> DateNormalization:
    """
    Apply the normalization rules in order:
    already YYYY-MM -> as is; "ongoing" literal -> "present";
    "<month> <year>" or "<year> <month>" -> YYYY-MM; anything else -> unchanged.
    """
    if raw is None:
        return DateNormalization("", "unchanged")
    if CANONICAL_DATE_RE.match(raw):
        return DateNormalization(raw, "canonical")

    text = " ".join(raw.strip().split())
    lowered = text.lower()
    if lowered in combined_present_literals():
        return DateNormalization(PRESENT, "present")

    m = _MONTH_YEAR_RE.match(text)
    if m:
        month = _month_number(m.group(1))
        if month:
            return DateNormalization(f"{int(m.group(2)):04d}-{month:02d}", "normalized")

    m = _YEAR_MONTH_RE.match(text)
    if m:
        month = _month_number(m.group(2))
        if month:
            return DateNormalization(f"{int(m.group(1)):04d}-{month:02d}", "normalized")

    return DateNormalization(raw, "unchanged")


def normalize_date(raw: str) -> str:
    """Return the canonical form of a date expression, or the input when no rule applies."""
    return normalize_date_tagged(raw).value


def is_present(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() == PRESENT
