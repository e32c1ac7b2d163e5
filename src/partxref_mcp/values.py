"""Unit-aware value parsers for catalog attribute strings.

Every parser is total: it returns ``None`` (or a neutral value) for text it
cannot read instead of raising. Numeric results are in SI base units unless the
unit family is explicitly exempt from prefix scaling:
- Capacitance: farads ("100pF" -> 1e-10)
- Resistance: ohms ("10kΩ" -> 10000)
- Inductance: henries ("4.7µH" -> 4.7e-6)
- Lengths stay in the unit they were written in ("0.90mm" -> 0.90)
- Temperatures, percentages and ppm are never scaled
"""

import re


# =============================================================================
# PRE-COMPILED REGEX PATTERNS
# =============================================================================

# Anchored at the start so "0.197\" Dia (5.00mm)" reads the leading figure only.
_MAGNITUDE_PATTERN = re.compile(
    r"^\s*[±~<>≤≥=]*\s*([-+]?(?:\d+\.?\d*|\.\d+))\s*([a-zA-ZµμΩ°%\"']*)"
)
_LEADING_NUMBER_PATTERN = re.compile(r"([-+]?\d*\.?\d+)")
_TOLERANCE_PATTERN = re.compile(r"±?\s*(\d+\.?\d*)\s*%")
_MSL_PATTERN = re.compile(r"(\d+)")
_RANGE_SPLIT_PATTERN = re.compile(r"\s+to\s+|\s*~\s*", re.IGNORECASE)
_WHITESPACE_PATTERN = re.compile(r"\s+")


# =============================================================================
# SI PREFIXES
# =============================================================================

SI_PREFIXES: dict[str, float] = {
    "p": 1e-12,
    "n": 1e-9,
    "µ": 1e-6,  # micro sign U+00B5
    "μ": 1e-6,  # greek mu U+03BC
    "u": 1e-6,
    "m": 1e-3,
    "k": 1e3,
    "K": 1e3,
    "M": 1e6,
    "G": 1e9,
}

# Unit spellings whose first letter looks like a prefix but is not one.
UNSCALED_UNIT_PREFIXES: tuple[str, ...] = (
    "mm", "mil", "in", '"', "'", "°", "%", "ppm", "MSL", "dB", "no",
)

_TRUTHY_FLAGS = frozenset({"yes", "true", "1", "required"})


# =============================================================================
# NUMERIC PARSERS
# =============================================================================


def si_multiplier(unit: str | None) -> float:
    """Return the SI prefix multiplier implied by a unit suffix.

    '' -> 1, 'pF' -> 1e-12, 'kΩ' -> 1e3, 'mm' -> 1 (length, not milli).
    """
    if not unit:
        return 1.0
    if unit.startswith(UNSCALED_UNIT_PREFIXES):
        return 1.0
    return SI_PREFIXES.get(unit[0], 1.0)


def extract_numeric_value(text: str | None) -> tuple[float | None, str | None]:
    """Parse '<number><unit>' into (SI value, raw unit).

    '100pF' -> (1e-10, 'pF'), '4.7µF' -> (4.7e-6, 'µF'), '10kΩ' -> (1e4, 'kΩ'),
    '0.90mm' -> (0.9, 'mm'), 'X7R' -> (None, None).
    """
    if not text:
        return None, None
    match = _MAGNITUDE_PATTERN.match(text)
    if not match:
        return None, None
    unit = match.group(2) or None
    return float(match.group(1)) * si_multiplier(unit), unit


def leading_number(text: str | None) -> float | None:
    """First number anywhere in the text, unscaled: 'MSL 3' -> 3, '≥ 150°C' -> 150."""
    if not text:
        return None
    match = _LEADING_NUMBER_PATTERN.search(text)
    return float(match.group(1)) if match else None


def parse_tolerance(s: str | None) -> float | None:
    """Parse tolerance: '±10%' -> 10, '1%' -> 1. Requires a percent sign."""
    if not s:
        return None
    match = _TOLERANCE_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_msl(s: str | None) -> int | None:
    """Parse moisture sensitivity level: 'MSL 3' -> 3, '1 (Unlimited)' -> 1."""
    if not s:
        return None
    match = _MSL_PATTERN.search(s)
    return int(match.group(1)) if match else None


def parse_range(s: str | None) -> tuple[float, float] | None:
    """Parse an interval: '-55°C ~ 125°C' -> (-55, 125), '-0.5V to -6V' -> (-6, -0.5).

    A bare value is a degenerate interval ('25V' -> (25, 25)). When only the
    upper bound carries a unit ('2 ~ 6.5mA'), the lower bound inherits it.
    Bounds are returned low-first. None if either side is unreadable.
    """
    if not s or not s.strip():
        return None
    parts = [p for p in _RANGE_SPLIT_PATTERN.split(s.strip()) if p.strip()]
    if not parts or len(parts) > 2:
        return None

    if len(parts) == 1:
        value, _ = extract_numeric_value(parts[0])
        return (value, value) if value is not None else None

    low, low_unit = extract_numeric_value(parts[0])
    high, high_unit = extract_numeric_value(parts[1])
    if low is None or high is None:
        return None
    if low_unit is None and high_unit:
        low *= si_multiplier(high_unit)
    return (min(low, high), max(low, high))


# =============================================================================
# TEXT HELPERS
# =============================================================================


def parse_flag(s: str | None) -> bool:
    """'Yes'/'true'/'1'/'Required' are truthy; anything else (or missing) is not."""
    if not s:
        return False
    return s.strip().lower() in _TRUTHY_FLAGS


def normalize(s: str) -> str:
    """Normalize for comparison: trim, uppercase, collapse inner whitespace."""
    return _WHITESPACE_PATTERN.sub(" ", s.strip().upper())
