"""Text normalization for job titles, companies, descriptions and locations.

Two families of helpers live here:

- Display cleaning (strip_html, clean_text, clean_company_name,
  normalize_location) keeps text readable: markup goes, entities are decoded,
  whitespace is tidied.
- Matching normalization (normalize_company_name, normalize_title) is
  destructive and only used to build dedup keys.
"""

import re
from typing import Optional

# Named entities decoded by decode_entities. Anything not listed is left as-is.
HTML_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
    "nbsp": " ",
    "ndash": "-",
    "mdash": "-",
    "lsquo": "'",
    "rsquo": "'",
    "ldquo": '"',
    "rdquo": '"',
    "bull": "*",
    "hellip": "...",
    "copy": "(c)",
    "reg": "(R)",
    "trade": "(TM)",
    "euro": "EUR",
    "pound": "GBP",
    "yen": "JPY",
    "cent": "c",
    "deg": " degrees",
    "plusmn": "+/-",
    "times": "x",
    "divide": "/",
    "frac12": "1/2",
    "frac14": "1/4",
    "frac34": "3/4",
}

# Legal-entity and filler suffixes peeled off company names for matching
COMPANY_SUFFIXES = (
    # US
    "inc", "incorporated", "llc", "llp", "lp", "corp", "corporation", "co",
    "company", "limited", "ltd", "pllc", "pc",
    # UK
    "plc",
    # Germany
    "gmbh", "ag", "kg", "ohg", "ug",
    # Netherlands
    "bv", "nv",
    # France
    "sa", "sarl", "sas",
    # International
    "intl", "international", "group", "holdings", "technologies", "technology",
    "tech", "labs", "studio", "studios", "software", "solutions", "systems",
    "services", "consulting",
)

US_STATE_ABBREVIATIONS = {
    "california": "CA",
    "new york": "NY",
    "texas": "TX",
    "florida": "FL",
    "washington": "WA",
    "colorado": "CO",
    "massachusetts": "MA",
    "illinois": "IL",
    "georgia": "GA",
    "north carolina": "NC",
    "pennsylvania": "PA",
    "oregon": "OR",
    "arizona": "AZ",
    "virginia": "VA",
    "ohio": "OH",
    "michigan": "MI",
    "utah": "UT",
    "minnesota": "MN",
}

_ENTITY_RE = re.compile(r"&(#[0-9]+|#[xX][0-9a-fA-F]+|[a-zA-Z][a-zA-Z0-9]*);")
_BLOCK_CLOSE_RE = re.compile(r"</(?:p|div|h[1-6]|li|tr|br)\s*>", re.IGNORECASE)
_BLOCK_OPEN_RE = re.compile(r"<(?:p|div|h[1-6]|li|tr)(?:\s[^>]*)?>", re.IGNORECASE)
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_HR_RE = re.compile(r"<hr\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_SUFFIX_RE = re.compile(
    r"\b(?:" + "|".join(COMPANY_SUFFIXES) + r")\.?$", re.IGNORECASE
)
_STATE_RES = tuple(
    (re.compile(rf"\b{name}\b", re.IGNORECASE), abbrev)
    for name, abbrev in US_STATE_ABBREVIATIONS.items()
)


def _decode_entity(match: "re.Match[str]") -> str:
    body = match.group(1)
    if body.startswith("#"):
        try:
            code = int(body[2:], 16) if body[1] in "xX" else int(body[1:])
        except ValueError:
            return match.group(0)
        # Out-of-range references decode to nothing
        return chr(code) if 0 < code < 65536 else ""
    return HTML_ENTITIES.get(body.lower(), match.group(0))


def decode_entities(text: Optional[str]) -> str:
    """Decode named, decimal and hex HTML entity references.

    Decoding is repeated until the text stops changing, so doubly-escaped
    input such as ``&amp;lt;`` fully resolves and the function is idempotent.

    Args:
        text: Text that may contain entity references

    Returns:
        Decoded text (empty string for None/empty input)

    Example:
        >>> decode_entities("R&amp;D &#8211; Caf&#xE9;")
        'R&D – Café'
    """
    if not text:
        return ""

    previous = None
    result = text
    while result != previous:
        previous = result
        result = _ENTITY_RE.sub(_decode_entity, result)
    return result


def strip_html(text: Optional[str]) -> str:
    """Strip markup from a description while keeping paragraph structure.

    Steps:
    1. Block-level tags (p, div, headings, li, tr, br) become line breaks
    2. Remaining tags are removed
    3. Entities are decoded; unknown entities become a space
    4. Whitespace is collapsed inside lines, lines are trimmed, and runs of
       blank lines collapse to a single blank line

    Args:
        text: HTML or plain text

    Returns:
        Plain text with newlines between blocks
    """
    if not text:
        return ""

    result = _BLOCK_CLOSE_RE.sub("\n", text)
    result = _BLOCK_OPEN_RE.sub("\n", result)
    result = _BR_RE.sub("\n", result)
    result = _HR_RE.sub("\n---\n", result)
    result = _TAG_RE.sub("", result)

    result = decode_entities(result)
    result = _ENTITY_RE.sub(" ", result)

    result = re.sub(r"[^\S\n]+", " ", result)
    result = "\n".join(line.strip() for line in result.split("\n"))
    result = re.sub(r"\n{3,}", "\n\n", result)

    return result.strip()


def clean_text(text: Optional[str]) -> str:
    """Clean text for single-line display (titles, short labels).

    Args:
        text: Text that may contain markup or entities

    Returns:
        Plain text on one line with single spaces
    """
    if not text:
        return ""

    return re.sub(r"\s+", " ", strip_html(decode_entities(text))).strip()


def clean_company_name(name: Optional[str]) -> str:
    """Light cleanup of a company name for display.

    Only decodes entities and normalizes whitespace; suffixes and punctuation
    are kept so the name stays readable.
    """
    if not name:
        return ""

    return re.sub(r"\s+", " ", decode_entities(name)).strip()


def normalize_company_name(name: Optional[str]) -> str:
    """Aggressively normalize a company name for duplicate matching.

    Lowercases, peels legal-entity suffixes repeatedly (so "Acme Inc. LLC"
    and "Acme" compare equal), then drops every non-alphanumeric character.
    A suffix is never removed when it is the whole remaining name, so
    "Tech Group" normalizes to "tech" rather than to an empty key.

    Args:
        name: Company name as supplied by the source

    Returns:
        Compact lowercase key, or empty string for missing names

    Example:
        >>> normalize_company_name("Acme Holdings, Inc.")
        'acme'
    """
    if not name:
        return ""

    normalized = decode_entities(name).lower().strip()

    while True:
        trimmed = normalized.rstrip(" \t,.;&-")
        stripped = _SUFFIX_RE.sub("", trimmed).rstrip(" \t,.;&-")
        if stripped == trimmed or not re.search(r"[a-z0-9]", stripped):
            normalized = trimmed
            break
        normalized = stripped

    return re.sub(r"[^a-z0-9]", "", normalized)


def normalize_title(title: Optional[str]) -> str:
    """Normalize a job title for duplicate matching.

    Example:
        >>> normalize_title("Sr. Backend Engineer (Go/Rust)")
        'sr backend engineer go rust'
    """
    if not title:
        return ""

    normalized = re.sub(r"[^a-z0-9]", " ", title.lower())
    return re.sub(r"\s+", " ", normalized).strip()


def normalize_location(location: Optional[str]) -> Optional[str]:
    """Normalize a location string for consistent display.

    Decodes entities, collapses whitespace and abbreviates common US state
    names ("Austin, Texas" -> "Austin, TX").

    Args:
        location: Location string from the source

    Returns:
        Normalized location, or None when nothing is left
    """
    if not location:
        return None

    normalized = re.sub(r"\s+", " ", decode_entities(location)).strip()

    for pattern, abbrev in _STATE_RES:
        normalized = pattern.sub(abbrev, normalized)

    return normalized or None
