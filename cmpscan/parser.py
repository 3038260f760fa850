# Line-level parsing helpers: block-open markers, identifier normalization,
# and extraction of trailing numeric values from PROC COMPARE listing lines.

import logging
import re
import string
import unicodedata
from typing import Optional

logger = logging.getLogger(__name__)

# Header printed at the top of every page of a PROC COMPARE report section
BLOCK_OPEN_MARKER = "The COMPARE Procedure"

_WHITESPACE_RUN = re.compile(r"\s+")

# Plain ASCII digits with an optional minus sign; no "+", "_" or other scripts
_INTEGER_TOKEN = re.compile(r"-?[0-9]+")

# Tabs and line breaks become spaces; other controls are dropped outright
_SPACE_LIKE = str.maketrans({"\t": " ", "\r": " ", "\n": " ", "\v": " ", "\f": " "})


def is_block_open(line: str) -> bool:
    """Return True if the line is a comparison header (block-open marker)."""
    return BLOCK_OPEN_MARKER in line


def normalize_identifier(line: str) -> str:
    """
    Normalize a dataset-pair identifier line into a comparable string.

    Control and format characters are removed, whitespace runs collapse to a
    single space, and both ends are trimmed, so that the same header rendered
    on different pages of a listing compares equal.

    Examples:
        >>> normalize_identifier("\\fComparison of WORK.A   with WORK.B\\r\\n")
        'Comparison of WORK.A with WORK.B'
    """
    text = line.translate(_SPACE_LIKE)
    text = "".join(
        ch for ch in text if unicodedata.category(ch) not in ("Cc", "Cf")
    )
    return _WHITESPACE_RUN.sub(" ", text).strip()


def extract_trailing_number(line: str) -> Optional[int]:
    """
    Return the rightmost whitespace-delimited token of line as an int.

    Trailing punctuation is stripped before parsing. Returns None when the
    line is empty or the token is not a plain decimal integer.

    Examples:
        >>> extract_trailing_number("Total Number of Values which Compare Unequal: 5")
        5
        >>> extract_trailing_number("Number of Variables Compared with Some Observations Unequal: 3.")
        3
        >>> extract_trailing_number("All Variables Compared have Unequal Values") is None
        True
    """
    tokens = line.split()
    if not tokens:
        return None
    token = tokens[-1].rstrip(string.punctuation)
    if not _INTEGER_TOKEN.fullmatch(token):
        logger.debug("Trailing token %r is not numeric", tokens[-1])
        return None
    return int(token)
