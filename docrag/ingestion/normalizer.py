"""Text normalization for raw document content.

Plain-text exports and PDF extractions carry encoding artifacts, decorative
bullets and page furniture (page numbers, print dates). These are removed
before chunking so that chunk word counts and embeddings reflect content.
"""

import re

ZERO_WIDTH = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")

# Typographic characters with an ASCII equivalent
TRANSLITERATIONS = {
    "‘": "'", "’": "'", "‚": "'", "‛": "'",
    "“": '"', "”": '"', "„": '"',
    "–": "-", "—": "-", "−": "-",
    "…": "...",
    "\u00a0": " ", "\u2002": " ", "\u2003": " ", "\u2009": " ",
}

BULLET_PATTERN = re.compile(r"^[ \t]*(?:[•◦▪●■►‣⁃]|\*(?=[ \t]))[ \t]*", re.MULTILINE)

# Page furniture, each matched against a whole line
NOISE_PATTERNS = [
    re.compile(r"^[ \t]*page[ \t]+\d+([ \t]+of[ \t]+\d+)?[ \t]*$", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^[ \t]*-[ \t]*\d+[ \t]*-[ \t]*$", re.MULTILINE),
    re.compile(r"^[ \t]*\d{1,3}[ \t]*$", re.MULTILINE),
    re.compile(r"^[ \t]*\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4}[ \t]*$", re.MULTILINE),
    re.compile(r"^[ \t]*\d{4}-\d{2}-\d{2}[ \t]*$", re.MULTILINE),
    re.compile(
        r"^[ \t]*(jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec)[a-z]*\.?"
        r"([ \t]+\d{1,2},?)?[ \t]+\d{4}[ \t]*$",
        re.IGNORECASE | re.MULTILINE,
    ),
]

# Heading numbers: "1.2 Scope", "3.1.4. Results". Only short capitalized
# lines without a final period; "3.5 years of Go" and "1. item" are kept.
SECTION_NUMBER = re.compile(
    r"^[ \t]*\d+(\.\d+)+\.?[ \t]+(?=[A-Z][^.\n]{0,60}$)",
    re.MULTILINE,
)


def normalize_text(text: str) -> str:
    """Clean raw document text for chunking.

    Returns an empty string when nothing but noise remains; callers skip
    such documents.
    """
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = ZERO_WIDTH.sub("", text)
    for src, dst in TRANSLITERATIONS.items():
        text = text.replace(src, dst)

    text = BULLET_PATTERN.sub("- ", text)
    text = text.encode("ascii", errors="ignore").decode("ascii")

    for pattern in NOISE_PATTERNS:
        text = pattern.sub("", text)
    text = SECTION_NUMBER.sub("", text)

    return _collapse_whitespace(text)


def _collapse_whitespace(text: str) -> str:
    text = re.sub(r"[ \t\f\v]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
