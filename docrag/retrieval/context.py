"""Assemble retrieved chunks into a bounded prompt context."""

from docrag.ingestion.chunker import is_resume_text

TRUNCATION_MARKER = "\n...\n"
DEFAULT_BUDGET = 800
# Share of the budget kept from the start of a mid-truncated résumé
PREFIX_SHARE = 0.6


def truncate_middle(text: str, budget: int) -> str:
    """Keep a prefix and a suffix of ``text`` joined by a marker."""
    if len(text) <= budget:
        return text
    room = budget - len(TRUNCATION_MARKER)
    if room <= 0:
        return text[:budget]
    head = int(room * PREFIX_SHARE)
    tail = room - head
    suffix = text[-tail:] if tail else ""
    return text[:head] + TRUNCATION_MARKER + suffix


def assemble_context(
    texts: list[str],
    budget: int = DEFAULT_BUDGET,
    resume: bool = False,
    separator: str = "\n\n",
) -> str:
    """Join chunk texts and fit them into ``budget`` characters.

    Résumé context (flagged by the caller or carrying résumé markers) is
    cut in the middle so both the header and the tail survive; anything
    else is truncated once at the budget.
    """
    joined = separator.join(t for t in texts if t)
    if len(joined) <= budget:
        return joined
    if resume or is_resume_text(joined):
        return truncate_middle(joined, budget)
    return joined[:budget]
