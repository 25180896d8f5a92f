"""Keyword rules for routing questions to specialized pipelines."""

from collections.abc import Iterable

DEFAULT_SKILL_KEYWORDS = (
    "skill",
    "technolog",
    "tech stack",
    "programming",
    "language",
    "framework",
    "tool",
    "proficien",
    "expertise",
)

DEFAULT_RESUME_KEYWORDS = (
    "resume",
    "cv",
    "experience",
    "skill",
    "bio",
    "background",
    "education",
    "career",
    "worked",
    "job",
    "qualification",
)


class QueryClassifier:
    """Case-insensitive substring matching against configurable keyword sets."""

    def __init__(
        self,
        skill_keywords: Iterable[str] = DEFAULT_SKILL_KEYWORDS,
        resume_keywords: Iterable[str] = DEFAULT_RESUME_KEYWORDS,
    ):
        self.skill_keywords = tuple(k.lower() for k in skill_keywords if k)
        self.resume_keywords = tuple(k.lower() for k in resume_keywords if k)

    def is_skills_question(self, question: str) -> bool:
        """True if the question asks about skills or technologies."""
        return _contains_any(question, self.skill_keywords)

    def is_resume_question(self, question: str) -> bool:
        """True if the question is about the résumé owner (lenient gating)."""
        return _contains_any(question, self.resume_keywords)


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)
