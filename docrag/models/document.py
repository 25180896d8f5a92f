"""Source document data model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """A file from the document directory, read once at startup."""

    source_name: str
    text: str

    def __post_init__(self):
        if not self.source_name:
            raise ValueError("source_name must not be empty")
