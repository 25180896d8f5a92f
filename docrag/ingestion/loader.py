"""Load documents from the local data directory.

Files are enumerated once at startup. Plain-text files are read as UTF-8;
PDF files are parsed with PyPDF2. Nothing watches the directory afterwards.
"""

import logging
from pathlib import Path

from docrag.models.document import Document

logger = logging.getLogger(__name__)

PDF_SUFFIX = ".pdf"
TEXT_SUFFIXES = {".txt", ".md", ".text", ".csv", ".log", ".rst", ""}

SAMPLE_FILENAME = "sample.txt"
SAMPLE_CONTENT = """This is a sample document for the RAG bot.
It contains information about how the bot works and what it can do.
The bot uses semantic search to find relevant information and generate responses.
You can add more documents to the data folder to expand its knowledge base.
"""


def read_pdf_text(path: Path) -> str:
    """Extract text from all pages of a PDF, one page per line block."""
    from PyPDF2 import PdfReader

    reader = PdfReader(str(path))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(pages)


def read_document(path: Path) -> Document | None:
    """Read a single file into a Document.

    Returns None for unsupported or unreadable files.
    """
    suffix = path.suffix.lower()
    try:
        if suffix == PDF_SUFFIX:
            text = read_pdf_text(path)
        elif suffix in TEXT_SUFFIXES:
            text = path.read_text(encoding="utf-8", errors="replace")
        else:
            logger.info("Skipping unsupported file: %s", path.name)
            return None
    except Exception as e:
        logger.warning("Failed to read %s: %s", path, e)
        return None

    return Document(source_name=path.name, text=text)


def seed_sample_document(data_dir: Path) -> Path:
    """Write the sample document used when the directory is empty."""
    target = data_dir / SAMPLE_FILENAME
    target.write_text(SAMPLE_CONTENT, encoding="utf-8")
    logger.info("Created sample document in %s", data_dir)
    return target


def load_documents(data_dir: Path, seed_sample: bool = False) -> list[Document]:
    """Load every supported file in ``data_dir``, sorted by file name.

    The directory is created if it does not exist. With ``seed_sample``,
    an empty directory gets a sample document first.
    """
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    paths = sorted(
        p for p in data_dir.iterdir()
        if p.is_file() and not p.name.startswith(".")
    )
    if not paths and seed_sample:
        paths = [seed_sample_document(data_dir)]

    documents = []
    for path in paths:
        doc = read_document(path)
        if doc is not None:
            documents.append(doc)

    logger.info("Loaded %d documents from %s", len(documents), data_dir)
    return documents
