import logging
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PyPdfError

logger = logging.getLogger(__name__)


def extract_text(pdf_path: Path) -> str:
    """
    Extrait le texte d'un PDF stocké localement.
    Retourne "" si le fichier est absent ou illisible (le quiz reste générable,
    seul le feedback inline en dépend).
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        return ""

    try:
        reader = PdfReader(str(pdf_path))
        text_parts = [page.extract_text() or "" for page in reader.pages]
    except (PyPdfError, ValueError) as e:
        logger.warning("extract_text failed for %s: %s", pdf_path.name, e)
        return ""

    return "\n".join(text_parts)
