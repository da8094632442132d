from typing import Optional, Tuple
import logging
import os
from pdfminer.high_level import extract_text
from pdfminer.pdfparser import PDFSyntaxError

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = (".html", ".htm", ".txt")
SUPPORTED_EXTENSIONS = (".pdf",) + TEXT_EXTENSIONS

def load_document_text(path: str) -> Tuple[str, Optional[str]]:
    """
    Return (text, error). PDFs go through pdfminer; HTML exports and plain
    text are read as-is so the HTML adapter sees the markup.
    """
    err = None
    text = ""
    ext = os.path.splitext(path)[1].lower()
    if ext in TEXT_EXTENSIONS:
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                text = f.read()
        except OSError as e:
            err = f"read_error: {e}"
        return text, err

    try:
        text = extract_text(path) or ""
    except PDFSyntaxError as e:
        err = f"PDFSyntaxError: {e}"
    except Exception as e:
        err = f"pdfminer_error: {e}"

    if not text.strip() and not err:
        # scanned PDFs carry no text layer
        logger.warning("%s: no extractable text", path)
        err = "empty_text: no text layer (scanned document?)"
    return text, err
