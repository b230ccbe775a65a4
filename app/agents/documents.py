"""
Resume text extraction.

Supported formats:
- PDF (.pdf) using pypdf
- Word (.docx) using python-docx
- Plain Text (.txt)
"""
import io
import re
import zipfile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

MAX_RESUME_CHARS = 12000
MAX_PDF_PAGES = 10
ALLOWED_EXTENSIONS = {".pdf", ".docx", ".txt"}


class ResumeDocumentError(ValueError):
    """Resume input is missing, unsupported, too large, or unreadable."""


def get_file_extension(filename: str) -> str:
    if "." not in filename:
        return ""
    return "." + filename.rsplit(".", 1)[1].lower()


def clean_resume_text(raw: str, limit: int = MAX_RESUME_CHARS) -> str:
    cleaned = re.sub(r"\s+", " ", raw).strip()
    if len(cleaned) > limit:
        return cleaned[:limit - 3] + "..."
    return cleaned


def _pdf_text(blob: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(blob))
        parts = [page.extract_text() or "" for page in reader.pages[:MAX_PDF_PAGES]]
    except (PdfReadError, ValueError, OSError) as e:
        raise ResumeDocumentError("Could not read the PDF file.") from e
    return "\n".join(p for p in parts if p)


def _docx_text(blob: bytes) -> str:
    try:
        doc = Document(io.BytesIO(blob))
    except (PackageNotFoundError, zipfile.BadZipFile, ValueError, KeyError) as e:
        raise ResumeDocumentError("Could not read the Word document.") from e
    return "\n".join(p.text for p in doc.paragraphs if p.text)


def extract_resume_text(filename: str, blob: bytes, *, max_bytes: int) -> str:
    """Return cleaned text of an uploaded resume file."""
    if not filename:
        raise ResumeDocumentError("No file name provided.")

    ext = get_file_extension(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise ResumeDocumentError(f"Unsupported file type '{ext}'. Allowed: PDF, DOCX, TXT.")

    if len(blob) > max_bytes:
        raise ResumeDocumentError(f"File too large. Maximum size: {max_bytes // (1024 * 1024)}MB.")

    if ext == ".pdf":
        text = _pdf_text(blob)
    elif ext == ".docx":
        text = _docx_text(blob)
    else:
        text = blob.decode("utf-8", errors="ignore")

    text = clean_resume_text(text)
    if not text:
        raise ResumeDocumentError("No text could be extracted from the file.")
    return text


def resolve_resume_text(pasted: str | None, filename: str | None, blob: bytes | None, *, max_bytes: int) -> str:
    """Prefer an uploaded file; fall back to pasted text."""
    if blob:
        return extract_resume_text(filename or "", blob, max_bytes=max_bytes)

    text = clean_resume_text(pasted or "")
    if not text:
        raise ResumeDocumentError("Please paste your resume or upload a file.")
    return text
