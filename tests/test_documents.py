import io

import pytest
from docx import Document

from app.agents.documents import (
    MAX_RESUME_CHARS,
    ResumeDocumentError,
    clean_resume_text,
    extract_resume_text,
    get_file_extension,
    resolve_resume_text,
)

MB = 1024 * 1024


def _docx_bytes(*paragraphs: str) -> bytes:
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_file_extension():
    assert get_file_extension("CV.PDF") == ".pdf"
    assert get_file_extension("resume.final.docx") == ".docx"
    assert get_file_extension("resume") == ""


def test_clean_collapses_whitespace_and_truncates():
    assert clean_resume_text("  Jane\n\n  Doe\tEngineer ") == "Jane Doe Engineer"
    long_text = "a" * (MAX_RESUME_CHARS + 50)
    assert clean_resume_text(long_text).endswith("...")
    assert len(clean_resume_text(long_text)) == MAX_RESUME_CHARS
    assert clean_resume_text("a" * MAX_RESUME_CHARS) == "a" * MAX_RESUME_CHARS
    assert clean_resume_text("abcdefgh", limit=6) == "abc..."


def test_plain_text_upload():
    text = extract_resume_text("cv.txt", "Jane Doe\nPython, SQL".encode("utf-8"), max_bytes=MB)
    assert text == "Jane Doe Python, SQL"


def test_docx_upload():
    blob = _docx_bytes("Jane Doe", "Data Analyst at Acme")
    assert extract_resume_text("cv.docx", blob, max_bytes=MB) == "Jane Doe Data Analyst at Acme"


def test_corrupt_docx_is_reported():
    with pytest.raises(ResumeDocumentError, match="Word document"):
        extract_resume_text("cv.docx", b"not a zip archive", max_bytes=MB)


def test_corrupt_pdf_is_reported():
    with pytest.raises(ResumeDocumentError, match="PDF"):
        extract_resume_text("cv.pdf", b"definitely not a pdf", max_bytes=MB)


@pytest.mark.parametrize("filename,blob,message", [
    ("cv.png", b"\x89PNG", "Unsupported file type"),
    ("cv.txt", b"x" * (MB + 1), "too large"),
    ("cv.txt", b"   \n  ", "No text"),
    ("", b"text", "No file name"),
])
def test_rejected_uploads(filename, blob, message):
    with pytest.raises(ResumeDocumentError, match=message):
        extract_resume_text(filename, blob, max_bytes=MB)


def test_uploaded_file_wins_over_pasted_text():
    text = resolve_resume_text("pasted resume", "cv.txt", b"uploaded resume", max_bytes=MB)
    assert text == "uploaded resume"


def test_pasted_text_used_without_upload():
    assert resolve_resume_text(" pasted\nresume ", None, None, max_bytes=MB) == "pasted resume"
    assert resolve_resume_text("pasted", "", b"", max_bytes=MB) == "pasted"


def test_nothing_provided():
    with pytest.raises(ResumeDocumentError, match="paste your resume"):
        resolve_resume_text("   ", None, None, max_bytes=MB)
