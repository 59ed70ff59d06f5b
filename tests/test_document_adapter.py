"""Tests for résumé text extraction from uploaded documents."""

from __future__ import annotations

import asyncio
import io

import pytest
from docx import Document
from pypdf import PdfWriter

from jobmatch.adapters.document_adapter import DocumentAdapter


def _docx_bytes(*paragraphs: str) -> bytes:
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


def _blank_pdf_bytes() -> bytes:
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


def test_docx_paragraphs_become_resume_lines() -> None:
    data = _docx_bytes(
        "Jane Doe",
        "",
        "Senior Backend Engineer with eight years of Python and PostgreSQL experience.",
    )

    text = asyncio.run(DocumentAdapter().extract_text(data, ".DOCX"))

    assert text.splitlines() == [
        "Jane Doe",
        "Senior Backend Engineer with eight years of Python and PostgreSQL experience.",
    ]


def test_image_only_pdf_is_rejected() -> None:
    with pytest.raises(ValueError, match="scanned or image-based"):
        asyncio.run(DocumentAdapter().extract_text(_blank_pdf_bytes(), "pdf"))


def test_unsupported_extension_is_rejected() -> None:
    with pytest.raises(ValueError, match="Unsupported file type"):
        asyncio.run(DocumentAdapter().extract_text(b"plain text", "txt"))


def test_supported_extensions_is_a_copy() -> None:
    adapter = DocumentAdapter()
    adapter.supported_extensions().append("exe")
    assert adapter.supported_extensions() == ["pdf", "docx"]
