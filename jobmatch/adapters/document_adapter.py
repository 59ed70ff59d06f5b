"""
Concrete implementation of DocumentPort for résumé uploads (PDF and DOCX).

CPU-bound parsing runs in a threadpool via asyncio.to_thread() so a large
upload does not stall edits or an in-flight analysis on the event loop.
"""

import asyncio
import io

from docx import Document
from pypdf import PdfReader

from jobmatch.ports.document_port import DocumentPort


class DocumentAdapter(DocumentPort):
    """Turns an uploaded résumé file into plain text for the résumé field."""

    _SUPPORTED = ["pdf", "docx"]

    # Scanned PDFs and image-only files typically yield < 50 chars.
    _MIN_TEXT_LENGTH = 50

    async def extract_text(self, file_bytes: bytes, file_extension: str) -> str:
        """
        Raises ValueError if the file type is unsupported or the document
        holds too little text to be a real résumé.
        """
        ext = file_extension.lower().strip(".")
        if ext not in self._SUPPORTED:
            raise ValueError(
                f"Unsupported file type: .{ext}. "
                f"Supported: {', '.join(self._SUPPORTED)}"
            )

        parse = self._resume_from_pdf if ext == "pdf" else self._resume_from_docx
        text = await asyncio.to_thread(parse, file_bytes)

        if len(text.strip()) < self._MIN_TEXT_LENGTH:
            raise ValueError(
                "The uploaded résumé appears to be scanned or image-based. "
                "Please upload a text-based PDF or DOCX file, or paste the text instead."
            )
        return text

    def supported_extensions(self) -> list[str]:
        return list(self._SUPPORTED)

    @staticmethod
    def _resume_from_pdf(file_bytes: bytes) -> str:
        reader = PdfReader(io.BytesIO(file_bytes))
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
        return "\n\n".join(p for p in pages if p)

    @staticmethod
    def _resume_from_docx(file_bytes: bytes) -> str:
        doc = Document(io.BytesIO(file_bytes))
        lines = [para.text.strip() for para in doc.paragraphs]
        return "\n".join(line for line in lines if line)
