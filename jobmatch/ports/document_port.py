"""
Abstract interface for turning an uploaded résumé file into plain text.
"""

from abc import ABC, abstractmethod


class DocumentPort(ABC):
    """Port for résumé document parsing."""

    @abstractmethod
    async def extract_text(self, file_bytes: bytes, file_extension: str) -> str:
        """
        Return the résumé text held in `file_bytes`.

        Args:
            file_bytes: Raw upload content
            file_extension: Extension with or without the dot, any case

        Raises:
            ValueError: unsupported type, or too little text to be a résumé.
        """
        ...

    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """Lowercase extensions without dots, e.g. ['pdf', 'docx']."""
        ...
