"""Custom exceptions for document loading."""

from dataclasses import dataclass, field
from typing import Optional, Any

SUPPORTED_FORMATS = [".md", ".markdown", ".txt", ".pdf", ".docx"]


@dataclass
class ParseError(Exception):
    """
    Base exception for document loading errors.

    Provides detailed error information including file path, location,
    and additional context for debugging and user feedback.

    Attributes:
        message: Human-readable error description.
        file_path: Path to the file that caused the error.
        location: Specific location within the file (page, paragraph, byte offset).
        details: Additional error details.
    """
    message: str
    file_path: Optional[str] = None
    location: Optional[str] = None
    details: Optional[dict] = field(default_factory=dict)

    def __post_init__(self):
        if self.details is None:
            self.details = {}
        super().__init__(str(self))

    def __str__(self) -> str:
        parts = [self.message]
        if self.file_path:
            parts.append(f"File: {self.file_path}")
        if self.location:
            parts.append(f"Location: {self.location}")
        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "file_path": self.file_path,
            "location": self.location,
            "details": self.details,
        }

    @property
    def has_location(self) -> bool:
        """Check if error has location information."""
        return self.location is not None and len(self.location) > 0


@dataclass
class DocumentCorruptedError(ParseError):
    """
    Exception raised when a document is corrupted or unreadable.

    The file exists but cannot be decoded because of corruption, an
    invalid container, encryption, or a text encoding problem.
    """

    def get_recovery_suggestions(self) -> list[str]:
        """Return suggestions for recovering from this error."""
        suggestions = [
            "Try opening the file in its native application to verify it's not corrupted",
            "Check if the file is password-protected or encrypted",
        ]
        if self.file_path and self.file_path.endswith('.pdf'):
            suggestions.append("For scanned PDFs, export the text layer or paste the text instead")
        elif self.file_path and self.file_path.endswith('.docx'):
            suggestions.append("Re-save the document from Word as a new .docx file")
        else:
            suggestions.append("Re-save the file as UTF-8 text")
        return suggestions


@dataclass
class UnsupportedFormatError(ParseError):
    """
    Exception raised when a document format is not supported.

    This error indicates that the file extension is not one the loader
    knows how to decode.
    """

    def get_supported_formats(self) -> list[str]:
        """Return list of supported formats."""
        return self.details.get("supported_formats", SUPPORTED_FORMATS)
