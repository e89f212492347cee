"""Base document loader implementation."""

import uuid
from pathlib import Path

from ..interfaces.loader import IDocumentLoader
from ..models.document import SourceDocument
from ..models.enums import DocumentType
from .exceptions import DocumentCorruptedError, SUPPORTED_FORMATS, UnsupportedFormatError
from .pdf_loader import PDFDocumentLoader
from .word_loader import WordDocumentLoader


SUFFIX_TYPES = {
    ".md": DocumentType.MARKDOWN,
    ".markdown": DocumentType.MARKDOWN,
    ".txt": DocumentType.TEXT,
    ".pdf": DocumentType.PDF,
    ".docx": DocumentType.WORD,
}


class DocumentLoader(IDocumentLoader):
    """
    Main document loader that delegates to format-specific loaders.

    Markdown and plain text files are decoded as UTF-8 directly; PDF
    and Word files go through their dedicated loaders.
    """

    def __init__(self):
        self._word_loader = WordDocumentLoader()
        self._pdf_loader = PDFDocumentLoader()

    def load(self, file_path: str) -> SourceDocument:
        """
        Load a document and return its decoded text.

        Automatically detects the document format and delegates to
        the appropriate loader.

        Args:
            file_path: Path to the document file to load.

        Returns:
            SourceDocument containing the document text.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnsupportedFormatError: If the file format is not supported.
            DocumentCorruptedError: If the document is corrupted.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        doc_type = self.detect_document_type(file_path)

        if doc_type == DocumentType.WORD:
            return self._word_loader.load(file_path)
        elif doc_type == DocumentType.PDF:
            return self._pdf_loader.load(file_path)

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentCorruptedError(
                message="File is not valid UTF-8 text",
                file_path=file_path,
                location=f"byte {e.start}",
                details={"original_error": str(e)}
            )

        return SourceDocument(
            id=str(uuid.uuid4()),
            filename=path.name,
            doc_type=doc_type,
            text=text,
            metadata={"file_size": path.stat().st_size},
        )

    def load_text(self, text: str, filename: str = "pasted.md") -> SourceDocument:
        """
        Wrap already decoded text as a document.

        The type is taken from the filename when it is a text format,
        otherwise the text is treated as markdown.
        """
        doc_type = SUFFIX_TYPES.get(Path(filename).suffix.lower(), DocumentType.MARKDOWN)
        if doc_type in (DocumentType.PDF, DocumentType.WORD):
            doc_type = DocumentType.MARKDOWN

        return SourceDocument(
            id=str(uuid.uuid4()),
            filename=filename,
            doc_type=doc_type,
            text=text or "",
        )

    def get_supported_formats(self) -> list[str]:
        """Return list of supported file formats."""
        return list(SUPPORTED_FORMATS)

    def detect_document_type(self, file_path: str) -> DocumentType:
        """
        Detect the document type from file extension.

        Args:
            file_path: Path to the document file.

        Returns:
            DocumentType enum value.

        Raises:
            UnsupportedFormatError: If format is not supported.
        """
        suffix = Path(file_path).suffix.lower()

        doc_type = SUFFIX_TYPES.get(suffix)
        if doc_type is None:
            raise UnsupportedFormatError(
                message=f"Unsupported file format: {suffix}",
                file_path=file_path,
                location="file extension",
                details={"supported_formats": list(SUPPORTED_FORMATS)}
            )
        return doc_type
