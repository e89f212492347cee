"""PDF document loader implementation."""

import logging
import re
import uuid
from pathlib import Path

import pdfplumber
from PyPDF2 import PdfReader
from PyPDF2.errors import PdfReadError

from ..models.document import SourceDocument
from ..models.enums import DocumentType
from .exceptions import DocumentCorruptedError, ParseError, UnsupportedFormatError


logger = logging.getLogger(__name__)


class PDFDocumentLoader:
    """
    Loader for PDF documents.

    Uses PyPDF2 to validate the file and count pages and pdfplumber
    for text extraction. Pages are joined with a blank line so page
    breaks never glue two lines together.
    """

    # Repeated running headers/footers such as "Page 3 of 10".
    PAGE_FOOTER_PATTERN = re.compile(r"^\s*page\s+\d+(\s+of\s+\d+)?\s*$", re.IGNORECASE)

    def load(self, file_path: str) -> SourceDocument:
        """
        Load a PDF document and return its text.

        Args:
            file_path: Path to the PDF file.

        Returns:
            SourceDocument with the extracted text.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnsupportedFormatError: If the file is not a PDF.
            DocumentCorruptedError: If the document is corrupted.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if path.suffix.lower() != ".pdf":
            raise UnsupportedFormatError(
                message=f"Unsupported file format: {path.suffix}",
                file_path=file_path,
                location="file extension"
            )

        try:
            pdf_reader = PdfReader(file_path)
            page_count = len(pdf_reader.pages)
        except PdfReadError as e:
            raise DocumentCorruptedError(
                message="PDF file is corrupted or encrypted",
                file_path=file_path,
                location="file header",
                details={"original_error": str(e)}
            )
        except Exception as e:
            raise ParseError(
                message=f"Failed to open PDF: {str(e)}",
                file_path=file_path,
                details={"original_error": str(e)}
            )

        try:
            with pdfplumber.open(file_path) as pdf:
                text = self._extract_text(pdf)
                metadata = self._extract_metadata(pdf, path, page_count)
        except Exception as e:
            raise ParseError(
                message=f"Failed to extract PDF text: {str(e)}",
                file_path=file_path,
                details={"original_error": str(e)}
            )

        if not text.strip():
            logger.warning(f"No text layer found in PDF: {path.name}")

        return SourceDocument(
            id=str(uuid.uuid4()),
            filename=path.name,
            doc_type=DocumentType.PDF,
            text=text,
            metadata=metadata,
        )

    def _extract_text(self, pdf: pdfplumber.PDF) -> str:
        """Extract all text content from the PDF, dropping page footers."""
        pages = []
        for page in pdf.pages:
            page_text = page.extract_text()
            if not page_text:
                continue
            lines = [
                line for line in page_text.split("\n")
                if not self.PAGE_FOOTER_PATTERN.match(line)
            ]
            pages.append("\n".join(lines))
        return "\n\n".join(pages)

    def _extract_metadata(self, pdf: pdfplumber.PDF, path: Path, page_count: int) -> dict:
        """Extract document metadata."""
        metadata = {
            "page_count": page_count,
            "file_size": path.stat().st_size if path.exists() else 0,
        }

        if pdf.metadata:
            if pdf.metadata.get("Title"):
                metadata["title"] = pdf.metadata["Title"]
            if pdf.metadata.get("Author"):
                metadata["author"] = pdf.metadata["Author"]

        return metadata
