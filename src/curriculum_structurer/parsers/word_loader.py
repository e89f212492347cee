"""Word document (.docx) loader implementation."""

import re
import uuid
from pathlib import Path
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.text.paragraph import Paragraph

from ..models.document import SourceDocument
from ..models.enums import DocumentType
from .exceptions import DocumentCorruptedError, ParseError, UnsupportedFormatError


class WordDocumentLoader:
    """
    Loader for Word (.docx) documents.

    Paragraph text is emitted line by line. Heading styles are turned
    into markdown heading markers and list paragraphs into dash bullets
    so the curriculum extractor sees the same structure the author
    built in Word.
    """

    # Mapping of Word heading styles to markdown heading depth
    HEADING_STYLE_MAP = {
        "Title": 1,
        "Heading 1": 1,
        "Heading 2": 2,
        "Heading 3": 3,
        "Heading 4": 4,
    }

    LIST_STYLE_PATTERN = re.compile(r"^List (Bullet|Number|Paragraph)", re.IGNORECASE)

    def load(self, file_path: str) -> SourceDocument:
        """
        Load a Word document and return its text as markdown.

        Args:
            file_path: Path to the .docx file.

        Returns:
            SourceDocument with one line per paragraph.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnsupportedFormatError: If the file is not a .docx file.
            DocumentCorruptedError: If the document is corrupted.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if path.suffix.lower() != ".docx":
            raise UnsupportedFormatError(
                message=f"Unsupported file format: {path.suffix}",
                file_path=file_path,
                location="file extension"
            )

        try:
            doc = Document(file_path)
        except (BadZipFile, PackageNotFoundError) as e:
            raise DocumentCorruptedError(
                message="Document is corrupted or not a valid Word file",
                file_path=file_path,
                location="file header",
                details={"original_error": str(e)}
            )
        except Exception as e:
            raise ParseError(
                message=f"Failed to open document: {str(e)}",
                file_path=file_path,
                details={"original_error": str(e)}
            )

        lines = [self._paragraph_to_markdown(p) for p in doc.paragraphs]

        metadata = {"paragraph_count": len(doc.paragraphs)}
        core = doc.core_properties
        if core.title:
            metadata["title"] = core.title
        if core.author:
            metadata["author"] = core.author

        return SourceDocument(
            id=str(uuid.uuid4()),
            filename=path.name,
            doc_type=DocumentType.WORD,
            text="\n".join(lines),
            metadata=metadata,
        )

    def _paragraph_to_markdown(self, paragraph: Paragraph) -> str:
        """Render one paragraph as a markdown line."""
        text = paragraph.text.strip()
        if not text:
            return ""

        style_name = paragraph.style.name if paragraph.style is not None else ""

        depth = self.HEADING_STYLE_MAP.get(style_name)
        if depth:
            return f"{'#' * depth} {text}"

        if self.LIST_STYLE_PATTERN.match(style_name):
            return f"- {text}"

        return text
