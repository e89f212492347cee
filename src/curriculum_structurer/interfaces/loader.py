"""Document loader interface for the Curriculum Structurer."""

from abc import ABC, abstractmethod

from ..models.document import SourceDocument


class IDocumentLoader(ABC):
    """
    Abstract interface for document loading.

    Implementations decode uploaded files of different formats
    (markdown, plain text, PDF, Word) into a SourceDocument.
    """

    @abstractmethod
    def load(self, file_path: str) -> SourceDocument:
        """
        Load a document and return its decoded text.

        Args:
            file_path: Path to the document file to load.

        Returns:
            SourceDocument containing the document text.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnsupportedFormatError: If the file format is not supported.
            ParseError: If the document is corrupted or unreadable.
        """
        pass

    @abstractmethod
    def load_text(self, text: str, filename: str = "pasted.md") -> SourceDocument:
        """
        Wrap already decoded text (a paste or an AI response) as a document.

        Args:
            text: The document text.
            filename: Name used to infer the document type.

        Returns:
            SourceDocument wrapping the text.
        """
        pass
