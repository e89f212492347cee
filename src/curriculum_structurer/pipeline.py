"""End-to-end processing pipeline for the Curriculum Structurer.

This module wires the loaders, the structure enhancer, the curriculum
extractor and the weightage helpers together, from an uploaded file or
pasted text to a curriculum structure or a test-series request.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .config.config_manager import ConfigurationManager
from .interfaces.enhancer import IContentEnhancer
from .interfaces.extractor import ICurriculumExtractor
from .interfaces.loader import IDocumentLoader
from .models.curriculum import CurriculumStructure, SubsectionContentRequest
from .models.document import SourceDocument
from .models.topics import QuestionMix, QuestionTask, SyllabusImport, TestSeriesConfig, Topic
from .parsers.base import DocumentLoader
from .parsers.exceptions import DocumentCorruptedError, ParseError
from .parsers.syllabus_markdown import SyllabusMarkdownParser
from .structuring.content_enhancer import ContentStructureEnhancer
from .structuring.curriculum_extractor import CurriculumExtractor
from .structuring.module_assembler import build_subsection_requests
from .weightage.normalizer import finalize_for_submission, normalize_weightages
from .weightage.test_series import (
    build_generation_payload,
    plan_question_batches,
    question_mix,
    summarize_topics,
    validate_topics,
)


logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    """Configuration for the processing pipeline."""

    # Run the enhancer over raw text before extraction
    enhance_before_extract: bool = False

    # Scaffold template for the enhancer; the configured default when None
    scaffold_id: Optional[str] = None

    # Configuration files
    config_dir: Optional[str] = None

    # Defaults for subsection content requests
    default_subject: str = ""
    default_difficulty: str = "Intermediate"


@dataclass
class PipelineResult:
    """Result of a pipeline execution."""

    success: bool
    document: Optional[SourceDocument] = None
    enhanced_markdown: Optional[str] = None
    structure: Optional[CurriculumStructure] = None
    subsection_requests: List[SubsectionContentRequest] = field(default_factory=list)
    syllabus: Optional[SyllabusImport] = None
    topics: List[Topic] = field(default_factory=list)
    question_mix: Optional[QuestionMix] = None
    question_tasks: List[QuestionTask] = field(default_factory=list)
    generation_payload: Optional[Dict[str, Any]] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    # Errors came from a missing or unreadable input file
    input_error: bool = False
    processing_time: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class PipelineStats:
    """Statistics about pipeline execution."""

    total_executions: int = 0
    successful_executions: int = 0
    failed_executions: int = 0
    average_processing_time: float = 0.0
    total_processing_time: float = 0.0


class CurriculumPipeline:
    """
    Main processing pipeline for curriculum structuring.

    Every call works on fresh in-memory data; failures are collected
    into the returned PipelineResult instead of being raised.
    """

    def __init__(
        self,
        config: Optional[PipelineConfig] = None,
        loader: Optional[IDocumentLoader] = None,
        enhancer: Optional[IContentEnhancer] = None,
        extractor: Optional[ICurriculumExtractor] = None,
        config_manager: Optional[ConfigurationManager] = None,
    ):
        """
        Initialize the processing pipeline.

        Args:
            config: Pipeline configuration.
            loader: Optional document loader (created if not provided).
            enhancer: Optional content enhancer (created if not provided).
            extractor: Optional curriculum extractor (created if not provided).
            config_manager: Optional configuration manager (created if not provided).
        """
        self.config = config or PipelineConfig()
        self.stats = PipelineStats()

        self._config_manager = config_manager or ConfigurationManager(
            config_dir=self.config.config_dir
        )

        # Load configuration if directory specified
        if self.config.config_dir:
            validation = self._config_manager.load_from_directory(self.config.config_dir)
            if validation.is_valid:
                logger.info(f"Loaded configuration from {self.config.config_dir}")
            else:
                logger.warning(
                    f"Failed to load configuration: {'; '.join(validation.errors)}"
                )

        self._loader = loader or DocumentLoader()
        self._scaffold = self._config_manager.get_scaffold_template(self.config.scaffold_id)
        self._enhancer = enhancer or ContentStructureEnhancer(scaffold=self._scaffold)
        self._extractor = extractor or CurriculumExtractor()
        self._syllabus_parser = SyllabusMarkdownParser()

        logger.info("Curriculum pipeline initialized")

    @property
    def scaffold_id(self) -> str:
        """ID of the scaffold template the default enhancer emits."""
        return self._scaffold.id

    @property
    def enhancer(self) -> IContentEnhancer:
        return self._enhancer

    @property
    def extractor(self) -> ICurriculumExtractor:
        return self._extractor

    # =========================================================================
    # Curriculum structuring
    # =========================================================================

    def process_text(
        self,
        text: str,
        filename: str = "pasted.md",
        enrichment: Optional[List[Dict[str, Any]]] = None,
        module_title: str = "",
        subject: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> PipelineResult:
        """
        Structure pasted or generated text.

        Args:
            text: Raw or already enhanced markdown.
            filename: Name used to record the document type.
            enrichment: Optional subsection enrichment records.
            module_title: Module title for subsection content requests.
            subject: Subject for requests; the configured default when None.
            difficulty: Difficulty for requests; the configured default when None.

        Returns:
            PipelineResult with the document, structure and requests.
        """
        return self._run(
            lambda result: self._structure(
                result,
                self._loader.load_text(text, filename),
                enrichment,
                module_title,
                subject,
                difficulty,
            )
        )

    def process_file(
        self,
        file_path: str,
        enrichment: Optional[List[Dict[str, Any]]] = None,
        module_title: str = "",
        subject: Optional[str] = None,
        difficulty: Optional[str] = None,
    ) -> PipelineResult:
        """
        Load a file and structure its text.

        Args:
            file_path: Path to a .md, .markdown, .txt, .pdf or .docx file.
            enrichment: Optional subsection enrichment records.
            module_title: Module title for requests; the file's stem when empty.
            subject: Subject for requests; the configured default when None.
            difficulty: Difficulty for requests; the configured default when None.

        Returns:
            PipelineResult with the document, structure and requests.
        """
        def step(result: PipelineResult) -> None:
            logger.info(f"Loading document: {file_path}")
            document = self._loader.load(file_path)
            title = module_title or document.metadata.get("title") or document.filename.rsplit(".", 1)[0]
            self._structure(result, document, enrichment, title, subject, difficulty)

        return self._run(step)

    def _structure(
        self,
        result: PipelineResult,
        document: SourceDocument,
        enrichment: Optional[List[Dict[str, Any]]],
        module_title: str,
        subject: Optional[str],
        difficulty: Optional[str],
    ) -> None:
        result.document = document

        if document.is_empty:
            result.warnings.append(f"Document has no text: {document.filename}")

        text = document.text
        if self.config.enhance_before_extract:
            text = self._enhancer.enhance(text)
            result.enhanced_markdown = text

        structure = self._extractor.extract(text, enrichment)
        result.structure = structure

        if not document.is_empty and structure.is_empty:
            result.warnings.append("No curriculum structure found in document")

        result.subsection_requests = build_subsection_requests(
            structure,
            module_title=module_title,
            subject=self.config.default_subject if subject is None else subject,
            difficulty=self.config.default_difficulty if difficulty is None else difficulty,
        )
        result.metadata["unit_count"] = len(structure.units)
        result.metadata["section_count"] = len(structure.sections)
        result.metadata["subsection_count"] = len(structure.subsections)
        result.metadata["flat_item_count"] = len(structure.flat_items)

    # =========================================================================
    # Test series
    # =========================================================================

    def import_syllabus_text(self, text: str) -> PipelineResult:
        """
        Import a markdown syllabus as a normalized topic list.

        A syllabus without topics succeeds with a warning.
        """
        return self._run(lambda result: self._import_syllabus(result, text))

    def import_syllabus_file(self, file_path: str) -> PipelineResult:
        """Load a syllabus file and import it as a normalized topic list."""
        def step(result: PipelineResult) -> None:
            document = self._loader.load(file_path)
            result.document = document
            self._import_syllabus(result, document.text)

        return self._run(step)

    def _import_syllabus(self, result: PipelineResult, text: str) -> None:
        syllabus = self._syllabus_parser.parse(text)
        result.syllabus = syllabus
        result.topics = [t.copy() for t in syllabus.topics]
        if not syllabus.has_topics:
            result.warnings.append("No topics found in syllabus")
        else:
            result.metadata["summary"] = summarize_topics(syllabus.topics)

    def prepare_test_series(
        self, config: TestSeriesConfig, topics: Sequence[Topic]
    ) -> PipelineResult:
        """
        Validate, finalize and plan a test series.

        Topics are normalized and finalized to integer weightages before
        validation; validation failures are reported as errors and stop
        the planning.

        Args:
            config: Test-series settings.
            topics: Topics as edited by the user.

        Returns:
            PipelineResult with finalized topics, question mix, planned
            tasks and the generation payload.
        """
        def step(result: PipelineResult) -> None:
            finalized = finalize_for_submission(normalize_weightages(topics))
            result.topics = finalized

            validation = validate_topics(finalized)
            result.warnings.extend(validation.warnings)
            if not validation.is_valid:
                result.errors.extend(validation.errors)
                return

            result.question_mix = question_mix(config)
            result.question_tasks = plan_question_batches(finalized, config)
            result.generation_payload = build_generation_payload(config, finalized)
            result.metadata["summary"] = summarize_topics(finalized)

        return self._run(step)

    # =========================================================================
    # Execution
    # =========================================================================

    def _run(self, step) -> PipelineResult:
        """Run one pipeline step, collecting errors and timing."""
        start_time = time.time()
        result = PipelineResult(success=False)

        try:
            step(result)
            result.success = not result.errors

            if result.success:
                logger.info(f"Pipeline step completed in {time.time() - start_time:.3f}s")
            for warning in result.warnings:
                logger.warning(warning)

        except FileNotFoundError as e:
            error_msg = f"File not found: {e}"
            result.input_error = True
            result.errors.append(error_msg)
            logger.error(error_msg)

        except DocumentCorruptedError as e:
            error_msg = f"Document corrupted: {e.message}"
            result.input_error = True
            result.errors.append(error_msg)
            logger.error(error_msg)

        except ParseError as e:
            error_msg = f"Parsing error: {e.message}"
            result.input_error = True
            result.errors.append(error_msg)
            logger.error(error_msg)

        except Exception as e:
            error_msg = f"Pipeline execution failed: {str(e)}"
            result.errors.append(error_msg)
            logger.exception(error_msg)

        finally:
            result.processing_time = time.time() - start_time
            self._update_stats(result)

        return result

    def _update_stats(self, result: PipelineResult) -> None:
        """Update pipeline statistics."""
        self.stats.total_executions += 1
        if result.success:
            self.stats.successful_executions += 1
        else:
            self.stats.failed_executions += 1

        self.stats.total_processing_time += result.processing_time
        self.stats.average_processing_time = (
            self.stats.total_processing_time / self.stats.total_executions
        )

    def get_stats(self) -> PipelineStats:
        """Get pipeline execution statistics."""
        return self.stats
