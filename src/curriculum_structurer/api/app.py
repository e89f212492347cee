"""Minimal FastAPI application for the Curriculum Structurer.

This module exposes a simple HTTP API around CurriculumPipeline and the
weightage helpers without changing their internal logic.

Usage (from project root, after installing fastapi and uvicorn):

    uvicorn curriculum_structurer.api.app:app --reload

Curriculum text is sent as JSON to /api/curriculum/enhance and
/api/curriculum/extract, or uploaded as multipart/form-data to
/api/curriculum/upload with a ``file`` field.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import Body, FastAPI, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from ..config.models import ConfigurationError
from ..models.topics import TestSeriesConfig, Topic
from ..parsers.base import DocumentLoader
from ..parsers.exceptions import UnsupportedFormatError
from ..parsers.serialization import CurriculumSerializer
from ..pipeline import CurriculumPipeline, PipelineConfig, PipelineResult
from ..weightage.normalizer import WeightageNormalizer, finalize_for_submission, normalize_weightages
from ..weightage.test_series import validate_topics


app = FastAPI(title="Curriculum Structurer API", version="0.1.0")


def _get_enhance_from_env() -> bool:
    """Determine whether extraction runs the enhancer first.

    Uses CURRICULUM_ENHANCE_BEFORE_EXTRACT environment variable. Accepted
    truthy values: "1", "true", "yes", "y" (case-insensitive). If not set,
    defaults to False.
    """
    value = os.getenv("CURRICULUM_ENHANCE_BEFORE_EXTRACT")
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "y"}


def _build_pipeline(scaffold_id: Optional[str] = None) -> CurriculumPipeline:
    config = PipelineConfig(
        enhance_before_extract=_get_enhance_from_env(),
        scaffold_id=scaffold_id,
        config_dir=os.getenv("CURRICULUM_CONFIG_DIR") or None,
    )
    try:
        return CurriculumPipeline(config=config)
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc


def _save_upload_to_temp(upload: UploadFile, temp_dir: Path) -> Path:
    """Save an uploaded file to a temporary directory and return its path."""
    suffix = Path(upload.filename or "").suffix or ""
    temp_file = tempfile.NamedTemporaryFile(delete=False, suffix=suffix, dir=temp_dir)
    try:
        content = upload.file.read()
        temp_file.write(content)
    finally:
        temp_file.close()
    return Path(temp_file.name)


def _check_upload_format(upload: UploadFile) -> None:
    """Reject uploads whose extension no loader handles."""
    try:
        DocumentLoader().detect_document_type(upload.filename or "")
    except UnsupportedFormatError as exc:
        raise HTTPException(status_code=415, detail=exc.to_dict()) from exc


def _parse_topics(payload: Dict[str, Any]) -> List[Topic]:
    raw_topics = payload.get("topics")
    if not isinstance(raw_topics, list):
        raise HTTPException(status_code=400, detail="'topics' must be a list")
    try:
        return [Topic.from_dict(t) for t in raw_topics]
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _failure_status(result: PipelineResult) -> int:
    """400 for unreadable or unsupported input, 500 for anything else."""
    return 400 if result.input_error else 500


def _structure_payload(result: PipelineResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "success": result.success,
        "processing_time": result.processing_time,
        "errors": result.errors,
        "warnings": result.warnings,
    }
    if result.document is not None:
        payload["document"] = {
            "id": result.document.id,
            "filename": result.document.filename,
            "doc_type": result.document.doc_type.value,
            "metadata": result.document.metadata,
        }
    if result.enhanced_markdown is not None:
        payload["enhanced_markdown"] = result.enhanced_markdown
    if result.structure is not None:
        payload["structure"] = CurriculumSerializer.to_dict(result.structure)
        payload["subsection_requests"] = [
            r.to_payload() for r in result.subsection_requests
        ]
    return payload


@app.post("/api/curriculum/enhance")
async def enhance_curriculum(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
    """Rewrite raw curriculum text with explicit unit/section headings.

    Body: ``{"content": str, "scaffold_id": str | null}``.
    """
    content = payload.get("content")
    if content is not None and not isinstance(content, str):
        raise HTTPException(status_code=400, detail="'content' must be a string")

    pipeline = _build_pipeline(payload.get("scaffold_id"))
    enhancer = pipeline.enhancer

    return JSONResponse(
        status_code=200,
        content={
            "enhanced_markdown": enhancer.enhance(content),
            "scaffold_id": pipeline.scaffold_id,
        },
    )


@app.post("/api/curriculum/extract")
async def extract_curriculum(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
    """Extract the unit/section/subsection structure of curriculum text.

    Body: ``{"content": str, "enrichment": [...], "module_title": str,
    "subject": str, "difficulty": str}``; everything but ``content`` is
    optional.
    """
    content = payload.get("content")
    if not isinstance(content, str):
        raise HTTPException(status_code=400, detail="'content' must be a string")

    enrichment = payload.get("enrichment")
    if enrichment is not None and not isinstance(enrichment, list):
        raise HTTPException(status_code=400, detail="'enrichment' must be a list")

    pipeline = _build_pipeline()
    result = pipeline.process_text(
        content,
        enrichment=enrichment,
        module_title=payload.get("module_title") or "",
        subject=payload.get("subject"),
        difficulty=payload.get("difficulty"),
    )
    if not result.success:
        raise HTTPException(status_code=_failure_status(result), detail=result.errors)

    return JSONResponse(status_code=200, content=_structure_payload(result))


@app.post("/api/curriculum/upload")
async def upload_curriculum(
    file: UploadFile = File(..., description="Curriculum file (.md/.txt/.pdf/.docx)"),
) -> JSONResponse:
    """Load an uploaded curriculum file and extract its structure."""
    _check_upload_format(file)

    temp_dir = Path(tempfile.gettempdir()) / "curriculum_structurer_api"
    temp_dir.mkdir(parents=True, exist_ok=True)

    file_path = _save_upload_to_temp(file, temp_dir)
    try:
        pipeline = _build_pipeline()
        result = pipeline.process_file(
            str(file_path),
            module_title=Path(file.filename or "").stem,
        )
    finally:
        file_path.unlink(missing_ok=True)

    if not result.success:
        raise HTTPException(status_code=_failure_status(result), detail=result.errors)

    payload = _structure_payload(result)
    payload["filename"] = file.filename
    return JSONResponse(status_code=200, content=payload)


@app.post("/api/test-series/normalize")
async def normalize_topics(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
    """Normalize topic weightages so that they sum to 100."""
    topics = normalize_weightages(_parse_topics(payload))
    return JSONResponse(
        status_code=200,
        content={
            "topics": [t.to_dict() for t in topics],
            "total_weightage": WeightageNormalizer(topics).total_weightage,
        },
    )


@app.post("/api/test-series/finalize")
async def finalize_topics(payload: Dict[str, Any] = Body(...)) -> JSONResponse:
    """Finalize topics to integer weightages.

    When a ``config`` object is present the whole series is validated and
    planned, and the generation payload is returned as well.
    """
    topics = _parse_topics(payload)
    raw_config = payload.get("config")

    if raw_config is None:
        finalized = finalize_for_submission(normalize_weightages(topics))
        validation = validate_topics(finalized)
        return JSONResponse(
            status_code=200,
            content={
                "topics": [t.to_dict() for t in finalized],
                "is_valid": validation.is_valid,
                "errors": validation.errors,
            },
        )

    try:
        config = TestSeriesConfig.from_dict(raw_config)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    result = _build_pipeline().prepare_test_series(config, topics)
    response: Dict[str, Any] = {
        "success": result.success,
        "topics": [t.to_dict() for t in result.topics],
        "is_valid": result.success,
        "errors": result.errors,
        "warnings": result.warnings,
    }
    if result.question_mix is not None:
        response["question_mix"] = {
            "total_questions": result.question_mix.total_questions,
            "numerical_count": result.question_mix.numerical_count,
            "theoretical_count": result.question_mix.theoretical_count,
        }
        response["task_count"] = len(result.question_tasks)
        response["payload"] = result.generation_payload
    return JSONResponse(status_code=200, content=response)


@app.post("/api/test-series/import")
async def import_syllabus(
    file: UploadFile = File(..., description="Syllabus markdown file (.md/.txt)"),
) -> JSONResponse:
    """Import a markdown syllabus file as a weighted topic list."""
    _check_upload_format(file)

    temp_dir = Path(tempfile.gettempdir()) / "curriculum_structurer_api"
    temp_dir.mkdir(parents=True, exist_ok=True)

    file_path = _save_upload_to_temp(file, temp_dir)
    try:
        result = _build_pipeline().import_syllabus_file(str(file_path))
    finally:
        file_path.unlink(missing_ok=True)

    if not result.success:
        raise HTTPException(status_code=_failure_status(result), detail=result.errors)

    syllabus = result.syllabus
    return JSONResponse(
        status_code=200,
        content={
            "title": syllabus.title,
            "description": syllabus.description,
            "target_audience": syllabus.target_audience,
            "prerequisites": syllabus.prerequisites,
            "topics": [t.to_dict() for t in result.topics],
            "warnings": result.warnings,
        },
    )
