"""Topic weightage normalization and test-series planning."""

from .normalizer import (
    WeightageNormalizer,
    normalize_weightages,
    finalize_for_submission,
    js_round,
)
from .test_series import (
    question_mix,
    validate_topics,
    summarize_topics,
    create_slug,
    extract_keywords,
    atomic_batches,
    plan_question_batches,
    build_generation_payload,
)

__all__ = [
    "WeightageNormalizer",
    "normalize_weightages",
    "finalize_for_submission",
    "js_round",
    "question_mix",
    "validate_topics",
    "summarize_topics",
    "create_slug",
    "extract_keywords",
    "atomic_batches",
    "plan_question_batches",
    "build_generation_payload",
]
