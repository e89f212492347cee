"""Unit tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from curriculum_structurer.api.app import app
from curriculum_structurer.parsers.syllabus_markdown import SyllabusMarkdownParser
from curriculum_structurer.structuring.curriculum_extractor import CurriculumExtractor


OUTLINE = """# Unit 1: Mechanics
### 1.1 Motion
#### 1.1.1 Velocity
"""

SYLLABUS = """# Physics Mock Series
Target Audience: Class 12

## Mechanics (30 Marks)
- Kinematics

## Optics (10 Marks)
- Lenses
"""


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("CURRICULUM_ENHANCE_BEFORE_EXTRACT", raising=False)
    monkeypatch.delenv("CURRICULUM_CONFIG_DIR", raising=False)
    return TestClient(app)


class TestEnhanceEndpoint:
    """Tests for POST /api/curriculum/enhance."""

    def test_enhance(self, client):
        response = client.post("/api/curriculum/enhance", json={"content": "- Friction"})

        assert response.status_code == 200
        data = response.json()
        assert data["enhanced_markdown"].startswith("### 0.1 Friction")
        assert data["scaffold_id"] == "course_creator"

    def test_enhance_with_module_editor_scaffold(self, client):
        response = client.post(
            "/api/curriculum/enhance",
            json={"content": "- Friction", "scaffold_id": "module_editor"},
        )
        assert response.status_code == 200
        assert "**Key Learning Points:**" in response.json()["enhanced_markdown"]

    def test_unknown_scaffold(self, client):
        response = client.post(
            "/api/curriculum/enhance",
            json={"content": "- Friction", "scaffold_id": "missing"},
        )
        assert response.status_code == 400

    def test_null_content_passes_through(self, client):
        response = client.post("/api/curriculum/enhance", json={"content": None})
        assert response.status_code == 200
        assert response.json()["enhanced_markdown"] is None

    def test_non_string_content(self, client):
        response = client.post("/api/curriculum/enhance", json={"content": 42})
        assert response.status_code == 400


class TestExtractEndpoint:
    """Tests for POST /api/curriculum/extract."""

    def test_extract(self, client):
        response = client.post(
            "/api/curriculum/extract",
            json={"content": OUTLINE, "module_title": "Physics", "subject": "Physics"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["structure"]["unit_structure"] == {"1": "Mechanics"}
        assert data["subsection_requests"] == [{
            "subsectionTitle": "1.1.1 Velocity",
            "unitContext": "Unit 1: Mechanics",
            "moduleTitle": "Physics",
            "subject": "Physics",
            "difficulty": "Intermediate",
        }]
        assert "enhanced_markdown" not in data

    def test_extract_with_enrichment(self, client):
        response = client.post(
            "/api/curriculum/extract",
            json={
                "content": OUTLINE,
                "enrichment": [{"title": "1.1.1 Velocity", "explanation": "Speed with direction."}],
            },
        )
        subsection = response.json()["structure"]["subsections"][0]
        assert subsection["explanation"] == "Speed with direction."

    def test_enhance_first_from_environment(self, client, monkeypatch):
        monkeypatch.setenv("CURRICULUM_ENHANCE_BEFORE_EXTRACT", "yes")

        response = client.post("/api/curriculum/extract", json={"content": "Unit 1: Optics"})

        data = response.json()
        assert data["enhanced_markdown"].startswith("# Unit 1: Optics")
        assert data["structure"]["has_units"] is True

    def test_missing_content(self, client):
        assert client.post("/api/curriculum/extract", json={}).status_code == 400

    def test_enrichment_must_be_list(self, client):
        response = client.post(
            "/api/curriculum/extract", json={"content": OUTLINE, "enrichment": "x"}
        )
        assert response.status_code == 400


class TestUploadEndpoint:
    """Tests for POST /api/curriculum/upload."""

    def test_upload_markdown(self, client):
        response = client.post(
            "/api/curriculum/upload",
            files={"file": ("mechanics.md", OUTLINE.encode("utf-8"), "text/markdown")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["filename"] == "mechanics.md"
        assert data["document"]["doc_type"] == "md"
        assert data["subsection_requests"][0]["moduleTitle"] == "mechanics"

    def test_unsupported_format(self, client):
        response = client.post(
            "/api/curriculum/upload",
            files={"file": ("outline.rtf", b"{\\rtf1}", "application/rtf")},
        )

        assert response.status_code == 415
        assert response.json()["detail"]["error_type"] == "UnsupportedFormatError"

    def test_undecodable_upload(self, client):
        response = client.post(
            "/api/curriculum/upload",
            files={"file": ("notes.txt", b"\xff\xfe bad", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["detail"][0].startswith("Document corrupted")

    def test_internal_failure_is_server_error(self, client, monkeypatch):
        def fail(self, content, enrichment=None):
            raise RuntimeError("extractor crashed")

        monkeypatch.setattr(CurriculumExtractor, "extract", fail)

        response = client.post(
            "/api/curriculum/upload",
            files={"file": ("mechanics.md", OUTLINE.encode("utf-8"), "text/markdown")},
        )

        assert response.status_code == 500
        assert response.json()["detail"] == ["Pipeline execution failed: extractor crashed"]


class TestTestSeriesEndpoints:
    """Tests for the test-series weightage endpoints."""

    def test_normalize(self, client):
        response = client.post(
            "/api/test-series/normalize",
            json={"topics": [
                {"name": "A", "weightage": "30", "subtopics": ["a"]},
                {"name": "B", "weightage": 5, "subtopics": ["b"]},
            ]},
        )

        assert response.status_code == 200
        data = response.json()
        assert [t["weightage"] for t in data["topics"]] == [30.0, 70.0]
        assert data["total_weightage"] == 100

    def test_topics_must_be_list(self, client):
        response = client.post("/api/test-series/normalize", json={"topics": "A"})
        assert response.status_code == 400

    def test_topic_must_be_object(self, client):
        response = client.post("/api/test-series/normalize", json={"topics": ["A"]})
        assert response.status_code == 400

    def test_finalize_without_config(self, client):
        response = client.post(
            "/api/test-series/finalize",
            json={"topics": [
                {"name": "A", "weightage": 33.33},
                {"name": "B", "weightage": 33.33},
                {"name": "C", "weightage": 33.34},
            ]},
        )

        data = response.json()
        assert [t["weightage"] for t in data["topics"]] == [33, 33, 34]
        assert data["is_valid"] is True
        assert data["errors"] == []

    def test_finalize_with_config(self, client):
        response = client.post(
            "/api/test-series/finalize",
            json={
                "topics": [
                    {"name": "A", "weightage": 33.33},
                    {"name": "B", "weightage": 33.33},
                    {"name": "C", "weightage": 0},
                ],
                "config": {"title": "Mock", "totalTests": 1, "questionsPerTest": 10},
            },
        )

        data = response.json()
        assert data["success"] is True
        assert data["question_mix"] == {
            "total_questions": 10,
            "numerical_count": 4,
            "theoretical_count": 6,
        }
        # Each topic gets 4 questions: one numerical batch and one theoretical batch.
        assert data["task_count"] == 6
        assert data["payload"]["title"] == "Mock"
        assert [t["weightage"] for t in data["payload"]["topics"]] == [33, 33, 34]

    def test_finalize_invalid_topics(self, client):
        response = client.post(
            "/api/test-series/finalize",
            json={
                "topics": [{"name": "", "weightage": 100}],
                "config": {"totalTests": 1},
            },
        )

        data = response.json()
        assert response.status_code == 200
        assert data["success"] is False
        assert "Topic 1 has no name" in data["errors"]
        assert "payload" not in data

    def test_finalize_bad_config(self, client):
        response = client.post(
            "/api/test-series/finalize",
            json={"topics": [{"name": "A", "weightage": 100}], "config": "x"},
        )
        assert response.status_code == 400

    def test_import_syllabus(self, client):
        response = client.post(
            "/api/test-series/import",
            files={"file": ("syllabus.md", SYLLABUS.encode("utf-8"), "text/markdown")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Physics Mock Series"
        assert data["target_audience"] == "Class 12"
        assert [(t["name"], t["weightage"], t["marks"]) for t in data["topics"]] == [
            ("Mechanics", 75.0, 30),
            ("Optics", 25.0, 10),
        ]

    def test_import_internal_failure_is_server_error(self, client, monkeypatch):
        def fail(self, content):
            raise RuntimeError("parser crashed")

        monkeypatch.setattr(SyllabusMarkdownParser, "parse", fail)

        response = client.post(
            "/api/test-series/import",
            files={"file": ("syllabus.md", SYLLABUS.encode("utf-8"), "text/markdown")},
        )

        assert response.status_code == 500

    def test_import_undecodable_file(self, client):
        response = client.post(
            "/api/test-series/import",
            files={"file": ("syllabus.md", b"\xff\xfe bad", "text/markdown")},
        )
        assert response.status_code == 400

    def test_finalize_with_numeric_string_config(self, client):
        response = client.post(
            "/api/test-series/finalize",
            json={
                "topics": [{"name": "A", "weightage": 100, "subtopics": ["a"]}],
                "config": {"totalTests": "2", "questionsPerTest": "10"},
            },
        )

        data = response.json()
        assert response.status_code == 200
        assert data["success"] is True
        assert data["question_mix"]["total_questions"] == 20
        assert data["payload"]["totalTests"] == 2

    def test_finalize_with_non_numeric_config(self, client):
        response = client.post(
            "/api/test-series/finalize",
            json={
                "topics": [{"name": "A", "weightage": 100}],
                "config": {"totalTests": "many"},
            },
        )

        assert response.status_code == 400
        assert "total_tests" in response.json()["detail"]
