"""Unit tests for module assembly and subsection content requests."""

from datetime import datetime

from curriculum_structurer.models.curriculum import AcademicModule
from curriculum_structurer.structuring.content_enhancer import ContentStructureEnhancer
from curriculum_structurer.structuring.curriculum_extractor import CurriculumExtractor
from curriculum_structurer.structuring.module_assembler import (
    ModuleAssembler,
    build_subsection_requests,
)


OUTLINE = """# Unit 1: Mechanics
### 1.1 Motion
#### 1.1.1 Velocity
# Unit 2: Heat
### 2.1 Temperature
#### 2.1.1 Thermometers
"""


def assemble(text):
    return ModuleAssembler().assemble(AcademicModule(title="Physics", content=text))


class TestModuleAssembler:
    """Tests for structuring a saved module."""

    def test_enhanced_markdown_preferred(self):
        module = AcademicModule(
            title="Physics",
            content="- Laws of motion",
            enhanced_markdown=OUTLINE,
        )

        structured = ModuleAssembler().assemble(module)

        assert structured.module is module
        assert structured.has_units
        assert structured.structure.unit_structure == {"1": "Mechanics", "2": "Heat"}
        assert structured.course_type == "academic"
        assert structured.is_academic_course

    def test_section_and_subsection_headings_both_kept(self):
        structured = assemble(OUTLINE)
        assert [(s.number, s.level) for s in structured.detailed_subsections] == [
            ("1.1", 3),
            ("1.1.1", 4),
            ("2.1", 3),
            ("2.1.1", 4),
        ]

    def test_level_three_subsection(self):
        subsection = assemble(OUTLINE).detailed_subsections[0]
        assert subsection.name == "Motion"
        assert subsection.title == "1.1 Motion"
        assert subsection.unit_number == "1"
        assert subsection.unit_context == "Unit 1: Mechanics"

    def test_level_four_subsection(self):
        subsection = assemble(OUTLINE).detailed_subsections[3]
        assert subsection.number == "2.1.1"
        assert subsection.name == "Thermometers"
        assert subsection.unit_title == "Heat"
        assert subsection.unit_context == "Unit 2: Heat"

    def test_enhanced_minor_topics_become_subsections(self):
        enhanced = ContentStructureEnhancer().enhance(
            "Unit 1: Mechanics\n- Laws of motion and their applications\n- Friction"
        )

        subsections = assemble(enhanced).detailed_subsections

        assert [(s.number, s.name, s.level) for s in subsections] == [("1.1", "Friction", 3)]
        assert subsections[0].unit_context == "Unit 1: Mechanics"

    def test_unnumbered_heading_goes_to_general_unit(self):
        subsections = assemble("### 1.1 Motion\n### Overview\n#### Revision").detailed_subsections

        overview = subsections[1]
        assert overview.number == "2"
        assert overview.name == "Overview"
        assert overview.title == "Overview"
        assert overview.unit_number == "1"
        assert overview.unit_title == "General"
        assert overview.unit_context == "General Academic Content"
        assert overview.level == 3
        assert (subsections[2].number, subsections[2].level) == ("3", 4)

    def test_unit_context_needs_earlier_unit_heading(self):
        structured = assemble("#### 2.1.1 Thermometers\n# Unit 2: Heat")
        subsection = structured.detailed_subsections[0]
        assert subsection.unit_number == "2"
        assert subsection.unit_context == ""
        assert structured.has_units

    def test_other_heading_levels_ignored(self):
        structured = assemble("## 1. Laws of motion\n##### 1.1.1.1 Deep")
        assert structured.detailed_subsections == []

    def test_empty_module(self):
        structured = ModuleAssembler().assemble(AcademicModule(title="Empty"))
        assert structured.structure.is_empty
        assert not structured.has_units

    def test_last_updated_is_iso_timestamp(self):
        structured = assemble(OUTLINE)
        assert datetime.fromisoformat(structured.last_updated).tzinfo is not None


class TestSubsectionRequests:
    """Tests for subsection content request payloads."""

    def test_one_request_per_subsection(self):
        structure = CurriculumExtractor().extract(OUTLINE)

        requests = build_subsection_requests(structure, "Physics", "Physics", "Advanced")

        assert [r.subsection_title for r in requests] == [
            "1.1.1 Velocity",
            "2.1.1 Thermometers",
        ]
        assert requests[1].to_payload() == {
            "subsectionTitle": "2.1.1 Thermometers",
            "unitContext": "Unit 2: Heat",
            "moduleTitle": "Physics",
            "subject": "Physics",
            "difficulty": "Advanced",
        }

    def test_requests_for_assembled_module(self):
        structure = assemble(OUTLINE).structure
        requests = build_subsection_requests(structure, "Physics", "Physics", "Easy")
        assert [r.subsection_title for r in requests] == [
            "1.1 Motion",
            "1.1.1 Velocity",
            "2.1 Temperature",
            "2.1.1 Thermometers",
        ]

    def test_no_subsections_no_requests(self):
        structure = CurriculumExtractor().extract("- Lenses")
        assert build_subsection_requests(structure, "Optics", "Physics", "Easy") == []
