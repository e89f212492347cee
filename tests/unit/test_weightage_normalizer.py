"""Unit tests for the weightage normalizer."""

import pytest

from curriculum_structurer.models.topics import Topic, coerce_weightage
from curriculum_structurer.weightage.normalizer import (
    WeightageNormalizer,
    finalize_for_submission,
    js_round,
    normalize_weightages,
)


def weights(topics):
    return [t.weightage for t in topics]


@pytest.fixture
def two_topics():
    return WeightageNormalizer([
        Topic(name="A", weightage=60, subtopics=["a1"]),
        Topic(name="B", weightage=0, subtopics=["b1"]),
    ])


class TestAddTopic:
    """Tests for appending topics."""

    def test_first_topic_gets_full_weightage(self):
        normalizer = WeightageNormalizer()
        normalizer.add_topic()

        topics = normalizer.topics
        assert weights(topics) == [100.0]
        assert topics[0].name == ""
        assert topics[0].subtopics == [""]

    def test_new_last_topic_takes_remainder(self):
        normalizer = WeightageNormalizer()
        normalizer.add_topic()
        normalizer.add_topic()
        assert weights(normalizer.topics) == [100.0, 0.0]

        normalizer.update_topic(0, "weightage", 40)
        normalizer.add_topic()
        assert weights(normalizer.topics) == [40.0, 60.0, 0.0]

    def test_remainder_rounded_to_two_decimals(self):
        normalizer = WeightageNormalizer([
            Topic(name="A", weightage=33.333),
            Topic(name="B", weightage=33.333),
        ])
        normalizer.add_topic()
        assert normalizer.topics[-1].weightage == 33.33


class TestUpdateTopic:
    """Tests for editing topics."""

    def test_update_non_last_weightage_recomputes_last(self, two_topics):
        two_topics.update_topic(0, "weightage", 70)
        assert weights(two_topics.topics) == [70.0, 30.0]

    def test_weightage_strings_are_coerced(self, two_topics):
        two_topics.update_topic(0, "weightage", "25.5")
        assert weights(two_topics.topics) == [25.5, 74.5]

    def test_non_numeric_weightage_becomes_zero(self, two_topics):
        two_topics.update_topic(0, "weightage", "lots")
        assert weights(two_topics.topics) == [0.0, 100.0]

    def test_editing_last_weightage_does_not_recompute_it(self, two_topics):
        two_topics.update_topic(1, "weightage", 10)
        assert weights(two_topics.topics) == [60.0, 10.0]

        two_topics.update_topic(0, "name", "Mechanics")
        assert weights(two_topics.topics) == [60.0, 10.0]

        # The next weightage edit of a non-last topic restores the total.
        two_topics.update_topic(0, "weightage", 50)
        assert weights(two_topics.topics) == [50.0, 50.0]

    def test_other_fields_set_directly(self, two_topics):
        two_topics.update_topic(0, "name", "Mechanics")
        two_topics.update_topic(0, "subtopics", ["Kinematics", "Dynamics"])
        two_topics.update_topic(0, "marks", 40)

        topic = two_topics.topics[0]
        assert topic.name == "Mechanics"
        assert topic.subtopics == ["Kinematics", "Dynamics"]
        assert topic.marks == 40

    def test_unknown_field_raises(self, two_topics):
        with pytest.raises(ValueError):
            two_topics.update_topic(0, "colour", "red")

    def test_bad_index_raises(self, two_topics):
        with pytest.raises(IndexError):
            two_topics.update_topic(5, "name", "x")

    def test_single_topic_stays_pinned(self):
        normalizer = WeightageNormalizer()
        normalizer.add_topic()
        normalizer.update_topic(0, "weightage", 40)
        assert weights(normalizer.topics) == [100.0]


class TestRemoveTopic:
    """Tests for removing topics."""

    def test_one_left_gets_full_weightage(self, two_topics):
        two_topics.remove_topic(1)
        assert weights(two_topics.topics) == [100.0]

    def test_last_recomputed_after_removal(self):
        normalizer = WeightageNormalizer([
            Topic(name="A", weightage=20),
            Topic(name="B", weightage=30),
            Topic(name="C", weightage=50),
        ])
        normalizer.remove_topic(1)
        assert weights(normalizer.topics) == [20.0, 80.0]

    def test_remove_all(self, two_topics):
        two_topics.remove_topic(0)
        two_topics.remove_topic(0)
        assert two_topics.topics == []
        assert two_topics.total_weightage == 0

    def test_bad_index_raises(self, two_topics):
        with pytest.raises(IndexError):
            two_topics.remove_topic(2)


class TestSumInvariant:
    """Tests that edits keep the total at 100."""

    def test_sequence_of_edits(self):
        normalizer = WeightageNormalizer()
        operations = [
            lambda n: n.add_topic(),
            lambda n: n.add_topic(),
            lambda n: n.update_topic(0, "weightage", 12.5),
            lambda n: n.add_topic(),
            lambda n: n.update_topic(1, "weightage", 33.33),
            lambda n: n.add_topic(),
            lambda n: n.update_topic(2, "weightage", 20.17),
            lambda n: n.remove_topic(0),
            lambda n: n.update_topic(0, "weightage", "10"),
            lambda n: n.remove_topic(2),
            lambda n: n.remove_topic(0),
        ]
        for operation in operations:
            operation(normalizer)
            assert abs(normalizer.total_weightage - 100) <= 0.01

    def test_topics_property_returns_copies(self, two_topics):
        topics = two_topics.topics
        topics[0].weightage = 99
        assert two_topics.topics[0].weightage == 60

    def test_known_clamp_behaviour(self):
        """Non-last topics above 100 clamp the last to 0 and the total exceeds 100."""
        normalizer = WeightageNormalizer([
            Topic(name="A", weightage=80),
            Topic(name="B", weightage=20),
            Topic(name="C", weightage=0),
        ])
        normalizer.update_topic(1, "weightage", 50)
        assert weights(normalizer.topics) == [80.0, 50.0, 0.0]
        assert normalizer.total_weightage == 130


class TestSubtopicEditing:
    """Tests for subtopic add/update/remove."""

    def test_add_update_remove(self, two_topics):
        two_topics.add_subtopic(0)
        two_topics.update_subtopic(0, 1, "a2")
        assert two_topics.topics[0].subtopics == ["a1", "a2"]

        two_topics.remove_subtopic(0, 0)
        assert two_topics.topics[0].subtopics == ["a2"]

    def test_last_subtopic_cannot_be_removed(self, two_topics):
        with pytest.raises(ValueError):
            two_topics.remove_subtopic(1, 0)

    def test_subtopic_index_checked(self, two_topics):
        with pytest.raises(IndexError):
            two_topics.update_subtopic(0, 3, "x")

    def test_subtopic_edits_leave_weightage_alone(self, two_topics):
        two_topics.add_subtopic(1)
        assert weights(two_topics.topics) == [60.0, 0.0]


class TestNormalizeWeightages:
    """Tests for the pure normalize function."""

    def test_last_forced_to_remainder(self):
        topics = [Topic(name="A", weightage=30), Topic(name="B", weightage=5)]
        assert weights(normalize_weightages(topics)) == [30.0, 70.0]

    def test_input_not_mutated(self):
        topics = [Topic(name="A", weightage=30), Topic(name="B", weightage=5)]
        normalize_weightages(topics)
        assert topics[1].weightage == 5

    def test_non_numeric_values_coerced(self):
        topics = [
            Topic(name="A", weightage="abc"),
            Topic(name="B", weightage=float("nan")),
            Topic(name="C", weightage=None),
        ]
        assert weights(normalize_weightages(topics)) == [0.0, 0.0, 100.0]

    def test_single_topic_forced_to_100(self):
        assert weights(normalize_weightages([Topic(name="A", weightage=3)])) == [100.0]

    def test_no_rounding(self):
        topics = [Topic(name="A", weightage=33.333), Topic(name="B", weightage=0)]
        assert normalize_weightages(topics)[1].weightage == pytest.approx(66.667)

    def test_clamped_at_zero(self):
        topics = [Topic(name="A", weightage=90), Topic(name="B", weightage=30), Topic(name="C")]
        assert weights(normalize_weightages(topics)) == [90.0, 30.0, 0.0]

    def test_empty_list(self):
        assert normalize_weightages([]) == []


class TestFinalizeForSubmission:
    """Tests for integer finalization."""

    def test_thirds(self):
        topics = [
            Topic(name="A", weightage=33.33),
            Topic(name="B", weightage=33.33),
            Topic(name="C", weightage=33.34),
        ]
        result = finalize_for_submission(topics)
        assert weights(result) == [33, 33, 34]
        assert all(isinstance(w, int) for w in weights(result))

    def test_half_rounds_up(self):
        topics = [
            Topic(name="A", weightage=12.5),
            Topic(name="B", weightage=37.5),
            Topic(name="C", weightage=50),
        ]
        assert weights(finalize_for_submission(topics)) == [13, 38, 49]

    @pytest.mark.parametrize("values", [
        [10.4, 20.6, 69.0],
        [0.5, 0.5, 0.5, 98.5],
        [99.99, 0.01],
        [25.25, 25.25, 25.25, 24.25],
    ])
    def test_sum_is_exactly_100(self, values):
        topics = [Topic(name=str(i), weightage=v) for i, v in enumerate(values)]
        result = finalize_for_submission(normalize_weightages(topics))
        assert sum(weights(result)) == 100

    def test_single_topic(self):
        assert weights(finalize_for_submission([Topic(name="A", weightage=12.3)])) == [100]

    def test_empty_list(self):
        assert finalize_for_submission([]) == []


class TestHelpers:
    """Tests for rounding and coercion helpers."""

    def test_js_round(self):
        assert js_round(2.5) == 3
        assert js_round(-2.5) == -2
        assert js_round(2.4999) == 2

    @pytest.mark.parametrize("value,expected", [
        (5, 5.0),
        ("7.25", 7.25),
        (" 3 ", 3.0),
        ("", 0.0),
        (None, 0.0),
        (True, 0.0),
        (float("inf"), 0.0),
    ])
    def test_coerce_weightage(self, value, expected):
        assert coerce_weightage(value) == expected
