from covergap.config import AnalysisConfig, ScoringWeights
from covergap.domain.models import Requirement, TestCase
from covergap.usecases.build_coverage_map import build_coverage_map, score_coverage

ALLERGY = Requirement(id="R1", text="Clinician can update patient allergy records")
CALENDAR = Requirement(id="R2", text="Display appointment calendar")


def _test(test_id: str, test_type=None, description="Update allergy records for patient"):
    return TestCase(id=test_id, description=description, type=test_type)


def test_score_empty_is_zero() -> None:
    assert score_coverage([]) == 0


def test_score_adds_aspects_and_redundancy_bonus() -> None:
    assert score_coverage([_test("T1", "positive")]) == 45
    assert score_coverage([_test("T1", "positive"), _test("T2", "negative")]) == 90
    assert score_coverage([_test("T1", "positive"), _test("T2", "positive")]) == 50
    assert score_coverage([_test("T1")]) == 5


def test_score_is_clamped_to_100() -> None:
    tests = [_test("T1", "positive"), _test("T2", "negative"), _test("T3", "edge_case")]
    assert score_coverage(tests) == 100
    assert score_coverage([_test(f"T{index}") for index in range(40)]) == 100


def test_redundant_tests_never_lower_the_score() -> None:
    tests = [_test("T1", "positive")]
    previous = score_coverage(tests)
    for index in range(2, 30):
        tests.append(_test(f"T{index}", "positive"))
        current = score_coverage(tests)
        assert current >= previous
        previous = current


def test_score_uses_configured_weights() -> None:
    weights = ScoringWeights(positive=10, negative=10, edge_case=10, redundancy_bonus=1)
    assert score_coverage([_test("T1", "positive")], weights) == 11


def test_build_coverage_map_preserves_order() -> None:
    tests = [
        _test("T1", "positive"),
        _test("T2", "negative", "Reject invalid allergy update for patient records"),
        _test("T3", "positive", "Unrelated billing export"),
    ]
    entries = build_coverage_map([CALENDAR, ALLERGY], tests)
    assert [entry.requirement.id for entry in entries] == ["R2", "R1"]
    assert entries[0].covering_tests == []
    assert entries[0].coverage_score == 0
    assert [test.id for test in entries[1].covering_tests] == ["T1", "T2"]
    assert entries[1].coverage_score == 90


def test_build_coverage_map_respects_match_threshold() -> None:
    tests = [_test("T1", "positive", "allergy banner")]
    assert build_coverage_map([ALLERGY], tests)[0].coverage_score == 0
    loose = AnalysisConfig(match_threshold=0.1)
    assert build_coverage_map([ALLERGY], tests, config=loose)[0].coverage_score == 45


def test_scores_stay_in_range() -> None:
    tests = [_test(f"T{index}", "positive") for index in range(25)]
    for entry in build_coverage_map([ALLERGY, CALENDAR], tests):
        assert 0 <= entry.coverage_score <= 100
        assert (entry.coverage_score == 0) == (not entry.covering_tests)
