from covergap.domain.models import Requirement, TestCase
from covergap.matching.matcher import covers, keyword_match_ratio, searchable_text


def _audit_requirement() -> Requirement:
    return Requirement(id="R1", text="system shall log audit access")


def test_covers_when_ratio_exceeds_threshold() -> None:
    test_case = TestCase(id="T1", description="verify audit log access entries", type="positive")
    assert keyword_match_ratio(test_case, _audit_requirement()) == 0.5
    assert covers(test_case, _audit_requirement())


def test_threshold_is_strict() -> None:
    test_case = TestCase(id="T1", description="verify audit log access entries")
    assert not covers(test_case, _audit_requirement(), threshold=0.5)
    assert covers(test_case, _audit_requirement(), threshold=0.49)


def test_requirement_without_keywords_never_matches() -> None:
    requirement = Requirement(id="R2", text="a an the to")
    test_case = TestCase(id="T1", description="a an the to", steps=["the"])
    assert keyword_match_ratio(test_case, requirement) == 0.0
    assert not covers(test_case, requirement)


def test_empty_requirement_text_never_matches() -> None:
    requirement = Requirement(id="R3", text="")
    assert not covers(TestCase(id="T1", description="anything at all"), requirement)


def test_title_used_when_description_missing() -> None:
    test_case = TestCase(id="T1", title="Audit access report")
    assert searchable_text(test_case) == "audit access report"
    assert covers(test_case, _audit_requirement())


def test_steps_are_searched() -> None:
    test_case = TestCase(
        id="T1",
        description="Unrelated summary",
        steps=["Open the Audit screen", "Check the ACCESS list"],
    )
    assert covers(test_case, _audit_requirement())


def test_unrelated_test_does_not_cover() -> None:
    test_case = TestCase(id="T1", description="Schedule an appointment for tomorrow")
    assert not covers(test_case, _audit_requirement())


def test_long_prepositions_count_towards_the_match() -> None:
    requirement = Requirement(id="R1", text="Nurse signs chart with badge")
    test_case = TestCase(id="T1", description="Verify nurse can log in with password", type="positive")
    assert keyword_match_ratio(test_case, requirement) == 0.4
    assert covers(test_case, requirement)
