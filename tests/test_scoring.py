"""
评分与建议测试
"""

from itertools import permutations

import pytest

from stack_advisor.compatibility import (
    ALL_COMPATIBLE_MESSAGE,
    SEVERITY_WEIGHTS,
    Severity,
    generate_recommendations,
    is_compatible,
    score_conflicts,
)

from conftest import make_conflict


def expected_score(severities):
    return max(0, min(100, 100 - sum(SEVERITY_WEIGHTS[s] for s in severities)))


class TestSeverityScorer:
    """严重级别评分测试"""

    def test_weights(self):
        assert SEVERITY_WEIGHTS == {
            Severity.CRITICAL: 30,
            Severity.HIGH: 20,
            Severity.MEDIUM: 10,
            Severity.LOW: 5,
        }

    def test_no_conflicts_scores_100(self):
        assert score_conflicts([]) == 100

    @pytest.mark.parametrize("severity,score", [
        (Severity.LOW, 95),
        (Severity.MEDIUM, 90),
        (Severity.HIGH, 80),
        (Severity.CRITICAL, 70),
    ])
    def test_single_conflict(self, severity, score):
        assert score_conflicts([make_conflict(severity)]) == score

    def test_floor_at_zero(self):
        """测试分数下限为 0"""
        conflicts = [make_conflict(Severity.CRITICAL) for _ in range(4)]
        assert score_conflicts(conflicts) == 0

    def test_commutative(self):
        """测试与冲突顺序无关"""
        severities = [Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL, Severity.LOW]
        conflicts = [make_conflict(s) for s in severities]
        expected = expected_score(severities)

        for ordering in permutations(conflicts):
            assert score_conflicts(list(ordering)) == expected

    @pytest.mark.parametrize("severities", [
        [Severity.HIGH, Severity.HIGH, Severity.MEDIUM],
        [Severity.CRITICAL, Severity.CRITICAL, Severity.HIGH, Severity.HIGH],
        [Severity.LOW] * 21,
    ])
    def test_matches_formula(self, severities):
        assert score_conflicts([make_conflict(s) for s in severities]) == expected_score(severities)

    def test_compatible_iff_no_critical(self, critical_conflict):
        """测试兼容性只取决于是否存在 critical 冲突"""
        non_critical = [make_conflict(s) for s in (Severity.LOW, Severity.MEDIUM, Severity.HIGH)]

        assert is_compatible([]) is True
        assert is_compatible(non_critical) is True
        assert is_compatible(non_critical + [critical_conflict]) is False


class TestRecommendationGenerator:
    """建议生成测试"""

    def test_empty_conflicts(self):
        assert generate_recommendations([], "nextjs") == [ALL_COMPATIBLE_MESSAGE]
        assert ALL_COMPATIBLE_MESSAGE == "All modules are compatible"

    def test_one_per_conflict_in_order(self):
        conflicts = [
            make_conflict(Severity.HIGH, resolution="first"),
            make_conflict(Severity.LOW, resolution="second"),
            make_conflict(Severity.HIGH, resolution="first"),
        ]
        assert generate_recommendations(conflicts, "nextjs") == ["first", "second", "first"]

    def test_framework_does_not_change_output(self):
        conflicts = [make_conflict(Severity.MEDIUM, resolution="swap module")]
        assert (
            generate_recommendations(conflicts, "nextjs")
            == generate_recommendations(conflicts, "flutter")
            == generate_recommendations(conflicts)
        )
