from __future__ import annotations

import pytest

from tetris_rl.game import ScoringRules


@pytest.fixture
def rules():
    return ScoringRules()


@pytest.mark.parametrize("lines, base", [(1, 100), (2, 300), (3, 500), (4, 800)])
@pytest.mark.parametrize("level", [1, 2, 7, 29])
def test_line_scores_scale_with_level(rules, lines, base, level):
    assert rules.score_for_lines(lines, level) == base * level


@pytest.mark.parametrize("lines", [0, 5, 6, -1])
def test_other_counts_score_nothing(rules, lines):
    assert rules.score_for_lines(lines, 3) == 0


def test_level_formula_and_cap(rules):
    for total in range(0, 400):
        assert rules.level_for_lines(total) == min(total // 10 + 1, 29)
    assert rules.level_for_lines(0) == 1
    assert rules.level_for_lines(9) == 1
    assert rules.level_for_lines(10) == 2
    assert rules.level_for_lines(10_000) == 29


def test_custom_level_rules():
    rules = ScoringRules(lines_per_level=5, max_level=3)
    assert rules.level_for_lines(4) == 1
    assert rules.level_for_lines(5) == 2
    assert rules.level_for_lines(50) == 3


def test_drop_interval_values():
    assert ScoringRules.drop_interval_ms(1) == pytest.approx(1000.0)
    assert ScoringRules.drop_interval_ms(2) == pytest.approx(793.0)
    assert ScoringRules.drop_interval_ms(3) == pytest.approx(0.786 ** 2 * 1000.0)


def test_drop_interval_strictly_decreases():
    intervals = [ScoringRules.drop_interval_ms(lvl) for lvl in range(1, 30)]
    assert all(a > b for a, b in zip(intervals, intervals[1:]))


def test_drop_interval_clamps_level():
    assert ScoringRules.drop_interval_ms(0) == ScoringRules.drop_interval_ms(1)
    assert ScoringRules.drop_interval_ms(-5) == ScoringRules.drop_interval_ms(1)
    assert ScoringRules.drop_interval_ms(40) == ScoringRules.drop_interval_ms(29)
