"""Unit tests for the EXP and Leveling System (levelup/gamification/level_curve.py)

The level curve is a configuration choice: these tests pin the default
geometric curve (150 EXP for level 1, +15% per level, rounded down) and the
alternative linear curve (2500 EXP, +100 per level).
"""
import pytest
from decimal import Decimal

from levelup import config
from levelup.exceptions import ConfigurationError, ValidationError
from levelup.gamification.level_curve import (
    LevelCurve,
    compute_level_info,
    cumulative_exp_for_level,
    exp_for_difficulty,
    exp_for_level,
    total_experience,
)
from levelup.models import GoalDifficulty


# ============================================================================
# Geometric Curve
# ============================================================================

def test_zero_exp_is_level_1(geometric_curve):
    """Test level 1 with 0 EXP"""
    result = compute_level_info(0, geometric_curve)

    assert result.level == 1
    assert result.total_exp == 0
    assert result.current_level_exp == 0
    assert result.exp_to_next_level == 150
    assert result.progress_percentage == 0
    assert result.level_start_exp == 0


def test_geometric_requirements(geometric_curve):
    """Each level needs 15% more than the previous, rounded down"""
    assert [geometric_curve.requirement(level) for level in range(1, 6)] == [150, 172, 198, 228, 262]


def test_level_boundaries(geometric_curve):
    """Test values on either side of the first few level-ups"""
    result = compute_level_info(149, geometric_curve)
    assert result.level == 1
    assert result.current_level_exp == 149

    result = compute_level_info(150, geometric_curve)
    assert result.level == 2
    assert result.current_level_exp == 0
    assert result.exp_to_next_level == 172
    assert result.level_start_exp == 150

    result = compute_level_info(321, geometric_curve)
    assert result.level == 2
    assert result.current_level_exp == 171

    result = compute_level_info(322, geometric_curve)
    assert result.level == 3
    assert result.exp_to_next_level == 198

    result = compute_level_info(1009, geometric_curve)
    assert result.level == 5
    assert result.current_level_exp == 261

    assert compute_level_info(1010, geometric_curve).level == 6


def test_progress_percentage(geometric_curve):
    """Test progress is the share of the current level's bar"""
    assert compute_level_info(75, geometric_curve).progress_percentage == pytest.approx(50.0)
    assert compute_level_info(150 + 43, geometric_curve).progress_percentage == pytest.approx(25.0)


@pytest.mark.parametrize("total_exp", list(range(0, 6000, 37)) + [10 ** 6, 10 ** 12])
def test_level_invariants(geometric_curve, total_exp):
    """Level >= 1 and total sits inside the current level's bounds"""
    result = compute_level_info(total_exp, geometric_curve)

    assert result.level >= 1
    assert 0 <= result.current_level_exp < result.exp_to_next_level
    assert result.level_start_exp <= total_exp < result.level_start_exp + result.exp_to_next_level
    assert result.current_level_exp == total_exp - result.level_start_exp
    assert 0 <= result.progress_percentage < 100


def test_level_start_matches_cumulative_threshold(geometric_curve):
    """Test level_start_exp equals the cumulative requirement of earlier levels"""
    for total_exp in (0, 150, 500, 2500, 12345):
        result = compute_level_info(total_exp, geometric_curve)
        assert result.level_start_exp == cumulative_exp_for_level(result.level, geometric_curve)


def test_level_is_monotonic(geometric_curve):
    """Test more EXP never means a lower level"""
    levels = [compute_level_info(exp, geometric_curve).level for exp in range(0, 5000, 7)]
    assert levels == sorted(levels)


def test_very_large_values(geometric_curve):
    """Test very large totals neither overflow nor recurse"""
    total_exp = 10 ** 200
    result = compute_level_info(total_exp, geometric_curve)

    assert result.level > 1000
    assert result.level_start_exp <= total_exp < result.level_start_exp + result.exp_to_next_level


def test_whole_float_is_accepted(geometric_curve):
    """Test an integral float is treated as the same integer"""
    result = compute_level_info(160.0, geometric_curve)
    assert result.level == 2
    assert result.total_exp == 160


def test_idempotent(geometric_curve):
    """Test repeated calls give identical output"""
    assert compute_level_info(4321, geometric_curve) == compute_level_info(4321, geometric_curve)


# ============================================================================
# Rejected Input
# ============================================================================

@pytest.mark.parametrize("bad_value", [-1, -100, float("nan"), float("inf"), 12.5, True, "100", None])
def test_invalid_exp_rejected(geometric_curve, bad_value):
    """Test negative, fractional, non-finite and non-numeric totals raise"""
    with pytest.raises(ValidationError) as exc_info:
        compute_level_info(bad_value, geometric_curve)

    assert exc_info.value.field == "total_exp"


# ============================================================================
# Linear Curve
# ============================================================================

def test_linear_curve(linear_curve):
    """Test the linear curve adds a fixed increment per level"""
    assert [linear_curve.requirement(level) for level in range(1, 4)] == [2500, 2600, 2700]

    result = compute_level_info(2500, linear_curve)
    assert result.level == 2
    assert result.exp_to_next_level == 2600

    assert compute_level_info(5099, linear_curve).level == 2
    assert compute_level_info(5100, linear_curve).level == 3


@pytest.mark.parametrize("curve", [
    LevelCurve(growth_rule="linear", base_exp=2500, linear_increment=100),
    LevelCurve(growth_rule="linear", base_exp=10, linear_increment=0),
    LevelCurve(growth_rule="linear", base_exp=1, linear_increment=7),
    LevelCurve(growth_rule="geometric", base_exp=150, scaling_factor=Decimal("1")),
])
def test_arithmetic_curves_match_boundary_walk(curve):
    """Test closed-form levels agree with accumulating requirements one by one"""
    boundaries = [0]
    for level in range(1, 60):
        boundaries.append(boundaries[-1] + curve.requirement(level))

    for total_exp in list(range(0, 3000, 13)) + [b - 1 for b in boundaries[1:]] + boundaries:
        result = compute_level_info(total_exp, curve)
        expected = max(i for i, start in enumerate(boundaries) if start <= total_exp) + 1
        assert result.level == expected
        assert result.level_start_exp == boundaries[expected - 1]


def test_linear_curve_very_large_total(linear_curve):
    """Test a huge total on the linear curve resolves without walking every level"""
    total_exp = 10 ** 20
    result = compute_level_info(total_exp, linear_curve)

    assert result.level > 1_000_000_000
    assert result.level_start_exp == cumulative_exp_for_level(result.level, linear_curve)
    assert result.level_start_exp <= total_exp < result.level_start_exp + result.exp_to_next_level
    assert result.exp_to_next_level == 2500 + 100 * (result.level - 1)


def test_flat_geometric_curve_very_large_total():
    """Test a scaling factor of 1 gives a constant requirement per level"""
    curve = LevelCurve(growth_rule="geometric", base_exp=150, scaling_factor=Decimal("1"))
    total_exp = 10 ** 18 + 7

    result = compute_level_info(total_exp, curve)

    assert result.level == total_exp // 150 + 1
    assert result.exp_to_next_level == 150
    assert result.current_level_exp == total_exp % 150


# ============================================================================
# Curve Configuration
# ============================================================================

@pytest.mark.parametrize("kwargs,config_key", [
    ({"growth_rule": "cubic"}, "LEVEL_GROWTH_RULE"),
    ({"base_exp": 0}, "LEVEL_BASE_EXP"),
    ({"scaling_factor": Decimal("0.9")}, "LEVEL_SCALING_FACTOR"),
    ({"growth_rule": "linear", "linear_increment": -1}, "LEVEL_LINEAR_INCREMENT"),
])
def test_invalid_curve_rejected(kwargs, config_key):
    """Test curves that would not be non-decreasing are refused"""
    with pytest.raises(ConfigurationError) as exc_info:
        LevelCurve(**kwargs)

    assert exc_info.value.config_key == config_key


def test_default_curve_comes_from_config(monkeypatch):
    """Test compute_level_info uses the configured curve when none is passed"""
    monkeypatch.setattr(config, "LEVEL_GROWTH_RULE", "geometric")
    monkeypatch.setattr(config, "LEVEL_BASE_EXP", 150)
    monkeypatch.setattr(config, "LEVEL_SCALING_FACTOR", "1.15")
    assert compute_level_info(150).level == 2

    monkeypatch.setattr(config, "LEVEL_GROWTH_RULE", "linear")
    monkeypatch.setattr(config, "LEVEL_BASE_EXP", 2500)
    monkeypatch.setattr(config, "LEVEL_LINEAR_INCREMENT", 100)
    result = compute_level_info(150)
    assert result.level == 1
    assert result.exp_to_next_level == 2500


# ============================================================================
# Helpers
# ============================================================================

def test_exp_for_level(geometric_curve):
    assert exp_for_level(1, geometric_curve) == 150
    assert exp_for_level(3, geometric_curve) == 198

    with pytest.raises(ValidationError):
        exp_for_level(0, geometric_curve)


def test_cumulative_exp_for_level(geometric_curve):
    assert cumulative_exp_for_level(1, geometric_curve) == 0
    assert cumulative_exp_for_level(2, geometric_curve) == 150
    assert cumulative_exp_for_level(4, geometric_curve) == 520


def test_exp_for_difficulty():
    """Test EXP awards per difficulty tier"""
    assert exp_for_difficulty(GoalDifficulty.EASY) == 10
    assert exp_for_difficulty(GoalDifficulty.MEDIUM) == 25
    assert exp_for_difficulty("hard") == 50


def test_total_experience(completion_factory):
    """Test EXP is summed from the stored awards"""
    completions = [
        completion_factory(exp_awarded=10),
        completion_factory(exp_awarded=50),
        completion_factory(exp_awarded=25),
    ]
    assert total_experience(completions) == 85
    assert total_experience([]) == 0
