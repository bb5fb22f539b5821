"""
EXP and Leveling System

Maps lifetime EXP to a level and the progress inside that level.

Leveling Curve (default, see levelup.config):
- Level 1 -> 2 requires 150 EXP
- Each following level requires 15% more than the previous one,
  rounded down: requirement(L) = floor(150 * 1.15 ** (L - 1))
- A linear curve (base + increment per level) is available through
  LEVEL_GROWTH_RULE=linear

EXP Award Rules:
- Easy goal: 10 EXP
- Medium goal: 25 EXP
- Hard goal: 50 EXP
- Awards are fixed when the completion is recorded
"""

from dataclasses import dataclass
from decimal import Context, Decimal, ROUND_FLOOR
from typing import Iterable, Optional, Tuple, Union
import math

from levelup import config
from levelup.exceptions import ConfigurationError, ValidationError
from levelup.gamification.constants import EXP_BY_DIFFICULTY
from levelup.models import Completion, GoalDifficulty, LevelInfo

GROWTH_GEOMETRIC = "geometric"
GROWTH_LINEAR = "linear"

# Requirements stay exact far beyond any realistic EXP total
_DECIMAL_CONTEXT = Context(prec=40, rounding=ROUND_FLOOR)


@dataclass(frozen=True)
class LevelCurve:
    """Per-level EXP requirement rule"""
    growth_rule: str = GROWTH_GEOMETRIC
    base_exp: int = 150
    scaling_factor: Decimal = Decimal("1.15")
    linear_increment: int = 100

    def __post_init__(self):
        if self.growth_rule not in (GROWTH_GEOMETRIC, GROWTH_LINEAR):
            raise ConfigurationError(
                message=f"Unknown level growth rule: {self.growth_rule}",
                config_key="LEVEL_GROWTH_RULE",
            )
        if self.base_exp < 1:
            raise ConfigurationError(
                message=f"Base EXP must be at least 1, got {self.base_exp}",
                config_key="LEVEL_BASE_EXP",
            )
        if self.growth_rule == GROWTH_GEOMETRIC and not Decimal(self.scaling_factor) >= 1:
            raise ConfigurationError(
                message=f"Scaling factor must be at least 1, got {self.scaling_factor}",
                config_key="LEVEL_SCALING_FACTOR",
            )
        if self.growth_rule == GROWTH_LINEAR and self.linear_increment < 0:
            raise ConfigurationError(
                message=f"Linear increment cannot be negative, got {self.linear_increment}",
                config_key="LEVEL_LINEAR_INCREMENT",
            )

    def requirement(self, level: int) -> int:
        """EXP needed to go from `level` to `level + 1`"""
        terms = self.arithmetic_terms()
        if terms is not None:
            base, increment = terms
            return base + increment * (level - 1)

        scale = _DECIMAL_CONTEXT.power(Decimal(self.scaling_factor), level - 1)
        exp = _DECIMAL_CONTEXT.multiply(Decimal(self.base_exp), scale)
        return int(exp.to_integral_value(rounding=ROUND_FLOOR))

    def arithmetic_terms(self) -> Optional[Tuple[int, int]]:
        """(base, increment) when requirements grow by a fixed step, else None"""
        if self.growth_rule == GROWTH_LINEAR:
            return self.base_exp, self.linear_increment
        if Decimal(self.scaling_factor) == 1:
            return self.base_exp, 0
        return None


def _arithmetic_start(level: int, base: int, increment: int) -> int:
    """Cumulative EXP at which `level` begins on an arithmetic curve"""
    n = level - 1
    return n * base + increment * n * (n - 1) // 2


def _arithmetic_level(total_exp: int, base: int, increment: int) -> int:
    """Highest level whose start is <= total_exp, solved without walking"""
    if increment == 0:
        return total_exp // base + 1

    # Largest n with increment*n^2 + (2*base - increment)*n - 2*total_exp <= 0
    b = 2 * base - increment
    n = (math.isqrt(b * b + 8 * increment * total_exp) - b) // (2 * increment)
    while _arithmetic_start(n + 2, base, increment) <= total_exp:
        n += 1
    while n > 0 and _arithmetic_start(n + 1, base, increment) > total_exp:
        n -= 1
    return n + 1


def _resolve_curve(curve: Optional[LevelCurve]) -> LevelCurve:
    return curve if curve is not None else config.default_level_curve()


def _validate_total_exp(total_exp: Union[int, float]) -> int:
    """Reject negative, fractional, non-finite or non-numeric totals"""
    if isinstance(total_exp, bool) or not isinstance(total_exp, (int, float, Decimal)):
        raise ValidationError(
            message="Experience must be a number",
            field="total_exp",
            value=total_exp,
        )
    if isinstance(total_exp, (float, Decimal)):
        if not math.isfinite(total_exp) or total_exp != int(total_exp):
            raise ValidationError(
                message="Experience must be a finite whole number",
                field="total_exp",
                value=total_exp,
            )
        total_exp = int(total_exp)
    if total_exp < 0:
        raise ValidationError(
            message="Experience cannot be negative",
            field="total_exp",
            value=total_exp,
        )
    return total_exp


def compute_level_info(total_exp: int, curve: Optional[LevelCurve] = None) -> LevelInfo:
    """
    Calculate level and progress from total EXP

    Geometric curves walk the level boundaries iteratively, so very large
    totals cannot exhaust the stack. Linear and flat curves solve for the
    level in closed form.

    Returns:
        LevelInfo(level, total_exp, exp_to_next_level, current_level_exp,
                  progress_percentage, level_start_exp)

    Raises:
        ValidationError: total_exp is negative, fractional or not finite
    """
    total_exp = _validate_total_exp(total_exp)
    curve = _resolve_curve(curve)

    terms = curve.arithmetic_terms()
    if terms is not None:
        level = _arithmetic_level(total_exp, *terms)
        level_start_exp = _arithmetic_start(level, *terms)
        exp_for_next_level = curve.requirement(level)
    else:
        level = 1
        level_start_exp = 0
        exp_for_next_level = curve.requirement(level)

        while total_exp >= level_start_exp + exp_for_next_level:
            level_start_exp += exp_for_next_level
            level += 1
            exp_for_next_level = curve.requirement(level)

    current_level_exp = total_exp - level_start_exp
    progress_percentage = (current_level_exp / exp_for_next_level) * 100 if exp_for_next_level > 0 else 0.0

    return LevelInfo(
        level=level,
        total_exp=total_exp,
        exp_to_next_level=exp_for_next_level,
        current_level_exp=current_level_exp,
        progress_percentage=progress_percentage,
        level_start_exp=level_start_exp,
    )


def exp_for_level(level: int, curve: Optional[LevelCurve] = None) -> int:
    """EXP required to complete `level` (size of that level's bar)"""
    if level < 1:
        raise ValidationError(message="Level must be at least 1", field="level", value=level)
    return _resolve_curve(curve).requirement(level)


def cumulative_exp_for_level(level: int, curve: Optional[LevelCurve] = None) -> int:
    """Lifetime EXP at which `level` begins"""
    if level < 1:
        raise ValidationError(message="Level must be at least 1", field="level", value=level)
    curve = _resolve_curve(curve)
    terms = curve.arithmetic_terms()
    if terms is not None:
        return _arithmetic_start(level, *terms)
    return sum(curve.requirement(lvl) for lvl in range(1, level))


def exp_for_difficulty(difficulty: Union[GoalDifficulty, str]) -> int:
    """EXP awarded for completing a goal of the given difficulty"""
    return EXP_BY_DIFFICULTY[GoalDifficulty(difficulty)]


def total_experience(completions: Iterable[Completion]) -> int:
    """Sum of EXP awarded across a completion history"""
    return sum(c.exp_awarded for c in completions)
