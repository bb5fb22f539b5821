"""Configuration management"""
import os
from decimal import Decimal, InvalidOperation
from pathlib import Path
from dotenv import load_dotenv

from levelup.exceptions import ConfigurationError

load_dotenv()

# Storage
DATA_PATH: Path = Path(os.getenv("DATA_PATH", "./data"))

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Timezone used when a user profile has none (IANA name)
DEFAULT_TIMEZONE: str = os.getenv("DEFAULT_TIMEZONE", "UTC")

# Level curve
# - 'geometric' (default): requirement(L) = floor(BASE * FACTOR ** (L - 1))
# - 'linear': requirement(L) = BASE + INCREMENT * (L - 1)
LEVEL_GROWTH_RULE: str = os.getenv("LEVEL_GROWTH_RULE", "geometric").lower()
LEVEL_BASE_EXP: int = int(os.getenv("LEVEL_BASE_EXP", "150"))
LEVEL_SCALING_FACTOR: str = os.getenv("LEVEL_SCALING_FACTOR", "1.15")
LEVEL_LINEAR_INCREMENT: int = int(os.getenv("LEVEL_LINEAR_INCREMENT", "100"))

# Completions
ENFORCE_UNIQUE_DAILY_COMPLETION: bool = os.getenv("ENFORCE_UNIQUE_DAILY_COMPLETION", "true").lower() == "true"


def default_level_curve():
    """Build the level curve described by the LEVEL_* settings"""
    from levelup.gamification.level_curve import LevelCurve

    try:
        factor = Decimal(LEVEL_SCALING_FACTOR)
    except InvalidOperation as e:
        raise ConfigurationError(
            message=f"LEVEL_SCALING_FACTOR is not a number: {LEVEL_SCALING_FACTOR!r}",
            config_key="LEVEL_SCALING_FACTOR",
            cause=e,
        )

    return LevelCurve(
        growth_rule=LEVEL_GROWTH_RULE,
        base_exp=LEVEL_BASE_EXP,
        scaling_factor=factor,
        linear_increment=LEVEL_LINEAR_INCREMENT,
    )


# Validation
def validate_config() -> None:
    """Validate required configuration"""
    if LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigurationError(
            message=f"Unknown LOG_LEVEL: {LOG_LEVEL}",
            config_key="LOG_LEVEL",
        )
    # LevelCurve validates growth rule, base and factor on construction
    default_level_curve()
