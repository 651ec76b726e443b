"""
Configuration — параметры decimal-арифметики и логирования

Единая точка настройки точности для всех интервальных операций:
- precision: число значащих десятичных цифр (decimal64 = 16)
- rounding: режим округления скалярной арифметики (центры fuzzy sets)
- outward_rounding: направленное округление границ интервала наружу
- series_terms: число членов ряда Тейлора по умолчанию

Interval и FuzzySet используют DEFAULT_CONTEXTS, построенные из
конфигурации по умолчанию один раз при импорте. Другие значения
параметров действуют только на контексты, созданные через make_contexts.
"""

import decimal
import logging
from dataclasses import dataclass
from typing import Final

# =============================================================================
# DEFAULTS
# =============================================================================

# Значащие цифры (IEEE 754 decimal64)
PRECISION_DEFAULT: Final[int] = 16

# Число членов ряда для sin/cos/exp
SERIES_TERMS_DEFAULT: Final[int] = 10

# Допустимые режимы округления модуля decimal
ROUNDING_MODES: Final[frozenset[str]] = frozenset(
    {
        decimal.ROUND_CEILING,
        decimal.ROUND_DOWN,
        decimal.ROUND_FLOOR,
        decimal.ROUND_HALF_DOWN,
        decimal.ROUND_HALF_EVEN,
        decimal.ROUND_HALF_UP,
        decimal.ROUND_UP,
        decimal.ROUND_05UP,
    }
)

LOGGER_NAME: Final[str] = "ivarith"
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# =============================================================================
# LOGGING
# =============================================================================


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure and return the package logger (idempotent)."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


# =============================================================================
# ARITHMETIC CONFIG
# =============================================================================


@dataclass(frozen=True)
class ArithmeticConfig:
    """Конфигурация decimal-арифметики.

    - precision: значащие цифры для каждого результата операции
    - rounding: режим округления скалярных операций
    - outward_rounding: True → нижняя граница ROUND_FLOOR, верхняя ROUND_CEILING;
      False → обе границы используют rounding
    - series_terms: число членов ряда Тейлора по умолчанию
    """

    precision: int = PRECISION_DEFAULT
    rounding: str = decimal.ROUND_HALF_EVEN
    outward_rounding: bool = True
    series_terms: int = SERIES_TERMS_DEFAULT

    def __post_init__(self) -> None:
        if self.precision < 1:
            raise ValueError(f"precision must be >= 1, got {self.precision}")
        if self.series_terms < 1:
            raise ValueError(f"series_terms must be >= 1, got {self.series_terms}")
        if self.rounding not in ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {self.rounding}")


def get_default_config() -> ArithmeticConfig:
    """Return default configuration."""
    return ArithmeticConfig()
