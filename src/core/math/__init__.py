"""
Core math modules

Конверсии scaled integer ↔ Decimal ↔ float с детекцией потери точности.
"""

# Errors
from src.core.math.precision_errors import (
    InvalidTextError,
    NegativeInputError,
    NullInputError,
    PrecisionError,
    PrecisionErrorKind,
    PrecisionLossError,
    ValueTooLargeError,
)

# Scale Cache
from src.core.math.scale_cache import (
    PREPOPULATED_EXPONENTS,
    ScaleFactor,
    cached_exponents,
    factor,
)

# Integer ↔ Decimal bridge
from src.core.math.decimal_bridge import (
    PRECISION_ANOMALY_REL_THRESHOLD,
    decimal_from_int,
    float_to_scaled,
    float_to_scaled_fast,
    float_to_scaled_percent,
    parse_scaled_int,
    scaled_to_whole_units,
    to_decimal,
)

# Machine-double boundary
from src.core.math.float_boundary import (
    AccuracyClass,
    classify_accuracy,
    decimal_to_float,
    scaled_to_float,
    validate_display_amount,
    validate_scaled_input,
)

# Native units (exponent 18)
from src.core.math.native_units import (
    FAST_PATH_MAX_NATIVE_UNITS,
    MAX_SAFE_NATIVE_UNITS,
    NATIVE_UNITS_EXPONENT,
    OPTIMIZED_DISPLAY_FLOOR,
    STABLE_UNITS_EXPONENT,
    ConversionMode,
    display_to_natural_units,
    float_to_native_units,
    float_to_stable_units,
    float_to_stable_units_percent,
    natural_units_to_display,
    natural_units_to_display_balanced,
    natural_units_to_display_optimized,
    natural_units_to_display_safe,
    stable_units_to_whole,
)

# Display formatting
from src.core.math.display_format import FORMAT_MAX_DIGITS, format_scaled

__all__ = [
    # Errors
    "InvalidTextError",
    "NegativeInputError",
    "NullInputError",
    "PrecisionError",
    "PrecisionErrorKind",
    "PrecisionLossError",
    "ValueTooLargeError",
    # Scale Cache
    "PREPOPULATED_EXPONENTS",
    "ScaleFactor",
    "cached_exponents",
    "factor",
    # Decimal bridge
    "PRECISION_ANOMALY_REL_THRESHOLD",
    "decimal_from_int",
    "float_to_scaled",
    "float_to_scaled_fast",
    "float_to_scaled_percent",
    "parse_scaled_int",
    "scaled_to_whole_units",
    "to_decimal",
    # Float boundary
    "AccuracyClass",
    "classify_accuracy",
    "decimal_to_float",
    "scaled_to_float",
    "validate_display_amount",
    "validate_scaled_input",
    # Native units: Constants
    "FAST_PATH_MAX_NATIVE_UNITS",
    "MAX_SAFE_NATIVE_UNITS",
    "NATIVE_UNITS_EXPONENT",
    "OPTIMIZED_DISPLAY_FLOOR",
    "STABLE_UNITS_EXPONENT",
    # Native units: Types
    "ConversionMode",
    # Native units: Functions
    "display_to_natural_units",
    "float_to_native_units",
    "float_to_stable_units",
    "float_to_stable_units_percent",
    "natural_units_to_display",
    "natural_units_to_display_balanced",
    "natural_units_to_display_optimized",
    "natural_units_to_display_safe",
    "stable_units_to_whole",
    # Display formatting
    "FORMAT_MAX_DIGITS",
    "format_scaled",
]
