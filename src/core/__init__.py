"""
Core conversion primitives, value types, and contracts.

This module contains the fixed-point conversion engine: scale factors,
integer/decimal/float conversions with precision-loss detection, and the
nullable scaled-integer value type used at serialization boundaries.
"""
