# sensornode/float32.py
"""IEEE-754 binary32 decoding from a raw 32-bit integer."""

from __future__ import annotations

import math

_SIGN_BIT = 1 << 31
_EXP_MASK = 0xFF
_SIG_MASK = (1 << 23) - 1
_EXP_BIAS = 127


def decode_float32(bits: int) -> float:
    """
    Rebuild a single-precision float from its bit pattern.

      sign     = bit 31
      exponent = bits 30..23 (bias 127)
      fraction = bits 22..0

    Exponent 255 is ±inf (fraction 0) or NaN, exponent 0 is zero/subnormal.
    """
    bits &= 0xFFFFFFFF
    sign = -1.0 if bits & _SIGN_BIT else 1.0
    exp = (bits >> 23) & _EXP_MASK
    sig = bits & _SIG_MASK

    if exp == _EXP_MASK:
        return math.copysign(math.nan if sig else math.inf, sign)
    if exp == 0:
        # subnormal: 0.fraction * 2^-126
        return math.copysign(math.ldexp(sig, -126 - 23), sign)
    return math.copysign(math.ldexp(sig | (1 << 23), exp - _EXP_BIAS - 23), sign)

