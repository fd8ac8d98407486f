#!/usr/bin/env python3
"""
General utilities for the Solar System Formation Simulator.
"""
from typing import Optional


def try_float(val) -> Optional[float]:
    if isinstance(val, bool):
        return None
    try:
        return float(val)
    except (TypeError, ValueError):
        return None


def try_int(val) -> Optional[int]:
    """Parse typed digits (e.g. the particle-count text box); None if not a whole number."""
    f = try_float(val.strip() if isinstance(val, str) else val)
    if f is None or f != f or f in (float("inf"), float("-inf")):
        return None
    return int(round(f))
