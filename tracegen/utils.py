"""
Utility Functions for GPS Trace Synthesis

This module provides unit conversion helpers used when turning configured
speeds into interpolation step sizes and sentence fields.
"""

from . import constants


def kmph_to_mps(kmph: float) -> float:
    """
    Convert a speed from kilometres per hour to metres per second.
    
    Args:
        kmph: Speed in km/h.
        
    Returns:
        Speed in m/s.
    """
    return kmph / constants.KMPH_PER_MPS


def kmph_to_knots(kmph: float) -> float:
    """
    Convert a speed from kilometres per hour to knots.
    
    Args:
        kmph: Speed in km/h.
        
    Returns:
        Speed in knots.
    """
    return kmph / constants.KMPH_PER_KNOT


def mps_to_knots(mps: float) -> float:
    """Convert m/s to knots using the factor the vehicle fixes are reported with."""
    return mps * constants.KNOTS_PER_MPS
