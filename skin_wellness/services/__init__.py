"""
Services module for the skin wellness engine.
"""

from skin_wellness.services.analysis_mapping import parse_diagnostic, parse_diagnostic_response
from skin_wellness.services.validation_diff import compute_modifications

__all__ = [
    "compute_modifications",
    "parse_diagnostic",
    "parse_diagnostic_response",
]
