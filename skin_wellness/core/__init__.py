"""
Core Package - Skin Wellness Visualization API
skin_wellness/core/__init__.py

Core infrastructure: exceptions, logging, dependencies, error handlers.
"""

from skin_wellness.core.exceptions import (
    EditorStateError,
    LevelOutOfRangeError,
    RegistryContractError,
    SegmentNotActiveError,
    SkinWellnessException,
    UnknownCategoryError,
    UnknownParameterError,
)

__all__ = [
    "EditorStateError",
    "LevelOutOfRangeError",
    "RegistryContractError",
    "SegmentNotActiveError",
    "SkinWellnessException",
    "UnknownCategoryError",
    "UnknownParameterError",
]
