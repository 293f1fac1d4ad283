"""
Custom Exceptions - Skin Wellness Engine
skin_wellness/core/exceptions.py

Contract-violation exceptions for the visualization and editing core.
These are programmer errors: they are raised loudly, never clamped away.
"""


class SkinWellnessException(Exception):
    """Base exception for the skin wellness core."""

    pass


class UnknownCategoryError(SkinWellnessException):
    """Category id is not part of the compiled-in registry."""

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Category with ID {category_id!r} is not registered")


class UnknownParameterError(SkinWellnessException):
    """Parameter key does not exist in the category being edited."""

    def __init__(self, category_id: str, parameter_key: str):
        self.category_id = category_id
        self.parameter_key = parameter_key
        super().__init__(
            f"Parameter {parameter_key!r} does not belong to category {category_id!r}"
        )


class LevelOutOfRangeError(SkinWellnessException):
    """Visibility level outside the 0-10 scale."""

    def __init__(self, level):
        self.level = level
        super().__init__(f"Visibility level must be an integer in [0, 10], got {level!r}")


class RegistryContractError(SkinWellnessException):
    """Category registry (or a geometry input derived from it) is malformed."""

    def __init__(self, message: str = "Category registry contract violated"):
        self.message = message
        super().__init__(message)


class SegmentNotActiveError(SkinWellnessException):
    """Level adjustment requested for a segment that is not the active one."""

    def __init__(self, category_id: str, active_category_id):
        self.category_id = category_id
        self.active_category_id = active_category_id
        super().__init__(
            f"Cannot adjust {category_id!r}: active segment is {active_category_id!r}"
        )


class EditorStateError(SkinWellnessException):
    """Operation not allowed in the editor's current state."""

    def __init__(self, message: str = "Illegal editor state transition"):
        self.message = message
        super().__init__(message)
