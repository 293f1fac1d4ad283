# skin_wellness/editor/detail_editor.py
"""
Category Detail Editor
----------------------
Modal editor for one category's parameter scores and aggregate level.

State machine:

    CLOSED ──open()──▶ OPEN ──save()────▶ SAVED ─────▶ CLOSED
                        │
                        └──cancel() / request_close()──▶ CANCELLED ──▶ CLOSED

Closing through the X icon or the backdrop is guarded by has_changes(): while
the working copy differs from the snapshot taken at open time, the close
request is refused and the editor stays OPEN.

Save fires on_level_committed (only when the level changed) and
on_details_committed (always), then tears down to CLOSED even if a callback
raises. Nothing is awaited.
"""
import structlog
from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence

from skin_wellness.core.exceptions import (
    EditorStateError,
    UnknownParameterError,
)
from skin_wellness.models.category import CategoryAssessment, EditorSnapshot, ParameterScore
from skin_wellness.models.enumerations import CloseSource, EditorState
from skin_wellness.scoring.aggregator import ScoreAggregator
from skin_wellness.scoring.category_registry import CATEGORY_REGISTRY, CategoryRegistry
from skin_wellness.scoring.parameter_catalog import default_parameters
from skin_wellness.scoring.utils import clamp_level

logger = structlog.get_logger(__name__)

LevelCommittedCallback = Callable[[str, int], None]
DetailsCommittedCallback = Callable[[str, List[ParameterScore]], None]

CLOSE_DISABLED_TOOLTIP = "You have unsaved changes. Save or cancel to close."

_TRANSITIONS: Dict[EditorState, FrozenSet[EditorState]] = {
    EditorState.CLOSED:    frozenset({EditorState.OPEN}),
    EditorState.OPEN:      frozenset({EditorState.SAVED, EditorState.CANCELLED}),
    EditorState.SAVED:     frozenset({EditorState.CLOSED}),
    EditorState.CANCELLED: frozenset({EditorState.CLOSED}),
}


@dataclass
class WorkingCopy:
    """
    Mutable editing state behind the modal.

    The two setters are intentionally one-directional:
      apply_parameter_score  replaces one parameter and re-derives the level
      set_level              overrides the level and never touches parameters
    The slider is a coarse override and may disagree with what the parameters
    would aggregate to. Do not make set_level reach back into the parameters.
    """
    category_id: str
    visibility_level: int
    parameters: List[ParameterScore] = field(default_factory=list)

    def apply_parameter_score(
        self, key: str, score_value: int, aggregator: ScoreAggregator
    ) -> int:
        for i, param in enumerate(self.parameters):
            if param.key == key:
                self.parameters[i] = param.with_score(score_value)
                break
        else:
            raise UnknownParameterError(self.category_id, key)

        self.visibility_level = aggregator.aggregate(self.parameters)
        return self.visibility_level

    def set_level(self, level: int) -> int:
        self.visibility_level = clamp_level(level)
        return self.visibility_level

    def to_assessment(self) -> CategoryAssessment:
        return CategoryAssessment(
            category_id=self.category_id,
            visibility_level=self.visibility_level,
            parameters=list(self.parameters),
        )


class CategoryDetailEditor:
    """
    Usage:
        editor = CategoryDetailEditor(
            on_level_committed=lambda cid, lvl: ...,
            on_details_committed=lambda cid, params: ...,
        )
        editor.open("blemishes", assessment)
        editor.select_option("pustules", 3)
        editor.save()
    """

    def __init__(
        self,
        registry: CategoryRegistry = CATEGORY_REGISTRY,
        aggregator: Optional[ScoreAggregator] = None,
        on_level_committed: Optional[LevelCommittedCallback] = None,
        on_details_committed: Optional[DetailsCommittedCallback] = None,
    ):
        self.registry = registry
        self.aggregator = aggregator or ScoreAggregator()
        self.on_level_committed = on_level_committed
        self.on_details_committed = on_details_committed

        self._state = EditorState.CLOSED
        self._snapshot: Optional[EditorSnapshot] = None
        self._working: Optional[WorkingCopy] = None
        self.expanded_parameter: Optional[str] = None
        self.last_outcome: Optional[EditorState] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state == EditorState.OPEN

    @property
    def category_id(self) -> Optional[str]:
        return self._working.category_id if self._working else None

    @property
    def snapshot(self) -> Optional[EditorSnapshot]:
        return self._snapshot

    @property
    def working(self) -> Optional[WorkingCopy]:
        return self._working

    @property
    def level(self) -> Optional[int]:
        return self._working.visibility_level if self._working else None

    @property
    def parameters(self) -> List[ParameterScore]:
        return list(self._working.parameters) if self._working else []

    def _transition(self, target: EditorState) -> None:
        if target not in _TRANSITIONS[self._state]:
            raise EditorStateError(
                f"Illegal editor transition {self._state.value} -> {target.value}"
            )
        self._state = target

    def _require_open(self) -> WorkingCopy:
        if self._state != EditorState.OPEN or self._working is None:
            raise EditorStateError(f"Editor is {self._state.value}, expected open")
        return self._working

    # ------------------------------------------------------------------
    # Open
    # ------------------------------------------------------------------

    def open(self, category_id: str, assessment: CategoryAssessment) -> WorkingCopy:
        self.registry.get(category_id)
        if assessment.category_id != category_id:
            raise ValueError(
                f"Assessment is for '{assessment.category_id}', not '{category_id}'"
            )
        self._transition(EditorState.OPEN)

        parameters = list(assessment.parameters) or default_parameters(category_id)
        self._snapshot = EditorSnapshot(
            category_id=category_id,
            visibility_level=assessment.visibility_level,
            parameters=parameters,
        )
        self._working = WorkingCopy(
            category_id=category_id,
            visibility_level=assessment.visibility_level,
            parameters=list(parameters),
        )
        self.expanded_parameter = None

        logger.info(
            "detail_editor_opened",
            category_id=category_id,
            level=assessment.visibility_level,
            parameter_count=len(parameters),
            from_template=not assessment.parameters,
        )
        return self._working

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def select_option(self, key: str, score_value: int) -> int:
        """Score one parameter; the aggregate level follows immediately."""
        working = self._require_open()
        level = working.apply_parameter_score(key, score_value, self.aggregator)
        logger.debug(
            "parameter_scored",
            category_id=working.category_id,
            key=key,
            score_value=score_value,
            level=level,
        )
        return level

    def set_level(self, level: int) -> int:
        """Manual slider override; parameters are left as they are."""
        return self._require_open().set_level(level)

    def toggle_parameter(self, key: str) -> Optional[str]:
        """Expand one parameter's option list; toggling it again collapses it."""
        working = self._require_open()
        if not any(p.key == key for p in working.parameters):
            raise UnknownParameterError(working.category_id, key)
        self.expanded_parameter = None if self.expanded_parameter == key else key
        return self.expanded_parameter

    def has_changes(self) -> bool:
        if self._state != EditorState.OPEN or self._working is None:
            return False
        snap, work = self._snapshot, self._working
        if work.visibility_level != snap.visibility_level:
            return True
        if len(work.parameters) != len(snap.parameters):
            return True
        return any(
            w.score_value != s.score_value
            for w, s in zip(work.parameters, snap.parameters)
        )

    @property
    def can_close(self) -> bool:
        return self.is_open and not self.has_changes()

    @property
    def close_tooltip(self) -> Optional[str]:
        return CLOSE_DISABLED_TOOLTIP if self.has_changes() else None

    # ------------------------------------------------------------------
    # Leaving the editor
    # ------------------------------------------------------------------

    def request_close(self, source: CloseSource = CloseSource.ICON) -> bool:
        """X icon or backdrop. Refused while there are unsaved changes."""
        self._require_open()
        if self.has_changes():
            logger.info(
                "detail_editor_close_blocked",
                category_id=self.category_id,
                source=CloseSource(source).value,
            )
            return False
        self.cancel()
        return True

    def save(self) -> None:
        working = self._require_open()
        snapshot = self._snapshot
        self._transition(EditorState.SAVED)

        category_id = working.category_id
        level = working.visibility_level
        parameters = list(working.parameters)
        level_changed = level != snapshot.visibility_level

        logger.info(
            "detail_editor_saved",
            category_id=category_id,
            level=level,
            level_changed=level_changed,
        )
        try:
            if level_changed and self.on_level_committed:
                self.on_level_committed(category_id, level)
            if self.on_details_committed:
                self.on_details_committed(category_id, parameters)
        finally:
            self._teardown(EditorState.SAVED)

    def cancel(self) -> None:
        working = self._require_open()
        self._transition(EditorState.CANCELLED)
        logger.info("detail_editor_cancelled", category_id=working.category_id)
        self._teardown(EditorState.CANCELLED)

    def _teardown(self, outcome: EditorState) -> None:
        self._snapshot = None
        self._working = None
        self.expanded_parameter = None
        self.last_outcome = outcome
        self._transition(EditorState.CLOSED)

    # ------------------------------------------------------------------
    # Live preview
    # ------------------------------------------------------------------

    def preview(self, assessments: Sequence[CategoryAssessment]) -> List[CategoryAssessment]:
        """Assessments with the working copy substituted, for live chart re-render."""
        if not self.is_open:
            return list(assessments)
        working = self._working.to_assessment()
        result: List[CategoryAssessment] = []
        replaced = False
        for assessment in assessments:
            if assessment.category_id == working.category_id:
                result.append(working)
                replaced = True
            else:
                result.append(assessment)
        if not replaced:
            result.append(working)
        return result
