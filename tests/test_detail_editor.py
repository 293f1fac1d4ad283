# tests/test_detail_editor.py

"""
Category Detail Editor Tests - state machine, editing, gated close and save
"""

import pytest
from pydantic import ValidationError

from skin_wellness.core.exceptions import (
    EditorStateError,
    UnknownCategoryError,
    UnknownParameterError,
)
from skin_wellness.editor.detail_editor import CLOSE_DISABLED_TOOLTIP, CategoryDetailEditor
from skin_wellness.models.category import CategoryAssessment
from skin_wellness.models.enumerations import CloseSource, EditorState
from skin_wellness.scoring.parameter_catalog import default_parameters


class Recorder:

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)


@pytest.fixture
def level_calls():
    return Recorder()


@pytest.fixture
def detail_calls():
    return Recorder()


@pytest.fixture
def editor(level_calls, detail_calls):
    return CategoryDetailEditor(
        on_level_committed=level_calls,
        on_details_committed=detail_calls,
    )


@pytest.fixture
def open_editor(editor, blemish_assessment):
    editor.open("blemishes", blemish_assessment)
    return editor


def _scores(editor):
    return {p.key: p.score_value for p in editor.parameters}


# =============================================================================
# OPEN
# =============================================================================

class TestOpen:

    def test_starts_closed(self, editor):
        assert editor.state == EditorState.CLOSED
        assert editor.level is None
        assert editor.parameters == []
        assert not editor.has_changes()

    def test_open_takes_snapshot(self, open_editor, blemish_assessment):
        assert open_editor.state == EditorState.OPEN
        assert open_editor.category_id == "blemishes"
        assert open_editor.level == 2
        assert open_editor.snapshot.parameters == blemish_assessment.parameters
        assert not open_editor.has_changes()
        assert open_editor.can_close
        assert open_editor.close_tooltip is None

    def test_open_without_parameters_uses_template(self, editor):
        editor.open("blemishes", CategoryAssessment(category_id="blemishes", visibility_level=0))
        template = default_parameters("blemishes")
        assert editor.parameters == template
        assert editor.snapshot.parameters == template
        assert all(p.score_value == 1 for p in editor.parameters)
        assert not editor.has_changes()

    def test_template_excludes_hidden_parameters(self, editor):
        editor.open("redness", CategoryAssessment(category_id="redness", visibility_level=3))
        assert "is_psoriasis" not in _scores(editor)
        assert "is_rosacea" in _scores(editor)

    def test_open_twice_rejected(self, open_editor, blemish_assessment):
        with pytest.raises(EditorStateError):
            open_editor.open("blemishes", blemish_assessment)

    def test_open_unknown_category(self, editor):
        with pytest.raises(UnknownCategoryError):
            editor.open("moles", CategoryAssessment(category_id="moles", visibility_level=1))

    def test_open_mismatched_assessment(self, editor, blemish_assessment):
        with pytest.raises(ValueError):
            editor.open("tone", blemish_assessment)
        assert editor.state == EditorState.CLOSED

    def test_external_assessment_not_mutated(self, open_editor, blemish_assessment):
        open_editor.select_option("cysts", 4)
        open_editor.set_level(9)
        assert blemish_assessment.visibility_level == 2
        assert blemish_assessment.parameters[4].score_value == 1


# =============================================================================
# EDITING
# =============================================================================

class TestEditing:

    def test_select_option_reaggregates(self, open_editor):
        """3, 4, 2, 1, 1 on 1..4 -> mean 0.4 -> 4."""
        assert open_editor.select_option("pustules", 4) == 4
        assert open_editor.level == 4
        assert _scores(open_editor)["pustules"] == 4

    def test_baseline_kept_when_scored(self, open_editor):
        open_editor.select_option("pustules", 4)
        pustules = next(p for p in open_editor.parameters if p.key == "pustules")
        assert pustules.baseline_score_value == 1

    def test_set_level_leaves_parameters(self, open_editor):
        before = _scores(open_editor)
        assert open_editor.set_level(9) == 9
        assert _scores(open_editor) == before

    @pytest.mark.parametrize("requested,expected", [(15, 10), (-2, 0), (10, 10), (0, 0)])
    def test_set_level_clamps(self, open_editor, requested, expected):
        assert open_editor.set_level(requested) == expected

    def test_parameter_edit_overrides_slider(self, open_editor):
        open_editor.set_level(9)
        assert open_editor.select_option("comedones", 1) == 1

    def test_unknown_parameter(self, open_editor):
        with pytest.raises(UnknownParameterError):
            open_editor.select_option("melasma", 2)

    def test_score_above_scale_rejected(self, open_editor):
        with pytest.raises(ValidationError):
            open_editor.select_option("pustules", 5)
        assert _scores(open_editor)["pustules"] == 1
        assert open_editor.level == 2

    def test_toggle_parameter(self, open_editor):
        assert open_editor.toggle_parameter("papules") == "papules"
        assert open_editor.toggle_parameter("cysts") == "cysts"
        assert open_editor.toggle_parameter("cysts") is None

    def test_toggle_unknown_parameter(self, open_editor):
        with pytest.raises(UnknownParameterError):
            open_editor.toggle_parameter("melasma")

    def test_editing_requires_open(self, editor):
        with pytest.raises(EditorStateError):
            editor.select_option("pustules", 2)
        with pytest.raises(EditorStateError):
            editor.set_level(3)
        with pytest.raises(EditorStateError):
            editor.save()
        with pytest.raises(EditorStateError):
            editor.cancel()


# =============================================================================
# CHANGE TRACKING AND GATED CLOSE
# =============================================================================

class TestGatedClose:

    def test_level_change_is_a_change(self, open_editor):
        open_editor.set_level(5)
        assert open_editor.has_changes()

    def test_parameter_change_is_a_change(self, open_editor):
        """Swapping two scores keeps the level but still counts."""
        open_editor.select_option("comedones", 1)
        open_editor.select_option("pustules", 3)
        assert open_editor.level == 2
        assert open_editor.has_changes()

    def test_reverting_clears_changes(self, open_editor):
        open_editor.select_option("pustules", 4)
        open_editor.select_option("pustules", 1)
        assert not open_editor.has_changes()

    @pytest.mark.parametrize("source", [CloseSource.ICON, CloseSource.BACKDROP])
    def test_close_blocked_while_dirty(self, open_editor, detail_calls, source):
        open_editor.set_level(7)
        assert open_editor.request_close(source) is False
        assert open_editor.state == EditorState.OPEN
        assert not open_editor.can_close
        assert open_editor.close_tooltip == CLOSE_DISABLED_TOOLTIP
        assert detail_calls.calls == []

    def test_close_when_clean(self, open_editor, level_calls, detail_calls):
        assert open_editor.request_close(CloseSource.BACKDROP) is True
        assert open_editor.state == EditorState.CLOSED
        assert open_editor.last_outcome == EditorState.CANCELLED
        assert level_calls.calls == [] and detail_calls.calls == []


# =============================================================================
# SAVE / CANCEL
# =============================================================================

class TestSaveAndCancel:

    def test_save_with_level_change(self, open_editor, level_calls, detail_calls):
        open_editor.select_option("pustules", 4)
        open_editor.save()
        assert level_calls.calls == [("blemishes", 4)]
        assert len(detail_calls.calls) == 1
        category_id, params = detail_calls.calls[0]
        assert category_id == "blemishes"
        assert {p.key: p.score_value for p in params}["pustules"] == 4
        assert open_editor.state == EditorState.CLOSED
        assert open_editor.last_outcome == EditorState.SAVED

    def test_save_without_level_change(self, open_editor, level_calls, detail_calls):
        open_editor.select_option("comedones", 1)
        open_editor.select_option("pustules", 3)
        open_editor.save()
        assert level_calls.calls == []
        assert len(detail_calls.calls) == 1

    def test_save_unchanged_still_commits_details(self, open_editor, level_calls, detail_calls):
        open_editor.save()
        assert level_calls.calls == []
        assert len(detail_calls.calls) == 1

    def test_save_tears_down_when_callback_fails(self, blemish_assessment):
        def boom(category_id, parameters):
            raise RuntimeError("persist failed")

        editor = CategoryDetailEditor(on_details_committed=boom)
        editor.open("blemishes", blemish_assessment)
        with pytest.raises(RuntimeError):
            editor.save()
        assert editor.state == EditorState.CLOSED
        assert editor.working is None

    def test_save_without_callbacks(self, blemish_assessment):
        editor = CategoryDetailEditor()
        editor.open("blemishes", blemish_assessment)
        editor.set_level(6)
        editor.save()
        assert editor.state == EditorState.CLOSED

    def test_cancel_discards(self, open_editor, level_calls, detail_calls, blemish_assessment):
        open_editor.select_option("cysts", 4)
        open_editor.cancel()
        assert open_editor.state == EditorState.CLOSED
        assert open_editor.last_outcome == EditorState.CANCELLED
        assert level_calls.calls == [] and detail_calls.calls == []
        assert blemish_assessment.visibility_level == 2

    def test_reopen_after_save(self, open_editor, blemish_assessment):
        open_editor.save()
        open_editor.open("blemishes", blemish_assessment)
        assert open_editor.state == EditorState.OPEN
        assert not open_editor.has_changes()


# =============================================================================
# PREVIEW
# =============================================================================

class TestPreview:

    def test_preview_substitutes_working_copy(self, open_editor, sample_assessments):
        open_editor.set_level(9)
        preview = open_editor.preview(sample_assessments)
        assert len(preview) == len(sample_assessments)
        blemishes = next(a for a in preview if a.category_id == "blemishes")
        assert blemishes.visibility_level == 9
        assert len(blemishes.parameters) == 5

    def test_preview_closed_returns_input(self, editor, sample_assessments):
        assert editor.preview(sample_assessments) == sample_assessments

    def test_preview_appends_missing(self, open_editor):
        preview = open_editor.preview([])
        assert [a.category_id for a in preview] == ["blemishes"]
