"""Tests for the browser app state and its store."""

import pytest
from pydantic import ValidationError

from humansort.models import RankingState
from humansort.ranking import DuplicateItem, InsufficientItems, UnknownItem
from humansort.web import (
    AddItem,
    AppState,
    AppStateStore,
    AppView,
    ChangeView,
    RemoveItem,
    RenameItem,
    SelectPreference,
    SetBatchSize,
    parse_action,
)


@pytest.fixture
def app_state(judged_state) -> AppState:
    """App state on the input view holding the judged items."""
    return AppState(humansort_state=judged_state)


def values(state: AppState) -> list[str]:
    return [item.value for item in state.humansort_state.items]


class TestReduce:
    """Tests for applying actions."""

    def test_default_state(self):
        """A new app starts on the input view with no items."""
        state = AppState()

        assert state.current_view == AppView.INPUT
        assert state.humansort_state.items == []
        assert state.can_sort is False

    def test_add_item(self, app_state):
        """Added items start at 0.0 and are sorted in."""
        new_state = app_state.reduce(AddItem(name="D"))

        assert values(new_state) == ["B", "D", "A", "C"]

    def test_add_strips_and_ignores_blank(self, app_state):
        """Blank names are ignored and names are trimmed."""
        assert values(app_state.reduce(AddItem(name="   "))) == ["B", "A", "C"]
        assert "D" in app_state.reduce(AddItem(name="  D ")).humansort_state

    def test_add_duplicate(self, app_state):
        """Adding an existing name is rejected."""
        with pytest.raises(DuplicateItem):
            app_state.reduce(AddItem(name="A"))

    def test_rename(self, app_state):
        """Renamed items keep their rating."""
        new_state = app_state.reduce(RenameItem(old_name="B", new_name="Bee"))

        assert new_state.humansort_state.items[0].value == "Bee"
        assert new_state.humansort_state.items[0].rating == pytest.approx(1.0)

    def test_rename_to_blank_ignored(self, app_state):
        """An empty new name leaves the item alone."""
        new_state = app_state.reduce(RenameItem(old_name="B", new_name=""))

        assert values(new_state) == values(app_state)

    def test_remove(self, app_state):
        """Removed items disappear."""
        new_state = app_state.reduce(RemoveItem(name="A"))

        assert values(new_state) == ["B", "C"]

    def test_remove_unknown(self, app_state):
        """Removing a missing item is rejected."""
        with pytest.raises(UnknownItem):
            app_state.reduce(RemoveItem(name="Z"))

    def test_select_preference(self, app_state):
        """A choice is applied as a judgment."""
        new_state = app_state.reduce(SelectPreference(winner="C", others=["A", "B"]))

        ratings = {item.value: item.rating for item in new_state.humansort_state.items}
        assert ratings["C"] > -0.5
        assert ratings["B"] < 1.0
        assert sum(ratings.values()) == pytest.approx(0.0)

    def test_set_batch_size(self, app_state):
        """The batch size is changed."""
        new_state = app_state.reduce(SetBatchSize(batch_size=2))

        assert new_state.humansort_state.batch_size == 2

    def test_does_not_mutate(self, app_state):
        """The original app state is left untouched."""
        before = app_state.model_dump()

        app_state.reduce(AddItem(name="D"))
        app_state.reduce(SelectPreference(winner="C", others=["A", "B"]))
        app_state.reduce(ChangeView(new_view=AppView.OUTPUT))

        assert app_state.model_dump() == before


class TestChangeView:
    """Tests for view changes."""

    def test_to_sorting(self, app_state):
        """Sorting is allowed once there are batch_size items."""
        new_state = app_state.reduce(ChangeView(new_view=AppView.SORTING))

        assert new_state.current_view == AppView.SORTING

    def test_to_sorting_needs_items(self):
        """Sorting with too few items is rejected."""
        state = AppState(humansort_state=RankingState(batch_size=3))

        with pytest.raises(InsufficientItems):
            state.reduce(ChangeView(new_view=AppView.SORTING))

    def test_to_output_always_allowed(self):
        """The output view needs no items."""
        new_state = AppState().reduce(ChangeView(new_view=AppView.OUTPUT))

        assert new_state.current_view == AppView.OUTPUT


class TestParseAction:
    """Tests for decoding actions."""

    def test_known_action(self):
        """The type field picks the action model."""
        action = parse_action({"type": "rename_item", "old_name": "a", "new_name": "b"})

        assert isinstance(action, RenameItem)
        assert action.new_name == "b"

    def test_view_by_value(self):
        """Views are given by their string value."""
        action = parse_action({"type": "change_view", "new_view": "output"})

        assert action.new_view == AppView.OUTPUT

    @pytest.mark.parametrize(
        "data",
        [
            {"type": "explode"},
            {"name": "x"},
            {"type": "add_item"},
            {"type": "change_view", "new_view": "settings"},
            "add_item",
        ],
    )
    def test_invalid(self, data):
        """Unknown or incomplete actions are rejected."""
        with pytest.raises(ValidationError):
            parse_action(data)


class TestAppStateStore:
    """Tests for the app state file."""

    def test_missing_gives_default(self, tmp_path):
        """No file means a fresh app."""
        state = AppStateStore(tmp_path / "app.json").load_or_default()

        assert state == AppState()

    def test_round_trip(self, tmp_path, app_state):
        """A stored state loads back the same."""
        store = AppStateStore(tmp_path / "nested" / "app.json")
        app_state = app_state.reduce(ChangeView(new_view=AppView.OUTPUT))

        store.store(app_state)
        loaded = store.load_or_default()

        assert loaded.current_view == AppView.OUTPUT
        assert loaded.humansort_state.items == app_state.humansort_state.items

    def test_corrupt_gives_default(self, tmp_path):
        """An unreadable file is replaced by the default state."""
        path = tmp_path / "app.json"
        path.write_text("{broken", encoding="utf-8")

        assert AppStateStore(path).load_or_default() == AppState()
