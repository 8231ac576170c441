"""Tests for SelectionStore."""

import json
from pathlib import Path

from packsync.settings import Selection, SelectionStore


class TestSelectionStore:
    def test_missing_file_loads_none(self, tmp_path: Path):
        assert SelectionStore(str(tmp_path / "selection.json")).load() is None

    def test_save_then_load(self, tmp_path: Path):
        store = SelectionStore(str(tmp_path / "nested" / "selection.json"))
        selection = Selection(
            minecraft_version="1.20.1", mod_loader="forge", mod_loader_version="47.2.0"
        )

        path = store.save(selection)

        assert json.loads(Path(path).read_text()) == {
            "minecraft_version": "1.20.1",
            "mod_loader": "forge",
            "mod_loader_version": "47.2.0",
        }
        assert store.load() == selection

    def test_save_overwrites_previous_selection(self, tmp_path: Path):
        store = SelectionStore(str(tmp_path / "selection.json"))
        store.save(Selection("1.19.2", "forge", "43.3.0"))
        store.save(Selection("1.20.1", "fabric", "1.0.1"))

        assert store.load() == Selection("1.20.1", "fabric", "1.0.1")

    def test_invalid_content_loads_none(self, tmp_path: Path):
        path = tmp_path / "selection.json"
        path.write_text("[1, 2")

        assert SelectionStore(str(path)).load() is None

    def test_missing_field_loads_none(self, tmp_path: Path):
        path = tmp_path / "selection.json"
        path.write_text(json.dumps({"minecraft_version": "1.20.1"}))

        assert SelectionStore(str(path)).load() is None
