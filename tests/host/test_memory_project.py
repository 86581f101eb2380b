from __future__ import annotations

import pytest

from host.memory import PLACEHOLDER_COLOR_NAME, MemoryProject, StorageFull
from palette import ColorValue
from remap.interfaces import ColorMinter
from tests._utils.scenes import C1, C2


def test_create_palette_adds_placeholder_and_dedupes_location() -> None:
    project = MemoryProject(library_path="/p")
    a = project.create_palette("X", "/p/lib/X")
    b = project.create_palette("X", "/p/lib/X")
    assert [c.name for c in a.colors] == [PLACEHOLDER_COLOR_NAME]
    assert (b.name, b.location) == ("X_2", "/p/lib/X_2")


def test_duplicate_color_mints_new_id_in_same_palette(char_a) -> None:
    project = char_a.project
    src = char_a.source
    copy = project.duplicate_color(src, src.colors[0])
    assert copy.id not in (C1, C2) and copy.value == src.colors[0].value
    assert src.colors[-1] == copy
    project.remove_color(src, copy.id)
    assert copy.id not in project.all_color_ids()


def test_clone_color_into_rejects_duplicate(char_a) -> None:
    with pytest.raises(ValueError):
        char_a.project.clone_color_into(char_a.source.colors[0], char_a.source)


def test_capacity_is_enforced() -> None:
    project = MemoryProject()
    pal = project.add_palette("Small", capacity=1)
    project.add_color(pal, "a", ColorValue.solid(0, 0, 0))
    with pytest.raises(StorageFull):
        project.add_color(pal, "b", ColorValue.solid(0, 0, 0))


def test_duplicate_color_ids_rejected(char_a) -> None:
    with pytest.raises(ValueError):
        char_a.project.add_color(char_a.background, "again", ColorValue.solid(1, 1, 1), color_id=C1)


def test_scene_protocol(char_a) -> None:
    project = char_a.project
    assert isinstance(project, ColorMinter)
    assert project.list_drawing_nodes() == ["Top/Body", "Top/Eyes", "Top/Backdrop"]
    assert project.is_per_frame_timing("Top/Body") and not project.is_per_frame_timing("Top/Eyes")
    assert project.resolve_linked_column("Top/Eyes", project.timing_attr) == "Eyes"
    assert project.resolve_linked_column("Top/Eyes", project.element_attr) is None
    assert project.resolve_content_reference("Eyes", 2) == ("Eyes", "b")
    assert project.resolve_content_reference("Eyes", 3) is None
    assert project.used_color_ids("Top/Eyes", 4) == set()
    with pytest.raises(KeyError):
        project.resolve_content_reference("Nope", 1)


def test_transactions_must_balance() -> None:
    project = MemoryProject()
    project.begin("x")
    project.end()
    with pytest.raises(RuntimeError):
        project.end()
    assert project.transaction_history == ["x"]


def test_override_store_protocol(char_a) -> None:
    project = char_a.project
    assert project.list_modules("TbdColorSelector") == ["Top/Selector_A", "Top/Selector_BG"]
    project.set_config_text("Top/Selector_BG", "selectedcolors", "[]")
    assert project.get_config_text("Top/Selector_BG", "selectedcolors") == "[]"
    assert project.get_config_text("Top/Selector_BG", "missing") == ""
    with pytest.raises(KeyError):
        project.get_config_text("Top/Nope", "selectedcolors")
