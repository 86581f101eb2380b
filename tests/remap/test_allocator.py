from __future__ import annotations

import pytest

from host.memory import MemoryProject
from palette import Color, ColorValue, GradientStop, Palette
from remap import AllocationFailed, ColorAllocator


class DuplicateOnlyStore:
    """直接の採番手段を持たないホストを模したストア（ColorMinter ではない）。"""

    def __init__(self, project: MemoryProject) -> None:
        self._p = project
        self.calls: list[str] = []

    def create_palette(self, name: str, location: str) -> Palette:
        return self._p.create_palette(name, location)

    def color_at(self, palette: Palette, index: int) -> Color:
        return self._p.color_at(palette, index)

    def remove_color(self, palette: Palette, color_id: str) -> None:
        self.calls.append(f"remove:{palette.name}")
        self._p.remove_color(palette, color_id)

    def duplicate_color(self, palette: Palette, color: Color) -> Color:
        self.calls.append(f"duplicate:{palette.name}")
        return self._p.duplicate_color(palette, color)

    def clone_color_into(self, color: Color, palette: Palette) -> Color:
        self.calls.append(f"clone:{palette.name}")
        return self._p.clone_color_into(color, palette)

    def all_color_ids(self) -> set[str]:
        return self._p.all_color_ids()

    def library_path(self) -> str:
        return self._p.library_path()


def _project_with_source():
    project = MemoryProject()
    src = project.add_palette("Src")
    stops = [GradientStop(0.0, (0, 0, 0, 255)), GradientStop(1.0, (255, 255, 255, 255))]
    project.add_color(src, "ink", ColorValue.solid(10, 20, 30, 200), color_id="aaaaaaaaaaaaaaaa")
    project.add_color(src, "sky", ColorValue.gradient(stops), color_id="bbbbbbbbbbbbbbbb")
    dst = project.add_palette("Dst")
    return project, src, dst


def test_allocate_with_minting_store_preserves_value_and_order() -> None:
    project, src, dst = _project_with_source()
    allocator = ColorAllocator(project)
    a = allocator.allocate(src.colors[0], dst)
    b = allocator.allocate(src.colors[1], dst)

    assert dst.colors == [a, b]
    assert a.value == src.colors[0].value and a.name == "ink"
    assert b.value.stops == src.colors[1].value.stops
    assert {a.id, b.id}.isdisjoint({"aaaaaaaaaaaaaaaa", "bbbbbbbbbbbbbbbb"})
    assert allocator.issued_ids == {a.id, b.id}


def test_allocate_duplicate_clone_remove_sequence() -> None:
    project, src, dst = _project_with_source()
    store = DuplicateOnlyStore(project)
    allocator = ColorAllocator(store)
    created = allocator.allocate(src.colors[0], dst, origin=src)

    assert store.calls == ["duplicate:Src", "clone:Dst", "remove:Src"]
    assert dst.colors == [created]
    # 元パレットには一時的な複製が残らない
    assert src.color_ids() == ["aaaaaaaaaaaaaaaa", "bbbbbbbbbbbbbbbb"]


def test_duplicate_sequence_requires_origin() -> None:
    project, src, dst = _project_with_source()
    allocator = ColorAllocator(DuplicateOnlyStore(project))
    with pytest.raises(AllocationFailed, match="origin palette is required"):
        allocator.allocate(src.colors[0], dst)


def test_full_destination_raises() -> None:
    project, src, _ = _project_with_source()
    dst = project.add_palette("Tiny", capacity=1)
    allocator = ColorAllocator(project)
    allocator.allocate(src.colors[0], dst)
    with pytest.raises(AllocationFailed) as ei:
        allocator.allocate(src.colors[1], dst)
    assert ei.value.palette_name == "Tiny"
    assert ei.value.color_id == "bbbbbbbbbbbbbbbb"


def test_store_error_is_wrapped(monkeypatch: pytest.MonkeyPatch) -> None:
    project, src, dst = _project_with_source()

    def broken(source, palette):
        raise OSError("palette file is locked")

    monkeypatch.setattr(project, "mint_color", broken)
    with pytest.raises(AllocationFailed, match="locked") as ei:
        ColorAllocator(project).allocate(src.colors[0], dst)
    assert isinstance(ei.value.__cause__, OSError)


def test_colliding_id_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    project, src, dst = _project_with_source()

    def reuse_existing(source, palette):
        clash = source.with_id("bbbbbbbbbbbbbbbb")
        palette.colors.append(clash)
        return clash

    monkeypatch.setattr(project, "mint_color", reuse_existing)
    with pytest.raises(AllocationFailed, match="collides"):
        ColorAllocator(project).allocate(src.colors[0], dst)


def test_changed_value_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    project, src, dst = _project_with_source()

    def lossy(source, palette):
        out = Color(id="cccccccccccccccc", name=source.name, value=ColorValue.solid(0, 0, 0))
        palette.colors.append(out)
        return out

    monkeypatch.setattr(project, "mint_color", lossy)
    with pytest.raises(AllocationFailed, match="value differs"):
        ColorAllocator(project).allocate(src.colors[0], dst)
