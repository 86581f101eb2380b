from __future__ import annotations

from pathlib import Path

import pytest

from host import DocumentError, load_document, save_document
from host.document import project_from_dict, project_to_dict
from palette import ColorValue, GradientStop
from tests._utils.scenes import BG, C1, build_char_a


def test_save_then_load_preserves_project(tmp_path: Path) -> None:
    scene = build_char_a()
    stops = [GradientStop(0.0, (0, 0, 0, 255)), GradientStop(1.0, (255, 255, 255, 128))]
    scene.project.add_color(scene.background, "sky", ColorValue.gradient(stops, radial=True))

    path = save_document(scene.project, tmp_path / "doc" / "scene.yaml")
    assert path.exists()

    loaded = load_document(path)
    assert project_to_dict(loaded) == project_to_dict(scene.project)
    sky = loaded.palette_by_name("Background").colors[-1]
    assert sky.value == scene.background.colors[-1].value
    assert loaded.get_config_text("Top/Selector_A", "selectedcolors") == scene.project.get_config_text(
        "Top/Selector_A", "selectedcolors"
    )


def test_minimal_document_defaults() -> None:
    project = project_from_dict(
        {
            "palettes": [{"name": "P", "colors": [{"id": C1, "name": "ink", "rgba": "#102030"}]}],
            "nodes": [{"path": "Top/A", "column": "A"}],
            "columns": {"A": ["1", None]},
            "drawings": {"A": {"1": [{"color": C1, "points": [[0, 0], [1, 1]]}]}},
        }
    )
    assert project.library_path() == "/project"
    assert project.frame_count() == 2
    assert project.palette_by_name("P").colors[0].value == ColorValue.solid(0x10, 0x20, 0x30)
    assert project.drawing_at("Top/A", 2) is None
    assert project.drawing_at("Top/A", 1).used_color_ids() == {C1}


@pytest.mark.parametrize(
    "data, where",
    [
        ({"palettes": [{"name": "P", "colors": [{"id": 123, "rgba": "#000000"}]}]}, "palettes[0].colors[0].id"),
        ({"palettes": [{"name": "P", "colors": [{"id": C1, "rgba": [0.5, 0, 0]}]}]}, "palettes[0].colors[0]"),
        ({"palettes": [{"name": "P", "colors": [{"id": C1, "rgba": "#000"}, {"id": C1, "rgba": "#000000"}]}]}, "palettes[0].colors[0]"),
        ({"palettes": {"name": "P"}}, "palettes"),
        ({"drawings": {"A": {"1": [{"points": [[0, 0]]}]}}}, "drawings.A.1.color"),
        ({"modules": [{"path": "Top/S"}]}, "modules[0].kind"),
        ({"project": {"frame_count": "lots"}}, "project.frame_count"),
        ({"palettes": [{"name": "A", "id": "p1"}, {"name": "B", "id": "p1"}]}, "palettes[1]"),
        ({"palettes": [{"name": "A", "capacity": "big"}]}, "palettes[0].capacity"),
    ],
)
def test_invalid_documents_name_the_offending_entry(data, where) -> None:
    with pytest.raises(DocumentError) as ei:
        project_from_dict(data)
    assert ei.value.where == where


def test_duplicate_color_id_reported_on_second_entry() -> None:
    data = {
        "palettes": [
            {"name": "P", "colors": [{"id": BG, "rgba": "#000000"}]},
            {"name": "Q", "colors": [{"id": BG, "rgba": "#ffffff"}]},
        ]
    }
    with pytest.raises(DocumentError) as ei:
        project_from_dict(data)
    assert ei.value.where == "palettes[1].colors[0]"


def test_load_document_rejects_non_mapping_and_broken_yaml(tmp_path: Path) -> None:
    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(DocumentError):
        load_document(listing)

    broken = tmp_path / "broken.yaml"
    broken.write_text("palettes: [\n", encoding="utf-8")
    with pytest.raises(DocumentError):
        load_document(broken)
