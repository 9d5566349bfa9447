"""
End-to-end layout generation tests.

Runs complete simulations on small building sets and presets and checks
the properties callers rely on: determinism, positions on the canvas and
non-overlapping tiles. Also exercises SVG rendering and the CLI.
"""

import json

import pytest

from baseplan import generate_layout
from baseplan.cli import main
from baseplan.layout.abstraction import Link
from baseplan.layout.layout_file import parse_layout_file
from baseplan.layout.presets import get_preset
from baseplan.placement.simulation import LayoutSimulation, total_overlap_area
from baseplan.placement.visualizer import export_svg, render_layout_svg


def assert_tiles_disjoint(result):
    seen = {}
    for body in result.bodies:
        for tile in result.tiles(body.id):
            assert tile not in seen, f"{body.id} overlaps {seen[tile]} at {tile}"
            seen[tile] = body.id


@pytest.fixture
def kitchen_storage_result(kitchen, storage, kitchen_storage_link):
    return generate_layout([kitchen, storage], [kitchen_storage_link], seed=12345)


class TestKitchenStorage:
    """Two linked rectangles."""

    def test_deterministic(self, kitchen, storage, kitchen_storage_link,
                           kitchen_storage_result):
        again = generate_layout([kitchen, storage], [kitchen_storage_link], seed=12345)
        assert again.positions() == kitchen_storage_result.positions()

    def test_positions_on_canvas(self, kitchen_storage_result):
        for x, y in kitchen_storage_result.positions().values():
            assert 0 <= x < 100
            assert 0 <= y < 100

    def test_no_overlap(self, kitchen_storage_result):
        assert kitchen_storage_result.converged
        assert total_overlap_area(kitchen_storage_result.bodies) == \
            pytest.approx(0.0, abs=1e-6)
        assert_tiles_disjoint(kitchen_storage_result)

    def test_tile_counts(self, kitchen_storage_result):
        assert len(kitchen_storage_result.tiles("kitchen")) == 48
        assert len(kitchen_storage_result.tiles("storage")) == 64

    def test_linked_pair_stays_close(self, kitchen_storage_result):
        kitchen = kitchen_storage_result.get("kitchen")
        storage = kitchen_storage_result.get("storage")
        assert kitchen.distance_to(storage) < 15

    def test_unknown_building_tiles(self, kitchen_storage_result):
        with pytest.raises(KeyError):
            kitchen_storage_result.tiles("bunker")

    def test_export_dict(self, kitchen_storage_result):
        data = kitchen_storage_result.to_dict()

        assert data["seed"] == 12345
        assert [b["id"] for b in data["buildings"]] == ["kitchen", "storage"]
        kitchen = data["buildings"][0]
        assert len(kitchen["tiles"]) == 48
        assert kitchen["tiles"] == sorted(kitchen["tiles"], key=lambda t: (t[1], t[0]))


class TestTwoSquares:
    """Two 4x4 rectangles linked with strength 5."""

    def test_overlap_eliminated(self, square_buildings):
        buildings = square_buildings[:2]
        links = [Link("A", "B", 5)]
        initial = total_overlap_area(LayoutSimulation(buildings, links).bodies)
        result = generate_layout(buildings, links)

        assert initial > 0
        assert total_overlap_area(result.bodies) == pytest.approx(0.0, abs=1e-9)
        assert_tiles_disjoint(result)


class TestPresetLayouts:
    """Full preset configurations."""

    @pytest.mark.parametrize("name", ["Basic Colony", "Self-Sufficient Farm"])
    def test_preset_tiles_disjoint(self, name):
        preset = get_preset(name)
        result = generate_layout(preset.buildings, preset.links)

        assert result.converged
        assert len(result.bodies) == len(preset.buildings)
        assert_tiles_disjoint(result)

    def test_overlap_resolved(self):
        preset = get_preset("Basic Colony")
        initial = total_overlap_area(LayoutSimulation(preset.buildings, preset.links).bodies)
        result = generate_layout(preset.buildings, preset.links)

        assert total_overlap_area(result.bodies) < initial
        assert total_overlap_area(result.bodies) < 1.0

    def test_circle_building(self):
        preset = get_preset("Defensive Outpost")
        result = generate_layout(preset.buildings, preset.links, seed=7)

        turret = result.get("turret_nest")
        assert turret is not None
        assert len(result.tiles("turret_nest")) > 0


class TestVisualizer:
    """SVG rendering of finished layouts."""

    def test_render(self, kitchen_storage_result):
        svg = render_layout_svg(kitchen_storage_result)

        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert "Kitchen" in svg and "Storage" in svg
        assert svg.count('<rect x=') == 48 + 64
        assert svg.count('class="building"') == 2
        assert "<polygon" not in svg

    def test_outlines(self, kitchen_storage_result):
        svg = render_layout_svg(kitchen_storage_result, show_outlines=True)
        assert svg.count("<polygon") == 2

    def test_export(self, tmp_path, kitchen_storage_result):
        path = export_svg(kitchen_storage_result, tmp_path / "layout.svg")
        assert path.read_text().count('class="building"') == 2


class TestCli:
    """Command-line entry points."""

    def test_no_command(self):
        assert main([]) == 1

    def test_presets(self, capsys):
        assert main(["presets", "--buildings"]) == 0
        out = capsys.readouterr().out
        assert "Basic Colony" in out
        assert "turret_nest" in out

    def test_generate_preset(self, tmp_path):
        output = tmp_path / "positions.json"
        svg = tmp_path / "layout.svg"

        assert main(["generate", "-p", "Basic Colony", "-s", "3",
                     "-o", str(output), "--svg", str(svg)]) == 0

        data = json.loads(output.read_text())
        assert data["seed"] == 3
        assert len(data["buildings"]) == 5
        assert svg.exists()

    def test_generate_unknown_preset(self, capsys):
        assert main(["generate", "-p", "Moon Base"]) == 1
        assert "Unknown preset" in capsys.readouterr().out

    @pytest.mark.parametrize("grid", ["0", "-10"])
    def test_generate_rejects_non_positive_grid(self, tmp_path, capsys, grid):
        output = tmp_path / "positions.json"

        assert main(["generate", "--grid", grid, "-o", str(output)]) == 1
        assert "Error: Canvas must be positive" in capsys.readouterr().out
        assert not output.exists()

    def test_generate_custom_grid(self, tmp_path):
        output = tmp_path / "positions.json"

        assert main(["generate", "--grid", "60", "-o", str(output)]) == 0
        for building in json.loads(output.read_text())["buildings"]:
            assert 0 <= building["x"] < 60 and 0 <= building["y"] < 60
            assert building["tiles"]

    def test_generate_missing_file(self, tmp_path):
        assert main(["generate", str(tmp_path / "missing.json")]) == 1

    def test_export_then_generate(self, tmp_path):
        layout_path = tmp_path / "colony.yaml"
        output = tmp_path / "positions.yaml"

        assert main(["export", "-p", "Industrial Base", "-s", "5",
                     "-o", str(layout_path)]) == 0
        layout = parse_layout_file(layout_path)
        assert layout.seed == 5
        assert len(layout.buildings) == 7

        assert main(["generate", str(layout_path), "-o", str(output)]) == 0
        assert output.exists()

    def test_share_round_trip(self, tmp_path, capsys):
        assert main(["share", "-p", "Basic Colony", "-s", "11"]) == 0
        url = capsys.readouterr().out.strip().splitlines()[-1]
        assert "?data=" in url

        decoded = tmp_path / "decoded.json"
        assert main(["share", "--decode", url, "-o", str(decoded)]) == 0
        layout = parse_layout_file(decoded)
        assert layout.seed == 11
        assert len(layout.buildings) == 5

    def test_share_decode_invalid(self):
        assert main(["share", "--decode", "https://example.invalid/baseplan"]) == 1
