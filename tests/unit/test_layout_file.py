"""
Tests for layout files, share links and presets.

Tests cover:
- JSON and YAML layout files
- Missing and malformed files
- Share link encoding and decoding
- Preset catalog lookups
"""

import base64
import json
from datetime import datetime
from urllib.parse import urlencode

import pytest

from baseplan.layout.abstraction import BuildingTemplate, Link, Shape
from baseplan.layout.layout_file import (
    LAYOUT_FILE_VERSION,
    LayoutFile,
    decode_share_link,
    default_export_name,
    encode_share_link,
    parse_layout_file,
    write_layout_file,
)
from baseplan.layout.presets import (
    BUILDING_PRESETS,
    get_building_preset,
    get_default_preset,
    get_preset,
    list_presets,
)

BASE_URL = "https://example.invalid/baseplan"


@pytest.fixture
def layout(kitchen, storage, turret, kitchen_storage_link) -> LayoutFile:
    return LayoutFile(
        buildings=[kitchen, storage, turret],
        links=[kitchen_storage_link],
        seed=42,
    )


class TestLayoutFile:
    """Tests for reading and writing layout files."""

    @pytest.mark.parametrize("suffix", [".json", ".yaml", ".yml"])
    def test_write_then_parse(self, tmp_path, layout, suffix):
        path = write_layout_file(layout, tmp_path / f"layout{suffix}")
        loaded = parse_layout_file(path)

        assert loaded is not None
        assert loaded.buildings == layout.buildings
        assert loaded.links == layout.links
        assert loaded.seed == 42
        assert loaded.version == LAYOUT_FILE_VERSION
        assert loaded.source_file == path

    def test_json_layout(self, tmp_path, layout):
        path = write_layout_file(layout, tmp_path / "layout.json")
        data = json.loads(path.read_text())

        assert data["version"] == "1.0.0"
        assert data["buildings"][0] == {
            "id": "kitchen", "name": "Kitchen", "shape": "rectangle",
            "width": 8, "height": 6, "color": "#f97316",
        }
        assert data["links"] == [{"source": "kitchen", "target": "storage", "strength": 6}]
        datetime.fromisoformat(data["timestamp"])

    def test_missing_file(self, tmp_path):
        assert parse_layout_file(tmp_path / "nope.json") is None

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        assert parse_layout_file(path) is None

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        assert parse_layout_file(path) is None

    def test_invalid_building(self, tmp_path):
        path = tmp_path / "invalid.json"
        path.write_text(json.dumps({
            "buildings": [{"id": "x", "shape": "hexagon", "width": 4, "height": 4}],
        }))
        assert parse_layout_file(path) is None

    def test_defaults_for_optional_fields(self):
        loaded = LayoutFile.from_dict({"buildings": [{"id": "hut", "width": 4}]})

        assert loaded.seed == 0
        assert loaded.links == []
        hut = loaded.buildings[0]
        assert (hut.name, hut.shape, hut.height) == ("hut", Shape.RECTANGLE, 4)

    def test_repr(self, layout):
        assert repr(layout) == "LayoutFile(version=1.0.0, buildings=3, links=1, seed=42)"

    def test_default_export_name(self):
        assert default_export_name(datetime(2026, 1, 14, 10, 30)) == \
            "base-layout-2026-01-14.json"


class TestShareLink:
    """Tests for shareable links."""

    def test_encode_then_decode(self, layout):
        url = encode_share_link(layout.buildings, layout.links, 42, BASE_URL)
        decoded = decode_share_link(url)

        assert url.startswith(BASE_URL + "?data=")
        assert decoded.buildings == layout.buildings
        assert decoded.links == layout.links
        assert decoded.seed == 42

    def test_without_links(self, layout):
        url = encode_share_link(layout.buildings, [], 7, BASE_URL)
        link = decode_share_link(url)
        assert link.seed == 7
        assert link.links == []

    def test_seed_defaults_to_zero(self):
        payload = {"buildings": [{"id": "a", "name": "A", "shape": "circle",
                                  "width": 4, "height": 4}], "links": []}
        data = base64.b64encode(json.dumps(payload).encode()).decode()
        decoded = decode_share_link(f"{BASE_URL}?{urlencode({'data': data})}")

        assert decoded.seed == 0
        assert decoded.buildings[0].shape is Shape.CIRCLE

    def test_missing_data_parameter(self):
        assert decode_share_link(BASE_URL) is None
        assert decode_share_link(f"{BASE_URL}?other=1") is None

    def test_invalid_payload(self):
        assert decode_share_link(f"{BASE_URL}?data=%%%not-base64") is None
        not_json = base64.b64encode(b"hello").decode()
        assert decode_share_link(f"{BASE_URL}?data={not_json}") is None


class TestPresets:
    """Tests for the preset catalog."""

    def test_list_presets_in_catalog_order(self):
        assert list_presets() == [
            "Basic Colony", "Industrial Base", "Defensive Outpost", "Self-Sufficient Farm",
        ]

    def test_default_preset(self):
        assert get_default_preset().name == "Basic Colony"

    def test_basic_colony(self):
        preset = get_preset("Basic Colony")

        assert [b.id for b in preset.buildings] == [
            "bedroom", "kitchen", "dining_room", "storage", "growing_zone",
        ]
        assert Link("kitchen", "dining_room", 8) in preset.links

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown preset"):
            get_preset("Moon Base")

    def test_preset_links_reference_preset_buildings(self):
        for name in list_presets():
            preset = get_preset(name)
            ids = {b.id for b in preset.buildings}
            for link in preset.links:
                assert link.source in ids and link.target in ids

    def test_building_presets(self):
        assert len(BUILDING_PRESETS) == 15
        turret = get_building_preset("turret_nest")
        assert isinstance(turret, BuildingTemplate)
        assert turret.shape is Shape.CIRCLE

    def test_unknown_building_preset(self):
        with pytest.raises(ValueError, match="Unknown building preset"):
            get_building_preset("castle")
