"""Layout data model, preset catalog and layout file exchange."""

from .abstraction import Body, BuildingTemplate, Link, Shape
from .presets import (
    BUILDING_PRESETS,
    PRESET_CONFIGURATIONS,
    PresetConfiguration,
    get_building_preset,
    get_default_preset,
    get_preset,
    list_presets,
)
from .layout_file import (
    LayoutFile,
    decode_share_link,
    default_export_name,
    encode_share_link,
    parse_layout_file,
    write_layout_file,
)

__all__ = [
    # Core abstractions
    "Body",
    "BuildingTemplate",
    "Link",
    "Shape",
    # Presets
    "BUILDING_PRESETS",
    "PRESET_CONFIGURATIONS",
    "PresetConfiguration",
    "get_building_preset",
    "get_default_preset",
    "get_preset",
    "list_presets",
    # Layout file exchange
    "LayoutFile",
    "decode_share_link",
    "default_export_name",
    "encode_share_link",
    "parse_layout_file",
    "write_layout_file",
]
