"""
Building Presets

Catalog of common colony buildings and ready-made configurations
(building sets plus weighted links) used as starting points for layouts.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from .abstraction import BuildingTemplate, Link, Shape


@dataclass
class PresetConfiguration:
    """A named building set with its explicit links."""
    name: str
    buildings: List[BuildingTemplate] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)


def _rect(id: str, name: str, width: float, height: float, color: str) -> BuildingTemplate:
    return BuildingTemplate(id=id, name=name, shape=Shape.RECTANGLE,
                            width=width, height=height, color=color)


BUILDING_PRESETS: Dict[str, BuildingTemplate] = {
    template.id: template
    for template in [
        # Basic buildings
        _rect("bedroom", "Bedroom", 7, 7, "#3b82f6"),
        _rect("kitchen", "Kitchen", 8, 6, "#f97316"),
        _rect("dining_room", "Dining Room", 10, 8, "#eab308"),
        _rect("storage", "Storage", 8, 8, "#6b7280"),
        _rect("freezer", "Freezer", 6, 6, "#06b6d4"),
        # Production
        _rect("workshop", "Workshop", 10, 8, "#92400e"),
        _rect("research_lab", "Research Lab", 8, 6, "#7c3aed"),
        _rect("hospital", "Hospital", 9, 7, "#ef4444"),
        _rect("rec_room", "Recreation Room", 12, 10, "#f59e0b"),
        # Outdoor / farm areas
        _rect("growing_zone", "Growing Zone", 12, 8, "#10b981"),
        _rect("animal_pen", "Animal Pen", 10, 10, "#84cc16"),
        # Defense
        _rect("bunker", "Bunker", 6, 4, "#374151"),
        BuildingTemplate(id="turret_nest", name="Turret Nest", shape=Shape.CIRCLE,
                         width=4, height=4, color="#dc2626"),
        # Utility
        _rect("power_room", "Power Room", 6, 4, "#fbbf24"),
        _rect("dumping_stockpile", "Dumping Stockpile", 8, 6, "#9ca3af"),
    ]
}


def _configuration(name: str, building_ids: List[str],
                   links: List[tuple]) -> PresetConfiguration:
    return PresetConfiguration(
        name=name,
        buildings=[BUILDING_PRESETS[ref] for ref in building_ids],
        links=[Link(source=s, target=t, strength=w) for s, t, w in links],
    )


PRESET_CONFIGURATIONS: Dict[str, PresetConfiguration] = {
    preset.name: preset
    for preset in [
        _configuration(
            "Basic Colony",
            ["bedroom", "kitchen", "dining_room", "storage", "growing_zone"],
            [
                ("kitchen", "dining_room", 8),
                ("kitchen", "storage", 6),
                ("bedroom", "dining_room", 5),
                ("growing_zone", "kitchen", 4),
                ("growing_zone", "storage", 3),
            ],
        ),
        _configuration(
            "Industrial Base",
            ["bedroom", "kitchen", "dining_room", "workshop", "research_lab",
             "storage", "power_room"],
            [
                ("kitchen", "dining_room", 8),
                ("workshop", "storage", 7),
                ("workshop", "power_room", 6),
                ("research_lab", "workshop", 5),
                ("bedroom", "dining_room", 5),
                ("storage", "power_room", 4),
            ],
        ),
        _configuration(
            "Defensive Outpost",
            ["bedroom", "kitchen", "bunker", "turret_nest", "hospital", "storage"],
            [
                ("bunker", "turret_nest", 9),
                ("hospital", "bunker", 7),
                ("bedroom", "hospital", 6),
                ("kitchen", "bedroom", 5),
                ("storage", "hospital", 4),
                ("storage", "kitchen", 4),
            ],
        ),
        _configuration(
            "Self-Sufficient Farm",
            ["bedroom", "kitchen", "dining_room", "growing_zone", "animal_pen",
             "freezer", "storage"],
            [
                ("growing_zone", "kitchen", 9),
                ("animal_pen", "kitchen", 8),
                ("kitchen", "freezer", 7),
                ("kitchen", "dining_room", 6),
                ("freezer", "storage", 5),
                ("bedroom", "dining_room", 5),
                ("growing_zone", "storage", 4),
            ],
        ),
    ]
}


def get_preset(name: str) -> PresetConfiguration:
    """
    Get a preset configuration by name.

    Args:
        name: Preset name (e.g., "Basic Colony")

    Returns:
        PresetConfiguration instance

    Raises:
        ValueError: If preset name is not found
    """
    if name not in PRESET_CONFIGURATIONS:
        available = ", ".join(sorted(PRESET_CONFIGURATIONS.keys()))
        raise ValueError(f"Unknown preset '{name}'. Available: {available}")
    return PRESET_CONFIGURATIONS[name]


def list_presets() -> List[str]:
    """List all preset configuration names in catalog order."""
    return list(PRESET_CONFIGURATIONS.keys())


def get_default_preset() -> PresetConfiguration:
    """The first preset configuration in the catalog."""
    return PRESET_CONFIGURATIONS[list_presets()[0]]


def get_building_preset(building_id: str) -> BuildingTemplate:
    """Get a single building template from the catalog."""
    if building_id not in BUILDING_PRESETS:
        available = ", ".join(sorted(BUILDING_PRESETS.keys()))
        raise ValueError(f"Unknown building preset '{building_id}'. Available: {available}")
    return BUILDING_PRESETS[building_id]
