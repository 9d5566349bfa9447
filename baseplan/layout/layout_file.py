"""
Layout File Handler

Import/export of layout inputs (building templates, links and the seed)
plus compact shareable links carrying the same data in a URL.

File Format (JSON, or YAML for .yaml/.yml paths):
```json
{
  "buildings": [
    {"id": "kitchen", "name": "Kitchen", "shape": "rectangle",
     "width": 8, "height": 6, "color": "#f97316"}
  ],
  "links": [{"source": "kitchen", "target": "storage", "strength": 6}],
  "seed": 12345,
  "timestamp": "2026-01-14T10:30:00",
  "version": "1.0.0"
}
```
"""

import base64
import binascii
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import yaml

from .abstraction import BuildingTemplate, Link

logger = logging.getLogger(__name__)

LAYOUT_FILE_VERSION = "1.0.0"
YAML_SUFFIXES = (".yaml", ".yml")


@dataclass
class LayoutFile:
    """Layout inputs as exchanged with files and share links."""
    buildings: List[BuildingTemplate] = field(default_factory=list)
    links: List[Link] = field(default_factory=list)
    seed: int = 0
    timestamp: Optional[datetime] = None
    version: str = LAYOUT_FILE_VERSION

    # File this layout was read from or last written to
    source_file: Optional[Path] = None

    def __post_init__(self):
        if self.timestamp is None:
            self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "buildings": [b.to_dict() for b in self.buildings],
            "links": [link.to_dict() for link in self.links],
            "seed": self.seed,
            "timestamp": self.timestamp.isoformat(),
            "version": self.version,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutFile":
        """Create from dictionary.

        Raises:
            KeyError, TypeError, ValueError: On malformed records
        """
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))

        return cls(
            buildings=[BuildingTemplate.from_dict(b) for b in data.get("buildings") or []],
            links=[Link.from_dict(link) for link in data.get("links") or []],
            seed=int(data.get("seed") or 0),
            timestamp=timestamp,
            version=str(data.get("version", LAYOUT_FILE_VERSION)),
        )

    def __repr__(self) -> str:
        return (
            f"LayoutFile(version={self.version}, "
            f"buildings={len(self.buildings)}, "
            f"links={len(self.links)}, "
            f"seed={self.seed})"
        )


def default_export_name(when: Optional[datetime] = None) -> str:
    """Default file name for an export, e.g. `base-layout-2026-01-14.json`."""
    when = when or datetime.now()
    return f"base-layout-{when.date().isoformat()}.json"


def _dump(data: Dict[str, Any], path: Path) -> str:
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False,
                              allow_unicode=True)
    return json.dumps(data, indent=2)


def _load(content: str, path: Path) -> Any:
    if path.suffix.lower() in YAML_SUFFIXES:
        return yaml.safe_load(content)
    return json.loads(content)


def parse_layout_file(path: Path) -> Optional[LayoutFile]:
    """
    Parse a layout file.

    Args:
        path: Path to a .json, .yaml or .yml layout file

    Returns:
        LayoutFile instance, or None if the file doesn't exist or is malformed
    """
    path = Path(path)

    if not path.exists():
        logger.debug("Layout file not found: %s", path)
        return None

    try:
        data = _load(path.read_text(), path)
        if not isinstance(data, dict):
            logger.warning("Layout file %s does not contain a mapping", path)
            return None

        layout = LayoutFile.from_dict(data)
    except (json.JSONDecodeError, yaml.YAMLError, KeyError, TypeError, ValueError) as e:
        logger.warning("Failed to parse layout file %s: %s", path, e)
        return None

    layout.source_file = path
    logger.debug("Loaded layout file: %r", layout)
    return layout


def write_layout_file(layout: LayoutFile, path: Path) -> Path:
    """
    Write a layout file, JSON or YAML depending on the suffix.

    Args:
        layout: Layout data to write
        path: Path to write to

    Returns:
        The path written
    """
    path = Path(path)
    layout.timestamp = datetime.now()

    path.write_text(_dump(layout.to_dict(), path))
    layout.source_file = path
    logger.info("Saved layout file: %s (%d buildings, %d links)",
                path, len(layout.buildings), len(layout.links))
    return path


def encode_share_link(buildings: List[BuildingTemplate], links: List[Link],
                      seed: int, base_url: str) -> str:
    """Build a URL carrying the layout inputs in its `data` parameter."""
    payload = {
        "buildings": [b.to_dict() for b in buildings],
        "links": [link.to_dict() for link in links],
        "seed": seed,
    }
    encoded = base64.b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")
    return f"{base_url}?{urlencode({'data': encoded})}"


def decode_share_link(url: str) -> Optional[LayoutFile]:
    """
    Decode a URL produced by encode_share_link().

    Returns:
        LayoutFile (seed defaults to 0), or None if the URL carries no
        decodable layout
    """
    values = parse_qs(urlparse(url).query).get("data")
    if not values:
        return None

    try:
        data = json.loads(base64.b64decode(values[0], validate=True).decode("utf-8"))
        return LayoutFile.from_dict(data)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError,
            AttributeError, KeyError, TypeError, ValueError) as e:
        logger.error("Failed to parse shareable link: %s", e)
        return None
