"""Project category to delivery phase lookup.

Phase lists come from the packaged data/phases.yaml. A phases.yaml in the
config directory, if present, is loaded on top of it (its categories
replace or extend the packaged ones).
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from .config import PHASES_FILENAME, get_config_dir

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "default"


def _get_packaged_phases_path() -> Path:
    return Path(__file__).parent.parent / "data" / PHASES_FILENAME


def _read_phases_file(path: Path) -> Dict[str, List[str]]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of category -> phase list")
    return {str(category): [str(p) for p in phases] for category, phases in data.items()}


def load_phase_mapping() -> Dict[str, List[str]]:
    """Load the category -> phases mapping, with any user overrides applied."""
    mapping = _read_phases_file(_get_packaged_phases_path())

    override_path = get_config_dir() / PHASES_FILENAME
    if override_path.exists():
        logger.debug(f"Applying phase overrides from {override_path}")
        mapping.update(_read_phases_file(override_path))

    return mapping


def get_phases_for_category(
    category: Optional[str],
    mapping: Optional[Dict[str, List[str]]] = None,
) -> List[str]:
    """Return the ordered phase names for a project category.

    Matching ignores case and surrounding whitespace. Unknown or empty
    categories get the default phases.
    """
    if mapping is None:
        mapping = load_phase_mapping()

    if category:
        wanted = category.strip().lower()
        for name, phases in mapping.items():
            if name.lower() == wanted:
                return list(phases)
        logger.debug(f"No phases for category '{category}', using default")

    return list(mapping.get(DEFAULT_CATEGORY, []))


def list_categories(mapping: Optional[Dict[str, List[str]]] = None) -> List[str]:
    """Return the known category names (excluding default)."""
    if mapping is None:
        mapping = load_phase_mapping()
    return [name for name in mapping if name != DEFAULT_CATEGORY]
