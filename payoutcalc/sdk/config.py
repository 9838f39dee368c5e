"""Configuration management for Payout Calc.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - profile: path to profile.yaml (optional, if not colocated)
   - data_dir: custom data directory (ledger storage)
   - default_output_format: "text" or "json"

2. profile.yaml - The user's financial profile
   - financial: pan_number, gstin_number, is_gst_registered,
     is_tds_deductor, billing_address

Config directory resolution:
1. PAYOUT_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/payout-calc/ (XDG_CONFIG_HOME fallback)

Data directory resolution:
1. settings.json "data_dir" key
2. XDG_DATA_HOME/payout-calc/ or ~/.local/share/payout-calc/
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from .schemas import FinancialProfile

logger = logging.getLogger(__name__)

APP_NAME = "payout-calc"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"
PHASES_FILENAME = "phases.yaml"


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


class ProfileInvalidError(Exception):
    """Raised when profile.yaml does not match the expected schema."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. PAYOUT_CALC_CONFIG_PATH environment variable
    2. ~/.config/payout-calc/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("PAYOUT_CALC_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json."""
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def get_profile_path(require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    custom_profile = get_setting("profile")
    if custom_profile:
        profile_path = Path(custom_profile)
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}"
            )
        return profile_path

    profile_path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found. Checked:\n"
            f"  1. settings.json 'profile' key (not set)\n"
            f"  2. {profile_path} (not found)"
        )

    return profile_path


def load_profile(require_exists: bool = True) -> dict:
    """Load the user profile from profile.yaml.

    Returns:
        Profile dictionary (empty dict if not required and not found)

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    profile_path = get_profile_path(require_exists=require_exists)

    if not profile_path.exists():
        return {}

    with open(profile_path, "r") as f:
        return yaml.safe_load(f) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save the user profile to profile.yaml."""
    if path is None:
        path = get_profile_path(require_exists=False)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


def load_financial_profile(require_exists: bool = False) -> Optional[FinancialProfile]:
    """Load the "financial" section of profile.yaml as a FinancialProfile.

    Returns:
        FinancialProfile, or None if there is no profile or no financial section

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
        ProfileInvalidError: If the financial section has unknown or bad fields
    """
    profile = load_profile(require_exists=require_exists)
    financial = profile.get("financial")
    if not financial:
        logger.debug("No financial section in profile")
        return None

    try:
        return FinancialProfile(**financial)
    except ValidationError as e:
        raise ProfileInvalidError(f"Invalid financial profile: {e}") from e


def get_data_path(create: bool = True) -> Path:
    """Get the data directory path.

    Uses settings.json "data_dir" if set, else XDG_DATA_HOME/payout-calc/.

    Returns:
        Path to the data directory (created if missing, unless create is False)
    """
    custom_dir = get_setting("data_dir")
    if custom_dir:
        data_path = Path(custom_dir).expanduser()
    else:
        xdg_data_home = os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share")
        data_path = Path(xdg_data_home) / APP_NAME
    if create:
        data_path.mkdir(parents=True, exist_ok=True)
    return data_path
