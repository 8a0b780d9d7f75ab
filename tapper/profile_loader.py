"""
Game Profile Loader - YAML configuration loading with Pydantic validation.

This module loads and validates game profiles from YAML files using the
GameProfile Pydantic model. It discovers the available profiles and
provides a clean interface for loading them.

Examples:
    >>> loader = ProfileLoader()
    >>> profile = loader.load_profile("default")
    >>> profile.physics.gravity
    180.0
    >>> loader.list_available_profiles()
    ['default']
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from models.hockey import GameProfile
from tapper.logging import get_logger

log = get_logger('profile_loader')

PACKAGED_PROFILES_DIR = Path(__file__).parent / "profiles"


class ProfileLoader:
    """Loads and validates game profiles from YAML files.

    Attributes:
        profiles_dir: Path to the directory containing profile YAML files

    Examples:
        >>> loader = ProfileLoader()
        >>> loader.profile_exists("default")
        True
    """

    def __init__(self, profiles_dir: Optional[Path] = None):
        """Initialize the profile loader.

        Args:
            profiles_dir: Optional custom path to a profiles directory.
                          Defaults to the profiles shipped with the package.
        """
        self.profiles_dir = Path(profiles_dir) if profiles_dir else PACKAGED_PROFILES_DIR

    def _path_for(self, profile_id: str) -> Path:
        return self.profiles_dir / f"{profile_id}.yaml"

    def load_profile(self, profile_id: str) -> GameProfile:
        """Load and validate a game profile from YAML.

        Args:
            profile_id: The ID of the profile to load (without .yaml extension)

        Returns:
            Validated GameProfile instance

        Raises:
            FileNotFoundError: If the profile YAML file doesn't exist
            ValueError: If the YAML content fails validation
            yaml.YAMLError: If the YAML syntax is malformed
        """
        yaml_path = self._path_for(profile_id)

        if not yaml_path.exists():
            raise FileNotFoundError(
                f"Game profile '{profile_id}' not found. "
                f"Expected file: {yaml_path}"
            )

        return self.load_file(yaml_path)

    def load_file(self, yaml_path: Path) -> GameProfile:
        """Load and validate a profile from an explicit file path."""
        yaml_path = Path(yaml_path)
        try:
            with open(yaml_path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(
                f"Failed to parse YAML file '{yaml_path}': {e}"
            ) from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ValueError(
                f"Invalid game profile in '{yaml_path}': expected a mapping, "
                f"got {type(config_dict).__name__}"
            )

        try:
            profile = GameProfile(**config_dict)
        except ValidationError as e:
            raise ValueError(
                f"Invalid game profile configuration in '{yaml_path}':\n{e}"
            ) from e

        log.debug("Loaded profile '%s' from %s", profile.name, yaml_path)
        return profile

    def list_available_profiles(self) -> List[str]:
        """List all available profile IDs, sorted alphabetically."""
        if not self.profiles_dir.exists():
            return []
        return sorted(f.stem for f in self.profiles_dir.glob("*.yaml"))

    def profile_exists(self, profile_id: str) -> bool:
        return self._path_for(profile_id).exists()

    def get_profile_info(self, profile_id: str) -> dict:
        """Get basic metadata about a profile without full validation.

        Raises:
            FileNotFoundError: If the profile doesn't exist
            yaml.YAMLError: If the YAML is malformed
        """
        yaml_path = self._path_for(profile_id)

        if not yaml_path.exists():
            raise FileNotFoundError(f"Game profile '{profile_id}' not found")

        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        return {
            'name': config_dict.get('name', profile_id),
            'description': config_dict.get('description', ''),
            'version': config_dict.get('version', '0.0.0'),
        }


def load_default_profile() -> GameProfile:
    """The profile shipped with the package."""
    return ProfileLoader().load_profile("default")
