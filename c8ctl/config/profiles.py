"""Profile store.

Profiles are kept as a JSON array in profiles.json under the user data
directory. Names are unique; adding a profile with an existing name
replaces it.
"""

import json
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from c8ctl.config.models import Profile
from c8ctl.config.paths import ensure_user_data_dir, get_profiles_path
from c8ctl.errors import InvalidProfileError
from c8ctl.logging import get_logger

logger = get_logger(__name__)


def load_profiles() -> list[Profile]:
    """Load all profiles from disk.

    Returns an empty list when the file is missing or unreadable. Entries
    that fail validation are skipped.
    """
    path = get_profiles_path()
    if not path.exists():
        return []

    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug(f"Could not read profiles from {path}: {e}")
        return []

    if not isinstance(data, list):
        logger.debug(f"Ignoring profiles file {path}: expected a JSON array")
        return []

    profiles: list[Profile] = []
    for entry in data:
        try:
            profiles.append(Profile.model_validate(entry))
        except PydanticValidationError as e:
            logger.warning(f"Skipping invalid profile entry in {path}: {e}")
    return profiles


def save_profiles(profiles: list[Profile]) -> None:
    """Write all profiles to disk."""
    ensure_user_data_dir()
    path = get_profiles_path()
    with open(path, "w") as f:
        json.dump([p.to_dict() for p in profiles], f, indent=2)


def get_profile(name: str) -> Optional[Profile]:
    for profile in load_profiles():
        if profile.name == name:
            return profile
    return None


def _describe_error(error: dict[str, Any]) -> str:
    message = error["msg"].removeprefix("Value error, ")
    if error.get("loc"):
        return f"{'.'.join(str(part) for part in error['loc'])}: {message}"
    return message


def build_profile(data: dict[str, Any]) -> Profile:
    """Validate raw profile fields, converting failures to InvalidProfileError."""
    try:
        return Profile.model_validate(data)
    except PydanticValidationError as e:
        reasons = "; ".join(_describe_error(err) for err in e.errors())
        raise InvalidProfileError(
            message=f"Invalid profile: {reasons}",
            error_code="CONFIG-InvalidProfile",
            details={"errors": [err["msg"] for err in e.errors()]},
            suggestion="Provide --base-url, and either OAuth or basic auth credentials",
        ) from e


def add_profile(profile: Union[Profile, dict[str, Any]]) -> Profile:
    """Add a profile, replacing any existing profile with the same name.

    Raises:
        InvalidProfileError: If the profile fails validation
    """
    if not isinstance(profile, Profile):
        profile = build_profile(profile)

    profiles = [p for p in load_profiles() if p.name != profile.name]
    profiles.append(profile)
    save_profiles(profiles)
    logger.debug(f"Saved profile '{profile.name}'")
    return profile


def remove_profile(name: str) -> bool:
    """Remove a profile by name.

    Returns:
        True if a profile was removed, False if none matched
    """
    profiles = load_profiles()
    remaining = [p for p in profiles if p.name != name]
    if len(remaining) == len(profiles):
        return False
    save_profiles(remaining)
    logger.debug(f"Removed profile '{name}'")
    return True
