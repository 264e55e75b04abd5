"""Local in-memory implementation of ReadingProfileProvider."""

from typing import Dict

from ..domain.entities.reading_profile import ReadingProfile
from ..domain.errors import ProfileNotFoundError
from ..domain.interfaces.reading_profile_provider import ReadingProfileProvider


class LocalReadingProfileProvider(ReadingProfileProvider):
    """Local in-memory implementation of the ReadingProfileProvider protocol.

    Stores profiles in a dictionary for testing and development purposes.
    """

    def __init__(self, profiles: Dict[str, ReadingProfile] | None = None):
        """Initialize the provider, optionally with seed profiles.

        Args:
            profiles: Profiles keyed by user ID.
        """
        self._profiles: Dict[str, ReadingProfile] = dict(profiles or {})

    def get_profile(self, user_id: str) -> ReadingProfile:
        """Retrieve a reading profile by user ID from the in-memory dictionary.

        Args:
            user_id: The unique identifier of the user.

        Returns:
            ReadingProfile: The profile entity.

        Raises:
            ProfileNotFoundError: If the user has no profile.
        """
        if user_id not in self._profiles:
            raise ProfileNotFoundError(f"Profile for user {user_id} not found")

        return self._profiles[user_id]

    def save_profile(self, user_id: str, profile: ReadingProfile) -> None:
        """Add or replace a reading profile in the dictionary.

        Args:
            user_id: The unique identifier of the user.
            profile: The reading profile to store.
        """
        self._profiles[user_id] = profile

    def delete_profile(self, user_id: str) -> None:
        """Delete a reading profile from the dictionary.

        Raises:
            ProfileNotFoundError: If the user has no profile.
        """
        if user_id not in self._profiles:
            raise ProfileNotFoundError(f"Profile for user {user_id} not found")

        del self._profiles[user_id]

    def clear(self) -> None:
        """Clear all profiles from the dictionary."""
        self._profiles.clear()
