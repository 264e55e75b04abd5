"""Reading profile provider protocol."""

from typing import Protocol, runtime_checkable

from ..entities.reading_profile import ReadingProfile


@runtime_checkable
class ReadingProfileProvider(Protocol):
    """Protocol for reading profile stores."""

    def get_profile(self, user_id: str) -> ReadingProfile:
        """Retrieve the reading profile of a user.

        Args:
            user_id: The unique identifier of the user.

        Returns:
            ReadingProfile: The profile entity.

        Raises:
            ProfileNotFoundError: If the user has no profile.
        """
        ...

    def save_profile(self, user_id: str, profile: ReadingProfile) -> None:
        """Create or overwrite the reading profile of a user."""
        ...
