"""DynamoDB implementation of ReadingProfileProvider."""

from datetime import datetime
from typing import Any, Dict

import boto3

from ..domain.entities.reading_profile import ReadingProfile, SentenceLevel, VocabularyLevel
from ..domain.errors import ProfileInvalidError, ProfileNotFoundError
from ..domain.interfaces.reading_profile_provider import ReadingProfileProvider


class DynamoDBReadingProfileProvider(ReadingProfileProvider):
    """DynamoDB implementation of the ReadingProfileProvider protocol.

    Items are keyed by ``userId`` and keep the levels under a nested
    ``readingProfile`` map.
    """

    def __init__(self, table_name: str, region_name: str = "us-east-1"):
        """Initialize the DynamoDB reading profile provider.

        Args:
            table_name: The name of the DynamoDB table.
            region_name: AWS region name (default: us-east-1).
        """
        self.table_name = table_name
        self.dynamodb = boto3.resource("dynamodb", region_name=region_name)
        self.table = self.dynamodb.Table(table_name)

    def get_profile(self, user_id: str) -> ReadingProfile:
        """Retrieve a reading profile by user ID from DynamoDB.

        Args:
            user_id: The unique identifier of the user.

        Returns:
            ReadingProfile: The profile entity.

        Raises:
            ProfileNotFoundError: If the user has no profile.
        """
        response = self.table.get_item(Key={"userId": user_id})

        if "Item" not in response:
            raise ProfileNotFoundError(f"Profile for user {user_id} not found")

        return self._item_to_profile(response["Item"])

    def save_profile(self, user_id: str, profile: ReadingProfile) -> None:
        """Overwrite the reading profile item of a user.

        Args:
            user_id: The unique identifier of the user.
            profile: The profile to store.
        """
        self.table.put_item(Item=self._profile_to_item(user_id, profile))

    def _profile_to_item(self, user_id: str, profile: ReadingProfile) -> Dict[str, Any]:
        item: Dict[str, Any] = {
            "userId": user_id,
            "readingProfile": {
                "sentence": profile.sentence.value,
                "vocabulary": profile.vocabulary.value,
            },
            "knownTopics": list(profile.known_topics),
            "getRecommendations": profile.get_recommendations,
        }
        if profile.email is not None:
            item["email"] = profile.email
        if profile.display_name is not None:
            item["displayName"] = profile.display_name
        if profile.updated_at is not None:
            item["updatedAt"] = profile.updated_at.isoformat()
        return item

    def _item_to_profile(self, item: Dict[str, Any]) -> ReadingProfile:
        """Convert a DynamoDB item to a ReadingProfile entity.

        Args:
            item: The DynamoDB item.

        Returns:
            ReadingProfile: The profile entity.

        Raises:
            ProfileInvalidError: If a stored level is outside 0-3.
        """
        # Numbers come back as Decimal
        levels = item.get("readingProfile") or {}
        updated_at = item.get("updatedAt")

        try:
            sentence = SentenceLevel(int(levels.get("sentence", 0)))
            vocabulary = VocabularyLevel(int(levels.get("vocabulary", 0)))
        except (TypeError, ValueError) as e:
            raise ProfileInvalidError(
                f"Stored profile for user {item.get('userId')} is invalid", details=str(e)
            ) from e

        return ReadingProfile(
            sentence=sentence,
            vocabulary=vocabulary,
            known_topics=list(item.get("knownTopics") or []),
            email=item.get("email"),
            display_name=item.get("displayName"),
            get_recommendations=bool(item.get("getRecommendations", True)),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )
