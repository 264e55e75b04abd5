"""Tests for DynamoDB reading profile provider."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from easyread.domain.entities import ReadingProfile, SentenceLevel, VocabularyLevel
from easyread.domain.errors import AdaptationError, ErrorKind, ProfileInvalidError, ProfileNotFoundError
from easyread.infrastructure.dynamodb_reading_profile_provider import DynamoDBReadingProfileProvider


@pytest.fixture
def mock_dynamodb_table():
    """Create a mock DynamoDB table."""
    with patch("easyread.infrastructure.dynamodb_reading_profile_provider.boto3") as mock_boto3:
        mock_resource = MagicMock()
        mock_table = MagicMock()
        mock_boto3.resource.return_value = mock_resource
        mock_resource.Table.return_value = mock_table
        yield mock_table


@pytest.fixture
def provider(mock_dynamodb_table):
    """Create a DynamoDB reading profile provider instance."""
    return DynamoDBReadingProfileProvider(table_name="test-users", region_name="us-east-1")


@pytest.fixture
def sample_dynamodb_item():
    """Create a sample DynamoDB item, with numbers as boto3 returns them."""
    return {
        "userId": "user-123",
        "readingProfile": {"sentence": Decimal("2"), "vocabulary": Decimal("1")},
        "knownTopics": ["IT", "경제"],
        "getRecommendations": False,
        "email": "reader@example.com",
        "displayName": "Reader",
        "updatedAt": "2026-01-13T10:00:00+00:00",
    }


class TestDynamoDBReadingProfileProvider:
    """Test cases for DynamoDBReadingProfileProvider."""

    def test_init(self, provider, mock_dynamodb_table):
        """Test provider initialization."""
        assert provider.table_name == "test-users"
        assert provider.table == mock_dynamodb_table

    def test_get_profile_success(self, provider, mock_dynamodb_table, sample_dynamodb_item):
        """Test successful profile retrieval."""
        mock_dynamodb_table.get_item.return_value = {"Item": sample_dynamodb_item}

        result = provider.get_profile("user-123")

        assert result.sentence is SentenceLevel.RESTRUCTURE
        assert result.vocabulary is VocabularyLevel.SUBSTITUTE
        assert result.known_topics == ["IT", "경제"]
        assert result.get_recommendations is False
        assert result.display_name == "Reader"
        assert result.updated_at == datetime(2026, 1, 13, 10, 0, 0, tzinfo=timezone.utc)
        mock_dynamodb_table.get_item.assert_called_once_with(Key={"userId": "user-123"})

    def test_get_profile_not_found(self, provider, mock_dynamodb_table):
        """Test profile not found scenario."""
        mock_dynamodb_table.get_item.return_value = {}

        with pytest.raises(ProfileNotFoundError, match="Profile for user nobody not found"):
            provider.get_profile("nobody")

    def test_get_profile_without_levels_defaults_to_none(self, provider, mock_dynamodb_table):
        mock_dynamodb_table.get_item.return_value = {"Item": {"userId": "user-123"}}

        result = provider.get_profile("user-123")

        assert result.sentence is SentenceLevel.NONE
        assert result.vocabulary is VocabularyLevel.NONE
        assert result.known_topics == []
        assert result.get_recommendations is True
        assert not result.requests_adaptation

    @pytest.mark.parametrize("levels", [
        {"sentence": Decimal("7"), "vocabulary": Decimal("1")},
        {"sentence": Decimal("1"), "vocabulary": Decimal("-1")},
        {"sentence": "hard", "vocabulary": Decimal("1")},
    ])
    def test_get_profile_with_invalid_level(self, provider, mock_dynamodb_table, sample_dynamodb_item, levels):
        """Stored levels outside 0-3 surface as a typed error."""
        mock_dynamodb_table.get_item.return_value = {"Item": dict(sample_dynamodb_item, readingProfile=levels)}

        with pytest.raises(ProfileInvalidError, match="Stored profile for user user-123 is invalid") as exc_info:
            provider.get_profile("user-123")

        assert isinstance(exc_info.value, AdaptationError)
        assert exc_info.value.kind is ErrorKind.PROFILE_INVALID
        assert exc_info.value.details

    def test_save_profile(self, provider, mock_dynamodb_table):
        """Test saving a profile writes the camelCase item."""
        profile = ReadingProfile(
            sentence=SentenceLevel.SPLIT,
            vocabulary=VocabularyLevel.INTERPRET,
            known_topics=["과학"],
            email="reader@example.com",
            updated_at=datetime(2026, 1, 13, 10, 0, 0, tzinfo=timezone.utc),
        )

        provider.save_profile("user-123", profile)

        mock_dynamodb_table.put_item.assert_called_once_with(Item={
            "userId": "user-123",
            "readingProfile": {"sentence": 1, "vocabulary": 3},
            "knownTopics": ["과학"],
            "getRecommendations": True,
            "email": "reader@example.com",
            "updatedAt": "2026-01-13T10:00:00+00:00",
        })
