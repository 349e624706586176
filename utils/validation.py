"""
Validation Utilities
Helper functions for validating Discord IDs and configuration values
"""

import re
from typing import Any, List, Optional, Union

# Discord snowflake ID pattern: 17-20 digits
SNOWFLAKE_REGEX = re.compile(r"^[0-9]{17,20}$")

VALID_STATUSES = ["online", "idle", "dnd", "invisible"]

VALID_ACTIVITY_TYPES = ["PLAYING", "STREAMING", "LISTENING", "WATCHING", "COMPETING"]


class ValidationResult:
    """Result of a validation operation."""

    def __init__(
        self,
        valid: bool,
        error: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        self.valid = valid
        self.error = error
        self.value = value

    def __bool__(self) -> bool:
        return self.valid


class ValidationUtils:
    """Utility class for input validation."""

    @staticmethod
    def is_valid_snowflake(id_value: Union[str, int]) -> bool:
        """
        Check if value is a valid Discord snowflake ID.

        Args:
            id_value: ID to validate

        Returns:
            True if valid snowflake
        """
        if isinstance(id_value, bool) or not isinstance(id_value, (str, int)):
            return False
        return bool(SNOWFLAKE_REGEX.match(str(id_value).strip()))

    @staticmethod
    def parse_id_list(raw: str) -> ValidationResult:
        """
        Parse a comma-separated list of user IDs.

        Args:
            raw: e.g. "123456789012345678, 234567890123456789"

        Returns:
            ValidationResult whose value is a list of ints
        """
        ids: List[int] = []
        for part in raw.split(","):
            part = part.strip()
            if not part:
                continue
            if not ValidationUtils.is_valid_snowflake(part):
                return ValidationResult(valid=False, error=f"Invalid user ID: {part}")
            ids.append(int(part))
        return ValidationResult(valid=True, value=ids)

    @staticmethod
    def validate_status(status: str) -> ValidationResult:
        """Validate a presence status name."""
        if status not in VALID_STATUSES:
            return ValidationResult(
                valid=False,
                error=f"BOT_STATUS must be one of {', '.join(VALID_STATUSES)}",
            )
        return ValidationResult(valid=True, value=status)

    @staticmethod
    def validate_activity_type(activity_type: str) -> ValidationResult:
        """Validate a presence activity type name."""
        normalized = activity_type.upper()
        if normalized not in VALID_ACTIVITY_TYPES:
            return ValidationResult(
                valid=False,
                error=f"BOT_ACTIVITY_TYPE must be one of {', '.join(VALID_ACTIVITY_TYPES)}",
            )
        return ValidationResult(valid=True, value=normalized)
