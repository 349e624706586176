"""
Presence
Sets the bot's displayed status and activity once registration is done
"""

from typing import Any, Optional

import discord

from utils.logger import get_logger


class PresencePublisher:
    """One-shot status/activity publisher. Purely cosmetic."""

    def __init__(
        self,
        client: Any,
        status: str = "online",
        activity_type: str = "LISTENING",
        activity_name: str = "",
        activity_url: str = "",
    ):
        self.logger = get_logger("Presence")
        self.client = client
        self.status = status
        self.activity_type = activity_type
        self.activity_name = activity_name
        self.activity_url = activity_url

    @classmethod
    def from_config(cls, client: Any, config: Any) -> "PresencePublisher":
        return cls(
            client,
            status=config.BOT_STATUS,
            activity_type=config.BOT_ACTIVITY_TYPE,
            activity_name=config.BOT_ACTIVITY,
            activity_url=config.BOT_ACTIVITY_URL,
        )

    def build_activity(self) -> Optional[discord.BaseActivity]:
        """Build the configured activity, or None when no name is set."""
        if not self.activity_name:
            return None

        activity_type = discord.ActivityType[self.activity_type.lower()]
        url = self.activity_url or None

        if activity_type is discord.ActivityType.streaming and url:
            return discord.Streaming(name=self.activity_name, url=url)
        return discord.Activity(type=activity_type, name=self.activity_name, url=url)

    async def publish(self) -> bool:
        """
        Set the presence.

        Returns:
            True on success; failures are logged and never raised
        """
        try:
            await self.client.change_presence(
                status=discord.Status(self.status),
                activity=self.build_activity(),
            )
        except Exception as e:
            self.logger.warning(f"Could not set presence: {e}")
            return False

        self.logger.debug(f"Presence set: {self.status} / {self.activity_type} {self.activity_name}")
        return True
