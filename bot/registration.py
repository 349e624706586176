"""
Command registration
Uploads the loaded command definitions to Discord, either once for the whole
application or once per guild
"""

import asyncio
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence

from utils.logger import get_logger

Payloads = List[Dict[str, Any]]


class RegistrationMode(Enum):
    """Where slash commands get registered. Fixed for the process lifetime."""

    APPLICATION = "application"
    PER_GUILD = "guild"

    @classmethod
    def from_flag(cls, register_on_bot: bool) -> "RegistrationMode":
        return cls.APPLICATION if register_on_bot else cls.PER_GUILD


class RegistrationError(Exception):
    """One or more command uploads failed. Not retried."""

    def __init__(self, failed_scopes: Sequence[int] = (), application_failed: bool = False):
        self.failed_scopes = list(failed_scopes)
        self.application_failed = application_failed
        parts = []
        if application_failed:
            parts.append("application")
        parts.extend(f"guild {guild_id}" for guild_id in self.failed_scopes)
        super().__init__(f"Command registration failed for: {', '.join(parts)}")


class CommandUploader:
    """Bulk-overwrite endpoints for application commands."""

    def __init__(self, http: Any, application_id: int):
        self.http = http
        self.application_id = application_id

    async def put_application_commands(self, payloads: Payloads) -> Any:
        return await self.http.bulk_upsert_global_commands(self.application_id, payloads)

    async def put_guild_commands(self, guild_id: int, payloads: Payloads) -> Any:
        return await self.http.bulk_upsert_guild_commands(self.application_id, guild_id, payloads)


class RegistrationSynchronizer:
    """Reconciles Discord's stored commands with the registry."""

    def __init__(self, uploader: CommandUploader, mode: RegistrationMode):
        self.logger = get_logger("Registration")
        self.uploader = uploader
        self.mode = mode

    async def sync(self, payloads: Payloads, guild_ids: Iterable[int]) -> None:
        """
        Upload every command definition.

        In application mode the full set replaces the application's commands.
        In per-guild mode each known guild gets the full set while the
        application's commands are cleared, all concurrently.

        Raises:
            RegistrationError: listing every scope whose upload failed
        """
        if self.mode is RegistrationMode.APPLICATION:
            self.logger.info(f"Updating {len(payloads)} commands on the application...")
            try:
                await self.uploader.put_application_commands(payloads)
            except Exception as e:
                self.logger.error(f"Application command upload failed: {e}")
                raise RegistrationError(application_failed=True) from e
            return

        guild_ids = list(guild_ids)
        self.logger.info(f"Updating {len(payloads)} commands in {len(guild_ids)} guilds...")

        results = await asyncio.gather(
            *(self.uploader.put_guild_commands(guild_id, payloads) for guild_id in guild_ids),
            self.uploader.put_application_commands([]),
            return_exceptions=True,
        )

        failed_scopes = []
        for guild_id, result in zip(guild_ids, results):
            if isinstance(result, BaseException):
                self.logger.error(f"Command upload to guild {guild_id} failed: {result}")
                failed_scopes.append(guild_id)

        application_result = results[-1]
        application_failed = isinstance(application_result, BaseException)
        if application_failed:
            self.logger.error(f"Clearing application commands failed: {application_result}")

        if failed_scopes or application_failed:
            raise RegistrationError(failed_scopes, application_failed)

    async def register_guild(self, guild_id: int, payloads: Payloads) -> bool:
        """
        Upload the command set to a single newly joined guild.

        Only meaningful in per-guild mode; failures are logged, not raised.
        """
        if self.mode is not RegistrationMode.PER_GUILD:
            return False

        try:
            await self.uploader.put_guild_commands(guild_id, payloads)
        except Exception as e:
            self.logger.error(f"Command upload to new guild {guild_id} failed: {e}")
            return False

        self.logger.info(f"Registered commands in guild {guild_id}")
        return True
