"""
Turn handling for a conversation.

A turn goes Idle -> Pending -> Idle: the user's message is recorded, one
request goes out, and the outcome (adventures or an error notice) is
recorded as the assistant's reply.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from errors import AdventureRequestError
from models import Adventure, ConversationState, UserPreferences
from prompts import compose_prompt

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """Outcome of one submitted message."""
    adventures: list[Adventure] = field(default_factory=list)
    error: Optional[AdventureRequestError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def announce(count: int) -> str:
    """Assistant reply for a successful batch."""
    if count == 0:
        return (
            "I couldn't come up with any adventures for that. "
            "Try adding an area, a time or an interest!"
        )
    return (
        f"I've created {count} personalized adventure"
        f"{'s' if count > 1 else ''} for you! Check them out below:"
    )


class AdventurePlanner:
    """Runs conversation turns against an AdventureRequestClient."""

    def __init__(self, client):
        self.client = client

    async def submit(
        self,
        conversation: ConversationState,
        text: str,
        preferences: Optional[UserPreferences] = None
    ) -> Optional[TurnResult]:
        """
        Submit a user message and wait for the assistant's answer.

        Args:
            conversation: Conversation the turn belongs to
            text: Message typed by the user
            preferences: Stored preferences for this user, if any

        Returns:
            TurnResult, or None when the message is blank

        Raises:
            ConversationBusy: a turn is already in flight
        """
        user_message = text.strip()
        if not user_message:
            return None

        conversation.begin_pending()
        try:
            conversation.append_user_message(user_message)
            conversation.replace_adventures([])

            prompt = compose_prompt(user_message, preferences)
            try:
                adventures = await asyncio.to_thread(
                    self.client.request_adventures, prompt
                )
            except AdventureRequestError as e:
                logger.error(
                    f"Turn failed with {type(e).__name__}: {e.detail}"
                )
                conversation.append_assistant_message(e.notice)
                return TurnResult(error=e)

            conversation.replace_adventures(adventures)
            conversation.append_assistant_message(announce(len(adventures)))
            return TurnResult(adventures=adventures)
        finally:
            conversation.end_pending()
