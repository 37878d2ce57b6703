"""
Data models for the Adventure Planner Bot.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from errors import ConversationBusy


class BotState(Enum):
    """Machine states for the bot conversation flow."""
    IDLE = "idle"
    SELECTING_INTERESTS = "selecting_interests"
    SELECTING_BUDGET = "selecting_budget"
    SELECTING_TRANSPORT = "selecting_transport"
    SELECTING_GROUP = "selecting_group"
    SELECTING_AREAS = "selecting_areas"


class BudgetRange(str, Enum):
    LOW = "low"          # Under $20 per person
    MEDIUM = "medium"    # $20 - $50 per person
    HIGH = "high"        # $50+ per person


class Transportation(str, Enum):
    TRANSIT = "transit"
    DRIVING = "driving"
    WALKING = "walking"
    RIDESHARE = "rideshare"


class GroupSize(str, Enum):
    SOLO = "solo"
    COUPLE = "couple"
    SMALL = "small"      # 3-4 people
    LARGE = "large"      # 5+ people


def _unique(tags) -> tuple:
    seen = []
    for tag in tags:
        if tag not in seen:
            seen.append(tag)
    return tuple(seen)


@dataclass(frozen=True)
class UserPreferences:
    """Preferences collected during onboarding."""
    interests: tuple
    budget_range: BudgetRange
    transportation: Transportation
    group_size: GroupSize
    favorite_areas: tuple

    def __post_init__(self):
        # Tags keep selection order, without repeats
        object.__setattr__(self, "interests", _unique(self.interests))
        object.__setattr__(
            self, "favorite_areas", _unique(self.favorite_areas)
        )

    def to_dict(self) -> dict:
        return {
            "interests": list(self.interests),
            "budgetRange": self.budget_range.value,
            "transportation": self.transportation.value,
            "groupSize": self.group_size.value,
            "favoriteAreas": list(self.favorite_areas),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserPreferences":
        """
        Build preferences from their stored form.

        Raises:
            ValueError: if a field is missing or holds an unknown value
        """
        try:
            interests = data["interests"]
            favorite_areas = data["favoriteAreas"]
            budget_range = BudgetRange(data["budgetRange"])
            transportation = Transportation(data["transportation"])
            group_size = GroupSize(data["groupSize"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Incomplete preferences: {e}") from e

        for tags in (interests, favorite_areas):
            if not isinstance(tags, list) or not all(
                isinstance(tag, str) for tag in tags
            ):
                raise ValueError("Preference tags must be a list of strings")

        return cls(
            interests=tuple(interests),
            budget_range=budget_range,
            transportation=transportation,
            group_size=group_size,
            favorite_areas=tuple(favorite_areas),
        )


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """One entry of the conversation transcript."""
    role: Role
    content: str


class Activity(BaseModel):
    """One stop within an adventure."""
    model_config = ConfigDict(frozen=True)

    time: str
    place: str
    type: str               # Free-form: restaurant, park, cafe, ...
    description: str
    tip: Optional[str] = None


class Adventure(BaseModel):
    """A complete suggested outing returned by the model."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    duration: str
    budget: str
    description: str
    activities: list[Activity]
    transport: str
    total_cost: str = Field(alias="totalCost")


@dataclass
class ConversationState:
    """
    Transcript and current adventure batch for one conversation.

    The transcript is append-only. The adventure batch is only ever
    replaced as a whole.
    """
    messages: list[Message] = field(default_factory=list)
    adventures: list[Adventure] = field(default_factory=list)
    pending: bool = False

    @property
    def is_pending(self) -> bool:
        return self.pending

    def append_user_message(self, text: str) -> Message:
        message = Message(role=Role.USER, content=text)
        self.messages.append(message)
        return message

    def append_assistant_message(self, text: str) -> Message:
        message = Message(role=Role.ASSISTANT, content=text)
        self.messages.append(message)
        return message

    def replace_adventures(self, adventures: list[Adventure]) -> None:
        self.adventures = list(adventures)

    def begin_pending(self) -> None:
        """
        Mark a request as in flight.

        Raises:
            ConversationBusy: if a request is already in flight
        """
        if self.pending:
            raise ConversationBusy("A request is already in progress")
        self.pending = True

    def end_pending(self) -> None:
        self.pending = False

    def clear(self) -> None:
        """Start over with an empty transcript (e.g. on /new)."""
        self.messages = []
        self.adventures = []


@dataclass
class UserSession:
    """User session state for the conversation flow."""
    chat_id: int
    state: BotState = BotState.IDLE

    conversation: ConversationState = field(
        default_factory=ConversationState
    )

    # Onboarding selections, collected before preferences are saved
    draft_interests: list[str] = field(default_factory=list)
    draft_areas: list[str] = field(default_factory=list)
    draft_budget: Optional[BudgetRange] = None
    draft_transport: Optional[Transportation] = None
    draft_group: Optional[GroupSize] = None

    def reset_draft(self) -> None:
        self.draft_interests = []
        self.draft_areas = []
        self.draft_budget = None
        self.draft_transport = None
        self.draft_group = None
