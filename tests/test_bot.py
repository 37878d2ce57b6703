import asyncio
import itertools

import pytest

import bot
from models import BotState, BudgetRange, GroupSize, Transportation
from planner import AdventurePlanner
from services import AdventureRequestClient
from storage import MemoryStorage, PreferenceStore, get_session

from conftest import FakeLLM

_chat_ids = itertools.count(5000)


class FakeChat:
    def __init__(self):
        self.actions = []

    async def send_action(self, action):
        self.actions.append(action)


class FakeMessage:
    """Records everything the bot sends to a chat."""

    def __init__(self, chat_id):
        self.chat_id = chat_id
        self.chat = FakeChat()
        self.replies = []

    async def reply_text(self, text, **kwargs):
        self.replies.append((text, kwargs))


class FakeQuery:
    """A tapped inline button."""

    def __init__(self, message, data):
        self.message = message
        self.data = data
        self.answers = []
        self.edits = []

    async def answer(self, text=None, show_alert=False):
        self.answers.append((text, show_alert))

    async def edit_message_text(self, text, **kwargs):
        self.edits.append(text)

    async def edit_message_reply_markup(self, reply_markup=None):
        self.edits.append(reply_markup)


class FakeUpdate:
    def __init__(self, query):
        self.callback_query = query


class FakeContext:
    def __init__(self, bot_data):
        self.bot_data = bot_data


class CountingStorage(MemoryStorage):
    def __init__(self):
        super().__init__()
        self.writes = 0

    def set(self, key, value):
        self.writes += 1
        super().set(key, value)


@pytest.fixture
def storage():
    return CountingStorage()


@pytest.fixture
def context(storage, payload_text):
    planner = AdventurePlanner(
        AdventureRequestClient(client=FakeLLM(content=payload_text))
    )
    return FakeContext({
        "planner": planner,
        "preferences": PreferenceStore(storage),
    })


@pytest.fixture
def message():
    return FakeMessage(next(_chat_ids))


def _tap(message, data, context):
    query = FakeQuery(message, data)
    asyncio.run(bot.handle_callback(FakeUpdate(query), context))
    return query


def _onboard(message, context):
    session = get_session(message.chat_id)
    asyncio.run(bot._start_onboarding(message, session))
    return session


def test_onboarding_saves_preferences_once(message, context, storage):
    session = _onboard(message, context)

    for data in (
        "int_food", "int_nature", "int_done",
        "bud_low", "trn_transit", "grp_couple",
        "area_langley", "area_done",
    ):
        _tap(message, data, context)

    assert storage.writes == 1
    preferences = context.bot_data["preferences"].load(message.chat_id)
    assert preferences.interests == ("food", "nature")
    assert preferences.budget_range == BudgetRange.LOW
    assert preferences.transportation == Transportation.TRANSIT
    assert preferences.group_size == GroupSize.COUPLE
    assert preferences.favorite_areas == ("langley",)
    assert session.state == BotState.IDLE


def test_interests_done_needs_a_selection(message, context, storage):
    session = _onboard(message, context)

    query = _tap(message, "int_done", context)

    assert query.answers == [("Pick at least one interest!", True)]
    assert session.state == BotState.SELECTING_INTERESTS


def test_areas_done_needs_a_selection(message, context, storage):
    session = _onboard(message, context)
    for data in ("int_food", "int_done", "bud_low", "trn_walking", "grp_solo"):
        _tap(message, data, context)

    query = _tap(message, "area_done", context)

    assert query.answers == [("Pick at least one area!", True)]
    assert session.state == BotState.SELECTING_AREAS
    assert storage.writes == 0


@pytest.mark.parametrize("data", ["bud_cheap", "bud_"])
def test_unknown_budget_option_is_refused(message, context, data):
    session = _onboard(message, context)
    _tap(message, "int_food", context)
    _tap(message, "int_done", context)

    query = _tap(message, data, context)

    assert query.answers == [("Unknown option", True)]
    assert session.state == BotState.SELECTING_BUDGET
    assert session.draft_budget is None


def test_busy_conversation_gets_still_working_reply(message, context):
    session = get_session(message.chat_id)
    session.conversation.begin_pending()

    asyncio.run(bot._run_turn(message, session, "sushi", context))

    assert len(message.replies) == 1
    assert "Still planning" in message.replies[0][0]
    assert session.conversation.messages == []


def test_turn_sends_one_card_per_adventure(message, context):
    session = get_session(message.chat_id)

    asyncio.run(bot._run_turn(message, session, "sushi in Langley", context))

    texts = [text for text, _ in message.replies]
    assert len(texts) == 3
    assert "2 personalized adventures" in texts[0]
    assert texts[1].startswith("🧭 1. Sushi & Sunset in Langley")
    assert texts[2].startswith("🧭 2. Fort Langley Coffee Crawl")
    for _, kwargs in message.replies[1:]:
        assert kwargs["reply_markup"] is not None
    assert len(session.conversation.adventures) == 2
