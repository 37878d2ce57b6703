"""
Adventure Planner Bot - Entry Point and Handlers.

A Telegram bot that plans short local outings around Metro Vancouver.
Users describe what they feel like doing, and an LLM suggests a few
complete adventures shaped by their onboarding preferences.
"""  # Noqa: E501

import logging
from telegram import Update, Message
from telegram.constants import ChatAction
from telegram.ext import (
    Application,
    CommandHandler,
    CallbackQueryHandler,
    MessageHandler,
    filters,
    ContextTypes
)

from config import (
    TELEGRAM_BOT_TOKEN,
    PLACE,
    AREAS,
    INTERESTS,
    EXAMPLE_PROMPTS,
    LLM_MODEL,
    PREFERENCES_FILE
)
from errors import ConversationBusy
from formatting import format_adventure, maps_url, split_into_chunks
from keyboards import (
    build_interests_keyboard,
    build_areas_keyboard,
    build_budget_keyboard,
    build_transport_keyboard,
    build_group_keyboard,
    build_examples_keyboard,
    build_maps_keyboard
)
from models import (
    BotState,
    BudgetRange,
    GroupSize,
    Transportation,
    UserPreferences,
    UserSession
)
from planner import AdventurePlanner
from services import AdventureRequestClient
from storage import (
    JsonFileStorage,
    PreferenceStore,
    get_session,
    save_session
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO
)
logger = logging.getLogger(__name__)


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /start command - Welcome message.

    New users go straight into onboarding.
    """
    chat_id = update.effective_chat.id
    session = get_session(chat_id)
    preferences = context.bot_data["preferences"].load(chat_id)

    await update.message.reply_text(
        f"👋 Welcome to {PLACE} Adventures!\n\n"
        "I'm your AI-powered local adventure planner for "
        f"{', '.join(AREAS.values())}.\n\n"
        "🔹 /preferences - Update your preferences\n"
        "🔹 /new - Start a new conversation\n"
        "🔹 /help - See all commands"
    )

    if preferences is None:
        await _start_onboarding(update.message, session)
    else:
        await _show_examples(update.message)


async def help_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /help command - Show available commands.
    """
    await update.message.reply_text(
        f"📖 *{PLACE} Adventures - Help*\n\n"
        "*Commands:*\n"
        "/start - Welcome message\n"
        "/preferences - Set your interests, budget and favorite areas\n"
        "/new - Clear the conversation and start over\n"
        "/help - Show this help message\n\n"
        "*How it works:*\n"
        "1️⃣ Tell me when, who, what and where\n"
        "2️⃣ I'll plan 2-3 adventures of 2-5 hours\n"
        "3️⃣ Open any of them in Google Maps\n\n"
        "💡 Tip: The more detail you give, the better the plans.",
        parse_mode="Markdown"
    )


async def preferences_cmd(
    update: Update, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """
    Handle /preferences command - Run onboarding again.
    """
    session = get_session(update.effective_chat.id)
    await _start_onboarding(update.message, session)


async def new_cmd(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /new command - Clear the conversation.
    """
    session = get_session(update.effective_chat.id)

    if session.conversation.is_pending:
        await update.message.reply_text(
            "⏳ I'm still working on your last request. "
            "Try again once it's done."
        )
        return

    session.conversation.clear()
    session.state = BotState.IDLE
    save_session(session)

    await update.message.reply_text(
        "🧹 Fresh start! What kind of adventure are you looking for?"
    )
    await _show_examples(update.message)


async def handle_callback(
    update: Update, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """
    Handle inline buttons (callback queries).

    Callback data format:
    - int_food / int_done - Toggle interest / done selecting
    - bud_low - Pick budget range
    - trn_transit - Pick transportation
    - grp_couple - Pick group size
    - area_langley / area_done - Toggle area / done selecting
    - ex_0 - Submit an example request
    """
    query = update.callback_query

    chat_id = query.message.chat_id
    data = query.data
    session = get_session(chat_id)

    logger.info(
        f"Callback from {chat_id}: {data} "
        f"(state: {session.state.value})"
    )

    # Route to appropriate handler
    if data.startswith("int_"):
        await _handle_interest(query, session, data)
    elif data.startswith("bud_"):
        await _handle_budget(query, session, data)
    elif data.startswith("trn_"):
        await _handle_transport(query, session, data)
    elif data.startswith("grp_"):
        await _handle_group(query, session, data)
    elif data.startswith("area_"):
        await _handle_area(query, session, data, context)
    elif data.startswith("ex_"):
        await _handle_example(query, session, data, context)
    else:
        await query.answer("Unknown action", show_alert=True)

    save_session(session)


async def handle_text(
    update: Update, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """
    Handle text messages.
    Add handler AFTER command handlers to avoid conflicts.

    In IDLE state every message is an adventure request.
    """
    chat_id = update.effective_chat.id
    text = update.message.text
    session = get_session(chat_id)

    logger.info(
        f"Text from {chat_id}: {text[:40]}... (state: {session.state.value})"
    )

    if session.state == BotState.IDLE:
        await _run_turn(update.message, session, text, context)
    else:
        await update.message.reply_text(
            "👆 Please use the buttons above to finish setting up "
            "your preferences.\n"
            "Use /preferences to start them over."
        )


async def _run_turn(
    message: Message,
    session: UserSession,
    text: str,
    context: ContextTypes.DEFAULT_TYPE
) -> None:
    """
    Submit a request and send the reply plus one card per adventure.
    """
    planner: AdventurePlanner = context.bot_data["planner"]
    preferences = context.bot_data["preferences"].load(session.chat_id)

    await message.chat.send_action(ChatAction.TYPING)

    try:
        result = await planner.submit(session.conversation, text, preferences)
    except ConversationBusy:
        await message.reply_text(
            "⏳ Still planning your last request. Hang tight!"
        )
        return

    if result is None:
        return

    save_session(session)
    reply = session.conversation.messages[-1].content

    if not result.ok:
        await message.reply_text(f"❌ {reply}")
        return

    await message.reply_text(f"✨ {reply}")

    for i, adventure in enumerate(result.adventures, start=1):
        await _send_adventure(message, adventure, i)

    logger.info(
        f"Sent {len(result.adventures)} adventures to {session.chat_id}"
    )


async def _send_adventure(message: Message, adventure, index: int) -> None:
    """
    Send one adventure card, chunking if necessary.
    The last chunk carries the Google Maps button.
    """
    keyboard = (
        build_maps_keyboard(maps_url(adventure))
        if adventure.activities else None
    )
    chunks = split_into_chunks(format_adventure(adventure, index))

    for chunk in chunks[:-1]:
        await message.reply_text(chunk, disable_web_page_preview=True)

    await message.reply_text(
        chunks[-1],
        reply_markup=keyboard,
        disable_web_page_preview=True
    )


async def _show_examples(message: Message) -> None:
    await message.reply_text(
        "✨ *What kind of adventure are you looking for?*\n\n"
        "Tell me about your plans, or try one of these:",
        reply_markup=build_examples_keyboard(),
        parse_mode="Markdown"
    )


async def _start_onboarding(message: Message, session: UserSession) -> None:
    """
    Reset the onboarding draft and ask for interests.
    """
    session.reset_draft()
    session.state = BotState.SELECTING_INTERESTS
    save_session(session)

    await message.reply_text(
        "🧭 *Let's personalize your adventures!*\n\n"
        "*What are your interests?* Tap all that apply:",
        reply_markup=build_interests_keyboard(session.draft_interests),
        parse_mode="Markdown"
    )

    logger.info(f"Started onboarding for {session.chat_id}")


async def _handle_interest(query, session: UserSession, data: str) -> None:
    """
    Handle interest toggles and the 'Done' button.
    """
    if session.state != BotState.SELECTING_INTERESTS:
        await query.answer(
            "Please use /preferences to start over.", show_alert=True
        )
        return

    choice = data.split("_", 1)[1]

    if choice == "done":
        if not session.draft_interests:
            await query.answer("Pick at least one interest!", show_alert=True)
            return
        await query.answer()

        summary = ", ".join(INTERESTS[i] for i in session.draft_interests)
        session.state = BotState.SELECTING_BUDGET
        await query.edit_message_text(f"✅ Interests: {summary}")
        await query.message.reply_text(
            "💵 *What's your typical budget?*",
            reply_markup=build_budget_keyboard(),
            parse_mode="Markdown"
        )
        return

    if choice not in INTERESTS:
        await query.answer("Unknown interest", show_alert=True)
        return

    if choice in session.draft_interests:
        session.draft_interests.remove(choice)
        await query.answer("Deselected")
    else:
        session.draft_interests.append(choice)
        await query.answer("✅ Selected!")

    await query.edit_message_reply_markup(
        reply_markup=build_interests_keyboard(session.draft_interests)
    )


async def _handle_budget(query, session: UserSession, data: str) -> None:
    if session.state != BotState.SELECTING_BUDGET:
        await query.answer(
            "Please use /preferences to start over.", show_alert=True
        )
        return
    try:
        session.draft_budget = BudgetRange(data.split("_", 1)[1])
    except ValueError:
        await query.answer("Unknown option", show_alert=True)
        return
    await query.answer()

    session.state = BotState.SELECTING_TRANSPORT

    await query.edit_message_text(
        f"✅ Budget: {session.draft_budget.value}"
    )
    await query.message.reply_text(
        "🚦 *How do you usually get around?*",
        reply_markup=build_transport_keyboard(),
        parse_mode="Markdown"
    )


async def _handle_transport(query, session: UserSession, data: str) -> None:
    if session.state != BotState.SELECTING_TRANSPORT:
        await query.answer(
            "Please use /preferences to start over.", show_alert=True
        )
        return
    try:
        session.draft_transport = Transportation(data.split("_", 1)[1])
    except ValueError:
        await query.answer("Unknown option", show_alert=True)
        return
    await query.answer()

    session.state = BotState.SELECTING_GROUP

    await query.edit_message_text(
        f"✅ Transportation: {session.draft_transport.value}"
    )
    await query.message.reply_text(
        "👥 *Typical group size?*",
        reply_markup=build_group_keyboard(),
        parse_mode="Markdown"
    )


async def _handle_group(query, session: UserSession, data: str) -> None:
    if session.state != BotState.SELECTING_GROUP:
        await query.answer(
            "Please use /preferences to start over.", show_alert=True
        )
        return
    try:
        session.draft_group = GroupSize(data.split("_", 1)[1])
    except ValueError:
        await query.answer("Unknown option", show_alert=True)
        return
    await query.answer()

    session.state = BotState.SELECTING_AREAS

    await query.edit_message_text(
        f"✅ Group size: {session.draft_group.value}"
    )
    await query.message.reply_text(
        f"📍 *Favorite {PLACE} areas?* Tap all that apply:",
        reply_markup=build_areas_keyboard(session.draft_areas),
        parse_mode="Markdown"
    )


async def _handle_area(
    query,
    session: UserSession,
    data: str,
    context: ContextTypes.DEFAULT_TYPE
) -> None:
    """
    Handle area toggles. 'Done' completes onboarding.
    """
    if session.state != BotState.SELECTING_AREAS:
        await query.answer(
            "Please use /preferences to start over.", show_alert=True
        )
        return

    choice = data.split("_", 1)[1]

    if choice == "done":
        if not session.draft_areas:
            await query.answer("Pick at least one area!", show_alert=True)
            return
        await query.answer()
        await _complete_onboarding(query, session, context)
        return

    if choice not in AREAS:
        await query.answer("Unknown area", show_alert=True)
        return

    if choice in session.draft_areas:
        session.draft_areas.remove(choice)
        await query.answer("Deselected")
    else:
        session.draft_areas.append(choice)
        await query.answer("✅ Selected!")

    await query.edit_message_reply_markup(
        reply_markup=build_areas_keyboard(session.draft_areas)
    )


async def _complete_onboarding(
    query, session: UserSession, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """
    Save the collected preferences and return to IDLE.
    """
    preferences = UserPreferences(
        interests=tuple(session.draft_interests),
        budget_range=session.draft_budget,
        transportation=session.draft_transport,
        group_size=session.draft_group,
        favorite_areas=tuple(session.draft_areas)
    )
    saved = context.bot_data["preferences"].save(
        session.chat_id, preferences
    )

    session.reset_draft()
    session.state = BotState.IDLE

    areas = ", ".join(AREAS[a] for a in preferences.favorite_areas)
    await query.edit_message_text(f"✅ Favorite areas: {areas}")

    if saved:
        note = "🎉 *You're all set!* I'll keep these in mind."
    else:
        note = (
            "🎉 *You're all set!*\n"
            "_(I couldn't save your preferences, so I may ask again later.)_"
        )
    await query.message.reply_text(note, parse_mode="Markdown")
    await _show_examples(query.message)


async def _handle_example(
    query,
    session: UserSession,
    data: str,
    context: ContextTypes.DEFAULT_TYPE
) -> None:
    """
    Submit one of the example prompts as if the user typed it.
    """
    try:
        prompt = EXAMPLE_PROMPTS[int(data.split("_", 1)[1])]
    except (ValueError, IndexError):
        await query.answer("Unknown example", show_alert=True)
        return

    if session.state != BotState.IDLE:
        await query.answer(
            "Please finish setting up your preferences first.",
            show_alert=True
        )
        return
    await query.answer()

    await query.message.reply_text(f"💬 {prompt}")
    await _run_turn(query.message, session, prompt, context)


async def error_handler(
    update: object, context: ContextTypes.DEFAULT_TYPE
) -> None:
    """Log errors."""
    logger.error(f"Update {update} caused error: {context.error}")


def main() -> None:
    if not TELEGRAM_BOT_TOKEN:
        raise ValueError(
            "TELEGRAM_BOT_TOKEN not set! "
            "Create a .env file with your bot token."
        )

    # Updates for different chats must not wait on each other's LLM
    # calls; per-chat ordering is guarded by the pending flag.
    app = (
        Application.builder()
        .token(TELEGRAM_BOT_TOKEN)
        .concurrent_updates(True)
        .build()
    )

    app.bot_data["planner"] = AdventurePlanner(AdventureRequestClient())
    app.bot_data["preferences"] = PreferenceStore(
        JsonFileStorage(PREFERENCES_FILE)
    )

    # Register handlers - order matters!
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("help", help_cmd))
    app.add_handler(CommandHandler("preferences", preferences_cmd))
    app.add_handler(CommandHandler("new", new_cmd))
    app.add_handler(CallbackQueryHandler(handle_callback))
    app.add_handler(
        MessageHandler(filters.TEXT & ~filters.COMMAND, handle_text)
    )

    app.add_error_handler(error_handler)

    # Start polling
    logger.info(f"🤖 {PLACE} Adventure Bot starting...")
    logger.info(f"🧠 Model: {LLM_MODEL}")
    logger.info(f"💾 Preferences file: {PREFERENCES_FILE}")
    print("\n🤖 Bot is running! Press Ctrl+C to stop.\n")

    app.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
