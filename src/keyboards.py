"""
Inline keyboard builders for the Adventure Planner Bot.
"""

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from config import AREAS, INTERESTS, EXAMPLE_PROMPTS

BUDGET_OPTIONS = [
    ("low", "💸 Budget-friendly (under $20/person)"),
    ("medium", "💵 Moderate ($20 - $50/person)"),
    ("high", "💎 Premium ($50+/person)"),
]

TRANSPORT_OPTIONS = [
    ("transit", "🚇 Transit"),
    ("driving", "🚗 Driving"),
    ("walking", "🚶 Walking"),
    ("rideshare", "🚕 Rideshare"),
]

GROUP_OPTIONS = [
    ("solo", "Solo"),
    ("couple", "Couple"),
    ("small", "Small group (3-4)"),
    ("large", "Large group (5+)"),
]


def _build_toggle_keyboard(
    options: dict[str, str],
    selected_ids: list[str],
    prefix: str,
    done_text: str
) -> InlineKeyboardMarkup:
    keyboard = []

    for option_id, label in options.items():
        icon = "✅" if option_id in selected_ids else "⬜"
        keyboard.append([
            InlineKeyboardButton(
                f"{icon} {label}", callback_data=f"{prefix}_{option_id}"
            )
        ])

    keyboard.append([
        InlineKeyboardButton(done_text, callback_data=f"{prefix}_done")
    ])

    return InlineKeyboardMarkup(keyboard)


def build_interests_keyboard(selected_ids: list[str]) -> InlineKeyboardMarkup:
    """
    Build keyboard for interest selection.

    Args:
        selected_ids: Interest tags that are currently selected

    Returns:
        InlineKeyboardMarkup with toggle buttons for each interest
    """
    return _build_toggle_keyboard(
        INTERESTS, selected_ids, "int", "➡️ Done Selecting Interests"
    )


def build_areas_keyboard(selected_ids: list[str]) -> InlineKeyboardMarkup:
    """
    Build keyboard for favorite area selection.

    Args:
        selected_ids: Area tags that are currently selected

    Returns:
        InlineKeyboardMarkup with toggle buttons for each area
    """
    return _build_toggle_keyboard(
        AREAS, selected_ids, "area", "➡️ Done Selecting Areas"
    )


def _build_choice_keyboard(
    options: list[tuple[str, str]], prefix: str
) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(label, callback_data=f"{prefix}_{value}")]
        for value, label in options
    ])


def build_budget_keyboard() -> InlineKeyboardMarkup:
    return _build_choice_keyboard(BUDGET_OPTIONS, "bud")


def build_transport_keyboard() -> InlineKeyboardMarkup:
    return _build_choice_keyboard(TRANSPORT_OPTIONS, "trn")


def build_group_keyboard() -> InlineKeyboardMarkup:
    return _build_choice_keyboard(GROUP_OPTIONS, "grp")


def build_examples_keyboard() -> InlineKeyboardMarkup:
    """
    Build keyboard of example requests.

    Returns:
        InlineKeyboardMarkup with one button per example prompt
    """
    return InlineKeyboardMarkup([
        [InlineKeyboardButton(f"💬 {prompt}", callback_data=f"ex_{i}")]
        for i, prompt in enumerate(EXAMPLE_PROMPTS)
    ])


def build_maps_keyboard(url: str) -> InlineKeyboardMarkup:
    """
    Build keyboard linking an adventure's route in Google Maps.

    Args:
        url: Directions URL from formatting.maps_url()

    Returns:
        InlineKeyboardMarkup with a single URL button
    """
    return InlineKeyboardMarkup([[
        InlineKeyboardButton("🗺️ Open in Google Maps", url=url)
    ]])
