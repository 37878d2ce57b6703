"""
Text rendering for adventures and conversation replies.

Cards are sent as plain text: model output may contain any character,
and plain text never trips Telegram's Markdown parser.
"""

import textwrap
from urllib.parse import quote

from config import CHUNK_LEN
from models import Activity, Adventure

TYPE_MARKERS = {
    "restaurant": "🍽️",
    "cafe": "☕",
    "park": "🌳",
    "market": "🛒",
}
DEFAULT_MARKER = "📍"


def type_marker(activity_type: str) -> str:
    """Marker for an activity type, case-insensitive."""
    return TYPE_MARKERS.get(activity_type.strip().lower(), DEFAULT_MARKER)


def maps_url(adventure: Adventure) -> str:
    """Google Maps directions link chaining every stop of the adventure."""
    locations = " to ".join(a.place for a in adventure.activities)
    return (
        "https://www.google.com/maps/dir/?api=1"
        f"&destination={quote(locations, safe='')}"
    )


def format_activity(activity: Activity) -> str:
    lines = [
        f"{activity.time} | {type_marker(activity.type)} {activity.place}"
        f" ({activity.type})",
        f"   {activity.description}",
    ]
    if activity.tip:
        lines.append(f"   💡 {activity.tip}")
    return "\n".join(lines)


def format_adventure(adventure: Adventure, index: int = 1) -> str:
    """
    Format one adventure as a card for Telegram.

    Args:
        adventure: Adventure to render
        index: Position in the batch, starting at 1

    Returns:
        Plain-text card
    """
    text = (
        f"🧭 {index}. {adventure.title}\n"
        f"⏱️ {adventure.duration} | 💵 {adventure.budget}\n\n"
        f"{adventure.description}\n\n"
    )

    if adventure.activities:
        text += "\n\n".join(format_activity(a) for a in adventure.activities)
    else:
        text += "No stops planned."

    text += (
        f"\n\n🚇 Getting around: {adventure.transport}\n"
        f"💰 Total: {adventure.total_cost}"
    )
    return text


def split_into_chunks(text: str, max_len: int = CHUNK_LEN) -> list[str]:
    """
    Split text into chunks not exceeding max_len,
    preferably at paragraph breaks.
    """
    if len(text) <= max_len:
        return [text]

    paragraphs = text.split("\n\n")
    chunks = []
    current = ""

    for p in paragraphs:
        candidate = (current + "\n\n" + p).strip() if current else p
        if len(candidate) <= max_len:
            current = candidate
        else:
            if current:
                chunks.append(current)

            if len(p) > max_len:
                wrapped = textwrap.wrap(
                    p,
                    width=max_len,
                    replace_whitespace=False,
                    drop_whitespace=False
                )
                chunks.extend(wrapped[:-1])
                current = wrapped[-1] if wrapped else ""
            else:
                current = p
    if current:
        chunks.append(current)
    return chunks
