"""
Prompt text for the adventure planner.
"""

from typing import Optional

from config import PLACE, AREAS
from models import UserPreferences

SYSTEM_PROMPT = f"""
You are a local {PLACE} adventure planner AI. Analyze user requests and create personalized 2-5 hour adventure plans for {PLACE} ({", ".join(AREAS.values())}).

Extract and understand:
- Location/area preference
- Time window
- Number of people
- Budget (low: <$20/person, medium: $20-50, high: >$50)
- Transportation (walking, driving, transit, rideshare)
- Food preferences
- Interests (nature, food, art, shopping, photos, etc.)
- Weather preference (indoor/outdoor)

Create 2-3 complete adventure plans with:
- Creative title
- Duration
- Budget per person
- 3-5 activities with:
  * Time
  * Place name
  * Type (restaurant, park, cafe, market, etc.)
  * Brief description (1 sentence)
  * Practical tips
- Transit/driving directions between stops
- Total estimated cost

Be specific with real {PLACE} locations. Include actual restaurant names, parks, cafes, and attractions in the specified areas.

Format your response as a JSON object with this structure:
{{
  "adventures": [
    {{
      "title": "Adventure name",
      "duration": "3 hours",
      "budget": "$25",
      "description": "Brief overview",
      "activities": [
        {{
          "time": "12:00 PM",
          "place": "Actual place name",
          "type": "restaurant/park/cafe/etc",
          "description": "What to do here",
          "tip": "Practical advice"
        }}
      ],
      "transport": "Transit or driving directions between locations",
      "totalCost": "$25 per person"
    }}
  ]
}}

Respond ONLY with valid JSON, no other text.
""".strip()  # Noqa: E501


def compose_prompt(
    user_message: str, preferences: Optional[UserPreferences] = None
) -> str:
    """
    Build the text sent to the model for one request.

    Without preferences the message goes through untouched. With them, a
    preference block comes first and the message closes the prompt
    verbatim.

    Args:
        user_message: What the user typed (already trimmed by the caller)
        preferences: Stored onboarding preferences, if any

    Returns:
        Prompt text for the user turn
    """
    if preferences is None:
        return user_message

    return (
        "User Preferences:\n"
        f"- Interests: {', '.join(preferences.interests)}\n"
        f"- Budget: {preferences.budget_range.value}\n"
        f"- Transportation: {preferences.transportation.value}\n"
        f"- Group Size: {preferences.group_size.value}\n"
        f"- Favorite Areas: {', '.join(preferences.favorite_areas)}\n"
        "\n"
        f"User Request: {user_message}"
    )
