import copy
import json

import pytest


SAMPLE_PAYLOAD = {
    "adventures": [
        {
            "title": "Sushi & Sunset in Langley",
            "duration": "3 hours",
            "budget": "$18",
            "description": "Affordable sushi followed by a stroll by the river.",
            "activities": [
                {
                    "time": "1:00 PM",
                    "place": "Sushi Town Langley",
                    "type": "Restaurant",
                    "description": "Share a few rolls and some miso soup.",
                    "tip": "Go before 1:30 PM to skip the line."
                },
                {
                    "time": "2:30 PM",
                    "place": "Derby Reach Regional Park",
                    "type": "park",
                    "description": "Walk the Fraser River trail.",
                    "tip": "Bring a light jacket, it gets windy."
                }
            ],
            "transport": "Take the 501 bus from Langley Centre, then walk.",
            "totalCost": "$18 per person"
        },
        {
            "title": "Fort Langley Coffee Crawl",
            "duration": "2 hours",
            "budget": "$12",
            "description": "Cafes and heritage streets in Fort Langley.",
            "activities": [
                {
                    "time": "3:00 PM",
                    "place": "Blacksmith Bakery",
                    "type": "cafe",
                    "description": "Grab a latte and a pastry.",
                    "tip": "Seats by the window fill up fast."
                }
            ],
            "transport": "Bus 562 to Glover Rd.",
            "totalCost": "$12 per person"
        }
    ]
}


class FakeLLM:
    """Stands in for ollama.Client: records calls, replays one outcome."""

    def __init__(self, content=None, error=None, response=None):
        self.content = content
        self.error = error
        self.response = response
        self.calls = []

    def chat(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.response is not None:
            return self.response
        return {"message": {"role": "assistant", "content": self.content}}


@pytest.fixture
def payload():
    return copy.deepcopy(SAMPLE_PAYLOAD)


@pytest.fixture
def payload_text(payload):
    return json.dumps(payload)
