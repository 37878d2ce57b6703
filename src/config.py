"""
Configuration settings
"""

import os
from dotenv import load_dotenv

load_dotenv()

TELEGRAM_BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")

# === LLM Settings ===
OLLAMA_HOST = os.getenv("OLLAMA_HOST", "https://ollama.com")
OLLAMA_API_KEY = os.getenv("OLLAMA_API_KEY")
LLM_MODEL = os.getenv("LLM_MODEL", "gpt-oss:20b")
LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.8"))
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "45"))  # seconds

# === Storage ===
PREFERENCES_FILE = os.getenv("PREFERENCES_FILE", "preferences.json")

# === Region ===
PLACE = "Metro Vancouver"

AREAS = {
    "vancouver": "Vancouver",
    "surrey": "Surrey",
    "richmond": "Richmond",
    "burnaby": "Burnaby",
    "langley": "Langley",
    "new-westminster": "New Westminster",
}

INTERESTS = {
    "food": "🍜 Food & Dining",
    "nature": "🌲 Nature & Parks",
    "culture": "🎨 Art & Culture",
    "shopping": "🛍️ Shopping",
    "adventure": "⛰️ Adventure",
    "relaxation": "☕ Relaxation",
}

EXAMPLE_PROMPTS = [
    "Saturday afternoon, 2 friends, love sushi, low budget, using transit near Langley",  # Noqa: E501
    "Evening date night in Vancouver, upscale dining, driving",
    "Family day in Richmond, 4 people, outdoor activities, under $100 total",
]

# === Telegram Limits ===
CHUNK_LEN = 3500  # Stay safely below the hard limit
