"""
Configuration for CampaignGenie, loaded from environment / .env
"""

import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# API keys - loaded from .env
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY")
OPEN_AI_KEY = os.getenv("OPEN_AI_KEY")
GROQ_API_KEY = os.getenv("GROQ_API_KEY")

# Models
LLM_PROVIDER = os.getenv("LLM_PROVIDER", "gemini").lower()
COPY_MODEL = os.getenv("COPY_MODEL", "gemini-3-pro-preview")
CHAT_MODEL = os.getenv("CHAT_MODEL", COPY_MODEL)
IMAGE_MODEL = os.getenv("IMAGE_MODEL", "gemini-3-pro-image-preview")
OPEN_AI_MODEL = os.getenv("OPEN_AI_MODEL", "gpt-4")
GROQ_MODEL = os.getenv("GROQ_MODEL", "openai/gpt-oss-120b")

COPY_TEMPERATURE = float(os.getenv("COPY_TEMPERATURE", "0.7"))
CHAT_TEMPERATURE = float(os.getenv("CHAT_TEMPERATURE", "0.7"))

# Upper bound for a single AI call, in seconds
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "120"))

# Send the whole transcript to the chat model instead of the latest turn only
CHAT_REPLAY_HISTORY = _env_bool("CHAT_REPLAY_HISTORY")

# Server
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))


@dataclass
class Settings:
    """Snapshot of the AI-facing settings handed to the client adapter"""
    provider: str = LLM_PROVIDER
    copy_model: str = COPY_MODEL
    chat_model: str = CHAT_MODEL
    image_model: str = IMAGE_MODEL
    copy_temperature: float = COPY_TEMPERATURE
    chat_temperature: float = CHAT_TEMPERATURE
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    chat_replay_history: bool = CHAT_REPLAY_HISTORY


def get_settings() -> Settings:
    return Settings()
