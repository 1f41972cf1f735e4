import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("LLM_PROVIDER", "gemini")
os.environ.setdefault("REQUEST_TIMEOUT_SECONDS", "5")
os.environ.setdefault("CHAT_REPLAY_HISTORY", "false")

from campaign_genie.models import CampaignCopy  # noqa: E402


def make_copy(**overrides) -> CampaignCopy:
    values = {
        "title": "Summer Coffee Club",
        "subject_lines": [
            "Your summer brew is here",
            "30% off fresh roasts",
            "Last call for cold brew season",
        ],
        "preview_text": "Fresh beans, delivered all summer.",
        "body_html": "<h2>Summer Sale</h2><p>Save <strong>30%</strong> today.</p>",
        "visual_prompt": "Sunlit iced coffee on a wooden table, warm film photography",
    }
    values.update(overrides)
    return CampaignCopy(**values)


class FakeAIClient:
    """Stands in for CampaignAIClient and records every call"""

    def __init__(self):
        self.calls = []
        self.copy = make_copy()
        self.copy_error = None
        self.image_url = "data:image/png;base64,aW1hZ2U="
        self.image_error = None
        self.reply = "Try adding urgency to your subject line."
        self.chat_error = None
        self.on_copy = None
        self.on_image = None

    async def generate_copy(self, prompt):
        self.calls.append(("copy", prompt))
        if self.on_copy is not None:
            await self.on_copy()
        if self.copy_error is not None:
            raise self.copy_error
        return self.copy

    async def generate_image(self, prompt, image_size="1K", aspect_ratio="16:9"):
        self.calls.append(("image", prompt, image_size, aspect_ratio))
        if self.on_image is not None:
            await self.on_image()
        if self.image_error is not None:
            raise self.image_error
        return self.image_url

    async def chat(self, transcript):
        self.calls.append(("chat", [message.model_dump() for message in transcript]))
        if self.chat_error is not None:
            raise self.chat_error
        return self.reply

    def operations(self):
        return [call[0] for call in self.calls]


@pytest.fixture()
def fake_client():
    return FakeAIClient()


@pytest.fixture()
def sample_copy():
    return make_copy()
