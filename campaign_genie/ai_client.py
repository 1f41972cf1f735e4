"""
Gemini client adapter: campaign copy, campaign visual and assistant chat
"""

import asyncio
from typing import Optional

from langchain_core.exceptions import OutputParserException
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from langchain_core.output_parsers import JsonOutputParser
from pydantic import ValidationError

from .config import Settings, get_settings
from .credentials import CredentialSession
from .errors import (
    AuthError,
    CampaignGenieError,
    ConnectivityError,
    MalformedResponse,
    NoImageProduced,
    is_auth_error,
)
from .models import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_IMAGE_SIZE,
    CampaignCopy,
    ChatMessage,
    copy_response_schema,
)
from .prompts import CAMPAIGN_COPY_TEMPLATE, CHAT_SYSTEM_PROMPT
from .utils.image_utils import build_image_config, create_genai_client, extract_image_data_uri
from .utils.llm_utils import get_llm, message_text


class CampaignAIClient:
    """
    Thin wrapper around the three AI operations used by the app.

    No backend client is kept between calls: each operation builds a new one
    from the session's current key.
    """

    def __init__(self, credentials: CredentialSession, settings: Optional[Settings] = None):
        self.credentials = credentials
        self.settings = settings or get_settings()

    def _require_key(self, gemini: bool = False) -> Optional[str]:
        api_key = self.credentials.api_key
        if not api_key and (gemini or self.settings.provider == "gemini"):
            raise AuthError("No API key selected")
        return api_key

    async def _call(self, awaitable, label: str):
        """Await a backend call with the configured timeout and classify its errors"""
        try:
            result = await asyncio.wait_for(awaitable, timeout=self.settings.request_timeout)
        except asyncio.TimeoutError as e:
            raise ConnectivityError(
                f"{label} timed out after {self.settings.request_timeout:.0f}s"
            ) from e
        except CampaignGenieError:
            raise
        except Exception as e:
            if is_auth_error(e):
                raise AuthError(str(e)) from e
            raise

        self.credentials.mark_verified()
        return result

    async def generate_copy(self, prompt: str) -> CampaignCopy:
        """
        Generate the structured campaign copy for a marketing prompt.

        Raises:
            MalformedResponse: output is not JSON or misses required fields
            AuthError: the key is missing or rejected
        """
        if not prompt or not prompt.strip():
            raise ValueError("prompt must not be empty")

        api_key = self._require_key()
        parser = JsonOutputParser(pydantic_object=CampaignCopy)
        llm = get_llm(
            temperature=self.settings.copy_temperature,
            model=self.settings.copy_model,
            api_key=api_key,
            json_mode=True,
            response_schema=copy_response_schema(),
            timeout=self.settings.request_timeout,
            provider=self.settings.provider,
        )
        chain = CAMPAIGN_COPY_TEMPLATE | llm

        print(f"\n[AI Client] Generating campaign copy...")
        response = await self._call(
            chain.ainvoke({
                "prompt": prompt.strip(),
                "format_instructions": parser.get_format_instructions(),
            }),
            "Copy generation",
        )

        raw_output = message_text(response)
        try:
            copy = CampaignCopy.model_validate(parser.parse(raw_output))
        except (OutputParserException, ValidationError) as e:
            print(f"✗ Malformed campaign copy: {e}")
            raise MalformedResponse(
                f"Copy response does not match the campaign schema: {e}",
                raw_output=raw_output,
            ) from e

        print(f"✓ Campaign copy generated: {copy.title}")
        return copy

    async def generate_image(
        self,
        prompt: str,
        image_size: str = DEFAULT_IMAGE_SIZE,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
    ) -> str:
        """
        Generate the campaign visual.

        Returns:
            The first inline image of the response as a data URI
        """
        api_key = self._require_key(gemini=True)
        client = create_genai_client(api_key)

        print(f"\n[AI Client] Generating campaign visual ({image_size}, {aspect_ratio})...")
        response = await self._call(
            client.aio.models.generate_content(
                model=self.settings.image_model,
                contents=prompt,
                config=build_image_config(image_size, aspect_ratio),
            ),
            "Image generation",
        )

        image_url = extract_image_data_uri(response)
        if not image_url:
            print("✗ No image part in the response")
            raise NoImageProduced("No image was generated in the response")

        print("✓ Campaign visual generated")
        return image_url

    async def chat(self, transcript: list[ChatMessage]) -> str:
        """
        Answer the latest message of the transcript as the marketing assistant.

        Only the latest message is sent unless chat_replay_history is enabled.
        """
        if not transcript:
            raise ValueError("transcript must not be empty")

        api_key = self._require_key()
        llm = get_llm(
            temperature=self.settings.chat_temperature,
            model=self.settings.chat_model,
            api_key=api_key,
            timeout=self.settings.request_timeout,
            provider=self.settings.provider,
        )

        messages = [SystemMessage(content=CHAT_SYSTEM_PROMPT)]
        if self.settings.chat_replay_history:
            messages.extend(_history_messages(transcript))
        else:
            messages.append(HumanMessage(content=transcript[-1].content))

        response = await self._call(llm.ainvoke(messages), "Chat")
        return message_text(response) or ""


def _history_messages(transcript: list[ChatMessage]) -> list:
    """Convert a transcript to chat messages, skipping anything before the first user turn"""
    messages = []
    for entry in transcript:
        if entry.role == "user":
            messages.append(HumanMessage(content=entry.content))
        elif messages:
            messages.append(AIMessage(content=entry.content))
    return messages


def create_ai_client(credentials: CredentialSession, settings: Optional[Settings] = None) -> CampaignAIClient:
    return CampaignAIClient(credentials, settings)
