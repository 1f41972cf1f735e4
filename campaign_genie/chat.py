"""
Marketing assistant chat session
"""

from typing import Awaitable, Callable, Optional

from .models import ChatMessage


GREETING_MESSAGE = "Hi! I'm your marketing assistant. How can I help with your campaign today?"
EMPTY_REPLY_MESSAGE = "I'm sorry, I couldn't process that."
CHAT_ERROR_MESSAGE = "Error: Could not connect to the AI assistant."


class ChatSession:
    """Append-only transcript that forwards each user turn to the AI client"""

    def __init__(
        self,
        client,
        on_change: Optional[Callable[[], Awaitable[None]]] = None,
        greeting: Optional[str] = GREETING_MESSAGE,
    ):
        self.client = client
        self.on_change = on_change
        self.messages: list[ChatMessage] = []
        self.is_loading = False

        if greeting:
            self.messages.append(ChatMessage(role="model", content=greeting))

    async def send(self, text: str) -> bool:
        """
        Send a user message and append the assistant's reply.

        Returns False if the text is blank or a reply is still pending.
        """
        if not text or not text.strip() or self.is_loading:
            return False

        self.messages.append(ChatMessage(role="user", content=text))
        self.is_loading = True

        try:
            await self._publish()
            reply = await self.client.chat(list(self.messages))
            self.messages.append(ChatMessage(role="model", content=reply or EMPTY_REPLY_MESSAGE))
        except Exception as e:
            print(f"[Chat] ✗ Assistant request failed: {e}")
            self.messages.append(ChatMessage(role="model", content=CHAT_ERROR_MESSAGE))
        finally:
            self.is_loading = False

        await self._publish()
        return True

    async def _publish(self):
        if self.on_change is not None:
            await self.on_change()
