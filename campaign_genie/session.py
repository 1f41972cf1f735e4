"""
Per-client session state
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from .ai_client import create_ai_client
from .chat import ChatSession
from .config import Settings, get_settings
from .credentials import CredentialSession
from .models import FormState
from .pipeline import GenerationPipeline


@dataclass
class ClientSession:
    """Everything one browser tab works with: credential gate, form, pipeline and chat"""
    credentials: CredentialSession
    pipeline: GenerationPipeline
    chat: ChatSession
    form: FormState = field(default_factory=FormState)
    chat_open: bool = False
    # Running generate and chat tasks
    tasks: set = field(default_factory=set)


def create_client_session(
    on_change: Optional[Callable[[], Awaitable[None]]] = None,
    settings: Optional[Settings] = None,
    api_key: Optional[str] = None,
) -> ClientSession:
    """
    Build a session whose pipeline and chat share one credential and one AI client.

    The client reads the key from the credential on every call, so selecting a
    new key never requires rebuilding the session.
    """
    settings = settings or get_settings()
    credentials = CredentialSession(api_key)
    client = create_ai_client(credentials, settings)

    return ClientSession(
        credentials=credentials,
        pipeline=GenerationPipeline(client, credentials, on_change=on_change),
        chat=ChatSession(client, on_change=on_change),
    )
