"""
View model rendering for the campaign page

Every function here is a pure function of session state. The frontend only
draws what it receives.
"""

from typing import Optional

from .chat import ChatSession
from .credentials import CredentialSession, CredentialState
from .models import SUBJECT_LINE_COUNT, CampaignDraft, FormState, GenerationStatus


BILLING_URL = "https://ai.google.dev/gemini-api/docs/billing"

IMAGE_SIZE_OPTIONS = [
    {"value": "1K", "label": "1K Resolution"},
    {"value": "2K", "label": "2K Resolution"},
    {"value": "4K", "label": "4K Resolution"},
]

ASPECT_RATIO_OPTIONS = [
    {"value": "16:9", "label": "Wide (16:9)"},
    {"value": "1:1", "label": "Square (1:1)"},
    {"value": "4:3", "label": "Photo (4:3)"},
    {"value": "9:16", "label": "Tall (9:16)"},
]

BODY_SKELETON_LINES = 4


def render_auth_gate(credentials: CredentialSession) -> dict:
    """Key selection overlay. While the gate is unresolved it blocks without content."""
    if credentials.state == CredentialState.UNRESOLVED:
        return {"visible": True, "checking": True}

    if credentials.state == CredentialState.ABSENT:
        return {
            "visible": True,
            "checking": False,
            "title": "Select your Gemini API Key",
            "message": "To generate high-resolution (1K, 2K, 4K) visuals, you must select a valid API key from a paid GCP project.",
            "billing_url": BILLING_URL,
            "action_label": "Select API Key",
        }

    return {"visible": False, "checking": False, "verified": credentials.state == CredentialState.VERIFIED}


def _generate_button(status: GenerationStatus) -> dict:
    if status.is_generating_copy:
        label = "Thinking..."
    elif status.is_generating_image:
        label = "Generating Visual..."
    else:
        label = "Generate Campaign"
    return {"label": label, "disabled": status.busy, "spinner": status.busy}


def render_controls(form: FormState, status: GenerationStatus) -> dict:
    return {
        "prompt": form.prompt,
        "image_size": form.image_size,
        "aspect_ratio": form.aspect_ratio,
        "image_size_options": IMAGE_SIZE_OPTIONS,
        "aspect_ratio_options": ASPECT_RATIO_OPTIONS,
        "generate_button": _generate_button(status),
        "error": status.error,
    }


def render_preview(draft: Optional[CampaignDraft], status: GenerationStatus, image_size: str) -> dict:
    """
    Email preview pane.

    Fields that are not available yet are rendered as skeleton placeholders.
    """
    if draft is None and not status.busy:
        return {
            "empty": True,
            "title": "No Campaign Drafted",
            "message": "Enter a prompt on the left to start generating your high-conversion email marketing assets.",
        }

    copy_loading = draft is None

    return {
        "empty": False,
        "title": draft.title if draft and draft.title else "Drafting...",
        "subject_lines": {
            "loading": copy_loading,
            "items": [] if copy_loading else list(draft.subject_lines),
            "placeholders": SUBJECT_LINE_COUNT if copy_loading else 0,
        },
        "preview_text": draft.preview_text if draft and draft.preview_text else "Loading preview text...",
        "image": {
            "loading": status.is_generating_image,
            "overlay": "Designing Visual Asset..." if status.is_generating_image else None,
            "url": draft.image_url if draft else None,
            "badge": f"{image_size} RESOLUTION" if draft and draft.image_url else None,
        },
        "body": {
            "loading": not (draft and draft.body_html),
            "html": draft.body_html if draft else None,
            "placeholders": 0 if draft and draft.body_html else BODY_SKELETON_LINES,
        },
        "footer": {
            "cta_label": "Learn More",
            "legal": "© 2024 CampaignGenie. All rights reserved.",
        } if draft else None,
    }


def render_chat(chat: ChatSession, is_open: bool) -> dict:
    return {
        "open": is_open,
        "title": "Marketing Genie",
        "messages": [message.model_dump() for message in chat.messages],
        "typing": chat.is_loading,
        "placeholder": "Ask a question...",
    }


def render_app(session) -> dict:
    """Full view model for a ClientSession"""
    pipeline = session.pipeline
    return {
        "auth_gate": render_auth_gate(session.credentials),
        "controls": render_controls(session.form, pipeline.status),
        "preview": render_preview(pipeline.draft, pipeline.status, session.form.image_size),
        "chat": render_chat(session.chat, session.chat_open),
        "stage": pipeline.stage.value,
    }
