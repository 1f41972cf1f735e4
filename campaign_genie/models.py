"""
Data models and state definitions for campaign generation
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional, TypedDict
from pydantic import BaseModel, ConfigDict, Field, field_validator


ImageSize = Literal["1K", "2K", "4K"]
AspectRatio = Literal["1:1", "16:9", "4:3", "9:16"]
ChatRole = Literal["user", "model"]

DEFAULT_IMAGE_SIZE: ImageSize = "1K"
DEFAULT_ASPECT_RATIO: AspectRatio = "16:9"

SUBJECT_LINE_COUNT = 3


class CampaignCopy(BaseModel):
    """Structured output for the copy generation model"""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(description="A short title for this campaign")
    subject_lines: list[str] = Field(
        alias="subjectLines",
        min_length=SUBJECT_LINE_COUNT,
        max_length=SUBJECT_LINE_COUNT,
        description="An array of 3 engaging subject lines",
    )
    preview_text: str = Field(alias="previewText", description="A short preview text (snippet)")
    body_html: str = Field(
        alias="bodyHtml",
        description="Professional email body copy in HTML format (use basic tags like <p>, <strong>, <br>, <h2>)",
    )
    visual_prompt: str = Field(
        alias="visualPrompt",
        description="A detailed, artistic prompt for an AI image generator that would perfectly complement this email campaign",
    )


def copy_response_schema() -> dict:
    """JSON schema sent with the copy request, keyed by the camelCase wire names"""
    return CampaignCopy.model_json_schema(by_alias=True)


def _new_draft_id() -> str:
    # uuid1 is time-based and stays unique for drafts created within the same tick
    return uuid.uuid1().hex


class CampaignDraft(BaseModel):
    """A generated campaign. Only image_url changes after creation."""
    id: str = Field(default_factory=_new_draft_id)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    title: str
    subject_lines: list[str]
    preview_text: str
    body_html: str
    visual_prompt: str
    image_url: Optional[str] = None

    @classmethod
    def from_copy(cls, copy: CampaignCopy) -> "CampaignDraft":
        return cls(
            title=copy.title,
            subject_lines=list(copy.subject_lines),
            preview_text=copy.preview_text,
            body_html=copy.body_html,
            visual_prompt=copy.visual_prompt,
        )


class GenerationStatus(BaseModel):
    is_generating_copy: bool = False
    is_generating_image: bool = False
    error: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self.is_generating_copy or self.is_generating_image


class PipelineStage(str, Enum):
    IDLE = "idle"
    COPY_PENDING = "copy_pending"
    COPY_SUCCEEDED = "copy_succeeded"
    COPY_FAILED = "copy_failed"
    IMAGE_PENDING = "image_pending"
    IMAGE_SUCCEEDED = "image_succeeded"
    IMAGE_FAILED = "image_failed"


class GenerationGraphState(TypedDict):
    """State carried through the generation graph"""
    stage: str


class GenerateRequest(BaseModel):
    """One validated generation request"""
    prompt: str
    image_size: ImageSize = DEFAULT_IMAGE_SIZE
    aspect_ratio: AspectRatio = DEFAULT_ASPECT_RATIO

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class FormState(BaseModel):
    """Form bindings of the campaign concept panel"""
    prompt: str = ""
    image_size: ImageSize = DEFAULT_IMAGE_SIZE
    aspect_ratio: AspectRatio = DEFAULT_ASPECT_RATIO
