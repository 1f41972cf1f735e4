"""
CampaignGenie - AI email campaign generation package
"""

from .ai_client import CampaignAIClient
from .chat import ChatSession
from .credentials import CredentialSession, CredentialState
from .models import CampaignCopy, CampaignDraft, ChatMessage, GenerationStatus, PipelineStage
from .pipeline import GenerationPipeline

__all__ = [
    "CampaignAIClient",
    "ChatSession",
    "CredentialSession",
    "CredentialState",
    "CampaignCopy",
    "CampaignDraft",
    "ChatMessage",
    "GenerationStatus",
    "PipelineStage",
    "GenerationPipeline",
]
