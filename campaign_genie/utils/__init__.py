"""
Utility helpers for CampaignGenie
"""

from .llm_utils import get_llm, message_text
from .workflow_visualizer import draw_workflow_graph

__all__ = ["get_llm", "message_text", "draw_workflow_graph"]
