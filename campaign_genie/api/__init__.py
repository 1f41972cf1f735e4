"""
API module for CampaignGenie
"""

from .connection_manager import ConnectionManager
from .websocket_handler import websocket_endpoint, handle_message, manager

__all__ = ["ConnectionManager", "websocket_endpoint", "handle_message", "manager"]
