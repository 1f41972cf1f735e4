"""
WebSocket connection manager for handling multiple client connections
"""

import asyncio
from typing import Dict, Optional

from fastapi import WebSocket

from ..config import GEMINI_API_KEY
from ..presentation import render_app
from ..session import ClientSession, create_client_session


class ConnectionManager:
    """Manages WebSocket connections and the session behind each of them"""

    def __init__(self, default_api_key: Optional[str] = GEMINI_API_KEY):
        self.active_connections: Dict[str, WebSocket] = {}
        self.sessions: Dict[str, ClientSession] = {}
        self.default_api_key = default_api_key

    async def connect(self, client_id: str, websocket: WebSocket):
        """
        Accept and register a new WebSocket connection

        Args:
            client_id: Unique identifier for the client
            websocket: WebSocket connection instance
        """
        await websocket.accept()
        self.active_connections[client_id] = websocket
        print(f"Client {client_id} connected")
        self.get_session(client_id)

    def disconnect(self, client_id: str):
        """
        Remove a client connection

        Args:
            client_id: Unique identifier for the client
        """
        if client_id in self.active_connections:
            del self.active_connections[client_id]
        print(f"Client {client_id} disconnected")

    def get_session(self, client_id: str) -> ClientSession:
        if client_id not in self.sessions:
            async def publish():
                await self.publish(client_id)

            self.sessions[client_id] = create_client_session(on_change=publish)
        return self.sessions[client_id]

    def drop_session(self, client_id: str):
        if client_id in self.sessions:
            del self.sessions[client_id]

    async def send_message(self, client_id: str, message: dict):
        """
        Send a message to a specific client

        Args:
            client_id: Target client identifier
            message: Message dictionary to send
        """
        websocket = self.active_connections.get(client_id)
        if websocket is None:
            return
        try:
            await websocket.send_json(message)
        except Exception as e:
            # Socket closed under us; the session keeps running without a view
            print(f"✗ Failed to send to client {client_id}: {e}")
            self.disconnect(client_id)

    async def publish(self, client_id: str):
        """Send the current view of the client's session"""
        session = self.sessions.get(client_id)
        if session is None:
            return
        await self.send_message(client_id, {
            "type": "ui",
            "view": render_app(session),
            "timestamp": asyncio.get_event_loop().time()
        })
