"""
WebSocket endpoint handlers for the campaign page
"""

import asyncio
import traceback

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from .connection_manager import ConnectionManager
from ..models import FormState, GenerateRequest
from ..session import ClientSession

# Global connection manager
manager = ConnectionManager()

BUSY_MESSAGE = "A campaign is still being generated."


async def send_error(client_id: str, message: str):
    await manager.send_message(client_id, {
        "type": "error",
        "message": message,
        "timestamp": asyncio.get_event_loop().time()
    })


async def websocket_endpoint(websocket: WebSocket, client_id: str):
    """
    Main WebSocket endpoint for client connections

    Args:
        websocket: WebSocket connection
        client_id: Unique client identifier
    """
    await manager.connect(client_id, websocket)

    try:
        while True:
            data = await websocket.receive_json()
            if not isinstance(data, dict):
                await send_error(client_id, "Messages must be JSON objects")
                continue
            await handle_message(client_id, data)

    except WebSocketDisconnect:
        manager.disconnect(client_id)
        manager.drop_session(client_id)
    except Exception as e:
        print(f"Error with client {client_id}: {e}")
        traceback.print_exc()
        manager.disconnect(client_id)
        manager.drop_session(client_id)


async def handle_message(client_id: str, data: dict):
    """
    Dispatch one client message

    Args:
        client_id: Client identifier
        data: Decoded JSON message with a "type" field
    """
    session = manager.get_session(client_id)
    message_type = data.get("type")

    if message_type == "handshake":
        # Key passed by the host page, otherwise fall back to the server key
        api_key = data.get("api_key")
        if api_key:
            session.credentials.select_key(api_key)
        else:
            session.credentials.resolve(manager.default_api_key)
        await manager.publish(client_id)

    elif message_type == "select_key":
        if not session.credentials.select_key(data.get("api_key", "")):
            await send_error(client_id, "Please provide an API key.")
        await manager.publish(client_id)

    elif message_type == "update_form":
        await _update_form(client_id, session, data)

    elif message_type == "generate":
        await _generate(client_id, session, data)

    elif message_type == "chat_message":
        # Background task so the loop keeps receiving while the assistant answers
        _run_in_background(session, session.chat.send(data.get("message", "")))

    elif message_type == "toggle_chat":
        session.chat_open = bool(data.get("open", not session.chat_open))
        await manager.publish(client_id)

    elif message_type == "reset":
        if not session.pipeline.reset():
            await send_error(client_id, BUSY_MESSAGE)
        await manager.publish(client_id)

    else:
        await send_error(client_id, f"Unknown message type: {message_type}")


async def _update_form(client_id: str, session: ClientSession, data: dict):
    values = session.form.model_dump()
    for key in ("prompt", "image_size", "aspect_ratio"):
        if key in data:
            values[key] = data[key]

    try:
        session.form = FormState.model_validate(values)
    except ValidationError as e:
        await send_error(client_id, f"Invalid form values: {e.errors()[0]['msg']}")

    await manager.publish(client_id)


async def _generate(client_id: str, session: ClientSession, data: dict):
    if not session.credentials.has_selected_key():
        await send_error(client_id, "Select an API key before generating a campaign.")
        await manager.publish(client_id)
        return

    if session.pipeline.busy:
        await send_error(client_id, BUSY_MESSAGE)
        return

    form = session.form
    prompt = data.get("prompt", form.prompt)
    if not prompt or not prompt.strip():
        # Blank prompt is a no-op
        return

    try:
        request = GenerateRequest(
            prompt=prompt,
            image_size=data.get("image_size", form.image_size),
            aspect_ratio=data.get("aspect_ratio", form.aspect_ratio),
        )
    except ValidationError as e:
        await send_error(client_id, f"Invalid generation settings: {e.errors()[0]['msg']}")
        return

    session.form = FormState(
        prompt=request.prompt,
        image_size=request.image_size,
        aspect_ratio=request.aspect_ratio,
    )

    # Background task so chat stays usable during generation
    _run_in_background(
        session,
        session.pipeline.start(request.prompt, request.image_size, request.aspect_ratio)
    )


def _run_in_background(session: ClientSession, coro) -> asyncio.Task:
    """Start a session task and hold a reference to it until it finishes"""
    task = asyncio.create_task(coro)
    session.tasks.add(task)
    task.add_done_callback(lambda done: _task_finished(session, done))
    return task


def _task_finished(session: ClientSession, task: asyncio.Task):
    session.tasks.discard(task)
    if not task.cancelled() and task.exception() is not None:
        print(f"✗ Background task failed: {task.exception()}")
