"""
FastAPI server for CampaignGenie with WebSocket support
"""

from typing import Optional

from fastapi import FastAPI, Header, HTTPException, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ValidationError

from campaign_genie.api import websocket_endpoint
from campaign_genie.chat import CHAT_ERROR_MESSAGE, EMPTY_REPLY_MESSAGE
from campaign_genie.config import CORS_ORIGINS, GEMINI_API_KEY, HOST, PORT
from campaign_genie.credentials import CredentialSession
from campaign_genie.errors import AuthError
from campaign_genie.models import DEFAULT_ASPECT_RATIO, DEFAULT_IMAGE_SIZE, ChatMessage, GenerateRequest
from campaign_genie.pipeline import GenerationPipeline
from campaign_genie import session as session_module

app = FastAPI(title="CampaignGenie API")

# CORS middleware for the frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CampaignRequestBody(BaseModel):
    prompt: str = ""
    image_size: str = DEFAULT_IMAGE_SIZE
    aspect_ratio: str = DEFAULT_ASPECT_RATIO


class ChatRequestBody(BaseModel):
    messages: list[ChatMessage]


def _credentials(api_key: Optional[str]) -> CredentialSession:
    credentials = CredentialSession(api_key or GEMINI_API_KEY)
    if not credentials.has_selected_key():
        raise HTTPException(status_code=401, detail="Missing API key")
    return credentials


@app.get("/")
async def root():
    return {"message": "CampaignGenie API", "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.post("/api/campaigns")
async def generate_campaign(body: CampaignRequestBody, x_api_key: Optional[str] = Header(default=None)):
    """
    Run one full generation cycle and return the resulting pipeline snapshot
    """
    credentials = _credentials(x_api_key)

    if not body.prompt.strip():
        raise HTTPException(status_code=400, detail="Missing 'prompt' field")

    try:
        request = GenerateRequest(**body.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors()[0]["msg"])

    client = session_module.create_ai_client(credentials)
    pipeline = GenerationPipeline(client, credentials)
    await pipeline.start(request.prompt, request.image_size, request.aspect_ratio)

    result = pipeline.snapshot()
    result["credential_state"] = credentials.state.value
    return result


@app.post("/api/chat")
async def chat(body: ChatRequestBody, x_api_key: Optional[str] = Header(default=None)):
    """
    Answer the latest message of a transcript as the marketing assistant
    """
    credentials = _credentials(x_api_key)

    if not body.messages or body.messages[-1].role != "user" or not body.messages[-1].content.strip():
        raise HTTPException(status_code=400, detail="The last message must be a non-empty user message")

    client = session_module.create_ai_client(credentials)
    try:
        reply = await client.chat(body.messages)
    except AuthError:
        raise HTTPException(status_code=401, detail="API key rejected")
    except Exception as e:
        print(f"[Chat] ✗ Assistant request failed: {e}")
        raise HTTPException(status_code=502, detail=CHAT_ERROR_MESSAGE)

    return {"reply": reply or EMPTY_REPLY_MESSAGE}


@app.websocket("/ws/{client_id}")
async def websocket_route(websocket: WebSocket, client_id: str):
    """
    WebSocket endpoint for the campaign page and chat widget
    """
    await websocket_endpoint(websocket, client_id)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:app", host=HOST, port=PORT, reload=True)
