"""
Utility functions for Gemini image generation responses
"""

import base64
from typing import Optional

from google import genai
from google.genai import types


def create_genai_client(api_key: str) -> genai.Client:
    """Build a new Gemini client for a single request"""
    return genai.Client(api_key=api_key)


def build_image_config(image_size: str, aspect_ratio: str) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_modalities=["IMAGE", "TEXT"],
        image_config=types.ImageConfig(
            aspect_ratio=aspect_ratio,
            image_size=image_size,
        ),
    )


def extract_image_data_uri(response) -> Optional[str]:
    """
    Find the first inline image part of a generate_content response.

    Args:
        response: google-genai GenerateContentResponse

    Returns:
        "data:<mime>;base64,<payload>" URI, or None if no part carries inline data
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None

    content = getattr(candidates[0], "content", None)
    for part in getattr(content, "parts", None) or []:
        inline_data = getattr(part, "inline_data", None)
        if not inline_data or not inline_data.data:
            continue

        mime_type = inline_data.mime_type or "image/png"
        data = inline_data.data
        if isinstance(data, (bytes, bytearray)):
            encoded = base64.b64encode(data).decode("ascii")
        else:
            # Already base64 text
            encoded = str(data)
        return f"data:{mime_type};base64,{encoded}"

    return None
