"""
Utility functions for LLM initialization
"""

import os
from typing import Optional

from ..config import LLM_PROVIDER


def get_llm(
    temperature: float = 0.7,
    model: Optional[str] = None,
    api_key: Optional[str] = None,
    json_mode: bool = False,
    response_schema: Optional[dict] = None,
    timeout: Optional[float] = None,
    provider: Optional[str] = None,
):
    """
    Initialize and return a new chat model based on environment configuration.

    A fresh instance is built on every call so that a changed API key is
    picked up by the next request.

    Args:
        temperature: Temperature setting for the LLM (default: 0.7)
        model: Gemini model name (ignored for OpenAI / Groq, which read their own env)
        api_key: Gemini API key selected by the client session
        json_mode: Ask the model for an application/json response (Gemini only)
        response_schema: JSON schema the response must follow, sent with json_mode (Gemini only)
        timeout: Request timeout in seconds
        provider: Override for LLM_PROVIDER

    Returns:
        LLM instance (ChatGoogleGenerativeAI, ChatOpenAI or ChatGroq)

    Environment Variables:
        LLM_PROVIDER: "gemini" (default), "openai" or "groq"
        OPEN_AI_KEY: OpenAI API key (required if LLM_PROVIDER=openai)
        OPEN_AI_MODEL: OpenAI model name (e.g., "gpt-4")
        GROQ_API_KEY: Groq API key (required if LLM_PROVIDER=groq)
        GROQ_MODEL: Groq model name (e.g., "openai/gpt-oss-120b")
    """
    provider = (provider or LLM_PROVIDER).lower()

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        openai_key = os.getenv("OPEN_AI_KEY")
        model_name = os.getenv("OPEN_AI_MODEL", "gpt-4")

        if not openai_key:
            raise ValueError("OPEN_AI_KEY environment variable is required when LLM_PROVIDER=openai")

        return ChatOpenAI(
            temperature=temperature,
            model_name=model_name,
            openai_api_key=openai_key,
            timeout=timeout,
            max_retries=0
        )

    if provider == "groq":
        from langchain_groq import ChatGroq

        groq_key = os.getenv("GROQ_API_KEY")
        model_name = os.getenv("GROQ_MODEL", "openai/gpt-oss-120b")

        if not groq_key:
            raise ValueError("GROQ_API_KEY environment variable is required when LLM_PROVIDER=groq")

        return ChatGroq(
            temperature=temperature,
            model_name=model_name,
            groq_api_key=groq_key,
            timeout=timeout,
            max_retries=0
        )

    # Gemini
    from langchain_google_genai import ChatGoogleGenerativeAI

    if not api_key:
        raise ValueError("A Gemini API key is required. Select one or set GEMINI_API_KEY")

    kwargs = {}
    if json_mode:
        kwargs["response_mime_type"] = "application/json"
        if response_schema:
            kwargs["response_schema"] = response_schema

    return ChatGoogleGenerativeAI(
        model=model or "gemini-3-pro-preview",
        temperature=temperature,
        google_api_key=api_key,
        timeout=timeout,
        max_retries=0,
        **kwargs
    )


def message_text(message) -> str:
    """
    Extract plain text from a chat model response.

    Gemini models may answer with a list of content blocks instead of a string.
    """
    content = getattr(message, "content", message)

    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type", "text") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content)
