"""
Entry point for campaign generation from the command line
"""

import asyncio
import base64
import sys

from pydantic import ValidationError

from campaign_genie.ai_client import CampaignAIClient
from campaign_genie.config import GEMINI_API_KEY
from campaign_genie.credentials import CredentialSession
from campaign_genie.pipeline import GenerationPipeline


def save_image(data_uri: str, output_path: str):
    """Write a data URI image to disk"""
    _, encoded = data_uri.split(",", 1)
    with open(output_path, "wb") as f:
        f.write(base64.b64decode(encoded))


async def run(prompt: str, image_size: str, aspect_ratio: str, output_path: str = ""):
    credentials = CredentialSession(GEMINI_API_KEY)
    pipeline = GenerationPipeline(CampaignAIClient(credentials), credentials)

    await pipeline.start(prompt, image_size, aspect_ratio)
    draft = pipeline.draft

    print("\n" + "=" * 80)
    print(f"GENERATION FINISHED - {pipeline.stage.value}")
    print("=" * 80)

    if pipeline.status.error:
        print(f"\nError: {pipeline.status.error}")

    if draft is None:
        return pipeline

    print(f"\nTitle: {draft.title}")
    print("\nSubject lines:")
    for i, line in enumerate(draft.subject_lines, 1):
        print(f"  {i}. {line}")
    print(f"\nPreview: {draft.preview_text}")
    print(f"\nBody:\n{draft.body_html}")
    print(f"\nVisual prompt: {draft.visual_prompt}")

    if draft.image_url and output_path:
        save_image(draft.image_url, output_path)
        print(f"\n✓ Visual saved to: {output_path}")

    return pipeline


def main():
    """Main CLI entry point"""
    print("=" * 80)
    print("CampaignGenie - Email Campaign Generator")
    print("=" * 80)

    if not GEMINI_API_KEY:
        print("Error: GEMINI_API_KEY must be set in .env")
        sys.exit(1)

    print("\nWhat are you promoting? (or press Enter for default example)")
    user_input = input("Prompt: ").strip()

    if not user_input:
        prompt = "A summer sale for a premium coffee subscription box"
        print(f"\nUsing example prompt: {prompt}")
    else:
        prompt = user_input

    image_size = input("Resolution [1K/2K/4K] (default 1K): ").strip().upper() or "1K"
    aspect_ratio = input("Aspect ratio [1:1/16:9/4:3/9:16] (default 16:9): ").strip() or "16:9"
    output_path = input("Save visual to (default campaign_visual.png): ").strip() or "campaign_visual.png"

    try:
        asyncio.run(run(prompt, image_size, aspect_ratio, output_path))
    except ValidationError as e:
        print(f"Error: invalid visual settings - {e.errors()[0]['msg']}")
        sys.exit(1)


if __name__ == "__main__":
    main()
