"""
Generation pipeline controller: campaign copy first, then the matching visual
"""

from typing import Awaitable, Callable, Optional

from .credentials import CredentialSession
from .errors import AuthError
from .models import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_IMAGE_SIZE,
    CampaignDraft,
    GenerateRequest,
    GenerationStatus,
    PipelineStage,
)
from .workflow import build_generation_workflow


COPY_FAILED_MESSAGE = "Failed to generate campaign structure. Please check your prompt."
IMAGE_AUTH_FAILED_MESSAGE = "API Key error. Resetting key..."
IMAGE_FAILED_MESSAGE = "Failed to generate image. Please try again."


class GenerationPipeline:
    """
    Drives one campaign generation cycle at a time and tracks its status.

    on_change is awaited after every published transition so the transport
    can push a new view to the client.
    """

    def __init__(
        self,
        client,
        credentials: CredentialSession,
        on_change: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self.client = client
        self.credentials = credentials
        self.on_change = on_change

        self.stage = PipelineStage.IDLE
        self.status = GenerationStatus()
        self.draft: Optional[CampaignDraft] = None
        self.request: Optional[GenerateRequest] = None

        self.workflow = build_generation_workflow(self)

    @property
    def busy(self) -> bool:
        return self.status.busy

    async def start(
        self,
        prompt: str,
        image_size: str = DEFAULT_IMAGE_SIZE,
        aspect_ratio: str = DEFAULT_ASPECT_RATIO,
    ) -> bool:
        """
        Run a full generation cycle.

        Returns False without touching any state when the prompt is blank or
        a cycle is already in flight. Raises pydantic.ValidationError for an
        unknown image size or aspect ratio.
        """
        if not prompt or not prompt.strip():
            return False

        if self.busy:
            print("[Pipeline] Generation already in progress, ignoring request")
            return False

        request = GenerateRequest(prompt=prompt, image_size=image_size, aspect_ratio=aspect_ratio)

        self.request = request
        self.draft = None
        self.status = GenerationStatus(is_generating_copy=True)
        self.stage = PipelineStage.COPY_PENDING

        print(f"\n[Pipeline] Starting generation cycle ({request.image_size}, {request.aspect_ratio})")
        try:
            await self._publish()
            final_state = await self.workflow.ainvoke({"stage": self.stage.value})
        finally:
            if self.busy:
                self._interrupt()

        print(f"[Pipeline] Cycle finished: {final_state['stage']}")
        return True

    def _interrupt(self):
        """Settle a cycle that stopped before reaching a terminal stage"""
        print(f"[Pipeline] ✗ Cycle interrupted during {self.stage.value}")
        if self.status.is_generating_copy:
            self.stage = PipelineStage.COPY_FAILED
            self.status = GenerationStatus(error=COPY_FAILED_MESSAGE)
        else:
            self.stage = PipelineStage.IMAGE_FAILED
            self.status = GenerationStatus(error=IMAGE_FAILED_MESSAGE)

    async def run_copy_stage(self):
        """Generate the campaign copy and build a new draft from it"""
        try:
            copy = await self.client.generate_copy(self.request.prompt)
        except Exception as e:
            print(f"✗ Campaign generation failed: {e}")
            if isinstance(e, AuthError):
                self.credentials.revoke()
            self.stage = PipelineStage.COPY_FAILED
            self.status = GenerationStatus(error=COPY_FAILED_MESSAGE)
            await self._publish()
            return

        self.draft = CampaignDraft.from_copy(copy)
        self.stage = PipelineStage.COPY_SUCCEEDED
        self.status = GenerationStatus(is_generating_image=True)
        print(f"✓ Draft {self.draft.id} created")

    async def run_image_stage(self):
        """Generate the visual from the draft's visual prompt and attach it to the same draft"""
        draft = self.draft
        self.stage = PipelineStage.IMAGE_PENDING
        # The text is shown while the visual is still being generated
        await self._publish()

        try:
            image_url = await self.client.generate_image(
                draft.visual_prompt,
                self.request.image_size,
                self.request.aspect_ratio,
            )
        except Exception as e:
            print(f"✗ Image generation failed: {e}")
            self.stage = PipelineStage.IMAGE_FAILED
            if isinstance(e, AuthError):
                self.credentials.revoke()
                self.status = GenerationStatus(error=IMAGE_AUTH_FAILED_MESSAGE)
            else:
                self.status = GenerationStatus(error=IMAGE_FAILED_MESSAGE)
        else:
            draft.image_url = image_url
            self.stage = PipelineStage.IMAGE_SUCCEEDED
            self.status = GenerationStatus()
            print(f"✓ Visual attached to draft {draft.id}")

        await self._publish()

    def reset(self) -> bool:
        """Clear the draft and status. Refused while a cycle is in flight."""
        if self.busy:
            return False
        self.stage = PipelineStage.IDLE
        self.status = GenerationStatus()
        self.draft = None
        self.request = None
        return True

    def snapshot(self) -> dict:
        return {
            "stage": self.stage.value,
            "status": self.status.model_dump(),
            "draft": self.draft.model_dump(mode="json") if self.draft else None,
        }

    async def _publish(self):
        if self.on_change is not None:
            await self.on_change()
