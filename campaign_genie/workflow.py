"""
LangGraph workflow builder for campaign generation
"""

from langgraph.graph import StateGraph, END

from .models import GenerationGraphState, PipelineStage


def route_after_copy(state: GenerationGraphState) -> str:
    """
    Routing function after the copy stage.
    Returns the name of the next node.
    """
    if state.get("stage") == PipelineStage.COPY_SUCCEEDED.value:
        return "generate_image"
    return "end"


def build_generation_workflow(pipeline):
    """
    Build and compile the two-stage generation workflow

    Args:
        pipeline: GenerationPipeline whose stage methods run as graph nodes

    Returns:
        Compiled workflow graph
    """
    async def generate_copy(state: GenerationGraphState) -> dict:
        await pipeline.run_copy_stage()
        return {"stage": pipeline.stage.value}

    async def generate_image(state: GenerationGraphState) -> dict:
        await pipeline.run_image_stage()
        return {"stage": pipeline.stage.value}

    workflow = StateGraph(GenerationGraphState)

    workflow.add_node("generate_copy", generate_copy)
    workflow.add_node("generate_image", generate_image)

    workflow.set_entry_point("generate_copy")

    # Image generation only runs when the copy stage produced a draft
    workflow.add_conditional_edges(
        "generate_copy",
        route_after_copy,
        {
            "generate_image": "generate_image",
            "end": END
        }
    )
    workflow.add_edge("generate_image", END)

    return workflow.compile()
