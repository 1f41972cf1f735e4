"""
Workflow visualization utility
"""

from typing import Optional

from ..credentials import CredentialSession
from ..pipeline import GenerationPipeline


def draw_workflow_graph(output_path: str = "generation_graph.png") -> Optional[str]:
    """
    Generate and save the generation workflow graph visualization

    Args:
        output_path: Path where the graph image will be saved

    Returns:
        Path to saved graph or None if failed
    """
    try:
        # The graph shape does not depend on the client, so none is needed to draw it
        pipeline = GenerationPipeline(client=None, credentials=CredentialSession())

        graph_image = pipeline.workflow.get_graph().draw_mermaid_png()

        with open(output_path, "wb") as f:
            f.write(graph_image)

        return output_path

    except Exception as e:
        print(f"Error: {e}")
        print("\nRendering uses the mermaid.ink web service, check your network connection")
        return None
