#!/usr/bin/env python
"""
Render the campaign generation graph (copy stage, then visual stage) as a PNG

Usage: python draw_workflow.py [output_path]
"""

import os
import sys

from campaign_genie.utils import draw_workflow_graph


def main():
    output_path = sys.argv[1] if len(sys.argv) > 1 else "generation_graph.png"

    print(f"[Graph] Drawing generate_copy -> generate_image into {output_path}")
    saved = draw_workflow_graph(output_path)

    if not saved:
        print("✗ Could not render the generation graph")
        sys.exit(1)

    print(f"✓ Generation graph saved to: {os.path.abspath(saved)}")


if __name__ == "__main__":
    main()
