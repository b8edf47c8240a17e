"""
Diagram renderers for task dependency graphs.
"""

from .mermaid import build_mermaid
from .diagram import build_graph, render_diagram, render_png_bytes, SUPPORTED_FORMATS

__all__ = [
    'build_mermaid',
    'build_graph',
    'render_diagram',
    'render_png_bytes',
    'SUPPORTED_FORMATS',
]
