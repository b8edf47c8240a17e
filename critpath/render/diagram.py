"""
Task dependency diagram rendering.

Draws every task and dependency edge with NetworkX and Matplotlib,
highlights the critical path in red, and exports the drawing as SVG, PNG,
or a paginated PDF (diagram page followed by a task table page).

Typical usage example:

    result = compute_critical_path(tasks)
    render_diagram(tasks, result, "plan.svg")
"""

import io
import logging
from pathlib import Path
from typing import Hashable, Iterable, Optional, Union

import networkx as nx
from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from critpath.config.settings import settings
from ..cpm.models import Task, CriticalPathResult
from ..analysis.critical_path import format_duration, format_task_duration

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ('svg', 'png', 'pdf')

CRITICAL_COLOR = 'red'
CRITICAL_NODE_COLOR = '#ff9999'
NODE_COLOR = 'lightblue'
EDGE_COLOR = 'gray'


def _plain_text(text) -> str:
    """Escape dollar signs so Matplotlib does not parse them as mathtext."""
    return str(text).replace('$', r'\$')


def build_graph(tasks: Iterable[Task]) -> nx.DiGraph:
    """
    Build a directed graph with an edge from each dependency to its dependent.

    Each node carries its Task under 'task' and its dependency depth under
    'layer' (0 for tasks without dependencies).
    """
    tasks = list(tasks)
    graph = nx.DiGraph()
    for task in tasks:
        graph.add_node(task.id, task=task)
    for task in tasks:
        for dep_id in task.dependencies:
            graph.add_edge(dep_id, task.id)

    for layer, nodes in enumerate(nx.topological_generations(graph)):
        for node in nodes:
            graph.nodes[node]['layer'] = layer

    return graph


def _draw(graph: nx.DiGraph, result: CriticalPathResult, ax) -> None:
    """Draw the graph onto a Matplotlib axes."""
    critical_path = result.task_ids()
    critical_nodes = set(critical_path)
    critical_edges = list(zip(critical_path[:-1], critical_path[1:]))

    pos = nx.multipartite_layout(graph, subset_key='layer')

    # Non-critical edges
    nx.draw_networkx_edges(
        graph,
        pos,
        ax=ax,
        edgelist=[e for e in graph.edges() if e not in critical_edges],
        edge_color=EDGE_COLOR,
        arrows=True,
        node_size=2500,
    )

    # Critical edges
    if critical_edges:
        nx.draw_networkx_edges(
            graph,
            pos,
            ax=ax,
            edgelist=critical_edges,
            edge_color=CRITICAL_COLOR,
            arrows=True,
            width=2,
            node_size=2500,
        )

    nx.draw_networkx_nodes(
        graph,
        pos,
        ax=ax,
        node_color=[CRITICAL_NODE_COLOR if n in critical_nodes else NODE_COLOR for n in graph.nodes()],
        node_size=2500,
    )

    labels = {
        n: f"{_plain_text(data['task'].name)}\n{format_task_duration(data['task'])}"
        for n, data in graph.nodes(data=True)
    }
    nx.draw_networkx_labels(graph, pos, labels, ax=ax, font_size=8)

    ax.set_title(
        f"Task dependencies (critical path in red, "
        f"total {format_duration(result.total_duration_hours)})"
    )
    ax.axis('off')


def _diagram_figure(tasks: list[Task], result: CriticalPathResult) -> Figure:
    graph = build_graph(tasks)
    layers = max((data['layer'] for _, data in graph.nodes(data=True)), default=0) + 1
    width = max(8, 2.5 * layers)
    height = max(6, 1.2 * max((len(nodes) for nodes in nx.topological_generations(graph)), default=1))

    fig = Figure(figsize=(width, height))
    ax = fig.add_subplot()
    _draw(graph, result, ax)
    fig.tight_layout()
    return fig


def _table_figure(
    tasks: list[Task],
    result: CriticalPathResult,
    slack: Optional[dict[Hashable, float]] = None,
) -> Figure:
    """Task table page: one row per task with earliest start and slack."""
    critical_ids = set(result.task_ids())
    columns = ['ID', 'Task', 'Duration', 'Earliest start', 'Slack', 'Critical']
    rows = []
    for task in tasks:
        task_slack = slack.get(task.id) if slack else None
        rows.append([
            _plain_text(task.id),
            _plain_text(task.name),
            format_task_duration(task),
            format_duration(result.earliest_start.get(task.id, 0)),
            format_duration(task_slack) if task_slack is not None else '-',
            'yes' if task.id in critical_ids else '',
        ])

    fig = Figure(figsize=(8.27, 11.69))  # A4 portrait
    ax = fig.add_subplot()
    ax.axis('off')
    ax.set_title(f"Tasks (total duration {format_duration(result.total_duration_hours)})")
    if rows:
        table = ax.table(cellText=rows, colLabels=columns, loc='upper center')
        table.auto_set_font_size(False)
        table.set_fontsize(8)
        for row_idx, task in enumerate(tasks, start=1):
            if task.id in critical_ids:
                for col_idx in range(len(columns)):
                    table[row_idx, col_idx].set_facecolor(CRITICAL_NODE_COLOR)
    return fig


def _resolve_output_path(output_path: Union[str, Path]) -> Path:
    path = Path(output_path)
    if not path.is_absolute():
        path = settings.OUTPUT_DIR / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def render_diagram(
    tasks: Iterable[Task],
    result: CriticalPathResult,
    output_path: Union[str, Path],
    slack: Optional[dict[Hashable, float]] = None,
    dpi: Optional[int] = None,
) -> Path:
    """
    Render the task diagram and write it to a file.

    Args:
        tasks: All tasks (not only the critical ones)
        result: Critical path result used for highlighting
        output_path: Target file; format from suffix (.svg, .png, .pdf).
            Relative paths are placed under the configured output directory.
        slack: Optional per-task slack for the PDF table page
        dpi: Raster resolution (default: settings.DIAGRAM_DPI)

    Returns:
        Path of the written file

    Raises:
        ValueError: unsupported output format
    """
    tasks = list(tasks)
    fmt = Path(output_path).suffix.lower().lstrip('.')
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported diagram format: {fmt or '(none)'} "
                         f"(expected one of {', '.join(SUPPORTED_FORMATS)})")

    path = _resolve_output_path(output_path)
    dpi = dpi or settings.DIAGRAM_DPI

    fig = _diagram_figure(tasks, result)
    if fmt == 'pdf':
        with PdfPages(path) as pdf:
            pdf.savefig(fig)
            pdf.savefig(_table_figure(tasks, result, slack))
    else:
        fig.savefig(path, format=fmt, dpi=dpi, bbox_inches='tight', facecolor='white')

    logger.info(f"Saved {fmt.upper()} diagram of {len(tasks)} tasks to {path}")
    return path


def render_png_bytes(tasks: Iterable[Task], result: CriticalPathResult, dpi: Optional[int] = None) -> bytes:
    """Render the task diagram as PNG bytes (for image analysis)."""
    fig = _diagram_figure(list(tasks), result)
    buf = io.BytesIO()
    fig.savefig(buf, format='png', dpi=dpi or settings.DIAGRAM_DPI, facecolor='white')
    return buf.getvalue()
