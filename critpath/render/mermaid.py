"""Mermaid flowchart source for a task dependency graph."""

from typing import Iterable

from ..cpm.models import Task, CriticalPathResult
from ..analysis.critical_path import format_task_duration

CRITICAL_NODE_STYLE = 'fill:#ff9999'
CRITICAL_EDGE_STYLE = 'stroke:#ff0000,stroke-width:2px'


def _escape_label(text: str) -> str:
    return text.replace('"', '#quot;')


def build_mermaid(tasks: Iterable[Task], result: CriticalPathResult) -> str:
    """
    Build a top-down Mermaid flowchart of all tasks and dependency edges.

    Tasks on the critical path get a red fill; edges between consecutive
    critical tasks get a red stroke. Node keys are positional (n0, n1, ...)
    so any ID type is safe.
    """
    tasks = list(tasks)
    node_keys = {task.id: f"n{i}" for i, task in enumerate(tasks)}
    critical_ids = set(result.task_ids())
    critical_edges = set(zip(result.task_ids()[:-1], result.task_ids()[1:]))

    lines = ["graph TD;"]
    for task in tasks:
        label = f"{_escape_label(task.name)}<br/>{format_task_duration(task)}"
        lines.append(f'    {node_keys[task.id]}["{label}"];')

    styles = []
    edge_index = 0
    for task in tasks:
        for dep_id in task.dependencies:
            lines.append(f"    {node_keys[dep_id]} --> {node_keys[task.id]};")
            if (dep_id, task.id) in critical_edges:
                styles.append(f"    linkStyle {edge_index} {CRITICAL_EDGE_STYLE};")
            edge_index += 1

    for task in tasks:
        if task.id in critical_ids:
            styles.append(f"    style {node_keys[task.id]} {CRITICAL_NODE_STYLE};")

    return "\n".join(lines + styles) + "\n"
