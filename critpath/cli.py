"""
CLI interface for critical path analysis.

Loads a task file, prints the critical path, and optionally exports
diagrams and requests an AI review of the rendered diagram.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from critpath.utils.logger import configure_logging
from .analysis.critical_path import (
    calculate_slack,
    format_critical_path,
    print_critical_path_report,
)
from .cpm.engine import compute_critical_path
from .cpm.exceptions import CPMError
from .loaders.task_loader import load_tasks, TaskFileError
from .render.diagram import SUPPORTED_FORMATS, render_diagram, render_png_bytes
from .render.mermaid import build_mermaid

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the package."""
    package_logger = configure_logging('critpath')
    if verbose:
        package_logger.setLevel(logging.DEBUG)


def run_analysis(
    tasks_file: Path,
    diagram: Path | None = None,
    mermaid: Path | None = None,
    show_slack: bool = False,
    review: bool = False,
    as_json: bool = False,
) -> int:
    """
    Run critical path analysis on a task file.

    Args:
        tasks_file: CSV or JSON task file
        diagram: Optional diagram output (.svg, .png, .pdf)
        mermaid: Optional Mermaid source output (.mmd)
        show_slack: Include per-task slack in the report
        review: Send the rendered diagram to Gemini for commentary
        as_json: Print the result as JSON instead of a report

    Returns:
        Process exit code
    """
    tasks = load_tasks(tasks_file)
    result = compute_critical_path(tasks)
    slack = calculate_slack(tasks, result) if (show_slack or diagram) else None

    if as_json:
        payload = result.to_dict()
        if slack is not None:
            payload['slack_hours'] = {str(tid): value for tid, value in slack.items()}
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_critical_path_report(result, slack if show_slack else None, tasks)

    if mermaid:
        mermaid.parent.mkdir(parents=True, exist_ok=True)
        mermaid.write_text(build_mermaid(tasks, result), encoding='utf-8')
        logger.info(f"Saved Mermaid diagram to {mermaid}")

    if diagram:
        render_diagram(tasks, result, diagram, slack=slack)

    if review:
        if result.is_empty():
            logger.warning("No tasks to review")
        else:
            from .clients.gemini_client import review_diagram

            response = review_diagram(render_png_bytes(tasks, result), format_critical_path(result))
            if response.success:
                print("\n=== Diagram Review ===")
                print(response.result)
            else:
                logger.warning(f"Diagram review failed: {response.error}")

    return 0


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="critpath",
        description="Compute the critical path of a task dependency graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Task file columns (CSV) or keys (JSON):
  id, name, duration, unit (hours|days), dependencies (';'-separated IDs)

Examples:
  # Print the critical path
  python -m critpath tasks.csv

  # Include slack and export an SVG diagram
  python -m critpath tasks.csv --slack --diagram plan.svg

  # Paginated PDF plus Mermaid source
  python -m critpath tasks.json --diagram plan.pdf --mermaid plan.mmd

  # Ask Gemini to comment on the diagram (needs GEMINI_API_KEY)
  python -m critpath tasks.csv --review
""",
    )

    parser.add_argument(
        "tasks_file",
        type=Path,
        help="CSV or JSON task file",
    )
    parser.add_argument(
        "--diagram",
        type=Path,
        help="Write the dependency diagram (.svg, .png or .pdf)",
    )
    parser.add_argument(
        "--mermaid",
        type=Path,
        help="Write Mermaid flowchart source",
    )
    parser.add_argument(
        "--slack",
        action="store_true",
        dest="show_slack",
        help="Show slack for tasks off the critical path",
    )
    parser.add_argument(
        "--review",
        action="store_true",
        help="Request an AI review of the rendered diagram",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print the result as JSON",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    if args.diagram and args.diagram.suffix.lower().lstrip(".") not in SUPPORTED_FORMATS:
        parser.error(f"--diagram must end in one of: {', '.join('.' + f for f in SUPPORTED_FORMATS)}")

    setup_logging(args.verbose)

    try:
        return run_analysis(
            tasks_file=args.tasks_file,
            diagram=args.diagram,
            mermaid=args.mermaid,
            show_slack=args.show_slack,
            review=args.review,
            as_json=args.as_json,
        )
    except (TaskFileError, CPMError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
