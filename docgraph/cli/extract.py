"""Extract command implementation."""

import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from docgraph.export.json import export_json
from docgraph.graph.errors import ExtractionError
from docgraph.graph.snapshot import SnapshotHost
from docgraph.runtime.config_loader import load_extraction_config
from docgraph.runtime.extraction import Extraction

logger = logging.getLogger("docgraph.cli.extract")

RECOVERABLE_EXTRACT_ERRORS = (
    ExtractionError,
    KeyError,
    OSError,
    TypeError,
    ValueError,
)


def extract_command(args) -> int:
    """Execute extract command.

    Args:
        args: Parsed command-line arguments containing:
            - snapshot: Analysis snapshot (JSON) to read
            - output: Output file path
            - package: Package name override (optional)
            - config: Config file or inline TOML/JSON (optional)
            - modules_only: Only collect modules and namespaces
            - strict: Fail on unresolved exports

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    logger.info("=== Docgraph Extract ===")

    try:
        config = load_extraction_config(getattr(args, "config", None))
        overrides = {}
        if getattr(args, "modules_only", False):
            overrides["modules_only"] = True
        if getattr(args, "strict", False):
            overrides["strict"] = True
        if overrides:
            config = config.model_copy(update=overrides)

        host = SnapshotHost.from_file(Path(args.snapshot))
        roots = host.roots()
        if not roots:
            logger.error("Snapshot %s declares no root symbols", args.snapshot)
            return 1

        package_name = (
            getattr(args, "package", None) or config.package_name or host.package_name
        )
        external_references = host.external_references(config.hash_length)
        doc_graph = Extraction(
            host,
            roots,
            config=config,
            package_name=package_name,
            external_reference_resolver=external_references.get,
        ).run()

        output_path = Path(args.output)
        export_json(doc_graph, output_path)
    except RECOVERABLE_EXTRACT_ERRORS as e:
        logger.error("Extraction failed: %s", e, exc_info=True)
        return 1

    _print_summary(doc_graph.summary(), output_path)
    for diagnostic in doc_graph.diagnostics:
        logger.warning("[%s] %s", diagnostic.code.value, diagnostic.message)
    return 0


def _print_summary(summary: dict, output_path: Path) -> None:
    """Render extraction counts as a table on stdout."""
    table = Table(title=f"Documentation graph: {summary['package_name']}")
    table.add_column("Metric")
    table.add_column("Count", justify="right")
    for key, value in summary.items():
        if key == "package_name":
            continue
        table.add_row(key.replace("_", " "), str(value))

    console = Console()
    console.print(table)
    console.print(f"Written to {output_path}")
