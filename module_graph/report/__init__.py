"""
Report module for module graphs.

This module provides the renderers and the ReportWriter that produces
full.txt, filtered.txt and deps.txt.
"""

from module_graph.report.writer import (
    ReportPaths,
    ReportWriter,
    camel_case,
    render_dependencies,
    render_graph,
)

__all__ = [
    "ReportPaths",
    "ReportWriter",
    "camel_case",
    "render_dependencies",
    "render_graph",
]
