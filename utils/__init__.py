# Utils package - page inspection, AI scoring, rendering and screenshot helpers

from .page_inspector import inspect_page, collect_network_stats, count_links
from .report_renderer import render_report, render_form
from .seo_analyzer import generate_report, parse_analysis, ModelResponseInvalid

__all__ = [
    "inspect_page",
    "collect_network_stats",
    "count_links",
    "render_report",
    "render_form",
    "generate_report",
    "parse_analysis",
    "ModelResponseInvalid",
]
