"""
HTML rendering for SEO Analyzer reports.

All page-controlled and model-controlled text is escaped before it is
interpolated into the document.
"""

from html import escape
from pathlib import Path
from string import Template
from typing import Optional

from models import AnalysisResult, PageSignals

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

REPORT_TEMPLATE = Template("""<!DOCTYPE html>
<html>
    <head>
        <meta charset="utf-8">
        <title>SEO Analysis Result</title>
        <style>
            * { margin: 0; padding: 0; box-sizing: border-box; }
            body {
                font-family: 'Segoe UI', system-ui, sans-serif;
                min-height: 100vh;
                background: linear-gradient(135deg, #1e1e2e 0%, #2d2b55 100%);
                color: #fff;
                display: flex;
                flex-direction: column;
            }
            .container { max-width: 800px; margin: 0 auto; padding: 40px 20px; flex: 1; }
            h1, h2 { color: #4ecdc4; margin-bottom: 20px; }
            .card {
                background: rgba(255, 255, 255, 0.1);
                border-radius: 15px;
                padding: 30px;
                margin: 20px 0;
                border: 1px solid rgba(255, 255, 255, 0.1);
            }
            .score { font-size: 3em; font-weight: bold; text-align: center; margin: 20px 0; color: #2cb5e8; }
            .metric-grid {
                display: grid;
                grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
                gap: 20px;
                margin: 20px 0;
            }
            .metric-card { background: rgba(255, 255, 255, 0.05); padding: 20px; border-radius: 10px; }
            .metric-title { color: #4ecdc4; margin-bottom: 15px; font-size: 1.2em; }
            .analysis-item { background: rgba(255, 255, 255, 0.05); padding: 15px; margin: 10px 0; border-radius: 8px; }
            .back-button { margin-top: 30px; text-align: center; }
            .back-button a {
                color: #4ecdc4;
                text-decoration: none;
                padding: 10px 20px;
                border: 2px solid #4ecdc4;
                border-radius: 8px;
            }
        </style>
    </head>
    <body>
        <div class="container">
            <h1>SEO Analysis Results</h1>
            <div class="card">
                <div class="score">$score/100</div>

                <div class="metric-grid">
                    <div class="metric-card">
                        <div class="metric-title">&#127919; Basic SEO</div>
                        <div class="analysis-item"><strong>Title:</strong> $title ($title_length chars)</div>
                        <div class="analysis-item"><strong>Meta Description:</strong> $meta_description ($meta_description_length chars)</div>
                        <div class="analysis-item"><strong>Canonical URL:</strong> $canonical_url</div>
                    </div>

                    <div class="metric-card">
                        <div class="metric-title">&#9889; Performance</div>
                        <div class="analysis-item"><strong>Load Time:</strong> ${load_time}s</div>
                        <div class="analysis-item"><strong>DOM Content Loaded:</strong> ${dom_content_loaded}s</div>
                        <div class="analysis-item"><strong>Page Size:</strong> ${page_size}KB</div>
                    </div>

                    <div class="metric-card">
                        <div class="metric-title">&#128241; Mobile Optimization</div>
                        <div class="analysis-item"><strong>Viewport Meta:</strong> $viewport</div>
                        <div class="analysis-item"><strong>Touch Icons:</strong> $touch_icons</div>
                        <div class="analysis-item"><strong>Small Font Issues:</strong> $small_font_count elements</div>
                    </div>

                    <div class="metric-card">
                        <div class="metric-title">&#128274; Security</div>
                        <div class="analysis-item"><strong>HTTPS:</strong> $https</div>
                        <div class="analysis-item"><strong>Content Security Policy:</strong> $csp</div>
                    </div>

                    <div class="metric-card">
                        <div class="metric-title">&#128279; Content Structure</div>
                        <div class="analysis-item"><strong>Word Count:</strong> $word_count</div>
                        <div class="analysis-item"><strong>Heading Structure:</strong> H1: $h1_count | H2: $h2_count | H3: $h3_count</div>
                        <div class="analysis-item"><strong>Links:</strong> Internal: $internal_links | External: $external_links</div>
                    </div>

                    <div class="metric-card">
                        <div class="metric-title">&#9888;&#65039; Issues</div>
                        <div class="analysis-item"><strong>Images without Alt:</strong> $images_without_alt</div>
                        <div class="analysis-item"><strong>Broken Images:</strong> $broken_images</div>
                    </div>

                    <div class="metric-card">
                        <div class="metric-title">&#127760; Network Stats</div>
                        <div class="analysis-item"><strong>JS Heap Used:</strong> $js_heap_used</div>
                        <div class="analysis-item"><strong>JS Heap Total:</strong> $js_heap_total</div>
                        <div class="analysis-item"><strong>Script Duration:</strong> $script_duration</div>
                        <div class="analysis-item"><strong>Task Duration:</strong> $task_duration</div>
                    </div>
                </div>

                <h2>AI Analysis</h2>
                $analysis_items

                <div class="back-button">
                    <a href="/">&larr; Analyze another URL</a>
                </div>
            </div>
        </div>
    </body>
</html>
""")


def _check(flag: bool) -> str:
    return "&#9989;" if flag else "&#10060;"


def _text(value: Optional[str], default: str = "Not found") -> str:
    return escape(value) if value else default


def _with_unit(value: Optional[int], unit: str) -> str:
    return "n/a" if value is None else f"{value}{unit}"


def render_report(signals: PageSignals, result: AnalysisResult) -> str:
    """
    Render the SEO report page.

    Args:
        signals: PageSignals extracted from the page
        result: AnalysisResult from the report generator

    Returns:
        Complete HTML document
    """
    network = signals.network
    analysis_items = "\n".join(
        f'<div class="analysis-item">&bull; {escape(item)}</div>' for item in result.analysis
    )

    return REPORT_TEMPLATE.substitute(
        score=result.score,
        title=_text(signals.title),
        title_length=len(signals.title or ""),
        meta_description=_text(signals.meta_description),
        meta_description_length=len(signals.meta_description or ""),
        canonical_url=_text(signals.canonical_url),
        load_time=round(signals.performance.load_time / 1000),
        dom_content_loaded=round(signals.performance.dom_content_loaded / 1000),
        page_size=round(signals.performance.page_size / 1024),
        viewport=_check(bool(signals.mobile.viewport)),
        touch_icons=_check(signals.mobile.has_touch_icons),
        small_font_count=signals.mobile.small_font_count,
        https=_check(signals.security.has_https),
        csp=_check(signals.security.has_csp),
        word_count=signals.performance.word_count,
        h1_count=signals.h1_count,
        h2_count=signals.h2_count,
        h3_count=signals.h3_count,
        internal_links=signals.internal_links,
        external_links=signals.external_links,
        images_without_alt=signals.images_without_alt,
        broken_images=signals.broken_images,
        js_heap_used=_with_unit(network and network.js_heap_used_size, "MB"),
        js_heap_total=_with_unit(network and network.js_heap_total_size, "MB"),
        script_duration=_with_unit(network and network.script_duration, "ms"),
        task_duration=_with_unit(network and network.task_duration, "ms"),
        analysis_items=analysis_items,
    )


def render_form() -> str:
    """Return the static URL submission form"""
    return (STATIC_DIR / "index.html").read_text(encoding="utf-8")
