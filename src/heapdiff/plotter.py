"""
Generates plots from histogram reports.

The main plot is a horizontal bar chart of the classes using the most memory
(or, for a diff, growing or shrinking the most). Plots are saved as
interactive HTML files and, if Kaleido is installed, as static PNG images.
"""

import logging
from pathlib import Path
from typing import Optional

import plotly.graph_objects as go

from .histogram.memory_histogram import MemoryHistogram

logger = logging.getLogger(__name__)

GROWTH_COLOR = "#d62728"
SHRINK_COLOR = "#2ca02c"


def _save_plotly_figure(fig: go.Figure, base_filename: str, output_dir: Path) -> Optional[Path]:
    """
    Saves a Plotly figure to HTML and, if possible, PNG.

    Returns:
        Path of the HTML file, or None if it could not be written.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    html_path = output_dir / f"{base_filename}.html"
    try:
        fig.write_html(html_path)
    except Exception as e:
        logger.error(f"Could not write plot {html_path}: {e}", exc_info=True)
        return None
    logger.info(f"Plot saved to: {html_path}")

    png_path = html_path.with_suffix(".png")
    try:
        fig.write_image(png_path, width=1200, height=max(600, fig.layout.height or 0))
        logger.info(f"Static plot saved to: {png_path}")
    except Exception as e:
        logger.warning(f"No PNG for {base_filename} ({e}); install `heapdiff[export]` for Kaleido")
    return html_path


def build_histogram_figure(histogram: MemoryHistogram, title: str, top_n: int = 20) -> go.Figure:
    """
    Build a bar chart of the first ``top_n`` entries of a histogram.

    Bars are drawn largest first (top of the chart); negative sizes, as found
    in diffs, are drawn in a different color.
    """
    top = list(histogram.get_top(top_n))
    # Plotly draws the first category at the bottom of a horizontal chart
    top.reverse()
    fig = go.Figure(
        go.Bar(
            x=[e.size for e in top],
            y=[e.class_name for e in top],
            orientation="h",
            marker_color=[GROWTH_COLOR if e.size >= 0 else SHRINK_COLOR for e in top],
            customdata=[e.instances for e in top],
            hovertemplate="%{y}<br>%{x} bytes<br>%{customdata} instances<extra></extra>",
        )
    )
    fig.update_layout(
        title=title,
        xaxis_title="Bytes",
        yaxis_title="Class",
        height=max(400, 25 * len(top) + 150),
        margin=dict(l=250),
    )
    return fig


def plot_histogram(
    histogram: MemoryHistogram,
    output_dir: Path,
    base_filename: str,
    top_n: int = 20,
    title: Optional[str] = None,
) -> Optional[Path]:
    """
    Plot a histogram and save it under ``output_dir``.

    Returns:
        Path of the HTML plot, or None when the histogram is empty or saving failed.
    """
    if not histogram:
        logger.warning(f"Histogram '{base_filename}' is empty. Skipping plot.")
        return None
    title = title or (
        f"{base_filename}: top {min(top_n, len(histogram))} of {len(histogram)} classes "
        f"({histogram.get_total_memory()} bytes total)"
    )
    fig = build_histogram_figure(histogram, title, top_n)
    return _save_plotly_figure(fig, base_filename, Path(output_dir))
