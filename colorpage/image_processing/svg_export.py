"""SVG preview rendering of extracted vector paths.

AIDEV-NOTE: This is a plain per-image preview in pixel coordinates. Page
layout, themes and pagination belong to the layout collaborator that
consumes ImageResult; nothing here scales content onto a page.
"""

from typing import TYPE_CHECKING

import svg

from colorpage.models import LineWeight

if TYPE_CHECKING:
    from colorpage.models import ImageResult, VectorPath


def paths_to_svg(
    paths: "list[VectorPath]",
    width: int,
    height: int,
    stroke_width: float = LineWeight.MEDIUM.stroke_width,
    title: str | None = None,
) -> str:
    """Convert vector paths to an SVG string.

    Args:
        paths: VectorPath objects in pixel coordinates
        width: Image width in pixels (viewBox width)
        height: Image height in pixels (viewBox height)
        stroke_width: Line width in pixels
        title: Optional document title

    Returns:
        SVG content as string
    """
    elements: list[svg.Element] = []

    if title:
        elements.append(svg.Title(text=title))

    for index, path in enumerate(paths):
        if not path.path_data:
            continue
        elements.append(
            svg.Path(
                id=f"path-{index}",
                # path_data is already in SVG path grammar
                d=path.path_data,  # type: ignore[arg-type]
                fill="none",
                stroke="black",
                stroke_width=stroke_width,
                stroke_linecap="round",
                stroke_linejoin="round",
            )
        )

    document = svg.SVG(
        width=width,
        height=height,
        viewBox=svg.ViewBoxSpec(0, 0, max(width, 1), max(height, 1)),
        elements=elements,
    )
    return document.as_str()


def image_result_to_svg(result: "ImageResult", line_weight: LineWeight = LineWeight.MEDIUM) -> str:
    """SVG preview of one processed image."""
    return paths_to_svg(
        list(result.paths),
        result.width,
        result.height,
        stroke_width=line_weight.stroke_width,
        title=f"Coloring Page: {result.filename}",
    )
