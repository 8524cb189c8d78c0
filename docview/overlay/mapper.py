"""Maps search hits onto the pixel box a page was actually displayed in.

Hits and page sizes come from the search pipeline at the reference
resolution; the display reports the rendered size once it is known. The
result is always recomputed from those inputs, never adjusted in place.
"""

from collections.abc import Iterable

from docview.processor.models import HitBox, PageSearchResult


def map_hits(
    result: PageSearchResult,
    displayed_width: float,
    displayed_height: float,
) -> list[HitBox]:
    """Rescale every hit of one page into displayed pixel space.

    Raises:
        ValueError: if the reference page size is not positive.
    """
    if result.page_width <= 0 or result.page_height <= 0:
        raise ValueError(
            f"Page {result.page_number} has no usable reference size: "
            f"{result.page_width}x{result.page_height}"
        )
    sx = displayed_width / result.page_width
    sy = displayed_height / result.page_height
    return [hit.scaled(sx, sy) for hit in result.hits]


def overlay_for_page(
    results: Iterable[PageSearchResult],
    page_number: int,
    displayed_width: float,
    displayed_height: float,
) -> list[HitBox]:
    """Pixel-space hits for `page_number`; empty if the page has no result."""
    for result in results:
        if result.page_number == page_number:
            return map_hits(result, displayed_width, displayed_height)
    return []
