"""Map framing for a set of positioned contacts."""

from collections.abc import Iterable

from friendmap.domain import Bounds, Contact, Coordinate, Viewport, is_displayable

# Shown when there is nothing to fit: the Indian subcontinent at a wide zoom.
FALLBACK_CENTER = Coordinate(20.5937, 78.9629)
FALLBACK_ZOOM = 4

# Pixel padding the renderer applies when fitting bounds.
FIT_PADDING_PX = 50

# Degree margin added on each side: a share of the span, never less than the minimum.
MARGIN_RATIO = 0.05
MIN_HALF_EXTENT_DEG = 0.01


def fallback_viewport() -> Viewport:
    return Viewport(center=FALLBACK_CENTER, zoom=FALLBACK_ZOOM)


def compute_viewport(contacts: Iterable[Contact]) -> Viewport:
    """Bounding viewport over every displayable contact, or the fallback when there are none.

    The returned bounds always have non-zero area and strictly contain each
    point that is not on a pole or the antimeridian.
    """
    points = [c.coordinate for c in contacts if is_displayable(c)]
    if not points:
        return fallback_viewport()

    content = Bounds(
        south=min(p.lat for p in points),
        west=min(p.lng for p in points),
        north=max(p.lat for p in points),
        east=max(p.lng for p in points),
    )
    lat_margin = max((content.north - content.south) * MARGIN_RATIO, MIN_HALF_EXTENT_DEG)
    lng_margin = max((content.east - content.west) * MARGIN_RATIO, MIN_HALF_EXTENT_DEG)
    padded = Bounds(
        south=max(-90.0, content.south - lat_margin),
        west=max(-180.0, content.west - lng_margin),
        north=min(90.0, content.north + lat_margin),
        east=min(180.0, content.east + lng_margin),
    )
    return Viewport(
        center=padded.center,
        bounds=padded,
        content_bounds=content,
        padding_px=FIT_PADDING_PX,
    )
