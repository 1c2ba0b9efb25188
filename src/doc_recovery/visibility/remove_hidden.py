"""Drop text fragments that were never meant to be read.

PDF-like sources often carry watermarks, white-on-white keyword stuffing,
invisible OCR layers and hidden annotations.  Left in, they pollute the line
stream and confuse every later heuristic.

Rules
-----
Fragment level (all must pass to keep the fragment):
    - render mode is not invisible (3, or 7 which only clips)
    - stroke alpha and fill alpha are both >= 0.3
    - fill colour is not near-white (not all of R, G, B > 0.95)

Container level:
    - annotations flagged hidden / no-view, or named like a watermark
    - form objects with any alpha constant < 0.5, or whose name contains
      "watermark", "wm" or "background" (case-insensitive)

This is best-effort: it neither guarantees removal of every decorative layer
nor preservation of every piece of legitimate low-contrast text.
"""

import logging
from collections.abc import Iterable

from doc_recovery.config import RecoveryConfig
from doc_recovery.visibility.schema import ContainerObject, RawSegment, RenderState

logger = logging.getLogger(__name__)

# ── Thresholds ───────────────────────────────────────────────────────────────

# Text rendering modes that paint neither stroke nor fill
INVISIBLE_RENDER_MODES = frozenset({3, 7})

MIN_FRAGMENT_ALPHA = 0.3
MIN_FORM_ALPHA = 0.5
NEAR_WHITE = 0.95

# Substrings that mark a form object as decoration
FORM_NAME_MARKERS = ("watermark", "wm", "background")

ANNOTATION_NAME_MARKERS = ("watermark",)


def is_visible_fragment(render: RenderState | None) -> bool:
    """Return True if a fragment painted with this graphics state can be seen."""
    if render is None:
        return True
    if render.render_mode in INVISIBLE_RENDER_MODES:
        return False
    if render.stroke_alpha < MIN_FRAGMENT_ALPHA or render.fill_alpha < MIN_FRAGMENT_ALPHA:
        return False
    # White text on an assumed white page; colour spaces with fewer than three
    # components (gray, pattern) are not judged
    color = render.fill_color
    if color is not None and len(color) >= 3 and all(component > NEAR_WHITE for component in color[:3]):
        return False
    return True


def is_hidden_container(container: ContainerObject | None) -> bool:
    """Return True if the enclosing annotation or form object should be dropped."""
    if container is None:
        return False
    name = container.name.lower()
    if container.kind == "annotation":
        return container.hidden or container.no_view or any(marker in name for marker in ANNOTATION_NAME_MARKERS)
    if any(alpha < MIN_FORM_ALPHA for alpha in container.alpha_constants):
        return True
    return any(marker in name for marker in FORM_NAME_MARKERS)


def is_visible(segment: RawSegment) -> bool:
    """Return True if neither the fragment nor its container is hidden."""
    return not is_hidden_container(segment.container) and is_visible_fragment(segment.render)


def run(segments: Iterable[RawSegment], config: RecoveryConfig) -> list[RawSegment]:
    """Return the segments that survive the visibility rules.

    With ``config.include_hidden_layers`` set, every segment is kept.
    """
    segments = list(segments)
    if config.include_hidden_layers:
        logger.debug("Visibility filter disabled; keeping all %d segments", len(segments))
        return segments

    kept = [segment for segment in segments if is_visible(segment)]
    logger.debug("Removed %d hidden or watermark fragments", len(segments) - len(kept))
    return kept
