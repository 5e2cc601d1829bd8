"""A minimal navigation resolver for ``"<section>:<offset>"`` references."""

import logging
import re

from reading_progress.models.anchor import LazyAnchor
from reading_progress.models.progress import NavigationResult
from reading_progress.progress.offsets import point_at

logger = logging.getLogger(__name__)

LOCATION_PATTERN = re.compile(r"^\s*(\d+)\s*:\s*(\d+)\s*$")


class OffsetResolver:
    """Resolves ``"2:150"`` to section 2, 150 characters into its text.

    Stands in for a real CFI resolver when sections are addressed by plain
    character offsets. Anything that does not match the pattern is
    unresolvable.
    """

    def __call__(self, location: str) -> NavigationResult | None:
        match = LOCATION_PATTERN.match(location or "")
        if match is None:
            logger.debug("Not an offset location: %r", location)
            return None

        index, offset = int(match.group(1)), int(match.group(2))
        return NavigationResult(
            index=index,
            anchor=LazyAnchor(resolve=lambda document: point_at(document, offset)),
        )
