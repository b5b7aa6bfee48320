"""Contributor name extraction from a kept page fragment."""
import re
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from wiki_author_edits.processing.shared.constants import DEFAULT_USERNAME_TAG

UsernamePair = Tuple[str, int]


@lru_cache(maxsize=None)
def _marker_pattern(username_tag: str) -> Pattern:
    return re.compile(f"{re.escape(f'<{username_tag}>')}|{re.escape(f'</{username_tag}>')}")


def extract_username(fragment: str, username_tag: str = DEFAULT_USERNAME_TAG) -> Optional[UsernamePair]:
    """
    Return ``(username, 1)`` if splitting on the username markers gives exactly
    three segments, otherwise None.

    Pages without a username marker (anonymous ``<ip>`` edits) and pages with
    several markers are both misses; neither raises.
    """
    segments = _marker_pattern(username_tag).split(fragment)
    if len(segments) != 3:
        return None
    return segments[1], 1
