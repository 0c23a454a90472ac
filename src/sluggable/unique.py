"""Collision resolution: probe base, base-1, base-2, ... until a slug is free"""

import logging
from typing import Callable

from sluggable.errors import SlugAttemptsExhausted


logger = logging.getLogger(__name__)


def make_unique(
    candidate: str,
    exists: Callable[[str], bool],
    separator: str = "-",
    max_attempts: int = 0,
    ) -> str:
    """Return candidate, or the first free candidate<separator><n> for n = 1, 2, ...

    An empty candidate is never returned; its suffixed forms are the bare counter
    ("1", "2", ...). exists() is called once per probe, in order.
    max_attempts > 0 raises SlugAttemptsExhausted after that many suffixed probes.
    """
    attempt = candidate
    i = 1
    while attempt == "" or exists(attempt):
        if max_attempts and i > max_attempts:
            raise SlugAttemptsExhausted(candidate, max_attempts)
        logger.debug("Slug %r taken, trying suffix %d", attempt, i)
        attempt = f"{candidate}{separator}{i}" if candidate else str(i)
        i += 1
    return attempt
