import logging
import re
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

# Lower-cased ASCII word characters and the Bengali block are kept verbatim
DISALLOWED_RE = re.compile(r"[^\u0980-\u09FFa-zA-Z0-9_\s-]")
SEPARATOR_RE = re.compile(r"[\s_-]+")

ExistsCheck = Callable[[str], Awaitable[bool]]


def base_slug(title: str) -> str:
    """Normalize a title into its slug before collision handling.

    >>> base_slug("Hello World!")
    'hello-world'
    """
    slug = title.lower().strip()
    slug = DISALLOWED_RE.sub("", slug)
    slug = SEPARATOR_RE.sub("-", slug)
    return slug.strip("-")


async def assign_slug(title: str, exists_check: ExistsCheck) -> str:
    """
    Return a slug for `title` that `exists_check` reports as unused.

    The base slug is tried first, then `base-1`, `base-2`, ... The function
    only queries; persisting the slug is up to the caller.
    """
    slug = base_slug(title)
    if not await exists_check(slug):
        return slug

    counter = 1
    candidate = f"{slug}-{counter}"
    while await exists_check(candidate):
        counter += 1
        candidate = f"{slug}-{counter}"

    logger.debug("Slug '%s' taken, using '%s'", slug, candidate)
    return candidate
