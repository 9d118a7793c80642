"""Blog slug generation."""

import re

from studentos.core.database.repositories import BlogPostRepository

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Lower-case ``title`` and join its alphanumeric runs with ``-``."""
    return _NON_SLUG_CHARS.sub("-", title.lower()).strip("-")


async def unique_slug(repository: BlogPostRepository, title: str) -> str:
    """Slug for ``title`` that no existing post uses.

    Collisions get a numeric suffix: ``my-post``, ``my-post-2``, ``my-post-3``.
    """
    base = slugify(title) or "post"
    taken = await repository.slugs_like(base)
    if base not in taken:
        return base
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"
