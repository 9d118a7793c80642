"""Unit tests for blog slug generation."""

import pytest

from studentos.core.database.entities import BlogPost
from studentos.core.database.repositories import BlogPostRepository
from studentos.server.services.blog import slugify, unique_slug

pytestmark = pytest.mark.asyncio


@pytest.mark.parametrize(
    "title,slug",
    [
        ("Hello World", "hello-world"),
        ("  10 Tips: Study Smarter!  ", "10-tips-study-smarter"),
        ("C++ & Rust", "c-rust"),
        ("Café déjà vu", "caf-d-j-vu"),
        ("!!!", ""),
    ],
)
async def test_slugify(title: str, slug: str):
    assert slugify(title) == slug


async def _post(session, slug: str) -> None:
    session.add(BlogPost(author_id="author", title=slug, slug=slug, content="x"))
    await session.commit()


async def test_unique_slug_free(session):
    assert await unique_slug(BlogPostRepository(session), "Hello World") == "hello-world"


async def test_unique_slug_takes_next_suffix(session):
    await _post(session, "hello-world")
    await _post(session, "hello-world-2")
    assert await unique_slug(BlogPostRepository(session), "Hello World") == "hello-world-3"


async def test_unique_slug_ignores_other_prefixes(session):
    await _post(session, "hello-worlds")
    assert await unique_slug(BlogPostRepository(session), "Hello World") == "hello-world"


async def test_unique_slug_for_symbol_only_title(session):
    assert await unique_slug(BlogPostRepository(session), "???") == "post"
