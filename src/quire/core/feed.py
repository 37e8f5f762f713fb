"""Project the posts collection into a syndication feed."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, date, datetime, time

from quire.core.routes import route_url
from quire.core.types import FeedDocument, FeedEntry, Record


def as_datetime(value: date) -> datetime:
    """Promote a calendar date to a UTC datetime so dates and timestamps compare."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def build_feed(
    posts: Iterable[Record],
    *,
    title: str,
    description: str,
    site: str,
    route_prefix: str = "articles",
    language: str = "en-us",
    date_field: str = "pubDate",
) -> FeedDocument:
    """Build the feed document for ``posts``.

    Entries are sorted newest first. Posts sharing a publish date keep their
    input order.
    """
    entries = [
        FeedEntry(
            title=post["title"],
            pub_date=as_datetime(post[date_field]),
            description=post["description"],
            link=route_url(route_prefix, post.slug or post.id),
        )
        for post in posts
    ]
    entries.sort(key=lambda entry: entry.pub_date, reverse=True)

    return FeedDocument(
        title=title,
        description=description,
        site=site,
        language=language,
        last_build_date=datetime.now(UTC),
        entries=entries,
    )
