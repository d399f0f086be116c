"""
Context builder. Renders enriched items into the system prompt.

Deterministic: the same title and items always give byte-identical text.
"""

from chat.formatting import format_duration, format_publish_date, format_view_count
from chat.prompts import ALL_COUNT, CONTEXT_SYSTEM, FIRST_COUNT, OMITTED_NOTE, TITLE_CLAUSE, VIDEO_LINE
from models import EnrichedItem


def format_item_line(item: EnrichedItem) -> str:
    return VIDEO_LINE.format(
        position=item.position,
        title=item.title,
        author=item.author,
        duration=format_duration(item.duration),
        views=format_view_count(item.view_count),
        published=format_publish_date(item.published_at),
    )


def build_context(title: str, items: list[EnrichedItem], max_items: int | None = None) -> str:
    """
    Build the system prompt for one chat turn.

    Args:
        title: Playlist title. Empty string drops the "titled ..." clause.
        items: Enriched items in position order.
        max_items: Render at most this many lines. None, 0 or a negative
            value renders all. The preamble always states the full count.
    """
    shown = items[:max_items] if max_items and max_items > 0 else items
    omitted = len(items) - len(shown)

    if omitted:
        count_clause = FIRST_COUNT.format(shown=len(shown), count=len(items))
    else:
        count_clause = ALL_COUNT.format(count=len(items))

    return CONTEXT_SYSTEM.format(
        title_clause=TITLE_CLAUSE.format(title=title) if title else "",
        count_clause=count_clause,
        lines="\n".join(format_item_line(item) for item in shown),
        omitted=OMITTED_NOTE.format(count=omitted) if omitted else "",
    )
