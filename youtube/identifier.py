"""
Playlist id extraction from free-form URLs.
"""

import re

# First `list=` query parameter. Ids are URL-safe base64 characters only.
_LIST_PARAM = re.compile(r"[&?]list=([A-Za-z0-9_-]+)")


def extract_playlist_id(url: str) -> str | None:
    """
    Return the value of the first `list=` parameter in `url`, or None.

    Never raises. Works on full URLs (youtube.com/playlist?list=...,
    youtube.com/watch?v=...&list=...) and bare query strings ("?list=...").
    """
    if not url:
        return None
    match = _LIST_PARAM.search(url)
    return match.group(1) if match else None
