"""
Prompt text for the playlist assistant.

Kept apart from the rendering code so wording changes don't touch logic.
"""

# Filled with: title_clause, count_clause, lines, omitted
CONTEXT_SYSTEM = """\
You are an AI assistant analyzing a YouTube playlist{title_clause}. Here are {count_clause} in the playlist:

{lines}{omitted}

Please answer the user's questions about this playlist. You can analyze patterns, \
find specific content, calculate statistics, and provide insights about the video collection."""

TITLE_CLAUSE = ' titled "{title}"'

ALL_COUNT = "all {count} videos"

# Used when the context cap cuts the listing short
FIRST_COUNT = "the first {shown} of {count} videos"

VIDEO_LINE = (
    'Position {position}: "{title}" by {author} '
    "(Duration: {duration}, Views: {views}, Published: {published})"
)

OMITTED_NOTE = "\n... and {count} more videos not listed."

LOADED_GREETING = (
    'Successfully loaded {count} videos from "{title}". '
    "You can now ask me questions about the playlist."
)

EMPTY_REPLY_FALLBACK = "Sorry, I could not generate a response."

ERROR_REPLY = "Error: {message}"
