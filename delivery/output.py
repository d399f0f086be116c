"""
CLI output. Plain stdout, nothing else.
"""

from chat.formatting import format_duration, format_publish_date, format_view_count
from models import ConnectionMode, ConversationTurn, Playlist, Role
from youtube.probe import describe_mode

SEPARATOR = "─" * 60


def deliver_status(mode: ConnectionMode):
    print(f"[{mode.value}] {describe_mode(mode)}")


def deliver_playlist(playlist: Playlist):
    """Print the loaded video list."""
    print(f"\n{SEPARATOR}")
    print(f"  {playlist.title}")
    print(f"  {playlist.video_count} videos")
    if playlist.degraded_batches:
        print(f"  (details unavailable for {len(playlist.degraded_batches)} batch(es))")
    print(SEPARATOR)

    for video in playlist.items:
        print(f"{video.position:>4}. {video.title}")
        print(
            f"      {video.author} · {format_duration(video.duration)} · "
            f"{format_view_count(video.view_count)} · {format_publish_date(video.published_at)}"
        )
    print(SEPARATOR)


def deliver_turn(turn: ConversationTurn):
    label = "You" if turn.role == Role.USER else "Assistant"
    print(f"\n{label}: {turn.content}")
