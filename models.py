"""
Core data types. Shapes plus the small constructors that map API payloads.
"""

from dataclasses import dataclass, field
from enum import Enum

# Placeholder for any secondary field that could not be joined.
UNAVAILABLE = "N/A"


class ConnectionMode(Enum):
    CHECKING = "checking"
    PROXY_LOCAL = "proxy-local"
    PROXY_REMOTE = "proxy-remote"
    DIRECT_UNSUPPORTED = "direct-unsupported"


class Role(Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class RawItem:
    """One playlistItems entry, as delivered by the listing endpoint."""
    entry_id: str
    video_id: str           # key into the videos endpoint
    title: str
    author: str
    published_at: str       # ISO-8601, may be empty
    thumbnail: str
    description: str = ""

    @classmethod
    def from_api(cls, entry: dict) -> "RawItem":
        """
        Map a playlistItems resource. Raises KeyError/TypeError when the
        entry has no snippet or no resourceId.videoId.
        """
        snippet = entry["snippet"]
        video_id = snippet["resourceId"]["videoId"]
        thumbnails = snippet.get("thumbnails") or {}
        thumb = thumbnails.get("medium") or thumbnails.get("default") or {}
        return cls(
            entry_id=entry.get("id", ""),
            video_id=video_id,
            title=snippet.get("title", ""),
            author=snippet.get("videoOwnerChannelTitle") or snippet.get("channelTitle", ""),
            published_at=snippet.get("publishedAt", ""),
            thumbnail=thumb.get("url", ""),
            description=snippet.get("description") or "",
        )


@dataclass(frozen=True)
class SecondaryAttributes:
    """Per-video statistics from the videos endpoint. Transient."""
    video_id: str
    duration: str = UNAVAILABLE         # e.g. "PT1H2M3S"
    view_count: str = UNAVAILABLE
    like_count: str = UNAVAILABLE
    comment_count: str = UNAVAILABLE

    @classmethod
    def unavailable(cls, video_id: str) -> "SecondaryAttributes":
        return cls(video_id=video_id)

    @classmethod
    def from_api(cls, video: dict) -> "SecondaryAttributes":
        details = video.get("contentDetails") or {}
        stats = video.get("statistics") or {}
        return cls(
            video_id=video["id"],
            duration=details.get("duration") or UNAVAILABLE,
            view_count=stats.get("viewCount") or UNAVAILABLE,
            like_count=stats.get("likeCount") or UNAVAILABLE,
            comment_count=stats.get("commentCount") or UNAVAILABLE,
        )


@dataclass(frozen=True)
class EnrichedItem:
    """RawItem joined with its SecondaryAttributes, plus a 1-based position."""
    position: int
    entry_id: str
    video_id: str
    title: str
    author: str
    published_at: str
    thumbnail: str
    description: str
    duration: str
    view_count: str
    like_count: str
    comment_count: str

    @classmethod
    def join(cls, raw: RawItem, attributes: SecondaryAttributes | None, position: int) -> "EnrichedItem":
        if attributes is None:
            attributes = SecondaryAttributes.unavailable(raw.video_id)
        return cls(
            position=position,
            entry_id=raw.entry_id,
            video_id=raw.video_id,
            title=raw.title,
            author=raw.author,
            published_at=raw.published_at,
            thumbnail=raw.thumbnail,
            description=raw.description,
            duration=attributes.duration,
            view_count=attributes.view_count,
            like_count=attributes.like_count,
            comment_count=attributes.comment_count,
        )

    @property
    def is_enriched(self) -> bool:
        """False when every secondary field is the sentinel."""
        return any(
            value != UNAVAILABLE
            for value in (self.duration, self.view_count, self.like_count, self.comment_count)
        )


@dataclass
class Playlist:
    """A fully loaded collection. Replaced wholesale on the next load."""
    playlist_id: str
    title: str
    items: list[EnrichedItem] = field(default_factory=list)
    degraded_batches: list[int] = field(default_factory=list)  # 0-based batch indices

    @property
    def video_count(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"Playlist({self.playlist_id}, {self.title[:50]}, videos={self.video_count})"


@dataclass(frozen=True)
class ConversationTurn:
    role: Role
    content: str
