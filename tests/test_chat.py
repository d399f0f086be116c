"""
Tests for the chat side:
- duration / view count / date formatting
- context (system prompt) construction
- chat session transcript rules
- proxy-backed conversational backend
"""

from pathlib import Path
import sys
import threading
import time

import pytest
import requests

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from chat.context import build_context, format_item_line
from chat.formatting import format_duration, format_publish_date, format_view_count
from chat.session import ChatSession
from llm.provider import ConversationError, LLMError
from llm.proxy_backend import ProxyBackend
from models import UNAVAILABLE, EnrichedItem, Playlist, RawItem, Role, SecondaryAttributes
from tests.fakes import FakeBackend, FakeResponse, FakeSession, make_entry, make_video


def _item(n: int, duration="PT4M13S", views="1500", attributes=True) -> EnrichedItem:
    raw = RawItem.from_api(make_entry(n))
    attrs = SecondaryAttributes.from_api(make_video(raw.video_id, duration=duration, views=views)) if attributes else None
    return EnrichedItem.join(raw, attrs, position=n)


def _playlist(n: int = 2, title: str = "Lectures") -> Playlist:
    return Playlist(playlist_id="PL1", title=title, items=[_item(i + 1) for i in range(n)])


# ──────────────────────────────────────────────
# Formatting
# ──────────────────────────────────────────────

class TestFormatDuration:
    def test_hours(self):
        assert format_duration("PT1H2M3S") == "1:02:03"

    def test_minutes_only(self):
        assert format_duration("PT5M9S") == "5:09"

    def test_zero_hours_explicit(self):
        assert format_duration("PT0H5M9S") == "5:09"

    def test_seconds_only(self):
        assert format_duration("PT42S") == "0:42"

    def test_hours_only(self):
        assert format_duration("PT2H") == "2:00:00"

    def test_days_fold_into_hours(self):
        assert format_duration("P1DT2H3M4S") == "26:03:04"

    def test_zero(self):
        assert format_duration("PT0S") == "0:00"

    def test_sentinel(self):
        assert format_duration(UNAVAILABLE) == "N/A"

    def test_empty(self):
        assert format_duration("") == "N/A"
        assert format_duration(None) == "N/A"

    def test_unparseable_returned_as_is(self):
        assert format_duration("P0D-live") == "P0D-live"


class TestFormatViewCount:
    def test_millions(self):
        assert format_view_count("1500000") == "1.5M views"

    def test_thousands(self):
        assert format_view_count("2500") == "2.5K views"

    def test_small(self):
        assert format_view_count("42") == "42 views"

    def test_int_input(self):
        assert format_view_count(1000000) == "1.0M views"

    def test_zero(self):
        assert format_view_count("0") == "0 views"

    def test_sentinel(self):
        assert format_view_count(UNAVAILABLE) == "N/A"

    def test_not_a_number(self):
        assert format_view_count("lots") == "N/A"


class TestFormatPublishDate:
    def test_zulu_timestamp(self):
        assert format_publish_date("2024-01-05T10:00:00Z") == "2024-01-05"

    def test_offset_timestamp(self):
        assert format_publish_date("2023-11-30T23:59:59+00:00") == "2023-11-30"

    def test_missing(self):
        assert format_publish_date("") == "N/A"

    def test_garbage(self):
        assert format_publish_date("yesterday") == "N/A"


# ──────────────────────────────────────────────
# Context construction
# ──────────────────────────────────────────────

class TestBuildContext:
    def test_item_line(self):
        item = _item(1, duration="PT1H2M3S", views="1500000")
        assert format_item_line(item) == (
            'Position 1: "Video 1" by Channel 1 '
            "(Duration: 1:02:03, Views: 1.5M views, Published: 2024-01-05)"
        )

    def test_deterministic(self):
        items = [_item(1), _item(2)]
        first = build_context("Lectures", items)
        second = build_context("Lectures", items)
        assert first == second
        assert first.encode() == second.encode()

    def test_preamble_and_directive(self):
        text = build_context("Lectures", [_item(1), _item(2)])
        assert text.startswith('You are an AI assistant analyzing a YouTube playlist titled "Lectures".')
        assert "Here are all 2 videos in the playlist:" in text
        assert "calculate statistics" in text
        assert text.index("Position 1:") < text.index("Position 2:")

    def test_no_title(self):
        text = build_context("", [_item(1)])
        assert text.startswith("You are an AI assistant analyzing a YouTube playlist. Here are all 1 videos")

    def test_sentinel_item(self):
        text = build_context("T", [_item(1, attributes=False)])
        assert "(Duration: N/A, Views: N/A, Published: 2024-01-05)" in text

    def test_cap_keeps_full_count(self):
        items = [_item(i + 1) for i in range(10)]
        text = build_context("T", items, max_items=3)
        assert "Here are the first 3 of 10 videos in the playlist:" in text
        assert "Here are all" not in text
        assert "Position 3:" in text
        assert "Position 4:" not in text
        assert "... and 7 more videos not listed." in text

    def test_cap_not_reached(self):
        items = [_item(i + 1) for i in range(3)]
        assert "more videos not listed" not in build_context("T", items, max_items=3)

    def test_zero_cap_means_unbounded(self):
        items = [_item(i + 1) for i in range(5)]
        assert build_context("T", items, max_items=0) == build_context("T", items)

    def test_negative_cap_means_unbounded(self):
        items = [_item(i + 1) for i in range(5)]
        text = build_context("T", items, max_items=-2)
        assert text == build_context("T", items)
        assert "Position 5:" in text


# ──────────────────────────────────────────────
# Chat session
# ──────────────────────────────────────────────

class TestChatSession:
    def test_load_seeds_greeting(self):
        session = ChatSession(FakeBackend())
        session.load(_playlist(2, "Lectures"))

        assert len(session.transcript) == 1
        turn = session.transcript[0]
        assert turn.role == Role.ASSISTANT
        assert turn.content == (
            'Successfully loaded 2 videos from "Lectures". '
            "You can now ask me questions about the playlist."
        )

    def test_load_replaces_transcript(self):
        session = ChatSession(FakeBackend("a1"))
        session.load(_playlist(2, "First"))
        session.submit("hello")
        session.load(_playlist(3, "Second"))

        assert len(session.transcript) == 1
        assert "Second" in session.transcript[0].content
        assert session.title == "Second"
        assert len(session.items) == 3

    def test_blank_submit_is_noop(self):
        backend = FakeBackend()
        session = ChatSession(backend)
        session.load(_playlist())
        before = len(session.transcript)

        assert session.submit("") is None
        assert session.submit("   \n\t") is None
        assert len(session.transcript) == before
        assert backend.prompts == []

    def test_success_appends_two_turns(self):
        backend = FakeBackend("There are 2 videos.")
        session = ChatSession(backend)
        session.load(_playlist())

        turn = session.submit("  how many videos?  ")

        assert turn.role == Role.ASSISTANT
        assert turn.content == "There are 2 videos."
        roles = [t.role for t in session.transcript[-2:]]
        assert roles == [Role.USER, Role.ASSISTANT]
        assert session.transcript[-2].content == "how many videos?"

    def test_backend_gets_context_and_question(self):
        backend = FakeBackend("ok")
        session = ChatSession(backend)
        session.load(_playlist(2, "Lectures"))
        session.submit("how many videos?")

        system_prompt, user_prompt = backend.prompts[0]
        assert system_prompt == build_context("Lectures", session.items)
        assert user_prompt == "how many videos?"

    def test_failing_backend_appends_error_turn(self):
        session = ChatSession(FakeBackend(ConversationError("Server missing OPENAI_API_KEY")))
        session.load(_playlist())
        before = len(session.transcript)

        turn = session.submit("how many videos?")

        assert len(session.transcript) == before + 2
        user, assistant = session.transcript[-2:]
        assert user.role == Role.USER
        assert user.content == "how many videos?"
        assert assistant.role == Role.ASSISTANT
        assert assistant.content == "Error: Server missing OPENAI_API_KEY"
        assert turn == assistant

    def test_any_llm_error_is_absorbed(self):
        session = ChatSession(FakeBackend(LLMError("Claude API error: overloaded")))
        session.load(_playlist())
        turn = session.submit("hi")
        assert turn.content == "Error: Claude API error: overloaded"

    def test_empty_reply_fallback(self):
        session = ChatSession(FakeBackend(""))
        session.load(_playlist())
        assert session.submit("hi").content == "Sorry, I could not generate a response."

    def test_user_turn_visible_before_backend_returns(self):
        seen = []

        class PeekingBackend(FakeBackend):
            def complete(self, system_prompt, user_prompt, temperature=0.5, max_tokens=1000):
                seen.append(session.transcript[-1])
                return super().complete(system_prompt, user_prompt, temperature, max_tokens)

        session = ChatSession(PeekingBackend("reply"))
        session.load(_playlist())
        session.submit("question")

        assert seen[0].role == Role.USER
        assert seen[0].content == "question"

    def test_submit_without_playlist(self):
        backend = FakeBackend("no playlist loaded")
        session = ChatSession(backend)
        session.submit("anything?")
        assert "Here are all 0 videos" in backend.prompts[0][0]
        assert len(session.transcript) == 2

    def test_context_cap_applied(self):
        backend = FakeBackend("ok")
        session = ChatSession(backend, context_max_items=1)
        session.load(_playlist(3))
        session.submit("q")
        assert "... and 2 more videos not listed." in backend.prompts[0][0]

    def test_negative_context_cap_renders_everything(self):
        backend = FakeBackend("ok")
        session = ChatSession(backend, context_max_items=-1)
        session.load(_playlist(3))
        session.submit("q")
        assert "Here are all 3 videos" in backend.prompts[0][0]
        assert "Position 3:" in backend.prompts[0][0]

    def test_transcript_is_a_snapshot(self):
        session = ChatSession(FakeBackend())
        session.load(_playlist())
        snapshot = session.transcript
        assert isinstance(snapshot, tuple)

    def test_concurrent_submits_do_not_interleave(self):
        class EchoBackend(FakeBackend):
            def complete(self, system_prompt, user_prompt, temperature=0.5, max_tokens=1000):
                time.sleep(0.01)
                return super().complete(system_prompt, user_prompt, temperature, max_tokens)

        backend = EchoBackend(*["reply"] * 5)
        session = ChatSession(backend)
        session.load(_playlist())

        threads = [threading.Thread(target=session.submit, args=(f"q{i}",)) for i in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        turns = session.transcript[1:]
        assert len(turns) == 10
        for user, assistant in zip(turns[::2], turns[1::2]):
            assert user.role == Role.USER
            assert assistant.role == Role.ASSISTANT


# ──────────────────────────────────────────────
# Proxy backend
# ──────────────────────────────────────────────

class TestProxyBackend:
    def test_success(self):
        session = FakeSession(FakeResponse(200, {"text": "Answer"}))
        backend = ProxyBackend("http://proxy/", session=session)

        response = backend.complete("system", "question")

        assert response.text == "Answer"
        method, url, kwargs = session.requests[0]
        assert url == "http://proxy/api/ai"
        assert kwargs["json"] == {"systemPrompt": "system", "userMessage": "question"}

    def test_missing_text_is_empty(self):
        session = FakeSession(FakeResponse(200, {}))
        assert ProxyBackend("http://proxy", session=session).complete("s", "q").text == ""

    def test_error_status_uses_error_field(self):
        session = FakeSession(FakeResponse(500, {"error": "Server missing OPENAI_API_KEY"}))
        with pytest.raises(ConversationError, match="OPENAI_API_KEY"):
            ProxyBackend("http://proxy", session=session).complete("s", "q")

    def test_error_status_without_body(self):
        session = FakeSession(FakeResponse(502, None))
        with pytest.raises(ConversationError, match="AI backend error"):
            ProxyBackend("http://proxy", session=session).complete("s", "q")

    def test_network_error(self):
        session = FakeSession(requests.ConnectionError("refused"))
        with pytest.raises(ConversationError, match="unreachable"):
            ProxyBackend("http://proxy", session=session).complete("s", "q")

    def test_malformed_success_body(self):
        session = FakeSession(FakeResponse(200, None))
        with pytest.raises(ConversationError, match="malformed"):
            ProxyBackend("http://proxy", session=session).complete("s", "q")

    def test_session_turns_network_error_into_error_turn(self):
        backend = ProxyBackend("http://proxy", session=FakeSession(requests.ConnectionError("refused")))
        session = ChatSession(backend)
        session.load(_playlist())
        turn = session.submit("how many videos?")
        assert turn.content.startswith("Error: AI backend unreachable")
