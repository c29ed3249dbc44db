"""Unit tests for the SSE stream consumer."""
import pytest
from conftest import aiter_chunks, sse_body, sse_frame
from hypothesis import given, settings
from hypothesis import strategies as st

from onboardly.chat import SSEStreamConsumer


def run_chunks(chunks: list[bytes | str]) -> tuple[SSEStreamConsumer, list[str]]:
    """Feed chunks synchronously and flush, recording every update."""
    updates: list[str] = []
    consumer = SSEStreamConsumer(on_delta=updates.append)
    for chunk in chunks:
        consumer.feed(chunk.encode("utf-8") if isinstance(chunk, str) else chunk)
    consumer.flush()
    return consumer, updates


def split_at(data: bytes, offsets: list[int]) -> list[bytes]:
    cuts = sorted(set(o for o in offsets if 0 < o < len(data)))
    pieces = []
    start = 0
    for cut in cuts:
        pieces.append(data[start:cut])
        start = cut
    pieces.append(data[start:])
    return pieces


class TestSSEStreamConsumer:
    """Tests for line framing and delta accumulation."""

    def test_two_chunks_update_incrementally(self):
        """Each parsed delta triggers one update with the content so far."""
        consumer, updates = run_chunks([
            sse_frame("Hel"),
            sse_frame("lo") + "data: [DONE]\n",
        ])

        assert consumer.content == "Hello"
        assert updates == ["Hel", "Hello"]
        assert consumer.done

    def test_json_split_across_chunks(self):
        """A JSON object split across reads parses once, after the second chunk."""
        updates: list[str] = []
        consumer = SSEStreamConsumer(on_delta=updates.append)

        consumer.feed(b'data: {"choices":[{"del')
        assert updates == []
        assert consumer.content == ""

        consumer.feed(b'ta":{"content":"Hi"}}]}\n')
        assert updates == ["Hi"]
        assert consumer.content == "Hi"

    def test_done_stops_accumulation_within_chunk(self):
        """Frames after [DONE] in the same chunk are never applied."""
        consumer, updates = run_chunks([
            sse_frame("A") + "data: [DONE]\n" + sse_frame("B"),
        ])

        assert consumer.content == "A"
        assert updates == ["A"]

    def test_done_stops_accumulation_across_chunks(self):
        """Frames arriving in later chunks after [DONE] are ignored."""
        consumer, _ = run_chunks([
            sse_frame("A") + "data: [DONE]\n",
            sse_frame("B"),
        ])

        assert consumer.content == "A"

    def test_comments_and_blank_lines_are_skipped(self):
        """Keep-alive comments and blank lines never contribute content."""
        consumer, updates = run_chunks([
            ": keep-alive\n\n",
            "\r\n",
            "   \n",
            sse_frame("ok"),
        ])

        assert consumer.content == "ok"
        assert updates == ["ok"]
        assert consumer.pending == ""

    def test_comment_line_is_not_retried(self):
        """A comment that looks like broken JSON does not stall later frames."""
        updates: list[str] = []
        consumer = SSEStreamConsumer(on_delta=updates.append)

        consumer.feed(b": {not json\n" + sse_frame("x").encode())

        assert updates == ["x"]

    def test_non_data_lines_are_skipped(self):
        """event:, id: and unprefixed lines are ignored."""
        consumer, _ = run_chunks([
            "event: message\n",
            "id: 42\n",
            'data:{"choices":[{"delta":{"content":"no-space"}}]}\n',
            sse_frame("kept"),
        ])

        assert consumer.content == "kept"

    def test_crlf_line_endings(self):
        """A trailing carriage return is stripped before parsing."""
        body = sse_body("a", "b").replace("\n", "\r\n")
        consumer, _ = run_chunks([body])

        assert consumer.content == "ab"
        assert consumer.done

    def test_frames_without_content_are_ignored(self):
        """Role-only, empty and oddly shaped frames do not update."""
        consumer, updates = run_chunks([
            'data: {"choices":[{"delta":{"role":"assistant"}}]}\n',
            'data: {"choices":[{"delta":{"content":""}}]}\n',
            'data: {"choices":[]}\n',
            'data: {"usage":{"total_tokens":3}}\n',
            'data: [1, 2, 3]\n',
            'data: {"choices":[{"delta":{"content":5}}]}\n',
            sse_frame("text"),
        ])

        assert consumer.content == "text"
        assert updates == ["text"]

    def test_multibyte_character_split_across_chunks(self):
        """A UTF-8 code point split between reads decodes correctly."""
        data = sse_frame("héllo 🌟").encode("utf-8")
        star = data.index("🌟".encode("utf-8"))

        consumer, _ = run_chunks([data[:star + 2], data[star + 2:]])

        assert consumer.content == "héllo 🌟"

    def test_unparseable_line_waits_for_more_bytes(self):
        """A complete but unparseable line is restored to the buffer."""
        updates: list[str] = []
        consumer = SSEStreamConsumer(on_delta=updates.append)

        consumer.feed(b"data: {broken\n")

        assert updates == []
        assert consumer.pending == "data: {broken\n"

    def test_flush_drops_unparseable_lines(self):
        """At end of stream, broken lines are dropped and later ones still apply."""
        consumer, updates = run_chunks([
            "data: {broken\n" + sse_frame("after"),
        ])

        assert consumer.content == "after"
        assert updates == ["after"]
        assert consumer.pending == ""

    def test_flush_applies_final_line_without_newline(self):
        """A last frame missing its newline is recovered by the flush."""
        body = sse_frame("one") + sse_frame("two").rstrip("\n")
        consumer, updates = run_chunks([body])

        assert consumer.content == "onetwo"
        assert updates == ["one", "onetwo"]

    def test_flush_is_idempotent(self):
        """Flushing an empty buffer, or flushing twice, changes nothing."""
        updates: list[str] = []
        consumer = SSEStreamConsumer(on_delta=updates.append)

        consumer.flush()
        consumer.flush()
        assert consumer.content == ""
        assert updates == []

        consumer.feed(sse_frame("x").rstrip("\n").encode())
        consumer.flush()
        consumer.flush()
        assert consumer.content == "x"
        assert updates == ["x"]

    def test_oversized_integer_is_not_fatal(self):
        """A number too long to convert is treated like any unparseable line."""
        updates: list[str] = []
        consumer = SSEStreamConsumer(on_delta=updates.append)

        consumer.feed(("data: " + "1" * 5000 + "\n").encode() + sse_frame("after").encode())
        assert updates == []

        consumer.flush()
        assert consumer.content == "after"
        assert updates == ["after"]

    def test_deeply_nested_json_is_not_fatal(self):
        """Nesting too deep to decode is dropped at the end of the stream."""
        consumer, updates = run_chunks([
            "data: " + "[" * 100_000 + "\n",
            sse_frame("after"),
        ])

        assert consumer.content == "after"
        assert updates == ["after"]

    def test_flush_drops_undecodable_final_line(self):
        consumer, _ = run_chunks([sse_frame("ok"), "data: " + "9" * 5000])

        assert consumer.content == "ok"
        assert consumer.pending == ""

    def test_content_only_grows(self):
        """Every update extends the previous one."""
        _, updates = run_chunks([sse_body("a", "b", "c", "d")])

        for previous, current in zip(updates, updates[1:]):
            assert current.startswith(previous)
            assert len(current) > len(previous)

    @pytest.mark.asyncio
    async def test_consume_stops_reading_after_done(self):
        """consume() stops pulling chunks once [DONE] is seen."""
        pulled: list[int] = []

        async def chunks():
            for i, chunk in enumerate([sse_body("Hi"), sse_frame("late")]):
                pulled.append(i)
                yield chunk.encode()

        consumer = SSEStreamConsumer()
        content = await consumer.consume(chunks())

        assert content == "Hi"
        assert pulled == [0]

    @pytest.mark.asyncio
    async def test_consume_empty_stream(self):
        """A stream that closes with zero bytes yields no content."""
        consumer = SSEStreamConsumer()
        content = await consumer.consume(aiter_chunks([]))

        assert content == ""
        assert not consumer.done


class TestChunkingInvariance:
    """Property tests: chunk boundaries never change the result."""

    DELTAS = ["Welcome", " to ", "day 1", "! 🎉", " Café ", "naïve", " 日本語", "\n", '"q"']

    @given(st.lists(st.integers(min_value=0, max_value=400), max_size=40))
    @settings(max_examples=200)
    def test_arbitrary_byte_chunking(self, offsets: list[int]):
        """Property test: any byte split yields the same final content."""
        data = sse_body(*self.DELTAS).encode("utf-8")

        consumer, updates = run_chunks(split_at(data, offsets))

        assert consumer.content == "".join(self.DELTAS)
        assert updates[-1] == consumer.content

    @given(
        st.lists(st.text(min_size=1, max_size=12), min_size=1, max_size=8),
        st.lists(st.integers(min_value=0, max_value=600), max_size=30),
    )
    @settings(max_examples=200)
    def test_arbitrary_text_and_chunking(self, deltas: list[str], offsets: list[int]):
        """Property test: arbitrary deltas survive arbitrary splits."""
        data = sse_body(*deltas).encode("utf-8")

        consumer, _ = run_chunks(split_at(data, offsets))

        assert consumer.content == "".join(deltas)
