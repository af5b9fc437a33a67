"""Tests for Message and MessageType."""

import traceback
from unittest.mock import patch

import pytest

from loglite.message import (
    ANSI_RESET,
    Message,
    MessageType,
    capture_outermost_source,
    describe_frame,
    outermost_frame,
)


class TestMessageType:
    """Test the severity metadata table."""

    def test_every_type_has_label_and_color(self):
        for message_type in MessageType:
            assert message_type.label
            assert message_type.color.startswith("\033[")

    def test_labels(self):
        assert MessageType.ERROR.label == "ERROR!!"
        assert MessageType.WARNING.label == "WARNING!"
        assert MessageType.INFO.label == "Info"
        assert MessageType.DEBUG.label == "Debug"
        assert MessageType.TRACE.label == "Trace"
        assert MessageType.UNKNOWN.label == "Unknown"

    def test_error_is_red(self):
        assert MessageType.ERROR.color == "\033[31m"

    def test_colors_are_distinct(self):
        colors = [t.color for t in MessageType]
        assert len(set(colors)) == len(colors)


class TestMessageInit:
    """Test Message construction."""

    def test_stores_payload_and_type(self):
        msg = Message("hello", MessageType.WARNING)
        assert msg.payload == "hello"
        assert msg.type is MessageType.WARNING

    def test_default_type_is_info(self):
        assert Message("hello").type is MessageType.INFO

    def test_no_source_by_default(self):
        assert Message("hello").source is None

    def test_rejects_none_payload(self):
        with pytest.raises(TypeError):
            Message(None)

    def test_is_immutable(self):
        msg = Message("hello", MessageType.INFO, capture_source=True)
        with pytest.raises(AttributeError):
            msg.payload = "changed"
        with pytest.raises(AttributeError):
            msg.type = MessageType.ERROR
        with pytest.raises(AttributeError):
            msg.source = "elsewhere"


class TestMessageSource:
    """Source capture records the OUTERMOST stack frame, not the caller.

    Most logging libraries record the immediate caller. This one records
    the frame at the root of the stack (the program entry point).
    """

    def test_source_is_non_empty_string(self):
        msg = Message("hello", capture_source=True)
        assert isinstance(msg.source, str)
        assert msg.source

    def test_source_is_outermost_frame(self):
        expected = describe_frame(traceback.extract_stack()[0])
        msg = Message("hello", capture_source=True)
        assert msg.source == expected

    def test_source_is_not_the_immediate_caller(self):
        msg = Message("hello", capture_source=True)
        assert "test_source_is_not_the_immediate_caller" not in msg.source

    def test_source_same_from_nested_calls(self):
        def nested():
            def deeper():
                return Message("deep", capture_source=True)
            return deeper()

        shallow = Message("shallow", capture_source=True)
        assert nested().source == shallow.source

    def test_capture_helper_matches_message(self):
        assert Message("x", capture_source=True).source == capture_outermost_source()

    def test_capture_walks_frames_only(self):
        expected = describe_frame(traceback.extract_stack()[0])
        with patch("loglite.message.traceback.extract_stack") as extract_stack, \
                patch("linecache.getline") as getline:
            msg = Message("hello", capture_source=True)
        extract_stack.assert_not_called()
        getline.assert_not_called()
        assert msg.source == expected

    def test_outermost_frame_matches_stack_root(self):
        root = traceback.extract_stack()[0]
        frame = outermost_frame()
        assert (frame.filename, frame.name) == (root.filename, root.name)

    def test_describe_frame_format(self):
        frame = traceback.FrameSummary("/some/dir/app.py", 12, "main")
        assert describe_frame(frame) == "main(app.py:12)"


class TestMessageFormat:
    """Test the formatting contract."""

    def test_colorless_format(self):
        msg = Message("disk almost full", MessageType.WARNING)
        assert msg.format(False) == "WARNING! - disk almost full"

    def test_colorless_has_no_escape_bytes(self):
        for message_type in MessageType:
            text = Message("payload", message_type, capture_source=True).format(False)
            assert "\033" not in text

    def test_colored_wraps_in_escape_pair(self):
        for message_type in MessageType:
            text = Message("payload", message_type).format(True)
            assert text.startswith(message_type.color)
            assert text.endswith(ANSI_RESET)

    def test_colored_format_exact(self):
        msg = Message("boom", MessageType.ERROR)
        assert msg.format(True) == "\033[31mERROR!! - boom\033[0m"

    def test_source_appears_after_label(self):
        msg = Message("hello", MessageType.DEBUG, capture_source=True)
        assert msg.format(False) == f"Debug from {msg.source} - hello"

    def test_payload_is_verbatim(self):
        payload = "line one\nline two\t\x07 <b>&amp;"
        msg = Message(payload, MessageType.TRACE)
        assert msg.format(False) == "Trace - " + payload

    def test_empty_payload(self):
        assert Message("", MessageType.INFO).format(False) == "Info - "

    def test_default_is_colorless(self):
        msg = Message("x", MessageType.INFO)
        assert msg.format() == msg.format(False)

    def test_str_is_colorless_format(self):
        msg = Message("x", MessageType.ERROR)
        assert str(msg) == "ERROR!! - x"

    def test_repr(self):
        assert repr(Message("x", MessageType.ERROR)) == "Message(ERROR, 'x')"
