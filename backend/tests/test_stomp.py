# backend/tests/test_stomp.py
import pytest

from ticket_logger.core.stomp import Frame, FrameError, parse_frame, serialize_frame


def test_parse_connect_frame():
    frame = parse_frame("CONNECT\naccept-version:1.2\nAuthorization:Bearer abc.def\n\n\x00")

    assert frame.command == "CONNECT"
    assert frame.headers == {"accept-version": "1.2", "Authorization": "Bearer abc.def"}
    assert frame.body == ""


def test_first_repeated_header_wins():
    frame = parse_frame("SEND\ndestination:/a\ndestination:/b\n\nhola\x00")
    assert frame.headers["destination"] == "/a"
    assert frame.body == "hola"


def test_heartbeat_is_not_a_frame():
    assert parse_frame("\n") is None
    assert parse_frame("\r\n\r\n") is None


def test_frame_without_headers():
    assert parse_frame("DISCONNECT\n\n\x00").command == "DISCONNECT"
    assert parse_frame("DISCONNECT\x00").command == "DISCONNECT"


def test_content_length_allows_nul_in_body():
    frame = parse_frame("SEND\ndestination:/a\ncontent-length:3\n\na\x00b\x00")
    assert frame.body == "a\x00b"


def test_escaped_header_values_are_decoded():
    frame = parse_frame("MESSAGE\nclave:a\\cb\\nc\n\n\x00")
    assert frame.headers["clave"] == "a:b\nc"


@pytest.mark.parametrize("data", ["SEND\ndestination:/a\n\nsin terminador", "SEND\nmala-cabecera\n\n\x00", "SEND\nk:\\x\n\n\x00"])
def test_malformed_frames_raise(data):
    with pytest.raises(FrameError):
        parse_frame(data)


def test_serialize_adds_content_length():
    text = serialize_frame(Frame("MESSAGE", {"destination": "/topic/notifications"}, '{"a":"ñ"}'))

    assert text.startswith("MESSAGE\ndestination:/topic/notifications\n")
    assert "content-length:10\n" in text
    assert text.endswith('\n\n{"a":"ñ"}\x00')


def test_serialize_then_parse_keeps_frame():
    original = Frame("RECEIPT", {"receipt-id": "77"})
    assert parse_frame(serialize_frame(original)) == original


def test_connected_headers_are_not_escaped():
    text = serialize_frame(Frame("CONNECTED", {"version": "1.2", "server": "api:1"}))
    assert "server:api:1\n" in text
