from __future__ import annotations

import hashlib
import hmac

from signing.models import ParseError, ParseErrorKind

FIELD_DELIMITER = ":"
VALUE_DELIMITER = "::::"


def encode_text(text: str) -> bytes:
    # json.loads yields lone surrogates; surrogatepass keeps them encodable and distinct.
    return text.encode("utf-8", errors="surrogatepass")


def encode_event_message(session_id: str, event_name: str) -> bytes:
    return encode_text(f"{session_id}{FIELD_DELIMITER}{event_name}")


def encode_value_message(session_id: str, key: str, value: str) -> bytes:
    return encode_text(f"{session_id}{FIELD_DELIMITER}{key}{FIELD_DELIMITER}{value}")


def compute_mac(key: bytes, message: bytes) -> str:
    return hmac.new(key, message, hashlib.sha256).hexdigest().upper()


def format_event_token(event_name: str, mac: str) -> str:
    return f"{event_name}{FIELD_DELIMITER}{mac}"


def format_value_token(value: str, mac: str) -> str:
    return f"{value}{VALUE_DELIMITER}{mac}"


def parse_event_token(token: str, expected_event: str) -> tuple[str, str] | ParseError:
    prefix = f"{expected_event}{FIELD_DELIMITER}"
    if not token.startswith(prefix):
        return ParseError(ParseErrorKind.UNRECOGNIZED_EVENT, event=expected_event)
    return expected_event, token[len(prefix):]


def parse_value_token(token: str) -> tuple[str, str] | ParseError:
    # The MAC is hex and never holds a colon, so the last delimiter is the real one.
    value, sep, mac = token.rpartition(VALUE_DELIMITER)
    if not sep:
        return ParseError(ParseErrorKind.MALFORMED_VALUE)
    return value, mac
