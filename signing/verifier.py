from __future__ import annotations

import hmac
from collections.abc import Mapping

from signing import signed_token
from signing.models import (
    Ok,
    ParseError,
    ParseErrorKind,
    VerifyError,
    VerifyErrorKind,
)
from signing.signed_token import FIELD_DELIMITER


def has_field_delimiter(*fields: str) -> bool:
    return any(FIELD_DELIMITER in field for field in fields)


def expected_event_token(key: bytes, session_id: str, event_name: str) -> str:
    message = signed_token.encode_event_message(session_id, event_name)
    return signed_token.format_event_token(event_name, signed_token.compute_mac(key, message))


def expected_value_token(key: bytes, session_id: str, param_key: str, value: str) -> str:
    message = signed_token.encode_value_message(session_id, param_key, value)
    return signed_token.format_value_token(value, signed_token.compute_mac(key, message))


def secure_compare(expected: str, actual: str) -> bool:
    # compare_digest only accepts ASCII str; values may carry any unicode.
    return hmac.compare_digest(
        signed_token.encode_text(expected), signed_token.encode_text(actual)
    )


def verify_event_signature(
    key: bytes, session_id: str, expected_event: str, claimed_mac: str
) -> bool:
    if has_field_delimiter(session_id, expected_event):
        return False
    expected = expected_event_token(key, session_id, expected_event)
    claimed = signed_token.format_event_token(expected_event, claimed_mac)
    return secure_compare(expected, claimed)


def verify_parameter(
    key: bytes,
    session_id: str,
    param_key: str,
    claimed_value: str,
    claimed_mac: str,
) -> Ok[str] | VerifyError:
    mismatch = VerifyError(VerifyErrorKind.SIGNATURE_MISMATCH, key=param_key)
    if has_field_delimiter(session_id, param_key):
        return mismatch

    expected = expected_value_token(key, session_id, param_key, claimed_value)
    claimed = signed_token.format_value_token(claimed_value, claimed_mac)
    if not secure_compare(expected, claimed):
        return mismatch
    return Ok(claimed_value)


def verify_all_parameters(
    key: bytes, session_id: str, params: Mapping[str, object]
) -> Ok[dict[str, str]] | ParseError | VerifyError:
    verified: dict[str, str] = {}
    for param_key, raw in params.items():
        if not isinstance(raw, str):
            return ParseError(ParseErrorKind.MALFORMED_VALUE, key=param_key)

        parsed = signed_token.parse_value_token(raw)
        if isinstance(parsed, ParseError):
            return ParseError(parsed.kind, key=param_key)

        value, mac = parsed
        result = verify_parameter(key, session_id, param_key, value, mac)
        if isinstance(result, VerifyError):
            return result
        verified[param_key] = result.value

    return Ok(verified)
