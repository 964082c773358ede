import pytest

from signing.errors import (
    MalformedTokenError,
    SignatureError,
    TamperedEventError,
    TamperedParameterError,
    UnrecognizedEventError,
    UnsignedInvocationError,
    raise_for,
)
from signing.models import ParseError, ParseErrorKind, VerifyError, VerifyErrorKind


@pytest.mark.parametrize(
    ("error", "expected", "kind"),
    [
        (
            VerifyError(VerifyErrorKind.UNSIGNED_INVOCATION, event="delete_user"),
            UnsignedInvocationError,
            "unsigned_invocation",
        ),
        (
            VerifyError(VerifyErrorKind.SIGNATURE_MISMATCH, event="delete_user"),
            TamperedEventError,
            "signature_mismatch",
        ),
        (
            VerifyError(VerifyErrorKind.SIGNATURE_MISMATCH, key="user-id"),
            TamperedParameterError,
            "signature_mismatch",
        ),
        (
            ParseError(ParseErrorKind.UNRECOGNIZED_EVENT, event="delete_user"),
            UnrecognizedEventError,
            "unrecognized_event",
        ),
        (
            ParseError(ParseErrorKind.MALFORMED_VALUE, key="user-id"),
            MalformedTokenError,
            "malformed_value",
        ),
    ],
)
def test_raise_for_maps_each_failure(error, expected, kind) -> None:
    with pytest.raises(expected) as raised:
        raise_for(error, "delete_user")

    assert isinstance(raised.value, SignatureError)
    assert raised.value.kind == kind
    assert raised.value.event == "delete_user"
    assert raised.value.status_code == 403


def test_parameter_errors_name_the_key() -> None:
    with pytest.raises(TamperedParameterError) as raised:
        raise_for(VerifyError(VerifyErrorKind.SIGNATURE_MISMATCH, key="user-id"), "delete_user")

    assert raised.value.key == "user-id"
    assert "'user-id'" in str(raised.value)
    assert "'delete_user'" in str(raised.value)


def test_raise_for_rejects_unknown_failure() -> None:
    with pytest.raises(TypeError):
        raise_for("mismatch", "delete_user")
