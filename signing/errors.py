from __future__ import annotations

from signing.models import (
    ParseError,
    ParseErrorKind,
    SignatureFailure,
    VerifyError,
    VerifyErrorKind,
)


class SignatureError(RuntimeError):
    kind: str = "signature_error"

    def __init__(self, message: str, *, event: str, key: str | None = None) -> None:
        super().__init__(message)
        self.event = event
        self.key = key
        self.status_code = 403


class UnsignedInvocationError(SignatureError):
    kind = VerifyErrorKind.UNSIGNED_INVOCATION.value


class TamperedEventError(SignatureError):
    kind = VerifyErrorKind.SIGNATURE_MISMATCH.value


class TamperedParameterError(SignatureError):
    kind = VerifyErrorKind.SIGNATURE_MISMATCH.value


class MalformedTokenError(SignatureError):
    kind = ParseErrorKind.MALFORMED_VALUE.value


class UnrecognizedEventError(SignatureError):
    kind = ParseErrorKind.UNRECOGNIZED_EVENT.value


class UnknownEventError(RuntimeError):
    kind = "unknown_event"

    def __init__(self, event: str) -> None:
        super().__init__(f"No secure handler is registered for event {event!r}.")
        self.event = event
        self.status_code = 404


def _event_message(event: str) -> str:
    return (
        f"The handler for event {event!r} is marked as secure and was called in an "
        "insecure fashion. Make sure the template signs the event with sign_event(). "
        "If it already does, assume someone is probing the application."
    )


def _param_message(event: str, key: str | None) -> str:
    return (
        f"The handler for event {event!r} is marked as secure and was called in an "
        f"insecure fashion by way of the parameter {key!r}. Make sure every value "
        "sent with a signed event is signed with sign_value(). If it already is, "
        "assume someone is probing the application."
    )


def raise_for(error: SignatureFailure, event: str) -> None:
    if isinstance(error, VerifyError):
        if error.kind is VerifyErrorKind.UNSIGNED_INVOCATION:
            raise UnsignedInvocationError(_event_message(event), event=event)
        if error.key is None:
            raise TamperedEventError(_event_message(event), event=event)
        raise TamperedParameterError(_param_message(event, error.key), event=event, key=error.key)

    if isinstance(error, ParseError):
        if error.kind is ParseErrorKind.UNRECOGNIZED_EVENT:
            raise UnrecognizedEventError(_event_message(event), event=event)
        raise MalformedTokenError(_param_message(event, error.key), event=event, key=error.key)

    raise TypeError(f"Unsupported signature failure: {error!r}")
