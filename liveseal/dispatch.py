from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from signing.errors import UnknownEventError, raise_for
from signing.models import (
    Ok,
    ParseError,
    Session,
    SignatureFailure,
    VerifiedEvent,
    VerifyError,
    VerifyErrorKind,
)
from signing.signed_token import FIELD_DELIMITER, parse_event_token
from signing.signer import Signer

from .constants import LOGGER

Handler = Callable[[dict[str, str], Any], Any]


@dataclass(frozen=True)
class SecureHandler:
    event: str
    handler: Handler


class EventDispatcher:
    """Routes incoming events to handlers only after their signatures check out.

    Every registered event has two entry points. The bare event name is the
    path a client reaches by editing the markup; it is always refused with
    ``UnsignedInvocationError``. The ``"<event>:<mac>"`` form is verified
    together with every parameter before the handler sees any of it.
    """

    def __init__(self, signer: Signer, *, logger: logging.Logger | None = None) -> None:
        self.signer = signer
        self._handlers: dict[str, SecureHandler] = {}
        self._logger = logger or LOGGER

    @property
    def events(self) -> set[str]:
        return set(self._handlers)

    def register(self, event: str, handler: Handler) -> Handler:
        if not event or FIELD_DELIMITER in event:
            raise ValueError(f"Secure event names must be non-empty and free of {FIELD_DELIMITER!r}.")
        if event in self._handlers:
            raise ValueError(f"A secure handler for {event!r} is already registered.")
        self._handlers[event] = SecureHandler(event=event, handler=handler)
        return handler

    def on(self, event: str) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            return self.register(event, handler)

        return decorator

    def lookup(self, raw_event: str) -> SecureHandler:
        event, _, _ = raw_event.partition(FIELD_DELIMITER)
        entry = self._handlers.get(event)
        if entry is None:
            self._logger.warning("Rejected unknown event %r", event)
            raise UnknownEventError(event)
        return entry

    def resolve(
        self, raw_event: str, params: Mapping[str, object], session: Session | str
    ) -> Ok[VerifiedEvent] | ParseError | VerifyError:
        return self._resolve(self.lookup(raw_event), raw_event, params, session)

    def _resolve(
        self,
        entry: SecureHandler,
        raw_event: str,
        params: Mapping[str, object],
        session: Session | str,
    ) -> Ok[VerifiedEvent] | ParseError | VerifyError:
        event = entry.event

        if raw_event == event:
            return VerifyError(VerifyErrorKind.UNSIGNED_INVOCATION, event=event)

        parsed = parse_event_token(raw_event, event)
        if isinstance(parsed, ParseError):
            return parsed

        _, claimed_mac = parsed
        if not self.signer.verify_event(session, event, claimed_mac):
            return VerifyError(VerifyErrorKind.SIGNATURE_MISMATCH, event=event)

        verified = self.signer.verify_params(session, params)
        if not isinstance(verified, Ok):
            return verified
        return Ok(VerifiedEvent(event=event, params=verified.value))

    def _verified_or_raise(
        self, raw_event: str, params: Mapping[str, object], session: Session | str
    ) -> tuple[SecureHandler, VerifiedEvent]:
        entry = self.lookup(raw_event)
        result = self._resolve(entry, raw_event, params, session)
        if not isinstance(result, Ok):
            self._log_rejection(entry.event, result)
            raise_for(result, entry.event)
        return entry, result.value

    def dispatch(
        self, raw_event: str, params: Mapping[str, object], session: Session | str
    ) -> Any:
        entry, verified = self._verified_or_raise(raw_event, params, session)
        return entry.handler(verified.params, session)

    async def adispatch(
        self, raw_event: str, params: Mapping[str, object], session: Session | str
    ) -> Any:
        entry, verified = self._verified_or_raise(raw_event, params, session)
        result = entry.handler(verified.params, session)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _log_rejection(self, event: str, error: SignatureFailure) -> None:
        if error.key is None:
            self._logger.warning("Rejected secure event %r: %s", event, error.kind.value)
        else:
            self._logger.warning(
                "Rejected secure event %r: %s on parameter %r",
                event,
                error.kind.value,
                error.key,
            )
