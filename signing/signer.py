from __future__ import annotations

from collections.abc import Mapping

from signing import verifier
from signing.models import Ok, ParseError, Session, VerifyError
from signing.signed_token import FIELD_DELIMITER


def session_id_of(session: Session | str) -> str:
    if isinstance(session, str):
        return session
    session_id = getattr(session, "id", None)
    if not isinstance(session_id, str):
        raise TypeError("Session objects must expose a string `id` attribute.")
    return session_id


def _require_plain_field(name: str, value: str) -> None:
    if FIELD_DELIMITER in value:
        raise ValueError(f"{name} must not contain {FIELD_DELIMITER!r}: {value!r}")


class Signer:
    def __init__(self, secret_key: bytes) -> None:
        if not isinstance(secret_key, bytes) or not secret_key:
            raise ValueError("Signer requires a non-empty bytes secret key.")
        self._key = secret_key

    # -- outbound --------------------------------------------------------------

    def sign_event(self, session: Session | str, event: str) -> str:
        session_id = session_id_of(session)
        _require_plain_field("Session id", session_id)
        _require_plain_field("Event name", event)
        return verifier.expected_event_token(self._key, session_id, event)

    def sign_value(self, session: Session | str, key: str, value: object) -> str:
        session_id = session_id_of(session)
        _require_plain_field("Session id", session_id)
        _require_plain_field("Parameter key", key)
        return verifier.expected_value_token(self._key, session_id, key, str(value))

    def sign_values(self, session: Session | str, values: Mapping[str, object]) -> dict[str, str]:
        return {key: self.sign_value(session, key, value) for key, value in values.items()}

    # -- inbound ---------------------------------------------------------------

    def verify_event(self, session: Session | str, event: str, claimed_mac: str) -> bool:
        return verifier.verify_event_signature(
            self._key, session_id_of(session), event, claimed_mac
        )

    def verify_parameter(
        self, session: Session | str, key: str, claimed_value: str, claimed_mac: str
    ) -> Ok[str] | VerifyError:
        return verifier.verify_parameter(
            self._key, session_id_of(session), key, claimed_value, claimed_mac
        )

    def verify_params(
        self, session: Session | str, params: Mapping[str, object]
    ) -> Ok[dict[str, str]] | ParseError | VerifyError:
        return verifier.verify_all_parameters(self._key, session_id_of(session), params)
