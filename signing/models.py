from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Protocol, TypeVar, Union

T = TypeVar("T")


class Session(Protocol):
    id: str


class ParseErrorKind(str, Enum):
    UNRECOGNIZED_EVENT = "unrecognized_event"
    MALFORMED_VALUE = "malformed_value"


class VerifyErrorKind(str, Enum):
    SIGNATURE_MISMATCH = "signature_mismatch"
    UNSIGNED_INVOCATION = "unsigned_invocation"


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class ParseError:
    kind: ParseErrorKind
    event: str | None = None
    key: str | None = None


@dataclass(frozen=True)
class VerifyError:
    kind: VerifyErrorKind
    event: str | None = None
    key: str | None = None


@dataclass(frozen=True)
class VerifiedEvent:
    event: str
    params: dict[str, str]


SignatureFailure = Union[ParseError, VerifyError]
