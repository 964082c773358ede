from types import SimpleNamespace

import pytest

from liveseal.dispatch import EventDispatcher
from signing.signer import Signer
from tests.signing_helpers import SECRET_KEY


@pytest.fixture
def signer() -> Signer:
    return Signer(SECRET_KEY)


@pytest.fixture
def session() -> SimpleNamespace:
    return SimpleNamespace(id="sess-1")


@pytest.fixture
def dispatcher(signer: Signer) -> EventDispatcher:
    return EventDispatcher(signer)
