import pytest

from roundvote.core.access import AdminRoster
from roundvote.core.clock import FixedClock
from roundvote.core.rounds import RoundManager
from roundvote.service import ElectionService

from factories import policy

ADMIN = "officer"


@pytest.fixture
def clock():
    return FixedClock(1_000)


@pytest.fixture
def manager(clock):
    return RoundManager(admin_count=1, policy=policy(), clock=clock)


@pytest.fixture
def election_round(manager):
    return manager.get(manager.create_round("R1"))


@pytest.fixture
def service(clock):
    return ElectionService(admins=AdminRoster([ADMIN, "deputy"]), policy=policy(), clock=clock)
