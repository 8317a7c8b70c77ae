"""Shared fixtures: a fake HTTP session so no test touches the network."""
import pytest

from fakes import FakeSession

from tvdeck.services.m3u import sequential_ids
from tvdeck.services.playlist import PlaylistService
from tvdeck.settings import Settings


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def service(fake_session):
    svc = PlaylistService(Settings(), id_factory=sequential_ids())
    svc.session = fake_session
    return svc
