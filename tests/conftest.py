import random

import pytest

from voicenav.router.models import Coord
from voicenav.router.nav_config import NavConfig
from voicenav.router.destination_resolver import DestinationResolver
from voicenav.router.session import NavigationSession

from fakes import FakeListener, FakeRenderer, FakeSpeech


@pytest.fixture
def origin():
    return Coord(11.0168, 76.9558)


@pytest.fixture
def config(tmp_path):
    return NavConfig(log_dir=str(tmp_path))


@pytest.fixture
def session(config):
    resolver = DestinationResolver(config, rng=random.Random(42))
    return NavigationSession(config, resolver=resolver)


@pytest.fixture
def speech():
    return FakeSpeech()


@pytest.fixture
def listener():
    return FakeListener()


@pytest.fixture
def renderer():
    return FakeRenderer()
