import pytest

from tests.helpers import FakeUpstream


@pytest.fixture
def upstream() -> FakeUpstream:
	return FakeUpstream()
