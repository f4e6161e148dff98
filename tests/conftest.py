import pytest

from overcall.resolvers import OverloadResolver


@pytest.fixture()
def resolver() -> OverloadResolver:
    # A resolver with an empty cache, separate from the shared `default_resolver`.
    return OverloadResolver()
