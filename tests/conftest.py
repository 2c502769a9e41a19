import pytest

from gffbuilder import GFFBuilder


@pytest.fixture
def builder():
    return GFFBuilder()
