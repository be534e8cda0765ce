import pytest

from vicipack.config import get_settings

# key1 = value1, section1 { sub-section { key2 = value2 }, list1 [item1, item2] }
EXAMPLE_MESSAGE = (
    b"\x03\x04key1\x00\x06value1"
    b"\x01\x08section1"
    b"\x01\x0bsub-section"
    b"\x03\x04key2\x00\x06value2"
    b"\x02"
    b"\x04\x05list1"
    b"\x05\x00\x05item1"
    b"\x05\x00\x05item2"
    b"\x06"
    b"\x02"
)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def example_message() -> bytes:
    return EXAMPLE_MESSAGE
