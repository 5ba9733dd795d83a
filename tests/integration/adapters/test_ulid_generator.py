"""Integration tests for the ULID event id generator."""

import concurrent.futures as cf

import pytest

from agenda.adapters.id_generators import ULIDGenerator

ULID_LENGTH = 26
CROCKFORD = set("0123456789ABCDEFGHJKMNPQRSTVWXYZ")


def test_ulid_shape():
    """ULIDs are 26 Crockford base32 characters."""
    value = ULIDGenerator().new_id()
    assert len(value) == ULID_LENGTH
    assert set(value) <= CROCKFORD


@pytest.mark.parametrize("count", [2_000])
def test_monotonic_single_thread(count):
    """IDs sort in generation order, so start-time ties list oldest first."""
    gen = ULIDGenerator()
    ids = [gen.new_id() for _ in range(count)]
    assert ids == sorted(ids)
    assert len(set(ids)) == count


def test_unique_under_threads():
    """Concurrent callers never receive the same id."""
    gen = ULIDGenerator()
    with cf.ThreadPoolExecutor(max_workers=8) as ex:
        ids = list(ex.map(lambda _: gen.new_id(), range(4_000)))
    assert len(set(ids)) == len(ids)
