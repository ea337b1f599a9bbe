"""Tests for process-wide map identity allocation."""

import threading

import pytest

from seqid import SeqHashMap, IdentityExhaustedError, USize
from seqid import _identity


@pytest.fixture
def exhausted_identities(monkeypatch):
    monkeypatch.setattr(_identity, "_counter", USize(USize().max))
    monkeypatch.setattr(_identity, "_exhaustion_logged", False)


class TestAllocate:
    def test_increasing(self):
        a = _identity.allocate()
        b = _identity.allocate()
        assert a is not None and b is not None
        assert b > a

    def test_maps_get_distinct_uids(self):
        maps = [SeqHashMap() for _ in range(10)]
        assert len({m.uid for m in maps}) == 10

    def test_uids_not_recycled(self):
        first = SeqHashMap().uid
        # the first map is now unreachable
        second = SeqHashMap().uid
        assert second != first

    def test_concurrent_construction(self):
        uids: list[int] = []
        lock = threading.Lock()

        def worker():
            local = [SeqHashMap().uid for _ in range(200)]
            with lock:
                uids.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(uids) == 1600
        assert len(set(uids)) == 1600


class TestExhaustedIdentitySpace:
    def test_allocate_returns_none(self, exhausted_identities, caplog):
        with caplog.at_level("WARNING", logger="seqid.identity"):
            assert _identity.allocate() is None
            assert _identity.allocate() is None
        assert "exhausted" in caplog.text

    def test_exhaustion_warned_once(self, exhausted_identities, caplog):
        with caplog.at_level("WARNING", logger="seqid.identity"):
            for _ in range(5):
                assert SeqHashMap.new() is None
        warnings = [r for r in caplog.records if r.name == "seqid.identity"]
        assert len(warnings) == 1

    def test_new_returns_none(self, exhausted_identities):
        assert SeqHashMap.new() is None

    def test_direct_construction_raises(self, exhausted_identities):
        with pytest.raises(IdentityExhaustedError):
            SeqHashMap()
