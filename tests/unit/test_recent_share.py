# tests/unit/test_recent_share.py
# Unit tests for the recent-share window

import threading
from datetime import timedelta, timezone

from linknest.services.recent_share import RecentShareDeduplicator
from tests.conftest import at


class TestRecentShareDeduplicator:
    def test_nothing_recorded(self):
        recent = RecentShareDeduplicator()
        assert not recent.is_duplicate("https://a.com", at(0))

    def test_window_is_inclusive(self):
        recent = RecentShareDeduplicator()
        recent.record("https://a.com", at(1000))

        assert recent.is_duplicate("https://a.com", at(3000))
        assert not recent.is_duplicate("https://a.com", at(3001))

    def test_different_text_is_not_duplicate(self):
        recent = RecentShareDeduplicator()
        recent.record("https://a.com", at(1000))

        assert not recent.is_duplicate("https://b.com", at(1001))

    def test_only_last_share_is_kept(self):
        recent = RecentShareDeduplicator()
        recent.record("https://a.com", at(0))
        recent.record("https://b.com", at(100))

        assert not recent.is_duplicate("https://a.com", at(200))
        assert recent.is_duplicate("https://b.com", at(200))
        assert recent.last.text == "https://b.com"

    def test_is_duplicate_does_not_record(self):
        recent = RecentShareDeduplicator()
        recent.is_duplicate("https://a.com", at(0))
        assert recent.last is None

    def test_custom_window(self):
        recent = RecentShareDeduplicator(window=timedelta(milliseconds=500))
        recent.record("https://a.com", at(0))

        assert recent.is_duplicate("https://a.com", at(500))
        assert not recent.is_duplicate("https://a.com", at(501))

    def test_claim_records_new_share(self):
        recent = RecentShareDeduplicator()

        assert recent.claim("https://a.com", at(0)) is False
        assert recent.last.text == "https://a.com"
        assert recent.last.observed_at == at(0)

    def test_claim_leaves_slot_untouched_for_duplicate(self):
        recent = RecentShareDeduplicator()
        recent.claim("https://a.com", at(0))

        assert recent.claim("https://a.com", at(1500)) is True
        assert recent.last.observed_at == at(0)

    def test_claim_after_window_refreshes_slot(self):
        recent = RecentShareDeduplicator()
        recent.claim("https://a.com", at(0))

        assert recent.claim("https://a.com", at(2500)) is False
        assert recent.last.observed_at == at(2500)

    def test_concurrent_claims_admit_one(self):
        recent = RecentShareDeduplicator()
        barrier = threading.Barrier(8)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            outcome = recent.claim("https://a.com", at(0))
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count(False) == 1
        assert results.count(True) == 7

    def test_naive_and_aware_timestamps_compare(self):
        recent = RecentShareDeduplicator()
        recent.record("https://a.com", at(1000).replace(tzinfo=None))

        assert recent.is_duplicate("https://a.com", at(3000))
        assert not recent.is_duplicate("https://a.com", at(3001).replace(tzinfo=None))
        assert recent.last.observed_at == at(1000)

    def test_other_offsets_are_converted_to_utc(self):
        recent = RecentShareDeduplicator()
        plus_two = timezone(timedelta(hours=2))
        recent.record("https://a.com", at(0).astimezone(plus_two))

        assert recent.last.observed_at.tzinfo == timezone.utc
        assert recent.is_duplicate("https://a.com", at(2000))
