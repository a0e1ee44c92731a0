"""Tests for the shared plan store."""
import pytest
from tripos.config import settings
from tripos.models.shared_plan import (
    ID_ALPHABET,
    SharedPlanStore,
    generate_share_url,
    generate_short_id,
)
from tripos.models.trip import GeneratedPlan, Language, Source


def make_plan(n: int) -> GeneratedPlan:
    return GeneratedPlan(markdown=f"# Plan {n}")


class TestShortId:
    """Test id generation."""

    def test_id_shape(self):
        """Ids are 8 characters from the 62-symbol alphabet."""
        for _ in range(100):
            plan_id = generate_short_id()
            assert len(plan_id) == 8
            assert all(c in ID_ALPHABET for c in plan_id)

    def test_alphabet_size(self):
        """Upper, lower and digits."""
        assert len(ID_ALPHABET) == 62


class TestSharedPlanStore:
    """Test save, get and eviction."""

    def test_save_and_get(self):
        """A saved plan comes back with its sources and language."""
        store = SharedPlanStore(capacity=50)
        plan = GeneratedPlan(markdown="# Kyoto", sources=[Source(title="Guide", uri="https://example.com")])

        plan_id = store.save(plan, Language.JA)
        record = store.get(plan_id)

        assert record.id == plan_id
        assert record.markdown == "# Kyoto"
        assert record.sources[0].title == "Guide"
        assert record.lang == Language.JA
        assert record.created_at > 0

    def test_unknown_id(self):
        """Unknown ids give None."""
        assert SharedPlanStore().get("zzzzzzzz") is None

    def test_keeps_newest_fifty(self):
        """After 51 saves the first is gone and the other 50 remain."""
        store = SharedPlanStore(capacity=50)
        ids = [store.save(make_plan(i), created_at=1_000 + i) for i in range(51)]

        assert len(store) == 50
        assert store.get(ids[0]) is None
        for plan_id in ids[1:]:
            assert store.get(plan_id) is not None

    def test_evicts_by_created_at_not_insertion(self):
        """An older timestamp saved later is still the one evicted."""
        store = SharedPlanStore(capacity=2)
        first = store.save(make_plan(1), created_at=200)
        second = store.save(make_plan(2), created_at=300)
        late_but_old = store.save(make_plan(3), created_at=100)

        assert store.get(late_but_old) is None
        assert store.get(first) is not None
        assert store.get(second) is not None

    def test_same_millisecond_evicts_first_inserted(self):
        """Ties on created_at leave in insertion order."""
        store = SharedPlanStore(capacity=2)
        ids = [store.save(make_plan(i), created_at=500) for i in range(3)]

        assert store.get(ids[0]) is None
        assert store.get(ids[1]) is not None
        assert store.get(ids[2]) is not None

    def test_delete(self):
        """Deleted plans are gone; deleting twice is harmless."""
        store = SharedPlanStore()
        plan_id = store.save(make_plan(0))
        store.delete(plan_id)
        store.delete(plan_id)
        assert store.get(plan_id) is None


class TestShareUrl:
    """Test public link generation."""

    def test_url_format(self, monkeypatch):
        """Base URL, share id and language in the query string."""
        monkeypatch.setattr(settings, "public_base_url", "https://trip.example/")
        url = generate_share_url("AbCd1234", Language.ZH_TW)
        assert url == "https://trip.example/?share=AbCd1234&lang=zh-TW"

    def test_plain_string_language(self, monkeypatch):
        """Language codes may be passed as strings."""
        monkeypatch.setattr(settings, "public_base_url", "https://trip.example")
        assert generate_share_url("AbCd1234", "en").endswith("?share=AbCd1234&lang=en")
