"""
Tests for the bounded, persisted translation history
"""
import json
import pytest

from lingosync.config.constants import HISTORY_MAX_ITEMS, HISTORY_STORAGE_KEY
from lingosync.schemas.translation import HistoryItem
from lingosync.services.history import BoundedHistory, HistoryCache


def _stored_item(index: int) -> dict:
    return {
        "id": f"id-{index}",
        "timestamp": 1700000000000 + index,
        "translatedText": f"text {index}",
        "sourceLanguage": "en",
        "targetLanguage": "fr",
    }


@pytest.mark.asyncio
async def test_record_prepends_and_persists(history, redis_store):
    item = await history.record("Hello", "Hola", "auto", "es")

    assert item is not None
    assert history.items == [item]
    assert item.translated_text == "Hola"
    assert item.source_language == "auto"
    assert item.target_language == "es"
    assert item.id
    assert item.timestamp > 0

    stored = json.loads(await redis_store.get(HISTORY_STORAGE_KEY))
    assert stored[0]["translatedText"] == "Hola"
    assert stored[0]["sourceLanguage"] == "auto"
    assert stored[0]["id"] == item.id


@pytest.mark.asyncio
async def test_most_recent_first(history):
    await history.record("one", "uno", "en", "es")
    await history.record("two", "dos", "en", "es")

    assert [i.translated_text for i in history.items] == ["dos", "uno"]


@pytest.mark.asyncio
async def test_never_exceeds_capacity_and_evicts_oldest(history, redis_store):
    for i in range(25):
        await history.record(f"text {i}", f"texto {i}", "en", "es")

    items = history.items
    assert len(items) == HISTORY_MAX_ITEMS
    assert items[0].translated_text == "texto 24"
    assert items[-1].translated_text == "texto 15"

    stored = json.loads(await redis_store.get(HISTORY_STORAGE_KEY))
    assert len(stored) == HISTORY_MAX_ITEMS


@pytest.mark.asyncio
@pytest.mark.parametrize("source,translated", [
    ("", "Hola"),
    ("   ", "Hola"),
    ("Hello", ""),
    ("Hello", " \n "),
])
async def test_blank_input_or_output_is_ignored(history, redis_store, source, translated):
    result = await history.record(source, translated, "auto", "es")

    assert result is None
    assert history.items == []
    assert await redis_store.get(HISTORY_STORAGE_KEY) is None


@pytest.mark.asyncio
async def test_duplicate_of_head_is_ignored(history):
    await history.record("Hello", "Hola", "auto", "es")
    result = await history.record("Hello!", "Hola", "en", "es")

    assert result is None
    assert len(history.items) == 1


@pytest.mark.asyncio
async def test_duplicate_of_older_entry_is_kept(history):
    await history.record("Hello", "Hola", "auto", "es")
    await history.record("Bye", "Adiós", "auto", "es")
    await history.record("Hello", "Hola", "auto", "es")

    assert [i.translated_text for i in history.items] == ["Hola", "Adiós", "Hola"]


@pytest.mark.asyncio
async def test_clear_removes_stored_copy(history, redis_store):
    await history.record("Hello", "Hola", "auto", "es")
    await history.clear()

    assert history.items == []
    assert await redis_store.exists(HISTORY_STORAGE_KEY) == 0


@pytest.mark.asyncio
async def test_load_restores_entries_in_order(redis_store):
    stored = [_stored_item(i) for i in range(3)]
    await redis_store.set(HISTORY_STORAGE_KEY, json.dumps(stored))

    cache = HistoryCache(redis_store)
    items = await cache.load()

    assert [i.id for i in items] == ["id-0", "id-1", "id-2"]
    assert [i.translated_text for i in items] == ["text 0", "text 1", "text 2"]
    assert items[0].timestamp == 1700000000000
    assert items[0].detected_language is None


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", [
    "{not json",
    '{"translatedText": "not a list"}',
    '[{"id": "x"}]',
])
async def test_load_corrupted_data_yields_empty(redis_store, raw):
    await redis_store.set(HISTORY_STORAGE_KEY, raw)

    cache = HistoryCache(redis_store)
    items = await cache.load()

    assert items == []


@pytest.mark.asyncio
async def test_load_missing_key_yields_empty(redis_store):
    cache = HistoryCache(redis_store)
    assert await cache.load() == []


@pytest.mark.asyncio
async def test_reload_after_restart(redis_store):
    first = HistoryCache(redis_store)
    await first.load()
    await first.record("Hello", "Hola", "auto", "es")
    await first.record("Thanks", "Gracias", "auto", "es")

    second = HistoryCache(redis_store)
    await second.load()

    assert second.items == first.items


def test_bounded_history_prepend_returns_evicted():
    history = BoundedHistory(capacity=2)
    a = HistoryItem(translated_text="a", source_language="en", target_language="es")
    b = HistoryItem(translated_text="b", source_language="en", target_language="es")
    c = HistoryItem(translated_text="c", source_language="en", target_language="es")

    assert history.prepend(a) == []
    assert history.prepend(b) == []
    assert history.prepend(c) == [a]
    assert list(history) == [c, b]
    assert history.head == c


def test_bounded_history_truncates_initial_items():
    items = [
        HistoryItem(translated_text=str(i), source_language="en", target_language="es")
        for i in range(5)
    ]
    history = BoundedHistory(items, capacity=3)

    assert len(history) == 3
    assert history[0].translated_text == "0"


@pytest.mark.asyncio
async def test_record_survives_store_outage(broken_store):
    cache = HistoryCache(broken_store)

    item = await cache.record("Hello", "Hola", "auto", "es")

    assert item is not None
    assert cache.items == [item]


@pytest.mark.asyncio
async def test_clear_survives_store_outage(broken_store):
    cache = HistoryCache(broken_store)
    await cache.record("Hello", "Hola", "auto", "es")

    await cache.clear()

    assert cache.items == []


@pytest.mark.asyncio
async def test_load_during_store_outage_yields_empty(broken_store):
    cache = HistoryCache(broken_store)
    assert await cache.load() == []
