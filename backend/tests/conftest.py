import sys
import pytest
from pathlib import Path

# Add project root (2 levels up from tests/) to sys.path so tests can import 'lingosync'
root = Path(__file__).resolve().parents[1]
if str(root) not in sys.path:
    sys.path.insert(0, str(root))


import asyncio
import fakeredis
from redis.exceptions import ConnectionError as RedisConnectionError

from lingosync.services.history import HistoryCache
from lingosync.services.exceptions import TranslationServiceError


class FakeTranslator:
    """
    Stands in for GeminiTranslationService.

    Records every streaming call and replays `chunks` through on_chunk.
    Set `error` to make the next calls fail, or `gate` to hold the stream
    open until the test releases it.
    """

    def __init__(self, chunks=None):
        self.chunks = chunks if chunks is not None else ["Hola"]
        self.calls = []
        self.error = None
        self.gate = None

    async def translate_stream(self, text, source_lang, target_lang, on_chunk):
        self.calls.append((text, source_lang, target_lang))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        for chunk in self.chunks:
            on_chunk(chunk)
            await asyncio.sleep(0)
        return "".join(self.chunks)

    async def translate(self, text, source_lang, target_lang):
        from lingosync.schemas.translation import TranslationResult

        if self.error is not None:
            raise self.error
        return TranslationResult(
            translated_text="".join(self.chunks),
            detected_language="en" if source_lang == "auto" else None,
            source_language=source_lang,
            target_language=target_lang,
        )


class FakeSpeech:
    def __init__(self):
        self.spoken = []

    async def speak(self, text, language_name):
        self.spoken.append((text, language_name))


class MemoryStore:
    """Dict-backed stand-in for the Redis key-value calls."""

    def __init__(self, initial=None):
        self.data = dict(initial or {})

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value
        return True

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.data.pop(key, None) is not None:
                removed += 1
        return removed


class BrokenStore:
    """Key-value store whose server is unreachable."""

    async def get(self, key):
        raise RedisConnectionError("Error 111 connecting to localhost:6379")

    async def set(self, key, value):
        raise RedisConnectionError("Error 111 connecting to localhost:6379")

    async def delete(self, *keys):
        raise ConnectionError("Connection reset by peer")


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def speech():
    return FakeSpeech()


@pytest.fixture
async def redis_store():
    store = fakeredis.FakeAsyncRedis(decode_responses=True)
    yield store
    await store.flushall()
    await store.aclose()


@pytest.fixture
async def history(redis_store):
    cache = HistoryCache(redis_store)
    await cache.load()
    return cache


@pytest.fixture
def service_error():
    return TranslationServiceError("Service unavailable")


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def broken_store():
    return BrokenStore()
