"""Tests for the in-memory plant repository."""

import asyncio
from contextlib import aclosing

import pytest

from plantnav.core.cancellation import CancellationToken
from plantnav.core.errors import RepositoryError
from plantnav.core.filter import GrowZone
from plantnav.plants import SAMPLE_PLANTS
from plantnav.repository import InMemoryPlantRepository, Plant


def _names(plants: list[Plant]) -> list[str]:
    return [p.name for p in plants]


class TestStreams:
    """Live streams over the cache."""

    def test_stream_all_starts_with_empty_cache(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS)

        async def scenario() -> list[Plant]:
            async with aclosing(repository.stream_all()) as stream:
                return await anext(stream)

        assert asyncio.run(scenario()) == []

    def test_stream_all_follows_refresh(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS)

        async def scenario() -> list[Plant]:
            async with aclosing(repository.stream_all()) as stream:
                await anext(stream)
                await repository.refresh_cache_all()
                return await anext(stream)

        plants = asyncio.run(scenario())
        assert len(plants) == len(SAMPLE_PLANTS)
        assert _names(plants) == sorted(_names(plants))

    def test_stream_filtered_only_yields_zone(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS)

        async def scenario() -> list[Plant]:
            await repository.refresh_cache_all()
            async with aclosing(repository.stream_filtered(GrowZone(9))) as stream:
                return await anext(stream)

        assert _names(asyncio.run(scenario())) == ["Hibiscus", "Lemon", "Orange"]

    def test_failing_zone_raises(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS, failing_zones=[9])

        async def scenario() -> None:
            async with aclosing(repository.stream_filtered(GrowZone(9))) as stream:
                await anext(stream)

        with pytest.raises(RepositoryError, match="network error"):
            asyncio.run(scenario())

    def test_stream_ends_once_token_is_cancelled(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS)
        token = CancellationToken()

        async def scenario() -> list[list[Plant]]:
            seen = []
            async with aclosing(repository.stream_all(token=token)) as stream:
                seen.append(await anext(stream))
                token.cancel()
                await repository.refresh_cache_all()
                async for plants in stream:
                    seen.append(plants)
            return seen

        assert asyncio.run(scenario()) == [[]]

    def test_latency_delays_first_emission(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS, latency=0.05)

        async def scenario() -> bool:
            stream = repository.stream_all()
            first = asyncio.ensure_future(anext(stream))
            await asyncio.sleep(0)
            done_early = first.done()
            await first
            await stream.aclose()
            return done_early

        assert asyncio.run(scenario()) is False


class TestRefresh:
    """Cache refreshes."""

    def test_refresh_all_replaces_cache(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS)
        asyncio.run(repository.refresh_cache_all())
        assert len(repository.cached) == len(SAMPLE_PLANTS)

    def test_refresh_filtered_merges_zone(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS)

        async def scenario() -> None:
            await repository.refresh_cache_filtered(GrowZone(9))
            await repository.refresh_cache_filtered(GrowZone(7))
            await repository.refresh_cache_filtered(GrowZone(9))

        asyncio.run(scenario())
        assert sorted(_names(repository.cached)) == [
            "Fig",
            "Hibiscus",
            "Lemon",
            "Orange",
            "Pomegranate",
        ]

    def test_fail_refresh_raises_and_keeps_cache(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS, fail_refresh=True)

        with pytest.raises(RepositoryError, match="cache refresh failed"):
            asyncio.run(repository.refresh_cache_all())
        assert repository.cached == []

    def test_cancelled_token_leaves_cache_untouched(self) -> None:
        repository = InMemoryPlantRepository(SAMPLE_PLANTS)
        token = CancellationToken()
        token.cancel()

        with pytest.raises(asyncio.CancelledError):
            asyncio.run(repository.refresh_cache_filtered(GrowZone(3), token=token))
        assert repository.cached == []
