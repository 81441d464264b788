"""Tests for layered lookup."""

import pytest

from foodingo.core.exceptions import ApiConnectionError
from foodingo.lookup import layered_lookup, query_layer


async def found():
    return ["value"]


async def missing():
    return None


async def broken():
    raise ApiConnectionError("offline")


async def corrupt():
    raise ValueError("bad cache")


class TestQueryLayer:

    @pytest.mark.asyncio
    async def test_success(self):
        result = await query_layer("remote", found)

        assert result.success
        assert result.value == ["value"]
        assert not result.failed

    @pytest.mark.asyncio
    async def test_clean_miss_is_not_a_failure(self):
        result = await query_layer("cache", missing)

        assert not result.success
        assert not result.failed

    @pytest.mark.asyncio
    async def test_error_is_captured(self):
        result = await query_layer("remote", broken)

        assert not result.success
        assert result.error_message == "offline"

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self):
        async def bug():
            raise KeyError("programming error")

        with pytest.raises(KeyError):
            await query_layer("remote", bug)


class TestLayeredLookup:

    @pytest.mark.asyncio
    async def test_stops_at_first_hit(self):
        calls = []

        async def tracked():
            calls.append("cache")
            return ["cached"]

        outcome = await layered_lookup([("remote", found), ("cache", tracked)])

        assert outcome.source == "remote"
        assert calls == []
        assert len(outcome.attempts) == 1

    @pytest.mark.asyncio
    async def test_falls_through_failures(self):
        outcome = await layered_lookup([("remote", broken), ("cache", found)])

        assert outcome.found
        assert outcome.source == "cache"
        assert outcome.errors == ["remote: offline"]

    @pytest.mark.asyncio
    async def test_nothing_found(self):
        outcome = await layered_lookup([("remote", broken), ("cache", corrupt), ("disk", missing)])

        assert not outcome.found
        assert outcome.value is None
        assert outcome.errors == ["remote: offline", "cache: bad cache"]
