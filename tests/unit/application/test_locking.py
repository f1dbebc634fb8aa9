"""Tests for keyed lock registry."""

import asyncio

import pytest

from nexus_ledger.application.locking import KeyedLockRegistry


class TestKeyedLockRegistry:
    def test_same_key_same_lock(self):
        registry = KeyedLockRegistry()
        assert registry.lock_for("stock:P1:WH1") is registry.lock_for("stock:P1:WH1")
        assert registry.lock_for("stock:P1:WH1") is not registry.lock_for("stock:P1:WH2")

    @pytest.mark.asyncio
    async def test_hold_locks_every_key(self):
        registry = KeyedLockRegistry()
        async with registry.hold("b", "a", "a"):
            assert registry.is_locked("a")
            assert registry.is_locked("b")
        assert not registry.is_locked("a")
        assert not registry.is_locked("b")

    @pytest.mark.asyncio
    async def test_unknown_key_is_unlocked(self):
        assert not KeyedLockRegistry().is_locked("nope")

    @pytest.mark.asyncio
    async def test_released_on_error(self):
        registry = KeyedLockRegistry()
        with pytest.raises(ValueError):
            async with registry.hold("a"):
                raise ValueError("boom")
        assert not registry.is_locked("a")

    @pytest.mark.asyncio
    async def test_same_key_is_serialized(self):
        """Critical sections on a shared key never interleave."""
        registry = KeyedLockRegistry()
        events: list[str] = []

        async def worker(name: str) -> None:
            async with registry.hold("stock:P1:WH1"):
                events.append(f"{name}-start")
                await asyncio.sleep(0.01)
                events.append(f"{name}-end")

        await asyncio.gather(worker("one"), worker("two"))
        assert events in (
            ["one-start", "one-end", "two-start", "two-end"],
            ["two-start", "two-end", "one-start", "one-end"],
        )

    @pytest.mark.asyncio
    async def test_overlapping_keys_do_not_deadlock(self):
        registry = KeyedLockRegistry()

        async def worker(*keys: str) -> None:
            async with registry.hold(*keys):
                await asyncio.sleep(0.01)

        await asyncio.wait_for(
            asyncio.gather(worker("x", "y"), worker("y", "x")),
            timeout=1,
        )
