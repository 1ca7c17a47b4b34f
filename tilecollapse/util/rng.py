"""Deterministic random streams for tile selection.

Each consumer (tile selection, retry reseeding, benchmarks, ...) gets its own
random stream derived from one master seed, so that:

1. A whole run is reproducible from the master seed
2. One consumer drawing more numbers does not shift another's sequence

Usage:
    from tilecollapse.util import rng
    rng.init(config.RANDOM_SEED)

    _rng = rng.get("collapse.selection")
    solver = TileCollapseSolver(8, 8, rng=_rng)

    # After rng.reset(), cached stream references pick up the new seed

Solvers also accept a plain random.Random, which is what tests use.
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TypeAlias, TypeVar

from tilecollapse import config
from tilecollapse.types import RandomSeed

T = TypeVar("T")


class RNGStream:
    """Proxy that forwards to the current Random for one domain.

    Callers may hold on to a stream; it keeps working after the provider
    is reset because the underlying Random is looked up on every call.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        return self._rng().choice(seq)

    def choices(
        self,
        population: Sequence[T],
        weights: Sequence[float] | None = None,
        *,
        cum_weights: Sequence[float] | None = None,
        k: int = 1,
    ) -> list[T]:
        """Return k-sized list of elements chosen with replacement."""
        return self._rng().choices(
            population, weights=weights, cum_weights=cum_weights, k=k
        )


# Anything selectors can draw from. Use in hints: `def foo(rng: RNG) -> str:`
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Hands out isolated streams keyed by domain name."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    def get(self, domain: str) -> RNGStream:
        """Get the (cacheable) stream for a domain like "collapse.selection"."""
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                self._streams[domain] = Random()
            else:
                # crc32 rather than hash(): hash() of str is salted per process
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reseed every stream. Existing RNGStream proxies stay valid."""
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize the shared provider, or reseed it if it already exists."""
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Get a stream from the shared provider.

    The provider is created on first use from config.RANDOM_SEED (None
    means system entropy). Call init() first to pick the seed at runtime.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(config.RANDOM_SEED)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
