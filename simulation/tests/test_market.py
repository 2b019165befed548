"""
Tests for simulation/market.py.

Coverage:
  1. Registry: case-insensitive lookup, insertion order, replacement
  2. tick(): exact +/- bound with an injected draw, floor clamp
  3. tick(): bound holds over many seeded draws
  4. from_config seeding
"""

import random

import pytest

from models.config import InstrumentSeed, MarketConfig
from simulation.market import Market


class FixedRandom:
    """Random source that always returns the same percentage."""

    def __init__(self, pct: float) -> None:
        self.pct = pct
        self.calls: list[tuple[float, float]] = []

    def uniform(self, a: float, b: float) -> float:
        self.calls.append((a, b))
        return self.pct


@pytest.fixture
def market() -> Market:
    m = Market(rng=FixedRandom(0.0))
    m.add_instrument("AAPL", "Apple Inc.", 190.0)
    m.add_instrument("msft", "Microsoft", 420.0)
    return m


# =============================================================================
# Registry
# =============================================================================


class TestRegistry:

    def test_lookup_is_case_insensitive(self, market):
        assert market.get("aapl").symbol == "AAPL"
        assert market.get("MSFT").name == "Microsoft"
        assert "Msft" in market

    def test_unknown_symbol_returns_none(self, market):
        assert market.get("ZZZ") is None
        assert "ZZZ" not in market

    def test_listing_keeps_insertion_order(self, market):
        market.add_instrument("GOOGL", "Alphabet", 165.0)
        assert market.symbols() == ["AAPL", "MSFT", "GOOGL"]
        assert [i.symbol for i in market.instruments()] == ["AAPL", "MSFT", "GOOGL"]
        assert len(market) == 3

    def test_readding_symbol_replaces_entry(self, market):
        market.add_instrument("aapl", "Apple (new)", 200.0)
        assert len(market) == 2
        assert market.get("AAPL").price == 200.0
        assert market.get("AAPL").name == "Apple (new)"

    @pytest.mark.parametrize("price", [0.0, -1.0])
    def test_non_positive_initial_price_raises(self, market, price):
        with pytest.raises(ValueError, match="must be positive"):
            market.add_instrument("BAD", "Bad", price)


# =============================================================================
# Tick
# =============================================================================


class TestTick:

    def test_draws_from_closed_three_percent_interval(self):
        rng = FixedRandom(0.0)
        m = Market(rng=rng)
        m.add_instrument("AAPL", "Apple Inc.", 100.0)
        m.tick()
        assert rng.calls == [(-3.0, 3.0)]

    def test_upper_bound_move(self):
        m = Market(rng=FixedRandom(3.0))
        m.add_instrument("AAPL", "Apple Inc.", 100.0)
        m.tick()
        assert m.get("AAPL").price == pytest.approx(103.0)

    def test_lower_bound_move(self):
        m = Market(rng=FixedRandom(-3.0))
        m.add_instrument("AAPL", "Apple Inc.", 100.0)
        m.tick()
        assert m.get("AAPL").price == pytest.approx(97.0)

    def test_out_of_range_draw_is_clamped_to_bound(self):
        m = Market(rng=FixedRandom(50.0))
        m.add_instrument("AAPL", "Apple Inc.", 100.0)
        m.tick()
        assert m.get("AAPL").price == pytest.approx(103.0)

    def test_price_never_drops_below_floor(self):
        m = Market(rng=FixedRandom(-3.0))
        m.add_instrument("PENNY", "Penny Stock", 0.01)
        for _ in range(10):
            m.tick()
        assert m.get("PENNY").price == 0.01

    def test_every_instrument_moves(self, market):
        market._rng = FixedRandom(1.0)
        market.tick()
        assert market.get("AAPL").price == pytest.approx(191.9)
        assert market.get("MSFT").price == pytest.approx(424.2)

    def test_bound_holds_over_many_seeded_ticks(self):
        m = Market(rng=random.Random(1234))
        m.add_instrument("AAPL", "Apple Inc.", 190.0)
        m.add_instrument("TINY", "Tiny", 0.011)
        for _ in range(500):
            before = {i.symbol: i.price for i in m.instruments()}
            m.tick()
            for inst in m.instruments():
                prev = before[inst.symbol]
                assert inst.price >= 0.01
                if inst.price > 0.01:
                    assert abs(inst.price - prev) <= prev * 0.03 + 1e-12

    def test_custom_bound_and_floor(self):
        m = Market(rng=FixedRandom(-10.0), max_tick_pct=10.0, price_floor=1.0)
        m.add_instrument("AAPL", "Apple Inc.", 1.05)
        m.tick()
        assert m.get("AAPL").price == 1.0


# =============================================================================
# from_config
# =============================================================================


class TestFromConfig:

    def test_default_seed_set(self):
        m = Market.from_config(MarketConfig())
        assert m.symbols() == ["AAPL", "MSFT", "GOOGL", "AMZN", "TSLA"]
        assert m.get("MSFT").price == 420.0

    def test_seeded_config_is_reproducible(self):
        config = MarketConfig(
            seed=42,
            instruments=[InstrumentSeed(symbol="aapl", name="Apple Inc.", price=190.0)],
        )
        a, b = Market.from_config(config), Market.from_config(config)
        for _ in range(5):
            a.tick()
            b.tick()
        assert a.get("AAPL").price == b.get("AAPL").price

    def test_explicit_rng_wins_over_seed(self):
        config = MarketConfig(
            seed=42,
            instruments=[InstrumentSeed(symbol="AAPL", name="Apple Inc.", price=100.0)],
        )
        m = Market.from_config(config, rng=FixedRandom(2.0))
        m.tick()
        assert m.get("AAPL").price == pytest.approx(102.0)
