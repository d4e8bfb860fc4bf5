"""
Tests for the seeded noise helpers
"""

import math

from brewboard.services.synthetic import clamp, round_half_up, seeded_noise, segment_noise, sine_rand


def test_noise_is_deterministic_and_bounded():
    for hour in range(24):
        n = seeded_noise(2026, 9, 19, hour)
        assert 0 <= n < 1
        assert n == seeded_noise(2026, 9, 19, hour)


def test_segment_noise_depends_on_channel():
    values = {segment_noise(2026, 9, 19, k) for k in range(1, 8)}
    assert len(values) > 1
    assert all(0 <= v < 1 for v in values)


def test_sine_rand_bounded():
    assert all(0 <= sine_rand(seed) < 1 for seed in range(500))


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -2
    assert isinstance(round_half_up(2.4), int)
    assert round_half_up(12.26, 1) == 12.3


def test_clamp():
    assert clamp(5, 10, 20) == 10
    assert clamp(25, 10, 20) == 20
    assert clamp(15, 10, 20) == 15


def test_noise_seed_layout():
    # 2026-10-19 08:00 hashes the integer 2026_10_19_08
    expected = math.sin(2026101908) * 43758.5453
    assert seeded_noise(2026, 9, 19, 8) == expected - math.floor(expected)
    # segment channel 3 replaces the hour with 3 * 7
    expected = math.sin(2026101921) * 43758.5453
    assert segment_noise(2026, 9, 19, 3) == expected - math.floor(expected)
    assert sine_rand(0) == 0


def test_round_half_up_on_cents():
    # 0.125 is exact in binary, so the built-in rounds it to even
    assert round(0.125, 2) == 0.12
    assert round_half_up(0.125, 2) == 0.13
