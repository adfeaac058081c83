import pytest

from billing.services.usage import compute_usage


class TestElectricUsage:
    def test_plain_difference(self):
        assert compute_usage(100, 500, "electric") == 400

    def test_rollover_past_zero(self):
        assert compute_usage(9823, 173, "electric") == 350

    def test_rollover_from_last_digit(self):
        assert compute_usage(9999, 0, "electric") == 1

    def test_unchanged_meter(self):
        assert compute_usage(4321, 4321, "electric") == 0

    def test_modulus_follows_settings(self, settings):
        settings.DORM_ELECTRIC_METER_MODULUS = 100000
        assert compute_usage(99990, 10, "electric") == 20


class TestWaterUsage:
    def test_plain_difference(self):
        assert compute_usage(100, 500, "water") == 400

    def test_backwards_reading_is_not_clamped(self):
        assert compute_usage(500, 100, "water") == -400


def test_unknown_utility_is_rejected():
    with pytest.raises(ValueError):
        compute_usage(1, 2, "gas")
