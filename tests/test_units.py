import pytest

from weather_mcp import units


class TestTemperature:
    @pytest.mark.parametrize("celsius, fahrenheit", [(0, 32), (100, 212), (-40, -40), (-17.5, 0.5), (37, 98.6)])
    def test_celsius_to_fahrenheit(self, celsius, fahrenheit):
        assert units.celsius_to_fahrenheit(celsius) == pytest.approx(fahrenheit)

    def test_none_passes_through(self):
        assert units.celsius_to_fahrenheit(None) is None


class TestConversions:
    def test_zero_is_not_treated_as_absent(self):
        assert units.meters_to_feet(0.0) == 0.0
        assert units.kmh_to_knots(0.0) == 0.0

    def test_factors(self):
        assert units.meters_to_feet(1.0) == pytest.approx(3.28084)
        assert units.kmh_to_knots(10.0) == pytest.approx(5.39957)
        assert units.meters_per_second_to_mph(10.0) == pytest.approx(22.37)
        assert units.pascals_to_inhg(101325.0) == pytest.approx(29.921, abs=1e-3)
        assert units.meters_to_miles(1609.34) == pytest.approx(1.0, abs=1e-4)

    @pytest.mark.parametrize(
        "converter",
        [
            units.meters_to_feet,
            units.kmh_to_knots,
            units.meters_per_second_to_mph,
            units.pascals_to_inhg,
            units.meters_to_miles,
        ],
    )
    def test_absent_values_stay_absent(self, converter):
        assert converter(None) is None


class TestCardinal:
    @pytest.mark.parametrize(
        "degrees, expected",
        [
            (0, "N"),
            (360, "N"),
            (11.25, "N"),
            (348.75, "N"),
            (359.9, "N"),
            (22.5, "NNE"),
            (45, "NE"),
            (90, "E"),
            (135, "SE"),
            (180, "S"),
            (202.5, "SSW"),
            (225, "SW"),
            (270, "W"),
            (315, "NW"),
            (337.5, "NNW"),
        ],
    )
    def test_degrees_to_cardinal(self, degrees, expected):
        assert units.degrees_to_cardinal(degrees) == expected

    def test_every_sector_reachable(self):
        seen = {units.degrees_to_cardinal(i * 22.5) for i in range(16)}
        assert seen == set(units.CARDINAL_DIRECTIONS)

    def test_none_yields_none(self):
        assert units.degrees_to_cardinal(None) is None

    @pytest.mark.parametrize("degrees", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_yields_none(self, degrees):
        assert units.degrees_to_cardinal(degrees) is None
