"""Temperature characterization."""

from app.models.weather import TemperatureCategory

HOT_THRESHOLD_F = 80
COLD_THRESHOLD_F = 40


def classify_temperature(temp_f: int) -> TemperatureCategory:
    """Map a Fahrenheit temperature to hot, cold or moderate.

    Both thresholds are inclusive.
    """
    if temp_f >= HOT_THRESHOLD_F:
        return "hot"
    if temp_f <= COLD_THRESHOLD_F:
        return "cold"
    return "moderate"
