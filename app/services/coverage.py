"""NWS coverage area check."""

from typing import NamedTuple


class CoverageBox(NamedTuple):
    """Inclusive latitude/longitude rectangle."""

    region: str
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon


# Rough extent of the US and its territories served by the NWS.
COVERAGE_BOXES: tuple[CoverageBox, ...] = (
    CoverageBox("continental_us", 25, 50, -125, -65),
    CoverageBox("alaska", 50, 75, -180, -140),
    CoverageBox("hawaii", 19, 23, -162, -154),
    CoverageBox("puerto_rico_caribbean", 15, 20, -80, -68),
)


def coverage_region(lat: float, lon: float) -> str | None:
    """Return the name of the first coverage box containing the point."""
    for box in COVERAGE_BOXES:
        if box.contains(lat, lon):
            return box.region
    return None


def is_covered(lat: float, lon: float) -> bool:
    """Check whether coordinates fall inside the NWS coverage area."""
    return coverage_region(lat, lon) is not None
