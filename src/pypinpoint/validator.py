from __future__ import annotations

import math

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def isValid(latitude: float, longitude: float) -> bool:
    """Check that a latitude/longitude pair lies within the geographic domain."""
    if math.isnan(latitude) or math.isnan(longitude):
        return False
    return (LATITUDE_RANGE[0] <= latitude <= LATITUDE_RANGE[1]
            and LONGITUDE_RANGE[0] <= longitude <= LONGITUDE_RANGE[1])
