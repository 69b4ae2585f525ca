# parking_app/utils/geo.py
"""
Great-circle distance between two lat/long points (haversine, spherical Earth).
Results are in miles. NaN inputs give NaN outputs; validate coordinates first.
"""

import math

EARTH_RADIUS_KM = 6371
KM_TO_MILES = 0.621371


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (math.sin(d_lat / 2) ** 2
         + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(d_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c * KM_TO_MILES
