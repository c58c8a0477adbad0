"""
Great-circle distance and proximity labels.

Distance uses the haversine formula on a spherical Earth (R = 6371 km).
Labels are a user-facing contract:

    d >= 100 km      -> "{round(d)} km away"
    1 km <= d < 100  -> "{d:.1f} km away"
    d < 1 km         -> "{round(d * 1000)} m away"
    unavailable      -> ""

A distance is treated as >= 100 km when its one-decimal rendering reaches
100.0, so 99.95 km reads "100 km away" rather than "100.0 km away".
"""

from __future__ import annotations

import math

EARTH_RADIUS_KM = 6371.0


def _finite(*values: float | None) -> bool:
    return all(v is not None and isinstance(v, (int, float)) and math.isfinite(v) for v in values)


def haversine_km(
    lat1: float | None,
    lon1: float | None,
    lat2: float | None,
    lon2: float | None,
) -> float | None:
    """
    Great-circle distance in kilometers, or None when any coordinate is
    missing or not finite.
    """
    if not _finite(lat1, lon1, lat2, lon2):
        return None
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(
    origin: tuple[float, float] | None,
    target: tuple[float, float] | None,
) -> float | None:
    if origin is None or target is None:
        return None
    return haversine_km(origin[0], origin[1], target[0], target[1])


def _half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_distance_label(distance_km: float | None) -> str:
    """
    Example:
        >>> format_distance_label(99.95)
        '100 km away'
        >>> format_distance_label(1.0)
        '1.0 km away'
        >>> format_distance_label(0.999)
        '999 m away'
    """
    if distance_km is None or not math.isfinite(distance_km):
        return ""
    if distance_km >= 100 or round(distance_km, 1) >= 100:
        return f"{_half_up(distance_km)} km away"
    if distance_km >= 1:
        return f"{distance_km:.1f} km away"
    meters = _half_up(distance_km * 1000)
    if meters >= 1000:
        return "1.0 km away"
    return f"{meters} m away"
