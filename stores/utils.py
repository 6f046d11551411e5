import math

EARTH_RADIUS_METERS = 6371000


def haversine_distance(longitude_a, latitude_a, longitude_b, latitude_b):
    """Great circle distance in meters between two (lng, lat) points."""
    lat_a = math.radians(latitude_a)
    lat_b = math.radians(latitude_b)
    delta_lat = lat_b - lat_a
    delta_lng = math.radians(longitude_b - longitude_a)

    h = math.sin(delta_lat / 2) ** 2 + \
        math.cos(lat_a) * math.cos(lat_b) * math.sin(delta_lng / 2) ** 2

    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(h)))
