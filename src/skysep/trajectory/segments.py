"""Segment building: lay out great-circle legs back to back in time"""

from typing import List, Optional

from ..adapters.route_parser import parse_route_string
from ..schemas.flight_schemas import Flight, Segment, Waypoint
from ..schemas.raw_flight import RawFlight
from ..utils.geo_route import haversine_nm


SECONDS_PER_HOUR = 3600


def build_segments_for_waypoints(flight_id: str, departure_time: float,
                                 cruise_altitude_ft: float, cruise_speed_kt: float,
                                 waypoints: List[Waypoint]) -> List[Segment]:
    """
    Build timed segments between consecutive waypoints

    Each leg starts where the previous one ended; duration is distance over
    cruise speed. Fewer than two waypoints or a non-positive speed gives no
    segments (the flight is kept but inert).
    """
    if len(waypoints) < 2 or cruise_speed_kt <= 0:
        return []

    segments = []
    cursor_time = departure_time

    for i in range(len(waypoints) - 1):
        from_point = waypoints[i]
        to_point = waypoints[i + 1]

        distance_nm = haversine_nm(from_point, to_point)
        duration_sec = (distance_nm / cruise_speed_kt) * SECONDS_PER_HOUR
        t_start = cursor_time
        t_end = cursor_time + duration_sec

        segments.append(Segment(
            flight_id=flight_id,
            index=i,
            from_point=from_point,
            to_point=to_point,
            t_start=t_start,
            t_end=t_end,
            altitude_ft=cruise_altitude_ft,
            distance_nm=distance_nm
        ))

        cursor_time = t_end

    return segments


def build_flight_from_raw(raw: RawFlight) -> Flight:
    """Parse the route of a raw record and build its flight.

    Raises:
        RouteParseError: if the route contains a malformed token
    """
    waypoints = parse_route_string(raw.route)

    segments = build_segments_for_waypoints(
        raw.acid,
        raw.departure_time,
        raw.altitude,
        raw.aircraft_speed,
        waypoints
    )

    return Flight(
        id=raw.acid,
        callsign=raw.acid,
        plane_type=raw.plane_type,
        departure_airport=raw.departure_airport,
        arrival_airport=raw.arrival_airport,
        departure_time=raw.departure_time,
        cruise_speed_kt=raw.aircraft_speed,
        cruise_altitude_ft=raw.altitude,
        passengers=raw.passengers,
        is_cargo=raw.is_cargo,
        segments=segments
    )


def build_segments_for_flight(flight: Flight,
                              waypoints: Optional[List[Waypoint]] = None) -> List[Segment]:
    """Re-time a flight over an alternate waypoint list.

    Without ``waypoints`` the flight's own segments are returned.
    """
    if waypoints is None:
        return flight.segments

    return build_segments_for_waypoints(
        flight.id,
        flight.departure_time,
        flight.cruise_altitude_ft,
        flight.cruise_speed_kt,
        waypoints
    )
