"""
Geometry utilities for coordinate transformations and calculations

All geometry inside the engine is in local meters (x east, y north).
Angles are degrees counter-clockwise from the +x axis.
"""

import math
from typing import List, Tuple

from shapely import affinity
from shapely.geometry import LineString, Point, Polygon, box

from .errors import MalformedGeometryError

Bounds = Tuple[float, float, float, float]


class GeometryUtils:
    """Utility functions for geometric operations"""

    @staticmethod
    def degrees_to_local(
        coords: List[List[float]],
        ref_lon: float,
        ref_lat: float
    ) -> List[Tuple[float, float]]:
        """
        Convert [lon, lat] coordinates to local [x, y] meters from reference
        """
        m_per_deg_lat = 111000
        m_per_deg_lon = 111000 * math.cos(math.radians(ref_lat))

        local_coords = []
        for lon, lat in coords:
            x = (lon - ref_lon) * m_per_deg_lon
            y = (lat - ref_lat) * m_per_deg_lat
            local_coords.append((x, y))

        return local_coords

    @staticmethod
    def local_to_degrees(
        local_coords: List[Tuple[float, float]],
        ref_lon: float,
        ref_lat: float
    ) -> List[List[float]]:
        """
        Convert local [x, y] meters to [lon, lat] degrees
        """
        m_per_deg_lat = 111000
        m_per_deg_lon = 111000 * math.cos(math.radians(ref_lat))

        deg_coords = []
        for x, y in local_coords:
            lon = ref_lon + x / m_per_deg_lon
            lat = ref_lat + y / m_per_deg_lat
            deg_coords.append([lon, lat])

        return deg_coords

    @staticmethod
    def dist_along(line: LineString, distance: float) -> Tuple[Point, float]:
        """
        Point and tangent angle at `distance` along a polyline

        Raises MalformedGeometryError when the distance is outside the line
        or the line has no usable segment there.
        """
        length = line.length
        if length <= 0:
            raise MalformedGeometryError("Cannot walk along a zero-length line")
        if distance < 0 or distance > length:
            raise MalformedGeometryError(
                f"Distance {distance:.3f} is outside line of length {length:.3f}"
            )

        coords = list(line.coords)
        walked = 0.0
        for (x1, y1), (x2, y2) in zip(coords, coords[1:]):
            seg_len = math.hypot(x2 - x1, y2 - y1)
            if seg_len == 0:
                continue
            if walked + seg_len >= distance:
                t = (distance - walked) / seg_len
                pt = Point(x1 + t * (x2 - x1), y1 + t * (y2 - y1))
                angle = math.degrees(math.atan2(y2 - y1, x2 - x1))
                return pt, angle
            walked += seg_len

        # Only float drift on the very last segment lands here
        for (x1, y1), (x2, y2) in reversed(list(zip(coords, coords[1:]))):
            if (x1, y1) != (x2, y2):
                return Point(x2, y2), math.degrees(math.atan2(y2 - y1, x2 - x1))
        raise MalformedGeometryError("Line has no non-degenerate segment")

    @staticmethod
    def project_away(point: Point, distance: float, angle_degs: float) -> Point:
        """Move `point` by `distance` in direction `angle_degs`"""
        theta = math.radians(angle_degs)
        return Point(
            point.x + distance * math.cos(theta),
            point.y + distance * math.sin(theta),
        )

    @staticmethod
    def rectangle(width: float, height: float, angle_degs: float, center: Point) -> Polygon:
        """
        Rectangle with `width` along the angle direction and `height`
        across it, centered on `center`
        """
        rect = box(-width / 2.0, -height / 2.0, width / 2.0, height / 2.0)
        rect = affinity.rotate(rect, angle_degs, origin=(0, 0))
        return affinity.translate(rect, center.x, center.y)

    @staticmethod
    def expand_bounds(bounds: Bounds, buffer: float) -> Bounds:
        minx, miny, maxx, maxy = bounds
        return (minx - buffer, miny - buffer, maxx + buffer, maxy + buffer)

    @staticmethod
    def boundary_sample_points(
        polygon: Polygon,
        include_midpoints: bool = False,
        min_edge_length: float = 10.0
    ) -> List[Tuple[float, float]]:
        """
        Corners of a polygon's exterior, optionally followed by the midpoints
        of edges at least `min_edge_length` long
        """
        coords = list(polygon.exterior.coords)
        if len(coords) > 1 and coords[0] == coords[-1]:
            coords = coords[:-1]

        points = [(x, y) for x, y in coords]
        if include_midpoints:
            n = len(coords)
            for i in range(n):
                x1, y1 = coords[i]
                x2, y2 = coords[(i + 1) % n]
                if math.hypot(x2 - x1, y2 - y1) >= min_edge_length:
                    points.append(((x1 + x2) / 2.0, (y1 + y2) / 2.0))
        return points
