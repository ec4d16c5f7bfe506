# tsroute

Terrain-sensitive route planning. `tsroute` finds a least-cost path across a
triangulated irregular network (TIN) of elevation points with Dijkstra's
shortest-path search, using a cost function assembled from small, composable
features.

## Modules

- `tsroute.geometry` – `Point2` and `Point3` named tuples (`Point3.xy`
  projects onto the plane) and `point_to_string`, which formats a point as
  `(x, y, z)` with six decimals.
- `tsroute.pointprocessor` – `wgs84_to_utm` converts `(latitude, longitude)`
  points to `(easting, northing)` in their standard UTM zone;
  `utm_to_wgs84(point, zone, northern)` converts back. A `Point3` keeps its
  `z`. Both raise `ValueError` for coordinates outside the UTM range. Also
  `calculate_xy_distance` and `calculate_xy_angle`.
- `tsroute.maputils` – `calculate_utm_zone` and `is_northern_hemisphere`.
- `tsroute.meshboundary` – `MeshBoundary(source, target, radii_multiplier)`
  is a rectangle aligned with the line between two points. `is_bounded`
  tests whether a point lies inside, `is_bounded_safe` whether it lies at
  least `SAFE_DISTANCE_M` (30 m) inside every edge, and
  `filter_points_outside_boundary` returns the points inside.
  `rotate_point` is a static helper.
- `tsroute.tin` – `Tin(points)` is a Delaunay triangulation in the XY plane
  that keeps each point's elevation. Vertices are integer handles; points
  sharing x and y with an earlier point are dropped. It offers `len()`,
  `point(vertex)`, `faces()`, `locate(point)` (a `Face` or `None` outside the
  hull) and `incident_faces(vertex)` in counter-clockwise order. Fewer than
  three distinct points, or collinear points, raise `ValueError`.
- `tsroute.features` – the cost graph: `FeatureBase`, the abstract
  `Feature`, `ConstantFeature`, `SimpleBooleanFeature`,
  `SimpleBooleanToDoubleFeature`, `ConditionalFeature`, `DistanceFeature`
  (3D distance between the current and next vertex) and
  `InverseFeature(feature_id, in_type, out_type)` for the type pairs
  `(bool, bool)`, `(bool, float)` and `(float, float)`.
- `tsroute.state` – `RouteNode` and `TsrState`, which records the best route
  to each vertex and the step being costed, collects warnings
  (`add_warning`, `process_warnings`), rebuilds the route (`fetch_route`) and
  estimates walking time at 1.2 m/s (`estimate_time`, −1 if the end was not
  reached).
- `tsroute.router` – `Router.route(tin, cost_feature, boundary, start, end)`
  returns the points of the cheapest route; `Router.nearest_vertex` finds the
  closest corner of the triangle containing a point. `RoutingError` is
  raised when a point lies outside the triangulation or no route of finite
  cost exists.
- `tsroute.kml` – `generate_kml_document`, `generate_kml_route`,
  `generate_kml_line`, `generate_kml_faces`, `generate_kml_warnings`,
  `write_success_state_to_kml` and `write_failure_state_to_kml`. Points are
  converted from UTM zone 30 north.
- `tsroute.gpx` – `format_route_as_gpx`, with `x` as latitude and `y` as
  longitude.
- `tsroute.meshio` – `write_mesh_to_obj`, `load_points_from_xyz_file`
  (values rounded to whole numbers), `write_tin_to_file`,
  `load_tin_from_file`, `write_contours_to_file` and
  `load_contours_from_file`.
- `tsroute.jsonparser` – `load_contours_from_json_file(path, layer_id)` reads
  the `geometry.coordinates` of every feature in a named array.
- `tsroute.chunkcache` – an on-disk cache keyed by feature id and `ChunkInfo`
  tile bounds, under `./tsrCache` unless `cache_dir` is given:
  `generate_chunk_id`, `get_chunk_filepath`, `is_chunk_cached`, `cache_tin`,
  `cache_contours`, `load_cached_tin`, `load_cached_contours` and
  `delete_chunk_from_cache`.
- `tsroute.fileio` – `path_to_absolute`, `delete_file`, `write_data_to_file`.
- `tsroute.log` – `log_message` with a global `LogLevel` (default `INFO`) and
  `LogStream` (default `STDERR`), set with `set_global_loglevel` and
  `set_global_logstream`.

## Example

Route across a small synthetic hillside, minimising the 3D distance
travelled:

```python
from tsroute.geometry import Point3
from tsroute.tin import Tin
from tsroute.meshboundary import MeshBoundary
from tsroute.features import DistanceFeature
from tsroute.router import Router, RoutingError
from tsroute.gpx import format_route_as_gpx

points = [
    Point3(float(x), float(y), 0.05 * x + 0.02 * y)
    for x in range(0, 201, 10)
    for y in range(0, 201, 10)
]
tin = Tin(points)

start = Point3(60.0, 100.0, 0.0)
end = Point3(140.0, 100.0, 0.0)
boundary = MeshBoundary(start, end, 1.5)

router = Router()
try:
    route = router.route(tin, DistanceFeature("distance"), boundary, start, end)
except RoutingError as exc:
    print(f"no route: {exc}")
else:
    print(f"{len(route)} waypoints")
    gpx = format_route_as_gpx(route)
```

Every search writes a KML file: `success.kml` with the route and nearby
warnings, or `failure.kml` with the warnings gathered, in the working
directory. Change `router.success_kml_path` and `router.failure_kml_path` to
put them elsewhere, and set `router.gradient` to a function of two points to
colour steep route segments.

## Building a cost function

Each feature's `calculate(state)` reads the step from the `TsrState`
(`current_vertex`, `next_vertex`, `current_face`, `tin`) and the values of
its dependencies:

```python
from tsroute.features import (
    ConditionalFeature,
    ConstantFeature,
    InverseFeature,
    SimpleBooleanFeature,
)

is_water = SimpleBooleanFeature("water", False)
swim_speed = ConstantFeature("swim_speed", 0.89)
walk_speed = ConstantFeature("walk_speed", 1.0)

speed = ConditionalFeature("speed")
speed.add_dependency(is_water)    # condition
speed.add_dependency(swim_speed)  # value when true
speed.add_dependency(walk_speed)  # value when false

inverse_speed = InverseFeature("inverse_speed", float, float)
inverse_speed.add_dependency(speed)
```

The order of `add_dependency` calls matters: a conditional feature takes the
condition first, then the value for true, then the value for false.

## What it does not do

`tsroute` is a library only; it has no command-line program. It does not
download elevation, land-cover, water or path data, read raster or vector GIS
files, or provide ready-made cost presets: you supply the elevation points
and build the cost features yourself.

## Requirements

Python 3.10 or later, with NumPy and SciPy.