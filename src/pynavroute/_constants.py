"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Route following
# ------------------------------------------------------------------

#: Fixes older than this (relative to the previous fix) do not feed the
#: arc-length prediction used by the projector.
LOCATION_TIME_THRESHOLD_S: float = 60.0

#: Remaining distance below which the cursor counts as "on the end".
ON_END_TOLERANCE_M: float = 10.0

#: A street name further ahead than this is not announced.
STREET_NAME_LINK_METERS: float = 400.0

#: Maximum gap between the end of a route and the start of an appended leg.
MERGE_TOLERANCE_M: float = 2.0

#: Douglas-Peucker tolerance (planar mercator units) for the decimated path.
SIMPLIFICATION_TOLERANCE: float = 1e-4

# ------------------------------------------------------------------
# Geometry
# ------------------------------------------------------------------

#: Earth radius used for distances on the sphere.
EARTH_RADIUS_M: float = 6378000.0

#: Metres per degree of latitude along a meridian.
METRES_IN_DEGREE: float = 40008245.0 / 360.0

MERCATOR_MIN_X: float = -180.0
MERCATOR_MAX_X: float = 180.0
MERCATOR_MIN_Y: float = -180.0
MERCATOR_MAX_Y: float = 180.0

#: Planar coordinates closer than this are treated as the same point.
POINT_EPSILON: float = 1e-9

# ------------------------------------------------------------------
# Annotation sentinels
# ------------------------------------------------------------------

INVALID_ALTITUDE: float = -10000.0
