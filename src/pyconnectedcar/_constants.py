"""Internal constants shared across the library."""

BASE_URL = "https://msg.volkswagen.de/fs-car"
USER_AGENT = "okhttp/3.7.0"
NOMINATIM_URL = "https://nominatim.openstreetmap.org/reverse"

HTTP_OK = 200
HTTP_NO_CONTENT = 204
AUTH_FAILURE_CODES: frozenset[int] = frozenset({401, 403})

# ------------------------------------------------------------------
# Car finder endpoints  ({brand}, {country}, {vin})
# ------------------------------------------------------------------

VEHICLE_POSITION_PATH = "/bs/cf/v1/{brand}/{country}/vehicles/{vin}/position"
STORED_POSITION_PATH = "/bs/cf/v1/{brand}/{country}/vehicles/{vin}/parkingposition"

# CarNet coordinates are integer micro-degrees.
COORDINATE_SCALE = 1_000_000

# ------------------------------------------------------------------
# Services and channels
# ------------------------------------------------------------------

SERVICE_CAR_FINDER = "carFinder"

CHANNEL_GROUP_LOCATION = "location"

CHANNEL_LOCATION_GEO = "position"
CHANNEL_LOCATION_TIME = "positionLastUpdate"
CHANNEL_LOCATION_ADDRESS = "positionAddress"
CHANNEL_PARK_LOCATION = "parkingPosition"
CHANNEL_PARK_ADDRESS = "parkingAddress"
CHANNEL_PARK_TIME = "parkingTime"
CHANNEL_CAR_MOVING = "vehicleMoving"
