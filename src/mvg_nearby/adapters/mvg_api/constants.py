"""Constants for the MVG API adapter.

Uses the public bgw-pt v3 API behind www.mvg.de.
No authentication required; all endpoints are idempotent GETs returning JSON lists.
"""

MVG_BASE_URL = "https://www.mvg.de/api/bgw-pt/v3"

# Paths relative to the base URL
NEARBY_PATH = "/stations/nearby"  # GET ?latitude=&longitude=
LOCATIONS_PATH = "/locations"  # GET ?query=
LINES_PATH = "/lines"  # GET /lines/{globalId}
DEPARTURES_PATH = "/departures"  # GET ?globalId=&limit=&transportTypes=

# Location search result kind that denotes a station (others: ADDRESS, POI, ...)
STATION_LOCATION_TYPE = "STATION"

DEFAULT_HEADERS = {
    "accept": "application/json",
    "user-agent": "Mozilla/5.0",
}
