# --- Airspace ---
GRID_SIZE = 30
BOUNDARY_INSET = 0.01

RUNWAY_COL = GRID_SIZE // 2
RUNWAY_START_ROW = GRID_SIZE // 2 - 1
RUNWAY_END_ROW = GRID_SIZE // 2 + 1
LANDING_RADIUS = 1

# --- Timing ---
TICK_SECONDS = 0.1
FPS = 30

# --- Separation (squared tiles) ---
COLLISION_DISTANCE_SQUARED = 1.0
SAFE_DISTANCE_SQUARED = 4 * 4
ARRIVAL_EPSILON = 0.1

# --- Operator controls ---
DEFAULT_SPEED = 0.5
MIN_SPEED = 0.1
MAX_SPEED = 3.0
SPEED_STEP = 0.1
DEFAULT_SPAWN_RATE = 5
MAX_SPAWN_RATE = 30

CALLSIGN_PREFIX = "FL"

# --- Aircraft states ---
STATE_FLYING = "flying"
STATE_WARNING = "warning"
STATE_LANDED = "landed"
STATE_COLLIDED = "collided"

# --- Policies ---
FLIGHT_MODE_FREE = "free_flight"
FLIGHT_MODE_WAYPOINT = "waypoint_only"
ROUTE_MODE_REPLACE = "replace"
ROUTE_MODE_APPEND = "append"
LANDING_MODE_RADIUS = "radius"
LANDING_MODE_WAYPOINT = "waypoint"

FLIGHT_MODES = (FLIGHT_MODE_FREE, FLIGHT_MODE_WAYPOINT)
ROUTE_MODES = (ROUTE_MODE_REPLACE, ROUTE_MODE_APPEND)
LANDING_MODES = (LANDING_MODE_RADIUS, LANDING_MODE_WAYPOINT)

# --- Files ---
CONFIG_FILE = "pyatc_config.json"
ERROR_LOG_FILE = "error_log.txt"
LOG_DIR = "logs"
LOG_RETENTION_DAYS = 30
MESSAGE_LOG_LIMIT = 100

# --- Window ---
WIDTH, HEIGHT = 900, 660
WINDOW_MAIN = "PyATC Tiles"
DEFAULT_FONT = "consolas"
SIDEBAR_RATIO = 0.30

HELP_TEXT = """
CONTROLS

Left click aircraft   select / deselect
Left click airspace   send selected aircraft there
Up / Down             speed +/- 0.1 tiles/s
Left / Right          spawn rate -/+ 1 per minute
Space                 spawn one aircraft
R                     reset simulation
F1                    this help
F2                    performance overlay
F3                    voice callouts on/off
"""

# --- Rendering ---
PLANE_ICON_RADIUS = 5
PLANE_HEADING_LINE_LENGTH = 14
PLANE_TAG_OFFSET_X = 8
PLANE_TAG_OFFSET_Y = -16
WARNING_RING_TILES = 2
MSG_LINE_HEIGHT = 16

COLOUR_RADAR_BG = (5, 20, 10)
COLOUR_RADAR_GRID = (20, 50, 30)
COLOUR_RUNWAY = (150, 150, 150)
COLOUR_RUNWAY_ZONE = (60, 90, 60)
COLOUR_PLANE_DEFAULT = (0, 255, 0)
COLOUR_PLANE_SELECTED = (0, 200, 255)
COLOUR_PLANE_WARNING = (255, 200, 0)
COLOUR_PLANE_COLLIDED = (255, 0, 0)
COLOUR_ROUTE = (0, 120, 160)
COLOUR_SIDEBAR_BG = (15, 15, 25)
COLOUR_SIDEBAR_BORDER = (60, 60, 90)
COLOUR_STATUS_TEXT = (220, 220, 220)
COLOUR_STATUS_OK = (0, 255, 0)
COLOUR_STATUS_BAD = (255, 0, 0)
COLOUR_MSG_TEXT = (180, 220, 180)
COLOUR_MSG_CRITICAL = (255, 80, 80)
COLOUR_PERF_BG = (0, 0, 0, 160)
COLOUR_PERF_TEXT = (0, 255, 0)
COLOUR_HELP_BG = (15, 15, 25)
COLOUR_HELP_TEXT = (230, 230, 230)
