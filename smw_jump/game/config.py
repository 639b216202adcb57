# --- Display ---
WIDTH = 800
HEIGHT = 600
FPS = 60

# --- Geometry ---
TILE_HEIGHT = 64
PLAYER_WIDTH = TILE_HEIGHT
PLAYER_HEIGHT = TILE_HEIGHT * 2
FLOOR_Y = 500               # screen y of the ground line
PLAYER_START_X = 100.0

# --- Jump ---
SHORT_JUMP_TILES = 3        # apex of a tapped jump (tiles)
LONG_JUMP_TILES = 5         # apex of a fully held jump (tiles)
TOLERANCE_MIN_HEIGHT = TILE_HEIGHT * 1.8             # release below this -> short jump
TOLERANCE_MAX_HEIGHT = SHORT_JUMP_TILES * TILE_HEIGHT  # reaching this -> long jump
INITIAL_SPEED = TILE_HEIGHT * 24.0      # constant rise speed (px/s), subjective
GRAVITY = TILE_HEIGHT * 220.0           # fall acceleration (px/s^2), subjective
FALL_SPEED_LIMIT = TILE_HEIGHT * 300.0  # try TILE_HEIGHT * 5 to see the cap clearly
MIN_DECELERATION_DISTANCE = 1e-3        # px left to travel when a release comes too late

# --- Steering (demo only) ---
MOVE_SPEED = TILE_HEIGHT * 6.0
STEER_LEFT_KEY = "left"
STEER_RIGHT_KEY = "right"

# --- Debug ---
DEBUG_JUMP_LOGS = False     # print phase transitions to stdout
DEBUG_OVERLAY = True        # initial state of the Tab toggle in the demo

# --- Colors (RGB) ---
COLOR_BG = (0, 0, 0)
COLOR_FG = (255, 255, 255)
COLOR_FLOOR = (128, 128, 128)
COLOR_PLAYER = (0, 204, 0)
COLOR_MAX_LINE = (0, 204, 204)
COLOR_HOLD_BAR = (0, 77, 204)
COLOR_BAND = (204, 178, 0)
COLOR_BAND_MARK = (153, 153, 0)
