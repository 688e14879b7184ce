# --- Screen & Layout ---
SCREEN_WIDTH = 1120
SCREEN_HEIGHT = 720

CONTROLS_AREA_HEIGHT = 130
INFO_AREA_WIDTH = 320
MAZE_AREA_WIDTH = SCREEN_WIDTH - INFO_AREA_WIDTH
MAZE_AREA_HEIGHT = SCREEN_HEIGHT - CONTROLS_AREA_HEIGHT


# --- Maze Settings ---
MIN_MAZE_DIMENSION = 11
DIFFICULTY_SIZES = {
    "easy": (11, 11),
    "medium": (15, 15),
    "hard": (21, 21),
}
DEFAULT_DIFFICULTY = "medium"
DEFAULT_PRESET_INDEX = 0

# --- Algorithm Settings ---
ALGORITHMS = ("astar", "bfs", "dfs", "ucs", "ids")
ALGORITHM_NAMES = {
    "astar": "A* Search",
    "bfs": "Breadth-First Search",
    "dfs": "Depth-First Search",
    "ucs": "Uniform Cost Search",
    "ids": "Iterative Deepening Search",
}
ALGORITHM_SHORT_NAMES = {"astar": "A*", "bfs": "BFS", "dfs": "DFS", "ucs": "UCS", "ids": "IDS"}

# --- Phases & Modes ---
PHASE_MENU = "menu"
PHASE_SOLVING = "solving"
PHASE_VISUALIZING = "visualizing"
PHASE_MOVING = "moving"
PHASE_COMPLETED = "completed"

MODE_INSTANT = "instant"
MODE_STEP = "step"
VISUALIZATION_MODES = (MODE_INSTANT, MODE_STEP)
DEFAULT_VISUALIZATION_MODE = MODE_INSTANT

# --- Playback Timing (milliseconds) ---
VISUALIZATION_TICK_MS = 30       # One visited cell revealed per tick
PRE_VISUALIZATION_DELAY_MS = 300 # solving -> visualizing (step mode)
SETTLE_DELAY_MS = 500            # Pause before the ball starts moving
BALL_STEP_MS = 150               # Ball advances one path cell per step


# --- Dark Modern Green Theme Colors ---
DMG_DARK_BG = (18, 22, 20)          # Main background
DMG_PRIMARY_BG = (25, 35, 30)       # Info panel background
DMG_SECONDARY_BG = (35, 50, 45)     # Controls panel background

DMG_PRIMARY_GREEN = (0, 204, 102)   # Bright green for primary actions, highlights
DMG_ACCENT_GREEN = (10, 230, 130)

DMG_LIGHT_TEXT = (210, 230, 220)    # Main text color
DMG_DIM_TEXT = (140, 160, 150)      # For less important text, disabled states
DMG_WARN_TEXT = (255, 100, 100)     # For warnings, errors

DMG_UI_BORDER = (0, 150, 90)
DMG_UI_BUTTON = (45, 70, 60)
DMG_UI_BUTTON_HOVER = (60, 90, 80)
DMG_UI_BUTTON_ACTIVE = DMG_PRIMARY_GREEN
DMG_UI_BUTTON_TEXT = DMG_LIGHT_TEXT
DMG_UI_BUTTON_DISABLED_BG = (40, 50, 45)
DMG_UI_BUTTON_DISABLED_TEXT = (100, 110, 105)

WALL_COLOR = (10, 18, 15)
FLOOR_COLOR = (45, 60, 55)
START_COLOR = (40, 140, 220)
END_COLOR = DMG_PRIMARY_GREEN
VISITED_COLOR = (200, 70, 70)       # "Explored" overlay
PATH_OVERLAY_COLOR = (0, 200, 220)  # "Path" overlay
BALL_COLOR = (240, 200, 40)
BALL_OUTLINE_COLOR = DMG_LIGHT_TEXT


# --- Game Settings ---
FPS = 60
WINDOW_TITLE = "MAZE EXPLORER"

# --- UI Elements ---
UI_ROUND_RECT_RADIUS = 8
UI_BUTTON_HEIGHT = 30
UI_PADDING = 10
UI_ELEMENT_PADDING = 8
UI_SECTION_PADDING = 15

UI_FONT_SIZE_XLARGE = 60
UI_FONT_SIZE_NORMAL = 28
UI_FONT_SIZE_SMALL = 24
UI_FONT_SIZE_XSMALL = 20
