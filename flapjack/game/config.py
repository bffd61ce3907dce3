# --- Display ---
WIDTH = 1280
HEIGHT = 800
FPS = 60
MIN_WIDTH = 480             # smallest window the resize handler accepts
MIN_HEIGHT = 360

# --- Bird physics (per frame, not per second) ---
GRAVITY = 0.5               # added to vy every frame (px/frame^2)
FLAP_STRENGTH = -10.0       # vy set by a flap (px/frame), overrides current vy
BIRD_RADIUS = 50
BIRD_X_FRAC = 0.25          # bird's fixed x as a fraction of viewport width

# --- Pipes ---
PIPE_WIDTH = 300
PIPE_GAP = 350              # bottom - top, constant for every pipe
PIPE_SPEED = 5              # px/frame, pipes scroll left
PIPE_MARGIN = 100           # min distance between gap and screen edge
SPAWN_WARMUP_FRAMES = 60    # no spawn before this frame
SPAWN_EVERY_FRAMES = 120    # spawn when frame_count % this == 0

# --- Skins (pipe image is drawn at a fixed height, flipped for the bottom pipe) ---
PIPE_IMG_H = 500
ASSETS_DIR = "."

# --- Persistence ---
HIGHSCORE_FILE = "~/.flapjack_highscore"

# --- Colors (RGB) ---
COLOR_BG = (112, 197, 206)
COLOR_FG = (255, 255, 255)
COLOR_BIRD = (255, 255, 0)
COLOR_OUTLINE = (0, 0, 0)
COLOR_PIPE = (0, 128, 0)
COLOR_DANGER = (255, 0, 0)
COLOR_MENU_BG = (20, 24, 38)
COLOR_MENU_TILE = (40, 60, 90)
COLOR_MENU_HOVER = (90, 130, 180)

# --- Debug ---
DEBUG_SIM = False           # print one line per tick from the simulation
