# Camera
CAMERA_INDEX = 0
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480
CAMERA_FPS = 30
CAMERA_BUFFERSIZE = 1
WARMUP_FRAMES = 5

# MediaPipe Face Mesh
MAX_FACES = 1
REFINE_LANDMARKS = True
MIN_DETECTION_CONFIDENCE = 0.7
MIN_TRACKING_CONFIDENCE = 0.5

# Placement
VERTICAL_OFFSET = 5.0
REFERENCE_EYE_DISTANCE = 80.0
MAX_ANGLE = 0.1  # ~5.7 degrees
MIN_WIDTH_RATIO = 1.8
MAX_WIDTH_RATIO = 2.5
SMOOTHING_FACTOR = 0.6
OVERLAY_OPACITY = 0.9

# Overlay assets
ASSETS_DIR = "assets"
ASSET_PATTERN = "*.png"
DEFAULT_STYLE = "glasses-04"

# Output
WINDOW_NAME = "Face Overlay"
DEBUG_DRAW_POINTS = False
LOG_FILE = "face_overlay.log"
LOG_INTERVAL = 60
