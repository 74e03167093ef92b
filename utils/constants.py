# =========================
# HAND LANDMARK INDICES
# =========================
WRIST = 0
INDEX_MCP = 5
INDEX_TIP = 8
MIDDLE_TIP = 12
RING_TIP = 16
PINKY_TIP = 20

# Thumb excluded: it stays out even in a loose fist
FINGERTIPS = (INDEX_TIP, MIDDLE_TIP, RING_TIP, PINKY_TIP)

# Skeleton edges for the camera overlay
HAND_CONNECTIONS = (
    (0, 1), (1, 2), (2, 3), (3, 4),          # thumb
    (0, 5), (5, 6), (6, 7), (7, 8),          # index
    (0, 17), (5, 9), (9, 13), (13, 17),      # palm
    (9, 10), (10, 11), (11, 12),             # middle
    (13, 14), (14, 15), (15, 16),            # ring
    (17, 18), (18, 19), (19, 20),            # pinky
)

# =========================
# HAND STATUS TEXT
# =========================
STATUS_INITIALIZING = "Initializing Camera..."
STATUS_DETECTED = "Hand Detected"
STATUS_LOST = "Lost Tracking - Raise Hand"

# =========================
# COLOURS (RGB)
# =========================
COLOR_BG = (15, 35, 16)
COLOR_TABLE = (20, 54, 24)
COLOR_LINES = (74, 222, 128)
COLOR_PADDLE_PLAYER = (251, 191, 36)
COLOR_PADDLE_OPPONENT = (148, 163, 184)
COLOR_BALL = (255, 255, 255)
COLOR_JOINT = (251, 191, 36)
