# MediaPipe Face Mesh landmarks (468 face, 478 with refine_landmarks=True).
# "Left" and "right" follow the image, so LEFT_EYE is the subject's right eye.

LEFT_EYE = {
    "inner": 133,
    "outer": 33,
    "top_lid": 159,
}

RIGHT_EYE = {
    "inner": 362,
    "outer": 263,
    "top_lid": 386,
}

NOSE_TIP = 1
NOSE_BRIDGE = 168

EYE_LANDMARKS = [
    LEFT_EYE["inner"],
    RIGHT_EYE["inner"],
    LEFT_EYE["outer"],
    RIGHT_EYE["outer"],
    LEFT_EYE["top_lid"],
    RIGHT_EYE["top_lid"],
]

# A usable landmark set must reach the nose bridge index.
MIN_LANDMARK_COUNT = NOSE_BRIDGE + 1
