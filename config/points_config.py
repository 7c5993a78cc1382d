# config/points_config.py

from enum import Enum

class PointReason(str, Enum):
    reported_trash   = "reported_trash"    # +10
    cleaned_area     = "cleaned_area"      # +15
    gift_redeemed    = "gift_redeemed"     # -cost of the gift

# Finalized point values
POINT_VALUES = {
    PointReason.reported_trash:  10,
    PointReason.cleaned_area:    15,
}

# (minimum points, level name), highest first
LEVELS = [
    (500, "Eco Master"),
    (300, "Green Hero"),
    (150, "Nature Friend"),
    (50,  "Eco Helper"),
    (0,   "Eco Beginner"),
]

# Progress bar caps out at the top level
MAX_LEVEL_POINTS = 500
