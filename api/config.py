# config.py
# App configuration and constants

import os

# Directory holding regions.parquet, datasets.parquet and curves.parquet
DATA_DIR = os.getenv("DATA_DIR", "data")

# Routes are served under this prefix, e.g. /ws/hazard/curve.json
MOUNT_PATH = os.getenv("MOUNT_PATH", "/ws/hazard")

# Region used when the caller doesn't pick one (Conterminous US, 0.05 deg grid)
DEFAULT_REGION = os.getenv("DEFAULT_REGION", "COUS0P05")

# Two coordinates closer than this (degrees) are the same grid line
COORDINATE_TOLERANCE = float(os.getenv("COORDINATE_TOLERANCE", "1e-9"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# API metadata
API_TITLE = "Hazard Curve Service"
API_VERSION = "1.0.0"
