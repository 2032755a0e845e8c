import os
from botocore.config import Config

AWS_REGION = os.environ.get("AWS_REGION", "ap-southeast-1")

DEFAULT_NIGHTLY_RATE = float(os.environ.get("DEFAULT_NIGHTLY_RATE", "800"))
MAX_STAY = int(os.environ.get("MAX_STAY", "30"))
HOTEL_TIMEZONE = os.environ.get("HOTEL_TIMEZONE", "Asia/Bangkok")
HOTEL_NAME = os.environ.get("HOTEL_NAME", "Sunriver Hotel")
CURRENCY = "THB"

RECENT_BOOKINGS_LIMIT = 10
POPULAR_ROOMS_LIMIT = 10
OCCUPANCY_MONTHS = 12

BOTO_CONFIG = Config(
    connect_timeout=float(os.environ.get("DYNAMODB_CONNECT_TIMEOUT", "2")),
    read_timeout=float(os.environ.get("DYNAMODB_READ_TIMEOUT", "5")),
    retries={
        "max_attempts": int(os.environ.get("DYNAMODB_MAX_ATTEMPTS", "3")),
        "mode": "standard",
    },
)
