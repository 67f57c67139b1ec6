"""
Module: constants.py
Description: SQS limits and queue defaults.
"""

from enum import Enum


class Region(str, Enum):
    """AWS regions offering SQS that the client is commonly pointed at."""

    US_EAST_1 = "us-east-1"
    US_WEST_1 = "us-west-1"
    US_WEST_2 = "us-west-2"
    EU_WEST_1 = "eu-west-1"
    EU_CENTRAL_1 = "eu-central-1"
    AP_NORTHEAST_1 = "ap-northeast-1"
    AP_NORTHEAST_2 = "ap-northeast-2"
    AP_SOUTHEAST_1 = "ap-southeast-1"
    AP_SOUTHEAST_2 = "ap-southeast-2"
    SA_EAST_1 = "sa-east-1"


DEFAULT_REGION = Region.US_WEST_2.value

# Queue defaults
DEFAULT_VISIBILITY_TIMEOUT_SECONDS = 600
DEFAULT_LONG_POLLING_INTERVAL_SECONDS = 20
DEFAULT_BATCH_SIZE = 1
DEFAULT_MESSAGE_GROUP_ID = "1"

# Service limits
MAX_QUEUE_NAME_LENGTH = 80
MAX_LONG_POLLING_INTERVAL_SECONDS = 20
MAX_VISIBILITY_TIMEOUT_SECONDS = 43200
MAX_BATCH_ENTRIES = 10

FIFO_SUFFIX = ".fifo"
