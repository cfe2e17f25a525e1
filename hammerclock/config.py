"""Application-wide constants."""

VERSION = "0.1"

# Shown on the About screen.
PROJECT_URL = "https://example.com/hammerclock"

DEFAULT_OPTIONS_FILENAME = "default.json"

DEFAULT_COLOR_PALETTE = "warhammer"

DEFAULT_PLAYER_PREFIX = "Player"

DEFAULT_PLAYER_COUNT = 2

# strftime layout of the timestamp written into action-log entries.
DEFAULT_LOG_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_FILE_NAME = "logs.csv"

# Directory of the CSV log; empty means the current working directory.
DEFAULT_LOG_FILE_PATH = ""