COMMAND_PREFIX = "!"
QUERY_PREFIX = "??"

DEFAULT_STORE_BACKEND = "redis"
DEFAULT_REDIS_URL = "redis://127.0.0.1/"
DEFAULT_STORE_TIMEOUT_SECONDS = 5.0

# Empty means every channel; DMs are always accepted.
DEFAULT_ALLOWED_CHANNEL_IDS: set[int] = set()

DISCORD_MAX_MESSAGE_LEN = 1900  # keep under 2000 hard limit
