"""Core constants: cache key layout and shared literal values."""

# Partition segments appended to settings.cache_namespace
CACHE_PARTITION_ORG = "org"
CACHE_PARTITION_SESSION = "session"

# Session id used for the Session partition when none is set in context
DEFAULT_SESSION_ID = "anonymous"

# Handler entries: handler:<id>[:<name>=<value>...]
CACHE_PREFIX_HANDLER = "handler"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Query parameter read by the type coercer
TYPE_PARAM = "type"
