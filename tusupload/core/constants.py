"""Protocol and chunk-sizing constants."""

TUS_VERSION = '1.0.0'

# Chunk size bounds in bytes
MIN_CHUNK = 64 * 1024        # 64 KB
MAX_CHUNK = 1024 * 1024      # 1 MB
INITIAL_CHUNK = 256 * 1024   # 256 KB

# Latency band (seconds) for adaptive sizing
FAST_THRESHOLD = 0.3
SLOW_THRESHOLD = 0.8

MAX_RETRIES = 3

# Headers
HEADER_TUS_RESUMABLE = 'Tus-Resumable'
HEADER_UPLOAD_LENGTH = 'Upload-Length'
HEADER_UPLOAD_OFFSET = 'Upload-Offset'
HEADER_LOCATION = 'Location'
CONTENT_TYPE_OFFSET_STREAM = 'application/offset+octet-stream'
