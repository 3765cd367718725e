"""Server-wide constants, operation and connection-state enums, alignment helpers."""

from __future__ import annotations

from enum import IntEnum

VERSION_MAJOR = 1
VERSION_MINOR = 0
VERSION_STRING = "1.0.0"
SERVER_NAME = "Bolt/" + VERSION_STRING

# Network
DEFAULT_PORT = 8080
BACKLOG = 1024
MAX_CONNECTIONS = 10000

# Rate limiting
MAX_CONNECTIONS_PER_IP = 10
RATE_LIMIT_TABLE_SIZE = 1024

# Timeouts (milliseconds)
ACCEPT_TIMEOUT = 0
RECV_TIMEOUT = 30000
SEND_TIMEOUT = 30000
KEEPALIVE_TIMEOUT = 60000
REQUEST_TIMEOUT = 5000

# Buffers
RECV_BUFFER_SIZE = 8192
SEND_BUFFER_SIZE = 65536
MAX_REQUEST_SIZE = 16384
MAX_URI_LENGTH = 2048
MAX_PATH_LENGTH = 512
MAX_HEADER_SIZE = 4096

# Initial receive plus room for the local and remote IPv4 addresses.
_SOCKADDR_IN_SIZE = 16
ACCEPT_RECV_BYTES = 1024
ACCEPT_BUFFER_SIZE = ACCEPT_RECV_BYTES + 2 * (_SOCKADDR_IN_SIZE + 16)

# Features
ENABLE_DIR_LISTING = False
ENABLE_FILE_CACHE = True
FILE_CACHE_MAX_ENTRY_SIZE = 48 * 1024
FILE_CACHE_MAX_TOTAL_BYTES = 64 * 1024 * 1024
FILE_CACHE_CAPACITY = 2048

# Thread pool
MIN_THREADS = 2
MAX_THREADS = 64
THREADS_PER_CORE = 2

# File serving
WEB_ROOT = "public"
INDEX_FILE = "index.html"
MAX_FILE_SIZE = 100 * 1024 * 1024

# Memory pool
POOL_BLOCK_SIZE = 4096
POOL_INITIAL_BLOCKS = 256

# Keep-alive
MAX_KEEPALIVE_REQUESTS = 1000

CACHE_LINE_SIZE = 64


class OperationType(IntEnum):
    """Kind of asynchronous operation a completion belongs to."""

    ACCEPT = 0
    RECV = 1
    SEND = 2
    TRANSMIT_FILE = 3
    DISCONNECT = 4


class ConnectionState(IntEnum):
    """Stages in the life of a client connection."""

    ACCEPTING = 0
    READING = 1
    PROCESSING = 2
    SENDING = 3
    SENDING_FILE = 4
    KEEPALIVE = 5
    CLOSING = 6
    CLOSED = 7


def align(size: int, alignment: int) -> int:
    """Round ``size`` up to a multiple of ``alignment`` (a power of two)."""
    return (size + alignment - 1) & ~(alignment - 1)


def cache_align(size: int) -> int:
    """Round ``size`` up to a whole number of cache lines."""
    return align(size, CACHE_LINE_SIZE)