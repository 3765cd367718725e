"""Static-file HTTP server components: path safety, file metadata, virtual hosts and a worker pool."""

__version__ = "1.0.0"
__all__ = ["constants", "utils", "vhost", "threadpool"]