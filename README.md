# boltserve

This package gives you the building blocks for a small static-file HTTP server. It uses only the standard library.

## Modules

### `boltserve.utils`: request paths and file metadata

- `url_decode(text)` decodes `%XX` escapes and turns `+` into a space.
- `sanitize_path(uri, web_root=None)` maps a request URI to a path under `web_root`. If `web_root` is not given, it uses `constants.WEB_ROOT` (`"public"`). For `""` and `"/"` it returns the root itself. It raises `UnsafePathError`, a subclass of `ValueError`, in these cases:
  - the path contains `..` or an encoded `%2e%2e`;
  - the path contains `//` or `\\`;
  - the path contains a `%00` or a decoded null byte;
  - a path component is a reserved device name, such as `CON`, `PRN`, `AUX`, `NUL`, `COM1`–`COM9` or `LPT1`–`LPT9`. The check ignores case and also catches these names with an extension, such as `CON.txt`;
  - the path contains a character other than letters, digits, `-`, `_`, `.`, space and separators. This rejects `:` too, so drive letters and `file:stream` names are refused;
  - the path starts with a dot, which marks a hidden file;
  - the path is 512 characters or longer.

  It raises `TypeError` if `uri` is not a string.
- `get_file_info(path)` returns a frozen `FileInfo` with the fields `exists`, `is_directory`, `size` and `mtime`. A missing path gives a `FileInfo` with `exists` set to false.
- `get_extension(path)` returns the extension of the last path component, without the dot. It returns `""` when there is none, and also for names such as `.gitignore`.
- `format_size(size)` returns a readable size, such as `"512 B"` or `"1.5 KB"`. The units go up to TB.
- `format_http_date(timestamp)` formats a Unix time as an HTTP date, for example `"Sun, 06 Nov 1994 08:49:37 GMT"`. It returns `""` if the time is out of range.
- `generate_etag(info)` builds a quoted ETag from a file's size and mtime in hex, for example `"d-5f5e1000"`.

### `boltserve.vhost`: virtual hosts

`VirtualHostManager.add(server_name, root, index_file=None, access_log=None, error_log=None, enable_dir_listing=False)` registers a `VirtualHost` and returns it.

`find(host_header)` drops any `:port` from the header and returns the host with that name. If no host matches, or the header is empty, it returns the default host. The first host you add becomes the default, and `default()` returns it. When two hosts have the same name, the one added later matches first.

A manager can be iterated, and it supports `len()` and the `hosts` property.

### `boltserve.threadpool`: worker pool

`ThreadPool(handler, num_workers=None, on_error=None)` starts worker threads. The workers take items from a shared queue and call `handler(worker, item)` for each one.

- If you do not give `num_workers`, the pool starts `get_cpu_count() * 2` threads, kept between 2 and 64.
- If the handler raises an exception, the pool passes it to `on_error(worker, item, exc)`, or logs it when there is no `on_error`. The worker then carries on with the next item.

Pool methods:

- `submit(item)` queues an item. It raises `RuntimeError` once the pool has been shut down.
- `join()` waits until every queued item has been handled.
- `shutdown(timeout=5.0)` stops the workers. The context manager calls it on exit.
- `stats()` adds up the counters of all workers into a `PoolStats`.

Each `Worker` counts only what the handler records on it, through `record_request()`, `record_sent(n)` and `record_received(n)`. A negative count raises `ValueError`.

### `boltserve.constants`

This module holds the server limits and defaults, such as `DEFAULT_PORT`, `MAX_PATH_LENGTH`, `WEB_ROOT` and `SERVER_NAME`. It also has the `OperationType` and `ConnectionState` enums and the `align(size, alignment)` and `cache_align(size)` helpers.

## Install

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from boltserve.utils import sanitize_path, UnsafePathError, get_extension
from boltserve.vhost import VirtualHostManager

hosts = VirtualHostManager()
hosts.add("example.com", "sites/example", "index.html")

host = hosts.find("example.com:8080")
try:
    path = sanitize_path("/css/site%20main.css", host.root)
except UnsafePathError:
    path = None

print(path, get_extension("site main.css"))
```

```python
from boltserve.threadpool import ThreadPool

def handle(worker, item):
    worker.record_request()
    worker.record_sent(len(item))

with ThreadPool(handle, num_workers=4) as pool:
    for item in ("a", "bb", "ccc"):
        pool.submit(item)
    pool.join()
    print(pool.stats())  # PoolStats(total_requests=3, bytes_sent=6, bytes_received=0)
```

## What this package does not do

This package is a set of components, not a running server. It provides none of the following:

- a listening socket;
- HTTP request parsing or response writing;
- MIME type lookup;
- caching;
- TLS;
- a command-line program.

To serve files, your own code has to connect these components to a network layer.