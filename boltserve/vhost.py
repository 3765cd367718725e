"""Virtual hosts chosen by the request's Host header."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

_SERVER_NAME_SIZE = 256
_ROOT_SIZE = 512
_INDEX_FILE_SIZE = 64
_LOG_PATH_SIZE = 512


def _fit(value: str | None, size: int) -> str:
    return (value or "")[: size - 1]


@dataclass
class VirtualHost:
    """Settings for one named site."""

    server_name: str = ""
    root: str = ""
    index_file: str = ""
    access_log: str = ""
    error_log: str = ""
    enable_dir_listing: bool = False


class VirtualHostManager:
    """Holds virtual hosts; the first one added is the default."""

    def __init__(self) -> None:
        self._hosts: list[VirtualHost] = []
        self._default: VirtualHost | None = None

    def add(
        self,
        server_name: str | None,
        root: str | None,
        index_file: str | None = None,
        access_log: str | None = None,
        error_log: str | None = None,
        enable_dir_listing: bool = False,
    ) -> VirtualHost:
        """Register a virtual host and return it; later additions match first."""
        vhost = VirtualHost(
            server_name=_fit(server_name, _SERVER_NAME_SIZE),
            root=_fit(root, _ROOT_SIZE),
            index_file=_fit(index_file, _INDEX_FILE_SIZE),
            access_log=_fit(access_log, _LOG_PATH_SIZE),
            error_log=_fit(error_log, _LOG_PATH_SIZE),
            enable_dir_listing=enable_dir_listing,
        )
        self._hosts.insert(0, vhost)
        if self._default is None:
            self._default = vhost
        return vhost

    def find(self, host_header: str | None) -> VirtualHost | None:
        """Return the host named by ``host_header`` (port ignored), else the default."""
        if not host_header:
            return self._default
        host = host_header[: _SERVER_NAME_SIZE - 1].split(":", 1)[0]
        return next(
            (vhost for vhost in self._hosts if vhost.server_name == host),
            self._default,
        )

    def default(self) -> VirtualHost | None:
        """Return the default host, or None when none has been added."""
        return self._default

    @property
    def hosts(self) -> tuple[VirtualHost, ...]:
        """All hosts in match order, newest first."""
        return tuple(self._hosts)

    def __iter__(self) -> Iterator[VirtualHost]:
        return iter(self._hosts)

    def __len__(self) -> int:
        return len(self._hosts)