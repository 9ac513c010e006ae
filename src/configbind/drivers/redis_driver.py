"""
Redis driver for DriverDataSource.

Why: Lets a pool configuration address Redis with a plain URL and a flat
     ``dataSource.*`` property bag
How: Credentials become client keyword arguments; every other property is
     appended as a URL query option so redis-py applies its own typed parsers
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import redis

logger = logging.getLogger(__name__)

REDIS_URL_SCHEMES = ("redis://", "rediss://", "unix://")

_CREDENTIAL_KEYS = {"user": "username", "username": "username", "password": "password"}


def _with_query_options(url: str, options: Mapping[str, str]) -> str:
    """Append *options* to the URL query; options already in the URL are kept."""
    if not options:
        return url
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    present = {name for name, _ in query}
    query.extend((name, value) for name, value in options.items() if name not in present)
    return urlunsplit(parts._replace(query=urlencode(query)))


class RedisDriver:
    """Driver producing synchronous ``redis.Redis`` clients."""

    def accepts_url(self, url: str) -> bool:
        return isinstance(url, str) and url.startswith(REDIS_URL_SCHEMES)

    def connect(self, url: str, properties: Mapping[str, str]) -> redis.Redis:
        """
        Build a Redis client for *url*.

        The client connects lazily, on its first command.

        Args:
            url: Redis URL
            properties: Merged driver properties

        Returns:
            Redis client backed by its own connection pool
        """
        credentials: Dict[str, Any] = {}
        options: Dict[str, str] = {}
        for key, value in properties.items():
            if key in _CREDENTIAL_KEYS:
                credentials[_CREDENTIAL_KEYS[key]] = value
            else:
                options[key] = value

        return redis.Redis.from_url(_with_query_options(url, options), **credentials)

    def __repr__(self) -> str:
        return "RedisDriver()"


__all__ = ["REDIS_URL_SCHEMES", "RedisDriver"]
