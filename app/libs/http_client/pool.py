from dataclasses import dataclass

import httpx


@dataclass
class PoolLimits:
    # None leaves the number of simultaneous connections uncapped
    max_connections: int | None = None
    max_keepalive: int = 20
    keepalive_expiry: float = 30.0

    def to_httpx_limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive,
            keepalive_expiry=self.keepalive_expiry,
        )
