import json
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    json_body: Any = None
    form: dict[str, str] | None = None
    timeout: float = 30.0

    def with_defaults(self, headers: dict[str, str]) -> "Request":
        """Fill in headers the request does not already set (case-insensitive)."""
        present = {k.lower() for k in self.headers}
        missing = {k: v for k, v in headers.items() if k.lower() not in present}
        return replace(self, headers={**missing, **self.headers})


@dataclass(frozen=True)
class Response:
    status_code: int
    reason_phrase: str
    headers: dict[str, str]
    text: str
    latency_ms: float
    request: Request

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.text)

    def json_or_none(self) -> Any:
        """Parsed body, or None when the body is not JSON."""
        try:
            return self.json()
        except ValueError:
            return None
