from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

UNNAMED = "Unnamed"


class RequestSpec(BaseModel):
    name: str | None = Field(default=None, description="显示名称")
    url: str = Field(..., description="请求 URL")
    method: str = Field(..., description="HTTP 方法, 不区分大小写")
    headers: dict[str, str] | None = None
    params: dict[str, str] | None = None
    # any JSON value, sent as-is
    body: Any = None
    form: dict[str, str] | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def display_name(self) -> str:
        return self.name or UNNAMED


class RequestResult(BaseModel):
    name: str
    url: str
    method: str
    status_code: int | None = None
    status_text: str | None = None
    success: bool = False
    response_time_ms: float = 0.0
    response_body: Any = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)


class TestSummary(BaseModel):
    __test__: ClassVar[bool] = False

    total: int
    success: int
    failed: int
    success_rate: float
    results: list[RequestResult]

    model_config = ConfigDict(frozen=True)

    @property
    def failed_names(self) -> list[str]:
        return [r.name for r in self.results if not r.success]
