import logging
from collections.abc import Mapping
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from exceptions import SpecFileError, SpecParseError
from libs.template import resolve_placeholders
from schemas.batch import RequestSpec

logger = logging.getLogger(__name__)

_SPEC_LIST = TypeAdapter(list[RequestSpec])


def read_spec_file(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SpecFileError(f"Unable to read request file {path}: {e}") from e


def parse_specs(text: str) -> list[RequestSpec]:
    """
    Parse resolved request file text.

    Raises:
        SpecParseError: the text is not a JSON array of request objects
    """
    try:
        return _SPEC_LIST.validate_json(text)
    except ValidationError as e:
        raise SpecParseError(f"Invalid request file: {e}") from e


def load_specs(path: str | Path, env: Mapping[str, str]) -> list[RequestSpec]:
    """读取请求文件, 替换环境变量占位符后解析"""
    text = resolve_placeholders(read_spec_file(path), env)
    specs = parse_specs(text)
    logger.info(f"Loaded {len(specs)} request(s) from {path}")
    return specs
