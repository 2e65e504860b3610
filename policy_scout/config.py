"""
Модуль для загрузки и валидации конфигурации PolicyScout.
Используется Pydantic для описания схемы и проверки данных.

The environment is consulted exactly once, in :func:`load_config`; every other
module receives a ready :class:`ScoutConfig`.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ("ScoutConfig", "load_config", "SEARCH_API_KEY_ENV")

SEARCH_API_KEY_ENV = "BRAVE_API_KEY"
BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"
WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]
DESKTOP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119.0.0.0 Safari/537.36"
)


class ScoutConfig(BaseModel):
    """Конфигурация одного запуска поиска политики."""
    model_config = ConfigDict(extra="forbid")

    # traversal
    max_pages: int = Field(10, ge=1, description="Жесткий лимит по числу страниц за один обход.")
    min_content_chars: int = Field(
        200, ge=0, description="Минимальная длина текста, иначе повтор с медленным ожиданием."
    )
    dedup_content: bool = Field(False, description="Отбрасывать страницы с уже виденным текстом.")
    blocked_link_markers: List[str] = Field(
        default_factory=list,
        description="Подстроки href, при наличии которых ссылка не используется.",
    )

    # rendering
    renderer: Literal["browser", "http"] = Field("browser", description="Способ загрузки страниц.")
    headless: bool = True
    user_agent: str = Field(DESKTOP_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    viewport_width: int = Field(1366, gt=0)
    viewport_height: int = Field(768, gt=0)
    fast_wait: WaitUntil = Field("domcontentloaded", description="Условие готовности быстрой загрузки.")
    fast_timeout: float = Field(15.0, gt=0, description="Таймаут быстрой загрузки (секунд).")
    slow_wait: WaitUntil = Field("networkidle", description="Условие готовности медленной загрузки.")
    slow_timeout: float = Field(30.0, gt=0, description="Таймаут медленной загрузки (секунд).")

    # search fallback
    search_api_key: Optional[str] = Field(None, description="Ключ Brave Search API.")
    search_endpoint: str = Field(BRAVE_SEARCH_URL, min_length=1)
    search_count: int = Field(1, ge=1, le=3, description="Сколько результатов запрашивать.")
    search_timeout: float = Field(10.0, gt=0)

    # persistence / ingress
    cache_dir: Path = Field(Path("policies"), description="Каталог кэша текстов политик.")
    server_host: str = "127.0.0.1"
    server_port: int = Field(3000, ge=1, le=65535)

    @field_validator("search_api_key", mode="before")
    def _blank_key_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("blocked_link_markers")
    def _drop_empty_markers(cls, v: List[str]) -> List[str]:
        return [m for m in v if m]


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(
    path: Union[str, Path, None] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ScoutConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ScoutConfig.

    Без пути используется ``configs/default.yaml``, если он существует, иначе
    значения по умолчанию. Явно указанный, но отсутствующий файл даёт
    FileNotFoundError. ``BRAVE_API_KEY`` из окружения подставляется, только
    если ключ не задан в файле.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    environ = os.environ if env is None else env
    if not data.get("search_api_key") and environ.get(SEARCH_API_KEY_ENV):
        data["search_api_key"] = environ[SEARCH_API_KEY_ENV]

    return ScoutConfig(**data)


def _read_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path)
    if suffix == ".json":
        return _read_json(path)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")
