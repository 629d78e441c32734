"""Конфигурация search_sync.

Загружает настройки из (в порядке приоритета):
1. Явные аргументы (kwargs)
2. Environment variables (SEARCH_SYNC_*)
3. .env в текущей директории
4. search_sync.toml в текущей или родительских директориях
5. Default values

Классы:
    SyncConfig
        Pydantic Settings с поддержкой TOML и env variables.
    TomlSettingsSource
        Источник настроек pydantic-settings из search_sync.toml.

Функции:
    get_config
        Получить конфигурацию (с кэшированием) с возможными override'ами.
    reset_config
        Сбросить кэшированную конфигурацию.
    find_config_file
        Найти search_sync.toml в текущей или родительских директориях.
    load_toml
        Прочитать search_sync.toml в плоский словарь полей.
    create_client
        Создать клиент Elasticsearch из конфигурации.
    configure_logging
        Применить log_level/log_file к системе логирования.

Example:
    >>> from search_sync.config import get_config, create_client
    >>>
    >>> config = get_config(default_index="blog")
    >>> client = create_client(config)
"""

import tomllib
from pathlib import Path
from typing import Any, Optional

from elasticsearch import Elasticsearch
from pydantic import Field, field_validator, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from search_sync.domain.binding import DEFAULT_INDEX_NAME
from search_sync.utils.logger import LoggingConfig, get_logger, setup_logging
from search_sync.utils.logger.config import LogLevel

logger = get_logger(__name__)

CONFIG_FILE_NAME = "search_sync.toml"

# Хост по умолчанию, если в конфигурации клиента не указаны hosts/cloud_id
DEFAULT_HOSTS: list[str] = ["http://localhost:9200"]


# Секция TOML -> {ключ секции: поле SyncConfig}
TOML_SECTIONS: dict[str, dict[str, str]] = {
    "elasticsearch": {"default_index": "default_index", "client": "client"},
    "sync": {"enabled": "sync_enabled"},
    "logging": {"level": "log_level", "file": "log_file"},
}

# Сколько родительских директорий просматривать в поисках search_sync.toml
CONFIG_SEARCH_DEPTH = 10


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """search_sync.toml в start_dir (по умолчанию cwd) или выше по дереву."""
    start = (start_dir or Path.cwd()).resolve()
    for directory in [start, *start.parents][:CONFIG_SEARCH_DEPTH]:
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def load_toml(path: Path) -> dict[str, Any]:
    """Читает search_sync.toml в плоский словарь полей SyncConfig.

    [elasticsearch]
    default_index = "blog"

    [elasticsearch.client]
    hosts = ["http://localhost:9200"]

    [sync]
    enabled = false

    Поля можно задать и на верхнем уровне файла (sync_enabled = false),
    они важнее секций. Ошибка разбора TOML пробрасывается как есть.
    """
    raw = tomllib.loads(path.read_text(encoding="utf-8"))

    values: dict[str, Any] = {}
    for section_name, fields in TOML_SECTIONS.items():
        section = raw.get(section_name, {})
        values.update({field: section[key] for key, field in fields.items() if key in section})

    top_level = SyncConfig.model_fields.keys() & raw.keys()
    values.update({name: raw[name] for name in top_level})
    return values


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Источник настроек из search_sync.toml."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path):
        super().__init__(settings_cls)
        self.path = path
        self._data = load_toml(path)
        logger.debug("Loaded config from TOML", path=str(path))

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class SyncConfig(BaseSettings):
    """Конфигурация синхронизации моделей с Elasticsearch.

    Attributes:
        default_index: Имя индекса для моделей без явного index_name.
        client: Аргументы конструктора Elasticsearch (hosts, basic_auth,
            api_key, request_timeout, ...). Пустой словарь: дефолты клиента.
        sync_enabled: Синхронизировать индекс при save()/delete_instance().
        log_level: Уровень логирования.
        log_file: Путь к файлу логов.

    Environment Variables:
        SEARCH_SYNC_DEFAULT_INDEX: Имя индекса по умолчанию.
        SEARCH_SYNC_CLIENT: JSON с аргументами клиента.
        SEARCH_SYNC_CLIENT__HOSTS: Вложенное значение клиента.
        SEARCH_SYNC_SYNC_ENABLED: true/false.
        SEARCH_SYNC_LOG_LEVEL: Уровень логов.
    """

    default_index: str = Field(
        default=DEFAULT_INDEX_NAME,
        min_length=1,
        description="Имя индекса по умолчанию",
    )

    client: dict[str, Any] = Field(
        default_factory=dict,
        description="Аргументы конструктора Elasticsearch",
    )

    sync_enabled: bool = Field(
        default=True,
        description="Синхронизировать индекс по событиям ORM",
    )

    log_level: LogLevel = Field(
        default="INFO",
        description="Уровень логирования",
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Путь к файлу логов (None = только консоль)",
    )

    @field_validator("default_index", mode="before")
    @classmethod
    def normalize_index_name(cls, v: Any) -> Any:
        """Имена индексов Elasticsearch: только в нижнем регистре."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Optional[Path]:
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @model_validator(mode="after")
    def log_config_source(self) -> "SyncConfig":
        logger.debug(
            "Config loaded",
            default_index=self.default_index,
            sync_enabled=self.sync_enabled,
            has_client_config=bool(self.client),
        )
        return self

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_SYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Добавляет search_sync.toml как источник с низшим приоритетом."""
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
        ]
        toml_path = find_config_file()
        if toml_path:
            sources.append(TomlSettingsSource(settings_cls, toml_path))
        return tuple(sources)

    def client_kwargs(self) -> dict[str, Any]:
        """Аргументы для Elasticsearch(...), с хостом по умолчанию."""
        kwargs = dict(self.client)
        if not any(key in kwargs for key in ("hosts", "cloud_id")):
            kwargs["hosts"] = list(DEFAULT_HOSTS)
        return kwargs


_config: Optional[SyncConfig] = None


def get_config(**overrides: Any) -> SyncConfig:
    """Получить конфигурацию.

    Без аргументов возвращает закэшированный экземпляр. С override'ами
    создаёт новый экземпляр и не трогает кэш.

    Args:
        **overrides: Значения полей SyncConfig.
    """
    global _config

    if overrides:
        return SyncConfig(**overrides)

    if _config is None:
        _config = SyncConfig()
    return _config


def reset_config() -> None:
    """Сбрасывает кэшированную конфигурацию (для тестов)."""
    global _config
    _config = None


def create_client(config: Optional[SyncConfig] = None) -> Elasticsearch:
    """Создаёт клиент Elasticsearch из конфигурации.

    Args:
        config: Конфигурация (по умолчанию get_config()).

    Returns:
        Клиент Elasticsearch.
    """
    config = config or get_config()
    kwargs = config.client_kwargs()
    logger.debug("Creating Elasticsearch client", hosts=kwargs.get("hosts"))
    return Elasticsearch(**kwargs)


def configure_logging(config: Optional[SyncConfig] = None) -> None:
    """Применяет log_level и log_file из конфигурации к логированию.

    Args:
        config: Конфигурация (по умолчанию get_config()).
    """
    config = config or get_config()
    setup_logging(LoggingConfig(level=config.log_level, file=config.log_file))
