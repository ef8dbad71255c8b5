"""Configuration models and loading logic."""

from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from proj_health.messages import Locale
from proj_health.models import FileCheckSpec, PropertyLabel

DEFAULT_SETTINGS_FILE = Path("configs/settings.yaml")
SETTINGS_FILE_ENV = "PROJ_HEALTH_SETTINGS_FILE"

_TEST_DIR = "app/src/test/java/com/exercisetracker"
_MAIN_DIR = "app/src/main/java/com/exercisetracker"


class ProjectConfig(BaseModel):
    """Display name of the checked project, optionally per locale."""

    name: str = "Exercise Tracker"
    localized_names: dict[str, str] = Field(default_factory=lambda: {"zh": "运动记录应用"})

    def name_for(self, locale: str) -> str:
        return self.localized_names.get(locale, self.name)


class PathsConfig(BaseModel):
    """Where the checked project tree lives."""

    project_root: Path = Path(".")

    def resolved(self, base: Path) -> "PathsConfig":
        """Return a copy with a relative project root resolved against base."""

        root = self.project_root if self.project_root.is_absolute() else (base / self.project_root).resolve()
        return self.model_copy(update={"project_root": root})


class PropertyConfig(BaseModel):
    """One property-test label per locale plus where its assertion text lives."""

    labels: dict[str, str] = Field(min_length=1)
    file: str | None = None
    marker: str | None = None
    markers: list[str] = Field(default_factory=list)

    def required_markers(self) -> tuple[str, ...]:
        """Return ``marker`` followed by ``markers``, without duplicates."""

        combined = ([self.marker] if self.marker else []) + self.markers
        return tuple(dict.fromkeys(combined))

    def label_for(self, locale: str) -> str:
        """Return the label for locale, falling back to English, then to any label."""

        if locale in self.labels:
            return self.labels[locale]
        if "en" in self.labels:
            return self.labels["en"]
        return next(iter(self.labels.values()))

    def to_label(self, locale: str) -> PropertyLabel:
        return PropertyLabel(label=self.label_for(locale), file=self.file, markers=self.required_markers())


def _default_properties() -> list[PropertyConfig]:
    return [
        PropertyConfig(
            labels={"en": "Property 1: Calendar display accuracy", "zh": "Property 1: 日历显示信息准确性"},
            file=f"{_TEST_DIR}/MainActivityTest.kt",
            marker="Property 1:",
        ),
        PropertyConfig(
            labels={"en": "Property 2: Date click interaction consistency", "zh": "Property 2: 日期点击交互一致性"},
            file=f"{_TEST_DIR}/MainActivityTest.kt",
            marker="Property 2:",
        ),
        PropertyConfig(
            labels={"en": "Property 3: Exercise record creation integrity", "zh": "Property 3: 运动记录创建完整性"},
            file=f"{_TEST_DIR}/ExerciseRecordManagerTest.kt",
            marker="Property 3:",
        ),
        PropertyConfig(
            labels={"en": "Property 4: Data persistence round-trip consistency", "zh": "Property 4: 数据持久化往返一致性"},
            file=f"{_TEST_DIR}/FileStorageTest.kt",
            marker="Property 4:",
        ),
        PropertyConfig(
            labels={"en": "Property 5: Notification time accuracy", "zh": "Property 5: 通知时间精确性"},
            file=f"{_TEST_DIR}/NotificationManagerTest.kt",
            marker="Property 5:",
        ),
        PropertyConfig(
            labels={"en": "Property 6: Record immutability guarantee", "zh": "Property 6: 记录不可变性保证"},
            file=f"{_TEST_DIR}/MainActivityTest.kt",
            marker="Property 6:",
        ),
    ]


class ChecklistConfig(BaseModel):
    """Expected paths per category, in report order."""

    test_files: list[str] = Field(
        default_factory=lambda: [
            f"{_TEST_DIR}/FileStorageTest.kt",
            f"{_TEST_DIR}/ExerciseRecordManagerTest.kt",
            f"{_TEST_DIR}/MainActivityTest.kt",
            f"{_TEST_DIR}/NotificationManagerTest.kt",
            f"{_TEST_DIR}/ExerciseDialogTest.kt",
            f"{_TEST_DIR}/NotificationReceiverTest.kt",
            f"{_TEST_DIR}/SystemIntegrationTest.kt",
            f"{_TEST_DIR}/EndToEndIntegrationTest.kt",
        ]
    )
    source_files: list[str] = Field(
        default_factory=lambda: [
            f"{_MAIN_DIR}/MainActivity.kt",
            f"{_MAIN_DIR}/ExerciseRecord.kt",
            f"{_MAIN_DIR}/ExerciseRecordManager.kt",
            f"{_MAIN_DIR}/FileStorage.kt",
            f"{_MAIN_DIR}/ExerciseDialog.kt",
            f"{_MAIN_DIR}/NotificationManager.kt",
            f"{_MAIN_DIR}/NotificationReceiver.kt",
        ]
    )
    build_files: list[str] = Field(
        default_factory=lambda: ["app/build.gradle", "settings.gradle", "gradle.properties"]
    )
    wrapper_files: list[str] = Field(default_factory=lambda: ["gradlew", "gradlew.bat"])
    properties: list[PropertyConfig] = Field(default_factory=_default_properties)

    def spec_for(self, group: Literal["test_files", "source_files", "build_files", "wrapper_files"]) -> FileCheckSpec:
        return FileCheckSpec(name=group, paths=tuple(getattr(self, group)))

    def property_labels(self, locale: str) -> list[PropertyLabel]:
        return [prop.to_label(locale) for prop in self.properties]


class ReportConfig(BaseModel):
    """Report rendering and exit-code behavior."""

    locale: Locale = "en"
    property_mode: Literal["static", "inspect"] = "static"
    strict: bool = False
    output_format: Literal["text", "json"] = "text"


class AppSettings(BaseSettings):
    """Top-level application settings."""

    _yaml_file_override: ClassVar[Path | None] = None

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    checklist: ChecklistConfig = Field(default_factory=ChecklistConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)

    model_config = SettingsConfigDict(
        env_prefix="PROJ_HEALTH_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
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
        """Use YAML defaults while allowing env vars to override values."""

        yaml_file = resolve_settings_file(cls._yaml_file_override)
        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def as_dict(self) -> dict[str, object]:
        """Return settings as a standard nested dictionary."""

        return self.model_dump(mode="json")


def find_config_root(start: Path | None = None) -> Path:
    """Locate the nearest directory holding configs/settings.yaml, walking upward."""

    current = (start or Path.cwd()).resolve()
    for candidate in (current, *current.parents):
        if (candidate / DEFAULT_SETTINGS_FILE).exists():
            return candidate
    return current


def resolve_settings_file(override: Path | None = None) -> Path:
    """Resolve settings file from explicit override, env var, or default."""

    chosen = override
    if chosen is None:
        env_value = os.getenv(SETTINGS_FILE_ENV)
        if env_value:
            chosen = Path(env_value)
    if chosen is None:
        chosen = DEFAULT_SETTINGS_FILE

    if not chosen.is_absolute():
        chosen = (find_config_root() / chosen).resolve()
    return chosen


def load_settings(config_file: Path | None = None) -> AppSettings:
    """Load settings with YAML defaults and environment variable overrides.

    A relative ``paths.project_root`` is resolved against the working
    directory, not the settings file, so the tool checks whatever tree it is
    run from.
    """

    settings_file = resolve_settings_file(config_file)
    AppSettings._yaml_file_override = settings_file
    try:
        settings = AppSettings()
    finally:
        AppSettings._yaml_file_override = None
    resolved_paths = settings.paths.resolved(base=Path.cwd())
    return settings.model_copy(update={"paths": resolved_paths})
