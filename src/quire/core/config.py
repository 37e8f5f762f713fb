import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from quire.core.exceptions import ConfigError

CONFIG_FILENAME = ".quire.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class SiteSettings(BaseModel):
    """Channel metadata shared by pages and the feed."""

    title: str = Field(default="JustSteveKing", description="Site title")
    description: str = Field(
        default=(
            "Welcome to my website, the realm of the API Guy. Led by a seasoned Consultant CTO, "
            "Software Engineer, Developer Advocate, and renowned Conference Speaker."
        ),
        description="Site description",
    )
    url: str = Field(default="https://www.juststeveking.uk", description="Absolute site URL")
    language: str = Field(default="en-us", description="Feed language code")


class PathsSettings(BaseModel):
    """Path configuration.

    All paths are relative to the 'site_root' unless absolute.
    site_root defaults to current working directory.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the site (defaults to current working directory)",
    )
    content_dirs: list[Path] = Field(
        default_factory=lambda: [Path("src/content")],
        description="Content roots, each holding one directory per collection",
    )
    output_dir: Path = Field(default=Path("dist"), description="Build output directory")

    @property
    def abs_content_dirs(self) -> list[Path]:
        return [self._resolve(path) for path in self.content_dirs]

    @property
    def abs_output_dir(self) -> Path:
        return self._resolve(self.output_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class RouteSettings(BaseModel):
    """URL prefixes of the routed collections."""

    posts: str = Field(default="articles", description="Prefix for post pages")
    talks: str = Field(default="talks", description="Prefix for talk pages")
    feed: str = Field(default="rss.xml", description="Feed path relative to the output directory")

    def prefixes(self) -> dict[str, str]:
        return {"posts": self.posts, "talks": self.talks}

    def prefix_for(self, collection: str) -> str:
        return self.prefixes().get(collection, collection)


class QuireConfig(BaseSettings):
    """Root configuration for a Quire build.

    Supports environment variable overrides with the pattern:
    QUIRE_SECTION__KEY (e.g., QUIRE_SITE__URL)
    """

    site: SiteSettings = Field(default_factory=SiteSettings)
    paths: PathsSettings = Field(default_factory=PathsSettings)
    routes: RouteSettings = Field(default_factory=RouteSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="QUIRE_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> "QuireConfig":
        """Loads configuration from .quire.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (QUIRE_SECTION__KEY)
        2. Config file (.quire.toml)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open("rb") as f:
                    file_settings = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(config_file, exc) from exc

        try:
            env_settings = cls().model_dump(exclude_unset=True)
            merged_config = _deep_merge(file_settings, env_settings)
            merged_config.setdefault("paths", {})["site_root"] = root_path
            return cls.model_validate(merged_config)
        except ValidationError as exc:
            raise ConfigError(config_file, exc) from exc
