"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sassyflow.core.config.loader import ConfigLoader

# Looked up in the working directory by Settings.load()
DEFAULT_CONFIG_FILE = Path("sassyflow.yaml")


class CompileSettings(BaseSettings):
    """Options read once per compile decision.

    Frozen: the pipeline only ever reads a snapshot, so concurrent builds
    can share one instance.
    """

    model_config = SettingsConfigDict(
        env_prefix="SASSYFLOW_COMPILE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    generate_css_on_save: bool = Field(
        default=True,
        description="Compile stylesheets when they are saved",
    )
    generate_minified_css_on_save: bool = Field(
        default=False,
        description="Write a .min.css file next to the generated css",
    )
    include_css_in_project: bool = Field(
        default=True,
        description="Nest generated files under their source in the project",
    )
    include_css_in_project_output: bool = Field(
        default=False,
        description="Register nested files as content instead of none",
    )
    css_output_directory: Path | None = Field(
        default=None,
        description="Directory to write generated css into (relative to the source)",
    )
    replace_css_with_exception: bool = Field(
        default=True,
        description="Replace output with an error comment when compilation fails",
    )
    ruby_install_path: Path | None = Field(
        default=None,
        description="Ruby install root containing bin/sass",
    )
    include_source_comments: bool = Field(
        default=False,
        description="Emit source line comments in generated css",
    )
    debug_logging: bool = Field(
        default=False,
        description="Trace every pipeline decision",
    )

    @field_validator("css_output_directory", "ruby_install_path", mode="before")
    @classmethod
    def validate_optional_path(cls, v: str | Path | None) -> Path | None:
        """Treat blank paths as unset."""
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return Path(v)

    @property
    def has_output_directory(self) -> bool:
        """Whether generated css is redirected away from its source."""
        return self.css_output_directory is not None


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="SASSYFLOW_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SASSYFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    compile: CompileSettings = Field(default_factory=CompileSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.
        """
        loader = ConfigLoader(path)
        loader.load()

        return cls(
            compile=CompileSettings(**loader.get_section("compile")),
            logging=LoggingSettings(**loader.get_section("logging")),
        )

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from default locations.

        Priority: explicit file > sassyflow.yaml > environment / .env > defaults

        Returns:
            Settings instance.
        """
        if path is not None:
            return cls.from_yaml(path)
        if DEFAULT_CONFIG_FILE.exists():
            return cls.from_yaml(DEFAULT_CONFIG_FILE)
        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
