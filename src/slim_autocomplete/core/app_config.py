"""Central application configuration loaded from YAML."""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from slim_autocomplete.core.config import get_settings
from slim_autocomplete.core.yaml_loader import load_yaml_config

logger = logging.getLogger(__name__)

# Names every class inherits from ``object`` plus the Slim lifecycle hook.
# They are only listed when a fixture class defines them itself.
DEFAULT_IGNORED_METHODS: tuple[str, ...] = (
    "__eq__",
    "__hash__",
    "__str__",
    "__repr__",
    "__format__",
    "__init_subclass__",
    "__subclasshook__",
    "around_slim_invoke",
)


class IntrospectionConfig(BaseModel):
    """Configuration for fixture class introspection."""

    catalog: str = "module"
    recursive: bool = False
    ignored_methods: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_METHODS))

    model_config = {"frozen": True}


class DocumentationConfig(BaseModel):
    """Configuration for the stored fixture documentation lookup."""

    enabled: bool = True
    search_dirs: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class DeclarationsConfig(BaseModel):
    """First-cell keywords that identify declaration tables (case-insensitive)."""

    import_keywords: list[str] = Field(default_factory=lambda: ["import"])
    library_keywords: list[str] = Field(default_factory=lambda: ["library"])
    scenario_keywords: list[str] = Field(
        default_factory=lambda: ["scenario", "looping scenario", "conditional scenario"]
    )
    table_template_keywords: list[str] = Field(default_factory=lambda: ["table template"])

    model_config = {"frozen": True}

    @field_validator(
        "import_keywords",
        "library_keywords",
        "scenario_keywords",
        "table_template_keywords",
    )
    @classmethod
    def lowercase_keywords(cls, v: list[str]) -> list[str]:
        """Keywords are matched against lower-cased cell text."""
        return [keyword.strip().lower() for keyword in v if keyword.strip()]

    @model_validator(mode="after")
    def validate_disjoint(self) -> "DeclarationsConfig":
        """A keyword may only identify one kind of table."""
        seen: dict[str, str] = {}
        errors: list[str] = []
        for kind in ("import", "library", "scenario", "table_template"):
            for keyword in getattr(self, f"{kind}_keywords"):
                if keyword in seen:
                    errors.append(f"Keyword '{keyword}' used for both {seen[keyword]} and {kind}")
                seen[keyword] = kind
        if errors:
            raise ValueError("\n".join(errors))
        return self


class AppConfig(BaseModel):
    """Central application configuration loaded from YAML."""

    classpath: list[str] = Field(default_factory=list)
    introspection: IntrospectionConfig = Field(default_factory=IntrospectionConfig)
    documentation: DocumentationConfig = Field(default_factory=DocumentationConfig)
    declarations: DeclarationsConfig = Field(default_factory=DeclarationsConfig)

    model_config = {"frozen": True}


@lru_cache(maxsize=1)
def load_app_config(config_path: Path | None = None) -> AppConfig:
    """Load application configuration from YAML file.

    Args:
        config_path: Path to YAML config file. If None, uses the path from settings.

    Returns:
        Validated AppConfig instance

    Note:
        A missing file yields the defaults, so the service runs without any
        configuration in development.
    """
    if config_path is None:
        config_path = Path(get_settings().app_config_path)

    try:
        raw_config = load_yaml_config(config_path)
        return AppConfig.model_validate(raw_config)
    except Exception as e:
        logger.error("Failed to load configuration from %s: %s", config_path, e)
        raise


def get_app_config() -> AppConfig:
    """Get the cached application configuration."""
    return load_app_config()


def clear_config_cache() -> None:
    """Clear the configuration cache (useful for testing and hot reload)."""
    load_app_config.cache_clear()
