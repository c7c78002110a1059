"""astro-scaffold configuration.

Typed settings shared by the generator, the workspace discovery and the CLI.
Pydantic v2 validates values at construction time and handles JSON
round-tripping; ``from_env`` layers ``ASTRO_SCAFFOLD_*`` variables on top of
the defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from .errors import InvalidRequestError

DEFAULT_IGNORED_DIRS: list[str] = ["node_modules", "dist", ".git", ".nx", ".astro"]

_TRUTHY = {"1", "true", "yes", "on"}


class ScaffoldConfig(BaseModel):
    """Global astro-scaffold configuration.

    Instances are created once by the CLI (or by a test) and passed to the
    workspace and generator.
    """

    workspace_root: Path = Field(default=Path("."), description="Monorepo root directory")
    src_dir: str = Field(
        default="src", min_length=1, description="Source directory used when a project has no sourceRoot"
    )
    verbose: bool = Field(default=False)
    page_default_format: Literal["astro", "detect"] = Field(
        default="astro",
        description="'astro' always creates .astro pages; 'detect' follows the content format",
    )
    component_style: Literal["none", "scoped", "global"] = Field(default="scoped")
    template_dir: Path | None = Field(
        default=None, description="Directory of .j2 templates overriding the bundled ones"
    )
    ignored_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_DIRS))

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def config_path(self) -> Path:
        """Default location of the persisted configuration file."""
        return self.workspace_root / ".astro-scaffold.json"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to ``<workspace_root>/.astro-scaffold.json``.

        Returns:
            The path where the file was written.
        """
        target = path or self.config_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            ASTRO_SCAFFOLD_WORKSPACE, ASTRO_SCAFFOLD_VERBOSE,
            ASTRO_SCAFFOLD_PAGE_FORMAT, ASTRO_SCAFFOLD_COMPONENT_STYLE,
            ASTRO_SCAFFOLD_TEMPLATE_DIR.

        Keyword *overrides* win over the environment; ``None`` values are
        ignored so CLI flags that were not given fall through.

        Raises:
            InvalidRequestError: If a value does not validate.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("ASTRO_SCAFFOLD_WORKSPACE"):
            kwargs["workspace_root"] = Path(os.environ["ASTRO_SCAFFOLD_WORKSPACE"])
        if os.environ.get("ASTRO_SCAFFOLD_VERBOSE"):
            kwargs["verbose"] = os.environ["ASTRO_SCAFFOLD_VERBOSE"].strip().lower() in _TRUTHY
        if os.environ.get("ASTRO_SCAFFOLD_PAGE_FORMAT"):
            kwargs["page_default_format"] = os.environ["ASTRO_SCAFFOLD_PAGE_FORMAT"].strip()
        if os.environ.get("ASTRO_SCAFFOLD_COMPONENT_STYLE"):
            kwargs["component_style"] = os.environ["ASTRO_SCAFFOLD_COMPONENT_STYLE"].strip()
        if os.environ.get("ASTRO_SCAFFOLD_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["ASTRO_SCAFFOLD_TEMPLATE_DIR"])

        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "config"
            raise InvalidRequestError(f"Invalid configuration: {field}: {first['msg']}") from exc
