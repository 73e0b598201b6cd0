"""Resolution configuration - the immutable inputs of a build invocation.

The build orchestration layer emits one record per bundling run:

```yaml
workspace_name: angular
root_dir: bazel-out/k8-fastbuild/bin
module_mappings:
  "@angular/core": angular/packages/core/index.d.ts
  "@angular/common": angular/packages/common
node_modules_root: external/npm/node_modules
```

The camelCase spellings (``workspaceName``, ``rootDir``, ``moduleMappings``,
``nodeModulesRoot``) are accepted as well. Keys used only by the rest of the
bundler configuration (banner file, stamp data, downlevel flag, externals)
are ignored.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError
from pydantic import field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "BUNDLE_RESOLVER_CONFIG"


class ResolutionConfig(BaseModel):
    """Immutable resolution configuration.

    Attributes:
        workspace_name: Name of the enclosing workspace
        root_dir: Directory (relative to the base directory) holding all physical module files
        module_mappings: Ordered (prefix, target) pairs; order decides precedence
        node_modules_root: Package root handed to the generic resolver, never interpreted here
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    workspace_name: str = Field(..., alias="workspaceName", description="Workspace identifier")
    root_dir: str = Field(..., alias="rootDir", description="Root of the physical module layout")
    module_mappings: tuple[tuple[str, str], ...] = Field(
        default=(), alias="moduleMappings", description="Ordered logical prefix to physical path table"
    )
    node_modules_root: str = Field(
        default="node_modules", alias="nodeModulesRoot", description="Package root for generic resolution"
    )

    @field_validator("root_dir", "workspace_name", "node_modules_root")
    @classmethod
    def _posix_separators(cls, value: str) -> str:
        return value.replace("\\", "/")

    @field_validator("module_mappings", mode="before")
    @classmethod
    def _ordered_pairs(cls, value: Any) -> list[tuple[str, str]]:
        """Accept a mapping, a list of pairs, or a list of {prefix, target} objects."""
        if value is None:
            return []

        if isinstance(value, dict):
            return [(str(k), str(v)) for k, v in value.items()]

        if not isinstance(value, list | tuple):
            raise ValueError(f"module_mappings must be a mapping or a list, got {type(value).__name__}")

        pairs = []
        for entry in value:
            if isinstance(entry, dict):
                if "prefix" not in entry or "target" not in entry:
                    raise ValueError(f"mapping entry needs 'prefix' and 'target': {entry}")
                pairs.append((str(entry["prefix"]), str(entry["target"])))
            elif isinstance(entry, list | tuple) and len(entry) == 2:
                pairs.append((str(entry[0]), str(entry[1])))
            else:
                raise ValueError(f"invalid mapping entry: {entry!r}")
        return pairs

    def mapping_dict(self) -> dict[str, str]:
        """Mappings as an insertion-ordered dict (later duplicates overwrite earlier ones)."""
        return dict(self.module_mappings)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the snake_case field names."""
        return {
            "workspace_name": self.workspace_name,
            "root_dir": self.root_dir,
            "module_mappings": [list(pair) for pair in self.module_mappings],
            "node_modules_root": self.node_modules_root,
        }


def load_config(path: Path | str) -> ResolutionConfig:
    """Load a resolution configuration from a YAML or JSON file.

    Args:
        path: Path to the configuration file

    Returns:
        Validated ResolutionConfig

    Raises:
        ConfigError: File missing, unreadable, malformed, or invalid
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(config_path, "configuration file not found")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(config_path, f"malformed configuration: {e}") from e
    except OSError as e:
        raise ConfigError(config_path, f"cannot read configuration: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(config_path, "configuration must be a mapping")

    try:
        config = ResolutionConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(config_path, f"invalid configuration: {e}") from e

    logger.debug(f"Loaded resolution config from {config_path}")
    return config
