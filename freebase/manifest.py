"""Plugin metadata: Pydantic model and YAML loader."""

from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

MANIFEST_FILE = "plugin.yaml"


class PluginMetadata(BaseModel):
    """Identity of the plugin as reported to the host."""

    id: str
    name: str
    version: str = "1.0.0"
    author: str = ""
    description: str = ""

    @field_validator("id", "name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()


DEFAULT_METADATA = PluginMetadata(
    id="free-base-plugin",
    name="FreeBasePlugin",
    version="1.0.0",
    author="Myzon Labs",
    description="Open-source free base plugin template",
)


def load_manifest(path: Path) -> PluginMetadata:
    """Read and validate a metadata YAML file. Raises on invalid YAML or validation error."""
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Manifest must be a YAML object: {path}")
    return PluginMetadata.model_validate(data)
