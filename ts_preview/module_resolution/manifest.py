"""package.json parsing.

Only the fields the resolver needs are modelled; unknown fields are ignored.
"""

import json
import logging

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from ..errors import ManifestParseError

logger = logging.getLogger(__name__)

DEFAULT_ENTRY = "index.js"


class PackageManifest(BaseModel):
    """Subset of a package descriptor.

    Entry point priority: ``module`` -> ``main`` -> ``index.js``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str | None = None
    version: str | None = None
    main: str | None = None
    module: str | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)

    @property
    def entry(self) -> str:
        """Entry file relative to the package directory."""
        return self.module or self.main or DEFAULT_ENTRY


def parse_manifest(text: str, path: str = "package.json") -> PackageManifest:
    """Parse package.json text.

    Args:
        text: Raw JSON text
        path: Manifest path (for error messages)

    Returns:
        PackageManifest

    Raises:
        ManifestParseError: Invalid JSON, non-object document, or wrong field types
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestParseError(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(data, dict):
        raise ManifestParseError(path, f"expected an object, got {type(data).__name__}")

    try:
        return PackageManifest.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ManifestParseError(path, f"invalid fields: {fields}") from e
