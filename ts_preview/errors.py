"""Exception types raised by the resolver, loader and build driver."""


class TsPreviewError(Exception):
    """Base class for all ts-preview errors."""


class ResolutionError(TsPreviewError):
    """An import specifier could not be resolved."""


class ModuleNotFound(ResolutionError):
    """No candidate file matched a specifier in its namespace.

    Reported per specifier/importer pair. The build driver records it and keeps
    resolving the remaining imports.
    """

    def __init__(self, specifier: str, importer: str | None = None, detail: str | None = None):
        self.specifier = specifier
        self.importer = importer
        message = f"Could not resolve '{specifier}'"
        if importer:
            message += f" from '{importer}'"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class ManifestParseError(TsPreviewError):
    """A package.json could not be parsed into a manifest."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed package manifest {path}: {reason}")


class ResolverInvariantError(TsPreviewError):
    """A path produced by resolve() is missing at load time.

    This means the resolver and the store disagree, which is a defect in the
    engine rather than a problem with the user's imports.
    """


class BuildError(TsPreviewError):
    """A strict build finished with collected errors."""

    def __init__(self, messages: list):
        self.messages = messages
        summary = "; ".join(m.text for m in messages[:5])
        more = f" (+{len(messages) - 5} more)" if len(messages) > 5 else ""
        super().__init__(f"Build failed with {len(messages)} error(s): {summary}{more}")


class SettingsError(TsPreviewError):
    """A settings file or environment override is invalid."""


class BuildCancelled(TsPreviewError):
    """The build was aborted before the graph walk finished."""


class LoadError(TsPreviewError):
    """A resolved module exists but its contents could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load '{path}': {reason}")
