class ManifestLoadError(Exception):
    """Base class for errors raised while loading a build manifest"""


class ManifestNotFound(ManifestLoadError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            f"Manifest file path {path} does not exist. "
            "Try to run `yarn build` or `npm run build` first."
        )


class ManifestParseError(ManifestLoadError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Error decoding manifest {path}: {reason}")


class UnknownManifestFormat(ManifestLoadError):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Unknown manifest file type: {path}")


class ManifestNotInitialized(RuntimeError):
    def __init__(self) -> None:
        super().__init__("Manifest has not been set yet.")
