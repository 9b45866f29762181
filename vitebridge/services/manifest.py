"""
Process-wide default manifest.

For call sites that cannot have a ViteManifestService passed in. The instance is
created once by ``create_manifest`` and is never reset for the lifetime of the
process. Services that take the manifest as a constructor argument should get it
that way instead.
"""
from typing import Optional

from vitebridge.exceptions.manifest_exceptions import ManifestNotInitialized
from vitebridge.services.vite_manifest_service import ViteManifestService

_manifest: Optional[ViteManifestService] = None


def create_manifest(
    manifest_path: str, source_root: Optional[str] = None, base_url: str = ""
) -> ViteManifestService:
    global _manifest  # pylint: disable=global-statement
    if _manifest is None:
        manifest = ViteManifestService(base_url=base_url)
        manifest.load(manifest_path)
        if source_root is not None:
            manifest.set_source_root(source_root)
        _manifest = manifest

    return _manifest


def get_manifest_service() -> ViteManifestService:
    if _manifest is None:
        raise ManifestNotInitialized()

    return _manifest
