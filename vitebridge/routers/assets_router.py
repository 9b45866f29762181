from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException

from vitebridge.exceptions.manifest_exceptions import ManifestNotInitialized
from vitebridge.services.dev_server_service import DevServerService
from vitebridge.services.vite_manifest_service import ViteManifestService


class AssetsRouter:
    _dev_server_service: DevServerService
    _vite_manifest_service: Optional[ViteManifestService]

    def __init__(
        self,
        dev_server_service: DevServerService,
        vite_manifest_service: Optional[ViteManifestService] = None,
    ):
        self._dev_server_service = dev_server_service
        self._vite_manifest_service = vite_manifest_service

    def get_assets_router(self) -> APIRouter:
        assets_router = APIRouter()
        assets_router.add_api_route(
            "/dev-server/status", self.dev_server_status, methods=["GET"]
        )
        assets_router.add_api_route(
            "/assets/resolve", self.resolve_asset, methods=["GET"]
        )
        assets_router.add_api_route(
            "/manifest/{source_key:path}", self.manifest_entry, methods=["GET"]
        )
        return assets_router

    async def dev_server_status(self) -> Dict[str, Any]:
        config = self._dev_server_service.get_config()
        return {
            "active": self._dev_server_service.is_active,
            "config": config.model_dump(by_alias=True) if config else None,
        }

    async def resolve_asset(self, path: str, asset_id: str) -> Dict[str, str]:
        """
        Rewrite a build output asset to its dev server source, when active
        """
        if not self._dev_server_service.is_active:
            return {"src": path}

        return {"src": self._dev_server_service.rewrite_asset_url(path, asset_id)}

    async def manifest_entry(self, source_key: str) -> Dict[str, Any]:
        if self._vite_manifest_service is None:
            raise HTTPException(status_code=404, detail="No manifest loaded")

        try:
            entry = self._vite_manifest_service.get_by_source_key(source_key)
        except ManifestNotInitialized as exception:
            raise HTTPException(
                status_code=404, detail="No manifest loaded"
            ) from exception

        if entry is None:
            raise HTTPException(status_code=404, detail="Manifest entry not found")

        return entry.model_dump(by_alias=True)
