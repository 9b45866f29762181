from fastapi import APIRouter, Request
from starlette.responses import Response

from vitebridge.services.template_service import TemplateService


class MainRouter:
    _template_service: TemplateService

    def __init__(self, template_service: TemplateService):
        self._template_service = template_service

    def get_main_router(self) -> APIRouter:
        main_router = APIRouter()
        main_router.add_api_route("/", self.index, methods=["GET"])
        return main_router

    async def index(self, request: Request) -> Response:
        manifest_service = self._template_service.vite_manifest_service
        scripts = []
        if manifest_service is not None:
            scripts = [
                {
                    "id": entry.name or entry.source_key,
                    "src": manifest_service.get_entry_url(entry),
                }
                for entry in manifest_service.get_manifest().values()
                if entry.is_entry and entry.file.endswith(".js")
            ]

        return self._template_service.render_layout(
            request, "index.html", "Vite dev bridge", {"scripts": scripts}
        )
