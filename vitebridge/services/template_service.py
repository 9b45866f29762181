from typing import Any, Dict, List, Optional

from fastapi.templating import Jinja2Templates
from markupsafe import Markup
from starlette.requests import Request
from starlette.templating import _TemplateResponse

from vitebridge.services.dev_server_service import DevServerService
from vitebridge.services.vite_manifest_service import ViteManifestService


def _passthrough_src(src: str, _asset_id: str) -> str:
    return src


def _passthrough_tag(tag: str, _asset_id: str, _src: str) -> Markup:
    return Markup(tag)


def _passthrough_classes(classes: List[str]) -> List[str]:
    return list(classes)


def _passthrough_metadata(metadata: Dict[str, Any]) -> Dict[str, Any]:
    return metadata


class TemplateService:
    """
    Exposes the asset resolution to Jinja templates.

    The vite_* filters leave assets untouched unless the dev server passed both
    probes, in which case they delegate to the DevServerService.
    """

    def __init__(
        self,
        jinja_template_directory: str,
        vite_manifest_service: Optional[ViteManifestService] = None,
        dev_server_service: Optional[DevServerService] = None,
    ):
        self.vite_manifest_service = vite_manifest_service
        self.dev_server_service = dev_server_service

        self._templates = Jinja2Templates(directory=jinja_template_directory)

        env = self._templates.env
        env.filters["vite_src"] = _passthrough_src
        env.filters["vite_tag"] = _passthrough_tag
        env.filters["vite_body_class"] = _passthrough_classes
        env.filters["vite_render_metadata"] = _passthrough_metadata
        env.globals["vite_dev_server_active"] = False
        env.globals["vite_client_url"] = None

        if self.vite_manifest_service is not None:
            env.globals["vite_asset"] = self.vite_manifest_service.get_asset_url

        if self.dev_server_service is not None and self.dev_server_service.is_active:
            self._register_dev_server(self.dev_server_service)

    def _register_dev_server(self, dev_server_service: DevServerService) -> None:
        env = self._templates.env
        env.filters["vite_src"] = dev_server_service.rewrite_asset_url
        env.filters["vite_tag"] = lambda tag, asset_id, src: Markup(
            dev_server_service.rewrite_embed_tag(tag, asset_id, src)
        )
        env.filters["vite_body_class"] = dev_server_service.inject_body_class
        env.filters["vite_render_metadata"] = dev_server_service.resolve_render_metadata
        env.globals["vite_dev_server_active"] = True
        env.globals["vite_client_url"] = dev_server_service.client_url

    @property
    def templates(self) -> Jinja2Templates:
        return self._templates

    def render_layout(
        self,
        request: Request,
        template_name: str,
        page_title: str,
        page_context: dict,
    ) -> _TemplateResponse:
        default_context = {
            "page_title": page_title,
        }

        context = {**default_context, **page_context}
        return self.templates.TemplateResponse(request, template_name, context)
