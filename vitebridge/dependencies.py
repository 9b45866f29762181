from configparser import ConfigParser
from typing import Optional

from vitebridge.services.dev_server_service import DevServerService
from vitebridge.services.manifest import create_manifest
from vitebridge.services.template_service import TemplateService
from vitebridge.services.vite_manifest_service import (
    DEFAULT_SOURCE_ROOT,
    ViteManifestService,
)


def create_manifest_service_from_config(
    config_parser: ConfigParser,
) -> Optional[ViteManifestService]:
    """Loads the build manifest when a manifest_path is configured.

    Raises:
        ManifestLoadError: if the configured manifest is missing or unreadable.
    """
    manifest_path = config_parser.get("vite", "manifest_path", fallback=None)
    if not manifest_path:
        return None

    return create_manifest(
        manifest_path,
        source_root=config_parser.get(
            "vite", "source_root", fallback=DEFAULT_SOURCE_ROOT
        ),
        base_url=config_parser.get("vite", "asset_base_url", fallback="/"),
    )


def create_dev_server_service_from_config(
    config_parser: ConfigParser,
    manifest_service: Optional[ViteManifestService] = None,
) -> DevServerService:
    return DevServerService(
        server_host=config_parser.get(
            "vite", "server_host", fallback="http://localhost"
        ),
        server_port=config_parser.getint("vite", "server_port", fallback=5173),
        document_root=config_parser.get("vite", "document_root", fallback="."),
        manifest_service=manifest_service,
        http_timeout=config_parser.getint("app", "http_timeout", fallback=5),
    )


def create_template_service(
    config_parser: ConfigParser,
    manifest_service: Optional[ViteManifestService],
    dev_server: DevServerService,
) -> TemplateService:
    return TemplateService(
        jinja_template_directory=config_parser.get(
            "templates", "jinja_path", fallback="templates"
        ),
        vite_manifest_service=manifest_service,
        dev_server_service=dev_server,
    )


config = ConfigParser()
config.read("app.conf")

vite_manifest_service = create_manifest_service_from_config(config)
dev_server_service = create_dev_server_service_from_config(
    config, vite_manifest_service
)
