import logging
import os
import re
from os import path
from typing import Any, Dict, List, Optional

import requests
from markupsafe import escape
from pydantic import ValidationError

from vitebridge.models.dev_server_response import DevServerResponse
from vitebridge.models.enums import DevServerState
from vitebridge.models.resolver_config import ResolverConfig
from vitebridge.services.vite_manifest_service import ViteManifestService
from vitebridge.utils import join_url, strip_query_string, untrailingslashit

logger = logging.getLogger(__name__)

CONFIG_ENDPOINT = "vite-wordpress.json"
CLIENT_ENDPOINT = "@vite/client"
BODY_CLASS = "vite-dev-server-is-active"

CSS_SUFFIX_PATTERN = re.compile(r"\.css$")


# pylint: disable=too-many-instance-attributes,too-many-public-methods
class DevServerService:
    # pylint: disable=too-many-arguments
    def __init__(
        self,
        server_host: str = "http://localhost",
        server_port: int = 5173,
        document_root: str = ".",
        manifest_service: Optional[ViteManifestService] = None,
        config: Optional[ResolverConfig] = None,
        http_timeout: int = 5,
    ):
        """Resolves build output assets to the sources served by a Vite dev server.

        server_host: Scheme and host of the dev server, eg. http://localhost.
        server_port: Port the dev server listens on.
        document_root: Directory on disk the configured base is relative to.
        manifest_service: Optional loaded manifest, consulted before the file system.
        config: Plugin config, normally fetched by probe_server_config.
        http_timeout: Timeout (seconds) for the probe requests.
        """
        self._server_host = server_host
        self._server_port = str(server_port)
        self._document_root = path.abspath(document_root)
        self._manifest_service = manifest_service
        self._manifest_load_attempted = manifest_service is not None
        self._config = config
        self._http_timeout = http_timeout
        self._state = DevServerState.UNINITIALIZED
        self._resolved_assets: Dict[str, str] = {}

    @property
    def state(self) -> DevServerState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state == DevServerState.ACTIVE

    @property
    def resolved_assets(self) -> Dict[str, str]:
        return dict(self._resolved_assets)

    def get_config(self) -> Optional[ResolverConfig]:
        return self._config

    def set_config(self, config: ResolverConfig) -> None:
        self._config = config

    @property
    def server_url(self) -> str:
        return f"{self._server_host}:{self._server_port}"

    @property
    def base_url(self) -> str:
        base = self._config.base if self._config is not None else ""
        return join_url(self.server_url, base)

    @property
    def config_url(self) -> str:
        return f"{self.server_url}/{CONFIG_ENDPOINT}"

    @property
    def client_url(self) -> str:
        return f"{self.base_url}/{CLIENT_ENDPOINT}"

    @property
    def server_path(self) -> str:
        base = self._config.base if self._config is not None else ""
        return join_url(self._document_root, base)

    def probe_activate(self) -> bool:
        """Runs both probes once, later calls return the recorded outcome."""
        if self._state != DevServerState.UNINITIALIZED:
            return self.is_active

        if not self.probe_server_config():
            self._state = DevServerState.INACTIVE
            logger.info("Vite dev server config not available at %s", self.config_url)
            return False

        self._state = DevServerState.CONFIG_PROBED

        if not self.probe_client_live():
            self._state = DevServerState.INACTIVE
            logger.info("Vite client not available at %s", self.client_url)
            return False

        self._state = DevServerState.ACTIVE
        logger.info("Vite dev server is active at %s", self.base_url)
        return True

    def probe_server_config(self) -> bool:
        response = self._dev_server_request(self.config_url)
        if not response.ok:
            return False

        if response.data is None:
            logger.warning("Config at %s is not a JSON object", self.config_url)
            return False

        try:
            self._config = ResolverConfig.model_validate(response.data)
        except ValidationError as exception:
            logger.warning(
                "Invalid config received from %s: %s", self.config_url, exception
            )
            return False

        return True

    def probe_client_live(self) -> bool:
        return self._dev_server_request(self.client_url).ok

    def belongs_to_namespace(self, asset_path: str) -> bool:
        if self._config is None or self._config.base == "":
            return False

        return self._config.base in asset_path

    def belongs_to_server(self, url: str) -> bool:
        base_url = self.base_url
        return base_url != "" and base_url in url

    def extract_relative_file(self, asset_path: str) -> Optional[str]:
        if self._config is None:
            return None

        file_name = strip_query_string(asset_path)
        prefix = f"{untrailingslashit(self._config.base)}/{self._config.out_dir}/"
        _, separator, relative_file = file_name.partition(prefix)

        return relative_file if separator else None

    def resolve_source_path(self, asset_path: str) -> Optional[str]:
        file_name = self.extract_relative_file(asset_path)
        if file_name is None or self._config is None:
            return None

        manifest_service = self._get_manifest_service()
        if manifest_service is not None:
            manifest_entry = manifest_service.get_by_generated_file(file_name)
            if manifest_entry is not None and manifest_entry.src is not None:
                return manifest_entry.src

        if self._config.css:
            file_name = CSS_SUFFIX_PATTERN.sub(f".{self._config.css}", file_name)

        source_dir = self._config.src_dir
        if path.exists(f"{self.server_path}/{source_dir}/{file_name}"):
            return f"{source_dir}/{file_name}"

        return None

    def rewrite_asset_url(self, src: str, asset_id: str) -> str:
        if not self.belongs_to_namespace(src):
            return src

        if asset_id in self._resolved_assets:
            return self._resolved_assets[asset_id]

        resolved_path = self.resolve_source_path(src)
        if resolved_path is None:
            return src

        resolved_url = f"{self.base_url}/{resolved_path}"
        self._resolved_assets[asset_id] = resolved_url
        logger.debug("Resolved asset %s to %s", asset_id, resolved_url)
        return resolved_url

    def rewrite_embed_tag(self, tag: str, asset_id: str, src: str) -> str:
        # src has already been passed through rewrite_asset_url at this point
        if self.belongs_to_server(src) and asset_id in self._resolved_assets:
            return f'<script type="module" src="{escape(src)}"></script>'

        return tag

    @staticmethod
    def inject_body_class(classes: List[str]) -> List[str]:
        return [*classes, BODY_CLASS]

    def resolve_render_metadata(self, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """Points the render file of a block at its un-compiled source.

        ``metadata["file"]`` is the absolute path of the block definition and
        ``metadata["render"]`` its declared render path, eg. "file:./render.php".
        """
        if "render" not in metadata or "file" not in metadata:
            return metadata

        block_dir_path = path.dirname(metadata["file"])
        render_file_path = path.join(
            block_dir_path, path.basename(metadata["render"])
        )

        if not self.belongs_to_namespace(render_file_path) or not path.isfile(
            render_file_path
        ):
            return metadata

        resolved_path = self.resolve_source_path(render_file_path)
        if resolved_path is None:
            return metadata

        return {
            **metadata,
            "render": self.relative_local_path(
                block_dir_path, f"{self.server_path}/{resolved_path}"
            ),
        }

    @staticmethod
    def relative_local_path(from_dir: str, to_file: str) -> str:
        """Builds a "file:./" path in the style npm uses for local packages.

        relative_local_path("/abs/my/folder/", "/abs/my/local/render.php")
        returns "file:./../local/render.php".
        """
        from_parts = from_dir.rstrip(os.sep).split(os.sep)
        to_parts = to_file.rstrip(os.sep).split(os.sep)

        while from_parts and to_parts and from_parts[0] == to_parts[0]:
            from_parts.pop(0)
            to_parts.pop(0)

        return (
            "file:./"
            + (".." + os.sep) * len(from_parts)
            + os.sep.join(to_parts)
        )

    def _get_manifest_service(self) -> Optional[ViteManifestService]:
        if self._manifest_load_attempted or self._config is None:
            return self._manifest_service

        self._manifest_load_attempted = True
        manifest_path = self._config.manifest_path
        if manifest_path is None:
            return None

        full_path = f"{self.server_path}/{self._config.out_dir}/{manifest_path}"
        if not path.exists(full_path):
            logger.warning(
                "Manifest %s not found, resolving from the file system", full_path
            )
            return None

        manifest_service = ViteManifestService()
        manifest_service.load(full_path)
        self._manifest_service = manifest_service
        return manifest_service

    def _dev_server_request(self, url: str) -> DevServerResponse:
        try:
            response = requests.get(url, timeout=self._http_timeout)
        except requests.RequestException as exception:
            logger.debug("Vite dev server request to %s failed: %s", url, exception)
            return DevServerResponse(status_code=0, error=exception)

        data: Optional[Dict[str, Any]] = None
        if 200 <= response.status_code < 300:
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                data = body

        return DevServerResponse(status_code=response.status_code, data=data)
