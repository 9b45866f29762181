import json
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture

from vitebridge.models.resolver_config import ResolverConfig
from vitebridge.services.dev_server_service import DevServerService
from vitebridge.services.vite_manifest_service import ViteManifestService


@pytest.fixture(scope="session")
def plugin_base() -> str:
    """Base path of the plugin, relative to the document root."""
    return "wp-content/plugins/my-plugin"


@pytest.fixture(scope="session")
def vite_server_host() -> str:
    return "https://example.com"


@pytest.fixture()
def sample_manifest() -> Dict[str, Dict[str, Any]]:
    return {
        "src/main.js": {
            "file": "assets/main.123456.js",
            "name": "main",
            "src": "src/main.js",
            "isEntry": True,
            "css": ["assets/main.123456.css"],
            "imports": ["src/vendor.js"],
        },
        "src/vendor.js": {"file": "assets/vendor.123456.js"},
        "source/component.js": {
            "file": "assets/component.123456.js",
            "name": "component",
        },
    }


@pytest.fixture()
def manifest_json_path(
    tmp_path: Path, sample_manifest: Dict[str, Dict[str, Any]]
) -> str:
    manifest_path = tmp_path / "manifest.json"
    manifest_path.write_text(json.dumps(sample_manifest), encoding="utf-8")
    return str(manifest_path)


@pytest.fixture()
def manifest_py_path(
    tmp_path: Path, sample_manifest: Dict[str, Dict[str, Any]]
) -> str:
    manifest_path = tmp_path / "manifest.py"
    manifest_path.write_text(repr(sample_manifest), encoding="utf-8")
    return str(manifest_path)


@pytest.fixture()
def manifest_service(manifest_json_path: str) -> ViteManifestService:
    service = ViteManifestService(base_url="https://example.com/build")
    service.load(manifest_json_path)
    return service


@pytest.fixture()
def resolver_config(plugin_base: str) -> ResolverConfig:
    return ResolverConfig.model_validate(
        {
            "base": plugin_base,
            "outDir": "build",
            "srcDir": "src",
            "css": "scss",
            "manifest": False,
        }
    )


@pytest.fixture()
def plugin_dir(tmp_path: Path, plugin_base: str) -> Path:
    """Plugin directory on disk with a source and a build folder."""
    plugin_path = tmp_path / plugin_base
    (plugin_path / "src" / "js").mkdir(parents=True)
    (plugin_path / "src" / "css").mkdir(parents=True)
    (plugin_path / "build" / "js").mkdir(parents=True)
    (plugin_path / "src" / "js" / "app.js").write_text("", encoding="utf-8")
    (plugin_path / "src" / "css" / "style.scss").write_text("", encoding="utf-8")
    return plugin_path


@pytest.fixture()
def dev_server_service(
    tmp_path: Path,
    plugin_dir: Path,  # pylint: disable=unused-argument
    vite_server_host: str,
    resolver_config: ResolverConfig,
) -> DevServerService:
    """Returns a DevServerService with config set and no manifest."""
    return DevServerService(
        server_host=vite_server_host,
        document_root=str(tmp_path),
        config=resolver_config,
    )


@pytest.fixture()
def mock_dev_server_get(
    mocker: MockerFixture, plugin_base: str
) -> MagicMock:
    """Mocks requests.get for a running dev server."""

    def _get(url: str, timeout: int) -> MagicMock:  # pylint: disable=unused-argument
        response = MagicMock()
        response.status_code = 200
        if url.endswith("/vite-wordpress.json"):
            response.json.return_value = {
                "base": plugin_base,
                "outDir": "build",
                "srcDir": "src",
                "css": "scss",
                "manifest": False,
            }
        else:
            response.json.side_effect = ValueError("not json")
        return response

    return mocker.patch(
        "vitebridge.services.dev_server_service.requests.get", side_effect=_get
    )
