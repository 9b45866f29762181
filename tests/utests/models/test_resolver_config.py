import pytest
import requests

from vitebridge.models.dev_server_response import DevServerResponse
from vitebridge.models.resolver_config import ResolverConfig


def test_resolver_config_from_dev_server_json() -> None:
    config = ResolverConfig.model_validate(
        {
            "base": "/wp-content/plugins/my-plugin/",
            "srcDir": "src",
            "outDir": "build",
            "css": "scss",
            "manifest": True,
            "buildMap": {},
        }
    )

    assert config.base == "/wp-content/plugins/my-plugin/"
    assert config.src_dir == "src"
    assert config.out_dir == "build"
    assert config.css == "scss"


def test_resolver_config_defaults() -> None:
    config = ResolverConfig()

    assert config.base == ""
    assert config.css is None
    assert config.manifest_path is None


@pytest.mark.parametrize(
    "manifest, expected",
    [
        (False, None),
        (True, ".vite/manifest.json"),
        ("", None),
        ("manifest.json", "manifest.json"),
    ],
)
def test_resolver_config_manifest_path(manifest, expected) -> None:
    assert ResolverConfig(manifest=manifest).manifest_path == expected


def test_dev_server_response_ok() -> None:
    assert DevServerResponse(status_code=200).ok
    assert not DevServerResponse(status_code=204).ok
    assert not DevServerResponse(
        status_code=0, error=requests.ConnectionError("refused")
    ).ok
