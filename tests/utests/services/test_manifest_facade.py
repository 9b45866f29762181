import pytest
from pytest_mock import MockerFixture

from vitebridge.exceptions.manifest_exceptions import ManifestNotInitialized
from vitebridge.services import manifest


@pytest.fixture(autouse=True)
def reset_default_manifest(mocker: MockerFixture) -> None:
    mocker.patch.object(manifest, "_manifest", None)


def test_get_manifest_service_before_create_raises() -> None:
    with pytest.raises(ManifestNotInitialized):
        manifest.get_manifest_service()


def test_create_manifest_is_created_once(
    manifest_json_path: str, manifest_py_path: str
) -> None:
    created = manifest.create_manifest(manifest_json_path, source_root="source")
    again = manifest.create_manifest(manifest_py_path)

    assert created is again
    assert created.path == manifest_json_path
    assert created.source_root == "source"
    assert manifest.get_manifest_service() is created
