import ast
import json
import logging
from os import path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from vitebridge.exceptions.manifest_exceptions import (
    ManifestNotFound,
    ManifestNotInitialized,
    ManifestParseError,
    UnknownManifestFormat,
)
from vitebridge.models.manifest_entry import ManifestEntry
from vitebridge.utils import file_content_raise_if_none

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_ROOT = "src"


class ViteManifestService:
    """
    Keyed index over the chunks of a Vite build manifest.

    The service is constructed empty and loaded once. Lookups by generated file
    and by logical name scan all entries, which is fine for the manifest sizes
    Vite produces.
    """

    def __init__(self, base_url: str = "", source_root: str = DEFAULT_SOURCE_ROOT):
        self._base_url = self._get_url_with_trailing_slash(base_url)
        self._source_root = source_root
        self._manifest: Optional[Dict[str, ManifestEntry]] = None
        self._path: Optional[str] = None

    def load(self, manifest_path: str) -> None:
        if not path.exists(manifest_path):
            raise ManifestNotFound(manifest_path)

        extension = path.splitext(manifest_path)[1].lower()
        if extension == ".json":
            raw_manifest = self._decode_json(manifest_path)
        elif extension == ".py":
            raw_manifest = self._decode_literal(manifest_path)
        else:
            raise UnknownManifestFormat(manifest_path)

        self._manifest = self._parse_entries(manifest_path, raw_manifest)
        self._path = manifest_path
        logger.info(
            "Loaded %d manifest entries from %s", len(self._manifest), manifest_path
        )

    def set_source_root(self, source_root: str) -> None:
        self._source_root = source_root

    @property
    def source_root(self) -> str:
        return self._source_root

    @property
    def path(self) -> Optional[str]:
        return self._path

    @property
    def loaded(self) -> bool:
        return self._manifest is not None

    def get_manifest(self) -> Dict[str, ManifestEntry]:
        if self._manifest is None:
            raise ManifestNotInitialized()

        return self._manifest

    def has(self, key: str) -> bool:
        return self._source_key(key) in self.get_manifest()

    def get_by_source_key(self, key: str) -> Optional[ManifestEntry]:
        return self.get_manifest().get(self._source_key(key))

    def get_by_generated_file(self, file: str) -> Optional[ManifestEntry]:
        for entry in self.get_manifest().values():
            if entry.file == file:
                return entry
        return None

    def get_by_logical_name(self, name: str) -> Optional[ManifestEntry]:
        for entry in self.get_manifest().values():
            if entry.name is not None and entry.name == name:
                return entry
        return None

    def get_file(self, key: str) -> str:
        entry = self.get_by_source_key(key)
        return entry.file if entry is not None else ""

    def get_css(self, key: str) -> List[str]:
        entry = self.get_by_source_key(key)
        return list(entry.css) if entry is not None else []

    def get_asset_url(self, key: str) -> str:
        entry = self.get_by_source_key(key)
        if entry is None:
            raise ValueError(f"No asset found for input path: {key}")

        return self.get_entry_url(entry)

    def get_entry_url(self, entry: ManifestEntry) -> str:
        return self._get_url_for_asset(entry.file)

    def _source_key(self, key: str) -> str:
        return f"{self._source_root}/{key}"

    def _get_url_for_asset(self, asset_path: str) -> str:
        return self._base_url + asset_path

    @staticmethod
    def _decode_json(manifest_path: str) -> Any:
        try:
            return json.loads(file_content_raise_if_none(manifest_path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exception:
            raise ManifestParseError(manifest_path, str(exception)) from exception

    @staticmethod
    def _decode_literal(manifest_path: str) -> Any:
        try:
            return ast.literal_eval(file_content_raise_if_none(manifest_path))
        except (
            SyntaxError,
            ValueError,
            TypeError,
            MemoryError,
            RecursionError,
        ) as exception:
            raise ManifestParseError(manifest_path, str(exception)) from exception

    @staticmethod
    def _parse_entries(
        manifest_path: str, raw_manifest: Any
    ) -> Dict[str, ManifestEntry]:
        if not isinstance(raw_manifest, dict):
            raise ManifestParseError(manifest_path, "manifest is not an object")

        entries = {}
        for source_key, chunk in raw_manifest.items():
            if not isinstance(chunk, dict):
                raise ManifestParseError(
                    manifest_path, f"entry {source_key} is not an object"
                )
            try:
                entries[source_key] = ManifestEntry.model_validate(
                    {**chunk, "source_key": source_key}
                )
            except ValidationError as exception:
                raise ManifestParseError(manifest_path, str(exception)) from exception
        return entries

    @staticmethod
    def _get_url_with_trailing_slash(url: str) -> str:
        if url.endswith("/"):
            return url

        return url + "/"
