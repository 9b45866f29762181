from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MANIFEST_PATH = ".vite/manifest.json"


class ResolverConfig(BaseModel):
    """
    Plugin configuration as served by the Vite dev server

    :param base: path segment scoping the assets that belong to this app
    :param out_dir: build output directory, relative to base
    :param src_dir: source directory, relative to base
    :param css: extension of the pre-processed stylesheet sources, eg. "scss"
    :param manifest: False when no manifest is built, True for the Vite default
        location or a path relative to out_dir
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    base: str = ""
    out_dir: str = Field("", alias="outDir")
    src_dir: str = Field("", alias="srcDir")
    css: Optional[str] = None
    manifest: Union[bool, str] = False

    @property
    def manifest_path(self) -> Optional[str]:
        if self.manifest is True:
            return DEFAULT_MANIFEST_PATH
        if isinstance(self.manifest, str) and len(self.manifest) > 0:
            return self.manifest
        return None
