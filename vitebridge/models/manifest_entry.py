from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ManifestEntry(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    source_key: str
    file: str
    name: Optional[str] = None
    src: Optional[str] = None
    is_entry: bool = Field(False, alias="isEntry")
    is_dynamic_entry: bool = Field(False, alias="isDynamicEntry")
    css: List[str] = []
    imports: List[str] = []
    dynamic_imports: List[str] = Field([], alias="dynamicImports")
    assets: List[str] = []
