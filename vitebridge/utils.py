import re
from os import path
from typing import Union

QUERY_STRING_PATTERN = re.compile(r"\?.*$")


def file_content(filepath: str) -> Union[str, None]:
    if filepath is not None and path.exists(filepath):
        with open(filepath, "r", encoding="utf-8") as file:
            return file.read()
    return None


def file_content_raise_if_none(filepath: str) -> str:
    optional_file_content = file_content(filepath)
    if optional_file_content is None:
        raise ValueError(f"file_content for {filepath} shouldn't be None")
    return optional_file_content


def strip_query_string(url: str) -> str:
    return QUERY_STRING_PATTERN.sub("", url)


def untrailingslashit(url: str) -> str:
    return url.rstrip("/\\")


def join_url(base: str, *segments: str) -> str:
    """Joins segments with a single slash, dropping empty ones."""
    parts = [untrailingslashit(base)]
    for segment in segments:
        segment = segment.strip("/")
        if segment:
            parts.append(segment)
    return untrailingslashit("/".join(parts))
