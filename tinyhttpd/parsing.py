"""Parsing of request URIs, headers, form data and multipart bodies."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Optional, Union

BOUNDARY_PREFIX = "--"
CONTENT_TYPE_MAX = 256

_FILETYPES = (
    (".html", "text/html"),
    (".gif", "image/gif"),
    (".jpg", "image/jpeg"),
    (".jpeg", "image/jpeg"),
    (".png", "image/png"),
    (".css", "text/css"),
    (".js", "application/javascript"),
)

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/pjpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
}

_C_SPACE = " \t\n\r\f\v"
_ESCAPE = re.compile(rb"%([0-9A-Fa-f]{2})|\+")
_ATOI = re.compile(r"[ \t\n\r\f\v]*([+-]?[0-9]+)")
_BOUNDARY_END = re.compile(r"[ \t\r\n;]")
_PART_NAME = re.compile(rb'\bname="([^"]*)"')


@dataclass(frozen=True)
class UriInfo:
    """Result of mapping a request URI onto the file system."""

    is_static: bool
    filename: str
    cgiargs: str


@dataclass(frozen=True)
class PostParam:
    """One key/value pair of a url-encoded form body."""

    key: str
    value: str


@dataclass(frozen=True)
class FilePart:
    """One part of a multipart/form-data body."""

    name: Optional[str]
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes


def parse_uri(uri: str) -> UriInfo:
    """Map a URI to a local filename; URIs containing ``cgi`` are dynamic."""
    if "cgi" not in uri:
        filename = "." + uri
        if uri.endswith("/"):
            filename += "index.html"
        return UriInfo(True, filename, "")
    path, _, args = uri.partition("?")
    return UriInfo(False, "." + path, args)


def get_filetype(filename: str) -> str:
    """Guess a MIME type from the first known extension found in ``filename``."""
    for marker, filetype in _FILETYPES:
        if marker in filename:
            return filetype
    return "text/plain"


def url_decode(src: Union[str, bytes]) -> str:
    """Decode ``%XX`` escapes and ``+`` signs of a url-encoded value."""
    raw = src.encode("utf-8") if isinstance(src, str) else bytes(src)

    def _replace(match: "re.Match[bytes]") -> bytes:
        if match.group(1) is None:
            return b" "
        return bytes([int(match.group(1), 16)])

    return _ESCAPE.sub(_replace, raw).decode("utf-8", errors="replace")


def parse_post_data(data: Optional[str]) -> list[PostParam]:
    """Split a url-encoded body into parameters; values are decoded, keys are not."""
    if not data:
        return []
    params = []
    for token in data.split("&"):
        if not token:
            continue
        key, sep, value = token.partition("=")
        params.append(PostParam(key, url_decode(value) if sep else ""))
    return params


def get_content_length(headers: str) -> int:
    """Return the Content-Length value from raw header text, or 0 if absent."""
    for marker in ("Content-Length:", "content-length:"):
        pos = headers.find(marker)
        if pos != -1:
            break
    else:
        return 0
    match = _ATOI.match(headers, pos + len(marker))
    return int(match.group(1)) if match else 0


def extract_content_type(headers: str) -> str:
    """Return the Content-Type value from raw header text, or an empty string."""
    pos = headers.find("Content-Type:")
    if pos == -1:
        return ""
    start = pos + len("Content-Type:")
    while start < len(headers) and headers[start] in " \t":
        start += 1
    end = headers.find("\r\n", start)
    if end == -1 or end - start >= CONTENT_TYPE_MAX - 1:
        return ""
    return headers[start:end]


def get_boundary(content_type: str) -> Optional[str]:
    """Return the multipart boundary prefixed with ``--``, or None if missing."""
    pos = content_type.find("boundary=")
    if pos == -1:
        return None
    rest = content_type[pos + len("boundary="):]
    if rest.startswith('"'):
        end = rest.find('"', 1)
        if end == -1:
            return None
        return BOUNDARY_PREFIX + rest[1:end]
    match = _BOUNDARY_END.search(rest)
    return BOUNDARY_PREFIX + (rest[: match.start()] if match else rest)


def normalize_content_type(content_type: str) -> str:
    """Trim surrounding whitespace and drop any parameters after ``;``."""
    return content_type.strip(_C_SPACE).partition(";")[0]


def extension_for(content_type: Optional[str]) -> str:
    """Return the file extension used to store an upload of the given type."""
    if content_type is None:
        return "bin"
    return _EXTENSIONS.get(content_type.lower(), "bin")


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def _parse_part_headers(
    headers: bytes,
) -> tuple[Optional[str], Optional[str], Optional[str]]:
    name = filename = content_type = None
    disp = headers.find(b"Content-Disposition:")
    if disp != -1:
        start = headers.find(b'filename="', disp)
        if start != -1:
            start += len(b'filename="')
            end = headers.find(b'"', start)
            if end != -1:
                filename = _decode(headers[start:end])
        match = _PART_NAME.search(headers, disp)
        if match:
            name = _decode(match.group(1))
    ct = headers.find(b"Content-Type:")
    if ct != -1:
        start = ct + len(b"Content-Type:")
        while start < len(headers) and headers[start:start + 1] in (b" ", b"\t"):
            start += 1
        end = headers.find(b"\r\n", start)
        if end == -1:
            end = len(headers)
        content_type = normalize_content_type(_decode(headers[start:end]))
    return name, filename, content_type


def iter_file_parts(body: bytes, boundary: Union[str, bytes]) -> Iterator[FilePart]:
    """Yield each part of a multipart body delimited by ``boundary``.

    ``boundary`` is the full delimiter, including its leading ``--``.
    Parsing stops at the closing delimiter or at the first malformed part.
    """
    delim = boundary.encode("utf-8") if isinstance(boundary, str) else bytes(boundary)
    closing = delim + b"--"
    end = len(body)
    current = 0
    while current < end:
        found = body.find(delim, current)
        if found == -1:
            break
        current = found + len(delim) + 2
        if current >= end or body.startswith(closing, found):
            break
        headers_end = body.find(b"\r\n\r\n", current)
        if headers_end == -1:
            continue
        content_start = headers_end + 4
        part_end = body.find(delim, content_start)
        if part_end == -1:
            break
        content_len = max(part_end - content_start - 2, 0)
        name, filename, content_type = _parse_part_headers(body[current:headers_end])
        yield FilePart(
            name=name,
            filename=filename,
            content_type=content_type,
            data=body[content_start:content_start + content_len],
        )
        current = part_end