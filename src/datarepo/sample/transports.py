from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator, List, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen
from xml.etree import ElementTree

from datarepo.ingest.errors import SamplingError

logger = logging.getLogger(__name__)

_S3_NS = "{http://s3.amazonaws.com/doc/2006-03-01/}"


class Transport(ABC):
    """Lists the resources of a data source and yields raw-byte streams for them."""

    @abstractmethod
    def resources(self) -> List[str]:
        pass

    @abstractmethod
    def open(self, resource: str) -> Iterable[bytes]:
        pass

    def streams(self, limit: Optional[int] = None) -> Iterator[tuple[str, Iterable[bytes]]]:
        for resource in self.resources()[:limit]:
            yield resource, self.open(resource)


class LocalDirectoryTransport(Transport):
    def __init__(self, path: str, *, chunk_size: int = 65536):
        self.path = path
        self.chunk_size = chunk_size

    def resources(self) -> List[str]:
        root = Path(self.path).expanduser()
        if not root.is_dir():
            raise SamplingError(f"local directory not found: {root}")
        files = [
            p for p in root.rglob("*")
            if p.is_file() and not any(part.startswith(".") for part in p.relative_to(root).parts)
        ]
        return [str(p) for p in sorted(files)]

    def open(self, resource: str) -> Iterable[bytes]:
        def _iter() -> Iterator[bytes]:
            try:
                with open(resource, "rb") as f:
                    while True:
                        chunk = f.read(self.chunk_size)
                        if not chunk:
                            break
                        yield chunk
            except OSError as e:
                raise SamplingError(f"failed to read {resource}: {e}") from e
        return _iter()


class S3Transport(Transport):
    """Anonymous access to a public S3 bucket over HTTPS."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        *,
        endpoint: Optional[str] = None,
        max_keys: int = 1000,
        chunk_size: int = 64 * 1024,
    ):
        self.bucket = bucket
        self.prefix = prefix
        self.endpoint = (endpoint or f"https://{bucket}.s3.amazonaws.com").rstrip("/")
        self.max_keys = max_keys
        self.chunk_size = chunk_size

    def _fetch(self, url: str):
        try:
            return urlopen(Request(url))
        except (URLError, HTTPError) as e:
            raise SamplingError(f"failed to fetch {url}: {e}") from e

    def resources(self) -> List[str]:
        query = urlencode({"list-type": "2", "prefix": self.prefix, "max-keys": str(self.max_keys)})
        url = f"{self.endpoint}/?{query}"
        logger.debug("Listing s3://%s/%s", self.bucket, self.prefix)
        with self._fetch(url) as resp:
            body = resp.read()
        try:
            root = ElementTree.fromstring(body)
        except ElementTree.ParseError as e:
            raise SamplingError(f"unexpected S3 listing response from {url}: {e}") from e
        keys = []
        for item in root.iter(f"{_S3_NS}Contents"):
            key = item.findtext(f"{_S3_NS}Key")
            if key and not key.endswith("/"):
                keys.append(key)
        return sorted(keys)

    def open(self, resource: str) -> Iterable[bytes]:
        url = f"{self.endpoint}/{quote(resource)}"

        def byte_stream() -> Iterator[bytes]:
            with self._fetch(url) as resp:
                while True:
                    chunk = resp.read(self.chunk_size)
                    if not chunk:
                        break
                    yield chunk

        return byte_stream()
