from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable
from urllib.parse import urlparse

from model_processor.errors import SettingsError

MODEL_FILE_EXTENSION = ".pb"
SUPPORTED_SCHEMES = frozenset({"file", "http", "https", "classpath"})
ARCHIVE_SUFFIXES = (".tar.gz", ".tgz", ".tar", ".zip", ".jar", ".gz")


@dataclass(frozen=True)
class ModelLocator:
    """Location of a pre-trained model file, possibly inside an archive.

    The URI fragment names an exact archive entry, e.g.
    ``https://foo/bar/model.tar.gz#frozen_inference_graph.pb``.
    """

    uri: str
    scheme: str
    path: str
    entry_name: str | None = None

    @classmethod
    def parse(cls, text: str) -> "ModelLocator":
        raw = text.strip()
        if not raw:
            raise SettingsError("Model location must not be empty")
        parsed = urlparse(raw)
        scheme = parsed.scheme.lower()
        if not scheme or len(scheme) == 1:
            # bare path, or a Windows drive letter
            path, _, fragment = raw.partition("#")
            return cls(uri=raw, scheme="file", path=path, entry_name=fragment or None)
        if scheme not in SUPPORTED_SCHEMES:
            allowed = ", ".join(sorted(SUPPORTED_SCHEMES))
            raise SettingsError(f"Unsupported model scheme '{scheme}'. Use one of: {allowed}")
        if scheme in {"http", "https"}:
            path = parsed.path
            if parsed.query:
                path = f"{path}?{parsed.query}"
        else:
            path = (parsed.netloc + parsed.path) if scheme == "classpath" else parsed.path
        if not path:
            raise SettingsError(f"Model location '{raw}' has no path")
        return cls(uri=raw, scheme=scheme, path=path, entry_name=parsed.fragment or None)

    @property
    def filename(self) -> str:
        return PurePosixPath(self.path.split("?", 1)[0]).name

    @property
    def is_archive(self) -> bool:
        name = self.filename.lower()
        return any(name.endswith(suffix) for suffix in ARCHIVE_SUFFIXES)

    @property
    def is_remote(self) -> bool:
        return self.scheme in {"http", "https"}

    def select_entry(self, names: Iterable[str]) -> str | None:
        """Pick the archive entry holding the model among ``names``.

        A fragment matches an entry by full name or by its last path segment,
        since archives usually keep the model under a top-level directory.
        """
        candidates = list(names)
        if self.entry_name:
            if self.entry_name in candidates:
                return self.entry_name
            for name in candidates:
                if name.endswith("/" + self.entry_name):
                    return name
            return None
        for name in candidates:
            if name.lower().endswith(MODEL_FILE_EXTENSION):
                return name
        return None

    def __str__(self) -> str:
        return self.uri
