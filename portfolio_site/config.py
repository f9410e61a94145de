"""Build configuration: environment variables, source/output paths, logging."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
from urllib.parse import urlsplit

PRODUCTION_ANALYTICS_DOMAIN = "abigaelawino.github.io"
DEFAULT_ANALYTICS_HOST = "https://plausible.io"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

_ORIGIN_NETLOC = re.compile(r"^[A-Za-z0-9.-]+(:\d{1,5})?$")


def configure_logging(level: Optional[str] = None):
    """Root logging setup shared by the command line entry points"""
    resolved = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(level=getattr(logging, resolved, logging.INFO), format=LOG_FORMAT, datefmt=LOG_DATEFMT)


def is_http_origin(value: str) -> bool:
    """True for scheme://host[:port] with an optional trailing slash and nothing else"""
    try:
        parsed = urlsplit(value)
    except ValueError:
        return False
    return (
        parsed.scheme in ("http", "https")
        and bool(_ORIGIN_NETLOC.match(parsed.netloc))
        and parsed.path in ("", "/")
        and not parsed.query
        and not parsed.fragment
    )


@dataclass(frozen=True)
class AnalyticsConfig:
    domain: str = ""
    host: str = DEFAULT_ANALYTICS_HOST

    @property
    def enabled(self) -> bool:
        return bool(self.domain)

    @property
    def origin(self) -> str:
        return self.host.rstrip("/")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AnalyticsConfig":
        """
        Read ANALYTICS_DOMAIN / ANALYTICS_HOST / NODE_ENV.

        An unset domain falls back to the production domain only when
        NODE_ENV is "production"; otherwise analytics stays disabled.
        """
        env = os.environ if env is None else env
        domain = (env.get("ANALYTICS_DOMAIN") or "").strip()
        if not domain and env.get("NODE_ENV") == "production":
            domain = PRODUCTION_ANALYTICS_DOMAIN
        host = (env.get("ANALYTICS_HOST") or "").strip() or DEFAULT_ANALYTICS_HOST
        if not is_http_origin(host):
            logging.warning(f"⚠ Ignoring ANALYTICS_HOST '{host}' (expected an http(s) origin), using {DEFAULT_ANALYTICS_HOST}")
            host = DEFAULT_ANALYTICS_HOST
        return cls(domain=domain, host=host)


@dataclass(frozen=True)
class BuildPaths:
    """Source directories and the dist/ output tree for one build"""

    root: Path
    out_dir: Path
    content_index_dir: Path

    @property
    def assets_dir(self) -> Path:
        return self.root / "assets"

    @property
    def images_dir(self) -> Path:
        return self.root / "images"

    @property
    def content_dir(self) -> Path:
        return self.root / "content"

    @classmethod
    def from_root(cls, root, out_dir=None, content_index_dir=None) -> "BuildPaths":
        root = Path(root).resolve()
        return cls(
            root=root,
            out_dir=Path(out_dir).resolve() if out_dir else root / "dist",
            content_index_dir=Path(content_index_dir).resolve() if content_index_dir else root / "src" / "generated",
        )
