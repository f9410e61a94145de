#!/usr/bin/env python3
"""
Smoke test a deployed (or locally served) portfolio site.

Requests every route plus the generated assets and fails when any of them does
not answer 200. HTML routes must also carry a Content-Security-Policy meta tag.

Usage:
  portfolio-smoke --base-url https://abigaelawino.github.io [--quick]
  SITE_URL=http://localhost:8000 portfolio-smoke
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .build import SITEMAP_PATHS
from .config import configure_logging
from .seo import resolve_site_url, to_absolute_url

ASSET_PATHS = ["/assets/og.png", "/robots.txt", "/sitemap.xml"]

REQUEST_TIMEOUT = 10


def create_session() -> requests.Session:
    """requests session that retries transient failures"""
    session = requests.Session()
    retry_strategy = Retry(
        total=3,
        backoff_factor=1,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["HEAD", "GET", "OPTIONS"],
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def smoke_paths(quick: bool = False) -> List[str]:
    return list(SITEMAP_PATHS) if quick else list(SITEMAP_PATHS) + ASSET_PATHS


def check_endpoint(session: requests.Session, base_url: str, path: str) -> Tuple[bool, str]:
    url = to_absolute_url(base_url, path)
    try:
        response = session.get(url, timeout=REQUEST_TIMEOUT)
    except requests.exceptions.RequestException as e:
        return False, f"{url}: {type(e).__name__}: {e}"

    if response.status_code != 200:
        return False, f"{url}: HTTP {response.status_code}"
    if path.endswith("/") and "Content-Security-Policy" not in response.text:
        return False, f"{url}: no Content-Security-Policy meta tag"
    return True, f"{url}: 200"


def run_smoke(base_url: str, quick: bool = False, session: requests.Session = None) -> List[str]:
    """Request each endpoint; returns failure messages"""
    session = session or create_session()
    failures = []
    for path in smoke_paths(quick):
        ok, message = check_endpoint(session, base_url, path)
        if ok:
            logging.info(f"✓ {message}")
        else:
            logging.error(f"✗ {message}")
            failures.append(message)
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(description="Smoke test the deployed portfolio site")
    parser.add_argument("--base-url", type=str, default=None,
                        help="Site origin (default: SITE_URL / URL / DEPLOY_PRIME_URL / DEPLOY_URL)")
    parser.add_argument("--quick", action="store_true", help="Only check the HTML routes")
    args = parser.parse_args(argv)
    configure_logging()

    base_url = resolve_site_url({"SITE_URL": args.base_url}) if args.base_url else resolve_site_url()
    logging.info(f"Smoke testing {base_url} ({'quick' if args.quick else 'full'})")

    failures = run_smoke(base_url, quick=args.quick)
    if failures:
        logging.error(f"❌ {len(failures)} endpoint(s) failed")
        sys.exit(1)
    logging.info("✅ All endpoints healthy")


if __name__ == "__main__":
    main()
