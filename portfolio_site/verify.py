#!/usr/bin/env python3
"""
Verify a built dist/ tree without a browser.

Checks:
- every HTML route exists, parses, carries exactly one CSP meta tag, and every
  nonce-bearing <script> uses the nonce named in that policy
- assets/og.png decodes as a 1200x630 RGBA image
- the resume PDF has a consistent xref table and startxref pointer
- sitemap.xml lists every route and robots.txt points at it

Usage:
  portfolio-verify [--dist dist]
"""
from __future__ import annotations

import argparse
import html
import logging
import re
import sys
from pathlib import Path
from typing import List
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from PIL import Image

from .build import RESUME_PDF_NAME, SITEMAP_PATHS
from .config import configure_logging
from .pdf_encoder import inspect_pdf
from .png_encoder import HEIGHT, WIDTH

HTML_PAGES = [
    "index.html",
    "about/index.html",
    "contact/index.html",
    "contact/thanks/index.html",
    "projects/index.html",
    "blog/index.html",
    "resume/index.html",
]

_NONCE_SOURCE = re.compile(r"'nonce-([^']+)'")
_SITEMAP_LOC = re.compile(r"<loc>(.*?)</loc>", re.DOTALL)


def check_html_page(path: Path) -> List[str]:
    """Problems found in one rendered page (empty when the page is sound)"""
    problems = []
    soup = BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")

    csp_tags = soup.find_all("meta", attrs={"http-equiv": "Content-Security-Policy"})
    if len(csp_tags) != 1:
        return [f"{path}: expected 1 Content-Security-Policy meta tag, found {len(csp_tags)}"]
    policy = csp_tags[0].get("content", "")

    if not soup.find("title") or not soup.find("title").get_text(strip=True):
        problems.append(f"{path}: missing <title>")
    if not soup.find("link", rel="canonical"):
        problems.append(f"{path}: missing canonical link")
    if not soup.find("main", id="main-content"):
        problems.append(f"{path}: missing <main id=\"main-content\">")

    allowed_nonces = set(_NONCE_SOURCE.findall(policy))
    for script in soup.find_all("script", nonce=True):
        nonce = script.get("nonce")
        if allowed_nonces and nonce not in allowed_nonces:
            problems.append(f"{path}: script nonce {nonce!r} is not allowed by the page policy")

    if allowed_nonces and not soup.find_all("script", nonce=True):
        problems.append(f"{path}: policy names a nonce but no script carries one")

    return problems


def check_og_image(path: Path) -> List[str]:
    try:
        with Image.open(path) as img:
            img.load()
            if img.format != "PNG" or img.mode != "RGBA" or img.size != (WIDTH, HEIGHT):
                return [f"{path}: expected {WIDTH}x{HEIGHT} RGBA PNG, got {img.format} {img.mode} {img.size}"]
    except (OSError, SyntaxError) as e:
        return [f"{path}: unreadable image ({e})"]
    return []


def check_resume_pdf(path: Path) -> List[str]:
    data = path.read_bytes()
    if not data.startswith(b"%PDF-1.4\n"):
        return [f"{path}: missing %PDF-1.4 header"]
    try:
        info = inspect_pdf(data)
    except ValueError as e:
        return [f"{path}: {e}"]

    problems = []
    if info["startxref"] != info["xref_position"]:
        problems.append(f"{path}: startxref {info['startxref']} does not point at xref ({info['xref_position']})")
    if not info["objects_ok"]:
        problems.append(f"{path}: xref offsets do not match object positions")
    if info["size"] != len(info["offsets"]) + 1:
        problems.append(f"{path}: trailer /Size {info['size']} disagrees with xref table")
    if info["page_count"] != 1:
        problems.append(f"{path}: expected 1 page, found {info['page_count']}")
    return problems


def check_sitemap(dist_dir: Path) -> List[str]:
    sitemap = (dist_dir / "sitemap.xml").read_text(encoding="utf-8")
    locs = [html.unescape(loc.strip()) for loc in _SITEMAP_LOC.findall(sitemap)]

    problems = []
    if len(locs) != len(SITEMAP_PATHS):
        problems.append(f"sitemap.xml: expected {len(SITEMAP_PATHS)} URLs, found {len(locs)}")
    for route in SITEMAP_PATHS:
        if route not in {urlsplit(loc).path for loc in locs}:
            problems.append(f"sitemap.xml: missing route {route}")

    robots = (dist_dir / "robots.txt").read_text(encoding="utf-8")
    if not re.search(r"Sitemap: \S+/sitemap\.xml", robots):
        problems.append("robots.txt: missing Sitemap line")
    return problems


def verify_dist(dist_dir) -> List[str]:
    """Run every check against ``dist_dir`` and return the collected problems"""
    dist_dir = Path(dist_dir)
    problems: List[str] = []

    required = HTML_PAGES + [
        "assets/og.png",
        "assets/shell.css",
        "sitemap.xml",
        "robots.txt",
        f"resume/{RESUME_PDF_NAME}",
    ]
    missing = [name for name in required if not (dist_dir / name).is_file()]
    for name in missing:
        problems.append(f"missing output file: {name}")

    for page in HTML_PAGES:
        if page not in missing:
            problems.extend(check_html_page(dist_dir / page))

    if "assets/og.png" not in missing:
        problems.extend(check_og_image(dist_dir / "assets" / "og.png"))
    if f"resume/{RESUME_PDF_NAME}" not in missing:
        problems.extend(check_resume_pdf(dist_dir / "resume" / RESUME_PDF_NAME))
    if "sitemap.xml" not in missing and "robots.txt" not in missing:
        problems.extend(check_sitemap(dist_dir))

    return problems


def main(argv=None):
    parser = argparse.ArgumentParser(description="Verify a built dist/ directory")
    parser.add_argument("--dist", type=str, default="dist", help="Build output directory (default: dist)")
    args = parser.parse_args(argv)
    configure_logging()

    dist_dir = Path(args.dist)
    if not dist_dir.is_dir():
        logging.error(f"✗ Build output not found: {dist_dir}")
        sys.exit(1)

    problems = verify_dist(dist_dir)
    if problems:
        for problem in problems:
            logging.error(f"✗ {problem}")
        logging.error(f"❌ Verification failed with {len(problems)} problem(s)")
        sys.exit(1)

    logging.info(f"✅ {dist_dir} verified: {len(HTML_PAGES)} pages, og.png, resume PDF, sitemap")


if __name__ == "__main__":
    main()
