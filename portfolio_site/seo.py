"""SEO helpers: head tags, sitemap.xml, robots.txt and site URL resolution."""
from __future__ import annotations

import os
from typing import Iterable, Mapping, Optional
from urllib.parse import urlsplit

DEFAULT_SITE_URL = "https://abigaelawino.github.io"
DEFAULT_OG_IMAGE_PATH = "/assets/og.png"
SITE_URL_ENV_KEYS = ("SITE_URL", "URL", "DEPLOY_PRIME_URL", "DEPLOY_URL")


def escape_html(value) -> str:
    return (
        str(value)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def normalize_site_url(raw_value) -> Optional[str]:
    """Return an absolute http(s) URL without trailing slashes, or None"""
    if not isinstance(raw_value, str):
        return None
    trimmed = raw_value.strip()
    if not trimmed:
        return None
    try:
        parsed = urlsplit(trimmed)
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    path = parsed.path or "/"
    href = f"{parsed.scheme}://{parsed.netloc.lower()}{path}"
    if parsed.query:
        href += f"?{parsed.query}"
    return href.rstrip("/")


def resolve_site_url(env: Optional[Mapping[str, str]] = None) -> str:
    """First valid URL among SITE_URL, URL, DEPLOY_PRIME_URL, DEPLOY_URL"""
    env = os.environ if env is None else env
    for key in SITE_URL_ENV_KEYS:
        resolved = normalize_site_url(env.get(key))
        if resolved:
            return resolved
    return DEFAULT_SITE_URL


def normalize_pathname(pathname) -> str:
    raw = pathname.strip() if isinstance(pathname, str) else ""
    if not raw:
        return "/"
    with_slash = raw if raw.startswith("/") else f"/{raw}"
    without_query = with_slash.split("?")[0].split("#")[0]
    return without_query or "/"


def to_absolute_url(site_url: str, pathname: str) -> str:
    return f"{resolve_site_url({'SITE_URL': site_url})}{normalize_pathname(pathname)}"


def build_seo_head(
    site_url: str,
    site_name: str,
    pathname: str,
    title: str,
    description: str,
    og_image_path: Optional[str] = None,
    og_image_alt: Optional[str] = None,
    og_type: str = "website",
    twitter_card: str = "summary_large_image",
    locale: str = "en_US",
    theme_color: str = "#0f172a",
    robots: str = "index,follow",
) -> str:
    """Canonical, Open Graph, Twitter Card and robots meta tags for one page"""
    canonical_url = to_absolute_url(site_url, pathname)
    image_url = to_absolute_url(site_url, og_image_path or DEFAULT_OG_IMAGE_PATH)
    resolved_title = escape_html(title)
    resolved_description = escape_html(description)
    image_alt = escape_html(og_image_alt or description or site_name)

    tags = [
        f'<meta name="description" content="{resolved_description}" />',
        f'<meta name="robots" content="{escape_html(robots)}" />',
        f'<meta name="theme-color" content="{escape_html(theme_color)}" />',
        f'<link rel="canonical" href="{escape_html(canonical_url)}" />',
        f'<meta property="og:site_name" content="{escape_html(site_name)}" />',
        f'<meta property="og:locale" content="{escape_html(locale)}" />',
        f'<meta property="og:type" content="{escape_html(og_type)}" />',
        f'<meta property="og:title" content="{resolved_title}" />',
        f'<meta property="og:description" content="{resolved_description}" />',
        f'<meta property="og:url" content="{escape_html(canonical_url)}" />',
        f'<meta property="og:image" content="{escape_html(image_url)}" />',
        f'<meta property="og:image:alt" content="{image_alt}" />',
        '<meta property="og:image:type" content="image/png" />',
        '<meta property="og:image:width" content="1200" />',
        '<meta property="og:image:height" content="630" />',
        f'<meta name="twitter:card" content="{escape_html(twitter_card)}" />',
        f'<meta name="twitter:title" content="{resolved_title}" />',
        f'<meta name="twitter:description" content="{resolved_description}" />',
        f'<meta name="twitter:image" content="{escape_html(image_url)}" />',
        f'<meta name="twitter:image:alt" content="{image_alt}" />',
    ]
    return "\n    ".join(tags)


def build_sitemap_xml(site_url: str, paths: Iterable[str], lastmod: Optional[str] = None) -> str:
    resolved_lastmod = lastmod.strip() if isinstance(lastmod, str) and lastmod.strip() else None
    lastmod_tag = f"<lastmod>{escape_html(resolved_lastmod)}</lastmod>" if resolved_lastmod else ""
    urls = "".join(
        f"<url><loc>{escape_html(to_absolute_url(site_url, path))}</loc>{lastmod_tag}</url>"
        for path in (paths or [])
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{urls}</urlset>\n'
    )


def build_robots_txt(site_url: str, allow_all: bool = True, sitemap_path: str = "/sitemap.xml") -> str:
    sitemap_url = to_absolute_url(site_url, sitemap_path)
    rule = "Allow: /" if allow_all else "Disallow: /"
    return f"User-agent: *\n{rule}\nSitemap: {sitemap_url}\n"
