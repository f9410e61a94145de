"""
HTML document assembler.

Wraps a page body fragment in the shared shell: SEO head, a Content-Security-Policy
meta tag keyed to a per-document nonce, the optional Plausible bootstrap, the
deferred /assets/analytics.js tag, and the navigation chrome.
"""
from __future__ import annotations

import base64
import json
import secrets
from typing import Callable, Mapping, Optional

from . import get_site_title
from .config import AnalyticsConfig
from .seo import build_seo_head, escape_html, resolve_site_url

NonceFactory = Callable[[], str]

OG_IMAGE_PATH = "/assets/og.png"
SHELL_CSS_PATH = "/assets/shell.css"
ANALYTICS_ASSET_PATH = "/assets/analytics.js"

SHELL_CSS = """
:root { color-scheme: light; }
body { margin: 0; font-family: ui-sans-serif, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, "Apple Color Emoji", "Segoe UI Emoji"; color: #0f172a; background: #ffffff; }
a { color: inherit; }
:focus-visible { outline: 3px solid #60a5fa; outline-offset: 3px; }
.shell { max-width: 64rem; margin: 0 auto; padding: 1.25rem; }
.shell__skip-link {
  position: absolute;
  left: -10000px;
  top: auto;
  width: 1px;
  height: 1px;
  overflow: hidden;
}
.shell__skip-link:focus,
.shell__skip-link:focus-visible {
  position: static;
  width: auto;
  height: auto;
  display: inline-block;
  margin: 0.75rem 0;
  padding: 0.55rem 0.85rem;
  border: 2px solid #0f172a;
  border-radius: 0.6rem;
  background: #ffffff;
  text-decoration: none;
  font-weight: 700;
}
.shell__nav { display: flex; justify-content: space-between; align-items: center; gap: 1rem; margin-bottom: 1rem; }
.shell__brand { font-weight: 700; text-decoration: none; }
.shell__links { display: flex; gap: 0.75rem; flex-wrap: wrap; list-style: none; margin: 0; padding: 0; }
.shell__link { text-decoration: none; border: 1px solid #e5e7eb; border-radius: 999px; padding: 0.35rem 0.65rem; }
""".strip()


def generate_nonce() -> str:
    """Fresh base64 nonce from 16 random bytes"""
    return base64.b64encode(secrets.token_bytes(16)).decode("ascii")


def escape_script_string(value: str) -> str:
    return json.dumps(value).replace("</script>", "<\\/script>")


def build_csp_meta(nonce: str, analytics: AnalyticsConfig) -> str:
    if analytics.enabled:
        origin = escape_html(analytics.origin)
        script_src = f"'self' 'nonce-{nonce}' {origin}"
        connect_src = f"'self' {origin}"
    else:
        script_src = "'self'"
        connect_src = "'self'"
    policy = (
        "default-src 'self'; "
        f"script-src {script_src}; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data:; "
        "font-src 'self'; "
        f"connect-src {connect_src}; "
        "frame-ancestors 'none'; "
        "form-action 'self';"
    )
    return f'<meta http-equiv="Content-Security-Policy" content="{policy}">'


def build_analytics_snippet(nonce: str, analytics: AnalyticsConfig) -> str:
    """Inline Plausible bootstrap; empty when no analytics domain is configured"""
    if not analytics.enabled:
        return ""
    return f"""<script nonce="{nonce}">
      (function () {{
        var plausibleDomain = {escape_script_string(analytics.domain)};
        var plausibleHost = {escape_script_string(analytics.host)};

        var dntValues = [
          navigator.doNotTrack,
          window.doNotTrack,
          navigator.msDoNotTrack,
          document.doNotTrack,
        ]
          .map(function (value) {{
            return value == null ? '' : String(value);
          }})
          .map(function (value) {{
            return value.trim();
          }});

        if (dntValues.includes('1') || dntValues.includes('yes')) {{
          return;
        }}

        var hostname = String((window.location && window.location.hostname) || '')
          .trim()
          .toLowerCase();
        if (
          hostname === '' ||
          hostname === 'localhost' ||
          hostname === '127.0.0.1' ||
          hostname === '0.0.0.0' ||
          hostname.endsWith('.local')
        ) {{
          return;
        }}

        window.plausible =
          window.plausible ||
          function () {{
            (window.plausible.q = window.plausible.q || []).push(arguments);
          }};

        var script = document.createElement('script');
        script.defer = true;
        script.setAttribute('data-domain', plausibleDomain);
        script.setAttribute('nonce', '{nonce}');
        script.src = plausibleHost.replace(/\\/$/, '') + '/js/script.js';
        document.head.appendChild(script);
      }})();
    </script>"""


def build_navigation() -> str:
    return f"""<a class="shell__skip-link" href="#main-content">Skip to content</a>
      <header>
        <nav class="shell__nav" aria-label="Site navigation">
          <a class="shell__brand" href="/" data-analytics-event="nav_home">{escape_html(get_site_title())}</a>
          <ul class="shell__links">
            <li><a class="shell__link" href="/projects" data-analytics-event="nav_projects">Projects</a></li>
            <li><a class="shell__link" href="/about" data-analytics-event="nav_about">About</a></li>
            <li><a class="shell__link" href="/contact" data-analytics-event="nav_contact">Contact</a></li>
          </ul>
        </nav>
      </header>"""


def build_html_document(
    title: str,
    description: str,
    body: str,
    pathname: str = "/",
    robots: Optional[str] = None,
    analytics: Optional[AnalyticsConfig] = None,
    site_url: Optional[str] = None,
    nonce_factory: NonceFactory = generate_nonce,
    env: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Assemble a complete HTML page around ``body``.

    Args:
        title: Page title (escaped before embedding)
        description: Meta description
        body: HTML fragment placed inside <main>
        pathname: Canonical route path, e.g. "/about/"
        robots: Optional robots directive, defaults to "index,follow"
        analytics: Analytics settings; read from the environment when omitted
        site_url: Canonical origin; resolved from the environment when omitted
        nonce_factory: Called once per document to produce the CSP nonce
        env: Environment mapping used for the fallbacks above

    Returns:
        The HTML document text
    """
    if analytics is None:
        analytics = AnalyticsConfig.from_env(env)
    if site_url is None:
        site_url = resolve_site_url(env)

    nonce = nonce_factory()
    site_title = get_site_title()
    seo_head = build_seo_head(
        site_url=site_url,
        site_name=site_title,
        pathname=pathname,
        title=title,
        description=description,
        og_image_path=OG_IMAGE_PATH,
        og_image_alt=f"{site_title} — {description}",
        **({"robots": robots} if robots else {}),
    )
    analytics_snippet = build_analytics_snippet(nonce, analytics)

    return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{escape_html(title)}</title>
    {seo_head}
    {build_csp_meta(nonce, analytics)}
    <link rel="preload" href="{SHELL_CSS_PATH}" as="style" />
    <link rel="stylesheet" href="{SHELL_CSS_PATH}" />
    {analytics_snippet}
    <script src="{ANALYTICS_ASSET_PATH}" defer nonce="{nonce}"></script>
  </head>
  <body>
    <div class="shell">
      {build_navigation()}
      <main id="main-content" tabindex="-1">
        {body}
      </main>
    </div>
  </body>
</html>
"""
