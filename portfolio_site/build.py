#!/usr/bin/env python3
"""
Portfolio Site Build

Workflow:
1. Reset dist/ (delete and recreate dist/ and dist/assets/)
2. Copy assets/ into dist/assets/ (required)
3. Copy images/ into dist/images/ (optional, skipped when absent)
4. Write the default Open Graph PNG and shell.css
5. Render the six static routes through the HTML document assembler
6. Render the resume route and write the resume PDF
7. Write sitemap.xml and robots.txt

Error Handling Strategy:
- FATAL ERRORS (exceptions propagate): missing assets/, write failures, bad content
  -> the build aborts, the report is printed, and the process exits 1
- OPTIONAL STEPS (best-effort copy): a missing images/ directory is recorded as
  skipped and the build continues

Usage:
  portfolio-build --root . [--out dist] [--lastmod 2026-01-31]
"""
from __future__ import annotations

import argparse
import logging
import os
import shutil
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Mapping, NamedTuple, Optional

from . import get_site_title
from .config import AnalyticsConfig, BuildPaths, configure_logging
from .content import ContentIndex, generate_content_indexes
from .document import SHELL_CSS, NonceFactory, build_html_document, generate_nonce
from .listings import render_blog_index_page, render_projects_page
from .pages import (
    RESUME_ASSET_PATH,
    render_about_page,
    render_contact_page,
    render_contact_thanks_page,
    render_home_page,
    render_resume_page,
)
from .pdf_encoder import build_simple_pdf
from .png_encoder import build_default_og_png
from .seo import build_robots_txt, build_sitemap_xml, resolve_site_url

SITEMAP_PATHS = [
    "/",
    "/about/",
    "/contact/",
    "/contact/thanks/",
    "/projects/",
    "/blog/",
    "/resume/",
]

RESUME_PDF_NAME = "abigael-awino-resume.pdf"


class PageSpec(NamedTuple):
    path: str
    title: str
    description: str
    body: str
    robots: Optional[str] = None


def route_pathname_for_output(relative_path: str) -> str:
    """Map an output file path to its route: index.html -> /, X/index.html -> /X/"""
    normalized = str(relative_path).replace("\\", "/")
    if normalized == "index.html":
        return "/"
    if normalized.endswith("/index.html"):
        return f"/{normalized[:-len('/index.html')]}/"
    return f"/{normalized}"


def copy_tree(src: Path, dst: Path, optional: bool = False) -> bool:
    """
    Mirror ``src`` into ``dst``.

    Returns False when an optional source directory is absent; a missing
    required source raises FileNotFoundError.
    """
    if not src.is_dir():
        if optional:
            return False
        raise FileNotFoundError(f"Required source directory not found: {src}")
    shutil.copytree(src, dst, dirs_exist_ok=True)
    return True


def utc_today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class SiteBuilder:
    def __init__(
        self,
        paths: BuildPaths,
        env: Optional[Mapping[str, str]] = None,
        content_index: Optional[ContentIndex] = None,
        nonce_factory: NonceFactory = generate_nonce,
        today: Callable[[], str] = utc_today,
        lastmod: Optional[str] = None,
    ):
        self.paths = paths
        self.env = dict(os.environ if env is None else env)
        self.analytics = AnalyticsConfig.from_env(self.env)
        self.site_url = resolve_site_url(self.env)
        self.site_title = get_site_title()
        self.nonce_factory = nonce_factory
        self.today = today
        self.lastmod = lastmod

        self.content_index = content_index
        self.written: List[Path] = []

        # Execution report tracking
        self.report = {
            "steps": [],
            "start_time": datetime.now(),
            "success": False,
        }

    def add_step(self, name, status, description, details=None):
        """Add a step to the execution report"""
        step = {
            "name": name,
            "status": status,  # 'success', 'warning', 'error', 'skipped'
            "description": description,
            "timestamp": datetime.now().isoformat(),
        }
        if details:
            step["details"] = details
        self.report["steps"].append(step)

    def print_report(self):
        """Print formatted execution report"""
        duration = (datetime.now() - self.report["start_time"]).total_seconds()

        logging.info("=" * 60)
        logging.info(" BUILD REPORT")
        logging.info("=" * 60)
        logging.info(f"Output:   {self.paths.out_dir}")
        logging.info(f"Duration: {duration:.2f} seconds")
        logging.info(f"Status:   {'✅ SUCCESS' if self.report['success'] else '❌ FAILED'}")
        logging.info("-" * 60)

        for i, step in enumerate(self.report["steps"], 1):
            status_icon = {
                "success": "✅",
                "warning": "⚠️",
                "error": "❌",
                "skipped": "⊘",
            }.get(step["status"], "•")
            logging.info(f"{i}. {status_icon} {step['name']}: {step['description']}")
            for key, value in step.get("details", {}).items():
                logging.info(f"   {key}: {value}")

        logging.info("=" * 60)

    def _write(self, relative_path: str, data) -> Path:
        output_path = self.paths.out_dir / relative_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, bytes):
            output_path.write_bytes(data)
        else:
            output_path.write_text(data, encoding="utf-8")
        self.written.append(output_path)
        return output_path

    def reset_output(self):
        out_dir = self.paths.out_dir
        if out_dir.exists():
            shutil.rmtree(out_dir)
        (out_dir / "assets").mkdir(parents=True)
        self.add_step("Reset Output", "success", f"Recreated {out_dir.name}/ and {out_dir.name}/assets/")

    def copy_static_assets(self):
        copy_tree(self.paths.assets_dir, self.paths.out_dir / "assets")
        self.add_step("Copy Assets", "success", f"Copied {self.paths.assets_dir.name}/ into assets/")

        if copy_tree(self.paths.images_dir, self.paths.out_dir / "images", optional=True):
            self.add_step("Copy Images", "success", "Copied images/ into images/")
        else:
            logging.warning(f"⚠ Optional images directory not found, skipping: {self.paths.images_dir}")
            self.add_step("Copy Images", "skipped", "No images/ directory to mirror")

    def write_generated_assets(self):
        self._write("assets/og.png", build_default_og_png())
        self._write("assets/shell.css", f"{SHELL_CSS}\n")
        self.add_step("Generate Assets", "success", "Wrote assets/og.png and assets/shell.css")

    def load_content(self) -> ContentIndex:
        if self.content_index is None:
            self.content_index = generate_content_indexes(self.paths.content_dir, self.paths.content_index_dir)
        self.add_step(
            "Load Content",
            "success",
            "Content index ready",
            {"projects": len(self.content_index.projects), "blog posts": len(self.content_index.blog)},
        )
        return self.content_index

    def static_pages(self, content: ContentIndex) -> List[PageSpec]:
        site_title = self.site_title
        featured_project = content.projects[0] if content.projects else None
        return [
            PageSpec(
                path="index.html",
                title=f"{site_title} · Home",
                description="Data science solutions bridging exploratory analysis to production-ready outcomes.",
                body=render_home_page(featured_project),
            ),
            PageSpec(
                path="about/index.html",
                title=f"{site_title} · About",
                description="Learn about Abigael Awino, her strengths, and her toolkit.",
                body=render_about_page(),
            ),
            PageSpec(
                path="contact/index.html",
                title=f"{site_title} · Contact",
                description="Reach out via the secure contact form or connect on LinkedIn/GitHub.",
                body=render_contact_page(),
            ),
            PageSpec(
                path="contact/thanks/index.html",
                title=f"{site_title} · Message sent",
                description="Thanks for reaching out — your message has been sent.",
                body=render_contact_thanks_page(),
                robots="noindex,follow",
            ),
            PageSpec(
                path="projects/index.html",
                title=f"{site_title} · Projects",
                description="Explore project case studies in ML, analytics, and production data systems.",
                body=render_projects_page(content.projects),
            ),
            PageSpec(
                path="blog/index.html",
                title=f"{site_title} · Blog",
                description="Read notes on model monitoring, analytics implementation, and production workflows.",
                body=render_blog_index_page(content.blog),
            ),
        ]

    def write_page(self, page: PageSpec) -> Path:
        document = build_html_document(
            title=page.title,
            description=page.description,
            body=page.body,
            pathname=route_pathname_for_output(page.path),
            robots=page.robots,
            analytics=self.analytics,
            site_url=self.site_url,
            nonce_factory=self.nonce_factory,
        )
        return self._write(page.path, document)

    def write_static_pages(self, content: ContentIndex):
        pages = self.static_pages(content)
        for page in pages:
            self.write_page(page)
        self.add_step(
            "Render Pages",
            "success",
            f"Rendered {len(pages)} static routes",
            {"analytics": self.analytics.domain or "disabled"},
        )

    def resume_lines(self) -> List[str]:
        return [
            "Abigael Awino — Resume",
            "Web summary: /resume/",
            f"PDF download path: {RESUME_ASSET_PATH}",
            "This PDF is auto-generated. Replace with a full resume as needed.",
        ]

    def write_resume(self):
        self.write_page(
            PageSpec(
                path="resume/index.html",
                title=f"Resume · {self.site_title}",
                description="Download a PDF resume and view a concise web summary.",
                body=render_resume_page(),
            )
        )
        pdf_path = self._write(f"resume/{RESUME_PDF_NAME}", build_simple_pdf(self.resume_lines()))
        self.add_step("Write Resume", "success", "Rendered /resume/ and the PDF download", {"pdf": pdf_path.name})

    def write_seo_files(self):
        lastmod = self.lastmod or self.today()
        self._write("sitemap.xml", build_sitemap_xml(self.site_url, SITEMAP_PATHS, lastmod))
        self._write("robots.txt", build_robots_txt(self.site_url, allow_all=True))
        self.add_step(
            "Write SEO Files",
            "success",
            f"sitemap.xml ({len(SITEMAP_PATHS)} URLs) and robots.txt",
            {"site_url": self.site_url, "lastmod": lastmod},
        )

    def run(self) -> dict:
        """Execute the full build; any failure aborts and re-raises"""
        logging.info("=" * 60)
        logging.info(f"{self.site_title} - Static Build")
        logging.info("=" * 60)

        try:
            content = self.load_content()
            self.reset_output()
            self.copy_static_assets()
            self.write_generated_assets()
            self.write_static_pages(content)
            self.write_resume()
            self.write_seo_files()

            self.report["success"] = True
            logging.info(f"✅ Build complete: {len(self.written)} files written to {self.paths.out_dir}")
            return self.report
        except Exception as e:
            self.add_step("Build", "error", f"{type(e).__name__}: {e}")
            raise
        finally:
            self.print_report()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build the static portfolio site into dist/")
    parser.add_argument("--root", type=str, default=".",
                        help="Source root holding assets/, images/ and content/ (default: current directory)")
    parser.add_argument("--out", type=str, default=None,
                        help="Output directory (default: <root>/dist)")
    parser.add_argument("--content-index-dir", type=str, default=None,
                        help="Where generated JSON content indexes are written (default: <root>/src/generated)")
    parser.add_argument("--lastmod", type=str, default=None,
                        help="Override sitemap <lastmod> (YYYY-MM-DD, default: today in UTC)")
    parser.add_argument("--log-level", type=str, default=None,
                        help="Logging level (default: LOG_LEVEL env var or INFO)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)

    if args.lastmod:
        try:
            datetime.strptime(args.lastmod, "%Y-%m-%d")
        except ValueError:
            logging.error(f"✗ Invalid --lastmod '{args.lastmod}' (expected YYYY-MM-DD)")
            sys.exit(2)

    paths = BuildPaths.from_root(args.root, args.out, args.content_index_dir)
    builder = SiteBuilder(paths, lastmod=args.lastmod)
    try:
        builder.run()
    except Exception as e:
        logging.error(f"✗ Build failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
