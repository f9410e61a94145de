from pathlib import Path

import pytest

from portfolio_site.config import BuildPaths

REPO_ROOT = Path(__file__).resolve().parent.parent

PROJECT_MDX = """---
title: {title}
date: {date}
tags: [ml, analytics]
summary: Summary for {title}
caseStudyData: Data notes
caseStudyMethods: Methods notes
caseStudyResults: Results notes
caseStudyReproducibility: Reproducibility notes
caseStudyReflection: Reflection notes
tech:
  - Python
  - pandas
repo: https://github.com/example/{slug}
cover: /images/{slug}.png
gallery: [/images/{slug}-1.png]
status: published
---

Body for {title}.
"""

BLOG_MDX = """---
title: {title}
date: {date}
tags: [notes]
summary: Summary for {title}
readingTime: 5
---

Post body.
"""

FIXED_NONCE = "dGVzdC1ub25jZS0xMjM0NQ=="


def write_project(root: Path, slug: str, title: str, date: str):
    path = root / "content" / "projects" / f"{slug}.mdx"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(PROJECT_MDX.format(slug=slug, title=title, date=date), encoding="utf-8")
    return path


def write_post(root: Path, slug: str, title: str, date: str):
    path = root / "content" / "blog" / f"{slug}.mdx"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(BLOG_MDX.format(title=title, date=date), encoding="utf-8")
    return path


@pytest.fixture
def site_root(tmp_path):
    """Minimal source tree: assets/, two projects and three blog posts, no images/"""
    root = tmp_path / "site"
    (root / "assets").mkdir(parents=True)
    (root / "assets" / "analytics.js").write_text("(() => {})();\n", encoding="utf-8")
    (root / "assets" / "projects-filter.js").write_text("(() => {})();\n", encoding="utf-8")
    write_project(root, "older-project", "Older Project", "2023-01-10")
    write_project(root, "newer-project", "Newer Project", "2024-03-05")
    write_post(root, "first-post", "First Post", "2024-02-01")
    write_post(root, "second-post", "Second Post", "2024-04-12")
    write_post(root, "third-post", "Third Post", "2023-11-30")
    return root


@pytest.fixture
def build_paths(site_root):
    return BuildPaths.from_root(site_root)


@pytest.fixture
def fixed_nonce():
    return lambda: FIXED_NONCE
