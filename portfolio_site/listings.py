"""Projects and blog renderers: index pages, cards, case studies, tag filters."""
from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Dict, List

from .seo import escape_html

SUPPORTED_PROJECT_FILTERS = [
    {"value": "ml", "label": "ML"},
    {"value": "analytics", "label": "Analytics"},
    {"value": "visualization", "label": "Visualization"},
    {"value": "nlp", "label": "NLP"},
    {"value": "time-series", "label": "Time Series"},
]

CASE_STUDY_SECTIONS = [
    ("summary", "Summary"),
    ("caseStudyData", "Data"),
    ("caseStudyMethods", "Methods"),
    ("caseStudyResults", "Results"),
    ("caseStudyReproducibility", "Reproducibility"),
    ("caseStudyReflection", "Reflection"),
]


def normalize_tag(tag) -> str:
    return re.sub(r"\s+", "-", str(tag).strip().lower().replace("_", "-"))


def filter_projects_by_tag(projects: List[Dict[str, Any]], tag: str) -> List[Dict[str, Any]]:
    """Projects carrying ``tag`` (compared normalized); "all" returns everything"""
    normalized = normalize_tag(tag)
    if normalized == "all":
        return list(projects)
    return [p for p in projects if any(normalize_tag(t) == normalized for t in p.get("tags", []))]


def format_reading_time(reading_time) -> str:
    try:
        minutes = float(reading_time)
    except (TypeError, ValueError):
        minutes = 0
    return f"{max(1, int(minutes + 0.5))} min read"


def format_display_date(value: str) -> str:
    try:
        parsed = datetime.strptime(value, "%Y-%m-%d")
    except (TypeError, ValueError):
        return escape_html(value or "")
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"


def _badges(items, variant: str) -> str:
    return "".join(f'<span class="badge badge-{variant}">{escape_html(item)}</span>' for item in items)


def render_project_card(project: Dict[str, Any]) -> str:
    tags = project.get("tags", [])
    slug = escape_html(project.get("slug", ""))
    repo = project.get("repo")
    repo_link = (
        f'<a class="button button-outline button-icon" href="{escape_html(repo)}" target="_blank" rel="noopener noreferrer" '
        f'data-analytics-event="projects_repo_click" data-analytics-prop-slug="{slug}" aria-label="View repository">Repo</a>'
        if repo
        else ""
    )

    return f"""<div class="card card-hover" data-project-card data-tags="{escape_html(",".join(normalize_tag(t) for t in tags))}">
      <div class="card-header space-y-3">
        <div class="flex flex-wrap gap-1">{_badges(tags, "secondary")}</div>
        <h2 class="card-title text-xl">{escape_html(project.get("title", ""))}</h2>
        <p class="card-description text-base">{escape_html(project.get("summary", ""))}</p>
      </div>
      <div class="card-content space-y-4">
        <div class="flex flex-wrap gap-1">{_badges((project.get("tech") or [])[:3], "outline")}</div>
        <div class="text-sm text-muted-foreground">{format_display_date(project.get("date", ""))}</div>
      </div>
      <div class="card-footer flex gap-2 pt-4">
        <a class="button button-primary flex-1" href="/projects/{slug}" data-analytics-event="projects_case_study_click" data-analytics-prop-slug="{slug}">Read Case Study</a>
        {repo_link}
      </div>
    </div>"""


def render_filter_buttons() -> str:
    buttons = [
        '<button class="projects-filter__button is-active" data-filter="all" data-filter-button type="button" '
        'aria-pressed="true" aria-controls="projects-grid" data-analytics-event="projects_filter_click" '
        'data-analytics-prop-filter="all">All</button>'
    ]
    for option in SUPPORTED_PROJECT_FILTERS:
        value = escape_html(option["value"])
        buttons.append(
            f'<button class="projects-filter__button" data-filter="{value}" data-filter-button type="button" '
            f'aria-pressed="false" aria-controls="projects-grid" data-analytics-event="projects_filter_click" '
            f'data-analytics-prop-filter="{value}">{escape_html(option["label"])}</button>'
        )
    return "".join(buttons)


def render_projects_page(projects: List[Dict[str, Any]]) -> str:
    if projects:
        grid = f"""<div class="grid gap-6 md:grid-cols-2" id="projects-grid">
        {chr(10).join(render_project_card(p) for p in projects)}
      </div>"""
    else:
        grid = """<div class="card">
        <div class="card-content p-12 text-center">
          <p class="text-muted-foreground text-lg">No projects available yet. Check back soon!</p>
        </div>
      </div>"""

    return f"""<div class="container space-y-8">
      <div class="text-center space-y-4">
        <h1 class="text-3xl md:text-4xl font-bold tracking-tight">Projects</h1>
        <p class="text-xl text-muted-foreground max-w-2xl mx-auto">Explore project case studies in ML, analytics, and production data systems.</p>
        <div class="projects-filter" role="group" aria-label="Filter projects by topic">{render_filter_buttons()}</div>
        <p class="text-sm text-muted-foreground" data-projects-status aria-live="polite"></p>
      </div>
      {grid}
      <div class="text-center pt-8">
        <a class="button button-outline" href="/">← Back to Home</a>
      </div>
    </div>
    <script src="/assets/projects-filter.js" defer></script>"""


def render_project_case_study(project: Dict[str, Any]) -> str:
    sections = "\n".join(
        f"""<section class="case-study__section" data-case-study-section="{escape_html(key)}">
        <h2>{escape_html(title)}</h2>
        <p>{escape_html(project.get(key, ""))}</p>
      </section>"""
        for key, title in CASE_STUDY_SECTIONS
    )
    slug = escape_html(project.get("slug", ""))
    return f"""<article class="case-study" data-case-study="{slug}">
      <header class="case-study__header">
        <p class="case-study__meta">{escape_html(project.get("date", ""))}</p>
        <h1 class="case-study__title">{escape_html(project.get("title", ""))}</h1>
      </header>
      {sections}
      <footer class="case-study__footer">
        <a class="case-study__repo" href="{escape_html(project.get("repo", ""))}" data-analytics-event="case_study_repo_click" data-analytics-prop-slug="{slug}">View source repository</a>
      </footer>
    </article>"""


def _post_meta(post: Dict[str, Any]) -> str:
    return f"""<div class="flex items-center gap-4 text-sm text-muted-foreground">
          <span>{escape_html(post.get("date", ""))}</span>
          <span>{escape_html(format_reading_time(post.get("readingTime")))}</span>
        </div>"""


def render_blog_card(post: Dict[str, Any]) -> str:
    slug = escape_html(post.get("slug", ""))
    tags = _badges(post.get("tags") or [], "secondary")
    return f"""<div class="card card-hover" data-blog-card="{slug}">
      <div class="card-header">
        <h2 class="card-title">
          <a href="/blog/{slug}" data-analytics-event="blog_post_open" data-analytics-prop-slug="{slug}">{escape_html(post.get("title", ""))}</a>
        </h2>
        <p class="card-description">{escape_html(post.get("summary", ""))}</p>
      </div>
      <div class="card-content space-y-4">
        {_post_meta(post)}
        {f'<div class="flex flex-wrap gap-2">{tags}</div>' if tags else ""}
      </div>
    </div>"""


def render_blog_index_page(posts: List[Dict[str, Any]]) -> str:
    if posts:
        listing = f"""<div class="grid gap-6 md:grid-cols-2">
        {chr(10).join(render_blog_card(post) for post in posts)}
      </div>"""
    else:
        listing = """<div class="card">
        <div class="card-content p-12 text-center">
          <p class="text-muted-foreground text-lg">No published posts yet.</p>
        </div>
      </div>"""

    return f"""<div class="container space-y-8">
      <div class="text-center space-y-4">
        <h1 class="text-3xl md:text-4xl font-bold tracking-tight">Blog</h1>
        <p class="text-xl text-muted-foreground max-w-2xl mx-auto">Read notes on model monitoring, analytics implementation, and production workflows.</p>
      </div>
      {listing}
      <div class="text-center">
        <a class="button button-outline" href="/">← Back to Home</a>
      </div>
    </div>"""


def render_blog_post_page(post: Dict[str, Any], body_markup: str = "") -> str:
    tags = _badges(post.get("tags") if isinstance(post.get("tags"), list) else [], "secondary")
    body = (
        f"""<div class="card">
        <div class="card-content">
          <div class="prose prose-slate max-w-none" data-blog-post-body>{body_markup}</div>
        </div>
      </div>"""
        if body_markup
        else ""
    )
    return f"""<div class="container space-y-8">
      <div class="card">
        <div class="card-header space-y-4">
          {_post_meta(post)}
          <h1 class="text-3xl md:text-4xl font-bold tracking-tight">{escape_html(post.get("title", ""))}</h1>
          <p class="text-lg text-muted-foreground">{escape_html(post.get("summary", ""))}</p>
          {f'<div class="flex flex-wrap gap-2">{tags}</div>' if tags else ""}
        </div>
      </div>
      {body}
      <div class="text-center">
        <a class="button button-outline" href="/blog">← Back to Blog</a>
      </div>
    </div>"""
