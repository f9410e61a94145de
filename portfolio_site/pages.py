"""
Page body renderers: home, about, contact, contact/thanks and resume.

Each returns an HTML fragment for the <main> element; every interpolated value
is escaped.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from .seo import escape_html

RESUME_ASSET_PATH = "/resume/abigael-awino-resume.pdf"

HOME_LINKS = {
    "resume": RESUME_ASSET_PATH,
    "github": "https://github.com/abigaelawino",
    "linkedin": "https://www.linkedin.com/in/abigaelawino/",
}

CONTACT_LINKS = {
    "github": "https://github.com/abigaelawino",
    "linkedin": "https://www.linkedin.com/in/abigaelawino/",
}

CONTACT_COPY = {
    "heading": "Contact",
    "intro": "Send a message using the form below. I typically respond within 1–2 business days.",
    "privacyNote": (
        "Privacy: This form collects your name, email address, and message so I can reply. "
        "Submissions are stored in Netlify Forms for delivery and spam filtering. "
        "I will not share or sell your information, and I can delete it on request."
    ),
    "elsewhereHeading": "Elsewhere",
}

CONTACT_THANKS_COPY = {
    "heading": "Message sent",
    "intro": "Thanks for reaching out. I’ll reply as soon as I can.",
    "followUp": "If you don’t hear back within 2 business days, feel free to connect on LinkedIn.",
    "primaryCtaLabel": "Back to home",
    "primaryCtaHref": "/",
}

ABOUT_CONTENT = {
    "bio": "Data scientist passionate about transforming complex data into actionable insights and production-ready solutions.",
    "strengths": [
        "End-to-end project development from data collection to deployment",
        "Strong foundation in statistical methods and experimental design",
        "Experience with both structured and unstructured data",
        "Excellent communication of complex technical concepts",
        "Commitment to reproducible research and documentation",
    ],
    "skills": [
        {"category": "Machine Learning", "items": ["Python", "TensorFlow", "PyTorch", "Scikit-learn", "XGBoost"]},
        {"category": "Data Engineering", "items": ["SQL", "PostgreSQL", "MongoDB", "Apache Spark", "Airflow"]},
        {"category": "Programming", "items": ["Python", "JavaScript", "TypeScript", "R", "Bash"]},
        {"category": "Analytics & Visualization", "items": ["Tableau", "Power BI", "Matplotlib", "Seaborn", "Plotly"]},
    ],
}

RESUME_CONTENT = {
    "headline": "Data Scientist | Machine Learning | Analytics",
    "summary": (
        "I build practical machine learning and analytics systems that move from prototype to production "
        "with clear success metrics, reliable pipelines, and stakeholder-ready communication."
    ),
    "coreSkills": [
        "Python, SQL, pandas, scikit-learn, PyTorch",
        "Experiment design, evaluation, and baseline-first modeling",
        "Data pipelines, reproducibility, and monitoring",
        "Dashboards and decision support (Tableau / Power BI)",
    ],
    "experienceHighlights": [
        "Translate ambiguous business questions into scoped data workstreams and measurable outcomes.",
        "Deliver models and analytics that are explainable, validated, and production-aware.",
        "Partner cross-functionally to ship insights into real workflows (dashboards, alerts, playbooks).",
    ],
    "nextLinks": [
        {"label": "Projects", "href": "/projects"},
        {"label": "Contact", "href": "/contact"},
        {"label": "About", "href": "/about"},
    ],
}

BACK_HOME = """<div class="text-center">
        <a class="button button-outline" href="/">← Back to Home</a>
      </div>"""


def _as_list(value) -> List[Any]:
    return value if isinstance(value, list) else []


def _merged(defaults: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {**defaults, **(overrides or {})}


def render_home_page(featured_project: Optional[Dict[str, Any]] = None) -> str:
    if featured_project:
        slug = escape_html(featured_project.get("slug", ""))
        featured = f"""<div class="card card-hover">
        <div class="card-header">
          <div class="badge badge-secondary">Featured project</div>
          <h2 class="card-title">{escape_html(featured_project.get("title", ""))}</h2>
          <p class="card-description">{escape_html(featured_project.get("summary", ""))}</p>
        </div>
        <div class="card-content">
          <a class="button button-primary button-lg" href="/projects/{slug}" data-analytics-event="home_featured_case_study_click" data-analytics-prop-slug="{slug}">View Projects →</a>
          <a class="button button-outline button-lg" href="{escape_html(featured_project.get("repo", ""))}" target="_blank" rel="noopener noreferrer" data-analytics-event="home_featured_repo_click" data-analytics-prop-slug="{slug}">View Repository</a>
        </div>
      </div>"""
    else:
        featured = """<div class="card">
        <div class="card-header">
          <div class="badge badge-secondary">Featured project</div>
          <h2 class="card-title">Project spotlight coming soon</h2>
          <p class="card-description">Browse the projects page for recent case studies in ML, analytics, and production data tooling.</p>
        </div>
        <div class="card-content">
          <a class="button button-primary button-lg" href="/projects" data-analytics-event="home_browse_projects_click">Browse Projects</a>
        </div>
      </div>"""

    return f"""<div class="container space-y-12">
      <section class="text-center space-y-6">
        <h1 class="text-4xl md:text-6xl font-bold tracking-tight">Data Science Portfolio</h1>
        <p class="text-xl text-muted-foreground max-w-2xl mx-auto">
          End-to-end data projects showcasing rigorous analysis, reproducible methods, and production-ready solutions.
        </p>
        <div class="flex flex-col sm:flex-row gap-4 justify-center">
          <a class="button button-primary button-lg" href="/projects">View Projects</a>
          <a class="button button-outline button-lg" href="/contact">Get in Touch</a>
          <a class="button button-outline button-lg" href="{escape_html(HOME_LINKS["resume"])}" data-analytics-event="home_resume_click">Resume</a>
        </div>
      </section>

      <section class="space-y-8">
        <div class="text-center space-y-2">
          <h2 class="text-3xl font-bold tracking-tight">Featured Projects</h2>
          <p class="text-muted-foreground">Recent work in machine learning, analytics, and data visualization</p>
        </div>
        {featured}
      </section>

      <section class="text-center space-y-4">
        <h2 class="text-2xl font-bold tracking-tight">Let's Work Together</h2>
        <div class="flex flex-col sm:flex-row gap-4 justify-center">
          <a class="button button-primary" href="/contact">Contact Me</a>
          <a class="button button-outline" href="/about">Learn More</a>
        </div>
      </section>
    </div>"""


def render_about_page(content: Optional[Dict[str, Any]] = None) -> str:
    resolved = _merged(ABOUT_CONTENT, content)

    strengths = "".join(
        f'<li class="flex items-start gap-3"><span class="text-muted-foreground">{escape_html(item)}</span></li>'
        for item in _as_list(resolved.get("strengths"))
    )
    skills = "".join(
        f"""<div class="space-y-3">
              <h3 class="font-semibold">{escape_html(group.get("category", ""))}</h3>
              <div class="flex flex-wrap gap-2">{"".join(f'<span class="badge badge-secondary">{escape_html(item)}</span>' for item in _as_list(group.get("items")))}</div>
            </div>"""
        for group in _as_list(resolved.get("skills"))
        if isinstance(group, dict)
    )

    return f"""<div class="container space-y-12" data-about-page>
      <section class="text-center space-y-4">
        <h1 class="text-4xl font-bold tracking-tight">About Me</h1>
        <p class="text-xl text-muted-foreground max-w-2xl mx-auto">{escape_html(resolved.get("bio", ""))}</p>
      </section>

      <div class="card" data-about-strengths>
        <div class="card-header"><h2 class="card-title">Core Strengths</h2></div>
        <div class="card-content">
          <ul class="space-y-3">{strengths}</ul>
        </div>
      </div>

      <div class="card" data-about-skills>
        <div class="card-header">
          <h2 class="card-title">Technical Toolkit</h2>
          <p class="card-description">Technologies and tools I work with regularly</p>
        </div>
        <div class="card-content">
          <div class="grid gap-6 md:grid-cols-2">{skills}</div>
        </div>
      </div>

      <div class="card">
        <div class="card-header"><h2 class="card-title">Let's Connect</h2></div>
        <div class="card-content flex flex-wrap gap-3">
          <a class="button button-primary" href="/contact">Get in Touch</a>
          <a class="button button-outline" href="/projects">View Projects</a>
          <a class="button button-outline" href="/resume/">Resume</a>
        </div>
      </div>

      {BACK_HOME}
    </div>"""


def _render_elsewhere_links(links: Dict[str, str]) -> str:
    entries = [
        (label, href)
        for label, href in (("GitHub", links.get("github")), ("LinkedIn", links.get("linkedin")))
        if isinstance(href, str) and href.strip()
    ]
    if not entries:
        return ""
    items = "\n".join(
        f'<li class="contact-links__item"><a class="contact-links__link" href="{escape_html(href)}" target="_blank" rel="noopener noreferrer" data-analytics-event="contact_social_click" data-analytics-prop-destination="{escape_html(label.lower())}">{escape_html(label)}</a></li>'
        for label, href in entries
    )
    return f"""<nav aria-label="Social links">
          <ul class="contact-links">
            {items}
          </ul>
        </nav>"""


def render_contact_page(links: Optional[Dict[str, str]] = None, copy: Optional[Dict[str, str]] = None) -> str:
    resolved_links = _merged(CONTACT_LINKS, links)
    resolved_copy = _merged(CONTACT_COPY, copy)
    field_class = "w-full border border-input bg-background px-3 py-2 text-sm rounded-md"

    return f"""<div class="container space-y-12">
      <section class="text-center space-y-4">
        <h1 class="text-4xl font-bold tracking-tight">{escape_html(resolved_copy["heading"])}</h1>
        <p class="text-xl text-muted-foreground max-w-2xl mx-auto">{escape_html(resolved_copy["intro"])}</p>
      </section>

      <div class="card">
        <div class="card-header">
          <h2 class="card-title">Send a Message</h2>
        </div>
        <div class="card-content">
          <form name="contact" method="POST" action="/contact/thanks/" aria-describedby="contact-privacy-note" data-netlify="true" netlify-honeypot="bot-field" data-contact-form data-analytics-event="contact_form_submit" class="space-y-4">
            <input type="hidden" name="form-name" value="contact" />
            <div class="contact-form__honeypot" aria-hidden="true">
              <label>Don't fill this out if you're human: <input name="bot-field" tabindex="-1" autocomplete="off" /></label>
            </div>
            <div class="space-y-2">
              <label class="font-semibold" for="contact-name">Name</label>
              <input class="{field_class}" id="contact-name" name="name" type="text" autocomplete="name" required />
            </div>
            <div class="space-y-2">
              <label class="font-semibold" for="contact-email">Email</label>
              <input class="{field_class}" id="contact-email" name="email" type="email" autocomplete="email" required />
            </div>
            <div class="space-y-2">
              <label class="font-semibold" for="contact-message">Message</label>
              <textarea class="{field_class}" id="contact-message" name="message" required></textarea>
            </div>
            <button class="button button-primary" type="submit">Send Message</button>
            <p class="text-sm text-muted-foreground" id="contact-privacy-note" data-contact-privacy>{escape_html(resolved_copy["privacyNote"])}</p>
          </form>
        </div>
      </div>

      <section class="space-y-2">
        <h2 class="text-2xl font-bold tracking-tight">{escape_html(resolved_copy["elsewhereHeading"])}</h2>
        {_render_elsewhere_links(resolved_links)}
      </section>

      {BACK_HOME}
    </div>"""


def render_contact_thanks_page(copy: Optional[Dict[str, str]] = None) -> str:
    resolved = _merged(CONTACT_THANKS_COPY, copy)
    return f"""<div class="container">
      <div class="card">
        <div class="card-content space-y-4">
          <h1 class="text-3xl font-bold tracking-tight">{escape_html(resolved["heading"])}</h1>
          <p class="text-muted-foreground">{escape_html(resolved["intro"])}</p>
          <p class="text-muted-foreground">{escape_html(resolved["followUp"])}</p>
          <a class="button button-primary" href="{escape_html(resolved["primaryCtaHref"])}" data-analytics-event="contact_thanks_primary_click">{escape_html(resolved["primaryCtaLabel"])}</a>
        </div>
      </div>
    </div>"""


def render_resume_page(content: Optional[Dict[str, Any]] = None) -> str:
    resolved = _merged(RESUME_CONTENT, content)

    next_links = "".join(
        f'<a class="button button-outline" href="{escape_html(link.get("href", ""))}" data-analytics-event="resume_next_link_click" data-analytics-prop-destination="{escape_html(str(link.get("label", "")).lower())}">{escape_html(link.get("label", ""))}</a>'
        for link in _as_list(resolved.get("nextLinks"))
        if isinstance(link, dict)
    )
    core_skills = "".join(
        f'<li class="flex items-start gap-2"><span>{escape_html(skill)}</span></li>'
        for skill in _as_list(resolved.get("coreSkills"))
    )
    highlights = "".join(
        f'<li class="flex items-start gap-3"><span class="text-muted-foreground">{escape_html(item)}</span></li>'
        for item in _as_list(resolved.get("experienceHighlights"))
    )

    return f"""<div class="container space-y-8" data-resume-page>
      <div class="text-center space-y-4">
        <h1 class="text-4xl font-bold tracking-tight">Resume</h1>
        <p class="text-xl text-muted-foreground max-w-2xl mx-auto">Download a PDF resume and view a concise web summary.</p>
        <div class="flex flex-wrap gap-3 justify-center">
          <a class="button button-primary" href="{escape_html(RESUME_ASSET_PATH)}" download data-analytics-event="resume_download">Download PDF</a>
          {next_links}
        </div>
      </div>

      <div class="card">
        <div class="card-header"><h2 class="card-title">{escape_html(resolved.get("headline", ""))}</h2></div>
        <div class="card-content"><p class="text-muted-foreground">{escape_html(resolved.get("summary", ""))}</p></div>
      </div>

      <div class="card" data-resume-core-skills>
        <div class="card-header"><h2 class="card-title">Core Skills</h2></div>
        <div class="card-content"><ul class="space-y-2">{core_skills}</ul></div>
      </div>

      <div class="card" data-resume-highlights>
        <div class="card-header"><h2 class="card-title">Experience Highlights</h2></div>
        <div class="card-content"><ul class="space-y-3">{highlights}</ul></div>
      </div>

      <div class="card" data-resume-note>
        <div class="card-header"><h2 class="card-title">About This Page</h2></div>
        <div class="card-content">
          <p class="text-muted-foreground">This page is a concise, web-friendly overview. The downloadable PDF contains the full, formatted resume.</p>
        </div>
      </div>

      {BACK_HOME}
    </div>"""
