"""Tests for the page body renderers"""
from bs4 import BeautifulSoup

from portfolio_site.listings import (
    filter_projects_by_tag,
    format_display_date,
    format_reading_time,
    normalize_tag,
    render_blog_index_page,
    render_blog_post_page,
    render_project_case_study,
    render_projects_page,
)
from portfolio_site.pages import (
    RESUME_ASSET_PATH,
    render_about_page,
    render_contact_page,
    render_contact_thanks_page,
    render_home_page,
    render_resume_page,
)

PROJECT = {
    "slug": "churn",
    "title": "Churn <Model>",
    "date": "2024-05-12",
    "tags": ["ML", "Time Series"],
    "summary": "Predicts churn & retention",
    "tech": ["Python", "LightGBM", "SQL", "dbt"],
    "repo": "https://github.com/example/churn",
    "caseStudyData": "Data",
    "caseStudyMethods": "Methods",
    "caseStudyResults": "Results",
    "caseStudyReproducibility": "Repro",
    "caseStudyReflection": "Reflection",
}

POST = {"slug": "drift", "title": "Drift", "date": "2024-06-20", "summary": "On drift", "readingTime": 6.5, "tags": ["ml"]}


def parse(markup):
    return BeautifulSoup(markup, "html.parser")


class TestPages:
    def test_home_with_featured_project(self):
        soup = parse(render_home_page(PROJECT))
        assert soup.find("a", href="/projects/churn") is not None
        assert "Churn &lt;Model&gt;" in render_home_page(PROJECT)

    def test_home_without_projects(self):
        soup = parse(render_home_page(None))
        assert soup.find("a", href="/projects") is not None

    def test_about_hooks(self):
        soup = parse(render_about_page())
        assert soup.find(attrs={"data-about-page": True}) is not None

    def test_contact_form_posts_to_thanks(self):
        soup = parse(render_contact_page())
        form = soup.find("form")
        assert form["action"] == "/contact/thanks/"
        assert form["method"] == "POST"

    def test_contact_thanks(self):
        assert render_contact_thanks_page().strip()

    def test_resume_hooks(self):
        soup = parse(render_resume_page())
        for hook in ("data-resume-page", "data-resume-core-skills", "data-resume-highlights", "data-resume-note"):
            assert soup.find(attrs={hook: True}) is not None
        download = soup.find("a", attrs={"data-analytics-event": "resume_download"})
        assert download["href"] == RESUME_ASSET_PATH


class TestProjects:
    def test_tag_helpers(self):
        assert normalize_tag(" Time Series ") == "time-series"
        assert normalize_tag("time_series") == "time-series"
        assert filter_projects_by_tag([PROJECT], "time-series") == [PROJECT]
        assert filter_projects_by_tag([PROJECT], "nlp") == []
        assert filter_projects_by_tag([PROJECT], "All") == [PROJECT]

    def test_projects_page(self):
        soup = parse(render_projects_page([PROJECT]))
        card = soup.find(attrs={"data-project-card": True})
        assert card["data-tags"] == "ml,time-series"
        assert soup.find(id="projects-grid") is not None
        assert len(soup.find_all("button", attrs={"data-filter-button": True})) == 6
        assert soup.find(attrs={"data-projects-status": True}) is not None
        assert len(card.find_all("span", class_="badge-outline")) == 3

    def test_projects_page_escapes(self):
        markup = render_projects_page([PROJECT])
        assert "Churn &lt;Model&gt;" in markup
        assert "churn &amp; retention" in markup
        assert "<Model>" not in markup

    def test_empty_projects_page(self):
        assert "No projects available yet" in render_projects_page([])

    def test_case_study_sections(self):
        soup = parse(render_project_case_study(PROJECT))
        sections = [s["data-case-study-section"] for s in soup.find_all("section")]
        assert sections == [
            "summary",
            "caseStudyData",
            "caseStudyMethods",
            "caseStudyResults",
            "caseStudyReproducibility",
            "caseStudyReflection",
        ]


class TestBlog:
    def test_reading_time(self):
        assert format_reading_time(6.5) == "7 min read"
        assert format_reading_time(0) == "1 min read"
        assert format_reading_time(None) == "1 min read"

    def test_display_date(self):
        assert format_display_date("2024-05-02") == "May 2, 2024"
        assert format_display_date("soon") == "soon"

    def test_blog_index(self):
        soup = parse(render_blog_index_page([POST]))
        card = soup.find(attrs={"data-blog-card": "drift"})
        assert card.find("a")["href"] == "/blog/drift"
        assert "7 min read" in card.get_text()

    def test_empty_blog_index(self):
        assert "No published posts yet." in render_blog_index_page([])

    def test_post_page(self):
        soup = parse(render_blog_post_page(POST, "<p>Body</p>"))
        assert soup.find(attrs={"data-blog-post-body": True}).get_text() == "Body"
        assert soup.find("h1").get_text() == "Drift"
