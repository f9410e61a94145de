"""Tests for the dist/ verifier"""
import pytest

from portfolio_site.build import SiteBuilder
from portfolio_site.verify import check_html_page, check_sitemap, main, verify_dist

from .conftest import FIXED_NONCE


@pytest.fixture
def dist(build_paths, fixed_nonce):
    SiteBuilder(
        build_paths,
        env={"ANALYTICS_DOMAIN": "example.com"},
        nonce_factory=fixed_nonce,
        today=lambda: "2026-01-31",
    ).run()
    return build_paths.out_dir


class TestVerifyDist:
    def test_clean_build_passes(self, dist):
        assert verify_dist(dist) == []

    def test_mismatched_nonce(self, dist):
        page = dist / "about" / "index.html"
        html = page.read_text(encoding="utf-8")
        page.write_text(html.replace(f'defer nonce="{FIXED_NONCE}"', 'defer nonce="forged"'), encoding="utf-8")
        problems = check_html_page(page)
        assert len(problems) == 1
        assert "forged" in problems[0]

    def test_duplicate_csp(self, dist):
        page = dist / "index.html"
        html = page.read_text(encoding="utf-8")
        page.write_text(
            html.replace("<head>", '<head>\n<meta http-equiv="Content-Security-Policy" content="default-src *">'),
            encoding="utf-8",
        )
        assert any("found 2" in problem for problem in verify_dist(dist))

    def test_missing_file(self, dist):
        (dist / "assets" / "og.png").unlink()
        assert "missing output file: assets/og.png" in verify_dist(dist)

    def test_corrupt_image(self, dist):
        (dist / "assets" / "og.png").write_bytes(b"not a png")
        assert any("og.png" in problem for problem in verify_dist(dist))

    def test_bad_startxref(self, dist):
        pdf_path = dist / "resume" / "abigael-awino-resume.pdf"
        data = pdf_path.read_bytes()
        head, _, _ = data.rpartition(b"startxref\n")
        pdf_path.write_bytes(head + b"startxref\n9\n%%EOF\n")
        assert any("startxref" in problem for problem in verify_dist(dist))

    def test_short_sitemap(self, dist):
        sitemap = dist / "sitemap.xml"
        xml = sitemap.read_text(encoding="utf-8")
        first_url_end = xml.index("</url>") + len("</url>")
        sitemap.write_text(xml[:xml.index("<url>")] + xml[first_url_end:], encoding="utf-8")
        assert "sitemap.xml: missing route /" in verify_dist(dist)

    def test_sitemap_check_is_quiet(self, dist, recwarn):
        assert check_sitemap(dist) == []
        assert [str(w.message) for w in recwarn.list] == []


class TestMain:
    def test_passes(self, dist):
        main(["--dist", str(dist)])

    def test_fails(self, dist):
        (dist / "robots.txt").unlink()
        with pytest.raises(SystemExit) as excinfo:
            main(["--dist", str(dist)])
        assert excinfo.value.code == 1

    def test_missing_dist(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["--dist", str(tmp_path / "nope")])
