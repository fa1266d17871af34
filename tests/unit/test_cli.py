"""Tests for the command line interface."""
import json

import pytest
from typer.testing import CliRunner

from aiready.cli.run import app

runner = CliRunner()


@pytest.fixture
def write_json(tmp_path):
    def _write(name, payload):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


class TestScoreCommand:
    """aiready score"""

    def test_excellent_page_exits_zero(self, write_json, excellent_data):
        """A passing page exits 0."""
        path = write_json("page.json", excellent_data)
        result = runner.invoke(app, ["score", str(path)])

        assert result.exit_code == 0
        assert "98/100" in result.output

    def test_failing_grade_exits_one(self, write_json, worst_data):
        """A D or F grade exits 1."""
        path = write_json("page.json", worst_data)
        result = runner.invoke(app, ["score", str(path)])

        assert result.exit_code == 1
        assert "MISSING_TITLE" in result.output

    def test_json_output(self, write_json, excellent_data):
        """JSON output carries the page id."""
        path = write_json("page.json", excellent_data)
        result = runner.invoke(app, ["score", str(path), "-o", "json", "--page-id", "p-9"])

        data = json.loads(result.output)
        assert data["overall_score"] == 98
        assert data["page_id"] == "p-9"

    def test_save_report(self, write_json, excellent_data, tmp_path):
        """Save a Markdown report to a file."""
        path = write_json("page.json", excellent_data)
        target = tmp_path / "report.md"
        result = runner.invoke(app, ["score", str(path), "-o", "markdown", "-s", str(target)])

        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8").startswith("# AI Readiness Report")

    def test_ungraded_exits_one(self, write_json):
        """Malformed signals exit 1 with the reasons."""
        path = write_json("page.json", {"url": "https://example.com/"})
        result = runner.invoke(app, ["score", str(path)])

        assert result.exit_code == 1
        assert "could not be graded" in result.output

    def test_invalid_json(self, tmp_path):
        """A file that is not JSON exits 1."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["score", str(path)])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_missing_file(self, tmp_path):
        """A missing file exits 1."""
        result = runner.invoke(app, ["score", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_invalid_output_format(self, write_json, excellent_data):
        """An unknown output format exits 1."""
        path = write_json("page.json", excellent_data)
        result = runner.invoke(app, ["score", str(path), "-o", "xml"])

        assert result.exit_code == 1
        assert "Invalid output format" in result.output

    def test_nan_signals_score_cleanly(self, tmp_path, excellent_data):
        """NaN values in a signals file are treated as missing."""
        data = {**excellent_data, "word_count": float("nan"), "lighthouse": {"performance": float("nan")}}
        path = tmp_path / "page.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(app, ["score", str(path), "-o", "json"])

        report = json.loads(result.output)
        assert report["performance_score"] == 50
        assert "NaN" not in result.output


class TestOtherCommands:
    """aiready classify, quick-wins, platforms, visibility, progress and version"""

    def test_classify(self):
        """Classify a URL with a schema type."""
        result = runner.invoke(app, ["classify", "https://example.com/blog/post", "-t", "BlogPosting"])

        assert result.exit_code == 0
        assert "blog_post" in result.output
        assert "0.88" in result.output

    def test_quick_wins_json(self, write_json):
        """Rank quick wins from an issues file."""
        path = write_json("issues.json", [
            {"page_id": "p1", "code": "MISSING_H1"},
            {"page_id": "p2", "code": "AI_CRAWLER_BLOCKED"},
        ])
        result = runner.invoke(app, ["quick-wins", str(path), "-o", "json"])

        assert result.exit_code == 0
        assert [w["code"] for w in json.loads(result.output)] == ["AI_CRAWLER_BLOCKED", "MISSING_H1"]

    def test_quick_wins_requires_list(self, write_json):
        """An issues file must hold a list."""
        path = write_json("issues.json", {"code": "MISSING_H1"})
        result = runner.invoke(app, ["quick-wins", str(path)])

        assert result.exit_code == 1

    def test_platforms(self, write_json):
        """Evaluate every platform from an issues file."""
        path = write_json("issues.json", ["MISSING_LLMS_TXT"])
        result = runner.invoke(app, ["platforms", str(path), "-o", "json"])

        rows = json.loads(result.output)
        assert [r["platform"] for r in rows] == ["ChatGPT", "Claude", "Perplexity", "Gemini"]

    def test_visibility(self):
        """Score visibility from rate options."""
        result = runner.invoke(app, ["visibility", "--llm-mentions", "1", "--ai-search", "1", "-o", "json"])

        assert json.loads(result.output)["overall"] == 70

    def test_progress(self, write_json):
        """Compute progress from a crawl history file."""
        crawls = [
            {
                "id": "c1",
                "created_at": "2024-01-01T00:00:00",
                "pages": [{"id": "a", "url": "https://example.com/"}],
                "scores": [{"page_id": "a", "overall_score": 50}],
                "issues": [],
            },
            {
                "id": "c2",
                "created_at": "2024-02-01T00:00:00+00:00",
                "pages": [{"id": "b", "url": "https://example.com/"}],
                "scores": [{"page_id": "b", "overall_score": 65}],
                "issues": [],
            },
        ]
        result = runner.invoke(app, ["progress", str(write_json("history.json", crawls)), "-o", "json"])

        assert result.exit_code == 0
        progress = json.loads(result.output)["progress"]
        assert progress["current_crawl_id"] == "c2"
        assert progress["score_delta"] == 15

    def test_progress_single_crawl(self, write_json):
        """One completed crawl reports missing progress."""
        crawls = [{"id": "c1", "pages": [], "scores": [], "issues": []}]
        result = runner.invoke(app, ["progress", str(write_json("history.json", crawls))])

        assert result.exit_code == 0
        assert "Not enough completed crawls" in result.output

    def test_version(self):
        """Print the version."""
        result = runner.invoke(app, ["version"])
        assert "aiready" in result.output
