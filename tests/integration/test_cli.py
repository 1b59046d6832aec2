"""End-to-end tests for the command-line interface."""

import json

import pytest

import visualcents
from visualcents.cli import main
from visualcents.config import get_settings


@pytest.fixture
def ledger(tmp_path):
    path = tmp_path / "ledger.json"
    path.write_text(
        json.dumps(
            [
                {"amount": "32.00", "date": "2024-01-15T09:30:00", "merchant_name": "星巴克", "category_id": "food"},
                {"amount": "18.50", "date": "2024-01-15T19:05:00", "merchant_name": "地铁"},
                {"amount": "8000", "date": "2024-01-10T10:00:00", "is_expense": False, "merchant_name": "Salary"},
            ],
            ensure_ascii=False,
        ),
        encoding="utf-8",
    )
    return path


@pytest.mark.integration
class TestCli:
    """Integration tests for the visualcents CLI."""

    def test_extract_text_file(self, tmp_path, capsys) -> None:
        source = tmp_path / "ocr.txt"
        source.write_text("星巴克\n¥32.00\n3月5日", encoding="utf-8")

        assert main(["extract", str(source), "--today", "2024-06-01"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["merchant_name"] == "星巴克"
        assert output["amount"] == "32.00"
        assert output["date"] == "2024-03-05"

    def test_extract_ocr_json(self, tmp_path, capsys) -> None:
        source = tmp_path / "ocr.json"
        source.write_text(
            json.dumps({"prism_wordsInfo": [{"word": "合计:20"}, {"word": "2024/03/05"}]}),
            encoding="utf-8",
        )

        assert main(["extract", str(source), "--ocr-json"]) == 0

        output = json.loads(capsys.readouterr().out)
        assert output["amount"] == "20"
        assert output["date"] == "2024-03-05"
        assert output["raw_text"] == "合计:20 2024/03/05"

    def test_extract_bad_ocr_json_fails(self, tmp_path) -> None:
        source = tmp_path / "ocr.json"
        source.write_text("<html>error</html>", encoding="utf-8")

        assert main(["extract", str(source), "--ocr-json"]) == 1

    def test_month(self, ledger, capsys) -> None:
        assert main(["month", str(ledger), "--year", "2024", "--month", "2"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "2024年2月"
        # label, 29 days, totals
        assert len(lines) == 31

    def test_month_active_only(self, ledger, capsys) -> None:
        assert main(["month", str(ledger), "--year", "2024", "--month", "1", "--active-only"]) == 0

        out = capsys.readouterr().out
        assert "2024-01-15\t-50.50\t+0\t2 txn" in out
        assert "Balance: 7949.50" in out

    def test_month_out_of_range_fails(self, ledger) -> None:
        assert main(["month", str(ledger), "--year", "2024", "--month", "13"]) == 1

    def test_timeline(self, ledger, capsys) -> None:
        assert main(["timeline", str(ledger), "--limit", "1"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "2024-01-15\tnet -50.50"
        assert "地铁" in lines[1]
        assert len(lines) == 3

    def test_week(self, capsys) -> None:
        assert main(["week", "--date", "2024-02-14"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 7
        assert lines[2].startswith("* 2024-02-14")

    def test_budget(self, ledger, capsys) -> None:
        assert main(["budget", str(ledger), "--limit", "40", "--now", "2024-01-20T12:00:00"]) == 0

        out = capsys.readouterr().out
        assert "Spent: 50.50 / 40" in out
        assert "Remaining: 0" in out
        assert "(exceeded)" in out

    def test_stats(self, ledger, capsys) -> None:
        assert main(["stats", str(ledger), "--period", "month", "--date", "2024-01-01"]) == 0

        out = capsys.readouterr().out
        assert "Transactions: 3" in out
        assert "- food: 32.00 (1 txn)" in out
        assert "- uncategorized: 18.50 (1 txn)" in out

    def test_calc(self, capsys) -> None:
        assert main(["calc", "25+12.5"]) == 0

        assert capsys.readouterr().out.strip() == "37.5"

    def test_missing_ledger_fails(self, tmp_path) -> None:
        assert main(["timeline", str(tmp_path / "missing.json")]) == 1

    def test_startup_log_reports_package_version(self, monkeypatch, capsys) -> None:
        monkeypatch.setenv("VISUALCENTS_LOG_LEVEL", "DEBUG")
        monkeypatch.setattr("visualcents.cli.__version__", "9.9.9-dev")
        get_settings.cache_clear()
        try:
            assert main(["calc", "1+1"]) == 0
        finally:
            get_settings.cache_clear()

        err = capsys.readouterr().err
        assert "visualcents_started" in err
        assert "9.9.9-dev" in err

    def test_package_version_matches_distribution(self) -> None:
        assert visualcents.__version__ == "0.1.0"
