from findash.cli import build_parser, main


class TestParser:
    def test_loan_defaults(self):
        args = build_parser().parse_args(["loan", "100000", "7.5", "120"])
        assert args.command == "loan"
        assert args.timing == "both"
        assert args.strategy == "prepayment"
        assert args.csv is None


class TestLoanCommand:
    def test_report(self, capsys):
        code = main([
            "loan", "100000", "7.5", "120",
            "--prepay", "10000", "--prepay-month", "12", "--penalty", "1", "--extra", "200",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Repayment Scenarios" in out
        assert "Yearly Summary: prepayment" in out
        assert "Best strategy:" in out

    def test_csv_export(self, tmp_path, capsys):
        path = tmp_path / "schedule.csv"
        code = main(["loan", "100000", "7.5", "120", "--strategy", "baseline", "--csv", str(path), "--secondary"])
        assert code == 0
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("Month,EMI")
        assert lines[0].endswith("Balance INR")
        assert len(lines) == 121
        assert "Schedule written to" in capsys.readouterr().out

    def test_zero_term_is_an_error(self, capsys):
        code = main(["loan", "100000", "7.5", "0"])
        assert code == 1
        assert "Term must be positive" in capsys.readouterr().err


class TestDepositCommand:
    def test_report(self, capsys):
        code = main(["deposit", "100000", "12", "12", "--compounding", "yearly", "--tax", "30"])
        out = capsys.readouterr().out
        assert code == 0
        assert "112,000.00" in out
        assert "108,400.00" in out


class TestCompareCommand:
    def test_recommends_invest_at_high_rate(self, capsys):
        code = main([
            "compare", "100000", "7.5", "120",
            "--prepay", "10000", "--prepay-month", "12", "--invest-rate", "30",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Recommendation:       INVEST" in out
