import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from prize_tiers.cli.app import _build_overrides, app
from prize_tiers.domain.allocation import DistributionStyle

runner = CliRunner()

_NO_YAML = ["--config", "/nonexistent/prize_tiers.yaml"]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("PRIZE_TIERS__"):
            monkeypatch.delenv(key)


class TestComputeCommand:
    def test_table_output(self) -> None:
        result = runner.invoke(app, ["compute", "--prize", "1000", "--players", "100", "--winners", "10", *_NO_YAML])
        assert result.exit_code == 0, result.output
        assert "10 Winners / 100 Players" in result.output
        for name in ("Diamond", "Platinum", "Gold", "Silver", "Bronze"):
            assert name in result.output
        assert "£100.00" in result.output
        assert "Equal:" in result.output

    def test_text_export(self) -> None:
        result = runner.invoke(
            app,
            [
                "compute",
                "--prize",
                "100",
                "--players",
                "10",
                "--winner-mode",
                "percent",
                "--winners",
                "100",
                "--tiers",
                "3",
                "--prize-style",
                "linear",
                "--format",
                "text",
                *_NO_YAML,
            ],
        )
        assert result.exit_code == 0, result.output
        assert "Pool: £100.00 | Winners: 10" in result.stdout
        assert "Diamond: 4x @ £14.28" in result.stdout
        assert "Gold: 3x @ £4.76" in result.stdout

    def test_json_output(self) -> None:
        result = runner.invoke(
            app, ["compute", "--prize", "10", "--players", "5", "--winners", "3", "--format", "json", *_NO_YAML]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["totalWinners"] == 3
        assert [t["count"] for t in payload["tiers"]] == [1, 1, 1]
        assert payload["leftover"] == 1

    def test_invalid_prize_exits_nonzero(self) -> None:
        result = runner.invoke(app, ["compute", "--prize", "0", *_NO_YAML])
        assert result.exit_code == 1
        assert "Please enter a valid Prize Pool and Player count." in result.output

    def test_invalid_prize_json_reports_error(self) -> None:
        result = runner.invoke(app, ["compute", "--prize", "0", "--format", "json", *_NO_YAML])
        assert result.exit_code == 1
        assert json.loads(result.stdout) == {"error": "Please enter a valid Prize Pool and Player count."}

    def test_bad_style_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRIZE_TIERS__POOL__PLAYER_STYLE", "pyramid")
        result = runner.invoke(app, ["compute", *_NO_YAML])
        assert result.exit_code == 1
        assert "invalid value 'pyramid'" in result.output

    def test_yaml_config_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "pool.yaml"
        yaml_file.write_text("pool:\n  prize: 60\n  winners_val: 2\n  tiers_requested: 2\ndisplay:\n  currency_symbol: $\n")
        result = runner.invoke(app, ["compute", "--format", "text", "--config", str(yaml_file)])
        assert result.exit_code == 0, result.output
        assert "Pool: $60.00 | Winners: 2" in result.stdout
        assert "Diamond: 1x @ $30.00" in result.stdout

    def test_unknown_style_option_rejected(self) -> None:
        result = runner.invoke(app, ["compute", "--prize-style", "pyramid", *_NO_YAML])
        assert result.exit_code != 0


class TestBuildOverrides:
    def test_skips_unset_options(self) -> None:
        assert _build_overrides(prize=None, players=None) == {}

    def test_enums_stored_as_values(self) -> None:
        overrides = _build_overrides(prize=5.0, prize_style=DistributionStyle.LINEAR)
        assert overrides == {"pool": {"prize": 5.0, "prize_style": "linear"}}
