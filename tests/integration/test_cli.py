"""
End-to-end tests of the ``simplan`` command line.
"""

from pathlib import Path

import pytest
import yaml

from simplan import MIT, import_plan
from simplan.cli import EXAMPLE_MODEL, main


def run(argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    return excinfo.value.code


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    path = tmp_path / "model.yaml"
    path.write_text(yaml.safe_dump(EXAMPLE_MODEL), encoding="utf-8")
    return path


class TestCLI:
    def test_example_prints_loadable_yaml(self, capsys):
        assert run(["example"]) == 0
        out = capsys.readouterr().out
        assert yaml.safe_load(out) == EXAMPLE_MODEL

    def test_new_to_stdout(self, model_file, capsys):
        assert run(["new", "-m", str(model_file), "-r", "2020Q1:2020Q4"]) == 0
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "Plan{MIT{Quarterly}} with range 2019Q4:2021Q1"

    def test_new_convert_show(self, model_file, tmp_path, capsys):
        plan_file = tmp_path / "plan.txt"
        csv_file = tmp_path / "plan.csv"
        assert run(["new", "-m", str(model_file), "-r", "2020Q1:2020Q4", "-o", str(plan_file)]) == 0
        assert run(["convert", str(plan_file), "-o", str(csv_file), "--delim", ",", "--alphabetical"]) == 0
        assert import_plan(csv_file) == import_plan(plan_file)
        assert csv_file.read_text(encoding="utf-8").splitlines()[4].startswith("    NAME,")

        capsys.readouterr()
        assert run(["show", str(csv_file), "--full"]) == 0
        out = capsys.readouterr().out
        assert "2019Q4:2021Q1 → y_shk, pi_shk, r_shk" in out

    def test_tab_delimiter(self, model_file, tmp_path):
        plan_file = tmp_path / "plan.tsv"
        assert run(["new", "-m", str(model_file), "-r", "2020Y", "-o", str(plan_file), "--delim", "\\t"]) == 0
        assert "\t" in plan_file.read_text(encoding="utf-8")
        assert import_plan(plan_file)[MIT.yearly(2020)] == ["y_shk", "pi_shk", "r_shk"]

    def test_compare(self, model_file, tmp_path, capsys):
        left = tmp_path / "left.txt"
        right = tmp_path / "right.txt"
        out_file = tmp_path / "cmp.txt"
        assert run(["new", "-m", str(model_file), "-r", "2020Q1:2020Q2", "-o", str(left)]) == 0
        assert run(["new", "-m", str(model_file), "-r", "2020Q2:2020Q3", "-o", str(right)]) == 0
        capsys.readouterr()

        assert run(["compare", str(left), str(right)]) == 0
        out = capsys.readouterr().out
        assert "Range  left: 2019Q4:2020Q3" in out
        assert "Range right: 2020Q1:2020Q4" in out

        assert run(["compare", str(left), str(right), "-o", str(out_file), "--pagelines", "2"]) == 0
        assert "Same variables." in out_file.read_text(encoding="utf-8")

    def test_errors_exit_with_one(self, model_file, tmp_path, capsys):
        bad = tmp_path / "bad.txt"
        bad.write_text("not a plan\n", encoding="utf-8")

        assert run(["show", str(bad)]) == 1
        assert "line 1" in capsys.readouterr().err

        assert run(["show", str(tmp_path / "missing.txt")]) == 1
        assert run(["new", "-m", str(model_file), "-r", "2020Q9"]) == 1
        assert run(["new", "-m", str(tmp_path / "missing.yaml"), "-r", "2020Q1"]) == 1
        assert run(["compare", str(bad), str(bad)]) == 1
        err = capsys.readouterr().err
        assert "Error" in err

    def test_version(self, capsys):
        assert run(["--version"]) == 0
        assert "SimPlan 0.1.0" in capsys.readouterr().out
