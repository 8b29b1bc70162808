import sys
import textwrap

import pytest
from junitparser import JUnitXml
from typer.testing import CliRunner

from minitest.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path, monkeypatch):
    """Write a config plus a uniquely named case module and return the config path."""
    module = f"cli_cases_{tmp_path.name.replace('-', '_')}"
    (tmp_path / f"{module}.py").write_text(textwrap.dedent("""\
        class GoodCase:
            def test_one(self, t):
                t.assert_equal(1, "1")

            def test_two(self, t):
                t.assert_in_delta(1.0, 1.0009)


        class BadCase:
            def test_fails(self, t):
                t.assert_equal(1, 2)
    """))

    def _write(cases: list[str], extra: str = "") -> str:
        refs = "\n".join(f"  - {module}:{c}" for c in cases)
        config = tmp_path / "minitest.yaml"
        config.write_text(f"cases:\n{refs}\n{extra}")
        return str(config)

    monkeypatch.setattr(sys, "path", list(sys.path))
    yield _write
    sys.modules.pop(module, None)


def test_run_missing_config():
    result = runner.invoke(app, ["run", "nonexistent.yaml"])
    assert result.exit_code != 0


def test_run_invalid_config(tmp_path):
    config = tmp_path / "minitest.yaml"
    config.write_text("cases: []\n")
    result = runner.invoke(app, ["run", str(config)])
    assert result.exit_code == 1
    assert "cases must not be empty" in result.output


def test_run_unresolvable_case(tmp_path):
    config = tmp_path / "minitest.yaml"
    config.write_text("cases:\n  - no_such_module_abc:Case\n")
    result = runner.invoke(app, ["run", str(config)])
    assert result.exit_code == 1
    assert "cannot import" in result.output


def test_run_passing_cases(project):
    config = project(["GoodCase"])
    result = runner.invoke(app, ["run", config, "--seed", "7"])
    assert result.exit_code == 0
    assert "Run options: --seed 7" in result.output
    assert "2 tests, 2 assertions, 0 failures, 0 errors." in result.output


def test_run_buffers_output_when_not_a_tty(project, mocker):
    import minitest.output
    from minitest.output import BufferedSink

    sink_factory = mocker.spy(minitest.output, "default_sink")
    result = runner.invoke(app, ["run", project(["GoodCase"]), "--no-shuffle"])

    assert result.exit_code == 0
    sink_factory.assert_called_once()
    assert isinstance(sink_factory.spy_return, BufferedSink)
    assert "..\n\n2 tests, 2 assertions, 0 failures, 0 errors." in result.output


def test_run_failing_case_exits_nonzero(project):
    config = project(["GoodCase", "BadCase"])
    result = runner.invoke(app, ["run", config, "--no-shuffle"])
    assert result.exit_code == 1
    assert "Run options" not in result.output
    assert "1) Failure:\ntest_fails(BadCase):" in result.output
    assert "3 tests, 3 assertions, 1 failures, 0 errors." in result.output


def test_run_writes_junit_from_config(project, tmp_path):
    config = project(["GoodCase", "BadCase"], "junit: reports/junit.xml\n")
    result = runner.invoke(app, ["run", config])
    assert result.exit_code == 1

    junit_path = tmp_path / "reports" / "junit.xml"
    assert junit_path.exists()
    xml = JUnitXml.fromfile(str(junit_path))
    suites = {s.name: s for s in xml}
    assert suites["GoodCase"].tests == 2
    assert suites["BadCase"].failures == 1


def test_run_writes_debug_log(project, tmp_path):
    config = project(["GoodCase"], "debug_log: debug.log\n")
    result = runner.invoke(app, ["run", config])
    assert result.exit_code == 0
    assert "Running GoodCase#test_one" in (tmp_path / "debug.log").read_text()


def test_init_creates_example_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    assert (tmp_path / "minitest.yaml").exists()
    assert (tmp_path / "example_cases.py").exists()


def test_init_with_custom_directory(tmp_path):
    target = tmp_path / "my-project"
    result = runner.invoke(app, ["init", "--dir", str(target)])
    assert result.exit_code == 0
    assert (target / "minitest.yaml").exists()


def test_init_skips_existing_config(tmp_path):
    (tmp_path / "minitest.yaml").write_text("cases: [keep]\n")
    result = runner.invoke(app, ["init", "--dir", str(tmp_path)])
    assert result.exit_code == 0
    assert "skipping" in result.output
    assert (tmp_path / "minitest.yaml").read_text() == "cases: [keep]\n"


def test_init_then_run(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "path", list(sys.path))
    project_dir = tmp_path / "proj"
    assert runner.invoke(app, ["init", "--dir", str(project_dir)]).exit_code == 0

    result = runner.invoke(app, ["run", str(project_dir / "minitest.yaml")])
    sys.modules.pop("example_cases", None)
    assert result.exit_code == 0
    assert "3 tests, 4 assertions, 0 failures, 0 errors." in result.output
    assert (project_dir / "reports" / "junit.xml").exists()
