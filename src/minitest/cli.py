from __future__ import annotations

from pathlib import Path
import sys

import typer

app = typer.Typer(name="minitest", help="Run minitest test cases")


@app.command()
def run(
    config: str = typer.Argument(help="Path to minitest YAML config"),
    seed: int | None = typer.Option(None, help="Seed for test ordering"),
    shuffle: bool = typer.Option(
        True, "--shuffle/--no-shuffle", help="Run tests within a case in random order"
    ),
    junit: str | None = typer.Option(None, help="Write JUnit XML to this path"),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
):
    """Run the test cases listed in a config file."""
    from minitest.config import ConfigError, load_config, resolve_case
    from minitest.output import default_sink
    from minitest.reporting.junit import write_junit
    from minitest.runner import Runner
    from minitest.verbose import setup_logger

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        run_config = load_config(config_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    # Case modules are imported relative to the config file
    config_dir = str(config_path.parent.resolve())
    if config_dir not in sys.path:
        sys.path.insert(0, config_dir)

    debug_file = Path(run_config.debug_log) if run_config.debug_log else None
    logger = setup_logger(debug_file, verbose=verbose)

    runner = Runner(
        output=default_sink(sys.stdout),
        seed=seed if seed is not None else run_config.seed,
        shuffle=shuffle and run_config.shuffle,
        logger=logger,
    )

    try:
        for ref in run_config.cases:
            runner.new_test_case(resolve_case(ref))
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    report = runner.run()

    junit_path = junit or run_config.junit
    if junit_path:
        path = write_junit(report, Path(junit_path))
        typer.echo(f"JUnit report: {path}")

    # Exit with non-zero if any test failed or errored
    if not report.passed:
        raise typer.Exit(1)


@app.command()
def init(
    dir: str = typer.Option(
        ".", "--dir", help="Directory to write the example config and cases to"
    ),
):
    """Initialize a project with an example config and test case."""
    project_dir = Path(dir)

    # Create the project directory if it doesn't exist
    if not project_dir.exists():
        project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "minitest.yaml"
    if example.exists():
        typer.echo(f"minitest.yaml already exists in {dir}, skipping.")
        return

    example.write_text("""\
cases:
  - example_cases:ArithmeticCase

shuffle: true
junit: reports/junit.xml
""")

    (project_dir / "example_cases.py").write_text('''\
class ArithmeticCase:
    def setup(self, t):
        self.numbers = [1, 2, 3]

    def test_sum(self, t):
        t.assert_equal(6, sum(self.numbers))

    def test_mean_is_close(self, t):
        t.assert_in_delta(2.0, sum(self.numbers) / len(self.numbers))

    def test_membership(self, t):
        t.assert_includes(self.numbers, 2)
        t.refute_includes(self.numbers, 4)
''')

    typer.echo(f"Initialized minitest project in {dir}:")
    typer.echo("  minitest.yaml     - example run config")
    typer.echo("  example_cases.py  - example test case")
