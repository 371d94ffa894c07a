from __future__ import annotations

from pathlib import Path

import typer

from minitest.runner import Runner

app = typer.Typer(
    name="minitest", help="Run minitest test cases", add_completion=False
)


def _dispatch(
    runner: Runner, list_tests: bool, test: str | None, print_summary: bool
) -> int:
    if list_tests:
        runner.list_tests()
        return 0
    if test is not None:
        return runner.run_test_named(test)
    return 0 if runner.run_all_test(print_summary) else 1


def build_app(runner: Runner) -> typer.Typer:
    """Command-line app running the tests already added to *runner*."""
    bound_app = typer.Typer(
        name="minitest", help="Run the registered test cases", add_completion=False
    )

    @bound_app.command()
    def main(
        list_tests: bool = typer.Option(
            False, "--list-tests", help="Print the name of every test case and exit"
        ),
        test: str | None = typer.Option(
            None, "--test", help="Run only the test case with this name"
        ),
    ):
        """Run all test cases, or the one selected with --test."""
        raise typer.Exit(_dispatch(runner, list_tests, test, print_summary=True))

    return bound_app


@app.command()
def run(
    modules: list[str] | None = typer.Argument(
        None, help="Test module files declaring fixtures"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to a minitest YAML config"
    ),
    list_tests: bool = typer.Option(
        False, "--list-tests", help="Print the name of every test case and exit"
    ),
    test: str | None = typer.Option(
        None, "--test", help="Run only the test case with this name"
    ),
    no_summary: bool = typer.Option(
        False, "--no-summary", help="Do not print the pass/fail summary line"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Append debug output to this file"
    ),
):
    """Load test modules and run the test cases they register."""
    import yaml

    from minitest import registry
    from minitest.config import RunnerConfig, load_config
    from minitest.verbose import setup_logger

    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        try:
            runner_config = load_config(config_path)
        except (ValueError, yaml.YAMLError) as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
    else:
        runner_config = RunnerConfig()

    module_paths = dict.fromkeys(
        str(Path(p).resolve()) for p in [*runner_config.modules, *(modules or [])]
    )
    for module_path in module_paths:
        try:
            registry.load_test_module(module_path)
        except ImportError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

    log_file = debug_log or runner_config.debug_log
    logger = setup_logger(
        Path(log_file) if log_file else None,
        verbose=verbose,
        logger_name="minitest",
    )

    runner = Runner(catch_exceptions=runner_config.catch_exceptions, logger=logger)
    for factory in registry.registered_tests():
        runner.add(factory)

    print_summary = runner_config.print_summary and not no_summary
    raise typer.Exit(_dispatch(runner, list_tests, test, print_summary))
