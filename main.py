import logging
from typing import Callable, List, Optional, Sequence, TextIO

from botocore.exceptions import BotoCoreError

# Internal Module Imports
from session import SessionManager
from logger import LoggerSetup
from resource_discovery import ResourceScanner
from check_engine import (
    VERIFIERS,
    CheckReport,
    CheckResult,
    CheckStatus,
    FailureCategory,
    Reporter,
)
from check_engine.base_verifier import ProbeFn
from check_engine.health_probe import probe
from cli_parser import CliParser, CliArgs
from exceptions import AwsApiError, ConfigurationError
from verifier_config import ConfigLoader, VerifierConfig

# Constants & Config
from constants import LOG_FORMAT


def run_checks(
    checks: List[str],
    config: VerifierConfig,
    scanner: ResourceScanner,
    reporter: Reporter,
    logger: logging.Logger,
    probe_fn: ProbeFn = probe,
) -> int:
    """
    Run the selected verifiers in order against one scanner, print the
    aggregate result and return the exit code (0 when nothing failed).
    """
    report = CheckReport()
    try:
        for check in checks:
            logger.info(f"Running '{check}' verification for prefix '{config.prefix}'")
            verifier = VERIFIERS[check](config, scanner, reporter, probe_fn)
            try:
                verifier.run()
            finally:
                # partial results count even when run() aborts
                report.extend(verifier.report)
    except AwsApiError as e:
        logger.error(f"Aborting run: {e}")
        result = report.add(
            CheckResult(
                CheckStatus.FAIL,
                f"AWS API call failed: {e}",
                category=FailureCategory.PERMISSION_OR_NETWORK,
            )
        )
        reporter.result(result)

    reporter.summary(report)
    return report.exit_code


def main(
    argv: Optional[Sequence[str]] = None,
    stream: Optional[TextIO] = None,
    session_factory: Callable = SessionManager.get_session,
    probe_fn: ProbeFn = probe,
) -> int:
    # Parse CLI arguments using CliParser
    args: CliArgs = CliParser.parse_arguments(argv)

    # Initialize logger (configured once)
    logger = LoggerSetup(LOG_FORMAT, args.log_level).get_logger("main")
    logger.info("Starting topology verification")

    reporter = Reporter(stream)
    try:
        config = ConfigLoader.load(
            config_path=args.config,
            cli_overrides=CliParser.config_overrides(args),
        )
    except (ConfigurationError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        reporter.info(f"Error: {e}")
        return 1

    try:
        session = session_factory(region=config.region, profile=config.profile)
        scanner = ResourceScanner(session)
    except BotoCoreError as e:
        logger.error(f"Could not create AWS session: {e}")
        reporter.info(f"Error: {e}")
        return 1

    return run_checks(args.checks, config, scanner, reporter, logger, probe_fn)


if __name__ == "__main__":
    raise SystemExit(main())
