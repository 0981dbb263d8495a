import argparse
from typing import List, NamedTuple, Optional, Sequence

from constants import CHECKS, DEFAULT_LOG_LEVEL


class CliArgs(NamedTuple):
    checks: List[str]
    config: Optional[str]
    region: Optional[str]
    prefix: Optional[str]
    profile: Optional[str]
    max_workers: Optional[int]
    log_level: str


class CliParser:
    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="topology-verify",
            description=(
                "Verify a deployed 3-tier AWS topology: public ALB, "
                "private app tier via NAT, private DB tier without internet route."
            ),
        )
        parser.add_argument(
            "--check",
            "-c",
            dest="checks",
            action="append",
            choices=[*CHECKS, "all"],
            help="Verification to run; repeatable. Defaults to 'network'.",
        )
        parser.add_argument(
            "--config",
            type=str,
            help="YAML file with configuration overrides (keys are setting names).",
        )
        parser.add_argument("--region", type=str, help="AWS region (env: REGION).")
        parser.add_argument(
            "--prefix", type=str, help="Resource name prefix (env: PREFIX)."
        )
        parser.add_argument(
            "--profile", type=str, help="Named AWS profile (env: AWS_PROFILE)."
        )
        parser.add_argument(
            "--max-workers",
            type=int,
            help="Threads used to classify subnet routes; 1 disables fan-out.",
        )
        parser.add_argument(
            "--log-level",
            type=str.upper,
            default=DEFAULT_LOG_LEVEL,
            choices=["DEBUG", "INFO", "WARNING", "ERROR"],
            help="Diagnostic log level (report lines are always printed).",
        )
        return parser

    @staticmethod
    def parse_arguments(argv: Optional[Sequence[str]] = None) -> CliArgs:
        args = CliParser.build_parser().parse_args(argv)
        return CliArgs(
            checks=CliParser.expand_checks(args.checks),
            config=args.config,
            region=args.region,
            prefix=args.prefix,
            profile=args.profile,
            max_workers=args.max_workers,
            log_level=args.log_level,
        )

    @staticmethod
    def expand_checks(selected: Optional[Sequence[str]]) -> List[str]:
        """Resolve 'all' and duplicates, keeping the canonical run order."""
        if not selected:
            return ["network"]
        if "all" in selected:
            return list(CHECKS)
        return [check for check in CHECKS if check in selected]

    @staticmethod
    def config_overrides(args: CliArgs) -> dict:
        return {
            "region": args.region,
            "prefix": args.prefix,
            "profile": args.profile,
            "max_workers": args.max_workers,
        }
