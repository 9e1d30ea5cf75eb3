from __future__ import annotations

import argparse
import dataclasses
import logging
import os
from typing import List, Optional

from . import combine_snyk_prs
from .config import ActionInputs

log = logging.getLogger("combine_snyk_prs")

FALLBACK_FAILURE_MESSAGE = "An error occurred, panic 😨"


def set_failed(message: str) -> None:
    """Actions `core.setFailed`: annotate the run; the caller exits 1."""
    print(f"::error::{message}", flush=True)


def failure_message(err: BaseException) -> str:
    return str(err) or FALLBACK_FAILURE_MESSAGE


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Combine open Snyk upgrade PRs into a single pull request.",
        epilog="Options default to the action inputs (INPUT_* env vars) and GITHUB_REPOSITORY.",
    )
    ap.add_argument("--repo", default=None, help='Repository as "owner/repo".')
    ap.add_argument("--include-label", default=None, help="Only combine PRs carrying this label.")
    ap.add_argument("--ignore-label", default=None, help="Never combine PRs carrying this label.")
    ap.add_argument("--all-steps-pass", action="store_true", help="Require combined status 'success'.")
    ap.add_argument("--skips-checked", action="store_true", help="Accept combined status 'success' or 'skipped'.")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return ap


def apply_overrides(inputs: ActionInputs, args: argparse.Namespace) -> ActionInputs:
    options = inputs.options
    if args.include_label is not None:
        options = dataclasses.replace(options, required_label=args.include_label)
    if args.ignore_label is not None:
        options = dataclasses.replace(options, excluded_label=args.ignore_label)
    if args.all_steps_pass:
        options = dataclasses.replace(options, require_all_checks_pass=True)
    if args.skips_checked:
        options = dataclasses.replace(options, accept_skipped_checks=True)
    return dataclasses.replace(inputs, options=options)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(message)s")

    try:
        inputs = ActionInputs.from_env(
            repository=args.repo,
            token_fallback=os.getenv("GITHUB_ACTIONS") != "true",
        )
        inputs = apply_overrides(inputs, args)

        result = combine_snyk_prs(inputs.token, inputs.owner, inputs.repo, inputs.options)
    except Exception as e:
        log.error("Run aborted: %s", e)
        set_failed(failure_message(e))
        return 1

    log.info("Done. merged=%d branch=%s", len(result.merged), result.branch)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
