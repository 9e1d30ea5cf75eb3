#!/usr/bin/env python3
from __future__ import annotations

from snyk_pr_combiner.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
