"""Action inputs, read the way @actions/core getInput does."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .auth import resolve_token
from .exceptions import ConfigurationError
from .models import FilterOptions


def input_env_name(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, *, required: bool = False, environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    value = (env.get(input_env_name(name)) or "").strip()
    if required and not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def get_bool_input(name: str, *, environ: Optional[Mapping[str, str]] = None) -> bool:
    # Anything but the literal "true" is false.
    return get_input(name, environ=environ) == "true"


def parse_repository(identifier: str) -> Tuple[str, str]:
    owner, sep, repo = (identifier or "").strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigurationError(f"Expected repository as 'owner/repo', got {identifier!r}")
    return owner, repo


@dataclass(frozen=True)
class ActionInputs:
    token: str
    owner: str
    repo: str
    options: FilterOptions

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        repository: Optional[str] = None,
        token_fallback: bool = False,
    ) -> "ActionInputs":
        """
        repository overrides GITHUB_REPOSITORY. token_fallback lets local
        runs pick the token up from GITHUB_TOKEN/GH_TOKEN or `gh auth token`
        when the input is unset.
        """
        env = os.environ if environ is None else environ
        if token_fallback:
            token = resolve_token(get_input("token", environ=env))
            if not token:
                raise ConfigurationError("Input required and not supplied: token")
        else:
            token = get_input("token", required=True, environ=env)

        owner, repo = parse_repository(repository or env.get("GITHUB_REPOSITORY", ""))
        options = FilterOptions(
            require_all_checks_pass=get_bool_input("allStepsPass", environ=env),
            accept_skipped_checks=get_bool_input("skipsChecked", environ=env),
            required_label=get_input("includeLabel", environ=env) or None,
            excluded_label=get_input("ignoreLabel", environ=env) or None,
        )
        return cls(token=token, owner=owner, repo=repo, options=options)
