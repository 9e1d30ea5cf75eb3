"""
Tests for reading action inputs and the repository identifier.
"""

from unittest.mock import patch

import pytest

from snyk_pr_combiner.config import ActionInputs, get_bool_input, get_input, input_env_name, parse_repository
from snyk_pr_combiner.exceptions import ConfigurationError


@pytest.fixture
def action_env():
    return {
        "INPUT_TOKEN": "ghs_token",
        "GITHUB_REPOSITORY": "acme/web",
    }


class TestInputs:

    def test_env_name(self):
        assert input_env_name("token") == "INPUT_TOKEN"
        assert input_env_name("allStepsPass") == "INPUT_ALLSTEPSPASS"
        assert input_env_name("my input") == "INPUT_MY_INPUT"

    def test_value_is_trimmed(self):
        assert get_input("includeLabel", environ={"INPUT_INCLUDELABEL": "  combine \n"}) == "combine"

    def test_required_missing_raises(self):
        with pytest.raises(ConfigurationError, match="token"):
            get_input("token", required=True, environ={})

    @pytest.mark.parametrize("raw,expected", [("true", True), ("True", False), ("yes", False), ("", False)])
    def test_bool_input_only_literal_true(self, raw, expected):
        assert get_bool_input("allStepsPass", environ={"INPUT_ALLSTEPSPASS": raw}) is expected


class TestParseRepository:

    def test_valid(self):
        assert parse_repository("acme/web") == ("acme", "web")

    @pytest.mark.parametrize("raw", ["", "acme", "acme/", "/web", "acme/web/extra"])
    def test_invalid(self, raw):
        with pytest.raises(ConfigurationError):
            parse_repository(raw)


class TestActionInputs:

    def test_defaults(self, action_env):
        inputs = ActionInputs.from_env(action_env)

        assert inputs.token == "ghs_token"
        assert (inputs.owner, inputs.repo) == ("acme", "web")
        assert not inputs.options.require_all_checks_pass
        assert not inputs.options.accept_skipped_checks
        assert inputs.options.required_label is None
        assert inputs.options.excluded_label is None

    def test_all_inputs(self, action_env):
        action_env.update({
            "INPUT_ALLSTEPSPASS": "true",
            "INPUT_SKIPSCHECKED": "true",
            "INPUT_INCLUDELABEL": "combine",
            "INPUT_IGNORELABEL": "do-not-merge",
        })

        options = ActionInputs.from_env(action_env).options

        assert options.require_all_checks_pass
        assert options.accept_skipped_checks
        assert options.required_label == "combine"
        assert options.excluded_label == "do-not-merge"

    def test_repository_override(self, action_env):
        inputs = ActionInputs.from_env(action_env, repository="other/app")
        assert (inputs.owner, inputs.repo) == ("other", "app")

    def test_bad_repository_override(self, action_env):
        with pytest.raises(ConfigurationError):
            ActionInputs.from_env(action_env, repository="not-a-repo")

    def test_missing_token_fails(self, action_env):
        del action_env["INPUT_TOKEN"]
        with pytest.raises(ConfigurationError):
            ActionInputs.from_env(action_env)

    @patch("snyk_pr_combiner.config.resolve_token", return_value="from-gh-cli")
    def test_token_fallback(self, mock_resolve, action_env):
        del action_env["INPUT_TOKEN"]

        inputs = ActionInputs.from_env(action_env, token_fallback=True)

        assert inputs.token == "from-gh-cli"
        mock_resolve.assert_called_once_with("")

    @patch("snyk_pr_combiner.config.resolve_token", return_value=None)
    def test_token_fallback_exhausted(self, mock_resolve, action_env):
        del action_env["INPUT_TOKEN"]
        with pytest.raises(ConfigurationError):
            ActionInputs.from_env(action_env, token_fallback=True)
