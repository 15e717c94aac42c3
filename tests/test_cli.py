"""Tests for the agent-compiler command line."""

import pytest
from click.testing import CliRunner

from agent_compiler.main import cli

from conftest import read_yaml
from conftest import write_yaml


@pytest.fixture
def runner():
    return CliRunner()


def invoke_compile(runner, source_root, output_dir, *args):
    return runner.invoke(
        cli,
        ["compile", "--source", str(source_root), "--output", str(output_dir), *args],
    )


class TestCompileCommand:
    """Exit codes and console reporting of `compile`."""

    def test_success(self, runner, source_root, output_dir):
        result = invoke_compile(runner, source_root, output_dir, "--profile=home")

        assert result.exit_code == 0, result.output
        assert "Compiling profile: home" in result.output
        assert "dev.md" in result.output
        assert "skills/react-hooks/SKILL.md" in result.output
        assert "Done!" in result.output
        assert (output_dir / "agents" / "dev.md").is_file()

    def test_default_profile_is_home(self, runner, source_root, output_dir):
        result = invoke_compile(runner, source_root, output_dir)

        assert result.exit_code == 0, result.output
        assert (output_dir.parent / "CLAUDE.md").is_file()

    def test_profile_from_environment(self, runner, source_root, output_dir):
        result = runner.invoke(
            cli,
            ["compile"],
            env={
                "AGENT_COMPILER_SOURCE": str(source_root),
                "AGENT_COMPILER_OUTPUT": str(output_dir),
                "AGENT_COMPILER_PROFILE": "home",
            },
        )

        assert result.exit_code == 0, result.output
        assert (output_dir / "agents" / "reviewer.md").is_file()

    def test_validation_failure_exits_1(self, runner, source_root, output_dir):
        (source_root / "agent-sources" / "dev" / "intro.md").unlink()

        result = invoke_compile(runner, source_root, output_dir)

        assert result.exit_code == 1
        assert "Validation failed" in result.output
        assert "Missing intro.md for agent: dev" in result.output
        # Warnings are still reported alongside errors
        assert "Warnings" in result.output
        assert not output_dir.exists()

    def test_unknown_agent_exits_1(self, runner, source_root, output_dir):
        config_path = source_root / "profiles" / "home" / "config.yaml"
        profile = read_yaml(config_path)
        profile["agent_skills"]["qa"] = {}
        write_yaml(config_path, profile)

        result = invoke_compile(runner, source_root, output_dir)

        assert result.exit_code == 1
        assert '"qa"' in result.output
        assert not output_dir.exists()

    def test_missing_profile_exits_1(self, runner, source_root, output_dir):
        result = invoke_compile(runner, source_root, output_dir, "--profile", "nope")

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_log_file(self, runner, source_root, output_dir, tmp_path):
        log_file = tmp_path / "logs" / "compile.jsonl"

        result = invoke_compile(runner, source_root, output_dir, "--verbose", "--log-file", str(log_file))

        assert result.exit_code == 0, result.output
        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert any('"compile.done"' in line for line in lines)


class TestProfilesCommand:
    """`profiles` lists available profiles."""

    def test_lists_profiles(self, runner, source_root):
        write_yaml(
            source_root / "profiles" / "work" / "config.yaml",
            {"name": "work", "description": "Day job", "claude_md": "CLAUDE.md"},
        )

        result = runner.invoke(cli, ["profiles", "--source", str(source_root)])

        assert result.exit_code == 0, result.output
        assert "home" in result.output
        assert "work" in result.output
        assert "Day job" in result.output

    def test_no_profiles(self, runner, tmp_path):
        result = runner.invoke(cli, ["profiles", "--source", str(tmp_path)])

        assert result.exit_code == 0
        assert "No profiles found" in result.output
