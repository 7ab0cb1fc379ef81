"""Tests for the command-line interface."""

import json
import logging

import pytest
import yaml
from click.testing import CliRunner

from promptsmith.cli.main import main
from promptsmith.core.logging import configure_logging, get_logger


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CliRunner working in an empty directory, so no project config is picked up."""
    monkeypatch.chdir(tmp_path)
    return CliRunner()


@pytest.fixture
def quiet_logging():
    """Restore the default log level after a test changes it."""
    yield
    configure_logging(level="WARNING")


@pytest.fixture
def bundle_file(tmp_path):
    """A YAML bundle using web app (camelCase) keys."""
    path = tmp_path / "bundle.yaml"
    path.write_text(
        yaml.dump(
            {
                "baseConfig": {
                    "domain": "Marketing & Sales",
                    "framework": "Constraint-Based",
                    "basePrompt": "Write a tagline for a bike shop.",
                    "frameworkConfig": {"constraints": ["Under ten words"]},
                },
                "vsEnhancement": {"enabled": True, "numberOfResponses": 3},
                "advancedEnhancements": {
                    "formatController": {"enabled": True, "type": "list"},
                },
            }
        ),
        encoding="utf-8",
    )
    return path


class TestCompose:
    """Test the compose command."""

    def test_text_output(self, runner, bundle_file):
        """Test plain text output of a constraint-based bundle."""
        result = runner.invoke(main, ["compose", str(bundle_file), "--no-color"])
        assert result.exit_code == 0
        assert "Please adhere to these constraints:\n1. Under ten words" in result.output
        assert "Generate 3 diverse responses" in result.output
        assert "Present your response as a clear, organized list." in result.output
        # Constraint-Based does not suit diversity sampling
        assert "VS diversity may conflict with strict constraints" in result.output

    def test_json_output_file(self, runner, bundle_file, tmp_path):
        """Test JSON written to a file with the quality report."""
        output = tmp_path / "out.json"
        result = runner.invoke(
            main,
            ["compose", str(bundle_file), "-f", "json", "--quality", "-o", str(output), "--no-color"],
        )
        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["finalPrompt"].startswith("Write a tagline for a bike shop.")
        assert data["metadata"]["vsEnabled"] is True
        assert data["systemPrompt"].startswith("You are a marketing professional")
        assert 0 <= data["quality"]["score"] <= 100

    def test_system_prompt_shown(self, runner, bundle_file):
        """Test that --system prints the domain system prompt."""
        result = runner.invoke(main, ["compose", str(bundle_file), "--system", "--no-color"])
        assert result.exit_code == 0
        assert "You are a marketing professional" in result.output

    def test_input_limit(self, runner, tmp_path):
        """Test that prompts over the input limit are refused."""
        path = tmp_path / "huge.json"
        path.write_text(
            json.dumps({"baseConfig": {"basePrompt": "x" * 50_001}, "vsEnhancement": {}}),
            encoding="utf-8",
        )
        result = runner.invoke(main, ["compose", str(path)])
        assert result.exit_code == 1
        assert "exceeds maximum length of 50,000 characters" in result.output

    def test_malformed_bundle(self, runner, tmp_path):
        """Test that an out-of-range setting reports the schema error."""
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"baseConfig": {"basePrompt": "x"}, "vsEnhancement": {"numberOfResponses": 0}}),
            encoding="utf-8",
        )
        result = runner.invoke(main, ["compose", str(path)])
        assert result.exit_code == 1
        assert "Validation failed for PromptBundle" in result.output

    def test_rich_output_keeps_brackets(self, runner, tmp_path):
        """Square brackets in prompts are printed literally in the colored view."""
        path = tmp_path / "brackets.yaml"
        path.write_text(
            yaml.dump(
                {
                    "baseConfig": {"basePrompt": "Fill in [name] for the [customer]."},
                    "vsEnhancement": {"enabled": True, "includeProbabilityReasoning": True},
                }
            ),
            encoding="utf-8",
        )
        result = runner.invoke(main, ["compose", str(path)])
        assert result.exit_code == 0
        assert "Fill in [name] for the [customer]." in result.output
        assert "Rationale: [explanation])" in result.output

    def test_markdown_output(self, runner, bundle_file):
        """Markdown output is the shareable document."""
        result = runner.invoke(main, ["compose", str(bundle_file), "-f", "markdown", "--no-color"])
        assert result.exit_code == 0
        assert "# Generated Prompt" in result.output
        assert "**Framework:** Constraint-Based" in result.output
        assert "- **Number of Responses:** 3" in result.output
        assert "## User Prompt" in result.output

    def test_markdown_output_file(self, runner, bundle_file, tmp_path):
        """A markdown file carries both prompts in fenced blocks."""
        output = tmp_path / "prompt.md"
        result = runner.invoke(
            main, ["compose", str(bundle_file), "-f", "markdown", "-o", str(output), "--no-color"]
        )
        assert result.exit_code == 0
        content = output.read_text(encoding="utf-8")
        assert content.startswith("# Generated Prompt\n")
        assert "## System Prompt\n\n```\nYou are a marketing professional" in content

    def test_text_output_file_with_system(self, runner, bundle_file, tmp_path):
        """System and user prompts are separated by a rule in text files."""
        output = tmp_path / "prompt.txt"
        result = runner.invoke(
            main, ["compose", str(bundle_file), "--system", "-o", str(output), "--no-color"]
        )
        assert result.exit_code == 0
        content = output.read_text(encoding="utf-8")
        assert "customer engagement.\n\n---\n\nWrite a tagline" in content

    def test_verbose_enables_debug_logging(self, runner, bundle_file, quiet_logging):
        """--verbose lowers the log level unless one is given explicitly."""
        result = runner.invoke(main, ["compose", str(bundle_file), "--verbose", "--no-color"])
        assert result.exit_code == 0
        assert get_logger().logger.level == logging.DEBUG

        result = runner.invoke(
            main, ["compose", str(bundle_file), "-v", "--log-level", "ERROR", "--no-color"]
        )
        assert result.exit_code == 0
        assert get_logger().logger.level == logging.ERROR


class TestValidate:
    """Test the validate command."""

    def test_valid_bundle(self, runner, bundle_file):
        """Test a bundle with no errors."""
        result = runner.invoke(main, ["validate", str(bundle_file), "--no-color"])
        assert result.exit_code == 0
        assert "Bundle is valid" in result.output

    def test_invalid_bundle(self, runner, tmp_path):
        """Test that a Few-Shot bundle without examples fails."""
        path = tmp_path / "few_shot.yaml"
        path.write_text(
            yaml.dump({"baseConfig": {"framework": "Few-Shot", "basePrompt": "Classify."}}),
            encoding="utf-8",
        )
        result = runner.invoke(main, ["validate", str(path), "--no-color"])
        assert result.exit_code == 1
        assert "EXAMPLES_REQUIRED" in result.output


class TestOtherCommands:
    """Test score, frameworks, variables, export and config."""

    def test_score_stdin(self, runner):
        """Test scoring a prompt read from stdin."""
        result = runner.invoke(main, ["score", "-", "-f", "json", "--no-color"], input="Hi")
        assert result.exit_code == 0
        assert '"score": 70' in result.output

    def test_score_analysis(self, runner):
        """--analyze adds the wording analysis to the report."""
        result = runner.invoke(
            main, ["score", "-", "-f", "json", "--analyze", "--no-color"], input="Hi"
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["score"] == 70
        assert data["analysis"]["score"] == 45
        assert data["analysis"]["wordCount"] == 1

    def test_score_analysis_table(self, runner):
        """Suggestions are listed in the plain view."""
        result = runner.invoke(main, ["score", "-", "--analyze", "--no-color"], input="Hi")
        assert result.exit_code == 0
        assert "Analysis score: 45/100" in result.output
        assert "- [high] Prompt is very short" in result.output

    def test_optimize(self, runner):
        """Filler is dropped and token estimates are reported."""
        result = runner.invoke(main, ["optimize", "-", "-n", "1"], input="Make sure to  write a poem.")
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "write a poem."
        assert "Estimated tokens: 7 -> 4" in result.output
        assert "--- Variation 1 ---" in result.output

    def test_frameworks(self, runner):
        """Test the framework listing."""
        result = runner.invoke(main, ["frameworks", "--no-color"])
        assert result.exit_code == 0
        assert "Template/Fill-in" in result.output
        assert "Constraint-Based | constraints | no" in result.output

    def test_variables(self, runner, tmp_path):
        """Test placeholder listing in first-seen order."""
        path = tmp_path / "prompt.txt"
        path.write_text("Write about {{topic}} for {{audience}} ({{topic}})", encoding="utf-8")
        result = runner.invoke(main, ["variables", str(path)])
        assert result.exit_code == 0
        assert result.output.splitlines()[:2] == ["topic", "audience"]

    def test_export_bundle(self, runner, bundle_file):
        """Test that export includes the generated prompt."""
        result = runner.invoke(main, ["export", str(bundle_file)])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["generatedPrompt"]["metadata"]["framework"] == "Constraint-Based"
        assert data["baseConfig"]["basePrompt"] == "Write a tagline for a bike shop."

    def test_config_import_export(self, runner, tmp_path):
        """Test importing settings then exporting them."""
        source = tmp_path / "settings.json"
        source.write_text(json.dumps({"output_format": "markdown"}), encoding="utf-8")
        target = tmp_path / "saved" / "config.yaml"

        result = runner.invoke(main, ["config", "import", str(source), "--target", str(target)])
        assert result.exit_code == 0
        assert yaml.safe_load(target.read_text(encoding="utf-8"))["output_format"] == "markdown"

        result = runner.invoke(main, ["config", "export", "--format", "json"])
        assert result.exit_code == 0
        assert "output_format" in json.loads(result.output)
