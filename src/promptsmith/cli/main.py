"""CLI interface for promptsmith."""

import json
import sys
from pathlib import Path
from typing import Any

import click
import yaml

from promptsmith.assembler.composer import (
    export_as_markdown,
    export_as_text,
    export_prompt_config,
    generate_enhanced_prompt,
)
from promptsmith.cli.formatters import OutputFormatter
from promptsmith.core.config import OUTPUT_FORMATS, USER_CONFIG_PATH, Config
from promptsmith.core.logging import configure_logging
from promptsmith.core.validator import (
    analyze_prompt_quality,
    estimate_token_count,
    generate_prompt_variations,
        load_schema,
    optimize_prompt,
    validate_complete_prompt_config,
    validate_prompt_config,
    validate_prompt_quality,
)
from promptsmith.schemas.generated import PromptBundle
from promptsmith.schemas.prompt_config import BASE_PROMPT_INPUT_LIMIT, FrameworkType
from promptsmith.stages.framework_renderer import extract_variables, get_framework_config_fields
from promptsmith.stages.vs_instructions import is_vs_compatible_with_framework


def _logging_options(func):
    """Attach the shared --verbose/--log-level/--log-file/--json-logging options."""
    func = click.option(
        "--json-logging",
        is_flag=True,
        default=None,
        help="Output logs in JSON format",
    )(func)
    func = click.option(
        "--log-file",
        type=click.Path(),
        default=None,
        help="Path to log file (default: stderr)",
    )(func)
    func = click.option(
        "--log-level",
        default=None,
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
        help="Logging level (default: WARNING)",
    )(func)
    func = click.option(
        "--verbose",
        "-v",
        is_flag=True,
        default=None,
        help="Log debug details (same as --log-level DEBUG)",
    )(func)
    return func


def _setup(cli_args: dict[str, Any]) -> Config:
    """Load configuration and configure logging from it."""
    cli_args = {k: v for k, v in cli_args.items() if v is not None}
    config_obj = Config.load(cli_args)
    level = config_obj.log_level
    if config_obj.verbose and "log_level" not in cli_args:
        level = "DEBUG"
    configure_logging(
        level=level,
        json_output=bool(config_obj.json_logging),
        log_file=config_obj.log_file,
    )
    return config_obj


def _formatter(config_obj: Config) -> OutputFormatter:
    return OutputFormatter(
        use_rich=config_obj.color is not False,
        force_color=bool(config_obj.color),
    )


def _read_input(input_source: str) -> str:
    if input_source == "-":
        return sys.stdin.read()
    input_path = Path(input_source)
    if not input_path.exists():
        click.echo(f"Error: Input file not found: {input_source}", err=True)
        click.echo(f"  Current directory: {Path.cwd()}", err=True)
        sys.exit(1)
    return input_path.read_text(encoding="utf-8")


def _load_bundle(bundle_file: str) -> PromptBundle:
    """Read a YAML or JSON bundle file, exiting with an error message on failure."""
    bundle_path = Path(bundle_file)
    try:
        content = bundle_path.read_text(encoding="utf-8")
        if bundle_path.suffix in [".yaml", ".yml"]:
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        click.echo(f"Error: Could not read bundle {bundle_file}: {e}", err=True)
        sys.exit(1)

    if not isinstance(data, dict):
        click.echo(f"Error: Bundle {bundle_file} must contain a mapping", err=True)
        sys.exit(1)

    try:
        return load_schema(data, PromptBundle)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="promptsmith")
def main():
    """
    promptsmith - Compose structured prompts from a base instruction.

    A base prompt is wrapped in a prompting framework, optionally extended
    with diversity-sampling instructions and advanced enhancements, and
    paired with a domain-specific system prompt.

    Use 'promptsmith compose --help' for detailed usage information.
    """
    pass


@main.command()
@click.argument("bundle_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(writable=True),
    default=None,
    help="Output file (default: stdout)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default=None,
    help="Output format: text, markdown or json (default: text)",
)
@click.option(
    "--system/--no-system",
    "show_system_prompt",
    default=None,
    help="Show the system prompt alongside the composed prompt",
)
@click.option(
    "--quality/--no-quality",
    "show_quality",
    default=None,
    help="Score the composed prompt",
)
@click.option(
    "--color/--no-color",
    default=None,
    help="Force colored output (default: auto-detect)",
)
@_logging_options
def compose(
    bundle_file: str,
    output: str | None,
    output_format: str | None,
    show_system_prompt: bool | None,
    show_quality: bool | None,
    color: bool | None,
    verbose: bool | None,
    log_level: str | None,
    log_file: str | None,
    json_logging: bool | None,
):
    """
    Compose a prompt from a saved bundle.

    BUNDLE_FILE is a YAML or JSON file with baseConfig, vsEnhancement and
    optional advancedEnhancements sections (camelCase or snake_case keys).

    Examples:

      # Compose to stdout
      promptsmith compose bundle.yaml

      # Write the full result as JSON
      promptsmith compose bundle.json -f json -o result.json

      # Save a shareable markdown document
      promptsmith compose bundle.yaml -f markdown -o prompt.md
    """
    config_obj = _setup(
        {
            "output_format": output_format,
            "show_system_prompt": show_system_prompt,
            "show_quality": show_quality,
            "color": color,
            "verbose": verbose,
            "log_level": log_level,
            "log_file": log_file,
            "json_logging": json_logging,
        }
    )
    formatter = _formatter(config_obj)
    bundle = _load_bundle(bundle_file)
    base_config = bundle.base_config

    if len(base_config.base_prompt) > BASE_PROMPT_INPUT_LIMIT:
        click.echo(
            f"Error: Base prompt exceeds maximum length of {BASE_PROMPT_INPUT_LIMIT:,} characters",
            err=True,
        )
        sys.exit(1)

    if not base_config.base_prompt.strip():
        click.echo("Error: Base prompt is empty", err=True)
        click.echo("  Tip: Set baseConfig.basePrompt in the bundle", err=True)
        sys.exit(1)

    if bundle.vs_enhancement.enabled and base_config.framework:
        compatibility = is_vs_compatible_with_framework(base_config.framework)
        if compatibility.warning:
            formatter.print_warning(compatibility.warning)

    result = generate_enhanced_prompt(
        base_config, bundle.vs_enhancement, bundle.advanced_enhancements
    )
    report = validate_prompt_quality(result.final_prompt) if config_obj.show_quality else None

    if output:
        output_path = Path(output)
        if config_obj.output_format == "json":
            payload = result.to_camel_dict()
            if report is not None:
                payload["quality"] = report.to_camel_dict()
            content = json.dumps(payload, indent=2, ensure_ascii=False)
        elif config_obj.output_format == "markdown":
            content = export_as_markdown(result, base_config, bundle.vs_enhancement)
        elif config_obj.show_system_prompt:
            content = export_as_text(result)
        else:
            content = result.final_prompt
        output_path.write_text(content, encoding="utf-8")
        formatter.print_success(f"Prompt written to: {output_path}")
    elif config_obj.output_format == "json":
        payload = result.to_camel_dict()
        if report is not None:
            payload["quality"] = report.to_camel_dict()
        formatter.print_json(payload)
    elif config_obj.output_format == "markdown":
        formatter.print_markdown(export_as_markdown(result, base_config, bundle.vs_enhancement))
    else:
        formatter.print_prompt(result, show_system=config_obj.show_system_prompt)

    if report is not None and config_obj.output_format != "json":
        formatter.print_quality(report)


@main.command()
@click.argument("bundle_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--color/--no-color",
    default=None,
    help="Force colored output (default: auto-detect)",
)
@_logging_options
def validate(
    bundle_file: str,
    color: bool | None,
    verbose: bool | None,
    log_level: str | None,
    log_file: str | None,
    json_logging: bool | None,
):
    """
    Validate a bundle without composing it.

    Prints field errors, then detailed errors and warnings. Exits with code 1
    when any error is found.
    """
    config_obj = _setup(
        {
            "color": color,
            "verbose": verbose,
            "log_level": log_level,
            "log_file": log_file,
            "json_logging": json_logging,
        }
    )
    formatter = _formatter(config_obj)
    bundle = _load_bundle(bundle_file)

    config_errors = validate_prompt_config(bundle.base_config)
    result = validate_complete_prompt_config(
        bundle.base_config, bundle.vs_enhancement, bundle.advanced_enhancements
    )
    formatter.print_validation(config_errors, result)

    if config_errors or not result.is_valid:
        sys.exit(1)

    if result.warnings:
        formatter.print_success(f"Bundle is valid ({len(result.warnings)} warning(s))")
    else:
        formatter.print_success("Bundle is valid")


@main.command()
@click.argument("input_source", type=click.Path(exists=False))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(list(OUTPUT_FORMATS), case_sensitive=False),
    default=None,
    help="Output format: text, markdown or json (default: text)",
)
@click.option(
    "--color/--no-color",
    default=None,
    help="Force colored output (default: auto-detect)",
)
@click.option(
    "--analyze",
    is_flag=True,
    help="Also analyze wording (vague terms, action verbs, examples)",
)
def score(input_source: str, output_format: str | None, color: bool | None, analyze: bool):
    """
    Score a prompt text.

    INPUT_SOURCE can be a file path or '-' for stdin.
    """
    config_obj = _setup({"output_format": output_format, "color": color})
    formatter = _formatter(config_obj)
    prompt = _read_input(input_source)
    report = validate_prompt_quality(prompt)
    analysis = analyze_prompt_quality(prompt) if analyze else None

    if config_obj.output_format == "json":
        payload = report.to_camel_dict()
        if analysis is not None:
            payload["analysis"] = analysis.to_camel_dict()
        formatter.print_json(payload)
    else:
        formatter.print_quality(report)
        if analysis is not None:
            formatter.print_analysis(analysis)


@main.command()
@click.argument("input_source", type=click.Path(exists=False))
@click.option(
    "--variations",
    "-n",
    type=click.IntRange(0, 3),
    default=0,
    help="Also print up to 3 alternative phrasings",
)
def optimize(input_source: str, variations: int):
    """
    Tighten a prompt by collapsing whitespace and dropping filler phrases.

    INPUT_SOURCE can be a file path or '-' for stdin. The estimated token
    count before and after is reported on stderr.
    """
    _setup({})
    prompt = _read_input(input_source)
    optimized = optimize_prompt(prompt)
    click.echo(optimized)
    click.echo(
        f"Estimated tokens: {estimate_token_count(prompt)} -> {estimate_token_count(optimized)}",
        err=True,
    )

    if variations:
        for index, variation in enumerate(generate_prompt_variations(prompt, variations), 1):
            click.echo(f"\n--- Variation {index} ---\n{variation}")


@main.command()
@click.option(
    "--color/--no-color",
    default=None,
    help="Force colored output (default: auto-detect)",
)
def frameworks(color: bool | None):
    """List prompting frameworks, the settings they read and VS compatibility."""
    config_obj = _setup({"color": color})
    formatter = _formatter(config_obj)

    rows = []
    for framework in FrameworkType:
        compatibility = is_vs_compatible_with_framework(framework.value)
        vs_text = "yes" if compatibility.compatible else "no"
        if compatibility.warning:
            vs_text = f"{vs_text} ({compatibility.warning})"
        fields = ", ".join(get_framework_config_fields(framework.value)) or "-"
        rows.append([framework.value, fields, vs_text])

    formatter.print_table("Frameworks", ["Framework", "Settings", "VS compatible"], rows)


@main.command()
@click.argument("input_source", type=click.Path(exists=False))
def variables(input_source: str):
    """
    List {{name}} template placeholders in a prompt.

    INPUT_SOURCE can be a file path or '-' for stdin.
    """
    names = extract_variables(_read_input(input_source))
    if not names:
        click.echo("No template variables found", err=True)
        return
    for name in names:
        click.echo(name)


@main.command("export")
@click.argument("bundle_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(writable=True),
    default=None,
    help="Output file (default: stdout)",
)
def export_bundle(bundle_file: str, output: str | None):
    """Compose a bundle and export it, generated prompt included, as camelCase JSON."""
    _setup({})
    bundle = _load_bundle(bundle_file)
    bundle.generated_prompt = generate_enhanced_prompt(
        bundle.base_config, bundle.vs_enhancement, bundle.advanced_enhancements
    )
    content = export_prompt_config(bundle)

    if output:
        Path(output).write_text(content, encoding="utf-8")
        click.echo(f"Bundle exported to: {output}")
    else:
        click.echo(content)


@main.group()
def config():
    """Manage configuration settings."""
    pass


@config.command("export")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Output file (default: stdout)",
)
@click.option(
    "--format",
    type=click.Choice(["yaml", "json"]),
    default="yaml",
    help="Output format",
)
def config_export(output: str | None, format: str):
    """Export current configuration to file."""
    config_obj = Config.load()

    if output:
        output_path = Path(output)
        config_obj.save(output_path, format=format)
        click.echo(f"Configuration exported to: {output_path}")
    else:
        if format == "yaml":
            content = yaml.dump(config_obj.to_dict(), default_flow_style=False, sort_keys=False)
        else:
            content = json.dumps(config_obj.to_dict(), indent=2)
        click.echo(content)


@config.command("import")
@click.argument("config_file", type=click.Path(exists=True))
@click.option(
    "--target",
    type=click.Path(),
    default=None,
    help="Where to save (default: ~/.promptsmith/config.yaml)",
)
def config_import(config_file: str, target: str | None):
    """Import configuration from file."""
    config_obj = Config()
    config_obj.load_file(Path(config_file))

    user_config_path = Path(target) if target else USER_CONFIG_PATH
    config_obj.save(user_config_path, format="yaml")
    click.echo(f"Configuration imported and saved to: {user_config_path}")


if __name__ == "__main__":
    main()
