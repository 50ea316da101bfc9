import json
import logging
import sys

import click

from .pipeline import CodeGeneratorConfig, CodegenError, PipelineGenerator
from .tool import format_report_markdown


@click.command()
@click.option("--output-dir", "-o", default=".", type=click.Path(file_okay=False, resolve_path=True))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--overwrite", is_flag=True, default=False, help="Replace files that already exist")
@click.option("--backup", is_flag=True, default=False, help="Copy existing files to .bak before replacing them")
@click.option("--max-workers", default=None, type=click.IntRange(min=1), help="Threads used to write files")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("schema", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.argument("package_name", type=str)
def java_ddd_codegen(output_dir, config, overwrite, backup, max_workers, verbose, schema, package_name):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open(schema, encoding="utf-8") as f:
        schema_text = f.read()

    if config is not None:
        with open(config, encoding="utf-8") as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # Command line flags override the config file
    if overwrite:
        config.output.overwrite = True
    if backup:
        config.output.backup = True
    if max_workers is not None:
        config.max_workers = max_workers

    try:
        codegen = PipelineGenerator(schema_text, package_name, config)
        report = codegen.generate(output_dir)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    click.echo(format_report_markdown(report))
    if report.has_errors or (report.verification is not None and not report.verification.ok):
        sys.exit(1)
