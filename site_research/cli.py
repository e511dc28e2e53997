# === FILE: site_research/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for SiteResearch.

Commands:
  scrape URL  Crawl a company website and print/save the research result
  config      Show the effective crawl settings
  serve       Run the HTTP API (POST /api/scrape-website)

Global options:
  --config PATH       YAML/JSON file with crawl settings (default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only if omitted)
  --log-format FORMAT Logging format string

scrape options:
  --scrape-type TYPE  basic | comprehensive
  --max-depth INT     Link depth from the seed page
  --max-pages INT     Page budget
  --json PATH         Save the JSON report
  --html PATH         Save the HTML report
  --template DIR      Directory with report.html.j2
  --pretty            Indent JSON printed to stdout
  --scrape-timeout S  Stop crawling new pages after S seconds

Example:
  site-research scrape https://example.com --max-depth 1 --json reports/example.json --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from site_research import __version__
from site_research.config import load_config
from site_research.engine import Engine
from site_research.logger import DEFAULT_FORMAT, init_logging
from site_research.report.html_report import render_html
from site_research.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def run_scrape(settings, url, scrape_type, max_depth, max_pages, time_budget):
    """Run one crawl to completion; module-level so tests can patch it."""
    engine = Engine(settings)
    return asyncio.run(
        engine.scrape(
            url,
            scrape_type=scrape_type,
            max_depth=max_depth,
            max_pages=max_pages,
            time_budget=time_budget,
        )
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteResearch, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON file with crawl settings.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteResearch command group."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        settings = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--scrape-type', '-s', 'scrape_type',
    default=None,
    type=click.Choice(['basic', 'comprehensive']),
    help='Extraction mode (default from config: comprehensive)'
)
@click.option('--max-depth', '-d', 'max_depth', type=click.IntRange(min=0), default=None,
              help='Link depth from the seed page')
@click.option('--max-pages', '-p', 'max_pages', type=click.IntRange(min=1), default=None,
              help='Page budget')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with Jinja2 templates (bundled template if omitted)'
)
@click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')
@click.option(
    '--scrape-timeout', 'scrape_timeout',
    type=float,
    default=None,
    help='Stop crawling new pages after this many seconds'
)
@click.pass_context
def scrape(ctx, url, scrape_type, max_depth, max_pages, json_output, html_output, template_dir, pretty,
           scrape_timeout):
    """Crawl URL and print or save the research result."""
    settings = ctx.obj['settings']
    try:
        outcome = run_scrape(settings, url, scrape_type, max_depth, max_pages, scrape_timeout)
    except Exception as e:
        print_error(f'Scraping error: {e}')

    if not json_output and not html_output:
        click.echo(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2 if pretty else None))

    if json_output:
        try:
            saved_json = render_json(outcome, json_output, pretty=True)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(outcome, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML: {e}')

    if not outcome.success:
        print_error(f'Scraping failed: {outcome.error}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective crawl settings as JSON."""
    settings = ctx.obj['settings']
    click.echo(settings.model_dump_json(indent=2))


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default='127.0.0.1', show_default=True, help='Interface to bind')
@click.option('--port', default=8080, show_default=True, type=int, help='Port to listen on')
@click.pass_context
def serve(ctx, host, port):
    """Run the HTTP API."""
    from site_research.server import run_server

    run_server(host=host, port=port, settings=ctx.obj['settings'])


if __name__ == "__main__":
    cli()
