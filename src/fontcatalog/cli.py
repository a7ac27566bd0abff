#!/usr/bin/env python3
"""
Font Catalog CLI
================

Command line front end: search the catalog, render a results page to an HTML
file, and download font variants.
"""

import logging
import sys
from pathlib import Path

import click

from fontcatalog.browser import BrowserSession
from fontcatalog.browser.session import normalize_size
from fontcatalog.core.config import AppConfig
from fontcatalog.core.exceptions import FontCatalogError, MissingApiKeyError
from fontcatalog.core.logging_config import setup_logging
from fontcatalog.core.models import FontCategory, FontSort, FontStyle, FontWeight
from fontcatalog.fonts import FontManager, GoogleFontsProvider

logger = logging.getLogger(__name__)

SORT_CHOICE = click.Choice([s.value for s in FontSort], case_sensitive=False)
CATEGORY_CHOICE = click.Choice([c.value for c in FontCategory], case_sensitive=False)
WEIGHT_CHOICE = click.Choice([w.value for w in FontWeight.values()], case_sensitive=False)
STYLE_CHOICE = click.Choice([s.value for s in FontStyle], case_sensitive=False)


def load_config(config_path: Path | None) -> AppConfig:
    if config_path:
        return AppConfig.from_yaml(config_path)
    return AppConfig.load_from_env()


def build_manager(config: AppConfig) -> FontManager:
    if not config.provider.api_key:
        raise MissingApiKeyError()
    return FontManager([GoogleFontsProvider(config.provider)])


def filter_options(fn):
    """Shared --sort/--category/--weight/--style/--page options."""
    options = [
        click.option("--sort", "sort", type=SORT_CHOICE, default=None, help="Result ordering"),
        click.option("--category", "categories", type=CATEGORY_CHOICE, multiple=True),
        click.option("--weight", "weights", type=WEIGHT_CHOICE, multiple=True),
        click.option("--style", "styles", type=STYLE_CHOICE, multiple=True),
        click.option("--page", type=int, default=1, show_default=True, help="Results page"),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def run_query(session: BrowserSession, query, sort, categories, weights, styles, page):
    """Apply filters and the search on the session, then show ``page``."""
    if sort:
        session.set_sort(FontSort(sort)).result()
    session.set_categories(FontCategory(c) for c in categories).result()
    session.set_weights(FontWeight(w) for w in weights).result()
    session.set_styles(FontStyle(s) for s in styles).result()
    session.submit_search(query).result()
    session.load_page(page).result()
    return session.last_rendered


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to YAML configuration file",
)
@click.pass_context
def cli(ctx, verbose, config_path):
    """Font Catalog Browser CLI."""
    try:
        config = load_config(config_path)
    except FontCatalogError as e:
        raise click.ClickException(str(e)) from e
    setup_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


@cli.command(name="search")
@click.argument("query", default="")
@filter_options
@click.pass_obj
def search(config, query, sort, categories, weights, styles, page):
    """List font families matching QUERY."""
    session = None
    try:
        session = BrowserSession(build_manager(config), config.browser)
        rendered = run_query(session, query, sort, categories, weights, styles, page)
        click.echo(f"{rendered.page.count} results, {rendered.page.label}")
        for name in rendered.shown:
            family = session.manager.get_font(name)
            variants = ", ".join(
                family.variants[v].description
                for v in family.display_variant_ids(session.weight_filter, session.style_filter)
            )
            click.echo(f"{family.name} [{family.category}] {variants}")
    except FontCatalogError as e:
        logger.exception(f"Search failed: {e}")
        sys.exit(1)
    finally:
        if session is not None:
            session.close()


@cli.command(name="render")
@click.argument("query", default="")
@filter_options
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="HTML file to write",
)
@click.option("--sample", default=None, help="Sample text")
@click.option("--size", default=None, help="Sample size, e.g. 18pt")
@click.option("--select", "selected", multiple=True, help="Font id 'Family|variant' to mark")
@click.pass_obj
def render(config, query, sort, categories, weights, styles, page, output, sample, size, selected):
    """Render the results page for QUERY to an HTML file."""
    session = None
    try:
        browser = config.browser
        overrides = {}
        if sample:
            overrides["sample_text"] = sample
        if size:
            overrides["font_size"] = normalize_size(size)
        if overrides:
            browser = browser.model_copy(update=overrides)

        session = BrowserSession(build_manager(config), browser)
        for font_id in selected:
            session.select(font_id)
        rendered = run_query(session, query, sort, categories, weights, styles, page)
        output.write_text(rendered.html, encoding="utf-8")
        click.echo(f"Wrote {rendered.page.label} ({rendered.page.count} results) to {output}")
    except FontCatalogError as e:
        logger.exception(f"Render failed: {e}")
        sys.exit(1)
    finally:
        if session is not None:
            session.close()


@cli.command(name="download")
@click.argument("font_ids", nargs=-1, required=True)
@click.option(
    "--dest",
    "-d",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Destination directory (defaults to the configured download_dir)",
)
@click.option("--progress/--no-progress", default=True, help="Show a progress bar")
@click.pass_obj
def download(config, font_ids, dest, progress):
    """Download font variants given as 'Family|variant' ids."""
    session = None
    try:
        session = BrowserSession(build_manager(config), config.browser, show_progress=progress)
        for font_id in font_ids:
            session.select(font_id)
        if len(session.selections) == 0:
            click.echo("Nothing to download")
            sys.exit(1)

        report = session.download(dest or config.download_dir).result()
        for path in report.written:
            click.echo(f"Saved {path}")
        if report.failed:
            click.echo(f"Failed: {', '.join(str(s) for s in report.failed)}", err=True)
            sys.exit(1)
    except FontCatalogError as e:
        logger.exception(f"Download failed: {e}")
        sys.exit(1)
    finally:
        if session is not None:
            session.close()


if __name__ == "__main__":
    cli()
