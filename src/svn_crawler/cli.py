"""CLI for svn-crawler."""

import sys
import time

import click
import structlog

from svn_crawler.config.logging import configure_logging
from svn_crawler.core.exceptions import (
    ConfigurationError,
    RepositoryConnectionError,
    SvnCrawlerError,
)

logger = structlog.get_logger(__name__)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """svn-crawler: harvest Subversion history for search indexing."""
    from svn_crawler.config.settings import get_settings

    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.log_level
    configure_logging(log_level=log_level, json_logs=settings.json_logs)


@cli.command()
@click.argument("url")
@click.option("--path", "-p", default="/", help="Path to crawl inside the repository")
@click.option("--start", "-s", type=int, default=0, help="First revision (inclusive)")
@click.option("--end", "-e", type=int, default=None, help="Last revision (default: latest)")
@click.option("--login", help="Repository login")
@click.option("--password", help="Repository password")
@click.option("--exclude", "-x", multiple=True, help="Regular expression of paths to exclude")
@click.option("--max-file-size", type=int, default=None, help="Maximum file size in bytes")
@click.option("--index", "index_name", default="svn", help="Target index name")
@click.option("--output", "-o", type=click.File("w"), default="-", help="Bulk NDJSON output file")
def crawl(
    url: str,
    path: str,
    start: int,
    end: int | None,
    login: str | None,
    password: str | None,
    exclude: tuple[str, ...],
    max_file_size: int | None,
    index_name: str,
    output,
) -> None:
    """Crawl a repository once and write bulk index actions.

    Revisions and their documents are written as Elasticsearch bulk NDJSON.
    """
    from svn_crawler.core.models import CrawlParameters, RepositoryAddress
    from svn_crawler.crawler import Crawler
    from svn_crawler.sink import BulkFileSink, build_actions

    try:
        address = RepositoryAddress.parse(url)
        parameters = CrawlParameters(
            path=path,
            start_revision=start,
            end_revision=end,
            login=login,
            password=password,
            patterns_to_filter=list(exclude),
            maximum_file_size=max_file_size,
        )
    except (ConfigurationError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    try:
        result = Crawler().crawl(address, parameters)
    except RepositoryConnectionError as e:
        click.echo(f"Error: cannot reach repository: {e}", err=True)
        sys.exit(1)
    except SvnCrawlerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    bulk = BulkFileSink(output, index_name=index_name).submit(build_actions(result.revisions))
    click.echo(
        f"Crawl {result.state.value}: {len(result.revisions)} revisions, "
        f"{result.document_count} documents ({bulk.submitted} actions written)",
        err=True,
    )
    if result.last_revision is not None:
        click.echo(f"Last revision: {result.last_revision}", err=True)


@cli.command()
@click.argument("url")
@click.option("--login", help="Repository login")
@click.option("--password", help="Repository password")
def latest(url: str, login: str | None, password: str | None) -> None:
    """Print the latest revision of a repository."""
    from svn_crawler.core.models import Credentials, RepositoryAddress
    from svn_crawler.svn import open_repository

    try:
        repository = open_repository(
            RepositoryAddress.parse(url), Credentials(login=login, password=password)
        )
        click.echo(repository.latest_revision())
    except SvnCrawlerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option("--once", is_flag=True, help="Run a single crawl cycle and exit")
def watch(once: bool) -> None:
    """Crawl the configured repository every update rate.

    Configuration comes from SVN_CRAWLER_* environment variables or .env.
    """
    from svn_crawler.config.settings import get_settings
    from svn_crawler.crawler import Crawler
    from svn_crawler.services import CrawlScheduler, RevisionStateStore
    from svn_crawler.sink import BulkFileSink

    settings = get_settings()
    try:
        settings.address()
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    stream = open(settings.output, "a", encoding="utf-8") if settings.output else sys.stdout
    try:
        scheduler = CrawlScheduler(
            crawler=Crawler(),
            sink=BulkFileSink(stream, index_name=settings.index_name),
            settings=settings,
            state_store=RevisionStateStore(settings.state_file),
        )
        if once:
            try:
                result = scheduler.run_once()
            except SvnCrawlerError as e:
                click.echo(f"Error: {e}", err=True)
                sys.exit(1)
            click.echo(f"Crawl {result.state.value}: {len(result.revisions)} revisions", err=True)
            return

        click.echo(
            f"Watching {settings.repos}{settings.path} every {settings.update_rate:g}s "
            "(Ctrl-C to stop)",
            err=True,
        )
        scheduler.start()
        try:
            while scheduler.is_running:
                time.sleep(1)
        except KeyboardInterrupt:
            click.echo("Stopping...", err=True)
        finally:
            scheduler.stop()
    finally:
        if stream is not sys.stdout:
            stream.close()


if __name__ == "__main__":
    cli()
