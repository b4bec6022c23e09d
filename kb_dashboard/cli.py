import json
import logging
import sys
from typing import Optional, Sequence

import click
import requests

import kb_dashboard.middleware.clusters as clusters_
from kb_dashboard.environment import Environment
from kb_dashboard.middleware.dashboard import build_dashboard_view
from kb_dashboard.models.kinds import aggregate_kinds
from kb_dashboard.models.revision import resolve_revisions
from kb_dashboard.models.utils import ExitCode

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s [%(levelname)s] %(message)s'


class Context(object):
    def __init__(self, config_file: Optional[str]) -> None:
        self.config_file = config_file
        try:
            if config_file:
                self.env = Environment(config_file=config_file)
            else:
                self.env = Environment.from_env()
        except Exception as e:
            raise click.ClickException(str(e))
        self.json = False


def upstream_error(action: str, error: Exception) -> click.ClickException:
    logger.error(f"Failed to {action}: {error}")
    return click.ClickException(f"Failed to {action}: {type(error).__name__} {error}")


@click.group()
@click.option("--config-file", default=None, envvar="KB_CONFIG_FILE",
              help="Path to a YAML config file. Defaults to reading KB_* environment variables.")
@click.option("--json", is_flag=True)
@click.option('-v', '--verbose', count=True, help="Verbosity level. Default is warn, -v is info, -vv is debug.")
@click.pass_context
def cli(ctx, config_file, json, verbose):
    logging.basicConfig(format=LOG_FORMAT, level=logging.WARN - (10 * verbose))
    logger.info(f"Logging set to {logging.getLevelName(logger.getEffectiveLevel())}")
    ctx.obj = Context(config_file)
    ctx.obj.json = json


@cli.command(name="serve")
@click.pass_obj
def serve_cmd(ctx):
    """Serve the dashboard over HTTP until SIGINT/SIGTERM."""
    # The listen/signal/exit lines are always worth seeing for a server
    root_logger = logging.getLogger()
    if root_logger.getEffectiveLevel() > logging.INFO:
        root_logger.setLevel(logging.INFO)
    # uvicorn is only needed for this command
    from kb_dashboard.server import serve
    serve(ctx.env)


@cli.command(name="revisions")
@click.pass_obj
def revisions_cmd(ctx):
    """List the index revisions on the cluster, newest first."""
    env = ctx.env
    try:
        index_names = clusters_.list_index_names(env.cluster, timeout=env.dashboard.request_timeout)
    except requests.exceptions.RequestException as e:
        raise upstream_error("list indices", e)
    revisions = resolve_revisions(index_names, prefix=env.dashboard.index_prefix)
    if ctx.json:
        click.echo(json.dumps([r._asdict() for r in revisions]))
        return
    for revision in revisions:
        click.echo(f"{revision.rev}\t{revision.index}")


@cli.command(name="kinds")
@click.pass_obj
def kinds_cmd(ctx):
    """Show document counts by kind."""
    settings = ctx.env.dashboard
    try:
        buckets = clusters_.kinds_aggregation(ctx.env.cluster,
                                              pattern=settings.kinds_pattern,
                                              field=settings.kind_field,
                                              size=settings.kinds_size,
                                              timeout=settings.request_timeout)
    except requests.exceptions.RequestException as e:
        raise upstream_error("aggregate kinds", e)
    kinds = aggregate_kinds(buckets)
    if ctx.json:
        click.echo(json.dumps([k._asdict() for k in kinds]))
        return
    if not kinds:
        click.echo("No documents found.")
    for kind in kinds:
        click.echo(f"{kind.kind}\t{kind.count}")


@cli.command(name="dashboard")
@click.pass_obj
def dashboard_cmd(ctx):
    """Print the full dashboard view as JSON."""
    try:
        view = build_dashboard_view(ctx.env.cluster, ctx.env.dashboard)
    except requests.exceptions.RequestException as e:
        raise upstream_error("load dashboard", e)
    click.echo(json.dumps({
        "indices": [r._asdict() for r in view.indices],
        "kinds": [k._asdict() for k in view.kinds],
    }))


@cli.command(name="connection-check")
@click.pass_obj
def connection_check_cmd(ctx):
    """Checks if a connection can be established to the cluster"""
    result = clusters_.connection_check(ctx.env.cluster)
    if ctx.json:
        click.echo(json.dumps(result.__dict__))
    else:
        click.echo(result)
    if not result.connection_established:
        click.get_current_context().exit(ExitCode.FAILURE.value)


def main(args: Optional[Sequence[str]] = None) -> None:
    """
    Process entry point. Logs how the process ended and exits non-zero on any error.
    """
    try:
        rv = cli.main(args=args, prog_name="kb-dashboard", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        logger.error(f"exited with error: {e.format_message()}")
        sys.exit(e.exit_code)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        logger.error("exited with error: aborted")
        sys.exit(ExitCode.FAILURE.value)
    except Exception as e:
        logger.exception(f"exited with error: {e}")
        sys.exit(ExitCode.FAILURE.value)

    if isinstance(rv, int) and rv != ExitCode.SUCCESS.value:
        logger.error(f"exited with status {rv}")
        sys.exit(rv)
    logger.info("exited")


if __name__ == "__main__":
    main()
