"""
Command-line entry points: labeling from GitHub Actions, and checking config
files locally.
"""

import json
import logging
import sys

import click
import sentry_sdk

from pr_labeler import __version__, settings
from pr_labeler.errors import LabelerError
from pr_labeler.inputs import (
    input_envvar,
    parse_bool_input,
    parse_truncate_input,
    pr_from_environment,
)
from pr_labeler.label_config import parse_label_config
from pr_labeler.labeling import DryRunLabelingActions, label_pull_request
from pr_labeler.reconcile import reconcile
from pr_labeler.types import PrId
from pr_labeler.utils import RequestFailed

logger = logging.getLogger(__name__)


def fail(message: str) -> None:
    """Report a failed run the way GitHub Actions shows it, and exit."""
    logger.error(message)
    click.echo(f"::error::{message}")
    sys.exit(1)


@click.group()
def cli():
    if settings.SENTRY_DSN:
        sentry_sdk.init(dsn=settings.SENTRY_DSN, release=f"pr_labeler@{__version__}")


@cli.command()
@click.option("--repo-token", envvar=input_envvar("repo-token"), required=True,
              help="GitHub token used to read the pull request and change its labels.")
@click.option("--configuration-path", envvar=input_envvar("configuration-path"),
              default=".github/labeler.yml", show_default=True,
              help="Path of the labeler config in the repository.")
@click.option("--sync-labels", envvar=input_envvar("sync-labels"), default="",
              help="Remove labels whose rules no longer match (true/false).")
@click.option("--truncate", envvar=input_envvar("truncate"), default="",
              help="The most labels the pull request may end up with (at most 100).")
@click.option("--repo", help="The owner/name of the repository, if not running in Actions.")
@click.option("--pr", "pr_number", type=int, help="The pull request number, if not running in Actions.")
@click.option("--dry-run", is_flag=True, help="Report what would change without changing anything.")
def label(repo_token, configuration_path, sync_labels, truncate, repo, pr_number, dry_run):
    "Label a pull request from the files it changes"
    try:
        sync = parse_bool_input("sync-labels", sync_labels)
        truncate_limit = parse_truncate_input(truncate)

        if repo and pr_number:
            prid = PrId(repo, pr_number)
        else:
            prid = pr_from_environment()
        if prid is None:
            logger.info("Could not get pull request number from context, exiting")
            return

        actions = DryRunLabelingActions() if dry_run else None
        result = label_pull_request(
            prid,
            configuration_path=configuration_path,
            sync_labels=sync,
            truncate=truncate_limit,
            token=repo_token,
            actions=actions,
        )
    except (LabelerError, RequestFailed) as exc:
        fail(str(exc))
        return

    if dry_run:
        click.echo(json.dumps(
            {"result": result.as_json(), "actions": actions.action_calls},
            indent=4,
        ))


@cli.command()
@click.argument("config_file", type=click.File("r", encoding="utf-8"))
@click.argument("changed_files", nargs=-1)
@click.option("--label", "current_labels", multiple=True,
              help="A label already on the pull request.  Can be repeated.")
@click.option("--sync-labels", is_flag=True, help="Compute removals too.")
@click.option("--truncate", type=int, default=100, show_default=True)
def check(config_file, changed_files, current_labels, sync_labels, truncate):
    "Show what a config file would do for a set of changed files"
    try:
        label_rules = parse_label_config(config_file.read())
        result = reconcile(
            current_labels,
            label_rules,
            changed_files,
            truncate_limit=truncate,
            sync_mode=sync_labels,
        )
    except LabelerError as exc:
        fail(str(exc))
        return

    if result.nothing_to_do:
        click.echo("Nothing to do.")
    for name in result.to_remove:
        click.echo(f"- {name}")
    for name in result.to_add:
        click.echo(f"+ {name}")


if __name__ == "__main__":
    cli()
