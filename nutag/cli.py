"""
nutag CLI - propose, create and push the next release tag
"""
import logging
from pathlib import Path
from typing import List, Optional

import click
from pydantic import ValidationError
from pydantic_settings import SettingsError

from nutag import __version__, github, vcs
from nutag.bump import Bump, BumpIntent, next_tag
from nutag.config import Settings
from nutag.errors import ConflictingBumpError, NutagError, ParseError
from nutag.tag import Tag, latest_tag, parse

logger = logging.getLogger("nutag")


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def default_intent(branches: List[str], settings: Settings) -> BumpIntent:
    """Patch release on a release branch, prerelease anywhere else."""
    if settings.is_release_branch(branches):
        return BumpIntent(level=Bump.PATCH)
    return BumpIntent(prerelease=True)


def collect_tags(repo: vcs.Vcs, settings: Settings, source: str, remote: str) -> List[str]:
    """Gather raw tag names from GitHub or from the local repository."""
    if source in ("auto", "github"):
        url = repo.remote_url(remote)
        coordinates = github.parse_remote_url(url) if url else None
        if coordinates and settings.github_token:
            owner, name = coordinates
            logger.info("Listing tags of %s/%s on GitHub", owner, name)
            return github.list_remote_tags(
                owner,
                name,
                settings.github_token,
                api_url=settings.github_api_url,
                timeout=settings.http_timeout,
            )
        if source == "github":
            raise click.UsageError(
                f"--source github needs GITHUB_TOKEN and a GitHub remote named '{remote}'"
            )

    logger.info("Fetching tags from %s", remote)
    repo.fetch_tags(remote)
    return repo.list_tags()


def choose_tag(proposed: Tag, existing: List[str], assume_yes: bool) -> Tag:
    if assume_yes:
        chosen = proposed
    else:
        answer = click.prompt("Tag to create", default=str(proposed))
        try:
            chosen = parse(answer.strip())
        except ParseError as exc:
            raise click.ClickException(str(exc)) from exc
    if str(chosen) in existing:
        raise click.ClickException(f"tag {chosen} already exists")
    return chosen


@click.command()
@click.version_option(version=__version__, prog_name="nutag")
@click.option("--major", is_flag=True, help="Bump the major version.")
@click.option("--minor", is_flag=True, help="Bump the minor version.")
@click.option("--patch", is_flag=True, help="Bump the patch version.")
@click.option("--pre", is_flag=True, help="Start or continue a preN prerelease series.")
@click.option("--prefix", default=None, help="Only consider tags namespaced as <prefix>@v...")
@click.option("--remote", default=None, help="Remote to fetch from and push to.")
@click.option(
    "--source",
    type=click.Choice(["auto", "vcs", "github"]),
    default="auto",
    show_default=True,
    help="Where to read existing tags from.",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Accept the proposed tag without prompting.")
@click.option("--dry-run", is_flag=True, help="Only print the proposed tag.")
@click.option("-v", "--verbose", count=True, help="-v for info, -vv for debug output.")
def cli(major, minor, patch, pre, prefix, remote, source, assume_yes, dry_run, verbose):
    """Propose the next semantic version tag, then create and push it."""
    configure_logging(verbose)

    try:
        intent: Optional[BumpIntent] = BumpIntent.from_flags(major, minor, patch, pre)
    except ConflictingBumpError as exc:
        raise click.UsageError(str(exc)) from exc

    try:
        settings = Settings()
    except (ValidationError, SettingsError) as exc:
        raise click.UsageError(f"invalid NUTAG_* environment settings: {exc}") from exc
    remote = remote or settings.remote

    try:
        repo = vcs.detect(Path.cwd())
        logger.debug("Using %s repository at %s", repo.executable, repo.root)

        if intent is None:
            branches = repo.current_branches()
            intent = default_intent(branches, settings)
            logger.info("No bump flag given, on %s: using %s", branches or "detached HEAD", intent)

        existing = collect_tags(repo, settings, source, remote)
        previous = latest_tag(existing, prefix)
        logger.info("Latest tag is %s", previous)

        proposed = next_tag(previous, intent)
        if dry_run:
            click.echo(str(proposed))
            return

        chosen = choose_tag(proposed, existing, assume_yes)
        if not assume_yes:
            click.confirm(f"Create and push {chosen} to {remote}?", default=True, abort=True)

        commit = repo.target_commit()
        repo.create_tag(str(chosen), commit)
        logger.info("Created %s at %s", chosen, commit)
        repo.push_tag(str(chosen), remote)
    except NutagError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Pushed {chosen} to {remote}")


def main():
    cli()


if __name__ == "__main__":
    main()
