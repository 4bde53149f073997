from __future__ import annotations

import re
from dataclasses import dataclass

from ..core import console as ui
from ..core import git, settings
from ..core.errors import UsageError
from ..core.options import Positional, opt
from ..core.repo import Repo
from ..core.tool import ADVANCED, WORKFLOW, Context, Tool

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)(?:-pre)?$")


@dataclass(frozen=True)
class Version:
    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, text: str) -> "Version":
        m = _VERSION_RE.match(text.strip())
        if not m:
            raise UsageError(f"Invalid version: {text}", "Use semantic versions like 1.2.3 or v1.2.3")
        return cls(*(int(g) for g in m.groups()))

    def bump(self, part: str) -> "Version":
        if part == "major":
            return Version(self.major + 1, 0, 0)
        if part == "minor":
            return Version(self.major, self.minor + 1, 0)
        return Version(self.major, self.minor, self.patch + 1)

    @property
    def tag(self) -> str:
        return f"v{self}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def bump_part(opts) -> str:
    if opts.major:
        return "major"
    if opts.minor:
        return "minor"
    return "patch"


def changelog(repo: Repo, since: str | None) -> list[str]:
    rng = f"{since}..HEAD" if since else "HEAD"
    return repo.git("log", rng, "--pretty=format:- %s (%h)").lines


def readiness(ctx: Context) -> bool:
    repo = ctx.repo
    ui.header(ctx.console, "🔍 Release readiness")
    ready = True
    if git.has_changes(repo):
        ui.error(ctx.console, "Working tree has uncommitted changes")
        ready = False
    else:
        ui.success(ctx.console, "Working tree clean")
    branch = git.current_branch(repo)
    if branch in settings.MAIN_BRANCHES:
        ui.success(ctx.console, f"On {branch}")
    else:
        ui.warn(ctx.console, f"On {branch or 'detached HEAD'}, releases usually come from main")
    if not git.has_commits(repo):
        ui.error(ctx.console, "No commits to release")
        ready = False
    return ready


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    if opts.prepare:
        if readiness(ctx):
            ui.next_steps(ctx.console, [("Cut the release", "grelease --patch")])
        return

    last = git.latest_tag(repo)
    current = Version.parse(last) if last and _VERSION_RE.match(last) else Version(0, 0, 0)
    version = Version.parse(opts.version) if opts.version else current.bump(bump_part(opts))
    if not readiness(ctx):
        raise UsageError("Repository is not ready for a release", "Commit or stash your changes first")
    if git.ref_exists(repo, f"refs/tags/{version.tag}"):
        raise UsageError(f"Tag {version.tag} already exists", "Pick a higher version")

    ctx.console.print()
    ui.field(ctx.console, "🏷️  Version:", f"{current} -> {version}", "bold green")
    notes = changelog(repo, last)
    ui.listing(ctx.console, "📝 Changes", notes, "white")
    body = "\n".join([f"Release {version.tag}", ""] + notes)
    repo.git("tag", "-a", version.tag, "-m", body)
    ui.success(ctx.console, f"Created tag {version.tag}")

    if git.has_remote(repo):
        for ref in ("HEAD", version.tag):
            res = repo.git("push", settings.DEFAULT_REMOTE, ref, check=False)
            if not res.ok:
                ui.warn(ctx.console, f"Could not push {ref}: {res.output}")
                break
        else:
            ui.success(ctx.console, f"Pushed {version.tag} to {settings.DEFAULT_REMOTE}")
    else:
        ui.hint(ctx.console, f"No remote configured. Push later with: git push origin {version.tag}")


TOOL = Tool(
    name="grelease",
    summary="Tag a semantic-version release with a changelog",
    category=WORKFLOW,
    tier=ADVANCED,
    handler=run,
    positionals=(Positional("version", "?", help="explicit version, e.g. 1.4.0"),),
    options=(
        opt("--patch", help="bump the patch version (default)"),
        opt("--minor", help="bump the minor version"),
        opt("--major", help="bump the major version"),
        opt("--prepare", help="only check release readiness"),
    ),
    examples=("grelease --prepare", "grelease --minor", "grelease 2.0.0"),
)
