# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Commit log service: walks a repository's history, filters it, and lays out
the commit graph for the rows that survive the filter.
"""

from __future__ import annotations

import dataclasses
import datetime
import logging

from gitlanes import settings
from gitlanes.graph import GraphNode, GraphLayoutLoop
from gitlanes.porcelain import Commit, Oid, Repo, Signature
from gitlanes.toolbox import Benchmark, benchmark

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class CommitLogEntry:
    id: str
    shortId: str
    subject: str
    author: str
    date: str
    parentIds: tuple[str, ...]
    refs: tuple[str, ...]
    graph: GraphNode

    def asDict(self):
        return {
            "sha": self.id,
            "shortSha": self.shortId,
            "subject": self.subject,
            "author": self.author,
            "date": self.date,
            "parents": list(self.parentIds),
            "refs": list(self.refs),
            "graph": self.graph.asDict(),
        }


@dataclasses.dataclass(frozen=True)
class CommitLog:
    entries: list[CommitLogEntry]
    maxLane: int

    def asDict(self):
        return {
            "commits": [entry.asDict() for entry in self.entries],
            "maxLane": self.maxLane,
        }


@dataclasses.dataclass(frozen=True)
class CommitDetails:
    id: str
    shortId: str
    subject: str
    author: str
    date: str
    parentIds: tuple[str, ...]
    patch: str

    def asDict(self):
        return {
            "sha": self.id,
            "shortSha": self.shortId,
            "subject": self.subject,
            "author": self.author,
            "date": self.date,
            "parents": list(self.parentIds),
            "patch": self.patch,
        }


def shortHash(oid: Oid | str) -> str:
    return str(oid)[:settings.prefs.shortHashChars]


def messageSubject(message: str) -> str:
    """
    Return the first paragraph of a commit message, unwrapped into a single
    line (same as git's "%s" format).
    """
    paragraph = message.strip().split("\n\n", 1)[0]
    return " ".join(line.strip() for line in paragraph.splitlines())


def signatureDateFormat(signature: Signature, timeFormat: str = "") -> str:
    """ Format a signature's timestamp in the signer's own timezone. """
    timeFormat = timeFormat or settings.prefs.shortTimeFormat
    tz = datetime.timezone(datetime.timedelta(minutes=signature.offset))
    when = datetime.datetime.fromtimestamp(signature.time, tz)
    return when.strftime(timeFormat)


def matchesSearch(commit: Commit, query: str) -> bool:
    """
    Case-insensitive substring search in a commit's subject, author name,
    and full hash.
    """
    query = query.lower()
    return (query in messageSubject(commit.message).lower()
            or query in commit.author.name.lower()
            or query in str(commit.id).lower())


def loadCommitLog(
        repo: Repo,
        ref: str | None = None,
        search: str | None = None,
        limit: int | None = None,
) -> CommitLog:
    """
    Walk the history reachable from `ref` (or from all refs), keep the
    commits matching `search`, and lay out their graph.
    """

    prefs = settings.prefs
    if limit is None:
        limit = prefs.maxCommits

    with Benchmark("Walk history", unit="commits") as bm:
        commits = repo.walk_history(ref, limit, chronological=prefs.chronologicalOrder)
        bm.count = len(commits)

    if search:
        commits = [c for c in commits if matchesSearch(c, search)]
        logger.debug(f"{len(commits)} commits match '{search}'")

    refNames = repo.map_commits_to_ref_names()

    with Benchmark("Lay out graph", unit="rows") as bm:
        loop = GraphLayoutLoop(prefs.graphPaletteSize).sendAll(commits)
        bm.count = len(loop.nodes)

    entries = []
    for commit, node in zip(commits, loop.nodes, strict=True):
        entries.append(CommitLogEntry(
            id=str(commit.id),
            shortId=shortHash(commit.id),
            subject=messageSubject(commit.message),
            author=commit.author.name,
            date=signatureDateFormat(commit.author),
            parentIds=tuple(str(p) for p in commit.parent_ids),
            refs=tuple(refNames.get(commit.id, ())),
            graph=node))

    return CommitLog(entries, loop.maxLane)


@benchmark
def loadCommitDetails(repo: Repo, commitId: str) -> CommitDetails:
    """ Get a commit's metadata and its patch against its parent. """

    commit = repo.peel_commit(repo.resolve_commit_id(commitId))

    return CommitDetails(
        id=str(commit.id),
        shortId=shortHash(commit.id),
        subject=messageSubject(commit.message),
        author=commit.author.name,
        date=signatureDateFormat(commit.author),
        parentIds=tuple(str(p) for p in commit.parent_ids),
        patch=repo.commit_patch_text(commit.id))
