# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations as _annotations

import logging as _logging
import os as _os
from pathlib import Path as _Path

from pygit2 import (
    Commit,
    Diff,
    GitError,
    InvalidSpecError,
    Oid,
    Repository as _VanillaRepository,
    Signature,
    Tree,
    discover_repository as _discover_repository,
)

from pygit2.enums import (
    DiffOption,
    ReferenceType,
    SortMode,
)

_logger = _logging.getLogger(__name__)

ALL_REFS = "all"
"Pseudo-ref that walks the history of every branch, tag and remote branch (like `git log --all`)."


class RefPrefix:
    HEADS = "refs/heads/"
    REMOTES = "refs/remotes/"
    TAGS = "refs/tags/"

    @classmethod
    def split(cls, refname: str) -> tuple[str, str]:
        for prefix in cls.HEADS, cls.REMOTES, cls.TAGS:
            if refname.startswith(prefix):
                return prefix, refname[len(prefix):]
        return "", refname


class InvalidRefError(KeyError):
    def __init__(self, ref: str, reason: str = ""):
        super().__init__(ref)
        self.ref = ref
        self.reason = reason

    def __str__(self):
        text = f"unknown revision: '{self.ref}'"
        if self.reason:
            text += f" ({self.reason})"
        return text


class RepoNotFoundError(FileNotFoundError):
    def __init__(self, path: str):
        super().__init__(f"not a git repository (or any parent): {path}")
        self.path = path


def find_repo_root(path: str | _Path) -> str:
    """
    Return the working directory of the repository enclosing `path`,
    searching parent directories like git does.
    """
    path = _os.path.abspath(path)
    if not _os.path.exists(path):
        raise FileNotFoundError(f"directory does not exist: {path}")

    try:
        gitdir = _discover_repository(path)
    except KeyError:  # pragma: no cover - older pygit2 raises instead of returning None
        gitdir = None

    if not gitdir:
        raise RepoNotFoundError(path)

    with RepoContext(gitdir) as repo:
        return repo.workdir or repo.path


class Repo(_VanillaRepository):
    """
    Drop-in replacement for pygit2.Repository with convenient front-ends to
    history walking and commit inspection.
    """

    @property
    def head_commit(self) -> Commit:
        return self.head.peel(Commit)

    def peel_commit(self, commit_id: Oid) -> Commit:
        return self[commit_id].peel(Commit)

    def map_refs_to_ids(self) -> dict[str, Oid]:
        """
        Return commit oids at the tip of all branches, tags, etc. in the repository.

        To ensure a consistent outcome across multiple walks of the same commit graph,
        the oids are sorted by ascending commit time.
        """

        tips: list[tuple[str, Commit]] = []

        for ref in self.listall_reference_objects():
            if ref.type != ReferenceType.DIRECT:  # Skip symbolic references
                continue

            try:
                commit: Commit = ref.peel(Commit)
                tips.append((ref.name, commit))
            except InvalidSpecError as e:
                # Some refs might not be committish, e.g. in linux's source repo
                _logger.info(f"{e} - Skipping ref '{ref.name}'")

        # Add 'HEAD' last so that it sorts favorably against tips sharing its timestamp
        try:
            tips.append(("HEAD", self.head_commit))
        except (GitError, InvalidSpecError):
            pass  # Skip unborn head

        tips.sort(key=lambda item: item[1].commit_time)
        return dict((ref, commit.id) for ref, commit in tips)

    def map_commits_to_ref_names(self) -> dict[Oid, list[str]]:
        """
        Return the display names of the refs pointing at each commit.

        Local branches appear as their shorthand, remote branches as
        "remote/branch". Tags and symbolic refs are omitted. A detached
        HEAD appears as "HEAD".
        """

        names: dict[Oid, list[str]] = {}

        if self.head_is_detached:
            names.setdefault(self.head.target, []).append("HEAD")

        for ref in self.listall_reference_objects():
            if ref.type != ReferenceType.DIRECT:
                _logger.debug(f"Skipping symbolic reference {ref.name} --> {ref.target}")
                continue

            prefix, shorthand = RefPrefix.split(ref.name)
            if prefix == RefPrefix.TAGS:
                continue

            try:
                commit_id = ref.peel(Commit).id
            except InvalidSpecError as e:
                _logger.info(f"{e} - Skipping ref '{ref.name}'")
                continue

            names.setdefault(commit_id, []).append(shorthand if prefix else ref.name)

        return names

    def resolve_commit_id(self, ref: str) -> Oid:
        """ Resolve a branch name, tag name, or any revision spec to a commit id. """
        try:
            obj = self.revparse_single(ref)
            return obj.peel(Commit).id
        except KeyError as e:
            raise InvalidRefError(ref) from e
        except (InvalidSpecError, ValueError) as e:
            raise InvalidRefError(ref, str(e)) from e

    def walk_history(self, ref: str | None = None, limit: int = 500, chronological: bool = True) -> list[Commit]:
        """
        Walk the history reachable from `ref` (or from every ref if `ref` is
        None or "all"), children first.

        Return at most `limit` commits (no cap if `limit` is zero or negative).
        """

        sorting = SortMode.TOPOLOGICAL
        if chronological:
            # Keep TOPOLOGICAL in addition to TIME so that a commit never
            # appears before its children, even with skewed timestamps.
            sorting |= SortMode.TIME

        if not ref or ref == ALL_REFS:
            tips = list(self.map_refs_to_ids().values())
        else:
            tips = [self.resolve_commit_id(ref)]

        if not tips:
            return []

        walker = self.walk(None, sorting)

        # In topological mode, the order in which the tips are pushed is
        # significant (last in, first out). The tips are pre-sorted in
        # ASCENDING chronological order so that the latest modified branches
        # come out at the top.
        for tip in tips:
            walker.push(tip)

        commits = []
        for commit in walker:
            if 0 < limit <= len(commits):
                break
            commits.append(commit)

        return commits

    def commit_diffs(self, commit_id: Oid, context_lines: int = 3) -> list[Diff]:
        """
        Get a list of Diffs of a commit compared to its parents.
        """
        flags = DiffOption.INCLUDE_TYPECHANGE

        commit: Commit = self.peel_commit(commit_id)

        if not commit.parents:
            # Parentless commit: diff with empty tree
            # (no tree passed to diff_to_tree == force diff against empty tree)
            diff = commit.tree.diff_to_tree(swap=True, flags=flags, context_lines=context_lines)
            return [diff]

        all_diffs = []

        parent: Commit
        for i, parent in enumerate(commit.parents):
            if i == 0:
                diff = self.diff(parent, commit, flags=flags, context_lines=context_lines)
                diff.find_similar()
                all_diffs.append(diff)
            elif not parent.parents:
                # This parent is parentless: assume merging in new files from this parent
                tree: Tree = parent.peel(Tree)
                diff = tree.diff_to_tree(swap=True, flags=flags, context_lines=context_lines)
                all_diffs.append(diff)
            else:
                # Skip non-parentless parent in merge commits
                pass

        return all_diffs

    def commit_patch_text(self, commit_id: Oid, context_lines: int = 3) -> str:
        return "".join(diff.patch or "" for diff in self.commit_diffs(commit_id, context_lines))


class RepoContext:
    def __init__(self, path: str | _Path):
        self.repo = Repo(str(path))

    def __enter__(self) -> Repo:
        return self.repo

    def __exit__(self, exc_type, exc_val, exc_tb):
        # repo.free() is necessary for correct test teardown on Windows
        self.repo.free()
        del self.repo
        self.repo = None


__all__ = [
    "ALL_REFS",
    "Commit",
    "GitError",
    "InvalidRefError",
    "Oid",
    "RefPrefix",
    "Repo",
    "RepoContext",
    "RepoNotFoundError",
    "Signature",
    "find_repo_root",
]
