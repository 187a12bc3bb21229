# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import os

import pytest

from gitlanes.porcelain import InvalidRefError, RefPrefix, RepoContext, RepoNotFoundError, find_repo_root
from .util import RepoBuilder


def testRefPrefixSplit():
    assert RefPrefix.split("refs/heads/main") == (RefPrefix.HEADS, "main")
    assert RefPrefix.split("refs/remotes/origin/main") == (RefPrefix.REMOTES, "origin/main")
    assert RefPrefix.split("refs/tags/v1") == (RefPrefix.TAGS, "v1")
    assert RefPrefix.split("refs/stash") == ("", "refs/stash")


def testFindRepoRootFromSubdirectory(mergeRepoBuilder):
    workdir = mergeRepoBuilder.path
    subdir = os.path.join(workdir, "some", "subdir")
    os.makedirs(subdir)
    assert os.path.realpath(find_repo_root(subdir)) == os.path.realpath(workdir)


def testFindRepoRootNotARepo(tmp_path):
    plainDir = tmp_path / "NotARepo"
    plainDir.mkdir()
    with pytest.raises(RepoNotFoundError):
        find_repo_root(plainDir)


def testFindRepoRootMissingDirectory(tmp_path):
    with pytest.raises(FileNotFoundError):
        find_repo_root(tmp_path / "nowhere")


def testRefsSortedByCommitTime(mergeRepoBuilder, mergeRepo):
    ids = mergeRepoBuilder.ids
    tips = mergeRepo.map_refs_to_ids()
    assert tips["refs/heads/master"] == ids["M"]
    assert tips["refs/heads/feature"] == ids["f1"]
    assert tips["refs/tags/v1"] == ids["m1"]
    assert tips["HEAD"] == ids["M"]

    times = [mergeRepo[oid].commit_time for oid in tips.values()]
    assert times == sorted(times)


def testMapCommitsToRefNames(mergeRepoBuilder, mergeRepo):
    ids = mergeRepoBuilder.ids
    mergeRepo.references.create("refs/remotes/origin/master", ids["r"])

    names = mergeRepo.map_commits_to_ref_names()
    assert names[ids["M"]] == ["master"]
    assert names[ids["f1"]] == ["feature"]
    assert names[ids["r"]] == ["origin/master"]
    assert ids["m1"] not in names


def testResolveCommitId(mergeRepoBuilder, mergeRepo):
    ids = mergeRepoBuilder.ids
    assert mergeRepo.resolve_commit_id("v1") == ids["m1"]
    assert mergeRepo.resolve_commit_id("master~1") == ids["m1"]
    assert mergeRepo.resolve_commit_id(str(ids["f1"])[:8]) == ids["f1"]

    with pytest.raises(InvalidRefError) as excinfo:
        mergeRepo.resolve_commit_id("nope")
    assert excinfo.value.ref == "nope"
    assert "nope" in str(excinfo.value)


def testWalkHistoryChildrenFirst(mergeRepoBuilder, mergeRepo):
    ids = mergeRepoBuilder.ids
    for chronological in True, False:
        commits = mergeRepo.walk_history(chronological=chronological)
        order = [c.id for c in commits]
        assert sorted(order) == sorted(ids.values())
        for commit in commits:
            for parentId in commit.parent_ids:
                assert order.index(commit.id) < order.index(parentId)


def testWalkHistoryNoLimit(mergeRepo):
    assert len(mergeRepo.walk_history(limit=0)) == 4
    assert len(mergeRepo.walk_history(limit=1)) == 1


def testWalkHistoryEmptyRepo(tmp_path):
    builder = RepoBuilder(str(tmp_path / "EmptyRepo"))
    builder.close()
    with RepoContext(builder.path) as repo:
        assert repo.walk_history() == []
