# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import pytest

from gitlanes import settings
from gitlanes.porcelain import RepoContext
from .util import RepoBuilder


@pytest.fixture(autouse=True)
def defaultPrefs():
    # Tests may tweak prefs; start every test from the defaults
    settings.prefs.reset()
    yield settings.prefs
    settings.prefs.reset()


@pytest.fixture
def mergeRepoBuilder(tmp_path) -> RepoBuilder:
    """
    r ── m1 ─────── M   (master, HEAD)
     ╲             ╱
      ╰── f1 ─────╯     (feature)

    Tag "v1" points to m1.
    """
    builder = RepoBuilder(str(tmp_path / "MergeRepo"))
    builder.commit("r", message="Initial commit")
    builder.commit("m1", ["r"], message="Tweak master")
    builder.commit("f1", ["r"], author="Bob", message="Add feature\n\nLong description\nof the feature.")
    builder.commit("M", ["m1", "f1"], message="Merge topic")
    builder.setRef("refs/heads/master", "M")
    builder.setRef("refs/heads/feature", "f1")
    builder.setRef("refs/tags/v1", "m1")
    yield builder
    builder.close()


@pytest.fixture
def mergeRepo(mergeRepoBuilder):
    with RepoContext(mergeRepoBuilder.path) as repo:
        yield repo
