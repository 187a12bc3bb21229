# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import os
from collections.abc import Sequence

import pygit2
from pygit2.enums import FileMode

from gitlanes.graph import GraphDiagram, GraphNode, layoutCommits
from gitlanes.porcelain import Oid, Signature

TEST_TIME = 1672600000


def makeSignature(name: str, time: int = TEST_TIME, offset: int = 0) -> Signature:
    return Signature(name, f"{name.lower()}@example.com", time, offset)


def layoutDefinition(definition: str, paletteSize: int = 8) -> tuple[dict[str, GraphNode], int]:
    """ Lay out a one-liner graph definition; return the nodes keyed by commit name. """
    sequence, _heads = GraphDiagram.parseDefinition(definition)
    nodes, maxLane = layoutCommits(sequence, paletteSize)
    assert len(nodes) == len(sequence)
    return {c.id: node for c, node in zip(sequence, nodes)}, maxLane


def lineTuples(node: GraphNode) -> list[tuple[int, int, int]]:
    return [(line.fromLane, line.toLane, line.color) for line in node.lines]


class RepoBuilder:
    """ Creates commits with explicit parents and timestamps in a fresh repository. """

    def __init__(self, path: str):
        os.makedirs(path, exist_ok=True)
        self.repo = pygit2.init_repository(path, initial_head="master")
        self.path = self.repo.workdir
        self.ids: dict[str, Oid] = {}
        self.clock = TEST_TIME

    def commit(
            self,
            name: str,
            parents: Sequence[str] = (),
            author: str = "Alice",
            message: str = "",
            ref: str = "",
            offset: int = 0,
    ) -> Oid:
        repo = self.repo
        parentIds = [self.ids[p] for p in parents]

        if parentIds:
            builder = repo.TreeBuilder(repo[parentIds[0]].peel(pygit2.Commit).tree)
        else:
            builder = repo.TreeBuilder()
        blobId = repo.create_blob(f"contents of {name}\n".encode())
        builder.insert(f"{name}.txt", blobId, FileMode.BLOB)
        treeId = builder.write()

        self.clock += 1000
        signature = makeSignature(author, self.clock, offset)
        oid = repo.create_commit(None, signature, signature, message or f"Commit {name}", treeId, parentIds)
        self.ids[name] = oid

        if ref:
            self.setRef(ref, name)
        return oid

    def setRef(self, ref: str, name: str):
        self.repo.references.create(ref, self.ids[name], force=True)

    def close(self):
        self.repo.free()
