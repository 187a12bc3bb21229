# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Sequence

from gitlanes.porcelain import Oid as _RealOidType
from gitlanes.settings import DEVDEBUG

logger = logging.getLogger(__name__)

DEFAULT_PALETTE_SIZE = 8

Oid = _RealOidType | str


@dataclasses.dataclass(frozen=True)
class GraphLine:
    """ A segment drawn across a row, from a lane above to a lane below. """

    fromLane: int
    "Lane at the top of the row"

    toLane: int
    "Lane at the bottom of the row"

    color: int
    "Palette index of the lineage this segment belongs to"

    @property
    def isStraight(self):
        return self.fromLane == self.toLane

    def asDict(self):
        return {"from": self.fromLane, "to": self.toLane, "color": self.color}


@dataclasses.dataclass(frozen=True)
class GraphNode:
    """ Layout of a single commit row. """

    lane: int
    "Column in which the commit's dot is drawn"

    color: int
    "Palette index of the commit's lineage"

    isFirstInLane: bool
    "True if no line comes into this commit's lane from the row above"

    lines: tuple[GraphLine, ...]
    "Segments to draw in this row (pass-through lanes first, then the commit's own connections)"

    def asDict(self):
        return {
            "lane": self.lane,
            "color": self.color,
            "isFirstInLane": self.isFirstInLane,
            "lines": [line.asDict() for line in self.lines],
        }


class GraphLayout:
    """
    Assigns lanes, colors and line segments to a stream of commits.

    Commits must be fed in the order a history walk emits them: children
    before their parents. Each commit is laid out as soon as it's received,
    in a single forward pass. When a commit names a parent that hasn't been
    seen yet, a lane (and a color) is reserved for that parent; the parent
    picks up its reserved lane when it eventually comes around.

    Lanes are never removed from the lane table, they're only freed and
    reused (leftmost free lane first), so the table only grows as wide as
    the peak number of concurrent lineages.

    A GraphLayout holds the state of one pass. Use a fresh instance for
    each commit sequence.
    """

    lanes: list[Oid | None]
    "Commit occupying each lane, or None if the lane is free"

    laneLookup: dict[Oid, int]
    colorLookup: dict[Oid, int]

    assignedByChild: set[Oid]
    "Commits whose lane was reserved by a child before they were processed"

    seenCommits: set[Oid]

    def __init__(self, paletteSize: int = DEFAULT_PALETTE_SIZE):
        if paletteSize < 1:
            raise ValueError(f"palette size must be at least 1 (got {paletteSize})")

        self.paletteSize = paletteSize
        self.lanes = []
        self.laneLookup = {}
        self.colorLookup = {}
        self.assignedByChild = set()
        self.seenCommits = set()
        self.colorCounter = 0
        self.maxLane = 0
        self.row = -1

    def nextColor(self) -> int:
        color = self.colorCounter % self.paletteSize
        self.colorCounter += 1
        return color

    def allocateLane(self) -> int:
        """ Return the leftmost free lane, growing the lane table if there's none. """
        for lane, occupant in enumerate(self.lanes):
            if occupant is None:
                return lane
        self.lanes.append(None)
        return len(self.lanes) - 1

    def isLaneFree(self, lane: int) -> bool:
        return lane >= len(self.lanes) or self.lanes[lane] is None

    def liveLanes(self) -> dict[int, Oid]:
        return {lane: occupant for lane, occupant in enumerate(self.lanes) if occupant is not None}

    @property
    def danglingCommits(self) -> set[Oid]:
        """
        Commits that a child reserved a lane for, but that never showed up
        in the sequence (e.g. the history was truncated or filtered).
        """
        return self.assignedByChild - self.seenCommits

    def finish(self) -> set[Oid]:
        """
        Call this once the input runs out. Frees the lanes that are still
        reserved for commits that never showed up, and returns those commits.

        Rows that were already laid out are left alone: they keep the
        pass-through lines of the reserved lanes, up to the last row.
        """
        dangling = self.danglingCommits
        for lane, occupant in enumerate(self.lanes):
            if occupant in dangling:
                self.lanes[lane] = None
        return dangling

    def _connectParent(self, myLane: int, myColor: int, parent: Oid, lines: list[GraphLine]):
        """ Hand off my lane to my first parent, or converge onto its existing lane. """
        parentLane = self.laneLookup.get(parent)

        if parentLane is not None:
            # Parent already has a lane: draw a line to it and give up my lane
            lines.append(GraphLine(myLane, parentLane, myColor))
            self.lanes[myLane] = None
        else:
            # Parent inherits my lane and color
            self.laneLookup[parent] = myLane
            self.colorLookup[parent] = myColor
            self.assignedByChild.add(parent)
            self.lanes[myLane] = parent
            lines.append(GraphLine(myLane, myLane, myColor))

    def _branchOutParent(self, myLane: int, parent: Oid, lines: list[GraphLine]):
        """ Connect a merge commit to one of its parents beyond the first. """
        parentLane = self.laneLookup.get(parent)

        if parentLane is not None:
            # Merge line takes the color of the lane it lands in
            lines.append(GraphLine(myLane, parentLane, self.colorLookup[parent]))
            return

        newLane = self.allocateLane()
        newColor = self.nextColor()
        self.laneLookup[parent] = newLane
        self.colorLookup[parent] = newColor
        self.assignedByChild.add(parent)
        self.lanes[newLane] = parent
        self.maxLane = max(self.maxLane, newLane)
        lines.append(GraphLine(myLane, newLane, newColor))

    def newCommit(self, me: Oid, myParents: Sequence[Oid]) -> GraphNode:
        """ Lay out the next commit row. """

        self.row += 1
        self.seenCommits.add(me)

        # Pick up the lane that a child commit reserved for me, if any
        myLane = self.laneLookup.get(me)
        isFirstInLane = me not in self.assignedByChild

        if myLane is None:
            # Nobody was looking for me, so I'm the tip of a new lineage
            myLane = self.allocateLane()
            self.laneLookup[me] = myLane
            self.colorLookup[me] = self.nextColor()
            isFirstInLane = True

        self.lanes[myLane] = me
        self.maxLane = max(self.maxLane, myLane)
        myColor = self.colorLookup[me]

        # Unrelated lineages pass through this row
        lines = [GraphLine(lane, lane, self.colorLookup[occupant])
                 for lane, occupant in enumerate(self.lanes)
                 if occupant is not None and lane != myLane]

        if not myParents:
            # Root commit: the lineage ends here
            self.lanes[myLane] = None
        else:
            self._connectParent(myLane, myColor, myParents[0], lines)
            for parent in myParents[1:]:
                self._branchOutParent(myLane, parent, lines)

        if DEVDEBUG:
            live = [occupant for occupant in self.lanes if occupant is not None]
            assert len(live) == len(set(live)), f"commit occupies several lanes at row {self.row}"
            assert self.maxLane < max(1, len(self.lanes)), "maxLane out of lane table bounds"

        return GraphNode(lane=myLane, color=myColor, isFirstInLane=isFirstInLane, lines=tuple(lines))


@dataclasses.dataclass
class MockCommit:
    """ Minimal stand-in for pygit2.Commit: just an id and its parents. """
    id: Oid
    parent_ids: Sequence[Oid]


class GraphLayoutLoop:
    """
    Drives a GraphLayout over a commit sequence, one row per commit sent
    to the coroutine.

    Commits are duck-typed: anything with `id` and `parent_ids` will do
    (pygit2.Commit, MockCommit...)

    To abandon a long layout, stop sending commits and close the coroutine.
    The nodes produced so far remain valid.
    """

    def __init__(self, paletteSize: int = DEFAULT_PALETTE_SIZE):
        self.layout = GraphLayout(paletteSize)
        self.nodes: list[GraphNode] = []

    @property
    def maxLane(self) -> int:
        return self.layout.maxLane

    def sendAll(self, sequence: Iterable):
        gen = self.coLayout()
        gen.send(None)  # prime it
        for commit in sequence:
            gen.send(commit)
        gen.close()
        return self

    def coLayout(self):
        layout = self.layout
        nodes = self.nodes

        while True:
            try:
                commit = yield
            except GeneratorExit:
                break

            nodes.append(layout.newCommit(commit.id, commit.parent_ids))

        dangling = layout.finish()
        logger.debug(f"Laid out {len(nodes)} rows; max lane: {layout.maxLane}; "
                     f"dangling parents: {len(dangling)}")


def layoutCommits(sequence: Iterable, paletteSize: int = DEFAULT_PALETTE_SIZE) -> tuple[list[GraphNode], int]:
    """
    Lay out an entire commit sequence.

    Return the GraphNodes (one per commit, in the same order as the input)
    and the highest lane index used.
    """
    loop = GraphLayoutLoop(paletteSize).sendAll(sequence)
    return loop.nodes, loop.maxLane
