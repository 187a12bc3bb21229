# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import enum
import re
from collections.abc import Sequence
from itertools import chain, repeat

from gitlanes.graph.graphlayout import GraphNode, MockCommit

PADDING = 2


def padx(x):
    assert x >= 0
    return x * PADDING


class Link(enum.IntFlag):
    """ Directions in which a diagram cell connects to its neighbors. """
    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()


BOX_GLYPHS = {
    Link.UP | Link.DOWN: "│",
    Link.LEFT | Link.RIGHT: "─",
    Link.UP | Link.RIGHT: "╰",
    Link.UP | Link.LEFT: "╯",
    Link.DOWN | Link.RIGHT: "╭",
    Link.DOWN | Link.LEFT: "╮",
    Link.UP | Link.DOWN | Link.RIGHT: "├",
    Link.UP | Link.DOWN | Link.LEFT: "┤",
    Link.UP | Link.LEFT | Link.RIGHT: "┴",
    Link.DOWN | Link.LEFT | Link.RIGHT: "┬",
    Link.UP | Link.DOWN | Link.LEFT | Link.RIGHT: "┼",
    Link.UP: "╵",
    Link.DOWN: "╷",
}

COMMIT_GLYPHS = "╳┷┯┿"
"Indexed by (has line below) << 1 | (has line above)"


class GraphDiagram:
    """
    Renders laid-out commit rows as a box-drawing text diagram.

    Each commit gets a scanline with its bullet and the lanes passing by it.
    Rows with lines that switch lanes get an extra connector scanline below.
    """

    @staticmethod
    def parseDefinition(text: str) -> tuple[list[MockCommit], set[str]]:
        """
        Parse a one-liner graph definition, e.g. "a1-a2:f b1:a2 f".

        Each token is a chain of commits separated by dashes (each commit's
        parent is the next one in the chain), optionally followed by a colon
        and the comma-separated parents of the last commit in the chain.

        Return the commit sequence in order of appearance and the set of
        commits that aren't the parent of any commit appearing before them.
        """
        sequence = []
        parentMap = {}
        seen = set()
        heads = set()

        for line in re.split(r"\s+", text):
            line = line.strip()
            if not line:
                continue

            split = line.split(":")
            assert 1 <= len(split) <= 2

            chainStr = split[0]
            assert chainStr
            assert "," not in chainStr

            try:
                assert "-" not in split[1]
                rootParents = [p for p in split[1].split(",") if p]
            except IndexError:
                rootParents = []

            chain = chainStr.split("-")
            parents = [[c] for c in chain[1:]] + [rootParents]

            for commit, commitParents in zip(chain, parents):
                assert commit not in parentMap, f"Commit hash appears twice in sequence! {commit}"
                sequence.append(MockCommit(commit, commitParents))
                parentMap[commit] = commitParents
                if commit not in seen:
                    heads.add(commit)
                seen.update(commitParents)

        return sequence, heads

    @staticmethod
    def diagram(
            nodes: Sequence[GraphNode],
            labels: Sequence[str] = (),
            captions: Sequence[str] = (),
            maxRows: int = -1,
    ) -> str:
        """
        Draw the diagram for a sequence of GraphNodes.

        `labels` are right-justified in a margin to the left of the graph,
        `captions` are appended to the right of each commit's scanline.
        """
        diagram = GraphDiagram()

        # One row per node. Missing labels and captions are blank
        labels = chain(labels, repeat(""))
        captions = chain(captions, repeat(""))

        for i, (node, label, caption) in enumerate(zip(nodes, labels, captions)):
            if 0 <= maxRows <= i:
                break
            diagram.newRow(node, label, caption)

        return diagram.bake()

    # -----------------------------------------------------------------

    def __init__(self):
        self.scanlines: list[list[Link | str]] = []
        self.margins: list[str] = []
        self.captions: list[str] = []

    def reserve(self, x, y):
        for _ in range(len(self.scanlines), y + 1):
            self.scanlines.append([])
            self.margins.append("")
            self.captions.append("")
        scanline = self.scanlines[y]
        for _ in range(len(scanline), padx(x) + 1):
            scanline.append(Link(0))
        return scanline

    def plot(self, x, y, c: str):
        assert len(c) == 1
        scanline = self.reserve(x, y)
        scanline[padx(x)] = c

    def link(self, i, y, links: Link):
        """ Add connections to the cell at raw column `i` (not a lane number). """
        scanline = self.reserve(i // PADDING + 1, y)
        cell = scanline[i]
        assert isinstance(cell, Link), "overwriting a commit glyph!"
        scanline[i] = cell | links

    def newRow(self, node: GraphNode, label: str = "", caption: str = ""):
        upper = len(self.scanlines)
        lower = upper + 1

        hasLineBelow = any(line.fromLane == node.lane for line in node.lines)
        hasLineAbove = not node.isFirstInLane
        commitGlyph = COMMIT_GLYPHS[hasLineBelow << 1 | hasLineAbove]

        self.reserve(node.lane, upper)
        for line in node.lines:
            if line.isStraight and line.fromLane != node.lane:
                self.link(padx(line.fromLane), upper, Link.UP | Link.DOWN)
        self.plot(node.lane, upper, commitGlyph)
        self.margins[upper] = label
        self.captions[upper] = caption

        if all(line.isStraight for line in node.lines):
            return

        for line in node.lines:
            a = padx(line.fromLane)
            b = padx(line.toLane)
            if a == b:
                self.link(a, lower, Link.UP | Link.DOWN)
            elif a < b:
                self.link(a, lower, Link.UP | Link.RIGHT)
                for i in range(a + 1, b):
                    self.link(i, lower, Link.LEFT | Link.RIGHT)
                self.link(b, lower, Link.LEFT | Link.DOWN)
            else:
                self.link(a, lower, Link.UP | Link.LEFT)
                for i in range(b + 1, a):
                    self.link(i, lower, Link.LEFT | Link.RIGHT)
                self.link(b, lower, Link.RIGHT | Link.DOWN)

    @staticmethod
    def renderCell(cell: Link | str) -> str:
        if isinstance(cell, str):
            return cell
        return BOX_GLYPHS.get(cell, " ")

    def bake(self) -> str:
        marginWidth = max((len(m) for m in self.margins), default=0)
        graphWidth = max((len(s) for s in self.scanlines), default=0)

        lines = []
        for margin, scanline, caption in zip(self.margins, self.scanlines, self.captions):
            text = ""
            if marginWidth:
                text += margin.rjust(marginWidth) + " "
            graphText = "".join(self.renderCell(c) for c in scanline)
            if caption:
                text += graphText.ljust(graphWidth) + " " + caption
            else:
                text += graphText
            lines.append(text.rstrip())
        return "\n".join(lines)
