# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import pytest

from gitlanes.graph import GraphDiagram, MockCommit, layoutCommits


def drawDefinition(definition: str, **kwargs) -> str:
    sequence, _heads = GraphDiagram.parseDefinition(definition)
    nodes, _maxLane = layoutCommits(sequence)
    return GraphDiagram.diagram(nodes, labels=[c.id for c in sequence], **kwargs)


def testParseDefinition():
    sequence, heads = GraphDiagram.parseDefinition("a1-a2:f b1:a2 f")
    assert sequence == [
        MockCommit("a1", ["a2"]),
        MockCommit("a2", ["f"]),
        MockCommit("b1", ["a2"]),
        MockCommit("f", []),
    ]
    assert heads == {"a1", "b1"}


def testParseDefinitionMerge():
    sequence, heads = GraphDiagram.parseDefinition("  a-b:c,d \n c d ")
    assert [c.id for c in sequence] == ["a", "b", "c", "d"]
    assert sequence[1].parent_ids == ["c", "d"]
    assert heads == {"a"}


def testParseDefinitionRejectsDuplicates():
    with pytest.raises(AssertionError):
        GraphDiagram.parseDefinition("a-b b")


def testDiagramLinearChain():
    assert drawDefinition("a-b-c") == "a ┯\nb ┿\nc ┷"


def testDiagramLoneCommit():
    assert drawDefinition("a") == "a ╳"


def testDiagramMerge():
    expected = "\n".join([
        "m ┯",
        "  ├─╮",
        "a ┿ │",
        "b │ ┿",
        "  ├─╯",
        "z ┷",
    ])
    assert drawDefinition("m:a,b a:z b:z z") == expected


def testDiagramFork():
    expected = "\n".join([
        "a ┯",
        "b │ ┯",
        "  ├─╯",
        "c ┷",
    ])
    assert drawDefinition("a:c b:c c") == expected


def testDiagramCaptions():
    sequence, _heads = GraphDiagram.parseDefinition("a-b")
    nodes, _maxLane = layoutCommits(sequence)
    assert GraphDiagram.diagram(nodes, captions=["first", "second"]) == "┯ first\n┷ second"


def testDiagramMaxRows():
    assert drawDefinition("a-b-c", maxRows=2) == "a ┯\nb ┿"


def testDiagramEmpty():
    assert GraphDiagram.diagram([]) == ""


def testDiagramIgnoresExtraLabels():
    sequence, _heads = GraphDiagram.parseDefinition("a-b")
    nodes, _maxLane = layoutCommits(sequence)
    text = GraphDiagram.diagram(nodes, labels=["a", "b", "c", "d"], captions=["x", "y", "z"])
    assert text == "a ┯ x\nb ┷ y"


def testDiagramShortLabels():
    sequence, _heads = GraphDiagram.parseDefinition("a-b")
    nodes, _maxLane = layoutCommits(sequence)
    assert GraphDiagram.diagram(nodes, labels=["a"]) == "a ┯\n  ┷"
