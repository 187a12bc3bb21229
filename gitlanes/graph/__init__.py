# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from gitlanes.graph.graphlayout import (
    DEFAULT_PALETTE_SIZE,
    GraphLayout,
    GraphLayoutLoop,
    GraphLine,
    GraphNode,
    MockCommit,
    layoutCommits,
)
from gitlanes.graph.graphdiagram import GraphDiagram
