# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os
from collections.abc import Sequence

from gitlanes import colors
from gitlanes.appconsts import APP_SYSTEM_NAME
from gitlanes.graph import GraphLine, GraphNode
from gitlanes.qt import *

logger = logging.getLogger(__name__)

LANE_WIDTH = 16
LANE_OFFSET = 8
LANE_THICKNESS = 2
DOT_RADIUS = 4
ROW_HEIGHT = 24

_guiApp = None


def getColor(color: int, palette: list[QColor] = colors.graphPalette) -> QColor:
    return palette[color % len(palette)]


def laneX(lane: int, left: int = 0) -> int:
    return left + LANE_OFFSET + lane * LANE_WIDTH


def graphRowWidth(node: GraphNode) -> int:
    """ Width in pixels taken up by the rightmost lane used in this row. """
    rightmostLane = max([node.lane] + [max(line.fromLane, line.toLane) for line in node.lines])
    return (rightmostLane + 1) * LANE_WIDTH + LANE_OFFSET


def paintGraphNode(
        node: GraphNode,
        painter: QPainter,
        rect: QRect,
        outlineColor: QColor,
        palette: list[QColor] = colors.graphPalette,
):
    painter.save()
    painter.setRenderHints(QPainter.RenderHint.Antialiasing, True)

    # Ensure all coordinates below are integers so our straight lines don't look blurry
    left = int(rect.left())
    top = int(rect.y())
    bottom = int(rect.y() + rect.height())  # Don't use rect.bottom(), which for historical reasons doesn't return what we want (see Qt docs)
    middle = (top + bottom) // 2
    mx = laneX(node.lane, left)  # the screen X of this commit's bullet point

    path = QPainterPath()

    def submitPath(color: int):
        # outline
        painter.setPen(QPen(outlineColor, LANE_THICKNESS + 2, Qt.PenStyle.SolidLine, Qt.PenCapStyle.FlatCap, Qt.PenJoinStyle.BevelJoin))
        painter.drawPath(path)
        # actual color
        painter.setPen(QPen(getColor(color, palette), LANE_THICKNESS, Qt.PenStyle.SolidLine, Qt.PenCapStyle.FlatCap, Qt.PenJoinStyle.BevelJoin))
        painter.drawPath(path)
        # clear path for next line
        path.clear()

    def isOwnLane(line: GraphLine):
        return line.isStraight and line.fromLane == node.lane

    # Draw lines switching lanes first, so straight lines stay on top
    for line in sorted(node.lines, key=lambda line: line.isStraight):
        ax = laneX(line.fromLane, left)
        bx = laneX(line.toLane, left)

        if isOwnLane(line) and node.isFirstInLane:
            # Tip of a lineage: line starts at the bullet point
            path.moveTo(ax, middle)
            path.lineTo(bx, bottom)
        elif line.isStraight:
            path.moveTo(ax, top)
            path.lineTo(bx, bottom)
        else:
            # Curve from the top of the lane above to the bottom of the lane below
            cx = (ax + bx) / 2
            path.moveTo(ax, top)
            path.quadTo(ax, middle, cx, middle)
            path.quadTo(bx, middle, bx, bottom)

        submitPath(line.color)

    # Connect the bullet point to the row above if nothing else does (e.g. bottom of a lineage)
    if not node.isFirstInLane and not any(line.fromLane == node.lane for line in node.lines):
        path.moveTo(mx, top)
        path.lineTo(mx, middle)
        submitPath(node.color)

    # Draw bullet point for this commit
    painter.setPen(QPen(outlineColor, 1))
    painter.setBrush(getColor(node.color, palette))
    painter.drawEllipse(QPoint(mx, middle), DOT_RADIUS, DOT_RADIUS)

    # we're done, clean up
    painter.restore()


def ensureGuiApplication():
    """ QPainter needs a QGuiApplication. Start a headless one if there's none yet. """
    global _guiApp
    app = QGuiApplication.instance()
    if app is None:
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        app = _guiApp = QGuiApplication([APP_SYSTEM_NAME])
    return app


def renderGraphImage(nodes: Sequence[GraphNode], dark: bool = False, rowHeight: int = ROW_HEIGHT) -> QImage:
    """ Paint the graph rows one below the other, as wide as the widest row. """
    ensureGuiApplication()

    if dark:
        palette, background = colors.graphPaletteDark, colors.black
    else:
        palette, background = colors.graphPalette, colors.white

    width = max((graphRowWidth(node) for node in nodes), default=LANE_OFFSET + LANE_WIDTH)
    height = max(1, len(nodes)) * rowHeight

    image = QImage(width, height, QImage.Format.Format_ARGB32)
    image.fill(background)

    painter = QPainter(image)
    try:
        for row, node in enumerate(nodes):
            rect = QRect(0, row * rowHeight, width, rowHeight)
            paintGraphNode(node, painter, rect, background, palette)
    finally:
        painter.end()

    return image


def saveGraphImage(nodes: Sequence[GraphNode], path: str, dark: bool = False):
    image = renderGraphImage(nodes, dark)
    if not image.save(path):
        raise OSError(f"could not write image: {path}")
    logger.info(f"Wrote {image.width()}x{image.height()} graph image to {path}")
