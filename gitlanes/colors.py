# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

# Graph palettes based on GitHub's Primer colors

from gitlanes.qt import QColor

blue        = QColor(0x0969DA)
purple      = QColor(0x8250DF)
pink        = QColor(0xBF3989)
red         = QColor(0xCF222E)
orange      = QColor(0xBC4C00)
brown       = QColor(0x4D2D00)
green       = QColor(0x1A7F37)
darkBlue    = QColor(0x0550AE)

lightBlue   = QColor(0x7AA2FF)
lavender    = QColor(0xB488FF)
lightPink   = QColor(0xFF8BD3)
salmon      = QColor(0xFF7B72)
lightOrange = QColor(0xF5B85B)
amber       = QColor(0xF2CC8F)
lightGreen  = QColor(0x3FB950)
cyan        = QColor(0x5CC8FF)

white       = QColor(0xFFFFFF)
black       = QColor(0x0D1117)

graphPalette = [
    blue, purple, pink, red, orange, brown, green, darkBlue
]

graphPaletteDark = [
    lightBlue, lavender, lightPink, salmon, lightOrange, amber, lightGreen, cyan
]
