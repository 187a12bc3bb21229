# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

if __name__ == '__main__':
    from gitlanes.graph import *
    from argparse import ArgumentParser

    parser = ArgumentParser(description="GitLanes ASCII graph tool")
    parser.add_argument("definition", help="Graph definition (e.g.: \"u:z i:b m:a,b a:z b-c-z\")", nargs="+")
    parser.add_argument("-p", "--palette", type=int, default=DEFAULT_PALETTE_SIZE, help="Number of colors in the palette")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show lane and color of each commit")
    args = parser.parse_args()

    definition = " ".join(args.definition)
    sequence, heads = GraphDiagram.parseDefinition(definition)

    nodes, maxLane = layoutCommits(sequence, paletteSize=args.palette)

    captions = []
    if args.verbose:
        print("Heads:", " ".join(sorted(heads)))
        print("Max lane:", maxLane)
        captions = [f"lane {n.lane}, color {n.color}" + (", first" if n.isFirstInLane else "") for n in nodes]

    diagram = GraphDiagram.diagram(nodes, labels=[str(c.id) for c in sequence], captions=captions)
    print(diagram)
