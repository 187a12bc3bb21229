# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import json
import logging
import sys
from argparse import ArgumentParser

from gitlanes import settings
from gitlanes.appconsts import APP_DISPLAY_NAME, APP_VERSION
from gitlanes.porcelain import ALL_REFS, GitError, InvalidRefError, RepoContext, find_repo_root

logger = logging.getLogger(__name__)


def makeParser() -> ArgumentParser:
    parser = ArgumentParser(prog="gitlanes", description=f"{APP_DISPLAY_NAME} - commit graph viewer")
    parser.add_argument("--version", action="version", version=f"{APP_DISPLAY_NAME} {APP_VERSION}")
    parser.add_argument("--debug", action="store_true", help="Verbose logging and expensive assertions")

    subparsers = parser.add_subparsers(dest="command")

    logParser = subparsers.add_parser("log", help="Show the commit graph (default)")
    logParser.add_argument("path", nargs="?", default=".", help="Path inside the repository")
    logParser.add_argument("-r", "--ref", default=ALL_REFS, help="Branch, tag or commit to start from (default: all refs)")
    logParser.add_argument("-s", "--search", default="", help="Only show commits whose subject, author or hash contain this text")
    logParser.add_argument("-n", "--limit", type=int, default=None, help="Maximum number of commits to walk")
    logParser.add_argument("--json", action="store_true", help="Print the commit log as JSON")
    logParser.add_argument("--image", metavar="PNG", default="", help="Also paint the graph into an image file")
    logParser.add_argument("--dark", action="store_true", help="Use the dark palette for --image")

    showParser = subparsers.add_parser("show", help="Show a commit's metadata and patch")
    showParser.add_argument("path", help="Path inside the repository")
    showParser.add_argument("commit", help="Commit hash or ref")
    showParser.add_argument("--json", action="store_true", help="Print the commit details as JSON")

    return parser


def printCommitLog(commitLog, asJson: bool):
    from gitlanes.graph import GraphDiagram

    if asJson:
        print(json.dumps(commitLog.asDict(), indent=2))
        return

    labels = [entry.shortId for entry in commitLog.entries]
    captions = []
    for entry in commitLog.entries:
        caption = entry.subject
        if entry.refs:
            caption = f"({', '.join(entry.refs)}) {caption}"
        captions.append(f"{caption} - {entry.author}, {entry.date}")

    print(GraphDiagram.diagram([entry.graph for entry in commitLog.entries], labels=labels, captions=captions))


def printCommitDetails(details, asJson: bool):
    if asJson:
        print(json.dumps(details.asDict(), indent=2))
        return

    print(f"commit {details.id}")
    if len(details.parentIds) > 1:
        print("Merge:", " ".join(p[:len(details.shortId)] for p in details.parentIds))
    print(f"Author: {details.author}")
    print(f"Date:   {details.date}")
    print()
    print(f"    {details.subject}")
    print()
    print(details.patch, end="")


def main(argv=None):
    parser = makeParser()
    args = parser.parse_args(argv)

    settings.prefs.load()

    if args.debug:
        settings.DEVDEBUG = True
        level = logging.DEBUG
    else:
        level = settings.prefs.verbosity.value

    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")

    from gitlanes.commitlog import loadCommitDetails, loadCommitLog

    command = args.command or "log"
    path = getattr(args, "path", ".")

    try:
        with RepoContext(find_repo_root(path)) as repo:
            if command == "show":
                printCommitDetails(loadCommitDetails(repo, args.commit), args.json)
            else:
                commitLog = loadCommitLog(
                    repo,
                    ref=getattr(args, "ref", ALL_REFS),
                    search=getattr(args, "search", ""),
                    limit=getattr(args, "limit", None))
                printCommitLog(commitLog, getattr(args, "json", False))
                if getattr(args, "image", ""):
                    from gitlanes.graphpaint import saveGraphImage
                    saveGraphImage([entry.graph for entry in commitLog.entries], args.image, args.dark)
    except (OSError, InvalidRefError, GitError) as exc:
        logger.error(f"{exc}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
