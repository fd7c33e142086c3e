"""Argument parsing functionality for hangar-upload."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program.

    Upload inputs left unset here are read from INPUT_<NAME> environment
    variables, so the tool runs unchanged as a GitHub Action step.
    """
    parser = argparse.ArgumentParser(
        prog="hangar-upload",
        description=(
            "Upload a plugin version to Hangar, resolving platform dependency versions"
        ),
        add_help=True,
    )

    parser.add_argument("--api-token",
                        dest="api_token",
                        help="Hangar API key (or INPUT_API_TOKEN)",
                        action="store", type=str)
    parser.add_argument("--slug",
                        dest="slug",
                        help="Hangar project slug",
                        action="store", type=str)
    parser.add_argument("--version",
                        dest="version",
                        help="Version name to upload",
                        action="store", type=str)
    parser.add_argument("--channel",
                        dest="channel",
                        help="Release channel, e.g. Release or Snapshot",
                        action="store", type=str)
    parser.add_argument("--files",
                        dest="files",
                        help="JSON array of file entries ({path|url+externalUrl, platforms})",
                        action="store", type=str)
    parser.add_argument("--description",
                        dest="description",
                        help="Version description / changelog",
                        action="store", type=str)
    parser.add_argument("--plugin-dependencies",
                        dest="plugin_dependencies",
                        help="JSON object of plugin dependencies",
                        action="store", type=str)
    parser.add_argument("--platform-dependencies",
                        dest="platform_dependencies",
                        help="JSON object mapping platform to version patterns, e.g. {\"PAPER\": [\"1.20.x\"]}",
                        action="store", type=str)

    parser.add_argument("--resolve-only",
                        dest="RESOLVE_ONLY",
                        help="Only resolve platform dependencies and print them as JSON.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to YAML configuration file",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
