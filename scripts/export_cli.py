"""
Command-line interface for exporting TrackMate XML files to PhyloXML/MetaXML.

Accepts a single TrackMate XML file or a folder of them.

Example usage:
    python export_cli.py --input ./data/movie.xml --output ./results --interval 8
    python export_cli.py --input ./data/xmls --output ./results
"""

import argparse
import os
import sys

from jungle_export.batch import export_trackmate_file, export_trackmate_folder
from jungle_export.config import DEFAULT_INTERVAL, DEFAULT_PROJECT_NAME, POPULATION_SCOPES, ExportSettings
from jungle_export.errors import JungleExportError
from jungle_export.log import get_logger, setup_logging

logger = get_logger("jungle_export.cli")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Export TrackMate XML files to the JuNGLE PhyloXML/MetaXML format."
    )

    parser.add_argument(
        "--input", "-i",
        required=True,
        help="TrackMate XML file or folder containing TrackMate XML files."
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Destination folder. Defaults to the image folder or the current directory."
    )
    parser.add_argument(
        "--project-name",
        default=None,
        help=f"Project name written to both documents (default: '{DEFAULT_PROJECT_NAME}', "
             "or the file name in folder mode)."
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_INTERVAL,
        help="Imaging interval in minutes."
    )
    parser.add_argument(
        "--population-scope",
        choices=POPULATION_SCOPES,
        default="all",
        help="Spots averaged for each frame's population center."
    )
    parser.add_argument("--min-duration", type=int, default=None,
                        help="Hide tracks shorter than this many frames.")
    parser.add_argument("--max-duration", type=int, default=None,
                        help="Hide tracks longer than this many frames.")
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-file", default=None)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        if os.path.isdir(args.input):
            export_trackmate_folder(
                folder=args.input,
                out_root=args.output or os.path.join(args.input, "jungle"),
                project_name=args.project_name,
                interval=args.interval,
                population_scope=args.population_scope,
                min_duration=args.min_duration,
                max_duration=args.max_duration,
            )
        else:
            settings = ExportSettings(
                project_name=args.project_name or DEFAULT_PROJECT_NAME,
                interval=args.interval,
                destination=args.output,
                population_scope=args.population_scope,
            )
            export_trackmate_file(
                args.input, settings,
                min_duration=args.min_duration, max_duration=args.max_duration,
            )
    except JungleExportError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
