""" Script to run access analyses from a JSON configuration file.
See the `orbitaccess.mission` module for details on the configuration schema.

The script expects a user directory as input, which should contain an `AnalysisSpecs.json`
file with the analyses configuration. The script will execute the analyses and write the
results to `AnalysisOutput.json` in the same directory.

Example usage:
    python bin/run_access_analysis.py <path_to_user_directory> [--verbose]
"""
import os
import json
import argparse
import logging
import time
from typing import Any

from orbitaccess.mission import AccessMission

logger = logging.getLogger(__name__)


def main(user_dir: str) -> None:
    """
    Executes the access analyses according to an input JSON configuration file.

    Args:
        user_dir (str): Path to the user directory where it expects an `AnalysisSpecs.json`
                        configuration file and auxiliary files. Output files are written
                        in the same directory.

    Example:
        python bin/run_access_analysis.py examples/iss_svalbard/
    """
    start_time = time.process_time()

    specs_path = os.path.join(user_dir, 'AnalysisSpecs.json')
    if not os.path.isfile(specs_path):
        raise FileNotFoundError(f"AnalysisSpecs.json not found in {user_dir}")

    with open(specs_path, 'r', encoding='utf-8') as specs_file:
        mission_dict: dict[str, Any] = json.load(specs_file)

    mission_dict.setdefault("settings", {})["user_dir"] = user_dir  # Ensure settings and set user directory.

    mission = AccessMission.from_dict(mission_dict)

    logger.info("Start analyses.")
    results = mission.execute_all()

    elapsed_time = time.process_time() - start_time
    logger.info("Analyses complete. Time taken to execute in seconds: %.2f", elapsed_time)

    results_fp = os.path.join(user_dir, 'AnalysisOutput.json')
    with open(results_fp, 'w', encoding='utf-8') as results_file:
        json.dump(results, results_file, indent=4)
    logger.info("Results written to %s", results_fp)


class ReadableDir(argparse.Action):
    """Custom argparse Action to validate a readable directory."""

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        prospective_dir = values
        if not os.path.isdir(prospective_dir):
            raise argparse.ArgumentTypeError(f"{prospective_dir} is not a valid path.")
        if not os.access(prospective_dir, os.R_OK):
            raise argparse.ArgumentTypeError(f"{prospective_dir} is not a readable directory.")
        setattr(namespace, self.dest, prospective_dir)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run access analyses")
    parser.add_argument(
        'user_dir',
        action=ReadableDir,
        help="Directory with user config JSON file, and also to write the results."
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help="Log the progress of the analyses (including the refined crossings)."
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        main(args.user_dir)
    except Exception as e:
        logger.error("Error: %s", e)
        raise SystemExit(1) from e
