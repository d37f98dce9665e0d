from __future__ import annotations

import argparse
import logging
import sys
from os import path as os_path

import pypinpoint

_logger = logging.getLogger(__name__)

MODULE_DIR = os_path.dirname(os_path.abspath(__file__))

parser = argparse.ArgumentParser()
parser.add_argument("links", nargs="+", help="map links, short links or place names to resolve")
parser.add_argument("--instance", default="", help="instance name will be used to locate config (default: '')")
parser.add_argument("--config_path", default="", help="path to desired config (default: '')")
parser.add_argument("--logs_dir", default="", help="directory to desired logs (default: '')")


def main():
    """
    Main function to load the environment, parse command-line arguments, and resolve each link.
    """
    args = parser.parse_args()
    instance: str = args.instance
    config_path: str = args.config_path
    logs_dir: str = args.logs_dir

    project_name = pypinpoint.version.PROJECT_NAME

    # Determine default config and logs paths if not provided
    if not config_path:
        config_filename = f"{project_name}{'' if not instance else '_' + instance}.conf"
        config_path = os_path.join(MODULE_DIR, "..", "configs", config_filename)
    if not logs_dir:
        logs_instance_folder = f"{project_name}{'' if not instance else '_' + instance}"
        logs_dir = f"logs/{logs_instance_folder}"

    config_path = os_path.abspath(config_path)
    logs_dir = os_path.abspath(logs_dir)

    env = pypinpoint.loadEnv(config_path, project_dir=MODULE_DIR, instance=instance, logs_dir=logs_dir)
    _logger.info(f"Starting {env.project_name_text}.")

    resolver = pypinpoint.Resolver.fromEnv(env)
    failures = 0
    for link in args.links:
        result = resolver.resolve(link)
        if result.ok:
            coordinates = result.coordinates
            print(f"{coordinates.latitude:.6f}, {coordinates.longitude:.6f}  {coordinates.location_name}")
        else:
            failures += 1
            print(f"[{result.kind.value}] {result.message}", file=sys.stderr)
    sys.exit(1 if failures else 0)


if __name__ == "__main__":
    main()
