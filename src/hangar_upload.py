"""hangar-upload - publish a plugin version to Hangar

Resolves platform dependency patterns against the Mojang and PaperMC
catalogs, then authenticates and uploads the version with its files.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from args import parse_args
from common.logging_utils import configure_logging
from config import ConfigError, Settings, load_settings
from constants import Constants, ExitCodes
from hangar import FileProcessingError, FileProcessor, HangarClient, HangarError
from inputs import ActionInputs, InputError, InputParser
from versioning import CatalogError, Resolver

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure console logging and the optional --logfile handler."""
    configure_logging(args.LOG_LEVEL)
    if args.LOG_FILE:
        file_handler = logging.FileHandler(args.LOG_FILE)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logging.getLogger().addHandler(file_handler)
        logger.info("Logging to file: %s", args.LOG_FILE)


def set_output(name: str, value: str) -> None:
    """Expose an output to later workflow steps when running under Actions."""
    output_path = os.environ.get(Constants.ENV_GITHUB_OUTPUT)
    if not output_path:
        return
    with open(output_path, "a", encoding="utf-8") as fh:
        fh.write(f"{name}={value}\n")


def build_version_upload(
    inputs: ActionInputs,
    files_data: List[Dict[str, Any]],
    platform_dependencies: Dict[str, List[str]],
) -> Dict[str, Any]:
    """Assemble the versionUpload JSON part."""
    payload: Dict[str, Any] = {
        "version": inputs.version,
        "channel": inputs.channel,
        "files": files_data,
        "pluginDependencies": inputs.plugin_dependencies,
        "platformDependencies": platform_dependencies,
    }
    if inputs.description is not None:
        payload["description"] = inputs.description
    return payload


def run(args, settings: Settings) -> Optional[str]:
    """Execute one run; returns the upload URL, or None with --resolve-only."""
    parser = InputParser(values=vars(args))
    resolver = Resolver(settings=settings)

    if args.RESOLVE_ONLY:
        resolved = resolver.resolve(parser.parse_platform_dependencies())
        sys.stdout.write(json.dumps(resolved, indent=2) + "\n")
        return None

    inputs = parser.parse_inputs()
    logger.info(
        "Uploading version %s to project %s on channel %s",
        inputs.version,
        inputs.slug,
        inputs.channel,
    )

    upload_files, files_data = FileProcessor().process_files(inputs.files)
    resolved = resolver.resolve(inputs.platform_dependencies)
    version_upload = build_version_upload(inputs, files_data, resolved)
    logger.debug("Version upload payload: %s", json.dumps(version_upload))

    client = HangarClient(settings)
    token = client.authenticate(inputs.api_token, inputs.slug)
    upload_url = client.upload_version(inputs.slug, token, upload_files, version_upload)

    set_output("upload_url", upload_url)
    logger.info("Upload completed successfully! URL: %s", upload_url)
    return upload_url


def main(argv=None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        settings = load_settings(args.CONFIG)
        run(args, settings)
    except (InputError, FileProcessingError, ConfigError) as e:
        logger.error("Action failed: %s", e)
        return ExitCodes.FILE_ERROR.value
    except CatalogError as e:
        logger.error("Version resolution failed: %s", e)
        if e.response_body:
            logger.debug("Catalog response body: %s", e.response_body)
        return ExitCodes.CONNECTION_ERROR.value
    except HangarError as e:
        logger.error("Hangar API error (%s): %s", e.status_code, e)
        if e.response_body:
            logger.debug("API response body: %s", e.response_body)
        return ExitCodes.API_ERROR.value
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
