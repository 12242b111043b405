#!/usr/bin/env python3

#
# Copyright (C) 2024-2025 biomodal. All rights reserved.
#

import argparse
import logging
import os
import shlex
import subprocess
from typing import List, Optional

from function_settings import BINDINGS, STORAGE_FINALIZED_EVENT, STORAGE_PROJECT, FunctionBinding

logger = logging.getLogger(__name__)

DEFAULT_REGION = os.environ.get('FUNCTION_REGION', 'us-central1')
DEFAULT_RUNTIME = os.environ.get('FUNCTION_RUNTIME', 'python312')


def build_deploy_command(binding: FunctionBinding, region: str, runtime: str,
                         project: Optional[str] = None) -> List[str]:
    """
    Build the gcloud command deploying one function binding.

    Args:
        binding (FunctionBinding): Function to deploy.
        region (str): Cloud Functions region.
        runtime (str): Python runtime id, e.g. python312.
        project (str): Project to deploy into, gcloud default if None.

    Returns:
        list: Command arguments
    """
    command = [
        "gcloud", "functions", "deploy", binding.name,
        "--gen2",
        f"--runtime={runtime}",
        f"--region={region}",
        "--source=.",
        f"--entry-point={binding.entry_point}",
        f"--max-instances={binding.max_instances}",
    ]
    if project:
        command.append(f"--project={project}")

    if binding.is_http:
        command.append("--trigger-http")
        if binding.auth_level == "anonymous":
            command.append("--allow-unauthenticated")
        else:
            command.append("--no-allow-unauthenticated")
        return command

    command.append(f"--trigger-event-filters=type={STORAGE_FINALIZED_EVENT}")
    command.append(f"--trigger-event-filters=bucket={binding.event_source}")
    if binding.retry:
        command.append("--retry")

    env_vars = [
        f"SOURCE_BUCKET={binding.event_source}",
        f"DESTINATION_BUCKET={binding.output_target}",
    ]
    if STORAGE_PROJECT:
        env_vars.append(f"STORAGE_PROJECT={STORAGE_PROJECT}")
    command.append(f"--set-env-vars={','.join(env_vars)}")
    return command


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="deploy_functions", description="Deploy the Cloud Functions in this repository")
    p.add_argument("--region", default=DEFAULT_REGION)
    p.add_argument("--runtime", default=DEFAULT_RUNTIME)
    p.add_argument("--project", default=None, help="Project to deploy into")
    p.add_argument("--only", choices=sorted(BINDINGS), default=None, help="Deploy a single function")
    p.add_argument("--dry-run", action="store_true", help="Print the commands instead of running them")
    return p


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    keys = [args.only] if args.only else sorted(BINDINGS)

    for key in keys:
        command = build_deploy_command(BINDINGS[key], args.region, args.runtime, args.project)
        if args.dry_run:
            print(shlex.join(command))
            continue
        logger.info(f"Deploying function '{BINDINGS[key].name}'")
        subprocess.run(command, check=True)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
