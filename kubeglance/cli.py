"""
Command-line interface for Kubeglance.

This module provides the command-line interface, handling argument parsing,
configuration loading from environment variables, and running the monitor in
single-shot or watch mode.

Key Functions:
- build_parser: Create and configure the argument parser
- load_config: Validate parsed arguments into a MonitorConfig
- main: Main entry point for the CLI application

Unknown arguments are ignored. Exit codes: 0 on success, on "no resources
found" and for --help; 1 when the cluster can't be queried in single-shot
mode; 2 on invalid configuration.

Example:
    ```bash
    # Single report
    kubeglance

    # Watch mode for another application
    KUBEGLANCE_LABEL="app=cjoc" kubeglance --watch
    ```
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Mapping, Optional

from .constants import (
    ENV_NAMESPACE, ENV_LABEL, ENV_CONTAINER_HINTS, ENV_LOG_LEVEL,
    DEFAULT_NAMESPACE, DEFAULT_LABEL_SELECTOR, DEFAULT_CONTAINER_HINTS,
    DEFAULT_REFRESH_SECONDS
)
from .exceptions import ConfigurationError
from .models import MonitorConfig
from .monitor import Monitor
from .validation import (
    validate_namespace, validate_label_selector, validate_refresh_interval,
    parse_container_hints
)

log = logging.getLogger('kubeglance')

HELP_EPILOG = f"""
Environment Variables:
  {ENV_NAMESPACE:<28} Kubernetes namespace to search (default: {DEFAULT_NAMESPACE})
  {ENV_LABEL:<28} Label selector for pods and StatefulSets (default: {DEFAULT_LABEL_SELECTOR})
  {ENV_CONTAINER_HINTS:<28} Comma-separated main container name hints (default: {','.join(DEFAULT_CONTAINER_HINTS)})
  {ENV_LOG_LEVEL:<28} Log level for diagnostics on stderr (default: WARNING)

Examples:
  kubeglance
  {ENV_NAMESPACE}=jenkins-system kubeglance
  {ENV_LABEL}="app=cjoc" kubeglance --watch
  kubeglance -l app=jenkins --namespace jenkins
"""


def build_parser(environ: Optional[Mapping[str, str]] = None) -> argparse.ArgumentParser:
    """
    Build and configure the command-line argument parser.

    Environment variables provide the defaults; flags override them.

    Args:
        environ: Environment to read defaults from (defaults to os.environ)

    Returns:
        argparse.ArgumentParser: Configured argument parser with all options
    """
    env = os.environ if environ is None else environ

    p = argparse.ArgumentParser(
        "kubeglance",
        description="Terminal status dashboard for the pods and StatefulSets of a labeled application",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        # Unknown flags that prefix a real one must not be expanded into it.
        allow_abbrev=False,
    )
    p.add_argument("-w", "--watch", action="store_true",
                   help=f"Watch mode (refresh every {DEFAULT_REFRESH_SECONDS:g} seconds)")
    p.add_argument("--namespace", default=env.get(ENV_NAMESPACE, DEFAULT_NAMESPACE),
                   help=f"Namespace to query (env: {ENV_NAMESPACE})")
    p.add_argument("-l", "--selector", default=env.get(ENV_LABEL, DEFAULT_LABEL_SELECTOR),
                   help=f"Label selector (env: {ENV_LABEL})")
    p.add_argument("--container-hints",
                   default=env.get(ENV_CONTAINER_HINTS, ",".join(DEFAULT_CONTAINER_HINTS)),
                   help=f"Comma-separated main container name hints (env: {ENV_CONTAINER_HINTS})")
    p.add_argument("--interval", type=float, default=DEFAULT_REFRESH_SECONDS,
                   help="Watch mode refresh interval in seconds")
    p.add_argument("--kubeconfig", default=None, help="Path to kubeconfig (defaults to kube rules)")
    p.add_argument("--context", default=None, help="Kubecontext override")
    return p


def load_config(args: argparse.Namespace) -> MonitorConfig:
    """
    Validate parsed arguments into a MonitorConfig.

    Raises:
        ConfigurationError: If any value is invalid
    """
    return MonitorConfig(
        namespace=validate_namespace(args.namespace),
        label_selector=validate_label_selector(args.selector),
        container_hints=parse_container_hints(args.container_hints),
        refresh_interval=validate_refresh_interval(args.interval),
        kubeconfig=args.kubeconfig,
        context=args.context,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the Kubeglance CLI application.

    Raises:
        SystemExit: Always, with the exit code of the run
    """
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)
    if unknown:
        log.debug(f"[cli] ignoring unknown arguments: {unknown}")

    try:
        config = load_config(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    monitor = Monitor(config)

    if args.watch:
        try:
            asyncio.run(monitor.watch())
        except KeyboardInterrupt:
            print("\nShutting down...", file=sys.stderr)
        sys.exit(0)

    sys.exit(asyncio.run(monitor.run_once()))


if __name__ == "__main__":  # pragma: no cover
    main()
