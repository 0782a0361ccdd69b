# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""Command-line interface for docscope."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from ..config.config import Config
from ..config.constants import DocScopeConstants
from ..core.exceptions import DocScopeError, UnsupportedFormatError
from ..core.scan_policy import ScanPolicy

logger = logging.getLogger("docscope.cli")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(config: Config, verbose: bool) -> None:
    """Route package logs to the textual log and, optionally, a file."""
    from textual.logging import TextualHandler

    level_name = "DEBUG" if verbose else config.log_level
    level = getattr(logging, str(level_name).upper(), logging.WARNING)

    package_logger = logging.getLogger("docscope")
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.addHandler(TextualHandler())
    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(file_handler)


def _load_policy(args: argparse.Namespace, config: Config) -> ScanPolicy | None:
    """Load the scan policy from ``--policy`` / ``DOCSCOPE_POLICY`` or the default.

    Prints a diagnostic and returns ``None`` when the policy cannot be loaded.
    """
    policy_value = args.policy or config.policy_path
    if policy_value:
        try:
            policy = ScanPolicy.from_yaml(policy_value)
            logger.info("Using scan policy: %s (%s)", policy_value, policy.policy_name)
        except FileNotFoundError:
            print(f"Error: Policy file not found: {policy_value}", file=sys.stderr)
            return None
        except (ValueError, TypeError, yaml.YAMLError) as e:
            print(f"Error loading policy file: {e}", file=sys.stderr)
            return None
    else:
        policy = ScanPolicy.default()

    try:
        return policy.with_limits(max_findings=config.max_findings, max_lines=config.max_lines)
    except ValueError as e:
        print(f"Error: invalid limit override: {e}", file=sys.stderr)
        return None


def detect_format(path: Path) -> str:
    """Classify *path* by extension as ``container``, ``pdf`` or ``legacy``.

    Raises:
        UnsupportedFormatError: For any other extension
    """
    suffix = path.suffix.lower()
    if suffix in DocScopeConstants.CONTAINER_EXTENSIONS:
        return "container"
    if suffix in DocScopeConstants.PDF_EXTENSIONS:
        return "pdf"
    if suffix in DocScopeConstants.LEGACY_EXTENSIONS:
        return "legacy"
    supported = " ".join(sorted(DocScopeConstants.supported_extensions()))
    raise UnsupportedFormatError(f"unsupported format '{suffix or path.name}' (supported: {supported})")


def generate_policy_command(output: str) -> int:
    """Write the built-in policy to *output* for editing."""
    output_path = Path(output)
    try:
        ScanPolicy.default().to_yaml(output_path)
    except OSError as e:
        print(f"Error generating policy: {e}", file=sys.stderr)
        return 1
    print(f"Generated default scan policy: {output_path}\n")
    print("Edit the file to customise, then use:")
    print(f"  docscope --policy {output_path} /path/to/document.docx")
    return 0


def review_command(path: Path, policy: ScanPolicy) -> int:
    """Open the interactive session matching the document type."""
    try:
        kind = detect_format(path)
    except UnsupportedFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    from .review_tui import run_container_tui, run_legacy_tui, run_pdf_tui

    runners = {
        "container": run_container_tui,
        "pdf": run_pdf_tui,
        "legacy": run_legacy_tui,
    }
    logger.debug("Opening %s as %s", path, kind)
    try:
        return runners[kind](path, policy)
    except DocScopeError as e:
        logger.debug("Cannot open %s: %s", path, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="docscope",
        description="docscope - suspicious-content scanner and reviewer for office documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docscope report.docx
  docscope invoice.pdf
  docscope --policy my_policy.yaml legacy.doc
  docscope --generate-policy my_policy.yaml

Keys:
  member list   up/down/PgUp/PgDn move, right opens, s scans, i structure, ESC/q quits
  match list    up/down scroll, Ctrl-F filter, ESC/q returns
  file viewer   arrows move, Ctrl-T strips markup, ESC/q returns
        """,
    )
    parser.add_argument("path", nargs="?", help="Document to review (.docx, .xlsx, .pptx, .odt, .zip, .pdf, .doc, ...)")
    parser.add_argument("--policy", help="Path to a scan policy YAML file (overrides DOCSCOPE_POLICY)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--generate-policy", metavar="PATH", help="Write the default scan policy to PATH and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {DocScopeConstants.VERSION}")

    args = parser.parse_args(argv)

    if args.generate_policy:
        return generate_policy_command(args.generate_policy)

    if not args.path:
        parser.print_help()
        return 1

    config = Config.from_env()
    _configure_logging(config, args.verbose)

    policy = _load_policy(args, config)
    if policy is None:
        return 1

    return review_command(Path(args.path), policy)


if __name__ == "__main__":
    sys.exit(main())
