from __future__ import annotations

import argparse
import json
import logging
import os

from pr_annotator.config import ConfigError, load_settings, resolve_results_path
from pr_annotator.errors import AnnotationError
from pr_annotator.pipeline import run_annotate, run_correlation
from pr_annotator.providers import build_provider

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pr-annotator",
        description="Map static-analysis findings onto pull request diff hunks",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    annotate_parser = subparsers.add_parser(
        "annotate", help="Correlate findings with a pull request's changed files on GitHub"
    )
    annotate_parser.add_argument("--results", default=None, help="Scanner JSON report path")
    annotate_parser.add_argument("--workspace", default=None, help="Workspace root to strip from paths")
    annotate_parser.add_argument("--repository", default=None, help="owner/repo")
    annotate_parser.add_argument("--pr", type=int, default=None, help="Pull request number")
    annotate_parser.add_argument("--api-url", default=None)
    annotate_parser.add_argument("--token-env", default=None, help="Environment variable holding the API token")
    annotate_parser.add_argument("--output-dir", default=None)

    correlate_parser = subparsers.add_parser(
        "correlate", help="Correlate findings with a saved pull request files listing"
    )
    correlate_parser.add_argument("--results", default=None, help="Scanner JSON report path")
    correlate_parser.add_argument("--files", required=True, help="JSON array from the pulls/{n}/files API")
    correlate_parser.add_argument("--workspace", default=None, help="Workspace root to strip from paths")
    correlate_parser.add_argument("--output-dir", default=None)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "annotate":
            try:
                settings = load_settings(
                    results_path=args.results,
                    workspace=args.workspace,
                    repository=args.repository,
                    pull_request_number=args.pr,
                    api_url=args.api_url,
                    token_env=args.token_env,
                )
            except ConfigError as exc:
                parser.error(str(exc))
                return 2

            annotations, summary = run_annotate(settings, output_dir=args.output_dir)

        elif args.command == "correlate":
            workspace = args.workspace
            if workspace is None:
                workspace = os.getenv("GITHUB_WORKSPACE", "")
            annotations, summary = run_correlation(
                results_path=resolve_results_path(args.results),
                provider=build_provider(None, files_path=args.files),
                pull_request_number=None,
                workspace=workspace,
                output_dir=args.output_dir,
            )

        else:
            parser.error(f"Unsupported command: {args.command}")
            return 2
    except (AnnotationError, OSError, ValueError, RuntimeError) as exc:
        logger.error("%s: %s", exc.__class__.__name__, exc)
        return 1

    payload = {
        "summary": summary.to_dict(),
        "annotations": [item.to_dict() for item in annotations],
    }
    print(json.dumps(payload, indent=2, ensure_ascii=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
