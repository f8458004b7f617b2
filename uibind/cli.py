"""CLI entrypoints for uibind commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .errors import UIBindError
from .logging import configure_logging
from .models import GenerationShape
from .orchestrator import BatchReport, GenerationOutcome, Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _shape(value: str) -> GenerationShape:
    try:
        return GenerationShape.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _add_target(parser: argparse.ArgumentParser, action: str) -> None:
    parser.add_argument("path", nargs="?", help=f"UXML file to {action}.")
    parser.add_argument(
        "--all",
        action="store_true",
        help=f"{action.capitalize()} every configured UXML file.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview changes without writing files.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uibind",
        description="Generate typed C# bindings from UXML documents.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--project",
        default=".",
        help="Project root containing .uibind.yml (defaults to current directory).",
    )
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    configure_parser = subparsers.add_parser(
        "configure",
        help="Enable generation for a UXML file or update its settings.",
    )
    _add_verbose_option(configure_parser, suppress_default=True)
    configure_parser.add_argument("path", help="UXML file to configure.")
    configure_parser.add_argument("--shape", type=_shape, default=None, help="Document, Component or EditorWindow.")
    configure_parser.add_argument("--output-dir", default=None, help="Output directory relative to the project root.")
    configure_parser.add_argument("--namespace", default=None, help="Namespace for Document and EditorWindow shapes.")
    configure_parser.add_argument("--prefix", default=None, help="Prefix for generated file and class names.")
    configure_parser.add_argument("--suffix", default=None, help="Suffix for generated file and class names.")

    remove_parser = subparsers.add_parser("remove", help="Disable generation for a UXML file.")
    _add_verbose_option(remove_parser, suppress_default=True)
    remove_parser.add_argument("path", help="UXML file to remove from the settings.")

    list_parser = subparsers.add_parser("list", help="List configured UXML files.")
    _add_verbose_option(list_parser, suppress_default=True)

    generate_parser = subparsers.add_parser("generate", help="Generate (overwrite) bindings.")
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_target(generate_parser, "generate")

    script_parser = subparsers.add_parser("script", help="Scaffold script files that do not exist yet.")
    _add_verbose_option(script_parser, suppress_default=True)
    _add_target(script_parser, "scaffold")

    clear_parser = subparsers.add_parser("clear", help="Delete the generated bindings of a UXML file.")
    _add_verbose_option(clear_parser, suppress_default=True)
    clear_parser.add_argument("path", help="UXML file whose bindings should be removed.")

    clear_all_parser = subparsers.add_parser("clear-all", help="Delete every generated bindings file.")
    _add_verbose_option(clear_all_parser, suppress_default=True)

    preview_parser = subparsers.add_parser("preview", help="Print generated bindings for a UXML file.")
    _add_verbose_option(preview_parser, suppress_default=True)
    preview_parser.add_argument("path", help="UXML file to render.")
    preview_parser.add_argument("--shape", type=_shape, default=GenerationShape.DOCUMENT)
    preview_parser.add_argument("--namespace", default="")
    preview_parser.add_argument("--script", action="store_true", help="Render the script scaffold instead.")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for uibind commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(project_root=Path(args.project), host=args.host, port=args.port)
        return

    try:
        orchestrator = Orchestrator(args.project)
        status = _dispatch(parser, orchestrator, args)
    except FileNotFoundError as exc:
        parser.exit(1, f"{exc}\n")
    except UIBindError as exc:
        parser.exit(1, f"uibind {args.command} failed: {exc}\nRun with --verbose for more details.\n")
    except OSError as exc:
        parser.exit(1, f"uibind {args.command} failed: {exc}\n")
    if status:
        parser.exit(status)


def _dispatch(parser: argparse.ArgumentParser, orchestrator: Orchestrator, args: argparse.Namespace) -> int:
    if args.command == "configure":
        setting = orchestrator.configure(
            args.path,
            shape=args.shape,
            output_directory=args.output_dir,
            namespace=args.namespace,
            file_prefix=args.prefix,
            file_suffix=args.suffix,
        )
        print(f"Configured {setting.path} ({setting.shape.value})")
    elif args.command == "remove":
        if orchestrator.remove(args.path):
            print(f"Removed {args.path}")
        else:
            print(f"{args.path} was not configured")
    elif args.command == "list":
        settings = list(orchestrator.store)
        if not settings:
            print("No UXML files configured")
        for setting in settings:
            namespace = setting.namespace or "-"
            print(f"{setting.path}\t{setting.shape.value}\t{setting.output_directory}\t{namespace}")
    elif args.command in {"generate", "script"}:
        if bool(args.all) == bool(args.path):
            parser.exit(2, "Pass either a UXML path or --all.\n")
        dry_run = bool(args.dry_run)
        if args.command == "generate":
            if args.all:
                return _print_batch(orchestrator.generate_all_bindings(dry_run=dry_run))
            _print_outcome(orchestrator.generate_bindings(args.path, dry_run=dry_run))
        else:
            if args.all:
                return _print_batch(orchestrator.generate_all_scripts(dry_run=dry_run))
            _print_outcome(orchestrator.generate_script(args.path, dry_run=dry_run))
    elif args.command == "clear":
        removed = orchestrator.clear_bindings(args.path)
        print(f"Removed {_relativize(removed)}" if removed else "No bindings to remove")
    elif args.command == "clear-all":
        report = orchestrator.clear_all_bindings()
        print(f"Removed {len(report.removed)} bindings file(s)")
        for path, message in sorted(report.errors.items()):
            print(f"Failed to remove {path}: {message}", file=sys.stderr)
        return 1 if report.errors else 0
    elif args.command == "preview":
        markup = Path(args.path).read_text(encoding="utf-8-sig")
        print(
            orchestrator.preview(
                markup,
                name=Path(args.path).stem,
                shape=args.shape,
                namespace=args.namespace,
                script=bool(args.script),
            ),
            end="",
        )
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")
    return 0


def _print_outcome(outcome: GenerationOutcome) -> None:
    if outcome.dry_run:
        print(f"{_relativize(outcome.path)} (dry-run):")
        print(outcome.diff or "(no diff)")
    elif outcome.written:
        print(f"Generated {_relativize(outcome.path)}")
    else:
        print(f"{_relativize(outcome.path)} already up to date")


def _print_batch(report: BatchReport) -> int:
    for outcome in report.outcomes:
        _print_outcome(outcome)
    for path, message in sorted(report.failures.items()):
        print(f"Skipped {path}: {message}", file=sys.stderr)
    return 0 if report.ok else 1


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
