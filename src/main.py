"""CLI entry point for FocusDesk data maintenance (no GUI required)."""

from __future__ import annotations
import argparse
import json
import sys

from config import settings
from core.errors import FocusDeskError, ValidationError
from gui.services.logging_service import configure_logging
from storage import BackupManager, DocumentName, DocumentStore, TransferManager


def _store(args: argparse.Namespace) -> DocumentStore:
    return DocumentStore(args.data_dir or settings.resolve_default_data_dir())


def cmd_data_dir(args: argparse.Namespace) -> None:
    print(_store(args).resolve_data_dir())


def cmd_read(args: argparse.Namespace) -> None:
    sys.stdout.write(_store(args).read(args.name))
    sys.stdout.write("\n")


def cmd_write(args: argparse.Namespace) -> None:
    try:
        with open(args.file, "r", encoding="utf-8", newline="") as fh:
            content = fh.read()
    except UnicodeDecodeError as exc:
        raise ValidationError(f"{args.file} is not UTF-8 text: {exc}") from exc
    _store(args).write(args.name, content)


def cmd_export(args: argparse.Namespace) -> None:
    TransferManager(_store(args)).export(args.type, args.path)


def cmd_import(args: argparse.Namespace) -> None:
    TransferManager(_store(args)).import_(args.type, args.path)


def cmd_backup(args: argparse.Namespace) -> None:
    print(BackupManager(_store(args)).create_backup(args.name))


def cmd_backups(args: argparse.Namespace) -> None:
    result = [
        {
            "name": b.name,
            "path": b.path,
            "created": b.created.isoformat() if b.created else None,
            "documents": list(b.documents),
        }
        for b in BackupManager(_store(args)).list_backups()
    ]
    print(json.dumps(result, indent=2, ensure_ascii=False))


def cmd_reset(args: argparse.Namespace) -> None:
    removed = _store(args).reset_all()
    print(json.dumps({"removed": [d.value for d in removed]}, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    names = [d.value for d in DocumentName]
    p = argparse.ArgumentParser(prog="focusdesk")
    p.add_argument("--data-dir", required=False, help="Override the document directory")
    sub = p.add_subparsers(dest="command", required=True)

    data_dir = sub.add_parser("data-dir", help="Print the document directory")
    data_dir.set_defaults(func=cmd_data_dir)

    read = sub.add_parser("read", help="Print a document (seeding its default)")
    read.add_argument("name", choices=names)
    read.set_defaults(func=cmd_read)

    write = sub.add_parser("write", help="Overwrite a document with a file's text")
    write.add_argument("name", choices=names)
    write.add_argument("file", help="File whose text becomes the document")
    write.set_defaults(func=cmd_write)

    export = sub.add_parser("export", help="Copy a document to a path")
    export.add_argument("type")
    export.add_argument("path")
    export.set_defaults(func=cmd_export)

    imp = sub.add_parser("import", help="Replace a document from a JSON file")
    imp.add_argument("type")
    imp.add_argument("path")
    imp.set_defaults(func=cmd_import)

    backup = sub.add_parser("backup", help="Create a timestamped backup")
    backup.add_argument("name", help="Backup base name")
    backup.set_defaults(func=cmd_backup)

    backups = sub.add_parser("backups", help="List existing backups")
    backups.set_defaults(func=cmd_backups)

    reset = sub.add_parser("reset", help="Delete every document")
    reset.set_defaults(func=cmd_reset)

    return p


def main(argv: list[str] | None = None) -> int:
    configure_logging(settings.LOG_LEVEL)
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except (FocusDeskError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
