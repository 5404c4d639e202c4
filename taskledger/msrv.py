"""Check and update the minimum supported toolchain version across workspace files."""

from __future__ import annotations

import re
import sys
from collections.abc import Sequence
from pathlib import Path

# (path relative to the workspace root, pattern locating the line that carries the version)
MSRV_PATH_REGEX: tuple[tuple[str, str], ...] = (
    (".github/workflows/checks.yml", r'toolchain: "[0-9.]*" # MSRV'),
    (".github/workflows/rust-tests.yml", r'"[0-9.]+" # MSRV'),
    ("taskchampion/src/lib.rs", r"Rust version [0-9.]* and higher"),
    ("taskchampion/Cargo.toml", r'^rust-version = "[0-9.]'),
)

_VERSION_RE = re.compile(r"([0-9]+(\.|[0-9]+|))+")

_USAGE = "xtask: Valid arguments are: `msrv <version x.y>`"
_BAD_VERSION = (
    'xtask: Invalid argument format. Xtask msrv argument takes the form "X.Y(y)", '
    "where XYy are numbers. eg: `cargo run xtask msrv 1.68`"
)


class MsrvError(Exception):
    """Raised when the version cannot be checked or updated."""


def _replace_versions(text: str, version: str) -> str:
    return _VERSION_RE.sub(lambda _match: version, text)


def _split_lines(content: str) -> list[str]:
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def update_msrv(workspace_dir: str | Path, version: str) -> list[str]:
    """Set the version in every known file under ``workspace_dir``.

    Returns the relative paths of the files that were rewritten.
    """
    if not all(c.isnumeric() or c == "." for c in version):
        raise MsrvError(_BAD_VERSION)

    workspace = Path(workspace_dir)
    updated: list[str] = []
    for relative, pattern in MSRV_PATH_REGEX:
        path = workspace / relative
        if not path.exists():
            raise MsrvError(f"xtask: path does not exist {path}")

        pattern_re = re.compile(pattern)
        with path.open("r", encoding="utf-8", newline="") as handle:
            content = handle.read()

        changed = False
        out: list[str] = []
        for line in _split_lines(content):
            found = pattern_re.search(line)
            if found and version not in found.group(0):
                out.append(_replace_versions(line, version))
                changed = True
            else:
                out.append(line)

        if changed:
            with path.open("w", encoding="utf-8", newline="") as handle:
                handle.write("".join(f"{line}\n" for line in out))
            print(f"xtask: Updated MSRV in {_replace_versions(relative, version)}")
            updated.append(relative)
    return updated


def main(argv: Sequence[str] | None = None) -> int:
    """Run a subcommand against the workspace in the current directory."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        if not args:
            raise MsrvError(_USAGE)
        if args[0] != "msrv":
            raise MsrvError("xtask: unknown xtask")
        if len(args) < 2:
            raise MsrvError(_BAD_VERSION)
        update_msrv(Path.cwd(), args[1])
    except (MsrvError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())