"""
1) Read the GEDCOM source file into memory.
2) Parse it into individual and family records.
3) Convert the records into the canonical person list (parents, spouses,
   children, siblings).
4) Validate the person list for dangling references and implausible data.
5) Write the JSON artifact consumed by the site.

The query commands load a previously written artifact and answer
relationship questions from it.
"""

import argparse
import logging
import sys
from pathlib import Path

from gedgraph.artifact import ArtifactError, build_artifact, read_artifact, write_artifact
from gedgraph.assembler import parse_gedcom_content
from gedgraph.config import load_settings
from gedgraph.converter import convert_to_people
from gedgraph.relationships import generation_distance, get_ancestors, get_descendants
from gedgraph.validation import validate_people


def print_messages(title: str, messages: list[str], limit: int = 10):
    if not messages:
        return
    print(f"  Found {len(messages)} {title}:")
    for m in messages[:limit]:
        print(f"    - {m}")
    if len(messages) > limit:
        print(f"    ... and {len(messages) - limit} more")


def build(gedcom_path: Path, output_path: Path) -> int:
    if not gedcom_path.exists():
        print(f"GEDCOM file not found: {gedcom_path}", file=sys.stderr)
        return 1

    print(f"Reading GEDCOM file: {gedcom_path}")
    content = gedcom_path.read_text(encoding="utf-8")

    print("Parsing...")
    parse_result = parse_gedcom_content(content)
    print(
        f"  Found {len(parse_result.individuals)} individuals and "
        f"{len(parse_result.families)} families in {parse_result.total_lines} lines"
    )
    print_messages("parse errors", parse_result.errors)

    print("Converting to people...")
    people = convert_to_people(parse_result)
    print(f"  Converted {len(people)} people")

    print("Validating...")
    validation = validate_people(people)
    print_messages("validation errors", validation.errors)
    print_messages("validation warnings", validation.warnings)
    if validation.valid and not validation.warnings:
        print("  No validation issues found")

    print(f"Writing artifact: {output_path}")
    write_artifact(build_artifact(people, parse_result), output_path)

    print("Done!")
    return 0


def query(args: argparse.Namespace, output_path: Path, max_depth: int) -> int:
    try:
        people = read_artifact(output_path)
    except (OSError, ArtifactError) as e:
        print(f"Cannot load artifact {output_path}: {e}", file=sys.stderr)
        return 1

    if args.command == "distance":
        distance = generation_distance(people, args.start, args.target, max_depth)
        print("not related within depth" if distance is None else distance)
        return 0

    if args.command == "ancestors":
        related = get_ancestors(people, args.person)
    else:
        related = get_descendants(people, args.person)
    for p in related:
        print(f"{p.id}\t{p.display_name}")
    return 0


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gedgraph", description="Build and query a GEDCOM person graph.")
    parser.add_argument("--output", type=Path, help="JSON artifact path")
    commands = parser.add_subparsers(dest="command")

    build_cmd = commands.add_parser("build", help="parse a GEDCOM file and write the artifact")
    build_cmd.add_argument("gedcom", nargs="?", type=Path, help="GEDCOM source file")

    distance_cmd = commands.add_parser("distance", help="signed generation distance")
    distance_cmd.add_argument("start")
    distance_cmd.add_argument("target")

    for name in ("ancestors", "descendants"):
        cmd = commands.add_parser(name, help=f"list the {name} of a person")
        cmd.add_argument("person")

    return parser


def main(argv: list[str] | None = None) -> int:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    args = make_parser().parse_args(argv)
    output_path = args.output or settings.output_path

    if args.command in (None, "build"):
        gedcom_path = getattr(args, "gedcom", None) or settings.gedcom_path
        return build(gedcom_path, output_path)
    return query(args, output_path, settings.max_depth)


if __name__ == "__main__":
    sys.exit(main())
