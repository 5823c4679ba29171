"""
Command line interface for the kinship engine.

1) Load people and relationships from a GEDCOM file.
2) Optionally infer derived relationships.
3) Validate the data, find and label relationship paths, list relatives or show a tree.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from .config import get_settings
from .graph import RELATIVE_FILTERS, build_graph, find_paths, query_relatives
from .inference import infer_relationships
from .labels import label_between, label_path
from .models import Person, Relationship, Severity
from .parsing import load_gedcom
from .tree import build_family_tree
from .validation import validate

app = typer.Typer(
    name="kinship",
    help="Kinship relationship inference and query engine",
    add_completion=False,
)
console = Console()

SEVERITY_STYLES = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


@app.callback()
def main():
    """Configure logging from settings before any command runs."""
    settings = get_settings()
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        level=settings.log_level,
    )


def _load(file_path: Path, infer: bool = False) -> tuple[list[Person], list[Relationship]]:
    try:
        people, relationships = load_gedcom(file_path)
    except FileNotFoundError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1) from exc

    if infer:
        relationships = infer_relationships(people, relationships)
    return people, relationships


def _name(by_id: dict[str, Person], person_id: str) -> str:
    person = by_id.get(person_id)
    return person.name if person else person_id


@app.command("validate")
def validate_command(
    file_path: Path = typer.Argument(..., help="Path to GEDCOM file"),
    infer: bool = typer.Option(False, "--infer", "-i", help="Infer relationships before validating"),
    limit: int = typer.Option(50, "--limit", "-l", help="Maximum findings to show"),
):
    """Check the family data for cycles, age conflicts, duplicates and missing data."""
    people, relationships = _load(file_path, infer)
    findings = validate(people, relationships)

    if not findings:
        console.print("[green]No validation issues found[/green]")
        return

    table = Table(title=f"Validation findings ({len(findings)})")
    table.add_column("Severity")
    table.add_column("Type")
    table.add_column("Message")

    for finding in findings[:limit]:
        style = SEVERITY_STYLES[finding.severity]
        table.add_row(f"[{style}]{finding.severity.value}[/{style}]", finding.type.value, finding.message)

    console.print(table)
    if len(findings) > limit:
        console.print(f"... and {len(findings) - limit} more")

    errors = sum(1 for f in findings if f.severity == Severity.ERROR)
    console.print(f"Found {len(findings)} issues ({errors} errors)")


@app.command("infer")
def infer_command(file_path: Path = typer.Argument(..., help="Path to GEDCOM file")):
    """Infer siblings, grandparents, aunts/uncles, cousins and in-laws."""
    people, declared = _load(file_path)
    relationships = infer_relationships(people, declared)
    inferred = [r for r in relationships if r.is_inferred]

    table = Table(title="Inferred relationships")
    table.add_column("Type")
    table.add_column("Count")

    counts: dict[str, int] = {}
    for rel in inferred:
        counts[rel.relationship_type.value] = counts.get(rel.relationship_type.value, 0) + 1
    for kind, count in sorted(counts.items()):
        table.add_row(kind, str(count))

    console.print(table)
    console.print(f"{len(people)} people, {len(declared)} declared records, {len(inferred)} inferred records")


@app.command("relate")
def relate_command(
    file_path: Path = typer.Argument(..., help="Path to GEDCOM file"),
    from_id: str = typer.Argument(..., help="Starting person id"),
    to_id: str = typer.Argument(..., help="Target person id"),
    max_distance: int = typer.Option(None, "--max-distance", "-d", help="Maximum path length"),
    infer: bool = typer.Option(False, "--infer", "-i", help="Infer relationships first"),
    top: int = typer.Option(3, "--top", "-n", help="Number of paths to show"),
):
    """Describe how two people are related."""
    if max_distance is None:
        max_distance = get_settings().max_distance

    people, relationships = _load(file_path, infer)
    by_id = {p.id: p for p in people}
    G = build_graph(people, relationships)

    label = label_between(G, people, from_id, to_id, max_distance)
    console.print(f"[bold]Relationship:[/bold] {label}")

    if from_id not in by_id or to_id not in by_id:
        return

    for path in find_paths(G, from_id, to_id, max_distance)[:top]:
        hops = " → ".join(
            f"{segment.relationship_type.value} ({_name(by_id, segment.person_id)})"
            for segment in path.segments
        )
        console.print(
            f"  {label_path(path.path, by_id[from_id], by_id[to_id], people)}: {hops or 'self'} "
            f"[dim](distance {path.distance}, confidence {path.confidence:.1f})[/dim]"
        )


@app.command("relatives")
def relatives_command(
    file_path: Path = typer.Argument(..., help="Path to GEDCOM file"),
    person_id: str = typer.Argument(..., help="Person to query around"),
    query: str = typer.Argument(..., help=f"One of: {', '.join(RELATIVE_FILTERS)}"),
    infer: bool = typer.Option(False, "--infer", "-i", help="Infer relationships first"),
):
    """List relatives of a person matching a named path shape."""
    people, relationships = _load(file_path, infer)
    G = build_graph(people, relationships)

    try:
        matches = query_relatives(G, person_id, query, get_settings().max_distance)
    except ValueError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1) from exc

    by_id = {p.id: p for p in people}
    table = Table(title=f"{query} of {_name(by_id, person_id)}")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Paths")

    for match in matches:
        table.add_row(match.person_id, _name(by_id, match.person_id), str(len(match.paths)))

    console.print(table)
    console.print(f"{len(matches)} matching relatives")


@app.command("tree")
def tree_command(
    file_path: Path = typer.Argument(..., help="Path to GEDCOM file"),
    root_id: str = typer.Argument(..., help="Person at the root of the tree"),
    max_depth: int = typer.Option(3, "--max-depth", "-d", help="Maximum hops from the root"),
):
    """Show parents, children and spouses around a person."""
    people, relationships = _load(file_path)
    family_tree = build_family_tree(people, relationships, root_id, max_depth)
    if family_tree is None:
        console.print(f"[red]Error: unknown person {root_id}[/red]")
        raise typer.Exit(1)

    def describe(node, kind=None) -> str:
        prefix = f"[dim]{kind}[/dim] " if kind else ""
        return f"{prefix}{node.person.name} [dim](generation {node.generation})[/dim]"

    # nodes are stored after their owner, so one forward pass attaches every branch
    branches = {0: Tree(describe(family_tree.root))}
    for node in family_tree.nodes:
        for kind, indexes in (("parent", node.parents), ("child", node.children), ("spouse", node.spouses)):
            for index in indexes:
                branches[index] = branches[node.index].add(describe(family_tree.nodes[index], kind))

    console.print(branches[0])
    console.print(f"{len(family_tree.nodes)} nodes")


if __name__ == "__main__":
    app()
