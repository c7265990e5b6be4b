#!/usr/bin/env python3
"""
Schema migration runner for Neo4j.

Runs the Cypher files in the migrations/ directory against the configured
database and records each applied file as a (:Migration) node.

Usage:
    python run_migrations.py                    # Run pending migrations
    python run_migrations.py --status           # Show migration status
    python run_migrations.py --dry-run          # Show what would run

Configuration:
    Set NEO4J_HOST, NEO4J_USERNAME and NEO4J_PASSWORD in your .env file.
"""

import argparse
import hashlib
import sys
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.table import Table

from shared.config import get_settings
from shared.exceptions import NeoflixError
from shared.graph import GraphClient, create_driver

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"


def get_graph_client() -> GraphClient:
    """Connect to the configured Neo4j database."""
    settings = get_settings()

    try:
        driver = create_driver(settings)
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)

    client = GraphClient(driver, settings.neo4j_database)
    if not client.verify_connectivity():
        console.print(f"[red]Database connection failed:[/red] {settings.neo4j_uri}")
        sys.exit(1)
    return client


def split_statements(content: str) -> list[str]:
    """Split a migration file into statements, dropping // comment lines."""
    lines = [
        line for line in content.splitlines()
        if not line.strip().startswith("//")
    ]
    return [
        statement.strip()
        for statement in "\n".join(lines).split(";")
        if statement.strip()
    ]


def checksum_of(content: str) -> str:
    return hashlib.sha256(content.encode()).hexdigest()[:16]


def get_applied_migrations(client: GraphClient) -> dict[str, dict]:
    """Get already applied migrations keyed by file name."""
    rows = client.read(
        """
        MATCH (m:Migration)
        RETURN m.name AS name, m.checksum AS checksum, m.appliedAt AS appliedAt
        ORDER BY m.name
        """
    )
    return {
        row["name"]: {"checksum": row["checksum"], "applied_at": row["appliedAt"]}
        for row in rows
    }


def get_pending_migrations(client: GraphClient) -> list[tuple[str, Path, str]]:
    """Get migrations that have not been applied yet."""
    applied = get_applied_migrations(client)
    pending = []

    if not MIGRATIONS_DIR.exists():
        console.print(f"[yellow]Warning:[/yellow] Migrations directory not found: {MIGRATIONS_DIR}")
        return []

    for cypher_file in sorted(MIGRATIONS_DIR.glob("*.cypher")):
        name = cypher_file.name
        checksum = checksum_of(cypher_file.read_text())

        if name not in applied:
            pending.append((name, cypher_file, checksum))
        elif applied[name]["checksum"] != checksum:
            console.print(f"[yellow]Warning:[/yellow] Migration {name} has changed since it was applied!")

    return pending


def run_migration(
    client: GraphClient,
    name: str,
    cypher_file: Path,
    checksum: str,
    dry_run: bool = False,
):
    """
    Run a single migration file.

    Schema statements cannot share a transaction with data writes in
    Neo4j, so each statement runs on its own; the migration is recorded
    only after all of them succeed.
    """
    statements = split_statements(cypher_file.read_text())

    if dry_run:
        console.print(f"[cyan]Would run:[/cyan] {name} ({len(statements)} statements)")
        return

    console.print(f"[blue]Running:[/blue] {name}...")

    try:
        for statement in statements:
            client.write(statement)

        client.write(
            """
            MERGE (m:Migration {name: $name})
            SET m.checksum = $checksum, m.appliedAt = $appliedAt
            """,
            {
                "name": name,
                "checksum": checksum,
                "appliedAt": datetime.now(timezone.utc),
            },
        )
        console.print(f"[green]✓[/green] {name} applied successfully")

    except NeoflixError as e:
        console.print(f"[red]✗[/red] {name} failed: {e.message}")
        raise


def show_status(client: GraphClient):
    """Show the status of all migrations."""
    applied = get_applied_migrations(client)
    pending = get_pending_migrations(client)

    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Applied At")
    table.add_column("Checksum")

    for name, info in applied.items():
        table.add_row(
            name,
            "[green]Applied[/green]",
            str(info["applied_at"] or ""),
            info["checksum"],
        )

    for name, _, checksum in pending:
        table.add_row(name, "[yellow]Pending[/yellow]", "", checksum)

    if not applied and not pending:
        console.print("[dim]No migrations found.[/dim]")
    else:
        console.print(table)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Run Neo4j schema migrations")
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show migration status without running anything",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what migrations would run without executing them",
    )
    args = parser.parse_args()

    console.print("[bold]Neoflix Database Migrations[/bold]")
    console.print()

    client = get_graph_client()

    try:
        if args.status:
            show_status(client)
            return

        pending = get_pending_migrations(client)
        if not pending:
            console.print("[green]All migrations are up to date![/green]")
            return

        console.print(f"Found {len(pending)} pending migration(s):")
        for name, _, _ in pending:
            console.print(f"  - {name}")
        console.print()

        for name, cypher_file, checksum in pending:
            run_migration(client, name, cypher_file, checksum, dry_run=args.dry_run)

        if not args.dry_run:
            console.print()
            console.print("[green]All migrations completed successfully![/green]")

    finally:
        client.close()


if __name__ == "__main__":
    main()
