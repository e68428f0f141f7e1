"""MiniWorld management CLI.

Usage:
    python src/manage.py setup-db                         # Create all tables
    python src/manage.py drop-db                          # Drop all tables
    python src/manage.py seed --requested-by ops@example  # Load the sample catalogue
    python src/manage.py create-super-admin --email owner@example.com --name "Store Owner"
"""

import argparse
import sys

from rich.console import Console

console = Console()


def _domain():
    from miniworld.domain import miniworld

    console.print("Initializing miniworld domain...")
    miniworld.init()
    return miniworld


def setup_database():
    from miniworld.utils.db import setup_db

    domain = _domain()
    console.print("Creating database schema...")
    setup_db(domain)
    console.print("[green]Schema ready.[/green]")


def drop_database():
    from miniworld.utils.db import drop_db

    domain = _domain()
    console.print("Dropping database schema...")
    drop_db(domain)
    console.print("[yellow]Schema dropped.[/yellow]")


def seed_catalogue(requested_by):
    from miniworld.bootstrap import install_services
    from miniworld.catalogue.seed import SeedCatalogue

    domain = _domain()
    install_services()
    with domain.domain_context():
        created = domain.process(SeedCatalogue(requested_by=requested_by), asynchronous=False)
    console.print(f"[green]Seeded {created} products.[/green]")


def create_super_admin(email, name, mobile=None):
    from miniworld.identity.admin.management import CreateSuperAdmin

    domain = _domain()
    with domain.domain_context():
        admin_id = domain.process(CreateSuperAdmin(email=email, name=name, mobile=mobile), asynchronous=False)
    console.print(f"[green]Super admin created:[/green] {admin_id}")


def main():
    parser = argparse.ArgumentParser(description="MiniWorld management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed", help="Load the sample products into an empty catalogue")
    seed_parser.add_argument("--requested-by", default="manage.py")

    admin_parser = subparsers.add_parser("create-super-admin", help="Create the first back-office user")
    admin_parser.add_argument("--email", required=True)
    admin_parser.add_argument("--name", required=True)
    admin_parser.add_argument("--mobile")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed_catalogue(args.requested_by)
    elif args.command == "create-super-admin":
        create_super_admin(args.email, args.name, args.mobile)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
