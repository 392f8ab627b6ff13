"""Command-line interface for the catalog admin.

Usage:
    python -m catalog_admin.cli login --email admin@example.com
    python -m catalog_admin.cli catalogs list
    python -m catalog_admin.cli home move hero-1 down
    python -m catalog_admin.cli pages set contact title en "Contact"
"""

import argparse
import getpass
import json
import sys
from pathlib import Path
from typing import Any

from loguru import logger

from catalog_admin.api.client import StoreClient
from catalog_admin.auth.auth_service import AuthService
from catalog_admin.auth.session import Session, TokenStore
from catalog_admin.config import AdminConfig, load_config
from catalog_admin.editor import Editor, notice_for
from catalog_admin.errors import CatalogAdminError
from catalog_admin.models import LANGUAGES, PAGE_SLUGS, HomeSection
from catalog_admin.normalize.bilingual import normalize_section_data
from catalog_admin.sections.registry import get_available_section_types
from catalog_admin.sections.validator import validate_home_section
from catalog_admin.services.catalog import (
    CatalogService,
    set_bilingual_field,
    set_variant_lengths,
)
from catalog_admin.services.home import HomeService, new_section
from catalog_admin.services.pages import PageService, set_data_field, set_page_field
from catalog_admin.uploads import upload_image


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru logging.

    Args:
        verbose: Whether to enable debug logging
    """
    logger.remove()  # Remove default handler

    log_level = "DEBUG" if verbose else "INFO"
    log_format = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
        "<level>{message}</level>"
    )

    logger.add(sys.stderr, format=log_format, level=log_level, colorize=True)
    logger.add(
        "logs/catalog_admin_{time:YYYY-MM-DD}.log",
        format=log_format,
        level="DEBUG",
        rotation="1 day",
        retention="30 days",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage catalog sections, homepage sections and static pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Log in (password is prompted when not given)
  python -m catalog_admin.cli login --email admin@example.com

  # Rewrite a legacy catalog record in the bilingual schema
  python -m catalog_admin.cli catalogs normalize 3

  # Set variant lengths from comma-separated input
  python -m catalog_admin.cli catalogs set-lengths 3 0 "8.0 mm, 10 mm, 12 mm"

  # Move a homepage section one position down
  python -m catalog_admin.cli home move hero-slider-1700000000000 down
        """,
    )
    parser.add_argument("--api-url", help="Content API base URL (default: $CATALOG_ADMIN_API_URL)")
    parser.add_argument("--token-file", help="Session token file (default: $CATALOG_ADMIN_TOKEN_FILE)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose debug logging")

    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Log in and store the session token")
    login.add_argument("--email", help="Account email (default: $CATALOG_ADMIN_EMAIL)")
    login.add_argument("--password", help="Account password (default: $CATALOG_ADMIN_PASSWORD)")
    commands.add_parser("logout", help="Forget the stored session token")
    commands.add_parser("whoami", help="Show the logged-in user")

    catalogs = commands.add_parser("catalogs", help="Catalog sections").add_subparsers(
        dest="action", required=True
    )
    catalogs.add_parser("list", help="List catalog sections")
    show = catalogs.add_parser("show", help="Print a normalized catalog section")
    show.add_argument("id")
    normalize = catalogs.add_parser("normalize", help="Save a catalog section in the bilingual schema")
    normalize.add_argument("id")
    set_field = catalogs.add_parser("set", help="Set one language of a bilingual field")
    set_field.add_argument("id")
    set_field.add_argument("field")
    set_field.add_argument("lang", choices=LANGUAGES)
    set_field.add_argument("value")
    lengths = catalogs.add_parser("set-lengths", help="Set a variant's lengths")
    lengths.add_argument("id")
    lengths.add_argument("variant", type=int, help="Variant index (0-based)")
    lengths.add_argument("lengths", help='Comma-separated lengths, e.g. "8 mm, 10 mm"')

    home = commands.add_parser("home", help="Homepage sections").add_subparsers(
        dest="action", required=True
    )
    home.add_parser("list", help="List sections in display order")
    add = home.add_parser("add", help="Create a section from a JSON data file")
    add.add_argument("type", choices=get_available_section_types())
    add.add_argument("--data", required=True, help="JSON file with the section's data payload")
    validate = home.add_parser("validate", help="Check a stored section against the save rules")
    validate.add_argument("section")
    move = home.add_parser("move", help="Move a section up or down")
    move.add_argument("section")
    move.add_argument("direction", choices=["up", "down"])
    toggle = home.add_parser("toggle", help="Show or hide a section")
    toggle.add_argument("section")
    delete = home.add_parser("delete", help="Delete a section")
    delete.add_argument("section")

    pages = commands.add_parser("pages", help="Static pages").add_subparsers(
        dest="action", required=True
    )
    pages.add_parser("list", help="List static pages")
    page_show = pages.add_parser("show", help="Print a static page")
    page_show.add_argument("page", choices=PAGE_SLUGS)
    page_set = pages.add_parser("set", help="Set one language of title/subtitle/content")
    page_set.add_argument("page", choices=PAGE_SLUGS)
    page_set.add_argument("field", choices=["title", "subtitle", "content"])
    page_set.add_argument("lang", choices=LANGUAGES)
    page_set.add_argument("value")
    page_data = pages.add_parser("set-data", help="Set a page-specific field (e.g. contact email)")
    page_data.add_argument("page", choices=PAGE_SLUGS)
    page_data.add_argument("key")
    page_data.add_argument("value")

    upload = commands.add_parser("upload", help="Upload an image and print its URL")
    upload.add_argument("file")

    return parser


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _run_editor(editor: Editor) -> int:
    """Save an opened editor and report its notice."""
    saved = editor.save()
    if editor.notice:
        log = logger.success if saved else logger.error
        log(editor.notice.message)
    return 0 if saved else 1


def _open(editor: Editor) -> bool:
    if not editor.open():
        logger.error(editor.notice.message if editor.notice else f"Could not load {editor.label}")
        return False
    return True


def run_catalogs(args: argparse.Namespace, client: StoreClient) -> int:
    service = CatalogService(client)

    if args.action == "list":
        for catalog in service.list_catalogs():
            print(f"{catalog.id}\t{catalog.type}\t{catalog.display_name}")
        return 0

    editor = Editor(
        load=lambda: service.get_catalog(args.id),
        save=service.save_catalog,
        label=f"Catalog section {args.id}",
    )
    if not _open(editor):
        return 1

    if args.action == "show":
        _print_json(editor.draft.to_dict())
        return 0
    if args.action == "set":
        editor.edit(lambda c: set_bilingual_field(c, args.field, args.lang, args.value))
    elif args.action == "set-lengths":
        editor.edit(lambda c: set_variant_lengths(c, args.variant, args.lengths))
    # "normalize" saves the freshly normalized draft unchanged

    return _run_editor(editor)


def run_home(args: argparse.Namespace, client: StoreClient) -> int:
    service = HomeService(client)
    sections = service.list_sections()

    if args.action == "list":
        for section in sections:
            state = "active" if section.is_active else "hidden"
            print(f"{section.order}\t{section.section}\t{section.type}\t{state}")
        return 0

    if args.action == "add":
        section = new_section(args.type, sections)
        payload = json.loads(Path(args.data).read_text(encoding="utf-8"))
        section.data = normalize_section_data(args.type, payload)
        editor: Editor[HomeSection] = Editor(
            load=lambda: section, save=service.save_section, label=f"Section '{section.section}'"
        )
        editor.open()
        return _run_editor(editor)

    index = next((i for i, s in enumerate(sections) if s.section == args.section), None)
    if index is None:
        logger.error(f"Home section not found: {args.section}")
        return 1
    section = sections[index]

    if args.action == "validate":
        reason = validate_home_section(section)
        if reason:
            logger.error(reason)
            return 1
        logger.success(f"Section '{section.section}' is valid")
        return 0

    if args.action == "move":
        result = service.move_section(sections, index, -1 if args.direction == "up" else 1)
        for moved in result.sections:
            print(f"{moved.order}\t{moved.section}")
        if not result.success:
            logger.error(f"Reorder incomplete: {'; '.join(result.failures)}")
            return 1
        return 0

    if args.action == "toggle":
        service.toggle_active(section)
        logger.success(
            f"Section '{section.section}' is now {'active' if section.is_active else 'hidden'}"
        )
        return 0

    if args.action == "delete":
        service.delete_section(section.section)
        return 0

    return 1


def run_pages(args: argparse.Namespace, client: StoreClient) -> int:
    service = PageService(client)

    if args.action == "list":
        for page in service.list_pages():
            print(f"{page.page}\t{page.title.display()}")
        return 0

    editor = Editor(
        load=lambda: service.get_page(args.page),
        save=service.save_page,
        label=f"Page '{args.page}'",
    )
    if not _open(editor):
        return 1

    if args.action == "show":
        _print_json(editor.draft.to_dict())
        return 0
    if args.action == "set":
        editor.edit(lambda p: set_page_field(p, args.field, args.lang, args.value))
    elif args.action == "set-data":
        editor.edit(lambda p: set_data_field(p, args.key, args.value))

    return _run_editor(editor)


def run_command(args: argparse.Namespace, config: AdminConfig, session: Session, client: StoreClient) -> int:
    auth = AuthService(client, session)

    if args.command == "login":
        email = args.email or config.email
        password = args.password or config.password
        if not email:
            logger.error("No email given. Use --email or set CATALOG_ADMIN_EMAIL")
            return 1
        if not password:
            password = getpass.getpass("Password: ")
        auth.login(email, password)
        return 0

    if args.command == "logout":
        auth.logout()
        return 0

    if args.command == "whoami":
        user = auth.restore()
        if user is None:
            logger.error(session.error or "Not logged in")
            return 1
        _print_json(user)
        return 0

    if not session.is_authenticated:
        logger.error("Not logged in. Run 'login' first")
        return 1

    if args.command == "catalogs":
        return run_catalogs(args, client)
    if args.command == "home":
        return run_home(args, client)
    if args.command == "pages":
        return run_pages(args, client)
    if args.command == "upload":
        url = upload_image(
            client,
            args.file,
            on_progress=lambda fraction: logger.debug(f"Upload {fraction:.0%}"),
        )
        print(url)
        return 0

    return 1


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(api_url=args.api_url, token_file=args.token_file)
    except ValueError as e:
        logger.error(str(e))
        return 1

    session = Session(TokenStore(config.token_file))
    session.load()

    with StoreClient(config, session) as client:
        try:
            return run_command(args, config, session, client)
        except CatalogAdminError as e:
            logger.error(notice_for(e).message)
            return 1
        except (ValueError, KeyError, IndexError, FileNotFoundError) as e:
            logger.error(str(e))
            return 1


if __name__ == "__main__":
    sys.exit(main())
