# cli.py
import sys
from datetime import datetime
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.pyshowroom import ShowroomClient
from showroom.config import Config
from showroom.database import HostedStore
from showroom.logging_config import setup_logging
from showroom.models import ProductCard
from showroom.session import PreferenceStore, SessionState

console = Console()
config = Config()
c = ShowroomClient(base_url=config.API_URL, timeout=int(config.HTTP_TIMEOUT))

status_message = "Ready"

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

# Table colours per theme preference
THEMES = {
    "dark": {"header": "bold cyan", "title": "bold magenta", "accent": "green", "border": "yellow"},
    "light": {"header": "bold blue", "title": "bold black", "accent": "dark_green", "border": "blue"},
}


def build_session() -> SessionState:
    store = None
    if config.store_configured:
        store = HostedStore(config.SUPABASE_URL, config.SUPABASE_ANON_KEY, timeout=config.HTTP_TIMEOUT)
    return SessionState(store=store, prefs=PreferenceStore(config.PREFS_PATH))


# ---------------------------
# Display helpers
# ---------------------------
def palette(session: SessionState):
    return THEMES.get(session.theme, THEMES["dark"])


def show_cards(session: SessionState, cards: List[ProductCard], title_key: str, empty_key: str = "no_vehicles"):
    if not cards:
        console.print(f"[italic yellow]{session.t(empty_key)}[/italic yellow]")
        return

    colours = palette(session)
    table = Table(
        title=session.t(title_key),
        box=box.ROUNDED,
        header_style=colours["header"],
        title_style=colours["title"],
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("", width=2)
    table.add_column(session.t("name"), style="bold", width=28)
    table.add_column(session.t("category"), width=14)
    table.add_column(session.t("mileage"), width=14)
    table.add_column(session.t("transmission"), width=12)
    table.add_column(session.t("fuel"), width=10)
    table.add_column(session.t("price"), justify="right", width=18)

    for card in cards:
        table.add_row(
            str(card.id),
            "♥" if card.favorite else "",
            card.name,
            session.labels.get(card.category_key or "") or card.category or "-",
            card.details.mileage,
            card.details.transmission,
            card.details.fuel,
            f"[{colours['accent']}]{card.price}[/{colours['accent']}]",
        )
    console.print(table)


def show_details(session: SessionState, card: ProductCard):
    colours = palette(session)
    body = Table.grid(padding=(0, 2))
    body.add_column(style="bold")
    body.add_column()
    body.add_row(session.t("price"), f"[{colours['accent']}]{card.price}[/{colours['accent']}]")
    body.add_row(session.t("category"), card.category or "-")
    body.add_row(session.t("mileage"), card.details.mileage)
    body.add_row(session.t("transmission"), card.details.transmission)
    body.add_row(session.t("fuel"), card.details.fuel)
    body.add_row(session.t("description"), card.description)
    if card.gallery:
        body.add_row(session.t("gallery"), "\n".join(card.gallery))
    heart = " ♥" if card.favorite else ""
    console.print(Panel(body, title=f"🚗 {card.name}{heart}", border_style=colours["border"]))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Errors are shown in the status panel and None is returned.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except Exception as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: {e}", False))
        return None


# ---------------------------
# Input helpers
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def get_product_completer(session: SessionState):
    words = [str(p.id) for p in session.products] + [p.name for p in session.products]
    return WordCompleter([w for w in words if w], ignore_case=True)


def ask_product_id(session: SessionState) -> Optional[int]:
    raw = prompt_with_autocomplete("Enter vehicle ID", completer=get_product_completer(session)).strip()
    if raw.isdigit():
        return int(raw)
    match = next((p for p in session.products if p.name.lower() == raw.lower()), None)
    if match is None:
        console.print(f"[red]{session.t('vehicle_not_found')}[/red]")
        return None
    return match.id


def create_header(session: SessionState):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    prefs = f"{session.language.upper()} · {session.theme} · {session.currency_label()}"
    header.add_row(
        f"🚗 {session.t('site_name')}",
        f"[bold blue]{prefs}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style=palette(session)["header"])


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message

    session = build_session()
    console.clear()
    try_api(session.load, success_msg="Catalog loaded")
    console.print(create_header(session))

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "⭐ Featured vehicles", "8", "🌐 Toggle language"),
            ("2", "📦 Inventory", "9", "💱 Toggle currency"),
            ("3", "🔍 Search / filter", "10", "🌓 Toggle theme"),
            ("4", "ℹ️ Vehicle details", "11", "📝 Translate text"),
            ("5", "♥ Toggle favorite", "12", "💰 Set exchange rate"),
            ("6", "❤️ Favorites", "13", "📋 Inquiries (admin)"),
            ("7", "✉️ Contact us", "14", "🔄 Reload catalog"),
            ("", "", "q", "👋 Quit")
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style=palette(session)["border"]))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 15)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            show_cards(session, session.render_all(session.featured()), "featured")

        elif choice == "2":
            show_cards(session, session.render_all(session.products), "inventory")

        elif choice == "3":
            term = prompt_with_autocomplete(session.t("search"))
            categories = session.categories()
            category = prompt_with_autocomplete(
                session.t("category"), completer=WordCompleter(categories, ignore_case=True)
            ).strip()
            show_cards(session, session.render_all(session.filter_inventory(term, category)), "inventory")

        elif choice == "4":
            pid = ask_product_id(session)
            if pid is not None:
                product = session.find_product(pid)
                if product is None:
                    console.print(f"[red]{session.t('vehicle_not_found')}[/red]")
                else:
                    show_details(session, session.render(product))

        elif choice == "5":
            pid = ask_product_id(session)
            if pid is not None:
                added = session.toggle_favorite(pid)
                status_message = f"Vehicle {pid} {'added to' if added else 'removed from'} favorites"

        elif choice == "6":
            show_cards(session, session.render_all(session.favorite_products()), "favorites", "no_favorites")

        elif choice == "7":
            name = Prompt.ask("Name")
            email = Prompt.ask("Email")
            phone = Prompt.ask("Phone", default="")
            vehicle = Prompt.ask("Vehicle", default="")
            message = Prompt.ask("Message", default="")
            try_api(
                c.submit_inquiry, name, email, phone or None, vehicle or None, message or None,
                success_msg=session.t("inquiry_sent")
            )

        elif choice == "8":
            status_message = f"{session.t('language')}: {session.toggle_language().upper()}"
            console.print(create_header(session))

        elif choice == "9":
            session.toggle_currency()
            status_message = f"{session.t('currency')}: {session.currency_label()}"

        elif choice == "10":
            status_message = f"{session.t('theme')}: {session.toggle_theme()}"
            console.print(create_header(session))

        elif choice == "11":
            raw = prompt_with_autocomplete("Text to translate (use | to send several)")
            parts = [p.strip() for p in raw.split("|")]
            text = parts[0] if len(parts) == 1 else parts
            resp = try_api(c.translate_text, text, success_msg="Translation complete")
            if resp is not None:
                lines = resp if isinstance(resp, list) else [resp]
                console.print(Panel("\n".join(lines), title="📝 Arabic", border_style="green"))

        elif choice == "12":
            current = session.rate.rate
            raw = Prompt.ask("💰 EGP per USD", default=str(current))
            try:
                value = float(raw)
            except ValueError:
                console.print("[red]Please enter a valid number.[/red]")
                continue
            token = Prompt.ask("Admin access token", password=True, default="")
            admin = ShowroomClient(base_url=config.API_URL, api_key=token or None, timeout=int(config.HTTP_TIMEOUT))
            resp = try_api(admin.set_exchange_rate, value, success_msg=f"Exchange rate set to {value}")
            if resp is not None:
                session.refresh_rate()

        elif choice == "13":
            token = Prompt.ask("Admin access token", password=True, default="")
            admin = ShowroomClient(base_url=config.API_URL, api_key=token or None, timeout=int(config.HTTP_TIMEOUT))
            inquiries = try_api(admin.list_inquiries, success_msg="Inquiries loaded")
            if inquiries:
                table = Table(title="📋 Inquiries", box=box.ROUNDED, header_style="bold yellow", show_lines=True)
                table.add_column("Date", style="dim", width=12)
                table.add_column("Name", width=18)
                table.add_column("Contact", width=28)
                table.add_column("Vehicle", width=18)
                table.add_column("Message", width=36)
                for inq in inquiries:
                    table.add_row(
                        (inq.get("created_at") or "")[:10],
                        inq.get("name", ""),
                        f"{inq.get('email', '')}\n{inq.get('phone') or '-'}",
                        inq.get("vehicle_name") or "-",
                        inq.get("message") or "-",
                    )
                console.print(table)
            elif inquiries is not None:
                console.print("[italic yellow]No inquiries yet.[/italic yellow]")

        elif choice == "14":
            try_api(session.load, success_msg="Catalog reloaded")

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for visiting! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    setup_logging(config)
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
