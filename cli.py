# cli.py - interactive storefront menu with autocomplete
import os
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.storefront_client import StorefrontClient

console = Console()
c = StorefrontClient(base_url=os.getenv("STORE_URL", "http://127.0.0.1:3000"))


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
user_cache = set()

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("Category", width=15)
    table.add_column("Description", width=30)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            f"${float(p.get('price') or 0):.2f}",
            str(p.get("stock", 0)),
            p.get("category", "N/A"),
            p.get("description", "")
        )
    console.print(table)


def show_cart(user_id: str, cart: List[Dict[str, Any]]):
    title = Text()
    title.append("🛒 Shopping Cart - ", style="bold")
    title.append(user_id, style="bold cyan")

    if not cart:
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    names = {p.get("id"): p.get("name") for p in product_cache}
    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)

    for it in cart:
        pid = it.get("productId")
        table.add_row(names.get(pid) or f"Product {pid}", str(it.get("quantity", 0)))

    console.print(Panel(table, title=title, border_style="blue"))


def show_users(users: List[Dict[str, Any]]):
    if not users:
        console.print("[italic yellow]No users found[/italic yellow]")
        return

    # profile fields vary, so columns come from the records themselves
    columns: List[str] = ["id"]
    for u in users:
        for key in u:
            if key not in columns:
                columns.append(key)

    table = Table(title="👤 Users", box=box.ROUNDED, header_style="bold green", show_lines=True)
    for col in columns:
        table.add_column(col)
    for u in users:
        table.add_row(*[str(u.get(col, "")) for col in columns])
    console.print(table)


def show_orders(orders: List[Dict[str, Any]]):
    if not orders:
        console.print("[italic yellow]No orders found[/italic yellow]")
        return

    table = Table(
        title="📋 Orders",
        box=box.ROUNDED,
        header_style="bold yellow",
        title_style="bold yellow",
        show_lines=True
    )
    table.add_column("Order ID", style="dim", width=8)
    table.add_column("User", width=6)
    table.add_column("Contents", width=40)
    table.add_column("Status", width=10)
    table.add_column("Total", justify="right", width=12)
    table.add_column("Created", width=24)

    for order in orders:
        items = order.get("products", [])
        content_names = [f"{it.get('name', '?')} x{it.get('quantity', 1)}" for it in items[:3]]
        order_name = ", ".join(content_names) if content_names else "No items"
        if len(items) > 3:
            order_name += f" +{len(items) - 3} more"

        status_style = "yellow" if order.get("status") == "pending" else "green"
        table.add_row(
            str(order.get("id", "N/A")),
            str(order.get("userId", "N/A")),
            order_name,
            f"[{status_style}]{order.get('status', 'N/A')}[/{status_style}]",
            f"${float(order.get('total') or 0):.2f}",
            order.get("createdAt", "")
        )

    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner and returns its result.
    Errors are reported in the status panel and yield None.
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
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p.get("id")) for p in product_cache if p.get("id") is not None])


def get_user_completer():
    return WordCompleter(list(user_cache), ignore_case=True)


def update_user_cache(user_id: str):
    if user_id:
        user_cache.add(user_id)


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Storefront",
        "[bold blue]Store CLI with Autocomplete[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_id() -> Optional[int]:
    raw = prompt_with_autocomplete("Enter product ID", completer=get_product_completer()).strip()
    try:
        return int(raw)
    except ValueError:
        console.print("[red]Product ID must be a number.[/red]")
        return None


def ask_order_items() -> List[Dict[str, int]]:
    items = []
    while True:
        pid = ask_product_id()
        if pid is not None:
            qty = IntPrompt.ask("Quantity", default=1)
            items.append({"productId": pid, "quantity": qty})
        if not Confirm.ask("Add another product?"):
            return items


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache

    console.clear()
    console.print(create_header())

    # Preload products for autocomplete
    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "7", "👤 List users"),
            ("2", "🔍 Search products", "8", "📋 List orders"),
            ("3", "➕ Create product", "9", "✅ Place order"),
            ("4", "ℹ️ Get product by ID", "10", "🛒 Add to cart"),
            ("5", "✏️ Update product", "11", "🛒 View cart"),
            ("6", "🗑️ Delete product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 12)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res)

        elif choice == "3":
            name = prompt_with_autocomplete("Enter product name")
            price = ask_float("💰 Price in dollars", default=10.0)
            stock = IntPrompt.ask("📦 Stock", default=1)
            category = prompt_with_autocomplete("🏷️ Category", default="general")
            description = prompt_with_autocomplete("📝 Description")
            resp = try_api(
                c.create_product, name, price, stock, category, description,
                success_msg=f"Product '{name}' created successfully"
            )
            if resp:
                show_products([resp])
                product_cache = try_api(c.list_products) or []

        elif choice == "4":
            pid = ask_product_id()
            if pid is not None:
                resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
                if resp:
                    show_products([resp])

        elif choice == "5":
            pid = ask_product_id()
            if pid is not None:
                fields: Dict[str, Any] = {}
                if Confirm.ask("Change price?"):
                    fields["price"] = ask_float("💰 New price", default=10.0)
                if Confirm.ask("Change stock?"):
                    fields["stock"] = IntPrompt.ask("📦 New stock", default=0)
                resp = try_api(c.update_product, pid, **fields, success_msg=f"Product {pid} updated")
                if resp:
                    show_products([resp])
                    product_cache = try_api(c.list_products) or []

        elif choice == "6":
            pid = ask_product_id()
            if pid is not None and Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    product_cache = try_api(c.list_products) or []

        elif choice == "7":
            users = try_api(c.list_users, success_msg="Users loaded")
            if users is not None:
                for u in users:
                    update_user_cache(str(u.get("id", "")))
                show_users(users)

        elif choice == "8":
            orders = try_api(c.list_orders, success_msg="Orders loaded")
            if orders is not None:
                show_orders(orders)

        elif choice == "9":
            user_id = prompt_with_autocomplete("Enter user ID", completer=get_user_completer()).strip()
            if not user_id.isdigit():
                console.print("[red]User ID must be a number.[/red]")
                continue
            update_user_cache(user_id)
            items = ask_order_items()
            resp = try_api(c.create_order, int(user_id), items)
            if not resp:
                continue

            if resp.get("success"):
                order = resp.get("data", {})
                console.print(Panel.fit(
                    f"[green]{resp.get('message')}[/green]\n"
                    f"Order ID: [bold]{order.get('id')}[/bold]\n"
                    f"Total: [bold]${float(order.get('total') or 0):.2f}[/bold]",
                    title="✅ Order Confirmation"
                ))
            else:
                console.print(Panel.fit(f"[red]Order failed:[/red] {resp.get('message')}", title="❌ Order Failed"))

        elif choice == "10":
            user_id = prompt_with_autocomplete("Enter user ID", completer=get_user_completer()).strip()
            update_user_cache(user_id)
            pid = ask_product_id()
            if pid is not None:
                qty = IntPrompt.ask("Enter quantity", default=1)
                cart = try_api(c.add_to_cart, user_id, pid, qty, success_msg=f"Added {qty} of product {pid} to cart")
                if cart is not None:
                    show_cart(user_id, cart)

        elif choice == "11":
            user_id = prompt_with_autocomplete("Enter user ID", completer=get_user_completer()).strip()
            update_user_cache(user_id)
            cart = try_api(c.view_cart, user_id, success_msg=f"Cart loaded for {user_id}")
            if cart is not None:
                show_cart(user_id, cart)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thanks for shopping! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
