"""Server-rendered HTML pages for browsing the catalog."""

from html import escape
from typing import Any, Dict, List

_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<link rel="stylesheet" href="/static/style.css">
</head>
<body>
<header><a href="/">Store</a> | <a href="/products">All Products</a></header>
<main>
<h1>{title}</h1>
{body}
</main>
</body>
</html>
"""


def _price(value: Any) -> str:
    try:
        return f"${float(value):.2f}"
    except (TypeError, ValueError):
        return escape(str(value))


def render_page(title: str, body: str) -> str:
    return _PAGE.format(title=escape(title), body=body)


def render_index(title: str, products: List[Dict[str, Any]]) -> str:
    if not products:
        return render_page(title, "<p>No products available.</p>")
    rows = []
    for p in products:
        rows.append(
            '<li><a href="/product/{id}">{name}</a> <span class="category">{category}</span> '
            '<span class="price">{price}</span></li>'.format(
                id=escape(str(p.get("id", ""))),
                name=escape(str(p.get("name", ""))),
                category=escape(str(p.get("category", ""))),
                price=_price(p.get("price")),
            )
        )
    return render_page(title, '<ul class="products">\n' + "\n".join(rows) + "\n</ul>")


def render_product(product: Dict[str, Any]) -> str:
    body = (
        '<p class="description">{description}</p>\n'
        '<p class="price">{price}</p>\n'
        '<p class="category">Category: {category}</p>\n'
        '<p class="stock">In stock: {stock}</p>'
    ).format(
        description=escape(str(product.get("description", ""))),
        price=_price(product.get("price")),
        category=escape(str(product.get("category", ""))),
        stock=escape(str(product.get("stock", 0))),
    )
    return render_page(str(product.get("name", "")), body)


def render_error(title: str, message: str) -> str:
    return render_page(title, f'<p class="error">{escape(message)}</p>')
