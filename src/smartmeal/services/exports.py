"""PDF export of shopping lists."""

import io
import re
from datetime import UTC, datetime
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from smartmeal.domain.shopping import ShoppingList, group_items_by_category

_CHECKED = "[x]"
_UNCHECKED = "[ ]"
_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def render_shopping_list_pdf(shopping_list: ShoppingList) -> bytes:
    """Render a shopping list grouped by category as a PDF document."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title=f"Shopping list - {shopping_list.name}",
        leftMargin=20 * mm,
        rightMargin=20 * mm,
    )
    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(name="Footer", fontSize=8, textColor=colors.grey))
    story: list[object] = [
        Paragraph("Shopping list", styles["Title"]),
        Paragraph(escape(shopping_list.name), styles["Heading2"]),
        Paragraph(_period(shopping_list), styles["Normal"]),
        Paragraph(
            f"Household: {shopping_list.household_size} "
            f"{'person' if shopping_list.household_size == 1 else 'people'}",
            styles["Normal"],
        ),
        Paragraph(
            f"Estimated budget: {shopping_list.estimated_budget:.2f} EUR",
            styles["Normal"],
        ),
        Paragraph(
            f"Estimated time: {shopping_list.estimated_time_min} minutes",
            styles["Normal"],
        ),
        Spacer(1, 6 * mm),
    ]

    for category, items in group_items_by_category(shopping_list.items).items():
        story.append(Paragraph(escape(category.upper()), styles["Heading3"]))
        rows = [
            [
                _CHECKED if item.purchased else _UNCHECKED,
                item.name,
                f"{item.quantity:g} {item.unit}",
                f"{item.estimated_price:.2f} EUR",
            ]
            for item in items
        ]
        table = Table(
            rows, hAlign="LEFT", colWidths=[12 * mm, 80 * mm, 35 * mm, 30 * mm]
        )
        table.setStyle(
            TableStyle(
                [
                    ("LINEBELOW", (0, 0), (-1, -1), 0.25, colors.lightgrey),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                ]
                + [
                    ("TEXTCOLOR", (0, row), (-1, row), colors.grey)
                    for row, item in enumerate(items)
                    if item.purchased
                ]
            )
        )
        story.extend([table, Spacer(1, 4 * mm)])

    story.extend(
        [
            Paragraph("Summary", styles["Heading3"]),
            Paragraph(f"Total items: {len(shopping_list.items)}", styles["Normal"]),
            Paragraph(
                f"Checked items: {shopping_list.purchased_count}", styles["Normal"]
            ),
            Paragraph(f"Progress: {round(shopping_list.progress)}%", styles["Normal"]),
            Paragraph(
                f"Total budget: {shopping_list.estimated_budget:.2f} EUR",
                styles["Normal"],
            ),
            Spacer(1, 8 * mm),
            Paragraph(
                f"Generated on {datetime.now(tz=UTC).date().isoformat()} by SmartMeal",
                styles["Footer"],
            ),
        ]
    )
    doc.build(story)
    return buffer.getvalue()


def pdf_filename(shopping_list: ShoppingList) -> str:
    """Return the download name for a list export."""
    start = (
        shopping_list.start_date.isoformat() if shopping_list.start_date else "undated"
    )
    slug = _SLUG_CHARS.sub("-", shopping_list.name.lower()).strip("-") or "list"
    return f"shopping-list-{slug}-{start}.pdf"


def _period(shopping_list: ShoppingList) -> str:
    if shopping_list.start_date and shopping_list.end_date:
        return (
            f"Period: {shopping_list.start_date.isoformat()} to "
            f"{shopping_list.end_date.isoformat()}"
        )
    return "Period: not set"
