import io
from datetime import date
from typing import List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

# Row tint per status color name
_STATUS_TINTS = {
    "red": colors.HexColor("#F8D7DA"),
    "orange": colors.HexColor("#FFE5CC"),
    "yellow": colors.HexColor("#FFF3CD"),
    "green": colors.HexColor("#D4EDDA"),
}


def generate_inventory_pdf(groups: List[dict], user_name: str = "", today: Optional[date] = None):
    """Generate a PDF table of the grouped inventory: Expires / Product / Brand / Status.

    ``groups`` is the output of grouped_view, already sorted by expiration day.
    """
    today = today or date.today()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    title = f"Shelf inventory - {user_name}" if user_name else "Shelf inventory"
    elements = [
        Paragraph(title, styles["Title"]),
        Paragraph(f"Generated {today.isoformat()}", styles["Normal"]),
        Spacer(1, 16),
    ]

    data = [["Expires", "Product", "Brand", "Status"]]
    tints = []
    for group in groups:
        status = group["status"]
        for product in group["products"]:
            data.append([
                group["expiration_date"],
                product.get("title") or "-",
                product.get("brand") or "-",
                status["message"],
            ])
            tints.append(_STATUS_TINTS.get(status["color"], colors.white))

    if len(data) == 1:
        data.append(["-", "No products on the shelf", "-", "-"])

    style = [
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 12),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 10),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
    for row, tint in enumerate(tints, start=1):
        style.append(("BACKGROUND", (0, row), (-1, row), tint))

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle(style))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
