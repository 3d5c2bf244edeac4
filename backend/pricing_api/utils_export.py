import io
from typing import List

import pandas as pd
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas


def projection_to_xlsx_bytes(schedule: pd.DataFrame, yearly: pd.DataFrame) -> bytes:
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="xlsxwriter") as writer:
        wb = writer.book
        money = wb.add_format({"num_format": "#,##0.00"})
        pct = wb.add_format({"num_format": "0.0%"})
        for sheet, df in (("Schedule", schedule), ("Yearly", yearly)):
            df.to_excel(writer, index=False, sheet_name=sheet)
            ws = writer.sheets[sheet]
            for i, col in enumerate(df.columns):
                if col in ("Year", "Month"):
                    ws.set_column(i, i, 8)
                elif "Discount" in col and col.startswith(("Blended", "Avg")):
                    ws.set_column(i, i, 16, pct)
                else:
                    ws.set_column(i, i, 16, money)
    return buf.getvalue()


def pdf_cells(df: pd.DataFrame) -> List[List[str]]:
    # itertuples keeps per-column dtypes; Year and Month stay ints
    return [
        [f"{val:,.2f}" if isinstance(val, float) else f"{val}" for val in row]
        for row in df.itertuples(index=False)
    ]


def projection_to_pdf_bytes(
    schedule: pd.DataFrame, yearly: pd.DataFrame, title: str = "Commitment Projection"
) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=landscape(A4))
    width, height = landscape(A4)

    c.setFont("Helvetica-Bold", 14)
    c.drawString(20 * mm, height - 15 * mm, title)
    y = height - 30 * mm

    for df in (yearly, schedule):
        cols = list(df.columns)
        x0 = 15 * mm
        col_w = (width - 30 * mm) / len(cols)
        c.setFont("Helvetica-Bold", 6)
        for i, col in enumerate(cols):
            c.drawString(x0 + i * col_w, y, str(col)[:20])
        y -= 6 * mm

        c.setFont("Helvetica", 7)
        for r in pdf_cells(df):
            for i, text in enumerate(r):
                c.drawString(x0 + i * col_w, y, text)
            y -= 5 * mm
            if y < 15 * mm:
                c.showPage()
                c.setFont("Helvetica", 7)
                y = height - 20 * mm
        y -= 6 * mm

    c.showPage()
    c.save()
    return buf.getvalue()
