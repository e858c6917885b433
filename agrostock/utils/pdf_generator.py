from fpdf import FPDF
from datetime import datetime

from agrostock.utils.money import to_decimal


class AgroPDF(FPDF):
    """Plantilla común: encabezado con el nombre del negocio y pie con número de página."""

    def __init__(self, title: str, orientation: str = "P"):
        super().__init__(orientation=orientation)
        self.report_title = title

    def header(self):
        self.set_font("Helvetica", "B", 18)
        self.set_text_color(33, 37, 41)  # Gris oscuro
        self.cell(0, 10, "AGROSTOCK", 0, 1, "L")

        self.set_font("Helvetica", "", 10)
        self.set_text_color(108, 117, 125)  # Gris
        self.cell(100, 5, "Insumos Agropecuarios", 0, 0, "L")
        self.cell(0, 5, self.report_title, 0, 1, "R")
        self.ln(3)

        self.set_draw_color(200, 200, 200)
        self.line(10, self.get_y(), self.w - 10, self.get_y())
        self.ln(5)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(128)
        self.cell(0, 10, f"Página {self.page_no()} - generado {datetime.now().strftime('%d/%m/%Y %H:%M')}", 0, 0, "C")

    def table_header(self, columns):
        self.set_font("Helvetica", "B", 9)
        self.set_fill_color(33, 37, 41)
        self.set_text_color(255, 255, 255)
        for title, width, align in columns:
            self.cell(width, 8, title, 0, 0, align, True)
        self.ln()
        self.set_text_color(0, 0, 0)
        self.set_font("Helvetica", "", 9)

    def table_row(self, columns, values, fill):
        if fill:
            self.set_fill_color(248, 249, 250)
        else:
            self.set_fill_color(255, 255, 255)
        for (_, width, align), value in zip(columns, values):
            self.cell(width, 7, value, 0, 0, align, True)
        self.ln()


def _money(value) -> str:
    return f"C${to_decimal(value):,.2f}"


def _qty(value) -> str:
    return f"{to_decimal(value):,.2f}"


def generate_product_report_pdf(products):
    """Productos activos, en el orden recibido (por nombre)."""
    pdf = AgroPDF("Reporte de Productos", orientation="L")
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)

    columns = [
        ("CÓDIGO", 30, "C"),
        ("NOMBRE", 75, "L"),
        ("CATEGORÍA", 45, "L"),
        ("UNIDAD", 25, "C"),
        ("STOCK", 30, "R"),
        ("MÍNIMO", 30, "R"),
        ("P. VENTA", 42, "R"),
    ]
    pdf.table_header(columns)

    fill = False
    for p in products:
        pdf.table_row(columns, [
            p.code[:15],
            p.name[:40],
            (p.category.name if p.category else "")[:24],
            (p.unit_of_measure or "")[:12],
            _qty(p.current_stock),
            _qty(p.minimum_stock),
            _money(p.sale_price),
        ], fill)
        fill = not fill

    pdf.ln(5)
    pdf.set_font("Helvetica", "B", 10)
    pdf.cell(0, 6, f"Total de productos: {len(products)}", 0, 1, "L")
    return bytes(pdf.output())


def generate_movement_history_pdf(movements):
    """Historial de movimientos, ordenados por fecha y producto."""
    pdf = AgroPDF("Historial de Movimientos", orientation="L")
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)

    columns = [
        ("FECHA", 28, "C"),
        ("TIPO", 22, "C"),
        ("CÓDIGO", 30, "C"),
        ("PRODUCTO", 75, "L"),
        ("CANTIDAD", 30, "R"),
        ("STOCK", 30, "R"),
        ("PROVEEDOR", 62, "L"),
    ]
    pdf.table_header(columns)

    fill = False
    for m in movements:
        movement_type = m.movement_type.value if hasattr(m.movement_type, "value") else str(m.movement_type)
        pdf.table_row(columns, [
            m.date.strftime("%d/%m/%Y"),
            "ENTRADA" if movement_type == "IN" else "SALIDA",
            m.product.code[:15],
            m.product.name[:40],
            _qty(m.quantity),
            _qty(m.stock_after) if m.stock_after is not None else "",
            (m.supplier.display_name if m.supplier else "")[:32],
        ], fill)
        fill = not fill

    return bytes(pdf.output())


def generate_invoice_pdf(invoice):
    pdf = AgroPDF("Factura")
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)

    # --- INFO HEADER ---
    pdf.set_font("Helvetica", "B", 14)
    pdf.set_text_color(0, 0, 0)
    pdf.cell(100, 10, f"FACTURA #{invoice.number}", 0, 0, "L")

    pdf.set_font("Helvetica", "", 10)
    pdf.set_text_color(50, 50, 50)
    pdf.cell(90, 10, f"Fecha: {invoice.date.strftime('%d/%m/%Y')}", 0, 1, "R")
    pdf.ln(3)

    # --- CLIENTE INFO ---
    pdf.set_fill_color(245, 247, 250)
    pdf.rect(10, pdf.get_y(), 190, 20, "F")

    pdf.set_xy(15, pdf.get_y() + 4)
    pdf.set_font("Helvetica", "B", 10)
    pdf.cell(25, 5, "Cliente:", 0, 0)
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(100, 5, f"{invoice.client.code} - {invoice.client.name}".upper(), 0, 1)

    pdf.set_x(15)
    pdf.set_font("Helvetica", "B", 10)
    pdf.cell(25, 5, "Venta:", 0, 0)
    pdf.set_font("Helvetica", "", 10)
    condition = "CRÉDITO" if invoice.is_credit_sale else "CONTADO"
    status = "PAGADA" if invoice.paid else "PENDIENTE"
    pdf.cell(100, 5, condition if not invoice.is_credit_sale else f"{condition} ({status})", 0, 1)
    pdf.ln(10)

    # --- TABLE ---
    columns = [
        ("CÓDIGO", 30, "C"),
        ("DESCRIPCIÓN", 80, "L"),
        ("CANT", 20, "C"),
        ("P. UNIT", 30, "R"),
        ("IMPORTE", 30, "R"),
    ]
    pdf.table_header(columns)

    fill = False
    for line in invoice.lines:
        pdf.table_row(columns, [
            line.product.code[:15],
            line.product.name[:45],
            _qty(line.quantity),
            _money(line.unit_price),
            _money(line.amount),
        ], fill)
        fill = not fill

    # --- TOTALS ---
    pdf.ln(5)
    x_totals = 140
    pdf.set_x(x_totals)
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(30, 6, "Subtotal", 0, 0, "R")
    pdf.cell(30, 6, _money(invoice.subtotal), 0, 1, "R")

    pdf.set_x(x_totals)
    pdf.cell(30, 6, f"IVA ({_qty(invoice.tax_rate)}%)", 0, 0, "R")
    pdf.cell(30, 6, _money(invoice.tax), 0, 1, "R")

    pdf.set_x(x_totals)
    pdf.set_font("Helvetica", "B", 12)
    pdf.set_fill_color(240, 240, 240)
    pdf.cell(30, 10, "TOTAL", 0, 0, "R", True)
    pdf.cell(30, 10, _money(invoice.total), 0, 1, "R", True)

    return bytes(pdf.output())
