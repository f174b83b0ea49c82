"""Translation dictionary for report labels and exports (en/sw)."""
from __future__ import annotations

SUPPORTED_LANGUAGES = ("en", "sw")

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        # Common
        "generated_on": "Generated on",
        "date": "Date",
        "status": "Status",
        "amount": "Amount",
        "total": "Total",
        "totals": "TOTALS",
        "not_available": "N/A",

        # Report catalog
        "sales_report": "Sales Report",
        "sales_report_desc": "Daily, weekly, and monthly sales performance.",
        "fees_report": "Fee Collection Report",
        "fees_report_desc": "Track student fee payments.",
        "rent_report": "Rent Roll",
        "rent_report_desc": "Summary of all tenant rent payments.",
        "revenue_report": "Revenue Growth",
        "revenue_report_desc": "Track revenue trends over time.",
        "customers_report": "Customer Demographics",
        "customers_report_desc": "Understand your customer base.",
        "inventory_report": "Inventory Summary Report",
        "inventory_report_desc": "Stock levels and product performance.",

        # Sales
        "receipt_no": "Receipt No.",
        "items": "Items",
        "payment": "Payment",

        # Fees
        "student_name": "Student Name",
        "admission_no": "Adm No.",
        "term": "Term",

        # Rent roll
        "tenant": "Tenant",
        "unit_number": "Unit",

        # Inventory
        "product_name": "Product Name",
        "category": "Category",
        "stock_quantity": "Stock Quantity",
        "unit": "Unit",
        "selling_price": "Selling Price",

        # Status badges
        "in_stock": "In Stock",
        "low_stock": "Low Stock",
        "out_of_stock": "Out of Stock",
        "payment_paid": "Paid",
        "payment_pending": "Pending",
        "payment_overdue": "Overdue",
        "payment_cancelled": "Cancelled",
    },
    "sw": {
        # Common
        "generated_on": "Imetolewa tarehe",
        "date": "Tarehe",
        "status": "Hali",
        "amount": "Kiasi",
        "total": "Jumla",
        "totals": "JUMLA",
        "not_available": "Haipo",

        # Report catalog
        "sales_report": "Ripoti ya Mauzo",
        "sales_report_desc": "Utendaji wa mauzo wa kila siku, wiki na mwezi.",
        "fees_report": "Ripoti ya Ukusanyaji wa Ada",
        "fees_report_desc": "Fuatilia malipo ya ada za wanafunzi.",
        "rent_report": "Orodha ya Kodi",
        "rent_report_desc": "Muhtasari wa malipo yote ya kodi ya wapangaji.",
        "revenue_report": "Ukuaji wa Mapato",
        "revenue_report_desc": "Fuatilia mwenendo wa mapato kwa muda.",
        "customers_report": "Takwimu za Wateja",
        "customers_report_desc": "Elewa wateja wako.",
        "inventory_report": "Ripoti ya Muhtasari wa Bidhaa",
        "inventory_report_desc": "Viwango vya bidhaa na utendaji wake.",

        # Sales
        "receipt_no": "Nambari ya Risiti",
        "items": "Bidhaa",
        "payment": "Malipo",

        # Fees
        "student_name": "Jina la Mwanafunzi",
        "admission_no": "Nambari ya Usajili",
        "term": "Muhula",

        # Rent roll
        "tenant": "Mpangaji",
        "unit_number": "Nyumba",

        # Inventory
        "product_name": "Jina la Bidhaa",
        "category": "Aina",
        "stock_quantity": "Idadi Iliyopo",
        "unit": "Kipimo",
        "selling_price": "Bei ya Kuuza",

        # Status badges
        "in_stock": "Ipo Stoo",
        "low_stock": "Imepungua",
        "out_of_stock": "Imeisha",
        "payment_paid": "Imelipwa",
        "payment_pending": "Inasubiri",
        "payment_overdue": "Imechelewa",
        "payment_cancelled": "Imeghairiwa",
    },
}


def normalize_language(lang: str | None, default: str = "en") -> str:
    """Map a language tag like ``sw-KE`` to a supported code."""
    if not lang:
        return default
    primary = lang.strip().lower().split("-")[0]
    return primary if primary in SUPPORTED_LANGUAGES else default


def t(lang: str, key: str) -> str:
    """Get translated label. Falls back to English."""
    return TRANSLATIONS.get(lang, TRANSLATIONS["en"]).get(
        key, TRANSLATIONS["en"].get(key, key)
    )
