"""Translation dictionary for invoice documents (ar/en)."""
from __future__ import annotations

SUPPORTED_LANGUAGES = ("ar", "en")

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        # Titles
        "tax_invoice": "Tax Invoice",
        "simplified_tax_invoice": "Simplified Tax Invoice",
        "invoice": "Invoice",
        "credit_note": "Credit Note",

        # Parties
        "seller": "Seller",
        "buyer": "Buyer",
        "name": "Name",
        "company": "Company",
        "vat_number": "VAT No.",
        "cr_number": "CR No.",
        "address": "Address",
        "phone": "Phone",
        "email": "Email",
        "iban": "IBAN",

        # Metadata
        "invoice_number": "Invoice No.",
        "credit_note_number": "Credit Note No.",
        "issue_date": "Issue Date",
        "issue_datetime": "Issued At",
        "due_date": "Due Date",
        "status": "Status",
        "original_invoice": "Original Invoice",
        "status_draft": "Draft",
        "status_sent": "Sent",
        "status_paid": "Paid",
        "status_overdue": "Overdue",
        "status_cancelled": "Cancelled",

        # Items table
        "index": "#",
        "description": "Description",
        "quantity": "Qty",
        "unit_price": "Unit Price",
        "tax_rate": "VAT %",
        "tax_amount": "VAT",
        "total_incl_vat": "Total incl. VAT",
        "total": "Total",

        # Totals
        "subtotal": "Subtotal",
        "vat": "VAT",
        "grand_total": "Total",
        "credit_total": "Total Credit",

        # Misc
        "notes": "Notes",
        "scan_to_verify": "Scan to verify (ZATCA)",
        "thanks": "Thank you for your business",
    },
    "ar": {
        # Titles
        "tax_invoice": "فاتورة ضريبية",
        "simplified_tax_invoice": "فاتورة ضريبية مبسطة",
        "invoice": "فاتورة",
        "credit_note": "إشعار دائن",

        # Parties
        "seller": "البائع",
        "buyer": "المشتري",
        "name": "الاسم",
        "company": "الشركة",
        "vat_number": "الرقم الضريبي",
        "cr_number": "السجل التجاري",
        "address": "العنوان",
        "phone": "الهاتف",
        "email": "البريد الإلكتروني",
        "iban": "رقم الآيبان",

        # Metadata
        "invoice_number": "رقم الفاتورة",
        "credit_note_number": "رقم الإشعار",
        "issue_date": "تاريخ الإصدار",
        "issue_datetime": "وقت الإصدار",
        "due_date": "تاريخ الاستحقاق",
        "status": "الحالة",
        "original_invoice": "الفاتورة الأصلية",
        "status_draft": "مسودة",
        "status_sent": "مرسلة",
        "status_paid": "مدفوعة",
        "status_overdue": "متأخرة",
        "status_cancelled": "ملغاة",

        # Items table
        "index": "#",
        "description": "الوصف",
        "quantity": "الكمية",
        "unit_price": "سعر الوحدة",
        "tax_rate": "نسبة الضريبة",
        "tax_amount": "مبلغ الضريبة",
        "total_incl_vat": "الإجمالي شامل الضريبة",
        "total": "الإجمالي",

        # Totals
        "subtotal": "المجموع الفرعي",
        "vat": "ضريبة القيمة المضافة",
        "grand_total": "الإجمالي",
        "credit_total": "إجمالي الإشعار",

        # Misc
        "notes": "ملاحظات",
        "scan_to_verify": "امسح للتحقق (الزكاة والضريبة)",
        "thanks": "شكراً لتعاملكم معنا",
    },
}


def t(lang: str, key: str) -> str:
    """Get translated label. Falls back to English."""
    return TRANSLATIONS.get(lang, TRANSLATIONS["en"]).get(
        key, TRANSLATIONS["en"].get(key, key)
    )
