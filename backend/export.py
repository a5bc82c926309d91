"""
Экспорт проектов в CSV
"""
import csv
import io
from typing import Iterable

from schemas import Project

CSV_HEADER = ["ID", "Title", "Description", "City", "Price", "Phone", "Email", "Handle", "CreatedAt"]


def _price(value: float) -> str:
    return str(int(value)) if value == int(value) else str(value)


def projects_to_csv(projects: Iterable[Project]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for p in projects:
        writer.writerow([
            p.id,
            p.title,
            p.tagline,
            p.city,
            _price(p.price),
            p.contacts.phone,
            p.contacts.email,
            p.contacts.telegram,
            p.created_at.isoformat(),
        ])
    return buf.getvalue()
