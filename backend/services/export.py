import csv
import io
import json
from datetime import date
from typing import List, Optional

from models import CompanyData

CSV_HEADERS = ["Company Name", "Website", "Email", "Phone", "Industry", "Location", "Founded", "Description"]

def filter_results(results: List[CompanyData], term: Optional[str]) -> List[CompanyData]:
    """Case-insensitive match on company name, industry or location."""
    if not term:
        return list(results)
    needle = term.lower()
    return [
        c for c in results
        if needle in c.company_name.lower()
        or needle in (c.industry or "").lower()
        or needle in (c.location or "").lower()
    ]

def sort_results(results: List[CompanyData], sort_by: str = "company_name") -> List[CompanyData]:
    if sort_by not in CompanyData.model_fields:
        raise ValueError(f"Unknown sort field: {sort_by}")
    return sorted(results, key=lambda c: str(getattr(c, sort_by) or "").casefold())

def to_json(results: List[CompanyData]) -> str:
    return json.dumps([c.to_dict() for c in results], indent=2)

def to_csv(results: List[CompanyData]) -> str:
    # Header unquoted; every value quoted, embedded quotes doubled.
    output = io.StringIO()
    output.write(",".join(CSV_HEADERS) + "\n")
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for c in results:
        writer.writerow([
            c.company_name,
            c.website_url,
            c.email or "",
            c.phone or "",
            c.industry or "",
            c.location or "",
            c.founded_year or "",
            c.description or "",
        ])
    return output.getvalue()

def export_filename(fmt: str) -> str:
    return f"company-data-{date.today().isoformat()}.{fmt}"
