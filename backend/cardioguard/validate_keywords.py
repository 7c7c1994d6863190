# cardioguard/validate_keywords.py
import sys
from typing import Iterable, List

from cardioguard.engine.keywords import ALL_TABLES, KeywordTable


def collect_table_errors(tables: Iterable[KeywordTable] = ALL_TABLES) -> List[str]:
    errors = []
    seen_names = set()

    for table in tables:
        if table.name in seen_names:
            errors.append(f"Table '{table.name}': duplicate table name")
        seen_names.add(table.name)

        if not table.keywords:
            errors.append(f"Table '{table.name}': no keywords")

        seen = set()
        for keyword in table.keywords:
            if not keyword.strip():
                errors.append(f"Table '{table.name}': blank keyword")
            # Matching runs on lower-cased text, so upper-case keywords never hit
            if keyword != keyword.lower():
                errors.append(f"Table '{table.name}': '{keyword}' is not lower-case")
            if keyword in seen:
                errors.append(f"Table '{table.name}': duplicate keyword '{keyword}'")
            seen.add(keyword)

    return errors


def validate_keyword_tables():
    print(f"🔍 Validating {len(ALL_TABLES)} keyword tables...")

    errors = collect_table_errors()
    if errors:
        for err in errors:
            print(f"❌ {err}")
        sys.exit(1)

    total = sum(len(t.keywords) for t in ALL_TABLES)
    print(f"✅ {total} keywords in {len(ALL_TABLES)} tables validated successfully.")


if __name__ == "__main__":
    validate_keyword_tables()
