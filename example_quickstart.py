"""
Pykeyset Quick Start Example

Page through a SQLite table with keyset cursors in a few minutes.

Features covered:
- Planning a page with paginate()
- Rendering the plan to SQL
- Walking forward with next cursors
- Walking back with previous cursors

Run with: python example_quickstart.py
"""

import sqlite3

from pykeyset import PaginateOptions, PaginateResult, assemble_page, paginate
from pykeyset.core.expressions import AnyOf, Compare, Exists, NullCheck, Order, Probe
from pykeyset.utils.types import CURSOR_LABEL, CURSOR_SEPARATOR, HAS_NEXT_LABEL, HAS_PREVIOUS_LABEL


# ============================================================================
# 1. A TINY SQLITE RENDERER
# ============================================================================


class SQLiteRenderer:
    """Renders a PaginateResult into one SELECT with bound parameters."""

    def __init__(self, result: PaginateResult):
        self.result = result
        self.params: list = []

    def ident(self, reference: str) -> str:
        return ".".join(f'"{part}"' for part in self.result.identifier(reference))

    def operand(self, value, value_type=None) -> str:
        if isinstance(value, str) and self.result.is_identifier(value):
            sql = self.ident(value)
        elif value is None and value_type is not None:
            self.params.append(value_type.null_sentinel)
            return "?"
        else:
            self.params.append(value)
            sql = "?"
        if value_type is not None:
            self.params.append(value_type.null_sentinel)
            sql = f"COALESCE({sql}, ?)"
        return sql

    def filter(self, f) -> str:
        if isinstance(f, NullCheck):
            return f"{self.ident(f.left[0])} {f.op.value.upper()}"
        left = [self.operand(ref, f.value_type if i == 0 else None) for i, ref in enumerate(f.left)]
        right = [self.operand(val, f.value_type if i == 0 else None) for i, val in enumerate(f.right)]
        return f"({', '.join(left)}) {f.op.value} ({', '.join(right)})"

    def order(self, order: tuple[Order, ...]) -> str:
        return ", ".join(f"{self.operand(o.column, o.value_type)} {o.direction.value.upper()}" for o in order)

    def probe(self, probe: Probe) -> str:
        where = " AND ".join(self.filter(f) for f in probe.filters)
        return (
            f'SELECT 1 FROM "{probe.table}" AS "{probe.alias}" '
            f"WHERE {where} ORDER BY {self.order(probe.order)} LIMIT 1"
        )

    def expression(self, expression) -> str:
        if isinstance(expression, Exists):
            return f"EXISTS ({self.probe(expression.probe)})"
        assert isinstance(expression, AnyOf)
        return "(" + " OR ".join(self.expression(e) for e in expression.operands) + ")"

    def cursor(self) -> str:
        parts = [self.ident(reference) for reference in self.result.cursor]
        if len(parts) == 1:
            return f"CAST({parts[0]} AS TEXT)"
        self.params.append(self.result.order[0].value_type.null_sentinel)
        return f"COALESCE(CAST({parts[0]} AS TEXT), ?) || '{CURSOR_SEPARATOR}' || {parts[1]}"

    def select(self, limit: int) -> str:
        table = f'"{self.result.table}"'
        sql = (
            f"SELECT {table}.*, {self.cursor()} AS {CURSOR_LABEL}, "
            f"{self.expression(self.result.has_next_page)} AS {HAS_NEXT_LABEL}, "
            f"{self.expression(self.result.has_previous_page)} AS {HAS_PREVIOUS_LABEL} "
            f"FROM {table}"
        )
        if self.result.filter is not None:
            sql += f" WHERE {self.filter(self.result.filter)}"
        sql += f" ORDER BY {self.order(self.result.order)} LIMIT {int(limit)}"
        return sql


def fetch_page(conn, limit: int = 3, **options):
    result = paginate(PaginateOptions(table="repositories", **options))
    renderer = SQLiteRenderer(result)
    sql = renderer.select(limit)
    rows = [dict(row) for row in conn.execute(sql, renderer.params)]
    return assemble_page(rows, result)


# ============================================================================
# 2. MAIN
# ============================================================================


def main():
    """Run the quickstart example."""

    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute('CREATE TABLE "repositories" ("id" TEXT PRIMARY KEY, "name" TEXT)')
    names = ["pydantic", "fastapi", None, "httpx", "pytest", "starlette", None, "uvicorn"]
    conn.executemany(
        'INSERT INTO "repositories" VALUES (?, ?)',
        [(f"r{n:03d}", name) for n, name in enumerate(names, start=1)],
    )
    print("✅ Seeded repositories\n")

    sort = {"column": "name", "direction": "asc"}

    print("1️⃣  FORWARD - Walking pages by name")
    pages = [fetch_page(conn, sort=sort)]
    while pages[-1].has_next:
        pages.append(fetch_page(conn, sort=sort, after=pages[-1].next_cursor))
    for number, page in enumerate(pages, start=1):
        print(f"   Page {number}: {[row['name'] for row in page.items]} next={page.next_cursor!r}")

    print("\n2️⃣  BACKWARD - Walking back from the last page")
    page = pages[-1]
    while page.has_prev:
        page = fetch_page(conn, sort=sort, before=page.previous_cursor)
        print(f"   Page: {[row['name'] for row in page.items]} prev={page.previous_cursor!r}")

    print("\n3️⃣  UNORDERED - Newest ids first")
    page = fetch_page(conn)
    print(f"   Ids: {[row['id'] for row in page.items]}")

    conn.close()
    print("\n✅ All pages fetched")


# ============================================================================
# 3. RUN THE EXAMPLE
# ============================================================================

if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("PYKEYSET QUICKSTART EXAMPLE")
    print("=" * 60 + "\n")

    main()
