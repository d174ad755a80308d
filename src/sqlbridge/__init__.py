"""sqlbridge -- one operation catalog over MySQL and PostgreSQL.

Exposes list/query/DDL/CRUD/import/export operations that behave the same
on either engine, with a read-only guard on free-form queries and
confirmation phrases on destructive changes.
"""

__version__ = "0.1.0"
