"""sqlbridge command line (Typer + Rich)."""
