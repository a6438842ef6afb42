from .cli import app

if __name__ == "__main__":  # pragma: no cover - `python -m statement_ledger`
    app()
